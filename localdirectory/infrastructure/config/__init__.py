from .settings import (
    DATA_SOURCE_LIVE,
    DATA_SOURCE_MEMORY,
    DEFAULT_ADMIN_KEY,
    Settings,
    get_settings,
    setup_logging,
)

__all__ = [
    "DATA_SOURCE_LIVE",
    "DATA_SOURCE_MEMORY",
    "DEFAULT_ADMIN_KEY",
    "Settings",
    "get_settings",
    "setup_logging",
]
