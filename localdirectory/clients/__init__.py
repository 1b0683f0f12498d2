from .sources import (
    AdminAuthError,
    ApiBusinessSource,
    BusinessNotFoundError,
    BusinessSource,
    DirectoryClientError,
    MemoryBusinessSource,
    SubmissionError,
    create_source,
)
from .public_client import PublicDirectory, ReviewDraft, filter_businesses, render_stars
from .admin_client import AdminClient

__all__ = [
    "AdminAuthError",
    "AdminClient",
    "ApiBusinessSource",
    "BusinessNotFoundError",
    "BusinessSource",
    "DirectoryClientError",
    "MemoryBusinessSource",
    "PublicDirectory",
    "ReviewDraft",
    "SubmissionError",
    "create_source",
    "filter_businesses",
    "render_stars",
]
