from .database import (
    Business,
    Database,
    Review,
    init_database,
    MAX_RATING,
    MIN_RATING,
    OPTIONAL_BUSINESS_FIELDS,
    REQUIRED_BUSINESS_FIELDS,
)

__all__ = [
    "Business",
    "Database",
    "Review",
    "init_database",
    "MAX_RATING",
    "MIN_RATING",
    "OPTIONAL_BUSINESS_FIELDS",
    "REQUIRED_BUSINESS_FIELDS",
]
