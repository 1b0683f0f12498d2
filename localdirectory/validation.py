"""
Submission checks shared by the API and the in-memory data source.

Only presence is checked, with one extra rule: a review rating must fall in
1..5. Presence is truthiness, so a rating of 0 counts as missing.
"""

from typing import Optional

from localdirectory.infrastructure.persistence import (
    MAX_RATING,
    MIN_RATING,
    REQUIRED_BUSINESS_FIELDS,
)

MISSING_BUSINESS_FIELDS = "Required business fields are missing."
MISSING_REVIEW_FIELDS = "All review fields are required."
RATING_OUT_OF_RANGE = f"Rating must be between {MIN_RATING} and {MAX_RATING}."


def business_error(payload: dict) -> Optional[str]:
    """Return an error message for a business submission, or None if valid."""
    if not all(payload.get(key) for key in REQUIRED_BUSINESS_FIELDS):
        return MISSING_BUSINESS_FIELDS
    return None


def review_error(business_id, reviewer_name, text, rating) -> Optional[str]:
    """Return an error message for a review submission, or None if valid."""
    if not (business_id and reviewer_name and text and rating):
        return MISSING_REVIEW_FIELDS
    if not MIN_RATING <= rating <= MAX_RATING:
        return RATING_OUT_OF_RANGE
    return None
