"""
Public Directory Client
=======================

Browsing side of the directory: search-as-you-type filtering over the loaded
listings, star rendering, the review draft, and submissions. Works against any
BusinessSource, so the same code drives live data and the demo listings.
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from localdirectory.infrastructure.persistence import MAX_RATING, MIN_RATING

from .sources import BusinessSource

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "category", "location")

FILLED_STAR = "★"
EMPTY_STAR = "☆"


def filter_businesses(businesses: Iterable[dict], query: str) -> List[dict]:
    """
    Case-insensitive substring match on name, category or location.
    An empty query keeps everything.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return list(businesses)

    return [
        business for business in businesses
        if any(needle in str(business.get(key) or "").lower() for key in SEARCH_FIELDS)
    ]


def render_stars(rating: Optional[float]) -> str:
    """Five-star strip for a rating; halves round up and unrated businesses show no stars."""
    filled = math.floor(rating + 0.5) if rating else 0
    filled = max(0, min(MAX_RATING, filled))
    return FILLED_STAR * filled + EMPTY_STAR * (MAX_RATING - filled)


@dataclass
class ReviewDraft:
    """A review being written. Rating 0 means no star picked yet."""
    business_id: int
    reviewer_name: str = ""
    text: str = ""
    rating: int = 0

    def select_star(self, star: int) -> None:
        if not MIN_RATING <= star <= MAX_RATING:
            raise ValueError(f"Pick between {MIN_RATING} and {MAX_RATING} stars")
        self.rating = star

    def stars(self) -> str:
        return render_stars(self.rating)


class PublicDirectory:
    """
    Listing view over a business source.

    Usage:
        directory = PublicDirectory(create_source())
        directory.refresh()
        for business in directory.search("daura"):
            print(business["name"])
    """

    def __init__(self, source: BusinessSource):
        self.source = source
        self.businesses: List[dict] = []

    def refresh(self) -> List[dict]:
        """Reload every listing from the source."""
        self.businesses = self.source.list_businesses()
        return self.businesses

    def search(self, query: str) -> List[dict]:
        return filter_businesses(self.businesses, query)

    def reviews_for(self, business_id: int) -> List[dict]:
        return self.source.list_reviews(business_id)

    def submit_review(self, draft: ReviewDraft) -> int:
        """Send a review, then reload so the new average rating shows."""
        review_id = self.source.add_review(
            draft.business_id, draft.reviewer_name, draft.text, draft.rating
        )
        logger.info(f"Submitted review #{review_id} for business {draft.business_id}")
        self.refresh()
        return review_id

    def submit_business(self, name: str, category: str, location: str, description: str,
                        **optional) -> int:
        business_id = self.source.add_business(name, category, location, description, **optional)
        logger.info(f"Submitted business #{business_id}: {name}")
        self.refresh()
        return business_id
