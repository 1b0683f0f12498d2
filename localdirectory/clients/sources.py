"""
Business Sources - Abstraction Layer for Directory Data
========================================================

Provides a unified interface for reading and writing listings and reviews.
Two backends exist and are chosen by configuration:

    # Live (talks to the running API)
    source = ApiBusinessSource("http://localhost:3000/api")

    # In-memory demo listings (no server needed)
    source = MemoryBusinessSource()

    source = create_source()  # picks one from DIRECTORY_DATA_SOURCE
"""

import copy
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import requests

from localdirectory.infrastructure.config import (
    DATA_SOURCE_MEMORY,
    Settings,
    get_settings,
)
from localdirectory.infrastructure.persistence import OPTIONAL_BUSINESS_FIELDS
from localdirectory.infrastructure.persistence.database import utc_now_iso
from localdirectory.validation import business_error, review_error

logger = logging.getLogger(__name__)


class DirectoryClientError(Exception):
    """Base exception for directory client errors. The message is display-ready."""
    pass


class SubmissionError(DirectoryClientError):
    """The server (or local source) rejected a submission as invalid."""
    pass


class AdminAuthError(DirectoryClientError):
    """The admin key was rejected."""
    pass


class BusinessNotFoundError(DirectoryClientError):
    """No business with the requested id."""
    pass


class BusinessSource(ABC):
    """
    Abstract base class for directory data backends.
    Businesses and reviews are plain dicts shaped like the API's JSON rows.
    """

    @abstractmethod
    def list_businesses(self) -> List[dict]:
        """All businesses, newest first."""
        ...

    @abstractmethod
    def get_business(self, business_id: int) -> dict:
        """One business. Raises BusinessNotFoundError if absent."""
        ...

    @abstractmethod
    def add_business(self, name: str, category: str, location: str, description: str,
                     **optional) -> int:
        """Submit a new business. Returns its id."""
        ...

    @abstractmethod
    def list_reviews(self, business_id: int) -> List[dict]:
        """Reviews for a business, newest first."""
        ...

    @abstractmethod
    def add_review(self, business_id: int, reviewer_name: str, text: str, rating: int) -> int:
        """Submit a review. Returns its id."""
        ...


class ApiBusinessSource(BusinessSource):
    """
    Business source backed by the directory's HTTP API.

    Any object with a requests-style ``request(method, url, json=, timeout=)``
    method can be passed as ``session``.
    """

    def __init__(self, base_url: str, session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    def list_businesses(self) -> List[dict]:
        return self._request("GET", "/businesses")

    def get_business(self, business_id: int) -> dict:
        return self._request("GET", f"/businesses/{business_id}")

    def add_business(self, name: str, category: str, location: str, description: str,
                     **optional) -> int:
        payload = {"name": name, "category": category, "location": location,
                   "description": description}
        payload.update({k: v for k, v in optional.items() if k in OPTIONAL_BUSINESS_FIELDS})
        return self._request("POST", "/businesses", json=payload)["businessId"]

    def list_reviews(self, business_id: int) -> List[dict]:
        return self._request("GET", f"/reviews/{business_id}")

    def add_review(self, business_id: int, reviewer_name: str, text: str, rating: int) -> int:
        payload = {"businessId": business_id, "reviewerName": reviewer_name,
                   "text": text, "rating": rating}
        return self._request("POST", "/reviews", json=payload)["reviewId"]

    def verify_admin_key(self, admin_key: str) -> bool:
        """Check the admin key with the server. Raises AdminAuthError on mismatch."""
        self._request("POST", "/admin/verify", json={"adminKey": admin_key})
        return True

    def delete_business(self, business_id: int, admin_key: str) -> str:
        """Delete a business. Returns the server's confirmation message."""
        data = self._request("DELETE", f"/businesses/{business_id}", json={"adminKey": admin_key})
        return data.get("message", "")

    def _request(self, method: str, path: str, json: Optional[dict] = None):
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise DirectoryClientError("Could not reach the directory server.") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if 200 <= response.status_code < 300:
            return data

        message = data.get("message") if isinstance(data, dict) else None
        logger.warning(f"{method} {url} -> {response.status_code}: {message}")

        if response.status_code == 400:
            raise SubmissionError(message or "The submission was rejected.")
        if response.status_code == 403:
            raise AdminAuthError(message or "Unauthorized: Invalid admin key.")
        if response.status_code == 404:
            raise BusinessNotFoundError(message or "Business not found.")
        raise DirectoryClientError(message or f"Request failed ({response.status_code}).")


# Demo listings shown when no server is available
DEMO_BUSINESSES = [
    {
        "name": "Mama Zainab's Kitchen",
        "category": "Restaurant",
        "location": "Daura",
        "description": "Home-cooked meals and local delicacies.",
        "phone": "0803 123 4567",
        "hours": "9AM - 9PM",
        "review": ("Hauwa", "Generous portions and friendly staff.", 4),
    },
    {
        "name": "Funtua Tech Repairs",
        "category": "Electronics",
        "location": "Funtua",
        "description": "Phone and laptop repairs, accessories sales.",
        "phone": "0810 987 6543",
        "hours": "10AM - 6PM",
        "review": ("Sani", "Fixed my phone screen the same day.", 5),
    },
]


class MemoryBusinessSource(BusinessSource):
    """
    In-memory business source. Applies the same submission rules and rating
    average as the server, but nothing outlives the process.
    """

    def __init__(self, seed: bool = True):
        self._businesses: List[dict] = []
        self._reviews: List[dict] = []
        self._next_business_id = 1
        self._next_review_id = 1

        if seed:
            for demo in DEMO_BUSINESSES:
                fields = {k: v for k, v in demo.items() if k != "review"}
                business_id = self.add_business(**fields)
                self.add_review(business_id, *demo["review"])

    def list_businesses(self) -> List[dict]:
        return copy.deepcopy(self._businesses)

    def get_business(self, business_id: int) -> dict:
        return copy.deepcopy(self._find(business_id))

    def add_business(self, name: str, category: str, location: str, description: str,
                     **optional) -> int:
        payload = {"name": name, "category": category, "location": location,
                   "description": description}
        error = business_error(payload)
        if error:
            raise SubmissionError(error)

        business = {"id": self._next_business_id, **payload}
        business.update({key: optional.get(key) for key in OPTIONAL_BUSINESS_FIELDS})
        business["rating"] = None
        business["created_at"] = utc_now_iso()

        self._businesses.insert(0, business)
        self._next_business_id += 1
        return business["id"]

    def list_reviews(self, business_id: int) -> List[dict]:
        return [copy.deepcopy(r) for r in self._reviews if r["business_id"] == business_id]

    def add_review(self, business_id: int, reviewer_name: str, text: str, rating: int) -> int:
        error = review_error(business_id, reviewer_name, text, rating)
        if error:
            raise SubmissionError(error)

        review = {
            "id": self._next_review_id,
            "business_id": business_id,
            "reviewer_name": reviewer_name,
            "text": text,
            "rating": rating,
            "created_at": utc_now_iso(),
        }
        self._reviews.insert(0, review)
        self._next_review_id += 1

        ratings = [r["rating"] for r in self._reviews if r["business_id"] == business_id]
        for business in self._businesses:
            if business["id"] == business_id:
                business["rating"] = sum(ratings) / len(ratings)

        return review["id"]

    def _find(self, business_id: int) -> dict:
        for business in self._businesses:
            if business["id"] == business_id:
                return business
        raise BusinessNotFoundError("Business not found.")


def create_source(settings: Settings | None = None, session=None) -> BusinessSource:
    """Build the business source selected by DIRECTORY_DATA_SOURCE."""
    if settings is None:
        settings = get_settings()

    if settings.client.data_source == DATA_SOURCE_MEMORY:
        logger.info("Using in-memory demo listings")
        return MemoryBusinessSource()

    logger.info(f"Using live directory API at {settings.client.api_base_url}")
    return ApiBusinessSource(
        settings.client.api_base_url,
        session=session,
        timeout=settings.client.timeout_seconds,
    )
