"""
Admin Client
============

Lists every business and deletes listings with the shared admin key. The key
is checked by the server; this client never holds a copy of the secret, only
what the operator typed.
"""

import logging
from typing import Callable, List, Optional

from .sources import AdminAuthError, ApiBusinessSource

logger = logging.getLogger(__name__)


class AdminClient:
    """
    Usage:
        admin = AdminClient(ApiBusinessSource(url), admin_key=typed_key)
        businesses = admin.authenticate()
        businesses = admin.delete_business(3, confirm=lambda b: True)
    """

    def __init__(self, source: ApiBusinessSource, admin_key: str):
        self.source = source
        self.admin_key = admin_key.strip()
        self.authenticated = False
        self.businesses: List[dict] = []

    def authenticate(self) -> List[dict]:
        """Verify the key with the server and load the listings."""
        try:
            self.source.verify_admin_key(self.admin_key)
        except AdminAuthError:
            self.authenticated = False
            self.businesses = []
            raise

        self.authenticated = True
        logger.info("Admin key accepted")
        return self.refresh()

    def refresh(self) -> List[dict]:
        if not self.authenticated:
            raise AdminAuthError("Enter the admin key first.")
        self.businesses = self.source.list_businesses()
        return self.businesses

    def delete_business(self, business_id: int,
                        confirm: Optional[Callable[[dict], bool]] = None) -> Optional[List[dict]]:
        """
        Delete one business after confirmation.

        ``confirm`` receives the business dict (or just its id when the listing
        is not loaded) and must return True to go ahead. Returns the refreshed
        list, or None if the operator backed out.
        """
        if not self.authenticated:
            raise AdminAuthError("Enter the admin key first.")

        target = next((b for b in self.businesses if b["id"] == business_id), {"id": business_id})
        if confirm is not None and not confirm(target):
            logger.info(f"Deletion of business {business_id} cancelled")
            return None

        try:
            message = self.source.delete_business(business_id, self.admin_key)
        except AdminAuthError:
            self.authenticated = False
            self.businesses = []
            raise

        logger.info(f"Deleted business {business_id}: {message}")
        return self.refresh()
