"""
Admin Console - Delete Directory Listings
==========================================

Prompts for the admin key, lists every business, and deletes the ones you pick
after a confirmation. Start the web server first.
"""

import getpass
import logging

from localdirectory.clients import (
    AdminAuthError,
    AdminClient,
    ApiBusinessSource,
    DirectoryClientError,
)
from localdirectory.infrastructure.config import get_settings, setup_logging

logger = logging.getLogger(__name__)


def print_businesses(businesses: list):
    if not businesses:
        print("No businesses found in the directory.")
        return
    for business in businesses:
        description = (business.get("description") or "")[:80]
        print(f"  [{business['id']}] {business['name']} - {business['category']}, {business['location']}")
        print(f"       {description}")


def confirm_delete(business: dict) -> bool:
    name = business.get("name", f"#{business['id']}")
    answer = input(f"Delete '{name}'? This cannot be undone. [y/N] ")
    return answer.strip().lower() == "y"


def run_admin():
    settings = get_settings()
    setup_logging(settings)

    print("\n" + "=" * 60)
    print("   Local Business Directory - Admin")
    print("=" * 60 + "\n")

    source = ApiBusinessSource(settings.client.api_base_url, timeout=settings.client.timeout_seconds)
    admin = AdminClient(source, getpass.getpass("Admin key: "))

    try:
        businesses = admin.authenticate()
    except AdminAuthError as e:
        print(f"{e}")
        return
    except DirectoryClientError as e:
        print(f"Error loading businesses: {e}")
        return

    while True:
        print_businesses(businesses)
        choice = input("\nBusiness id to delete (blank to quit): ").strip()
        if not choice:
            break
        if not choice.isdigit():
            print("Enter a numeric id.")
            continue

        try:
            refreshed = admin.delete_business(int(choice), confirm=confirm_delete)
        except AdminAuthError as e:
            print(f"{e}")
            return
        except DirectoryClientError as e:
            print(f"{e}")
            continue

        if refreshed is not None:
            print("Business deleted successfully!")
            businesses = refreshed


if __name__ == "__main__":
    run_admin()
