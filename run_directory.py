"""
Directory Console - Browse, Search and Review
==============================================

Lists businesses from the configured source (live API or the in-memory demo
listings, see DIRECTORY_DATA_SOURCE), filters as you type a query, and submits
reviews and new listings.
"""

import logging

from localdirectory.clients import (
    DirectoryClientError,
    PublicDirectory,
    ReviewDraft,
    create_source,
    render_stars,
)
from localdirectory.infrastructure.config import get_settings, setup_logging

logger = logging.getLogger(__name__)

HELP = """Commands:
  <text>        search by name, category or location
  /all          show every business
  /review ID    review a business
  /reviews ID   show reviews for a business
  /add          submit a new business
  /quit         exit
"""


def print_businesses(businesses: list):
    if not businesses:
        print("No businesses found.")
        return
    for b in businesses:
        print(f"  [{b['id']}] {b['name']}  {render_stars(b.get('rating'))}")
        print(f"       {b['category']} - {b['location']}")
        if b.get("phone"):
            print(f"       Phone: {b['phone']}")


def write_review(directory: PublicDirectory, business_id: int):
    draft = ReviewDraft(business_id=business_id)
    draft.reviewer_name = input("Your name: ").strip()
    stars = input("Stars (1-5): ").strip()
    try:
        draft.select_star(int(stars))
    except ValueError:
        print("No valid star rating picked.")
    draft.text = input("Your review: ").strip()

    directory.submit_review(draft)
    print(f"Thank you for rating {draft.stars()}!")


def add_business(directory: PublicDirectory):
    fields = {key: input(f"{key.capitalize()}: ").strip()
              for key in ("name", "category", "location", "description")}
    optional = {key: input(f"{key.capitalize()} (optional): ").strip() or None
                for key in ("phone", "hours")}
    business_id = directory.submit_business(**fields, **optional)
    print(f"Business #{business_id} added and is now live!")


def run_directory():
    settings = get_settings()
    setup_logging(settings)

    directory = PublicDirectory(create_source(settings))
    try:
        print_businesses(directory.refresh())
    except DirectoryClientError as e:
        print(f"Error loading businesses: {e}")
        return

    print(HELP)
    while True:
        command = input("> ").strip()
        if command == "/quit":
            break

        try:
            if command == "/all":
                print_businesses(directory.businesses)
            elif command.startswith("/reviews "):
                for r in directory.reviews_for(int(command.split()[1])):
                    print(f"  {render_stars(r['rating'])}  {r['reviewer_name']}: {r['text']}")
            elif command.startswith("/review "):
                write_review(directory, int(command.split()[1]))
            elif command == "/add":
                add_business(directory)
            else:
                print_businesses(directory.search(command))
        except DirectoryClientError as e:
            print(f"{e}")
        except (IndexError, ValueError):
            print(HELP)


if __name__ == "__main__":
    run_directory()
