"""
Listing Importer - Seed the Directory from a Spreadsheet
=========================================================

    python run_import.py listings.xlsx
    python run_import.py listings.csv

Columns are auto-detected (name, category, location/lga/address, description,
phone, email, website, hours, image, latitude, longitude).
"""

import argparse
import logging

from localdirectory.infrastructure.config import get_settings, setup_logging
from localdirectory.infrastructure.importer import BusinessImporter
from localdirectory.infrastructure.persistence import init_database

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(description="Import business listings")
    parser.add_argument("file", help="Path to a .csv, .xlsx or .xls file")
    parser.add_argument("--sheet", help="Sheet name for Excel files")
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings)

    db = init_database(settings.database.path)
    importer = BusinessImporter()

    try:
        result = importer.import_file(db, args.file, sheet_name=args.sheet)
    except (FileNotFoundError, ValueError) as e:
        print(f"Import failed: {e}")
        raise SystemExit(1)

    print(f"Imported {result['added']} businesses")
    if result['skipped']:
        print(f"Skipped {result['skipped']} rows:")
        for error in result['errors']:
            print(f"  - {error}")


if __name__ == "__main__":
    main()
