"""
Business Importer - Excel/CSV Listing Import
=============================================

Parses a spreadsheet of businesses and auto-detects the directory columns.
Supports .xlsx, .xls, and .csv formats.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pandas as pd

from ..persistence import Database, REQUIRED_BUSINESS_FIELDS

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ['.csv', '.xlsx', '.xls']

# Common column name variations for auto-detection
COLUMN_PATTERNS = {
    'name': ['name', 'business', 'business_name', 'company', 'shop'],
    'category': ['category', 'type', 'business_type', 'sector'],
    'location': ['location', 'lga', 'address', 'area', 'city', 'town'],
    'description': ['description', 'about', 'summary', 'details'],
    'phone': ['phone', 'mobile', 'telephone', 'contact', 'phone_number'],
    'email': ['email', 'e-mail', 'mail'],
    'website': ['website', 'url', 'site', 'web'],
    'hours': ['hours', 'opening_hours', 'open'],
    'image': ['image', 'photo', 'picture', 'image_url'],
    'latitude': ['latitude', 'lat'],
    'longitude': ['longitude', 'lng', 'lon', 'long'],
}

NUMERIC_FIELDS = ('latitude', 'longitude')


class BusinessImporter:
    """
    Spreadsheet parser with auto-detection of business columns.

    Usage:
        importer = BusinessImporter()
        rows, columns = importer.parse("listings.xlsx")
        result = importer.import_file(db, "listings.xlsx")
    """

    def __init__(self):
        self.detected_columns: Dict[str, str] = {}

    def parse(self, file_path: str, sheet_name: Optional[str] = None) -> Tuple[List[Dict], Dict[str, str]]:
        """
        Parse a spreadsheet and return business rows.

        Returns:
            Tuple of (business dicts, detected column mapping)
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        ext = path.suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file type: {ext}. Use .xlsx, .xls, or .csv")

        # Cells are read as text so phone numbers keep their leading zeros.
        if ext == '.csv':
            df = pd.read_csv(path, dtype=str)
        else:
            df = pd.read_excel(path, sheet_name=sheet_name or 0, dtype=str)

        return self.parse_frame(df)

    def parse_frame(self, df: pd.DataFrame) -> Tuple[List[Dict], Dict[str, str]]:
        """Map an already-loaded DataFrame onto business fields."""
        df.columns = df.columns.astype(str).str.strip().str.lower()

        self.detected_columns = {}
        for field_name, patterns in COLUMN_PATTERNS.items():
            column = self._find_column(df.columns, patterns, taken=self.detected_columns.values())
            if column:
                self.detected_columns[field_name] = column

        missing = [key for key in REQUIRED_BUSINESS_FIELDS if key not in self.detected_columns]
        if missing:
            raise ValueError(f"Could not detect column(s): {', '.join(missing)}")

        logger.info(f"Detected columns: {self.detected_columns}")

        businesses = []
        for _, row in df.iterrows():
            business = {}
            for field_name, column in self.detected_columns.items():
                value = row.get(column)
                if pd.isna(value):
                    continue
                if field_name in NUMERIC_FIELDS:
                    business[field_name] = float(value)
                else:
                    business[field_name] = str(value).strip()
            businesses.append(business)

        return businesses, dict(self.detected_columns)

    def import_file(self, db: Database, file_path: str, sheet_name: Optional[str] = None) -> dict:
        """Parse a spreadsheet and bulk-insert its rows."""
        businesses, _ = self.parse(file_path, sheet_name=sheet_name)
        return db.bulk_add_businesses(businesses)

    def _find_column(self, columns, patterns: List[str], taken=()) -> Optional[str]:
        """Find the first column matching a pattern: exact names win over partial ones."""
        available = [col for col in columns if col not in set(taken)]

        for pattern in patterns:
            if pattern in available:
                return pattern

        for pattern in patterns:
            for col in available:
                if pattern in col:
                    return col

        return None

