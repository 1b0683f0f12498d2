"""
SQLite Database Repository - Business & Review Persistence
===========================================================

Stores directory listings and their reviews. A review's business_id refers to
businesses.id by convention only: deleting a business leaves its reviews behind.
"""

import sqlite3
import logging
from dataclasses import dataclass, asdict, fields
from datetime import datetime, timezone
from typing import List, Optional
from contextlib import contextmanager

logger = logging.getLogger(__name__)

DATABASE_FILE = "directory.db"

REQUIRED_BUSINESS_FIELDS = ("name", "category", "location", "description")
OPTIONAL_BUSINESS_FIELDS = (
    "phone", "email", "website", "hours", "image", "latitude", "longitude",
)

MIN_RATING = 1
MAX_RATING = 5


def utc_now_iso() -> str:
    """Current UTC time as a sortable ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


@dataclass
class Business:
    """Business listing record from database."""
    id: int
    name: str
    category: str
    location: str
    description: str
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    hours: Optional[str] = None
    image: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rating: Optional[float] = None
    created_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Review:
    """Review record from database."""
    id: int
    business_id: int
    reviewer_name: str
    text: str
    rating: int
    created_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


class Database:
    """
    SQLite database for the directory.

    Usage:
        db = Database()
        db.init()

        business_id = db.add_business("Mama Zainab's Kitchen", "Restaurant",
                                      "Daura", "Home-cooked meals")
        db.add_review(business_id, "Aisha", "Lovely food", 5)
        db.get_business(business_id).rating  # 5.0
    """

    def __init__(self, db_path: str = DATABASE_FILE):
        self.db_path = str(db_path)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS businesses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    location TEXT NOT NULL,
                    description TEXT NOT NULL,
                    phone TEXT,
                    email TEXT,
                    website TEXT,
                    hours TEXT,
                    image TEXT,
                    latitude REAL,
                    longitude REAL,
                    rating REAL,
                    created_at TEXT NOT NULL
                )
            """)

            self._migrate_businesses_table(conn)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS reviews (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    business_id INTEGER NOT NULL,
                    reviewer_name TEXT NOT NULL,
                    text TEXT NOT NULL,
                    rating INTEGER NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_reviews_business ON reviews(business_id)"
            )

            logger.info(f"Database initialized: {self.db_path}")

    def _migrate_businesses_table(self, conn):
        """Add missing columns to existing businesses table."""
        existing = {row[1] for row in conn.execute("PRAGMA table_info(businesses)").fetchall()}

        migrations = {
            "image": "ALTER TABLE businesses ADD COLUMN image TEXT",
            "latitude": "ALTER TABLE businesses ADD COLUMN latitude REAL",
            "longitude": "ALTER TABLE businesses ADD COLUMN longitude REAL",
            "rating": "ALTER TABLE businesses ADD COLUMN rating REAL",
        }

        for col, sql in migrations.items():
            if col not in existing:
                conn.execute(sql)
                logger.info(f"Migrated: added '{col}' column to businesses")

    # ── Business CRUD ──────────────────────────────────────────────

    def add_business(self, name: str, category: str, location: str, description: str,
                     **optional) -> int:
        """
        Insert a new business and return its id.

        Optional keyword fields: phone, email, website, hours, image,
        latitude, longitude. Unknown keys are ignored.
        """
        values = [optional.get(key) for key in OPTIONAL_BUSINESS_FIELDS]
        with self._get_connection() as conn:
            cursor = conn.execute(
                """INSERT INTO businesses (name, category, location, description,
                       phone, email, website, hours, image, latitude, longitude, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (name, category, location, description, *values, utc_now_iso())
            )
            logger.info(f"Added business #{cursor.lastrowid}: {name}")
            return cursor.lastrowid

    def bulk_add_businesses(self, businesses: list) -> dict:
        """
        Add multiple businesses at once.

        Args:
            businesses: List of dicts keyed by business column names

        Returns:
            Dict with 'added', 'skipped', 'errors'
        """
        result = {'added': 0, 'skipped': 0, 'errors': []}

        with self._get_connection() as conn:
            for business in businesses:
                missing = [key for key in REQUIRED_BUSINESS_FIELDS if not business.get(key)]
                if missing:
                    result['skipped'] += 1
                    result['errors'].append(
                        f"{business.get('name') or 'Unknown'}: missing {', '.join(missing)}"
                    )
                    continue

                conn.execute(
                    """INSERT INTO businesses (name, category, location, description,
                           phone, email, website, hours, image, latitude, longitude, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        *(business[key] for key in REQUIRED_BUSINESS_FIELDS),
                        *(business.get(key) for key in OPTIONAL_BUSINESS_FIELDS),
                        utc_now_iso(),
                    )
                )
                result['added'] += 1

        logger.info(f"Bulk import: {result['added']} added, {result['skipped']} skipped")
        return result

    def get_all_businesses(self) -> List[Business]:
        """Get all businesses, newest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM businesses ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [self._row_to_business(row) for row in rows]

    def get_business(self, business_id: int) -> Optional[Business]:
        """Get business by ID."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM businesses WHERE id = ?", (business_id,)
            ).fetchone()
            return self._row_to_business(row) if row else None

    def delete_business(self, business_id: int) -> bool:
        """Delete a business. Returns False if no row matched."""
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM businesses WHERE id = ?", (business_id,))
            return cursor.rowcount > 0

    # ── Reviews ────────────────────────────────────────────────────

    def add_review(self, business_id: int, reviewer_name: str, text: str, rating: int) -> int:
        """
        Insert a review and refresh the business's average rating.

        Both statements run in one immediate transaction so concurrent reviews
        for the same business cannot overwrite each other's average. A failed
        rating refresh is logged and does not undo the review.
        """
        with self._get_connection() as conn:
            conn.execute("BEGIN IMMEDIATE")
            cursor = conn.execute(
                """INSERT INTO reviews (business_id, reviewer_name, text, rating, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (business_id, reviewer_name, text, rating, utc_now_iso())
            )
            review_id = cursor.lastrowid

            try:
                conn.execute("SAVEPOINT rating_refresh")
                self._update_rating(conn, business_id)
                conn.execute("RELEASE SAVEPOINT rating_refresh")
            except sqlite3.Error as e:
                conn.execute("ROLLBACK TO SAVEPOINT rating_refresh")
                logger.error(f"Error updating rating for business {business_id}: {e}")

            logger.info(f"Added review #{review_id} for business {business_id}")
            return review_id

    def get_reviews(self, business_id: int) -> List[Review]:
        """Get all reviews for a business, newest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT * FROM reviews WHERE business_id = ? ORDER BY created_at DESC, id DESC",
                (business_id,)
            ).fetchall()
            return [self._row_to_review(row) for row in rows]

    def recalculate_rating(self, business_id: int) -> Optional[float]:
        """Recompute and store a business's average rating."""
        with self._get_connection() as conn:
            return self._update_rating(conn, business_id)

    def _update_rating(self, conn, business_id: int) -> Optional[float]:
        average = conn.execute(
            "SELECT AVG(rating) FROM reviews WHERE business_id = ?", (business_id,)
        ).fetchone()[0]
        conn.execute(
            "UPDATE businesses SET rating = ? WHERE id = ?", (average, business_id)
        )
        return average

    def get_stats(self) -> dict:
        """Get listing and review counts."""
        with self._get_connection() as conn:
            businesses = conn.execute("SELECT COUNT(*) FROM businesses").fetchone()[0]
            reviews = conn.execute("SELECT COUNT(*) FROM reviews").fetchone()[0]
            return {"businesses": businesses, "reviews": reviews}

    def _row_to_business(self, row: sqlite3.Row) -> Business:
        """Convert database row to Business object."""
        columns = set(row.keys())
        return Business(**{f.name: row[f.name] for f in fields(Business) if f.name in columns})

    def _row_to_review(self, row: sqlite3.Row) -> Review:
        """Convert database row to Review object."""
        return Review(
            id=row["id"],
            business_id=row["business_id"],
            reviewer_name=row["reviewer_name"],
            text=row["text"],
            rating=row["rating"],
            created_at=row["created_at"] or ""
        )


def init_database(db_path: str = DATABASE_FILE) -> Database:
    """Create a Database and make sure its tables exist."""
    db = Database(db_path)
    db.init()
    return db


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = init_database()
    print(f"Businesses: {db.get_all_businesses()}")
    print(f"Stats: {db.get_stats()}")
