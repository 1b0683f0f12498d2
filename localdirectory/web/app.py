"""
FastAPI Web Application - Local Business Directory
===================================================

JSON API under /api for listings and reviews, plus the public directory page
and the admin page. Every request is an independent read or write against the
SQLite store.
"""

import hmac
import logging
import sqlite3
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from localdirectory.infrastructure.config import get_settings, setup_logging
from localdirectory.infrastructure.persistence import Database, init_database
from localdirectory.validation import business_error, review_error
from localdirectory.web.pages import render_admin_page, render_directory_page

setup_logging()
logger = logging.getLogger(__name__)


# ── Request bodies ─────────────────────────────────────────────────
# Every field is optional and loosely typed so that only the presence checks
# reject a submission (400); a non-string admin key is a plain mismatch (403).

class BusinessIn(BaseModel):
    name: Any = None
    category: Any = None
    location: Any = None
    description: Any = None
    phone: Any = None
    email: Any = None
    website: Any = None
    hours: Any = None
    image: Any = None
    latitude: Any = None
    longitude: Any = None


class ReviewIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    business_id: Optional[int] = Field(None, alias="businessId")
    reviewer_name: Any = Field(None, alias="reviewerName")
    text: Any = None
    rating: Optional[int] = None


class AdminKeyIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    admin_key: Any = Field(None, alias="adminKey")


# ── Lifespan ───────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    for issue in settings.validate():
        logger.warning(issue)

    app.state.db = init_database(settings.database.path)
    logger.info("Database ready")
    yield


app = FastAPI(
    title="Local Business Directory",
    description="Business listings, reviews and admin deletion",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().server.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_db(request: Request) -> Database:
    """Dependency returning the database opened at startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database not initialized yet")
    return db


def _admin_key_matches(candidate: Any) -> bool:
    if not isinstance(candidate, str):
        return False
    expected = get_settings().admin.admin_key
    return hmac.compare_digest(candidate.encode(), expected.encode())


def _message(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


# ── Pages ──────────────────────────────────────────────────────────

@app.get("/", response_class=HTMLResponse)
async def directory_page():
    return render_directory_page()


@app.get("/admin", response_class=HTMLResponse)
async def admin_page():
    return render_admin_page()


@app.get("/health")
async def health_check(db: Database = Depends(get_db)):
    """Health check endpoint with listing counts."""
    try:
        stats = db.get_stats()
    except sqlite3.Error:
        logger.exception("Health check failed")
        return _message(500, "Database unavailable.", status="unhealthy")
    return {"status": "healthy", **stats}


# ── Businesses ─────────────────────────────────────────────────────

@app.get("/api/businesses")
async def list_businesses(db: Database = Depends(get_db)):
    try:
        return [business.to_dict() for business in db.get_all_businesses()]
    except sqlite3.Error:
        logger.exception("Error fetching businesses")
        return _message(500, "Error fetching businesses.")


@app.get("/api/businesses/{business_id}")
async def get_business(business_id: int, db: Database = Depends(get_db)):
    try:
        business = db.get_business(business_id)
    except sqlite3.Error:
        logger.exception(f"Error fetching business {business_id}")
        return _message(500, "Error fetching business.")

    if business is None:
        return _message(404, "Business not found.")
    return business.to_dict()


@app.post("/api/businesses")
async def create_business(payload: Optional[BusinessIn] = None, db: Database = Depends(get_db)):
    payload = payload or BusinessIn()
    fields = payload.model_dump()

    error = business_error(fields)
    if error:
        logger.warning(f"Rejected business submission: {error}")
        return _message(400, error)

    try:
        business_id = db.add_business(**fields)
    except sqlite3.Error:
        logger.exception("Error adding business")
        return _message(500, "Error adding business on the server.")

    return _message(201, "Business added successfully and is now live!", businessId=business_id)


@app.delete("/api/businesses/{business_id}")
async def delete_business(business_id: int, payload: Optional[AdminKeyIn] = None,
                          db: Database = Depends(get_db)):
    admin_key = payload.admin_key if payload else None
    if not _admin_key_matches(admin_key):
        logger.warning(f"Unauthorized delete attempt on business {business_id}")
        return _message(403, "Unauthorized: Invalid admin key for deletion.")

    try:
        deleted = db.delete_business(business_id)
    except sqlite3.Error:
        logger.exception(f"Error deleting business {business_id}")
        return _message(500, "Error deleting business.")

    if not deleted:
        return _message(404, "Business not found.")

    logger.info(f"Business {business_id} deleted by admin")
    return {"message": "Business deleted successfully!"}


# ── Reviews ────────────────────────────────────────────────────────

@app.get("/api/reviews/{business_id}")
async def list_reviews(business_id: int, db: Database = Depends(get_db)):
    try:
        return [review.to_dict() for review in db.get_reviews(business_id)]
    except sqlite3.Error:
        logger.exception(f"Error fetching reviews for business {business_id}")
        return _message(500, "Error fetching reviews.")


@app.post("/api/reviews")
async def create_review(payload: Optional[ReviewIn] = None, db: Database = Depends(get_db)):
    payload = payload or ReviewIn()

    error = review_error(payload.business_id, payload.reviewer_name, payload.text, payload.rating)
    if error:
        return _message(400, error)

    try:
        review_id = db.add_review(
            payload.business_id, payload.reviewer_name, payload.text, payload.rating
        )
    except sqlite3.Error:
        logger.exception("Error adding review")
        return _message(500, "Error adding review.")

    return _message(201, "Review added successfully!", reviewId=review_id)


# ── Admin ──────────────────────────────────────────────────────────

@app.post("/api/admin/verify")
async def verify_admin_key(payload: Optional[AdminKeyIn] = None):
    if not _admin_key_matches(payload.admin_key if payload else None):
        logger.warning("Invalid admin key submitted")
        return _message(403, "Invalid Admin Key.")
    return {"message": "Admin key accepted."}


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)
