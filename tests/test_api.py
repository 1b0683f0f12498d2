"""Tests for the HTTP API."""

import sqlite3
from datetime import datetime, timezone

import pytest

from conftest import ADMIN_KEY


def create_business(client, payload):
    response = client.post("/api/businesses", json=payload)
    assert response.status_code == 201
    return response.json()["businessId"]


def delete_business(client, business_id, admin_key):
    return client.request("DELETE", f"/api/businesses/{business_id}", json={"adminKey": admin_key})


class TestBusinessEndpoints:
    """Listing create/read/delete."""

    def test_create_and_fetch(self, client, kitchen):
        """Test the worked example: create, then fetch matching fields and no rating."""
        started = datetime.now(timezone.utc)

        response = client.post("/api/businesses", json=kitchen)

        assert response.status_code == 201
        body = response.json()
        assert body["message"]
        assert isinstance(body["businessId"], int)

        fetched = client.get(f"/api/businesses/{body['businessId']}")
        assert fetched.status_code == 200
        business = fetched.json()
        for key, value in kitchen.items():
            assert business[key] == value
        assert not business["rating"]
        assert datetime.fromisoformat(business["created_at"]) >= started

    def test_optional_fields_round_trip(self, client, kitchen):
        payload = {
            **kitchen,
            "phone": "0803 123 4567",
            "email": "hello@mamazainab.ng",
            "website": "https://mamazainab.ng",
            "hours": "9AM - 9PM",
            "image": "kitchen.jpg",
            "latitude": 13.03,
            "longitude": 8.31,
        }
        business_id = create_business(client, payload)

        business = client.get(f"/api/businesses/{business_id}").json()

        for key, value in payload.items():
            assert business[key] == value

    @pytest.mark.parametrize("missing", ["name", "category", "location", "description"])
    def test_create_missing_required_field(self, client, kitchen, missing):
        payload = {**kitchen, missing: ""}

        response = client.post("/api/businesses", json=payload)

        assert response.status_code == 400
        assert response.json()["message"] == "Required business fields are missing."

    def test_create_without_body(self, client):
        response = client.post("/api/businesses")
        assert response.status_code == 400

    def test_numeric_text_fields_accepted(self, client, kitchen):
        """Test that a number in a text field passes the presence check and is stored as text."""
        response = client.post("/api/businesses", json={**kitchen, "name": 42, "phone": 8031234567})

        assert response.status_code == 201
        business = client.get(f"/api/businesses/{response.json()['businessId']}").json()
        assert business["name"] == "42"
        assert business["phone"] == "8031234567"

    def test_list_newest_first(self, client, kitchen):
        first = create_business(client, kitchen)
        second = create_business(client, {**kitchen, "name": "Funtua Tech Repairs"})

        response = client.get("/api/businesses")

        assert response.status_code == 200
        assert [b["id"] for b in response.json()] == [second, first]

    def test_get_missing_business(self, client):
        response = client.get("/api/businesses/12345")
        assert response.status_code == 404
        assert response.json()["message"] == "Business not found."

    def test_delete_with_admin_key(self, client, kitchen):
        """Test the worked example: delete with the key, then 404 on fetch and re-delete."""
        business_id = create_business(client, kitchen)

        response = delete_business(client, business_id, ADMIN_KEY)

        assert response.status_code == 200
        assert response.json()["message"]
        assert client.get(f"/api/businesses/{business_id}").status_code == 404
        assert delete_business(client, business_id, ADMIN_KEY).status_code == 404

    @pytest.mark.parametrize("bad_key", ["wrong", "", "SUPERSECRETADMINKEY", ADMIN_KEY + " "])
    def test_delete_with_wrong_key(self, client, kitchen, bad_key):
        """Test that a bad key never removes the row."""
        business_id = create_business(client, kitchen)

        response = delete_business(client, business_id, bad_key)

        assert response.status_code == 403
        assert client.get(f"/api/businesses/{business_id}").status_code == 200

    def test_delete_without_body(self, client, kitchen):
        business_id = create_business(client, kitchen)

        response = client.delete(f"/api/businesses/{business_id}")

        assert response.status_code == 403
        assert client.get(f"/api/businesses/{business_id}").status_code == 200

    def test_wrong_key_checked_before_existence(self, client):
        assert delete_business(client, 999, "wrong").status_code == 403

    @pytest.mark.parametrize("bad_key", [123, None, ["supersecretadminkey"], {"key": "supersecretadminkey"}])
    def test_delete_with_non_string_key(self, client, kitchen, bad_key):
        business_id = create_business(client, kitchen)

        response = delete_business(client, business_id, bad_key)

        assert response.status_code == 403
        assert client.get(f"/api/businesses/{business_id}").status_code == 200

    def test_admin_key_from_environment(self, client, kitchen, monkeypatch):
        from localdirectory.infrastructure.config import get_settings

        monkeypatch.setenv("ADMIN_KEY", "rotated-key")
        get_settings.cache_clear()
        business_id = create_business(client, kitchen)

        assert delete_business(client, business_id, ADMIN_KEY).status_code == 403
        assert delete_business(client, business_id, "rotated-key").status_code == 200


class TestReviewEndpoints:
    """Review submission and rating aggregation."""

    def post_review(self, client, business_id, rating, name="Hauwa", text="Lovely food"):
        return client.post("/api/reviews", json={
            "businessId": business_id,
            "reviewerName": name,
            "text": text,
            "rating": rating,
        })

    def test_two_reviews_average(self, client, kitchen):
        """Test the worked example: ratings 4 and 2 give 3.0."""
        business_id = create_business(client, kitchen)

        first = self.post_review(client, business_id, 4)
        second = self.post_review(client, business_id, 2)

        assert first.status_code == 201
        assert second.status_code == 201
        assert isinstance(first.json()["reviewId"], int)
        business = client.get(f"/api/businesses/{business_id}").json()
        assert business["rating"] == pytest.approx(3.0)

    def test_rating_zero_rejected(self, client, kitchen):
        """Test that a zero rating is treated as a missing field."""
        business_id = create_business(client, kitchen)

        response = self.post_review(client, business_id, 0)

        assert response.status_code == 400
        assert response.json()["message"] == "All review fields are required."
        assert client.get(f"/api/reviews/{business_id}").json() == []

    def test_numeric_reviewer_name_accepted(self, client, kitchen):
        business_id = create_business(client, kitchen)

        response = self.post_review(client, business_id, 5, name=7, text=10)

        assert response.status_code == 201
        review = client.get(f"/api/reviews/{business_id}").json()[0]
        assert review["reviewer_name"] == "7"
        assert review["text"] == "10"

    @pytest.mark.parametrize("rating", [6, -1])
    def test_rating_out_of_range(self, client, kitchen, rating):
        business_id = create_business(client, kitchen)

        response = self.post_review(client, business_id, rating)

        assert response.status_code == 400
        assert response.json()["message"] == "Rating must be between 1 and 5."

    @pytest.mark.parametrize("missing", ["businessId", "reviewerName", "text", "rating"])
    def test_missing_review_field(self, client, kitchen, missing):
        business_id = create_business(client, kitchen)
        payload = {"businessId": business_id, "reviewerName": "Hauwa", "text": "Nice", "rating": 5}
        del payload[missing]

        response = client.post("/api/reviews", json=payload)

        assert response.status_code == 400

    def test_list_reviews_newest_first(self, client, kitchen):
        business_id = create_business(client, kitchen)
        self.post_review(client, business_id, 4, name="Hauwa")
        self.post_review(client, business_id, 5, name="Musa")

        response = client.get(f"/api/reviews/{business_id}")

        assert response.status_code == 200
        reviews = response.json()
        assert [r["reviewer_name"] for r in reviews] == ["Musa", "Hauwa"]
        assert all(r["business_id"] == business_id for r in reviews)

    def test_reviews_for_unknown_business_is_empty(self, client):
        response = client.get("/api/reviews/4242")
        assert response.status_code == 200
        assert response.json() == []


class TestAdminAndPages:
    """Admin key check, health and HTML pages."""

    def test_verify_admin_key(self, client):
        assert client.post("/api/admin/verify", json={"adminKey": ADMIN_KEY}).status_code == 200
        assert client.post("/api/admin/verify", json={"adminKey": "nope"}).status_code == 403
        assert client.post("/api/admin/verify").status_code == 403
        assert client.post("/api/admin/verify", json={"adminKey": 123}).status_code == 403

    def test_admin_page_does_not_embed_key(self, client):
        response = client.get("/admin")

        assert response.status_code == 200
        assert "adminKeyInput" in response.text
        assert ADMIN_KEY not in response.text

    def test_directory_page(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "searchInput" in response.text
        assert "ratingStars" in response.text

    def test_health(self, client, kitchen):
        create_business(client, kitchen)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "businesses": 1, "reviews": 0}


class TestStorageFailures:
    """Storage errors surface as generic 500s."""

    @pytest.fixture
    def broken(self, client, monkeypatch):
        def boom(*args, **kwargs):
            raise sqlite3.OperationalError("disk I/O error")

        db = client.app.state.db
        for name in ("get_all_businesses", "get_business", "add_business",
                     "delete_business", "get_reviews", "add_review"):
            monkeypatch.setattr(db, name, boom)
        return client

    def test_list_businesses_failure(self, broken):
        response = broken.get("/api/businesses")
        assert response.status_code == 500
        assert response.json()["message"] == "Error fetching businesses."
        assert "disk" not in response.text

    def test_get_business_failure(self, broken):
        assert broken.get("/api/businesses/1").status_code == 500

    def test_create_business_failure(self, broken, kitchen):
        assert broken.post("/api/businesses", json=kitchen).status_code == 500

    def test_delete_business_failure(self, broken):
        assert delete_business(broken, 1, ADMIN_KEY).status_code == 500

    def test_reviews_failure(self, broken):
        assert broken.get("/api/reviews/1").status_code == 500
        response = broken.post("/api/reviews", json={
            "businessId": 1, "reviewerName": "Hauwa", "text": "Nice", "rating": 5,
        })
        assert response.status_code == 500
