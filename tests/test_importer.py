"""Tests for the spreadsheet importer."""

import pytest

from localdirectory.infrastructure.importer import BusinessImporter

CSV = """Business Name,Category,LGA,Description,Phone,Lat,Lng
Mama Zainab's Kitchen,Restaurant,Daura,Home-cooked meals,0803 123 4567,13.03,8.31
Funtua Tech Repairs,Electronics,Funtua,Phone and laptop repairs,0810 987 6543,,
Unfinished Listing,Retail,Katsina,,,,
"""


@pytest.fixture
def listings_csv(tmp_path):
    path = tmp_path / "listings.csv"
    path.write_text(CSV, encoding="utf-8")
    return path


class TestBusinessImporter:

    def test_detects_columns(self, listings_csv):
        importer = BusinessImporter()

        rows, columns = importer.parse(listings_csv)

        assert columns["name"] == "business name"
        assert columns["location"] == "lga"
        assert columns["latitude"] == "lat"
        assert columns["longitude"] == "lng"
        assert len(rows) == 3

    def test_parsed_values(self, listings_csv):
        rows, _ = BusinessImporter().parse(listings_csv)

        assert rows[0]["name"] == "Mama Zainab's Kitchen"
        assert rows[0]["phone"] == "0803 123 4567"
        assert rows[0]["latitude"] == pytest.approx(13.03)
        assert "latitude" not in rows[1]
        assert "description" not in rows[2]

    def test_phone_keeps_leading_zero(self, tmp_path):
        path = tmp_path / "phones.csv"
        path.write_text(
            "Name,Category,Location,Description,Phone,Latitude\n"
            "Katsina Fabrics,Retail,Katsina,Ankara and lace,08031234567,12.99\n",
            encoding="utf-8",
        )

        rows, _ = BusinessImporter().parse(path)

        assert rows[0]["phone"] == "08031234567"
        assert rows[0]["latitude"] == pytest.approx(12.99)

    def test_import_file(self, db, listings_csv):
        """Test that complete rows land in the database and incomplete ones are reported."""
        result = BusinessImporter().import_file(db, listings_csv)

        assert result["added"] == 2
        assert result["skipped"] == 1
        names = {b.name for b in db.get_all_businesses()}
        assert names == {"Mama Zainab's Kitchen", "Funtua Tech Repairs"}

    def test_missing_required_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Name,Phone\nShop,0800\n", encoding="utf-8")

        with pytest.raises(ValueError, match="category"):
            BusinessImporter().parse(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "listings.txt"
        path.write_text(CSV, encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported"):
            BusinessImporter().parse(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BusinessImporter().parse(tmp_path / "nope.csv")
