import pytest

import config
from models import FetchSource, LawyerRecord, ListOptions, PageCursor


def test_csv_headers_start_with_id_and_end_with_image():
    headers = LawyerRecord.csv_headers()
    assert headers[0] == "id"
    assert headers[-1] == "image"
    assert "categories" in headers


def test_to_csv_row_joins_lists():
    record = LawyerRecord(id=7, name="Jane Doe", categories=["Family Law", "Real Estate"])
    row = record.to_csv_row()
    assert len(row) == len(LawyerRecord.csv_headers())
    assert row[0] == "7"
    assert row[1] == "Jane Doe"
    assert "Family Law ; Real Estate" in row


def test_none_collections_become_empty_lists():
    record = LawyerRecord(id=1, categories=None, languages=None)
    assert record.categories == []
    assert record.languages == []


def test_default_tier_is_standard():
    assert LawyerRecord().tier == "standard"


def test_image_url_defaults_when_missing():
    assert LawyerRecord().image_url == config.DEFAULT_IMAGE_URL
    assert LawyerRecord(image="https://x/y.jpg").image_url == "https://x/y.jpg"


class TestFromDict:
    def test_camel_case_keys(self):
        record = LawyerRecord.from_dict({
            "id": "abc",
            "name": "Jane Doe",
            "yearsExperience": 12,
            "reviewCount": 30,
            "hourlyRate": 300,
            "consultationFee": "Free",
        })
        assert record.id == "abc"
        assert record.years_experience == 12
        assert record.review_count == 30
        assert record.hourly_rate == 300.0
        assert record.consultation_fee == "Free"

    def test_description_used_as_bio(self):
        record = LawyerRecord.from_dict({"description": "Trial lawyer"})
        assert record.bio == "Trial lawyer"

    def test_experience_string_parsed(self):
        record = LawyerRecord.from_dict({"experience": "15 years"})
        assert record.years_experience == 15

    def test_location_string_split_into_city_and_province(self):
        record = LawyerRecord.from_dict({"location": "Calgary, AB"})
        assert record.location == "Calgary"
        assert record.province == "AB"
        assert record.display_location == "Calgary, AB"

    def test_location_mapping(self):
        record = LawyerRecord.from_dict({"location": {"city": "Airdrie", "province": "AB"}})
        assert record.location == "Airdrie"
        assert record.province == "AB"

    def test_rating_clamped(self):
        assert LawyerRecord.from_dict({"rating": 7.2}).rating == 5.0
        assert LawyerRecord.from_dict({"rating": -1}).rating == 0.0

    def test_missing_categories_is_empty(self):
        assert LawyerRecord.from_dict({"name": "X"}).categories == []

    def test_non_numeric_values_default_to_zero(self):
        record = LawyerRecord.from_dict({"rating": "n/a", "hourlyRate": None})
        assert record.rating == 0.0
        assert record.hourly_rate == 0.0

    def test_is_verified_alias(self):
        assert LawyerRecord.from_dict({"is_verified": True}).verified is True

    def test_non_string_text_fields_coerced(self):
        record = LawyerRecord.from_dict(
            {"name": 42, "firm": None, "bio": ["x"], "location": {"city": None}}
        )
        assert record.name == "42"
        assert record.firm == ""
        assert record.bio == "['x']"
        assert record.location == ""


class TestListOptions:
    def test_defaults(self):
        options = ListOptions()
        assert options.categories == ()
        assert options.page_size == config.DEFAULT_PAGE_SIZE
        assert options.cursor is None
        assert options.use_cache is True

    def test_categories_coerced_to_tuple(self):
        assert ListOptions(categories=["Family Law"]).categories == ("Family Law",)

    @pytest.mark.parametrize("size", [0, -5])
    def test_page_size_must_be_positive(self, size):
        with pytest.raises(ValueError):
            ListOptions(page_size=size)


def test_cursor_is_hashable_and_comparable():
    a = PageCursor(FetchSource.REMOTE, offset=10)
    assert a == PageCursor(FetchSource.REMOTE, offset=10)
    assert len({a, PageCursor(FetchSource.FALLBACK, after_id=3)}) == 2
