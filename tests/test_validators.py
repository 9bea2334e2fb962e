"""Tests for input validation helpers."""

from datetime import date, datetime, timezone

import pytest

from sartrack.errors import ValidationError
from sartrack.utils.validators import (
    optional_text,
    parse_date,
    parse_timestamp,
    require_positive_id,
    require_text,
)


class TestIds:
    @pytest.mark.parametrize("value", [0, -1, None, True, "3", 2.0])
    def test_rejects(self, value):
        with pytest.raises(ValidationError):
            require_positive_id(value, "id")

    def test_accepts_positive_int(self):
        assert require_positive_id(3, "id") == 3


class TestText:
    def test_require_text_strips(self):
        assert require_text("  Rex ", "name") == "Rex"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_text_blank(self, value):
        with pytest.raises(ValidationError):
            require_text(value, "name")

    @pytest.mark.parametrize("value", [42, 3.5, ["Rex"]])
    def test_require_text_non_string(self, value):
        with pytest.raises(ValidationError):
            require_text(value, "name")

    def test_optional_text_non_string(self):
        with pytest.raises(ValidationError):
            optional_text(7)

    def test_optional_text_blank_is_none(self):
        assert optional_text("  ") is None
        assert optional_text(None) is None


class TestTimestamps:
    """Tests for parse_timestamp."""

    def test_z_suffix(self):
        assert parse_timestamp("2024-01-01T10:00:00Z", "t") == "2024-01-01T10:00:00+00:00"

    def test_datetime_input(self):
        value = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert parse_timestamp(value, "t") == "2024-01-01T10:00:00+00:00"

    def test_none(self):
        assert parse_timestamp(None, "t") is None

    def test_invalid(self):
        with pytest.raises(ValidationError):
            parse_timestamp("10 o'clock", "t")

    @pytest.mark.parametrize("value", [1700000000, 12.5, b"2024-01-01"])
    def test_non_string(self, value):
        with pytest.raises(ValidationError):
            parse_timestamp(value, "t")


class TestDates:
    """Tests for parse_date."""

    def test_iso_date(self):
        assert parse_date("2020-05-01", "birthdate") == "2020-05-01"

    def test_date_object(self):
        assert parse_date(date(2020, 5, 1), "birthdate") == "2020-05-01"

    def test_blank_is_none(self):
        assert parse_date("", "birthdate") is None

    def test_invalid(self):
        with pytest.raises(ValidationError):
            parse_date("01/05/2020", "birthdate")

    def test_non_string(self):
        with pytest.raises(ValidationError):
            parse_date(20200501, "birthdate")
