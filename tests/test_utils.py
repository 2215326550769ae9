"""Tests for validation, formatting and log-masking helpers."""

from datetime import date, datetime

import pytest

from aquamate.utils.filters import relative_day, short_time
from aquamate.utils.sanitize import mask_email, mask_profile
from aquamate.utils.validation import (
    is_valid_uuid,
    validate_login_inputs,
    validate_plant_inputs,
    validate_registration_inputs,
    validate_reminder_inputs,
)

DEFAULT_DUE = datetime(2026, 10, 19, 13, 0)


@pytest.mark.parametrize("value, expected", [
    (datetime(2026, 1, 1, 0, 5), "12:05 AM"),
    (datetime(2026, 1, 1, 8, 0), "8:00 AM"),
    (datetime(2026, 1, 1, 12, 0), "12:00 PM"),
    (datetime(2026, 1, 1, 18, 30), "6:30 PM"),
])
def test_short_time(value, expected):
    assert short_time(value) == expected


def test_relative_day():
    today = date(2026, 10, 19)
    assert relative_day(datetime(2026, 10, 19, 23, 0), today) == "Today"
    assert relative_day("2026-10-20T08:00:00", today) == "Tomorrow"
    assert relative_day(date(2026, 10, 18), today) == "Yesterday"
    assert relative_day(date(2026, 10, 22), today) == "In 3 days"
    assert relative_day(date(2026, 10, 15), today) == "4 days ago"
    assert relative_day(date(2026, 12, 25), today) == "Dec 25, 2026"
    assert relative_day(None, today) == "Unknown"


def test_login_inputs_keep_password_verbatim():
    payload, error = validate_login_inputs({"email": " user@aquamate.com ", "password": " 123456 "})
    assert error is None
    assert payload == {"email": "user@aquamate.com", "password": " 123456 "}


def test_registration_respects_configured_length():
    form = {"email": "a@aquamate.com", "password": "abcdefg", "confirm_password": "abcdefg", "user_name": "a"}
    assert validate_registration_inputs(form, min_password_length=8)[1] == \
        "Password must have at least 8 characters."
    assert validate_registration_inputs(form)[1] is None


def test_plant_name_is_sanitized():
    payload, error = validate_plant_inputs({"name": "  Peace   <lily>  "})
    assert error is None
    assert payload["name"] == "Peace lily"
    assert payload["watering_frequency_days"] == 3


def test_plant_frequency_must_be_numeric():
    _payload, error = validate_plant_inputs({"name": "Aloe", "watering_frequency_days": "often"})
    assert error == "Watering frequency must be a whole number of days."


def test_reminder_inputs():
    payload, error = validate_reminder_inputs({"title": " Water ", "date": "2026-10-20T07:45"}, DEFAULT_DUE)
    assert error is None
    assert payload == {"title": "Water", "plant_id": None, "date": datetime(2026, 10, 20, 7, 45)}

    payload, _ = validate_reminder_inputs({"title": "Water"}, DEFAULT_DUE)
    assert payload["date"] == DEFAULT_DUE

    assert validate_reminder_inputs({"title": "Water", "plant_id": "x"}, DEFAULT_DUE)[1] == "Invalid plant ID."


def test_is_valid_uuid():
    assert is_valid_uuid("550e8400-e29b-41d4-a716-446655440000")
    assert not is_valid_uuid("550e8400")
    assert not is_valid_uuid(None)


def test_masking():
    assert mask_email("ana@aquamate.com") == "a***@aquamate.com"
    assert mask_email("") == "***"
    assert mask_profile({"fullName": "Ana", "email": "ana@aquamate.com", "age": "", "plantsCount": "4"}) == \
        "fullName=***, email=a***@aquamate.com, plantsCount=4"
    assert mask_profile({}) == "(empty)"
