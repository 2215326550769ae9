"""
Input validation and normalization.

Trims and bounds field lengths, filters suspicious characters while allowing
natural punctuation, normalizes select values, and builds clean payloads for
the service layer. Every validator returns (payload, error_message); the
error message is the text shown to the user.
"""

from __future__ import annotations
import re
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from email_validator import validate_email, EmailNotValidError
from flask import request
from aquamate.constants import PLANT_IMAGE_STYLES, PLANT_STATUSES, PROFILE_FIELDS

# Allowlist regex: we REMOVE anything NOT in this set.
# Includes letters/numbers/space and common lightweight punctuation used in names.
_SAFE_CHARS_PATTERN = re.compile(r"[^\w\s\-\.,'()/&!]+", re.UNICODE)

# UUID validation pattern (RFC 4122 compliant)
_UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$',
    re.IGNORECASE
)

MAX_PLANT_NAME_LEN = 80
MAX_REMINDER_TITLE_LEN = 120
MAX_PROFILE_FIELD_LEN = 120

IMAGE_STYLE_CHOICES = {value for value, _label in PLANT_IMAGE_STYLES}
STATUS_CHOICES = {value for value, _label in PLANT_STATUSES}
DEFAULT_IMAGE_STYLE = PLANT_IMAGE_STYLES[0][0]
DEFAULT_STATUS = PLANT_STATUSES[0][0]


def request_payload() -> Optional[Dict[str, Any]]:
    """
    Body of the current request as a dict.

    JSON bodies and classic form posts are both accepted. Returns None when
    the JSON body is not an object.
    """
    data = request.get_json(silent=True)
    if data is None:
        return request.form.to_dict()
    return data if isinstance(data, dict) else None


def _soft_sanitize(text: Any, max_len: int) -> str:
    """
    Normalizes names:
    - strip whitespace
    - bound length
    - remove disallowed characters via allowlist
    - collapse double spaces
    """
    t = str(text or "").strip()
    if not t:
        return ""
    t = t[:max_len]
    t = _SAFE_CHARS_PATTERN.sub("", t)
    t = re.sub(r"\s{2,}", " ", t)
    return t.strip()


def _plain_text(text: Any, max_len: int) -> str:
    """Strip control characters and bound length; keep punctuation as typed."""
    t = str(text or "").strip()
    t = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", t)
    return t[:max_len]


def is_valid_email(email: str) -> bool:
    """Syntax-only email check (no DNS lookups)."""
    try:
        validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def is_valid_uuid(value: str | None) -> bool:
    """
    Check if a string is a valid UUID (RFC 4122 format).

    Example:
        >>> is_valid_uuid("550e8400-e29b-41d4-a716-446655440000")
        True
        >>> is_valid_uuid("invalid")
        False
    """
    if not value or not isinstance(value, str):
        return False
    return bool(_UUID_PATTERN.match(value))


# ============================================================================
# Authentication forms
# ============================================================================

def validate_login_inputs(form: Dict[str, Any]) -> Tuple[Dict[str, Any], str | None]:
    """Login needs both fields; credential matching happens in the auth service."""
    email = str(form.get("email") or "").strip()
    password = str(form.get("password") or "")

    if not email or not password:
        return {}, "Please enter email and password."

    return {"email": email, "password": password}, None


def validate_registration_inputs(
    form: Dict[str, Any],
    min_password_length: int = 6,
) -> Tuple[Dict[str, Any], str | None]:
    """
    Validate the registration form.

    Checks run in order and stop at the first failure:
    required fields, email syntax, password length, password confirmation.
    """
    email = str(form.get("email") or "").strip()
    password = str(form.get("password") or "")
    confirm_password = str(form.get("confirm_password") or "")
    user_name = str(form.get("user_name") or "").strip()

    if not email or not password or not confirm_password or not user_name:
        return {}, "All fields are required."

    if not is_valid_email(email):
        return {}, "Please enter a valid email."

    if len(password) < min_password_length:
        return {}, f"Password must have at least {min_password_length} characters."

    if password != confirm_password:
        return {}, "Passwords do not match."

    return {"email": email, "password": password, "user_name": user_name}, None


# ============================================================================
# Plant & reminder forms
# ============================================================================

def validate_plant_inputs(
    form: Dict[str, Any],
    min_days: int = 1,
    max_days: int = 14,
) -> Tuple[Dict[str, Any], str | None]:
    """
    Validate the add-plant form.

    Unknown image styles and statuses are coerced to the defaults and the
    watering frequency is clamped to [min_days, max_days].
    """
    name = _soft_sanitize(form.get("name"), MAX_PLANT_NAME_LEN)
    if not name:
        return {}, "Please enter a name for the plant."

    image_name = str(form.get("image_name") or "").strip()
    if image_name not in IMAGE_STYLE_CHOICES:
        image_name = DEFAULT_IMAGE_STYLE

    status = str(form.get("status") or "").strip()
    if status not in STATUS_CHOICES:
        status = DEFAULT_STATUS

    try:
        frequency = int(form.get("watering_frequency_days", 3))
    except (TypeError, ValueError):
        return {}, "Watering frequency must be a whole number of days."
    frequency = max(min_days, min(max_days, frequency))

    return {
        "name": name,
        "image_name": image_name,
        "status": status,
        "watering_frequency_days": frequency,
    }, None


def validate_reminder_inputs(
    form: Dict[str, Any],
    default_due: datetime,
) -> Tuple[Dict[str, Any], str | None]:
    """
    Validate the add-reminder form.

    Returns payload with:
      - title (trimmed, required)
      - plant_id (UUID string or None; existence is checked by the caller)
      - date (datetime; default_due when omitted)
    """
    from aquamate.services.reminders import parse_due

    title = _plain_text(form.get("title"), MAX_REMINDER_TITLE_LEN)
    if not title:
        return {}, "Please add a title for the reminder."

    plant_id: Optional[str] = str(form.get("plant_id") or "").strip() or None
    if plant_id is not None and not is_valid_uuid(plant_id):
        return {}, "Invalid plant ID."

    raw_date = form.get("date")
    if raw_date in (None, ""):
        due = default_due
    else:
        try:
            due = parse_due(raw_date)
        except (TypeError, ValueError):
            return {}, "Invalid date format."

    return {"title": title, "plant_id": plant_id, "date": due}, None


# ============================================================================
# Profile form
# ============================================================================

def validate_profile_inputs(form: Dict[str, Any]) -> Tuple[Dict[str, Any], str | None]:
    """
    Normalize the profile form into the persisted mapping.

    Every field is an optional string. Email, age and plant count are only
    checked when filled in.
    """
    profile = {field: _plain_text(form.get(field), MAX_PROFILE_FIELD_LEN) for field in PROFILE_FIELDS}

    if profile["email"] and not is_valid_email(profile["email"]):
        return {}, "Please enter a valid email."

    for numeric_field, label in (("age", "Age"), ("plantsCount", "Plant count")):
        value = profile[numeric_field]
        if value and not value.isdigit():
            return {}, f"{label} must be a whole number."

    return profile, None
