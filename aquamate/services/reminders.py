"""
Reminder service for plant care scheduling.

Handles creating, listing, and deleting care reminders, persisting the whole
collection to device storage, and keeping a matching local notification
scheduled for every reminder.

Reminder records are plain dicts:
    {"id": str, "plant_id": str | None, "title": str, "date": "YYYY-MM-DDTHH:MM:SS"}

Dates are naive local times (the device's wall clock).
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Tuple, Iterable
from datetime import datetime, timedelta
import logging
import threading
import uuid
from flask import current_app, has_app_context
from aquamate.constants import REMINDERS_STORAGE_KEY
from aquamate.extensions import notifications
from aquamate.services.storage import get_store
from aquamate.services import plants as plant_service

logger = logging.getLogger(__name__)


def _safe_log_error(message: str) -> None:
    """Safely log an error, handling cases where no app context exists (e.g., in tests)."""
    if has_app_context():
        current_app.logger.error(message)
    else:
        # Fallback to logging module for testing/non-Flask contexts
        logger.error(message)


def _safe_log_info(message: str) -> None:
    if has_app_context():
        current_app.logger.info(message)
    else:
        logger.info(message)


# New reminders default to one hour from now when no date is given
DEFAULT_LEAD_TIME = timedelta(hours=1)


# ============================================================================
# Record helpers
# ============================================================================

def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values pass through."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_due(value: Any) -> datetime:
    """
    Parse a reminder due date.

    Accepts datetime objects or ISO-8601 strings (a trailing "Z" is treated
    as UTC). Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        return to_local_naive(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Reminder date is missing.")
    return to_local_naive(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))


def format_due(value: datetime) -> str:
    return to_local_naive(value).isoformat(timespec="seconds")


def reminder_due(reminder: Dict[str, Any]) -> datetime:
    return parse_due(reminder["date"])


def build_reminder(
    title: str,
    due: datetime | str,
    plant_id: Optional[str] = None,
    reminder_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a new reminder record.

    Args:
        title: Reminder title (already validated)
        due: Due date/time
        plant_id: Optional plant UUID (weak reference, not ownership)
        reminder_id: Optional identity; a new UUID is generated if omitted

    Returns:
        Reminder dict ready to persist
    """
    return {
        "id": reminder_id or str(uuid.uuid4()),
        "plant_id": plant_id or None,
        "title": title,
        "date": format_due(parse_due(due)),
    }


def decode_reminder(raw: Any) -> Dict[str, Any]:
    """Validate a persisted record. Raises ValueError on malformed data."""
    if not isinstance(raw, dict):
        raise ValueError(f"expected an object, got {type(raw).__name__}")

    reminder_id = raw.get("id")
    title = raw.get("title")
    plant_id = raw.get("plant_id")

    if not isinstance(reminder_id, str) or not reminder_id:
        raise ValueError("reminder id is missing")
    uuid.UUID(reminder_id)
    if not isinstance(title, str):
        raise ValueError("reminder title is missing")
    if plant_id is not None:
        if not isinstance(plant_id, str):
            raise ValueError("plant_id must be a string")
        uuid.UUID(plant_id)

    return {
        "id": reminder_id,
        "plant_id": plant_id,
        "title": title,
        "date": format_due(parse_due(raw.get("date"))),
    }


# ============================================================================
# Persistence
# ============================================================================

def save_reminders(reminders: List[Dict[str, Any]]) -> bool:
    """
    Overwrite the persisted reminder collection.

    Returns:
        True if written, False if the write failed (failure is logged)
    """
    try:
        get_store().set(REMINDERS_STORAGE_KEY, [dict(r) for r in reminders])
        return True
    except (OSError, TypeError, ValueError) as e:
        _safe_log_error(f"Failed to save reminders: {e}")
        return False


def load_reminders() -> List[Dict[str, Any]]:
    """
    Load the persisted reminder collection.

    Returns an empty list when nothing has been saved yet or when any record
    fails to decode (the failure is logged, never raised).
    """
    raw = get_store().get(REMINDERS_STORAGE_KEY)
    if raw is None:
        return []

    try:
        if not isinstance(raw, list):
            raise ValueError(f"expected a list, got {type(raw).__name__}")
        return [decode_reminder(item) for item in raw]
    except (ValueError, TypeError, KeyError) as e:
        _safe_log_error(f"Failed to load reminders: {e}")
        return []


# ============================================================================
# Queries
# ============================================================================

def sort_by_due(reminders: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(reminders, key=reminder_due)


def list_reminders() -> List[Dict[str, Any]]:
    """All reminders, soonest first."""
    return sort_by_due(load_reminders())


def get_reminder(reminder_id: str) -> Optional[Dict[str, Any]]:
    return next((r for r in load_reminders() if r["id"] == reminder_id), None)


def todays_reminders(reminders: Iterable[Dict[str, Any]], now: datetime) -> List[Dict[str, Any]]:
    """
    Reminders due on the same calendar day as `now`, earliest time first.

    Pure function: no storage access, no clock access.
    """
    today = to_local_naive(now).date()
    due_today = [r for r in reminders if reminder_due(r).date() == today]
    return sort_by_due(due_today)


def plant_for(
    reminder: Dict[str, Any],
    plants: Iterable[Dict[str, Any]],
) -> Optional[Dict[str, Any]]:
    """Resolve a reminder's weak plant reference. Dangling references return None."""
    plant_id = reminder.get("plant_id")
    if not plant_id:
        return None
    return next((p for p in plants if p["id"] == plant_id), None)


# ============================================================================
# Mutations
# ============================================================================

# Serializes load -> modify -> save so concurrent requests never drop a record
_mutation_lock = threading.Lock()


def add_reminder(reminder: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Add a reminder, persist the collection, and schedule its notification.

    The notification is scheduled after the save; a scheduling failure is
    logged by the notification manager and does not undo the save.

    Returns:
        Tuple of (reminder, error_message)
    """
    with _mutation_lock:
        reminders = load_reminders()
        if any(r["id"] == reminder["id"] for r in reminders):
            return None, "A reminder with this id already exists."

        reminders.append(reminder)
        reminders = sort_by_due(reminders)

        if not save_reminders(reminders):
            return None, "Could not save the reminder. Please try again."

        plant = plant_for(reminder, plant_service.get_plants())
        notifications.schedule_notification(reminder, plant["name"] if plant else None)

    _safe_log_info(f"Reminder created: {reminder['title']} at {reminder['date']}")
    return reminder, None


def delete_reminder(reminder_id: str) -> Tuple[bool, Optional[str]]:
    """
    Delete a reminder by identity and cancel its notification.

    Returns:
        Tuple of (success, error_message)
    """
    with _mutation_lock:
        reminders = load_reminders()
        remaining = [r for r in reminders if r["id"] != reminder_id]

        if len(remaining) == len(reminders):
            return False, "Reminder not found."

        if not save_reminders(remaining):
            return False, "Could not delete the reminder. Please try again."

        notifications.cancel_notification(reminder_id)
    return True, None


def clear_reminders() -> Tuple[int, Optional[str]]:
    """
    Remove every reminder and cancel all of their notifications.

    Nothing is cancelled when the empty collection cannot be saved.

    Returns:
        Tuple of (count_removed, error_message)
    """
    with _mutation_lock:
        reminders = load_reminders()
        if not save_reminders([]):
            return 0, "Could not delete the reminders. Please try again."
        for reminder in reminders:
            notifications.cancel_notification(reminder["id"])
    return len(reminders), None
