"""
Display formatting helpers.

Keeps presentation strings out of the routes so they can be unit-tested easily.
"""

from __future__ import annotations
from datetime import date, datetime


def short_time(value: datetime) -> str:
    """Short clock time like '8:00 AM' or '6:30 PM'."""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {suffix}"


def relative_day(value, today: date | None = None) -> str:
    """Convert a due date/datetime to 'Today', 'Tomorrow', 'In 3 days', 'Yesterday', etc."""
    if not value:
        return "Unknown"

    # Parse string to date if needed
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00")).date()
        except (ValueError, AttributeError):
            return value[:10] if len(value) >= 10 else value
    elif isinstance(value, datetime):
        value = value.date()

    today = today or date.today()
    delta = (value - today).days

    if delta == 0:
        return "Today"
    elif delta == 1:
        return "Tomorrow"
    elif delta == -1:
        return "Yesterday"
    elif 1 < delta < 7:
        return f"In {delta} days"
    elif -7 < delta < -1:
        return f"{-delta} days ago"
    else:
        return value.strftime("%b %d, %Y")
