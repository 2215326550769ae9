"""
In-memory plant collection.

Plants are seeded from bundled sample data when the app starts and live for
the lifetime of the process. They are immutable once created; reminders refer
to them by id only.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, List, Tuple
import threading
import uuid
from aquamate.constants import PLANT_STATUS_IN_DAYS
from aquamate.utils.data import load_data_file

SAMPLE_PLANTS_FILE = "sample_plants.json"

# Process-wide plant list (initialized once per app)
_plants: List[Dict[str, Any]] = []
_plants_lock = threading.Lock()


def next_watering_text(days: int) -> str:
    """Display text for the next watering, e.g. 'In 3 days'."""
    return f"In {days} day{'' if days == 1 else 's'}"


def build_plant(
    name: str,
    image_name: str,
    status: str,
    watering_frequency_days: int,
    next_watering: Optional[str] = None,
    plant_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a plant record.

    When the chosen status is the "In days" placeholder, the stored status
    becomes the computed next-watering text.
    """
    watering_text = next_watering or next_watering_text(watering_frequency_days)
    return {
        "id": plant_id or str(uuid.uuid4()),
        "name": name,
        "image_name": image_name,
        "status": watering_text if status == PLANT_STATUS_IN_DAYS else status,
        "watering_frequency_days": watering_frequency_days,
        "next_watering_text": watering_text,
    }


def init_plants(app) -> None:
    """Seed the plant list from sample data. Call this from the Flask app factory."""
    global _plants

    samples = load_data_file(SAMPLE_PLANTS_FILE)
    seeded = [
        build_plant(
            name=s["name"],
            image_name=s["image_name"],
            status=s["status"],
            watering_frequency_days=int(s["watering_frequency_days"]),
            next_watering=s.get("next_watering_text"),
        )
        for s in samples
    ]

    with _plants_lock:
        _plants = seeded
    app.logger.info(f"Loaded {len(seeded)} sample plant(s)")


def get_plants() -> List[Dict[str, Any]]:
    """All plants in insertion order (a copy; records themselves are never mutated)."""
    with _plants_lock:
        return list(_plants)


def get_plant(plant_id: Optional[str]) -> Optional[Dict[str, Any]]:
    if not plant_id:
        return None
    return next((p for p in get_plants() if p["id"] == plant_id), None)


def add_plant(payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Add a plant built from a validated form payload.

    Args:
        payload: Output of validate_plant_inputs() (name, image_name, status,
                 watering_frequency_days)

    Returns:
        Tuple of (plant, error_message)
    """
    if not payload.get("name"):
        return None, "Please enter a name for the plant."

    plant = build_plant(
        name=payload["name"],
        image_name=payload["image_name"],
        status=payload["status"],
        watering_frequency_days=payload["watering_frequency_days"],
    )

    with _plants_lock:
        _plants.append(plant)

    return plant, None


def filter_plants(plants: List[Dict[str, Any]], search_text: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive name filter. Blank search text returns every plant."""
    needle = (search_text or "").strip().casefold()
    if not needle:
        return list(plants)
    return [p for p in plants if needle in p["name"].casefold()]
