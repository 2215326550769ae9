"""
Reminder routes for plant care scheduling.

Handles listing, creating, viewing, and deleting reminders, plus the
"today's care" view.
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List
from flask import Blueprint, jsonify
from aquamate.constants import GENERAL_PLANT_LABEL
from aquamate.services import plants as plant_service
from aquamate.services import reminders as reminder_service
from aquamate.utils.auth import enforce_ajax_for_mutations, require_auth
from aquamate.utils.errors import error_response, log_info, GENERIC_MESSAGES
from aquamate.utils.filters import relative_day, short_time
from aquamate.utils.validation import is_valid_uuid, request_payload, validate_reminder_inputs

reminders_bp = Blueprint("reminders", __name__, url_prefix="/api/v1/reminders")
reminders_bp.before_request(enforce_ajax_for_mutations)


def reminder_row(reminder: Dict[str, Any], plants: List[Dict[str, Any]], now: datetime) -> Dict[str, Any]:
    """Reminder plus the display fields the care list shows next to it."""
    due = reminder_service.reminder_due(reminder)
    plant = reminder_service.plant_for(reminder, plants)
    return {
        **reminder,
        "time": short_time(due),
        "day": relative_day(due, today=now.date()),
        "plant_name": plant["name"] if plant else GENERAL_PLANT_LABEL,
        "next_watering_text": plant["next_watering_text"] if plant else "—",
    }


@reminders_bp.route("", methods=["GET"])
@require_auth
def index():
    """All reminders, soonest first."""
    now = datetime.now()
    plants = plant_service.get_plants()
    reminders = reminder_service.list_reminders()
    return jsonify({
        "success": True,
        "reminders": [reminder_row(r, plants, now) for r in reminders],
    })


@reminders_bp.route("/today", methods=["GET"])
@require_auth
def today():
    """Reminders due today, earliest first."""
    now = datetime.now()
    plants = plant_service.get_plants()
    todays = reminder_service.todays_reminders(reminder_service.load_reminders(), now)
    return jsonify({
        "success": True,
        "date": now.date().isoformat(),
        "reminders": [reminder_row(r, plants, now) for r in todays],
    })


@reminders_bp.route("", methods=["POST"])
@require_auth
def create():
    """
    Create a reminder and schedule its notification.

    Request body: {"title": str, "plant_id": str | null, "date": ISO-8601 | null}
    """
    data = request_payload()
    if data is None:
        return error_response(GENERIC_MESSAGES["request"])

    now = datetime.now()

    payload, error = validate_reminder_inputs(data, default_due=now + reminder_service.DEFAULT_LEAD_TIME)
    if error:
        return error_response(error)

    if payload["plant_id"] and not plant_service.get_plant(payload["plant_id"]):
        return error_response("Plant not found.", 404)

    reminder = reminder_service.build_reminder(
        title=payload["title"],
        due=payload["date"],
        plant_id=payload["plant_id"],
    )
    reminder, error = reminder_service.add_reminder(reminder)
    if error:
        return error_response(error, 500)

    log_info("Reminder created", reminder_id=reminder["id"], plant_id=reminder["plant_id"])
    return jsonify({
        "success": True,
        "reminder": reminder_row(reminder, plant_service.get_plants(), now),
    }), 201


@reminders_bp.route("/<reminder_id>", methods=["GET"])
@require_auth
def view(reminder_id):
    """View a single reminder."""
    if not is_valid_uuid(reminder_id):
        return error_response("Invalid reminder ID.")

    reminder = reminder_service.get_reminder(reminder_id)
    if not reminder:
        return error_response("Reminder not found.", 404)

    return jsonify({
        "success": True,
        "reminder": reminder_row(reminder, plant_service.get_plants(), datetime.now()),
    })


@reminders_bp.route("/<reminder_id>", methods=["DELETE"])
@require_auth
def delete(reminder_id):
    """Delete a reminder and cancel its notification."""
    if not is_valid_uuid(reminder_id):
        return error_response("Invalid reminder ID.")

    success, error = reminder_service.delete_reminder(reminder_id)
    if not success:
        return error_response(error, 404 if error == "Reminder not found." else 500)

    return jsonify({"success": True})
