"""
Plants routes.

Handles:
- Plant listing with name search
- Adding new plants
- Viewing an individual plant with its reminders
"""

from __future__ import annotations
from datetime import datetime
from flask import Blueprint, request, jsonify, current_app
from aquamate.constants import PLANT_CARE_TIPS
from aquamate.routes.reminders import reminder_row
from aquamate.services import plants as plant_service
from aquamate.services import reminders as reminder_service
from aquamate.utils.auth import enforce_ajax_for_mutations, require_auth
from aquamate.utils.errors import error_response, log_info, GENERIC_MESSAGES
from aquamate.utils.validation import is_valid_uuid, request_payload, validate_plant_inputs


plants_bp = Blueprint("plants", __name__, url_prefix="/api/v1/plants")
plants_bp.before_request(enforce_ajax_for_mutations)


@plants_bp.route("", methods=["GET"])
@require_auth
def index():
    """List plants, optionally filtered by ?q= (case-insensitive name match)."""
    plants = plant_service.filter_plants(plant_service.get_plants(), request.args.get("q"))
    return jsonify({"success": True, "plants": plants, "plant_count": len(plants)})


@plants_bp.route("", methods=["POST"])
@require_auth
def add():
    """
    Add a new plant to the collection.

    Request body: {"name", "image_name", "status", "watering_frequency_days"}
    """
    data = request_payload()
    if data is None:
        return error_response(GENERIC_MESSAGES["request"])

    payload, error = validate_plant_inputs(
        data,
        min_days=current_app.config.get("WATERING_FREQUENCY_MIN_DAYS", 1),
        max_days=current_app.config.get("WATERING_FREQUENCY_MAX_DAYS", 14),
    )
    if error:
        return error_response(error)

    plant, error = plant_service.add_plant(payload)
    if error:
        return error_response(error)

    log_info("Plant created", plant_id=plant["id"], plant_name=plant["name"])
    return jsonify({"success": True, "plant": plant}), 201


@plants_bp.route("/<plant_id>", methods=["GET"])
@require_auth
def view(plant_id):
    """A single plant with care tips and the reminders that point at it."""
    if not is_valid_uuid(plant_id):
        return error_response("Invalid plant ID.")

    plant = plant_service.get_plant(plant_id)
    if not plant:
        return error_response("Plant not found.", 404)

    now = datetime.now()
    plants = plant_service.get_plants()
    plant_reminders = [
        reminder_row(r, plants, now)
        for r in reminder_service.list_reminders()
        if r["plant_id"] == plant_id
    ]

    return jsonify({
        "success": True,
        "plant": plant,
        "watering": f"Every {plant['watering_frequency_days']} days",
        "care_tips": PLANT_CARE_TIPS,
        "reminders": plant_reminders,
    })
