"""
Profile routes.

The profile is a flat mapping of strings cached in device storage; saving
overwrites it whole.
"""

from __future__ import annotations
from flask import Blueprint, request, jsonify
from aquamate.services import profile as profile_service
from aquamate.utils.auth import enforce_ajax_for_mutations, require_auth
from aquamate.utils.errors import error_response, GENERIC_MESSAGES
from aquamate.utils.validation import validate_profile_inputs

profile_bp = Blueprint("profile", __name__, url_prefix="/api/v1/profile")
profile_bp.before_request(enforce_ajax_for_mutations)


@profile_bp.route("", methods=["GET"])
@require_auth
def show():
    return jsonify({"success": True, "profile": profile_service.load_profile(), "plan": "free"})


@profile_bp.route("", methods=["PUT", "POST"])
@require_auth
def save():
    """
    Save the profile.

    Request body (JSON):
        {"fullName", "userName", "email", "age", "plantsCount"}
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return error_response(GENERIC_MESSAGES["request"])

    profile, error = validate_profile_inputs(data)
    if error:
        return error_response(error)

    if not profile_service.save_profile(profile):
        return error_response(GENERIC_MESSAGES["storage"], 500)

    return jsonify({"success": True, "profile": profile, "message": "Profile saved"})
