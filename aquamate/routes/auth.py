"""
Authentication routes for login, registration, and logout.

Handles:
- Mock login against the demo credential
- Mock registration (validates, then signs the user in)
- Logout (clears session flag and cached profile)
- Current session endpoint
"""

from __future__ import annotations
from flask import Blueprint, jsonify, current_app
from aquamate.services import auth as auth_service
from aquamate.utils.auth import enforce_ajax_for_mutations, get_current_session, require_auth
from aquamate.utils.errors import error_response, GENERIC_MESSAGES
from aquamate.utils.validation import request_payload, validate_login_inputs, validate_registration_inputs
from aquamate.extensions import limiter


auth_bp = Blueprint("auth", __name__, url_prefix="/auth")
auth_bp.before_request(enforce_ajax_for_mutations)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(lambda: current_app.config["LOGIN_RATE_LIMIT"])  # Protect against brute force
def login():
    """
    Sign in with email and password.

    Request body: {"email": str, "password": str}
    """
    data = request_payload()
    if data is None:
        return error_response(GENERIC_MESSAGES["request"])

    payload, error = validate_login_inputs(data)
    if error:
        return error_response(error)

    session_flag, error = auth_service.login(payload["email"], payload["password"])
    if error:
        return error_response(error, 401)

    return jsonify({"success": True, "session": session_flag})


@auth_bp.route("/register", methods=["POST"])
@limiter.limit(lambda: current_app.config["LOGIN_RATE_LIMIT"])  # Protect against bot signups
def register():
    """
    Create an account (mock) and sign in.

    Request body: {"email", "password", "confirm_password", "user_name"}
    """
    data = request_payload()
    if data is None:
        return error_response(GENERIC_MESSAGES["request"])

    payload, error = validate_registration_inputs(
        data,
        min_password_length=current_app.config.get("AUTH_MIN_PASSWORD_LENGTH", 6),
    )
    if error:
        return error_response(error)

    session_flag = auth_service.register(payload["email"], payload["password"], payload["user_name"])
    return jsonify({"success": True, "session": session_flag}), 201


@auth_bp.route("/logout", methods=["POST"])
@require_auth
def logout():
    """Log out and clear local credentials."""
    auth_service.logout()
    return jsonify({"success": True})


@auth_bp.route("/session")
def session_info():
    """Current session flag (null when signed out)."""
    session_flag = get_current_session()
    return jsonify({
        "success": True,
        "is_authenticated": session_flag is not None,
        "session": session_flag,
    })
