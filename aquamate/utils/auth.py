"""
Authentication utilities and decorators for route protection.

Provides:
- @require_auth: Decorator to require a signed-in session
- enforce_ajax_for_mutations: before_request hook guarding state changes
- Session helpers that cache the session flag on the request context
"""

from __future__ import annotations
from functools import wraps
from typing import Optional, Dict, Any
from flask import g, jsonify, request
from aquamate.services import auth as auth_service


def get_current_session() -> Optional[Dict[str, Any]]:
    """
    Get the signed-in session flag.

    Returns:
        Session dict with email, user_name, signed_in_at, or None if signed out
    """
    # Check if session already loaded in request context
    if hasattr(g, "aquamate_session"):
        return g.aquamate_session

    g.aquamate_session = auth_service.get_session()
    return g.aquamate_session


def is_authenticated() -> bool:
    """Check if the user is currently signed in."""
    return get_current_session() is not None


def require_auth(f):
    """
    Decorator to require a signed-in session for a route.

    Signed-out callers get a 401 JSON response instead of the view.

    Usage:
        @bp.route('/reminders')
        @require_auth
        def list_reminders():
            ...
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_authenticated():
            return jsonify({
                "success": False,
                "error": "Please sign in to access this page.",
            }), 401

        return f(*args, **kwargs)

    return decorated_function


def enforce_ajax_for_mutations():
    """Enforce X-Requested-With header on all state-changing requests.

    HTML forms and cross-origin requests without CORS cannot set custom
    headers, so requiring one on POST/PUT/DELETE/PATCH blocks CSRF.
    Register with `bp.before_request(enforce_ajax_for_mutations)`.
    """
    if request.method in ("POST", "PUT", "DELETE", "PATCH"):
        if request.headers.get("X-Requested-With") != "XMLHttpRequest":
            return jsonify({
                "success": False,
                "error": "Invalid request. Please refresh the page and try again."
            }), 403
    return None
