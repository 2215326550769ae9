"""
Defines JSON endpoints used by the home screen.

Endpoints:
- /home: Greeting, today's care, plants (with ?q= search), and a tip
- /notifications: Pending and delivered local notifications
"""

from datetime import datetime
from flask import Blueprint, request, jsonify
from ..constants import CARE_TIP, GREETING_TEXT, TODAY_PLACEHOLDER_CARDS
from ..extensions import notifications
from ..routes.reminders import reminder_row
from ..services import plants as plant_service
from ..services import profile as profile_service
from ..services import reminders as reminder_service
from ..utils.auth import enforce_ajax_for_mutations, get_current_session, require_auth


api_bp = Blueprint("api", __name__, url_prefix="/api/v1")
api_bp.before_request(enforce_ajax_for_mutations)


@api_bp.route("/home")
@require_auth
def home():
    """
    Everything the home tab shows in one payload.

    Shows:
    - Greeting (profile user name, then session user name, then "User")
    - Today's reminders, or placeholder care cards when there are none
    - Plants filtered by ?q=
    - Tip card
    """
    now = datetime.now()
    plants = plant_service.get_plants()

    todays = reminder_service.todays_reminders(reminder_service.load_reminders(), now)
    rows = [reminder_row(r, plants, now) for r in todays]

    profile = profile_service.load_profile()
    session_flag = get_current_session() or {}
    name = profile.get("userName") or session_flag.get("user_name") or "User"

    return jsonify({
        "success": True,
        "greeting": {"title": f"Hi {name} 👋", "subtitle": GREETING_TEXT},
        "today": {
            "date": now.date().isoformat(),
            "reminders": rows,
            "placeholders": [] if rows else TODAY_PLACEHOLDER_CARDS,
        },
        "plants": plant_service.filter_plants(plants, request.args.get("q")),
        "tip": CARE_TIP,
    })


@api_bp.route("/notifications")
@require_auth
def notifications_status():
    """Pending (scheduled) and delivered notifications."""
    return jsonify({
        "success": True,
        "permission_requested": notifications.permission_requested,
        "pending": notifications.pending(),
        "delivered": notifications.delivered(),
    })
