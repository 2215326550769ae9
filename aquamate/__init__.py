"""
Application factory and global configuration.

Creates the Flask app, initializes device storage, the plant list and the
notification scheduler, applies security headers, configures rate limiting,
and registers blueprints. This file keeps startup/config concerns together
and avoids domain logic here.
"""

from __future__ import annotations
import atexit
import os
from flask import Flask, Response, jsonify
from dotenv import load_dotenv  # <-- ensure .env is loaded for local dev
from .extensions import limiter, notifications
from .routes.api import api_bp
from .routes.auth import auth_bp
from .routes.plants import plants_bp
from .routes.profile import profile_bp
from .routes.reminders import reminders_bp
from .services import plants as plant_service
from .services import reminders as reminder_service
from .services import storage
from .utils.errors import sanitize_error

VALID_PERMISSION_ANSWERS = {"granted", "denied"}


def _validate_config(app: Flask) -> None:
    """
    Validate settings that would otherwise fail silently at runtime.

    Raises RuntimeError if the configuration cannot work:
    - NOTIFICATIONS_PERMISSION must be "granted" or "denied"
    - AQUAMATE_DATA_DIR must be creatable and writable
    - AUTH_SIMULATED_DELAY_SECONDS must not be negative
    """
    errors = []

    permission = app.config.get("NOTIFICATIONS_PERMISSION", "granted")
    if permission not in VALID_PERMISSION_ANSWERS:
        errors.append(
            f"NOTIFICATIONS_PERMISSION must be one of {sorted(VALID_PERMISSION_ANSWERS)}, got {permission!r}."
        )

    data_dir = app.config.get("AQUAMATE_DATA_DIR", "")
    try:
        os.makedirs(data_dir, exist_ok=True)
        if not os.access(data_dir, os.W_OK):
            errors.append(f"AQUAMATE_DATA_DIR is not writable: {data_dir}")
    except OSError as e:
        errors.append(f"AQUAMATE_DATA_DIR cannot be created ({data_dir}): {e}")

    if app.config.get("AUTH_SIMULATED_DELAY_SECONDS", 0) < 0:
        errors.append("AUTH_SIMULATED_DELAY_SECONDS cannot be negative.")

    if errors:
        error_msg = "\n\n[ERROR] CONFIGURATION VALIDATION FAILED:\n\n" + "\n\n".join(f"  * {err}" for err in errors)
        raise RuntimeError(error_msg)


def create_app(config_overrides: dict | None = None) -> Flask:
    # Load .env early (for local dev)
    # override=False so real env vars are not overwritten by a stale .env file
    load_dotenv(override=False)

    app = Flask(__name__)

    # --- Load central config.py first ---
    # Allow APP_CONFIG to override (e.g., aquamate.config.DevConfig)
    cfg_path = os.getenv("APP_CONFIG", "aquamate.config.ProdConfig")
    try:
        app.config.from_object(cfg_path)
    except (ImportError, AttributeError) as e:
        app.logger.warning(f"Could not load config object {cfg_path}: {e}")

    if config_overrides:
        app.config.update(config_overrides)

    _validate_config(app)

    limiter.init_app(app)

    if not app.config.get("RATELIMIT_ENABLED", True):
        limiter.enabled = False

    # Device storage, in-memory plants, notification center
    storage.init_storage(app)
    plant_service.init_plants(app)
    notifications.init_app(app)

    # The OS keeps pending notifications across launches; our scheduler
    # is in-memory, so re-arm whatever is still in the future.
    if app.config.get("NOTIFICATIONS_RESTORE_ON_STARTUP", True) and notifications.running:
        with app.app_context():
            plants = plant_service.get_plants()

            def plant_name_for(reminder):
                plant = reminder_service.plant_for(reminder, plants)
                return plant["name"] if plant else None

            notifications.restore(reminder_service.load_reminders(), plant_name_for)

    # Shutdown scheduler gracefully on app exit
    atexit.register(notifications.shutdown)

    @app.after_request
    def apply_security_headers(resp: Response) -> Response:
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Cache-Control"] = "no-store"
        return resp

    @app.errorhandler(404)
    def not_found(_error):
        return jsonify({"success": False, "error": "The requested item was not found."}), 404

    @app.errorhandler(405)
    def method_not_allowed(_error):
        return jsonify({"success": False, "error": "Method not allowed."}), 405

    @app.errorhandler(OSError)
    def storage_failure(error):
        message = sanitize_error(error, "storage", "Device storage error")
        return jsonify({"success": False, "error": message}), 500

    @app.errorhandler(429)
    def rate_limited(_error):
        return jsonify({"success": False, "error": "Too many attempts. Please wait and try again."}), 429

    # Blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(plants_bp)
    app.register_blueprint(reminders_bp)
    app.register_blueprint(profile_bp)

    # Register CLI commands
    from aquamate.cli import clear_reminders_command, reminders_today_command
    app.cli.add_command(reminders_today_command)
    app.cli.add_command(clear_reminders_command)

    return app
