"""
Centralized configuration for all environments.

Select a config by setting:
  APP_CONFIG=aquamate.config.DevConfig      # local dev
  APP_CONFIG=aquamate.config.ProdConfig     # production (default if unset)
  APP_CONFIG=aquamate.config.TestConfig     # pytest

Notes:
- SECRET_KEY is read from FLASK_SECRET_KEY
- Device storage lives in a single JSON file under AQUAMATE_DATA_DIR.
- Rate limiting uses Flask-Limiter v3 keys (RATELIMIT_*).
"""

from __future__ import annotations
import os
import secrets


class BaseConfig:
    # Secrets & basics: generate a random key if env var is missing so dev/test
    # never runs with an empty string
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or secrets.token_hex(32)
    DEBUG = False
    TESTING = False

    # Device storage (UserDefaults-style key-value file)
    AQUAMATE_DATA_DIR = os.getenv("AQUAMATE_DATA_DIR", os.path.join(os.getcwd(), "instance"))
    STORAGE_FILENAME = "defaults.json"
    STORAGE_CACHE_TTL_SECONDS = int(os.getenv("STORAGE_CACHE_TTL_SECONDS", "300"))
    STORAGE_CACHE_MAX_ENTRIES = 64

    # Mock authentication
    AUTH_DEMO_EMAIL = os.getenv("AUTH_DEMO_EMAIL", "user@aquamate.com")
    AUTH_DEMO_PASSWORD = os.getenv("AUTH_DEMO_PASSWORD", "123456")
    AUTH_SIMULATED_DELAY_SECONDS = float(os.getenv("AUTH_SIMULATED_DELAY_SECONDS", "1.0"))
    AUTH_MIN_PASSWORD_LENGTH = 6

    # Local notifications
    NOTIFICATIONS_ENABLED = os.getenv("NOTIFICATIONS_ENABLED", "true").lower() == "true"
    # Answer the "device" gives to the one-time permission prompt
    NOTIFICATIONS_PERMISSION = os.getenv("NOTIFICATIONS_PERMISSION", "granted").strip().lower()
    NOTIFICATIONS_RESTORE_ON_STARTUP = True

    # Flask-Limiter v3
    RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "60 per minute; 2000 per day")
    LOGIN_RATE_LIMIT = "10 per minute; 100 per hour"  # Rate limit for login/register attempts

    # Plant form bounds
    WATERING_FREQUENCY_MIN_DAYS = 1
    WATERING_FREQUENCY_MAX_DAYS = 14

    # Misc
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"


class ProdConfig(BaseConfig):
    """Production settings (selected by default if APP_CONFIG is unset)."""
    pass


class DevConfig(BaseConfig):
    """Developer-friendly settings."""
    ENV = "development"
    DEBUG = True
    # Don't make developers wait on the fake login spinner
    AUTH_SIMULATED_DELAY_SECONDS = float(os.getenv("AUTH_SIMULATED_DELAY_SECONDS", "0.2"))
    # Relaxed rate limits for development/testing
    LOGIN_RATE_LIMIT = "100 per minute; 500 per hour"


class TestConfig(BaseConfig):
    """CI/pytest settings."""
    TESTING = True
    DEBUG = True
    # Usually disable the limiter in tests to avoid flakiness
    RATELIMIT_ENABLED = False
    AUTH_SIMULATED_DELAY_SECONDS = 0.0
    NOTIFICATIONS_RESTORE_ON_STARTUP = False
