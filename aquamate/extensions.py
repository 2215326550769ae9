"""
Third-party extensions wiring.

Initializes shared extension instances so other modules can import
configured objects without circular dependencies.
"""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from aquamate.services.notifications import NotificationManager

# Limiter is initialized by create_app() with app config for storage/limits.
# Routes apply per-endpoint limits with @limiter.limit("X per minute") etc.

limiter = Limiter(key_func=get_remote_address)

# One notification center per process; create_app() calls init_app().
notifications = NotificationManager()
