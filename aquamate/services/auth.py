"""
Mock authentication.

There is no identity provider: login checks a single demo credential from
config, and registration signs the user straight in once the form validates.
Both paths sleep for a configurable "server round trip" before answering.
The signed-in state is a session flag kept in device storage.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Tuple
from datetime import datetime
import time
from flask import current_app
from aquamate.constants import SESSION_STORAGE_KEY, PROFILE_STORAGE_KEY
from aquamate.services.storage import get_store
from aquamate.utils.sanitize import mask_email


def _simulate_round_trip() -> None:
    delay = float(current_app.config.get("AUTH_SIMULATED_DELAY_SECONDS", 0) or 0)
    if delay > 0:
        time.sleep(delay)


def _start_session(email: str, user_name: Optional[str] = None) -> Dict[str, Any]:
    session_flag = {
        "email": email.lower(),
        "user_name": user_name,
        "signed_in_at": datetime.now().isoformat(timespec="seconds"),
    }
    get_store().set(SESSION_STORAGE_KEY, session_flag)
    return session_flag


def login(email: str, password: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """
    Check credentials against the configured demo account.

    Email comparison is case-insensitive; the password must match exactly.

    Returns:
        Tuple of (session_flag, error_message)
    """
    _simulate_round_trip()

    demo_email = current_app.config.get("AUTH_DEMO_EMAIL", "")
    demo_password = current_app.config.get("AUTH_DEMO_PASSWORD", "")

    if email.lower() != demo_email.lower() or password != demo_password:
        current_app.logger.info(f"Failed login attempt for {mask_email(email)}")
        return None, "Invalid email or password."

    current_app.logger.info(f"User signed in: {mask_email(email)}")
    return _start_session(email), None


def register(email: str, password: str, user_name: str) -> Dict[str, Any]:
    """
    Complete a (validated) registration and sign the user in.

    Nothing is stored about the new account beyond the session flag.
    """
    _simulate_round_trip()
    current_app.logger.info(f"User registered: {mask_email(email)}")
    return _start_session(email, user_name)


def get_session() -> Optional[Dict[str, Any]]:
    """The current session flag, or None when signed out."""
    session_flag = get_store().get(SESSION_STORAGE_KEY)
    return session_flag if isinstance(session_flag, dict) else None


def is_signed_in() -> bool:
    return get_session() is not None


def logout() -> None:
    """Sign out: drop the session flag and the cached profile."""
    store = get_store()
    store.remove(SESSION_STORAGE_KEY)
    store.remove(PROFILE_STORAGE_KEY)
