"""Profile persistence: one cached mapping in device storage."""

from __future__ import annotations
from typing import Dict
import logging
from flask import current_app, has_app_context
from aquamate.constants import PROFILE_FIELDS, PROFILE_STORAGE_KEY
from aquamate.services.storage import get_store
from aquamate.utils.sanitize import mask_profile

logger = logging.getLogger(__name__)


def empty_profile() -> Dict[str, str]:
    return {field: "" for field in PROFILE_FIELDS}


def load_profile() -> Dict[str, str]:
    """Saved profile merged over empty defaults; unknown keys are dropped."""
    profile = empty_profile()
    saved = get_store().get(PROFILE_STORAGE_KEY)
    if isinstance(saved, dict):
        profile.update({k: str(v) for k, v in saved.items() if k in profile and v is not None})
    return profile


def save_profile(profile: Dict[str, str]) -> bool:
    """Overwrite the cached profile. Returns False (and logs) if the write fails."""
    data = {field: profile.get(field, "") for field in PROFILE_FIELDS}
    try:
        get_store().set(PROFILE_STORAGE_KEY, data)
    except OSError as e:
        message = f"Failed to save profile: {e}"
        if has_app_context():
            current_app.logger.error(message)
        else:
            logger.error(message)
        return False

    if has_app_context():
        current_app.logger.info(f"Profile saved: {mask_profile(data)}")
    return True
