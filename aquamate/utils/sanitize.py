"""
Data sanitization helpers for privacy-safe logging.

Functions here strip or mask PII so it can be safely written to logs
without exposing sensitive user data.
"""

from __future__ import annotations
from typing import Dict


def mask_email(email: str) -> str:
    """Mask email for safe logging (e.g., 'j***@example.com').

    Keeps the first character of the local part and the full domain.
    """
    if not email or "@" not in email:
        return "***"
    local, domain = email.rsplit("@", 1)
    return f"{local[0]}***@{domain}" if local else f"***@{domain}"


def mask_profile(profile: Dict[str, str]) -> str:
    """One-line summary of a profile with names and age redacted."""
    parts = []
    for key, value in profile.items():
        if not value:
            continue
        if key == "email":
            parts.append(f"email={mask_email(value)}")
        elif key == "plantsCount":
            parts.append(f"plantsCount={value}")
        else:
            parts.append(f"{key}=***")
    return ", ".join(parts) or "(empty)"
