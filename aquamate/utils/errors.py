"""
Error handling utilities for sanitizing user-facing messages and logging.

Provides consistent error handling across the application:
- Sanitizes error messages to prevent information leakage
- Logs detailed error information for debugging
- Builds the JSON error envelope used by every route
"""

from __future__ import annotations
from typing import Tuple
from flask import Response, current_app, jsonify

# User-friendly generic error messages
GENERIC_MESSAGES = {
    "storage": "We couldn't save your changes. Please try again.",
    "validation": "The information provided is invalid. Please check and try again.",
    "not_found": "The requested item was not found.",
    "request": "Invalid request body.",
}


def sanitize_error(
    error: Exception,
    error_type: str = "storage",
    log_prefix: str = ""
) -> str:
    """
    Sanitize error message for user display and log full details.

    Args:
        error: The exception that occurred
        error_type: Type of error (storage, validation, not_found, request)
        log_prefix: Optional prefix for log message context

    Returns:
        User-friendly error message
    """
    error_message = str(error)
    log_message = f"{log_prefix}: {error_message}" if log_prefix else error_message

    if error_type in ["validation", "not_found", "request"]:
        # Expected errors (user mistakes), log as info
        current_app.logger.info(f"Expected error - {log_message}")
    else:
        # Unexpected errors (bugs, system issues), log as error with stack trace
        current_app.logger.error(f"Unexpected error - {log_message}", exc_info=True)

    return GENERIC_MESSAGES.get(error_type, GENERIC_MESSAGES["storage"])


def error_response(message: str, status: int = 400) -> Tuple[Response, int]:
    """JSON error envelope: {"success": false, "error": message}."""
    return jsonify({"success": False, "error": message}), status


def log_info(message: str, **context) -> None:
    """
    Log an info message with optional context.

    Examples:
        >>> log_info("Plant created", plant_name="Monstera")
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        message = f"{message} | Context: {context_str}"

    current_app.logger.info(message)
