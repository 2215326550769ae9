"""
Local key-value storage ("device storage").

A single JSON file holds a mapping of namespaced keys to whole values, in the
spirit of a mobile app's user defaults:
- get/set/remove operate on one key at a time
- set() overwrites the entire value for a key
- writes replace the file atomically (temp file + os.replace)

Reads are served from a small TTL cache that every write invalidates, so a
read that follows a write always observes it.
"""

from __future__ import annotations
from typing import Any, Dict, Optional
import copy
import json
import logging
import os
import tempfile
import threading
from cachetools import TTLCache
from flask import current_app, has_app_context

logger = logging.getLogger(__name__)

_MISSING = object()


def _safe_log_error(message: str) -> None:
    """Log through the Flask logger when available, module logger otherwise."""
    if has_app_context():
        current_app.logger.error(message)
    else:
        logger.error(message)


class LocalStore:
    """JSON-file backed key-value store."""

    def __init__(self, path: str, cache_ttl: int = 300, cache_size: int = 64):
        self.path = path
        self._lock = threading.RLock()
        self._cache: TTLCache = TTLCache(maxsize=cache_size, ttl=cache_ttl)

    # ------------------------------------------------------------------
    # File access
    # ------------------------------------------------------------------

    def _read_all(self) -> Dict[str, Any]:
        """Read the whole file. Missing or corrupt files read as empty."""
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            _safe_log_error(f"[Storage] Failed to read {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            _safe_log_error(f"[Storage] Ignoring {self.path}: top-level value is not an object")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path) or "."
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".defaults-", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get(self, key: str, default: Any = None) -> Any:
        """Return (a copy of) the value stored under key, or default if absent."""
        with self._lock:
            value = self._cache.get(key, _MISSING)
            if value is _MISSING:
                value = self._read_all().get(key)
                self._cache[key] = value
            return default if value is None else copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        """Overwrite the whole value stored under key."""
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)
            self._cache.pop(key, None)

    def remove(self, key: str) -> None:
        """Delete key if present."""
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)
            self._cache.pop(key, None)


# Global store instance (initialized once per app)
_store: Optional[LocalStore] = None


def init_storage(app) -> LocalStore:
    """
    Create the device store from app config.

    Call this from the Flask app factory.
    """
    global _store

    data_dir = app.config.get("AQUAMATE_DATA_DIR") or os.path.join(os.getcwd(), "instance")
    path = os.path.join(data_dir, app.config.get("STORAGE_FILENAME", "defaults.json"))

    _store = LocalStore(
        path,
        cache_ttl=app.config.get("STORAGE_CACHE_TTL_SECONDS", 300),
        cache_size=app.config.get("STORAGE_CACHE_MAX_ENTRIES", 64),
    )
    app.logger.info(f"[Storage] Using device storage at {path}")
    return _store


def get_store() -> LocalStore:
    """Get the global store, failing loudly if the app factory never ran."""
    if _store is None:
        raise RuntimeError("Device storage not initialized. Call init_storage(app) first.")
    return _store
