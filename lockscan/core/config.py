"""Environment-driven settings.

All knobs are read lazily so tests can override them with ``patch.dict``.
"""

from __future__ import annotations

import os

import structlog

log = structlog.get_logger("lockscan.config")

_DEFAULT_SCAN_WORKERS = 1
_DEFAULT_OSV_BATCH_SIZE = 100


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        log.warning("config.invalid_int", key=key, value=raw, default=default)
        return default
    return value if value > 0 else default


def log_level() -> str:
    return os.environ.get("LOCKSCAN_LOG_LEVEL", "INFO").upper()


def log_format() -> str:
    return os.environ.get("LOCKSCAN_LOG_FORMAT", "console").lower()


def scan_workers() -> int:
    """Default number of threads used to parse discovered lockfiles."""
    return _env_int("LOCKSCAN_SCAN_WORKERS", _DEFAULT_SCAN_WORKERS)


def osv_batch_size() -> int:
    """Maximum number of queries per OSV ``querybatch`` request body."""
    return _env_int("LOCKSCAN_OSV_BATCH_SIZE", _DEFAULT_OSV_BATCH_SIZE)
