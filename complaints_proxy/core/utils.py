"""
EEU Complaints Proxy - Shared utilities.

Pure functions used across the package. No imports from other
complaints_proxy modules.
"""

from __future__ import annotations

from datetime import datetime, timezone


def iso_timestamp(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a ``Z`` suffix.

    Matches what the browser's ``Date.prototype.toISOString`` produces, so
    the frontend parses proxy timestamps and GAS timestamps the same way.
    """
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def utc_now_iso() -> str:
    return iso_timestamp(datetime.now(timezone.utc))
