"""UTC timestamp helpers used for response headers and health probes."""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now_isoformat() -> str:
    """Return the current time as ISO 8601 in UTC ending with ``Z``."""

    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
