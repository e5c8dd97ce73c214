"""Utility functions for BoatSafe."""

import re
from datetime import datetime, timezone
from typing import Any, Optional

LOCAL_HOST_MARKERS = ("localhost", "127.0.0.1")
OFFICE_CODE_PATTERN = re.compile(r"[A-Za-z]{3}")


def is_local_origin(origin: Optional[str]) -> bool:
    """Check whether a site origin points at a local development server."""
    if not origin:
        return False
    return any(marker in origin for marker in LOCAL_HOST_MARKERS)


def is_valid_office(office: Optional[str]) -> bool:
    """Check whether a value looks like a three-letter forecast office code."""
    return bool(office) and OFFICE_CODE_PATTERN.fullmatch(office) is not None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a bulletin timestamp into an aware datetime.

    Accepts datetime objects, ISO-8601 strings (with or without a trailing
    ``Z``) and epoch seconds. Naive values are assumed to be UTC.

    Returns:
        Aware datetime, or None if the value can't be interpreted
    """
    if value is None or isinstance(value, bool):
        return None

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)):
            parsed = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            parsed = datetime.fromisoformat(re.sub(r"Z$", "+00:00", stripped))
        else:
            return None
    except (ValueError, OverflowError, OSError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def strip_tags(markup: str) -> str:
    """Remove HTML tags from a fragment, leaving the visible text."""
    return re.sub(r"<[^>]+>", "", markup or "")
