"""Short, human-readable timestamps for discussion headers."""

import logging
from typing import Any

import pytz

from boatsafe.utils import parse_timestamp

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class DateFormatter:
    """Formats bulletin timestamps as ``Mon D, HH:MM AM`` in a display timezone."""

    def __init__(self, timezone_name: str = "America/Anchorage"):
        self.tz = pytz.timezone(timezone_name)

    def format(self, value: Any) -> str:
        """Format a timestamp, returning "Unknown" for anything unusable."""
        try:
            parsed = parse_timestamp(value)
            if parsed is None:
                return UNKNOWN
            local = parsed.astimezone(self.tz)
            return f"{local:%b} {local.day}, {local:%I:%M %p}"
        except Exception as e:
            logger.debug(f"Could not format timestamp {value!r}: {e}")
            return UNKNOWN
