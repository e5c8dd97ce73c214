"""Forecast discussion bulletin data model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Bulletin:
    """A single Area Forecast Discussion for one issuing office.

    Mirrors the ``properties`` object returned by the discussion endpoint:
    ``{"properties": {"office", "officeName", "text", "updated", "issuedTime"}}``.
    """

    office: str
    text: str = ""
    updated: Optional[Union[str, datetime]] = None
    office_name: Optional[str] = None
    issued_time: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Office name for headers, falling back to the office code."""
        return self.office_name or self.office

    @property
    def has_text(self) -> bool:
        return bool(self.text and self.text.strip())

    def to_dict(self) -> Dict[str, Any]:
        """Convert bulletin to the endpoint payload shape."""
        updated = self.updated
        if isinstance(updated, datetime):
            updated = updated.isoformat()

        properties: Dict[str, Any] = {
            "office": self.office,
            "text": self.text,
            "updated": updated,
        }
        if self.office_name:
            properties["officeName"] = self.office_name
        if self.issued_time:
            properties["issuedTime"] = self.issued_time
        return {"properties": properties}

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Bulletin"]:
        """Create bulletin from an endpoint payload.

        Returns None when the payload has no ``properties`` mapping.
        """
        if not isinstance(payload, dict):
            return None
        properties = payload.get("properties")
        if not isinstance(properties, dict):
            return None

        return cls(
            office=_string(properties.get("office")) or "",
            text=_string(properties.get("text")) or "",
            updated=properties.get("updated"),
            office_name=_string(properties.get("officeName")),
            issued_time=_string(properties.get("issuedTime")),
        )


def _string(value: Any) -> Optional[str]:
    """Return non-empty string values; anything else counts as missing."""
    if isinstance(value, str) and value:
        return value
    return None
