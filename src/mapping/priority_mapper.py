from __future__ import annotations

from typing import Optional

DEFAULT_PRIORITY = "Trung bình"

# AI vocabulary (three levels) -> domain vocabulary
PRIORITY_MAP = {
    "low": "Thấp",
    "medium": "Trung bình",
    "high": "Cao",
}


def map_priority(label: Optional[str]) -> str:
    """Total mapping: unknown or missing labels fall back to the medium level."""
    if not label:
        return DEFAULT_PRIORITY
    return PRIORITY_MAP.get(label.strip().lower(), DEFAULT_PRIORITY)
