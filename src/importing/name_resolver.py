from __future__ import annotations

import unicodedata
from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def fold_name(name: str) -> str:
    """Comparison key for entity names: NFC, trimmed, case-folded."""
    return unicodedata.normalize("NFC", name).strip().casefold()


def resolve(name: Optional[str], candidates: Iterable[T]) -> Optional[T]:
    """Return the first candidate whose name equals `name` ignoring case."""
    if not name or not name.strip():
        return None

    key = fold_name(name)
    for candidate in candidates:
        if fold_name(candidate.name) == key:
            return candidate
    return None
