from __future__ import annotations

import enum
from typing import Any, Optional


class ValueKind(enum.Enum):
    """Shape of a value taken from a parsed JSON document."""

    NULL = "null"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    RECORD = "record"


def classify(value: Any) -> ValueKind:
    if value is None:
        return ValueKind.NULL
    if isinstance(value, dict):
        return ValueKind.RECORD
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.SCALAR


def is_missing(value: Any) -> bool:
    """None and blank strings count as unresolved. Numeric zero does not."""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def to_float(value: Any) -> Optional[float]:
    """Numbers pass through, strings are parsed. Returns None when unparsable."""
    # booleans are not amounts
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        return None
