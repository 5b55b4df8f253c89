from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from contentgen.config.models import CustomCalculation
from contentgen.values import ValueKind, classify, to_float

logger = logging.getLogger(__name__)


def _field_values(items: Sequence[Any], field: Optional[str]) -> List[float]:
    """Project records onto `field`; non-records and absent fields are dropped."""
    out: List[float] = []
    for item in items:
        if classify(item) is not ValueKind.RECORD:
            continue
        raw = item.get(field)
        if raw is None:
            continue
        number = to_float(raw)
        if number is None:
            logger.warning("Cannot convert to double: %s", raw)
            number = 0.0
        out.append(number)
    return out


def _sum(values: List[float]) -> float:
    return float(sum(values))


def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _min(values: List[float]) -> float:
    return min(values) if values else 0.0


def _max(values: List[float]) -> float:
    return max(values) if values else 0.0


REDUCERS: Dict[str, Callable[[List[float]], float]] = {
    "sum": _sum,
    "average": _average,
    "avg": _average,
    "min": _min,
    "max": _max,
}


def calculate(value: Any, calculation: CustomCalculation) -> Any:
    """
    Reduce a list of records to a scalar.

    count returns the length of the list itself; every other kind works
    on the float values of `calculation.field`. Anything that is not a
    list, or an unknown kind, is returned untouched.
    """
    if classify(value) is not ValueKind.SEQUENCE:
        logger.warning(
            "Custom calculation requires array value, got: %s", type(value).__name__
        )
        return value

    kind = (calculation.type or "").lower()
    try:
        if kind == "count":
            return len(value)
        reducer = REDUCERS.get(kind)
        if reducer is None:
            logger.warning("Unknown calculation type: %s", calculation.type)
            return value
        return reducer(_field_values(value, calculation.field))
    except Exception as e:
        logger.error("Error applying calculation %s: %s", calculation.type, e)
        return value
