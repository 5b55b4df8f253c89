from __future__ import annotations

from typing import Any, Callable, Iterable, Optional, Tuple

# (label, supplier); label only feeds log messages
Supplier = Tuple[str, Callable[[], Any]]


def first_found(suppliers: Iterable[Supplier]) -> Tuple[Optional[str], Any]:
    """
    Call suppliers in order and stop at the first non-None result.

    Returns (label, value) of the winner, or (None, None) if every supplier
    came back empty. Suppliers are only invoked when reached.
    """
    for label, supplier in suppliers:
        value = supplier()
        if value is not None:
            return label, value
    return None, None
