"""
Null-safe path evaluation over parsed JSON documents.

Paths use the jsonpath-ng extended grammar (filters, recursive descent).
That grammar spells filter conjunction as a single `&`; the `&&` form is
accepted and rewritten. There is no disjunction operator.

Evaluation never raises: bad syntax, type mismatches and missing branches
all come back as None.

Result shaping:
  - definite paths (fields and single indices only) yield the matched value
  - indefinite paths (filters, wildcards, slices, ..) yield a list of matches
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Any, Optional

from jsonpath_ng.jsonpath import Child, Fields, Index, JSONPath, Root, This
from jsonpath_ng.ext import parse as _parse

logger = logging.getLogger(__name__)

# the ply-based parser keeps state between calls
_PARSE_LOCK = threading.Lock()


@lru_cache(maxsize=512)
def compile_path(path: str) -> JSONPath:
    with _PARSE_LOCK:
        return _parse(path.replace("&&", "&"))


def is_definite(expr: JSONPath) -> bool:
    if isinstance(expr, (Root, This)):
        return True
    if isinstance(expr, Child):
        return is_definite(expr.left) and is_definite(expr.right)
    if isinstance(expr, Fields):
        return len(expr.fields) == 1 and expr.fields[0] != "*"
    if isinstance(expr, Index):
        # jsonpath-ng >= 1.6 allows [0,2]
        return len(getattr(expr, "indices", [None])) == 1
    return False


def query(document: Any, path: Optional[str]) -> Any:
    if not path:
        return None
    try:
        expr = compile_path(path)
        matches = expr.find(document)
    except Exception as e:
        logger.debug("Path '%s' could not be evaluated: %s", path, e)
        return None

    values = [m.value for m in matches]
    if is_definite(expr):
        return values[0] if values else None
    return values
