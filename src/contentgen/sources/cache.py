from __future__ import annotations

import threading
from typing import Any, Dict, Optional


class DocumentCache:
    """
    Process-local, load-once store of parsed documents keyed by source name.

    Reads are plain dict lookups. Writes and clears are serialized; a
    document is only inserted once fully parsed, so no entry is ever
    partially visible. Two threads missing on the same key may both load
    it; the last write wins. No eviction beyond clear().
    """

    def __init__(self) -> None:
        self._docs: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, name: str, default: Optional[Any] = None) -> Optional[Any]:
        return self._docs.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self._docs

    def put(self, name: str, document: Any) -> None:
        with self._lock:
            self._docs[name] = document

    def clear(self) -> None:
        # swap rather than mutate so readers holding the old dict are unaffected
        with self._lock:
            self._docs = {}

    def __len__(self) -> int:
        return len(self._docs)
