from .cache import DocumentCache
from .query import query
from .store import DocumentStore

__all__ = [
    "DocumentCache",
    "DocumentStore",
    "query",
]
