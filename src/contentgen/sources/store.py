# contentgen/sources/store.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from contentgen.config.models import DataSourceSpec
from contentgen.errors import DataSourceNotFound, DataSourceParseError, FileMissing
from contentgen.sources.cache import DocumentCache
from contentgen.sources.query import query as _query

logger = logging.getLogger(__name__)

_NOT_CACHED = object()


class DocumentStore:
    """
    Loads named JSON documents and answers path queries against them.

    Source files are located relative to ``base_path``. With caching on,
    each source is parsed once and reused until clear_cache(); with caching
    off every load() re-reads the file.
    """

    def __init__(
        self,
        sources: Mapping[str, DataSourceSpec],
        base_path: str | Path = ".",
        *,
        cache_enabled: bool = True,
        cache: Optional[DocumentCache] = None,
    ) -> None:
        self.sources: Dict[str, DataSourceSpec] = dict(sources)
        self.base_path = Path(base_path)
        self.cache_enabled = cache_enabled
        self.cache = cache if cache is not None else DocumentCache()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def source_path(self, name: str) -> Path:
        spec = self.sources.get(name)
        if spec is None:
            raise DataSourceNotFound(name)
        return self.base_path / spec.file_path

    def load(self, name: str) -> Any:
        if self.cache_enabled:
            doc = self.cache.get(name, _NOT_CACHED)
            if doc is not _NOT_CACHED:
                logger.debug("Returning cached data source: %s", name)
                return doc

        path = self.source_path(name)
        logger.debug("Loading data source '%s' from: %s", name, path)
        if not path.is_file():
            raise FileMissing(f"Data source file not found: {path}", path)

        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise DataSourceParseError(
                f"Data source '{name}' at {path} is not valid JSON: {e}"
            ) from e

        if self.cache_enabled:
            self.cache.put(name, doc)
        logger.debug("Successfully loaded data source: %s", name)
        return doc

    def preload(self) -> None:
        """Eagerly load every configured source. A missing file is fatal."""
        logger.info("Preloading %d data sources", len(self.sources))
        for name in self.sources:
            self.load(name)
        logger.info("Successfully preloaded all data sources")

    # ------------------------------------------------------------------
    # Querying
    # ------------------------------------------------------------------
    @staticmethod
    def query(document: Any, path: Optional[str]) -> Any:
        return _query(document, path)

    def resolve_value(self, source: str, path: Optional[str]) -> Any:
        """
        load() + query(). An unknown source name is a miss (None) here,
        not an error; missing files still raise.
        """
        logger.debug("Resolving value from source '%s' with path '%s'", source, path)
        if source not in self.sources:
            logger.warning("Data source not found in configuration: %s", source)
            return None
        value = self.query(self.load(source), path)
        logger.debug("Resolved value: %s -> %r", path, value)
        return value

    # ------------------------------------------------------------------
    # Cache management
    # ------------------------------------------------------------------
    def clear_cache(self) -> None:
        self.cache.clear()
        logger.info("Data source cache cleared")

    def cache_stats(self) -> Dict[str, int]:
        return {
            "cachedSources": len(self.cache),
            "configuredSources": len(self.sources),
        }
