# contentgen/service.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from contentgen.config import ContentGenConfig, load_config
from contentgen.errors import TemplateNotFound
from contentgen.formatting import ValueFormatter
from contentgen.render import render_file, render_string
from contentgen.resolve import ResolutionPipeline, SimpleResolver
from contentgen.sources import DocumentCache, DocumentStore

logger = logging.getLogger(__name__)


class ContentGenerationService:
    """
    Wires a configuration into store, formatter and pipeline, and renders
    Jinja templates with the resolved context.

    Data source files and templates are located relative to ``base_path``.
    When caching is enabled every source is preloaded at construction, so a
    missing file fails here rather than halfway through a run.

    With ``simple=True`` the context comes from SimpleResolver instead: primary
    and fallback lookup only, unresolved placeholders handled by
    ``options.strictMode`` and ``options.defaultValue``.
    """

    def __init__(
        self,
        config: ContentGenConfig,
        base_path: str | Path = ".",
        *,
        cache: Optional[DocumentCache] = None,
        simple: bool = False,
    ) -> None:
        self.config = config
        self.base_path = Path(base_path)
        opts = config.options

        self.store = DocumentStore(
            config.data_sources,
            self.base_path,
            cache_enabled=opts.cache_data_sources,
            cache=cache,
        )
        self.formatter = ValueFormatter(config.formatters, enabled=opts.enable_formatters)
        self.pipeline = ResolutionPipeline(self.store, config.mappings, self.formatter, opts)
        self.resolver = (
            SimpleResolver(self.store, config.mappings, opts) if simple else self.pipeline
        )

        if opts.cache_data_sources:
            self.store.preload()

        logger.info(
            "Service initialized (config version %s, %d sources, %d mappings)",
            config.config_version, len(config.data_sources), len(config.mappings),
        )

    @classmethod
    def from_file(
        cls,
        config_path: str | Path,
        base_path: str | Path = ".",
        *,
        simple: bool = False,
    ) -> "ContentGenerationService":
        """Relative config paths are taken relative to ``base_path``."""
        config_path = Path(config_path)
        if not config_path.is_absolute():
            config_path = Path(base_path) / config_path
        config = load_config(config_path)
        logger.info("Loaded configuration version: %s", config.config_version)
        return cls(config, base_path, simple=simple)

    # ------------------------------------------------------------------
    # Context + rendering
    # ------------------------------------------------------------------
    def resolved_context(self) -> Dict[str, Any]:
        return self.resolver.resolve_all()

    def _template_path(self, template_path: str | Path) -> Path:
        p = Path(template_path)
        p = p if p.is_absolute() else self.base_path / p
        # checked before resolving so a bad path does not cost a full run
        if not p.is_file():
            raise TemplateNotFound(p)
        return p

    def generate_content(self, template_path: str | Path) -> str:
        logger.info("Generating content from template: %s", template_path)
        path = self._template_path(template_path)
        out = render_file(path, self.resolved_context())
        logger.info("Successfully generated content")
        return out

    def generate_content_from_string(self, template: str) -> str:
        logger.info("Generating content from template string")
        return render_string(template, self.resolved_context())

    def generate_content_with_context(
        self,
        template_path: str | Path,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Extra keys override resolved placeholders of the same name."""
        path = self._template_path(template_path)
        context = self.resolved_context()
        if additional_context:
            context.update(additional_context)
        return render_file(path, context)

    def generate_content_as_json(self, template_path: str | Path) -> Any:
        return json.loads(self.generate_content(template_path))

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------
    def clear_cache(self) -> None:
        self.store.clear_cache()

    def statistics(self) -> Dict[str, Any]:
        opts = self.config.options
        return {
            "configVersion": self.config.config_version,
            "dataSourceCount": len(self.config.data_sources),
            "mappingCount": len(self.config.mappings),
            "cachingEnabled": opts.cache_data_sources,
            "formattersEnabled": opts.enable_formatters,
            "conditionalSelectionEnabled": opts.enable_conditional_selection,
            "cacheStats": self.store.cache_stats(),
        }
