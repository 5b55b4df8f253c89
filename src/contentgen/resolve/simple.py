from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from contentgen.config.models import ConfigOptions, PlaceholderMapping
from contentgen.errors import PlaceholderNotFound, StrictResolutionFailure
from contentgen.resolve.chain import first_found
from contentgen.sources import DocumentStore

logger = logging.getLogger(__name__)


class SimpleResolver:
    """
    Single-pass resolver: primary lookup, then fallbacks.

    Failure policy is global rather than per mapping: strict mode raises
    on the first unresolved placeholder, otherwise options.defaultValue
    is used. Conditions, calculations, formatters and parent validation
    are ignored.
    """

    def __init__(
        self,
        store: DocumentStore,
        mappings: Sequence[PlaceholderMapping],
        options: Optional[ConfigOptions] = None,
    ) -> None:
        self.store = store
        self.mappings: List[PlaceholderMapping] = list(mappings)
        self.options = options if options is not None else ConfigOptions()

    def resolve_all(self) -> Dict[str, Any]:
        if self.options.enable_logging:
            logger.info("Resolving %d placeholders", len(self.mappings))
        return {m.placeholder: self.resolve(m) for m in self.mappings}

    def resolve(self, mapping: PlaceholderMapping) -> Any:
        suppliers = [("primary", lambda: self.store.resolve_value(mapping.source, mapping.json_path))]
        suppliers += [
            (fb.source, lambda fb=fb: self.store.resolve_value(fb.source, fb.json_path))
            for fb in mapping.fallback_sources
        ]
        label, value = first_found(suppliers)
        if value is not None:
            if self.options.enable_logging and label != "primary":
                logger.debug("Resolved '%s' from fallback source '%s'", mapping.placeholder, label)
            return value

        if self.options.strict_mode:
            raise StrictResolutionFailure(mapping.placeholder)

        if self.options.enable_logging:
            logger.warning(
                "Could not resolve placeholder '%s', using default value: '%s'",
                mapping.placeholder, self.options.default_value,
            )
        return self.options.default_value

    def resolve_placeholder(self, name: str) -> Any:
        mapping = next((m for m in self.mappings if m.placeholder == name), None)
        if mapping is None:
            if self.options.strict_mode:
                raise PlaceholderNotFound(name)
            logger.warning("No mapping found for placeholder: %s", name)
            return self.options.default_value
        return self.resolve(mapping)
