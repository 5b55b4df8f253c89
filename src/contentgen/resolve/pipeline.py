# contentgen/resolve/pipeline.py

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence

from contentgen import aggregate
from contentgen.config.models import ConfigOptions, Condition, PlaceholderMapping
from contentgen.errors import (
    ContentGenError,
    MandatoryResolutionFailure,
    ParentCollectionEmpty,
    ParentCollectionNull,
    ParentValidationError,
    PlaceholderNotFound,
)
from contentgen.formatting import ValueFormatter
from contentgen.resolve.chain import Supplier, first_found
from contentgen.sources import DocumentStore
from contentgen.values import ValueKind, classify, is_missing

logger = logging.getLogger(__name__)


class ResolutionPipeline:
    """
    Turns placeholder mappings into a flat context dict.

    Per mapping, in order:
      1. parent collection validation (optional, fatal on null/empty)
      2. conditional selection (first matching condition wins)
      3. primary (source, path) lookup
      4. fallback sources, in order
      5. custom calculation
      6. formatting
      7. mandatory check, else default substitution

    Fail-fast: the first fatal error aborts the run and no partial
    context is returned. The pipeline keeps no state between runs.
    """

    def __init__(
        self,
        store: DocumentStore,
        mappings: Sequence[PlaceholderMapping],
        formatter: Optional[ValueFormatter] = None,
        options: Optional[ConfigOptions] = None,
    ) -> None:
        self.store = store
        self.mappings: List[PlaceholderMapping] = list(mappings)
        self.formatter = formatter if formatter is not None else ValueFormatter(enabled=False)
        self.options = options if options is not None else ConfigOptions()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def resolve_all(self) -> Dict[str, Any]:
        self._info("Resolving %d placeholders", len(self.mappings))

        context: Dict[str, Any] = {}
        for mapping in self.mappings:
            value = self.resolve(mapping)
            context[mapping.placeholder] = value
            self._debug("Resolved '%s' = '%s'", mapping.placeholder, value)

        self._info("Successfully resolved all placeholders")
        return context

    def resolve_placeholder(self, name: str) -> Any:
        for mapping in self.mappings:
            if mapping.placeholder == name:
                return self.resolve(mapping)
        raise PlaceholderNotFound(name)

    def resolve(self, mapping: PlaceholderMapping) -> Any:
        placeholder = mapping.placeholder

        if mapping.validate_parent_not_empty:
            self.validate_parent(mapping)

        label, value = first_found(self._suppliers(mapping))
        if label is not None:
            self._debug("Resolved '%s' using %s", placeholder, label)

        if value is not None and mapping.custom_calculation is not None:
            value = aggregate.calculate(value, mapping.custom_calculation)

        if value is not None and mapping.formatter is not None:
            value = self.formatter.format(value, mapping.formatter)

        if not is_missing(value):
            return value

        if mapping.mandatory:
            err = MandatoryResolutionFailure(placeholder, mapping.source, mapping.json_path)
            logger.error(str(err))
            raise err

        default = mapping.default_value if mapping.default_value is not None else self.options.default_value
        if self.options.enable_logging:
            logger.warning(
                "Could not resolve optional placeholder '%s', using default value: '%s'",
                placeholder, default,
            )
        return default

    # ------------------------------------------------------------------
    # Step 1: parent collection validation
    # ------------------------------------------------------------------
    def validate_parent(self, mapping: PlaceholderMapping) -> None:
        placeholder = mapping.placeholder
        parent_path = mapping.parent_collection_path

        if not parent_path:
            logger.warning(
                "validateParentNotEmpty is true but parentCollectionPath is not specified for '%s'",
                placeholder,
            )
            return

        try:
            parent = self.store.resolve_value(mapping.source, parent_path)
        except ContentGenError:
            raise
        except Exception as e:
            raise ParentValidationError(
                f"Error validating parent collection for placeholder '{placeholder}' "
                f"at path '{parent_path}': {e}",
                placeholder=placeholder,
                parent_path=parent_path,
                source=mapping.source,
            ) from e

        kind = classify(parent)
        if kind is ValueKind.NULL:
            err = ParentCollectionNull(placeholder, parent_path, mapping.source)
            logger.error(str(err))
            raise err
        if kind is ValueKind.SEQUENCE:
            if not parent:
                err = ParentCollectionEmpty(placeholder, parent_path, mapping.source)
                logger.error(str(err))
                raise err
            self._debug(
                "Parent collection validation passed for '%s'. Collection has %d elements.",
                placeholder, len(parent),
            )
            return

        logger.warning(
            "Parent collection at path '%s' is not a List, skipping empty validation for '%s'",
            parent_path, placeholder,
        )

    # ------------------------------------------------------------------
    # Steps 2-4: lazy lookup chain
    # ------------------------------------------------------------------
    def _suppliers(self, mapping: PlaceholderMapping) -> Iterator[Supplier]:
        selection = mapping.conditional_selection
        if (
            self.options.enable_conditional_selection
            and selection is not None
            and selection.enabled
        ):
            for cond in selection.conditions:
                yield (
                    f"condition '{cond.description or cond.json_path}'",
                    lambda cond=cond: self._match_condition(mapping, cond, selection.extract_first_element),
                )

        yield (
            f"source '{mapping.source}'",
            lambda: self.store.resolve_value(mapping.source, mapping.json_path),
        )

        # only reached when everything above came back empty
        if mapping.fallback_sources:
            self._debug(
                "Primary source failed for '%s', trying %d fallbacks",
                mapping.placeholder, len(mapping.fallback_sources),
            )
        for fb in mapping.fallback_sources:
            yield (
                f"fallback source '{fb.source}'",
                lambda fb=fb: self.store.resolve_value(fb.source, fb.json_path),
            )

    def _match_condition(self, mapping: PlaceholderMapping, cond: Condition, extract_first: bool) -> Any:
        try:
            value = self.store.resolve_value(mapping.source, cond.json_path)
        except Exception as e:
            self._debug("Condition failed: %s - %s", cond.json_path, e)
            return None

        if value is None:
            return None
        if extract_first and classify(value) is ValueKind.SEQUENCE:
            if not value:
                return None
            value = value[0]
        if cond.description:
            self._debug("Condition matched: %s", cond.description)
        return value

    # ------------------------------------------------------------------
    # Logging gated by options.enableLogging
    # ------------------------------------------------------------------
    def _info(self, msg: str, *args: Any) -> None:
        if self.options.enable_logging:
            logger.info(msg, *args)

    def _debug(self, msg: str, *args: Any) -> None:
        if self.options.enable_logging:
            logger.debug(msg, *args)
