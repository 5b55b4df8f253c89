# contentgen/formatting/formatter.py

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from babel.numbers import format_currency, format_decimal, validate_currency

from contentgen.config.models import FormatterConfig, FormatterDefinition
from contentgen.formatting.dates import parse_temporal, render_temporal
from contentgen.formatting.locales import parse_locale
from contentgen.values import to_float

logger = logging.getLogger(__name__)


class ValueFormatter:
    """
    Display formatting for resolved values: date, currency and number.

    Every per-mapping field in a FormatterDefinition overrides the matching
    global default from FormatterConfig. Formatting is never fatal: parse
    problems and unexpected errors hand back the original value.
    """

    def __init__(self, config: Optional[FormatterConfig] = None, enabled: bool = True) -> None:
        self.config = config if config is not None else FormatterConfig()
        self.enabled = enabled

    def format(self, value: Any, definition: Optional[FormatterDefinition]) -> Any:
        if not self.enabled or definition is None or value is None:
            return value

        kind = (definition.type or "").lower()
        try:
            if kind == "date":
                return self.format_date(value, definition)
            if kind == "currency":
                return self.format_currency(value, definition)
            if kind == "number":
                return self.format_number(value, definition)
        except Exception as e:
            logger.error("Error formatting value with %s: %s", definition.type, e)
            return value

        logger.warning("Unknown formatter type: %s", definition.type)
        return value

    # ------------------------------------------------------------------
    # Kinds
    # ------------------------------------------------------------------
    def format_date(self, value: Any, definition: FormatterDefinition) -> str:
        cfg = self.config.date
        input_format = definition.input_format or cfg.default_input_format
        output_format = definition.output_format or cfg.default_output_format
        locale = parse_locale(definition.locale or cfg.locale)

        text = str(value)
        try:
            parsed = parse_temporal(text, input_format)
        except ValueError as e:
            logger.warning("Failed to parse date '%s' with format '%s': %s", text, input_format, e)
            return text
        return render_temporal(parsed, output_format, locale)

    def format_currency(self, value: Any, definition: FormatterDefinition) -> str:
        cfg = self.config.currency
        code = definition.currency_code or cfg.default_currency
        locale = parse_locale(definition.locale or cfg.default_locale)

        amount = to_float(value)
        if amount is None:
            logger.warning("Cannot parse '%s' as currency", value)
            return str(value)

        validate_currency(code)
        places = definition.decimal_places if definition.decimal_places is not None else cfg.decimal_places
        pattern = copy.copy(locale.currency_formats["standard"])
        pattern.frac_prec = (places, places)
        return format_currency(amount, code, format=pattern, locale=locale, currency_digits=False)

    def format_number(self, value: Any, definition: FormatterDefinition) -> str:
        cfg = self.config.number
        locale = parse_locale(definition.locale or cfg.default_locale)

        number = to_float(value)
        if number is None:
            logger.warning("Cannot parse '%s' as number", value)
            return str(value)

        grouping = definition.use_grouping if definition.use_grouping is not None else cfg.use_grouping
        pattern = copy.copy(locale.decimal_formats[None])
        # fraction digits are a global policy, no per-mapping override
        pattern.frac_prec = (cfg.minimum_fraction_digits, cfg.maximum_fraction_digits)
        return format_decimal(number, format=pattern, locale=locale, group_separator=grouping)
