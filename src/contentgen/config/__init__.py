"""
Configuration models and loader.

Exports the public API:
- ContentGenConfig and its parts
- load_config / config_from_dict
"""
from .models import (
    Condition,
    ConditionalSelection,
    ConfigOptions,
    ContentGenConfig,
    CurrencyFormatterConfig,
    CustomCalculation,
    DataSourceSpec,
    DateFormatterConfig,
    FallbackSource,
    FormatterConfig,
    FormatterDefinition,
    NumberFormatterConfig,
    PlaceholderMapping,
)
from .load import config_from_dict, load_config
