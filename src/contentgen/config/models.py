from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Model(BaseModel):
    # camelCase on disk, snake_case in code; frozen once loaded
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")


# ---------------------------------------------------------------------------
# Data sources
# ---------------------------------------------------------------------------

class DataSourceSpec(_Model):
    file_path: str = Field(alias="filePath")
    priority: int = 0


# ---------------------------------------------------------------------------
# Mapping building blocks
# ---------------------------------------------------------------------------

class FallbackSource(_Model):
    source: str
    json_path: str = Field(alias="jsonPath")
    description: Optional[str] = None


class Condition(_Model):
    json_path: str = Field(alias="jsonPath")
    description: Optional[str] = None


class ConditionalSelection(_Model):
    enabled: bool = False
    conditions: List[Condition] = Field(default_factory=list)
    extract_first_element: bool = Field(default=False, alias="extractFirstElement")


class CustomCalculation(_Model):
    type: str                   # sum|average|avg|count|min|max
    field: Optional[str] = None
    description: Optional[str] = None


class FormatterDefinition(_Model):
    type: str                   # date|currency|number
    input_format: Optional[str] = Field(default=None, alias="inputFormat")
    output_format: Optional[str] = Field(default=None, alias="outputFormat")
    currency_code: Optional[str] = Field(default=None, alias="currencyCode")
    locale: Optional[str] = None
    use_grouping: Optional[bool] = Field(default=None, alias="useGrouping")
    decimal_places: Optional[int] = Field(default=None, alias="decimalPlaces")


class PlaceholderMapping(_Model):
    placeholder: str
    source: str
    json_path: str = Field(alias="jsonPath")
    description: Optional[str] = None
    formatter: Optional[FormatterDefinition] = None
    conditional_selection: Optional[ConditionalSelection] = Field(default=None, alias="conditionalSelection")
    custom_calculation: Optional[CustomCalculation] = Field(default=None, alias="customCalculation")
    fallback_sources: List[FallbackSource] = Field(default_factory=list, alias="fallbackSources")
    mandatory: bool = False
    default_value: Optional[str] = Field(default=None, alias="defaultValue")
    parent_collection_path: Optional[str] = Field(default=None, alias="parentCollectionPath")
    validate_parent_not_empty: bool = Field(default=False, alias="validateParentNotEmpty")


# ---------------------------------------------------------------------------
# Global formatter defaults
# ---------------------------------------------------------------------------

class DateFormatterConfig(_Model):
    default_input_format: str = Field(default="yyyy-MM-dd", alias="defaultInputFormat")
    default_output_format: str = Field(default="MMMM dd, yyyy", alias="defaultOutputFormat")
    locale: str = "en_US"
    timezone: Optional[str] = None


class CurrencyFormatterConfig(_Model):
    default_currency: str = Field(default="USD", alias="defaultCurrency")
    default_locale: str = Field(default="en_US", alias="defaultLocale")
    symbol_position: Optional[str] = Field(default=None, alias="symbolPosition")
    decimal_places: int = Field(default=2, alias="decimalPlaces")


class NumberFormatterConfig(_Model):
    default_locale: str = Field(default="en_US", alias="defaultLocale")
    use_grouping: bool = Field(default=True, alias="useGrouping")
    minimum_fraction_digits: int = Field(default=0, alias="minimumFractionDigits")
    maximum_fraction_digits: int = Field(default=2, alias="maximumFractionDigits")


class FormatterConfig(_Model):
    date: DateFormatterConfig = Field(default_factory=DateFormatterConfig)
    currency: CurrencyFormatterConfig = Field(default_factory=CurrencyFormatterConfig)
    number: NumberFormatterConfig = Field(default_factory=NumberFormatterConfig)


# ---------------------------------------------------------------------------
# Options + root
# ---------------------------------------------------------------------------

class ConfigOptions(_Model):
    cache_data_sources: bool = Field(default=True, alias="cacheDataSources")
    strict_mode: bool = Field(default=False, alias="strictMode")
    default_value: str = Field(default="", alias="defaultValue")
    enable_logging: bool = Field(default=True, alias="enableLogging")
    enable_conditional_selection: bool = Field(default=True, alias="enableConditionalSelection")
    enable_formatters: bool = Field(default=True, alias="enableFormatters")


class ContentGenConfig(_Model):
    """
    Root configuration document.

    Mappings are order-significant: the pipeline resolves them in the
    order declared here and aborts on the first fatal error.
    """

    config_version: Optional[str] = Field(default=None, alias="configVersion")
    description: Optional[str] = None
    data_sources: Dict[str, DataSourceSpec] = Field(default_factory=dict, alias="dataSources")
    mappings: List[PlaceholderMapping] = Field(default_factory=list)
    formatters: FormatterConfig = Field(default_factory=FormatterConfig)
    options: ConfigOptions = Field(default_factory=ConfigOptions)
