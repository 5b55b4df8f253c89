"""
Exception taxonomy for contentgen.

Only configuration-integrity and explicit validation failures are raised
out of a resolution run. Path-query misses, formatter and calculator
problems degrade locally and never show up here.
"""

from __future__ import annotations


class ContentGenError(Exception):
    """Base class for every error contentgen raises on purpose."""


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(ContentGenError):
    pass


class ConfigValidationError(ConfigurationError):
    pass


class DataSourceNotFound(ConfigurationError, KeyError):
    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Data source not found in configuration: {source}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class FileMissing(ConfigurationError, FileNotFoundError):
    def __init__(self, message: str, path=None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


class DataSourceParseError(ConfigurationError):
    pass


# ---------------------------------------------------------------------------
# Resolution errors
# ---------------------------------------------------------------------------

class ResolutionError(ContentGenError):
    pass


class ParentValidationError(ResolutionError):
    def __init__(self, message: str, *, placeholder: str, parent_path: str, source: str) -> None:
        super().__init__(message)
        self.placeholder = placeholder
        self.parent_path = parent_path
        self.source = source


class ParentCollectionNull(ParentValidationError):
    def __init__(self, placeholder: str, parent_path: str, source: str) -> None:
        super().__init__(
            f"Parent collection validation failed for placeholder '{placeholder}'. "
            f"Parent collection at path '{parent_path}' in source '{source}' "
            f"is null or does not exist.",
            placeholder=placeholder,
            parent_path=parent_path,
            source=source,
        )


class ParentCollectionEmpty(ParentValidationError):
    def __init__(self, placeholder: str, parent_path: str, source: str) -> None:
        super().__init__(
            f"Parent collection validation failed for placeholder '{placeholder}'. "
            f"Parent collection at path '{parent_path}' in source '{source}' "
            f"is empty. At least one element is required.",
            placeholder=placeholder,
            parent_path=parent_path,
            source=source,
        )


class MandatoryResolutionFailure(ResolutionError):
    def __init__(self, placeholder: str, source: str, path: str) -> None:
        super().__init__(
            f"Mandatory placeholder '{placeholder}' could not be resolved. "
            f"Check data source '{source}' and path '{path}'"
        )
        self.placeholder = placeholder
        self.source = source
        self.path = path


class PlaceholderNotFound(ResolutionError):
    def __init__(self, placeholder: str) -> None:
        super().__init__(f"Placeholder mapping not found: {placeholder}")
        self.placeholder = placeholder


class StrictResolutionFailure(ResolutionError):
    def __init__(self, placeholder: str) -> None:
        super().__init__(f"Failed to resolve placeholder: {placeholder}")
        self.placeholder = placeholder


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TemplateNotFound(ContentGenError, FileNotFoundError):
    def __init__(self, path) -> None:
        super().__init__(f"Template file not found: {path}")
        self.path = path

    def __str__(self) -> str:
        return self.args[0]


__all__ = [
    "ContentGenError",
    "ConfigurationError",
    "ConfigValidationError",
    "DataSourceNotFound",
    "FileMissing",
    "DataSourceParseError",
    "ResolutionError",
    "ParentValidationError",
    "ParentCollectionNull",
    "ParentCollectionEmpty",
    "MandatoryResolutionFailure",
    "PlaceholderNotFound",
    "StrictResolutionFailure",
    "TemplateNotFound",
]
