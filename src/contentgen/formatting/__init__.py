from .formatter import ValueFormatter
from .locales import parse_locale

__all__ = [
    "ValueFormatter",
    "parse_locale",
]
