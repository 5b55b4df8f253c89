from __future__ import annotations

import logging
from typing import Optional

from babel import Locale, UnknownLocaleError

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en_US"


def parse_locale(locale_str: Optional[str]) -> Locale:
    """
    Turn "language[_REGION[_VARIANT]]" into a babel Locale.

    Unknown trailing parts are dropped one at a time ("de_CH_XX" -> "de_CH");
    empty, over-long or unknown strings fall back to en_US.
    """
    if not locale_str:
        return Locale.parse(DEFAULT_LOCALE)

    parts = locale_str.split("_")
    if len(parts) > 3 or not all(parts):
        logger.warning("Malformed locale '%s', using %s", locale_str, DEFAULT_LOCALE)
        return Locale.parse(DEFAULT_LOCALE)

    while parts:
        language, territory, variant = (parts + [None, None])[:3]
        try:
            return Locale(language, territory=territory, variant=variant)
        except (UnknownLocaleError, ValueError, TypeError):
            parts = parts[:-1]

    logger.warning("Unknown locale '%s', using %s", locale_str, DEFAULT_LOCALE)
    return Locale.parse(DEFAULT_LOCALE)
