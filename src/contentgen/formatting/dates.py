from __future__ import annotations

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Pattern, Tuple, Union

from babel import Locale
from babel.dates import format_date, format_datetime

# LDML field -> strptime directive. Longest runs first.
_FIELD_MAP = {
    "yyyy": "%Y", "uuuu": "%Y", "yy": "%y", "uu": "%y",
    "MMMM": "%B", "MMM": "%b", "MM": "%m", "M": "%m",
    "dd": "%d", "d": "%d",
    "HH": "%H", "H": "%H", "hh": "%I", "h": "%I",
    "mm": "%M", "m": "%M",
    "ss": "%S", "s": "%S",
    "a": "%p",
    "EEEE": "%A", "EEE": "%a", "E": "%a",
    "XXX": "%z", "XX": "%z", "X": "%z", "xxx": "%z", "Z": "%z",
}

# strptime accepts "1" for %m; a doubled numeric letter means exactly two digits
_NUMERIC = set("MdHhms")

_TOKEN_RE = re.compile(r"'(?:[^']|'')*'|([A-Za-z])\1*|.", re.S)


def _field_shape(tok: str) -> str:
    if tok[0] in "yu":
        return r"\d{4}" if len(tok) == 4 else r"\d{2}"
    if tok[0] == "S":
        return rf"\d{{{len(tok)}}}"
    if tok[0] in _NUMERIC and len(tok) <= 2:
        return r"\d{2}" if len(tok) == 2 else r"\d{1,2}"
    return r".+?"


@lru_cache(maxsize=128)
def _translate(pattern: str) -> Tuple[str, Pattern[str]]:
    fmt, shape = [], []
    for m in _TOKEN_RE.finditer(pattern):
        tok = m.group(0)
        if tok.startswith("'"):
            literal = tok[1:-1].replace("''", "'") if len(tok) > 1 else ""
            literal = literal or "'"
            fmt.append(literal.replace("%", "%%"))
            shape.append(re.escape(literal))
        elif m.group(1):
            if tok[0] == "S":
                fmt.append("%f")
            elif tok in _FIELD_MAP:
                fmt.append(_FIELD_MAP[tok])
            else:
                raise ValueError(f"Unsupported date pattern field '{tok}' in '{pattern}'")
            shape.append(_field_shape(tok))
        else:
            fmt.append("%%" if tok == "%" else tok)
            shape.append(re.escape(tok))
    return "".join(fmt), re.compile("".join(shape), re.S)


def ldml_to_strptime(pattern: str) -> str:
    """
    Translate an LDML pattern ("yyyy-MM-dd'T'HH:mm:ss") to a strptime format.

    Quoted text becomes a literal. Raises ValueError on a field letter that
    has no strptime equivalent.
    """
    return _translate(pattern)[0]


def parse_temporal(text: str, pattern: str) -> Union[date, datetime]:
    """
    Parse ``text`` strictly against ``pattern``: field widths must match, so
    "1/5/2024" is rejected by "MM/dd/yyyy". A 'T' in the value means
    date-time, otherwise a plain date.
    """
    fmt, shape = _translate(pattern)
    if shape.fullmatch(text) is None:
        raise ValueError(f"'{text}' does not match pattern '{pattern}'")
    parsed = datetime.strptime(text, fmt)
    if "T" in text:
        return parsed
    return parsed.date()


def render_temporal(value: Union[date, datetime], pattern: str, locale: Locale) -> str:
    if isinstance(value, datetime):
        return format_datetime(value, format=pattern, locale=locale)
    return format_date(value, format=pattern, locale=locale)
