"""
Quoting policy for emitted token values.

Both output formats leave recognizable CSS values bare (hex colors,
numbers with an optional unit, function calls such as `var(...)` or
`calc(...)`, and anything typed `color`) and quote the rest according to
their own rule:

- CSS: font families are always quoted, font weights only when they
  contain whitespace, everything else is left bare.
- SCSS: any value that is not a bare identifier-like word is quoted.
"""

import json
import re
from typing import Any, Final

_NUMBER: Final[re.Pattern] = re.compile(r"-?\d*\.?\d+(px|rem|em|ms|s|%)?")
_FUNCTION: Final[re.Pattern] = re.compile(r"[a-zA-Z-]+\(")
_UPPER: Final[re.Pattern] = re.compile(r"[A-Z]")
_NON_IDENT: Final[re.Pattern] = re.compile(r"[^a-z0-9_-]", re.IGNORECASE)


def quote(value: str) -> str:
    """Wrap in double quotes, backslash-escaping embedded double quotes."""
    escaped: str = value.replace('"', '\\"')
    return f'"{escaped}"'


def _is_bare_css_value(value: str, token_type: str | None) -> bool:
    return (
        value.startswith("#")
        or bool(_NUMBER.fullmatch(value))
        or bool(_FUNCTION.match(value))
        or token_type == "color"
    )


def css_needs_quotes(value: Any, token_type: str | None) -> bool:
    if not isinstance(value, str):
        return False
    if value == "":
        return True
    if _is_bare_css_value(value, token_type):
        return False
    if token_type == "fontFamilies":
        return True
    if token_type == "fontWeights":
        return bool(re.search(r"\s", value))
    return False


def scss_needs_quotes(value: Any, token_type: str | None) -> bool:
    if not isinstance(value, str):
        return False
    if value == "":
        return True
    if _is_bare_css_value(value, token_type):
        return False
    return (
        " " in value
        or bool(_UPPER.search(value))
        or bool(_NON_IDENT.search(value))
    )


def number_format(value: int | float) -> str:
    """Render a JSON number the way it was most likely written."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def literal_text(value: Any) -> str:
    """Text of a non-string value, as substituted into another value."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return number_format(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def css_format(value: Any, token_type: str | None) -> str:
    """Format a fully resolved value for a CSS declaration."""
    if isinstance(value, str):
        return quote(value) if css_needs_quotes(value, token_type) else value
    return literal_text(value)
