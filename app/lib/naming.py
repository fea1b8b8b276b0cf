"""
Identifier derivation for generated tokens.

Every token gets two names derived from its path alone:

- a lower-camel name, used for SCSS variables (`$colorPrimary`)
- a kebab name, used for CSS custom properties (`--color-primary`)

The root segment is dropped unless it is the only segment. Segments are
split on separators, on lower/digit to upper transitions and on
letter/digit boundaries, then stripped of anything that is not
alphanumeric.
"""

import re
from typing import Final

DEFAULT_WORD: Final[str] = "token"

_SEPARATORS: Final[re.Pattern] = re.compile(r"[\s_-]+")
_CASE_BOUNDARY: Final[re.Pattern] = re.compile(
    r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Za-z])(?=[0-9])|(?<=[0-9])(?=[A-Za-z])"
)
_NON_ALNUM: Final[re.Pattern] = re.compile(r"[^a-zA-Z0-9]")


def root_strip(path: tuple[str, ...]) -> tuple[str, ...]:
    if len(path) <= 1:
        return tuple(path)
    return tuple(path[1:])


def segment_words(segment: str) -> list[str]:
    """Split one path segment into alphanumeric words."""
    words: list[str] = []
    for part in _SEPARATORS.split(segment.replace("/", " ")):
        for piece in _CASE_BOUNDARY.split(part):
            word: str = _NON_ALNUM.sub("", piece)
            if word:
                words.append(word)
    return words


def path_words(path: tuple[str, ...]) -> list[str]:
    words: list[str] = [w for seg in root_strip(path) for w in segment_words(seg)]
    return words or [DEFAULT_WORD]


def derive(path: tuple[str, ...]) -> tuple[str, str]:
    """Derive the (camel, kebab) identifier pair for a token path.

    Args:
        path: Token path, root segment first

    Returns:
        The camel name and the kebab name, both guaranteed non-empty and
        never starting with a digit
    """
    words: list[str] = path_words(path)
    lowered: list[str] = [w.lower() for w in words]

    camel: str = lowered[0] + "".join(w[:1].upper() + w[1:] for w in lowered[1:])
    kebab: str = "-".join(lowered)

    if camel[0].isdigit():
        camel = f"n{camel}"
    if kebab[0].isdigit():
        kebab = f"n-{kebab}"
    return camel, kebab


def camel_name(path: tuple[str, ...]) -> str:
    return derive(tuple(path))[0]


def kebab_name(path: tuple[str, ...]) -> str:
    return derive(tuple(path))[1]


def scss_var(path: tuple[str, ...]) -> str:
    """SCSS variable for a token path, e.g. ``$spacingSmall``."""
    return f"${camel_name(path)}"


def css_var(path: tuple[str, ...]) -> str:
    """CSS custom property for a token path, e.g. ``--spacing-small``."""
    return f"--{kebab_name(path)}"
