r"""
Inverse reader for the generated SCSS.

Re-parses the concatenated `_all.scss` back into token entries grouped by
section and group, for documentation pages that preview the tokens.

Each line is classified first, then fed to a small state machine whose
state is the current section and the current group:

    // BUILD DESIGN SYSTEM - Theme (SCSS)    SECTION      new section, group reset
    // BUILD DESIGN SYSTEM ...               BANNER       ignored
    // Primary                               GROUP        new group
    // Generated on 2025-01-01T...           COMMENT      ignored (has digits)
    $primary: #335CFF;                       DECLARATION  registered and resolved

The reader is best-effort: it never raises, unknown aliases and cycles are
shown as the raw alias text, and unparsable lines are dropped.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Self
from app.config.settings import appsettings
from app.lib.log import LOG
from app.models.dataModel import LineKind, ParsedToken, TokenGroup

DEFAULT_SECTION: Final[str] = "Uncategorized"
DEFAULT_GROUP: Final[str] = "General"

_GROUP_HEADER: Final[re.Pattern] = re.compile(r"^//\s*([^/].*)$")
_TOKEN_LINE: Final[re.Pattern] = re.compile(r"^\$([A-Za-z0-9_]+):\s*(.+);$")
_DIRECT_ALIAS: Final[re.Pattern] = re.compile(r"^\$([A-Za-z0-9_]+)$")
_INTERPOLATION: Final[re.Pattern] = re.compile(r"#\{\$([A-Za-z0-9_]+)\}")
_VARIABLE: Final[re.Pattern] = re.compile(r"\$([A-Za-z0-9_]+)")


def section_pattern(banner: str) -> re.Pattern:
    return re.compile(
        rf"^// {re.escape(banner)} -\s+(.+?)(?:\s*\(SCSS\))?$", re.IGNORECASE
    )


def title_case(value: str) -> str:
    return " ".join(part[:1].upper() + part[1:] for part in value.split())


def is_group_header(value: str) -> bool:
    """Comments carrying digits are incidental notes, not group headers."""
    return bool(value) and not re.search(r"\d", value)


@dataclass
class Line:
    kind: LineKind
    text: str = ""
    value: str = ""


class LineClassifier:
    """Tags lines of generated SCSS with their LineKind."""

    def __init__(self: Self, banner: str | None = None) -> None:
        self.banner: str = banner or appsettings.banner
        self._section: re.Pattern = section_pattern(self.banner)

    def classify(self: Self, raw_line: str) -> Line:
        line: str = raw_line.strip()
        if not line:
            return Line(LineKind.BLANK)

        if line.startswith("//"):
            section = self._section.match(line)
            if section:
                return Line(LineKind.SECTION, title_case(section.group(1).strip()))
            if line.startswith(f"// {self.banner}"):
                return Line(LineKind.BANNER)
            group = _GROUP_HEADER.match(line)
            if group and is_group_header(group.group(1).strip()):
                return Line(LineKind.GROUP, title_case(group.group(1).strip()))
            return Line(LineKind.COMMENT)

        token = _TOKEN_LINE.match(line)
        if token:
            return Line(LineKind.DECLARATION, token.group(1), token.group(2).strip())
        return Line(LineKind.OTHER)


class TokenStore:
    """Raw declarations by name, with memoized best-effort resolution."""

    def __init__(self: Self) -> None:
        self.raw: dict[str, str] = {}
        self.resolved: dict[str, str] = {}

    def set_raw(self: Self, name: str, raw_value: str) -> None:
        self.raw[name] = raw_value
        self.resolved.pop(name, None)

    def resolve(self: Self, name: str, seen: set[str] | None = None) -> str:
        """Resolve a declared name, falling back to ``$name``."""
        seen = set() if seen is None else seen
        if name in self.resolved:
            return self.resolved[name]

        raw_value: str | None = self.raw.get(name)
        if not raw_value or name in seen:
            return f"${name}"

        seen.add(name)
        resolved: str = self._value_resolve(raw_value, name, seen)
        self.resolved[name] = resolved
        return resolved

    def _value_resolve(self: Self, value: str, name: str, seen: set[str]) -> str:
        trimmed: str = value.strip()

        direct = _DIRECT_ALIAS.match(trimmed)
        if direct:
            return self.resolve(direct.group(1), seen)

        resolved: str = _INTERPOLATION.sub(
            lambda m: self.resolve(m.group(1), seen), trimmed
        )
        return _VARIABLE.sub(
            lambda m: m.group(0) if m.group(1) == name else self.resolve(m.group(1), seen),
            resolved,
        )


@dataclass
class ReaderState:
    section: str = DEFAULT_SECTION
    group: str = DEFAULT_GROUP


class TokenCatalog:
    """Parsed SCSS tokens, queryable by section, identifier and prefix.

    Attributes:
        sections: Groups per section, in order of first appearance
    """

    def __init__(self: Self) -> None:
        self.sections: dict[str, dict[str, list[ParsedToken]]] = {}
        self.store: TokenStore = TokenStore()

    @classmethod
    def from_text(cls, text: str, banner: str | None = None) -> "TokenCatalog":
        """Parse generated SCSS text into a catalog."""
        catalog = cls()
        classifier = LineClassifier(banner)
        state = ReaderState()

        for raw_line in text.splitlines():
            line: Line = classifier.classify(raw_line)
            if line.kind is LineKind.SECTION:
                state = ReaderState(section=line.text)
            elif line.kind is LineKind.GROUP:
                state.group = line.text
            elif line.kind is LineKind.DECLARATION:
                catalog._declare(state, line.text, line.value)
        return catalog

    def _declare(self: Self, state: ReaderState, name: str, raw_value: str) -> None:
        self.store.set_raw(name, raw_value)
        token = ParsedToken(
            section=state.section,
            group=state.group,
            name=name,
            variable=f"${name}",
            value=self.store.resolve(name),
            raw_value=raw_value,
        )
        groups = self.sections.setdefault(state.section, {})
        groups.setdefault(state.group, []).append(token)

    @property
    def tokens(self: Self) -> list[ParsedToken]:
        return [
            token
            for groups in self.sections.values()
            for tokens in groups.values()
            for token in tokens
        ]

    def section(self: Self, name: str) -> list[TokenGroup]:
        """Groups of a section; an unknown section yields an empty list."""
        groups = self.sections.get(name, {})
        return [TokenGroup(name=group, tokens=tokens) for group, tokens in groups.items()]

    def find(self: Self, variable: str) -> ParsedToken | None:
        """Token with exactly this identifier, with or without the ``$``."""
        normalized: str = variable if variable.startswith("$") else f"${variable}"
        return next((t for t in self.tokens if t.variable == normalized), None)

    def prefix(self: Self, prefix: str) -> list[ParsedToken]:
        """Tokens whose identifier starts with the prefix."""
        normalized: str = prefix if prefix.startswith("$") else f"${prefix}"
        return [t for t in self.tokens if t.variable.startswith(normalized)]


def catalog_load(path: Path, banner: str | None = None) -> TokenCatalog:
    """Read a generated SCSS file into a catalog.

    An unreadable file yields an empty catalog.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        LOG(f"Unable to read {path}: {e}")
        return TokenCatalog()
    return TokenCatalog.from_text(text, banner)
