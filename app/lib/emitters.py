"""
Emitters for the two output formats.

- scss_build: alias-preserving `$name: value;` declarations, base tokens
  before alias tokens, with a comment header whenever the group changes.
- css_build: fully resolved `--name: value;` declarations inside a single
  `:root` block.

SCSS has no hoisting, so a variable must never be used before it is
declared. All values are resolved before any line is emitted, aliases are
written after every base token of the bundle, and within each group an
entry that uses a variable of the same bundle is held back until that
variable has been written.
"""

import re
from datetime import datetime, timezone
from typing import Final, Iterable, NamedTuple
from app.config.settings import appsettings
from app.lib.naming import camel_name, css_var, kebab_name, scss_var
from app.lib.parser.resolvers import AliasResolver, LiteralResolver
from app.lib.quoting import css_format
from app.models.dataModel import TokenEntry

_SCSS_VARIABLE: Final[re.Pattern] = re.compile(r"\$([A-Za-z0-9_]+)")


class ScssLine(NamedTuple):
    token: TokenEntry
    value: str
    name: str
    uses: frozenset[str]


def timestamp_now() -> str:
    """ISO-8601 UTC timestamp with millisecond precision."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def tokens_sort(tokens: Iterable[TokenEntry]) -> list[TokenEntry]:
    """Order tokens by kebab name, then by dotted path."""
    return sorted(tokens, key=lambda t: (kebab_name(t.path), t.dotted))


def section_of(token: TokenEntry) -> str:
    return token.path[1] if len(token.path) > 1 else token.path[0]


def dependency_order(entries: list[ScssLine], ready: set[str]) -> list[ScssLine]:
    """Stable ordering in which every entry follows the variables it uses.

    Entries already in a valid order keep it. Variables not declared by
    `entries` are expected in `ready`. A cycle leaves the remaining entries
    in their original order; the literal pass reports it.
    """
    ordered: list[ScssLine] = []
    pending: list[ScssLine] = list(entries)
    while pending:
        deferred: list[ScssLine] = []
        for entry in pending:
            if entry.uses <= ready:
                ordered.append(entry)
                ready.add(entry.name)
            else:
                deferred.append(entry)
        if len(deferred) == len(pending):
            ordered.extend(deferred)
            break
        pending = deferred
    return ordered


def _section_lines(entries: list[ScssLine]) -> list[str]:
    lines: list[str] = []
    current: str | None = None
    for entry in entries:
        section: str = section_of(entry.token)
        if section != current:
            current = section
            lines.append(f"// {section}")
        lines.append(f"{scss_var(entry.token.path)}: {entry.value};")
    return lines


def scss_build(
    tokens: Iterable[TokenEntry],
    resolver: AliasResolver,
    title: str,
    generated: str | None = None,
) -> str:
    """Build the alias-preserving SCSS text for one bundle.

    Args:
        tokens: Tokens of the bundle
        resolver: Alias-preserving resolver over the whole document
        title: Bundle title for the header
        generated: Timestamp for the header, defaults to now

    Returns:
        The file contents, ending with a newline

    Raises:
        TokenReferenceError: If a reference cannot be resolved
    """
    entries: list[ScssLine] = []
    for token in tokens_sort(tokens):
        value: str = resolver.resolve(token)
        name: str = camel_name(token.path)
        uses = frozenset(_SCSS_VARIABLE.findall(value)) - {name}
        entries.append(ScssLine(token, value, name, uses))

    local: set[str] = {entry.name for entry in entries}
    # Anything using an alias of this bundle, directly or not, follows it
    late: set[str] = {e.name for e in entries if e.value.startswith("$")}
    grown: bool = True
    while grown:
        grown = False
        for entry in entries:
            if entry.name not in late and entry.uses & late:
                late.add(entry.name)
                grown = True

    base: list[ScssLine] = [e for e in entries if e.name not in late]
    aliases: list[ScssLine] = [e for e in entries if e.name in late]

    external: set[str] = {n for e in entries for n in e.uses} - local
    base = dependency_order(base, set(external))
    aliases = dependency_order(aliases, external | {e.name for e in base})

    lines: list[str] = [
        f"// {appsettings.banner} - {title} (SCSS)",
        f"// Generated on {generated or timestamp_now()}",
        "",
    ]
    lines.extend(_section_lines(base))
    if aliases:
        lines.append("")
        lines.extend(_section_lines(aliases))

    lines.append("")
    return "\n".join(lines)


def css_build(
    tokens: Iterable[TokenEntry], resolver: LiteralResolver, title: str
) -> str:
    """Build the flattened CSS text for one bundle.

    Args:
        tokens: Tokens of the bundle
        resolver: Literal resolver, possibly shared across bundles
        title: Bundle title for the header

    Returns:
        The file contents, ending with a newline

    Raises:
        TokenReferenceError: If a reference cannot be resolved or is circular
    """
    lines: list[str] = [
        f"/* {appsettings.banner} - {title} (CSS) */",
        ":root {",
    ]
    for token in tokens_sort(tokens):
        value = css_format(resolver.resolve(token), token.type)
        lines.append(f"  {css_var(token.path)}: {value};")

    lines.append("}")
    lines.append("")
    return "\n".join(lines)
