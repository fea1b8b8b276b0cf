"""
Token resolvers.

Implements the two resolution strategies over one reference graph:
- AliasResolver: keeps whole-value references as SCSS aliases and
  interpolates references embedded in larger values
- LiteralResolver: substitutes every reference with its fully resolved
  value, memoizing results and failing on cycles
"""

import re
from typing import Any, Iterator, Self
from app.lib.log import LOG
from app.lib.naming import scss_var
from app.lib.quoting import literal_text, quote, scss_needs_quotes
from app.lib.parser.base import (
    REFERENCE_PATTERN,
    CircularReferenceError,
    ReferenceIndex,
    references_find,
)
from app.models.dataModel import TokenEntry


class AliasResolver:
    """Resolver producing SCSS values that preserve aliases."""

    def __init__(self: Self, index: ReferenceIndex) -> None:
        self.index: ReferenceIndex = index

    def resolve(self: Self, token: TokenEntry) -> str:
        """Resolve a token's value for the alias-preserving format.

        Args:
            token: Token whose value is resolved

        Returns:
            Either a bare alias (``$other``), a quoted string with ``#{$other}``
            interpolations, or the value itself, quoted when required

        Raises:
            UnresolvableReferenceError: If a referenced key is not indexed
        """
        raw: Any = token.value
        if not isinstance(raw, str):
            return literal_text(raw)

        matches: list[re.Match] = references_find(raw)
        if matches:
            if len(matches) == 1 and raw.strip() == matches[0].group(0):
                return scss_var(self.index.lookup(matches[0].group(1)).path)

            replaced: str = REFERENCE_PATTERN.sub(
                lambda m: f"#{{{scss_var(self.index.lookup(m.group(1)).path)}}}",
                raw,
            )
            return quote(replaced)

        if scss_needs_quotes(raw, token.type):
            return quote(raw)
        return raw


class LiteralResolver:
    """Resolver substituting every reference with its literal value.

    The cache is keyed by token path and may be shared across the bundles of
    one build, so that base tokens referenced from several bundles are only
    resolved once.

    Attributes:
        index: Reference index to follow references through
        cache: Resolved values by token path
    """

    def __init__(
        self: Self,
        index: ReferenceIndex,
        cache: dict[tuple[str, ...], Any] | None = None,
    ) -> None:
        self.index: ReferenceIndex = index
        self.cache: dict[tuple[str, ...], Any] = {} if cache is None else cache

    def resolve(self: Self, token: TokenEntry) -> Any:
        """Fully resolve a token's value.

        Dependencies are walked depth-first on an explicit stack, so chains
        of any length resolve without growing the interpreter stack.

        Args:
            token: Token whose value is resolved

        Returns:
            The resolved value; non-string values are returned unchanged

        Raises:
            CircularReferenceError: If the token depends on itself
            UnresolvableReferenceError: If a referenced key is not indexed
        """
        if token.path in self.cache:
            return self.cache[token.path]

        in_progress: set[tuple[str, ...]] = set()
        stack: list[tuple[TokenEntry, Iterator[TokenEntry]]] = []
        self._enter(token, in_progress, stack)
        while stack:
            current, pending = stack[-1]
            for dependency in pending:
                if dependency.path not in self.cache:
                    self._enter(dependency, in_progress, stack)
                    break
            else:
                stack.pop()
                in_progress.discard(current.path)
                self.cache[current.path] = self._substitute(current)
        return self.cache[token.path]

    def _enter(
        self: Self,
        token: TokenEntry,
        in_progress: set[tuple[str, ...]],
        stack: list[tuple[TokenEntry, Iterator[TokenEntry]]],
    ) -> None:
        if token.path in in_progress:
            LOG(f"Cycle while resolving {token.dotted}")
            raise CircularReferenceError(token.dotted)
        dependencies: list[TokenEntry] = []
        if isinstance(token.value, str):
            dependencies = [
                self.index.lookup(m.group(1)) for m in references_find(token.value)
            ]
        in_progress.add(token.path)
        stack.append((token, iter(dependencies)))

    def _substitute(self: Self, token: TokenEntry) -> Any:
        # Every dependency is cached by the time this runs
        if not isinstance(token.value, str):
            return token.value
        return REFERENCE_PATTERN.sub(
            lambda m: literal_text(self.cache[self.index.lookup(m.group(1)).path]),
            token.value,
        )
