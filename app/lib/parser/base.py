r"""
Reference index and resolver protocol for token values.

Token values may embed references to other tokens, written as a dotted key
wrapped in braces:

    "{Theme.Base}"                 a whole-value reference (an alias)
    "{Spacing.Small} {Radius.Md}"  several references within one value

The index maps normalized reference keys to token entries. Every entry is
registered under its full dotted path; entries under a short-key root are
also registered under the path with the root segment stripped, so that
references may omit the category prefix.

Registration is insert-if-absent: the first entry to claim a key keeps it,
later duplicates are shadowed.

Example:
    index = ReferenceIndex.from_tokens(tokens, SHORT_KEY_ROOTS)
    token = index.lookup("spacing.small")
"""

import re
from typing import Any, Final, Iterable, Protocol, Self, runtime_checkable
from app.models.dataModel import TokenEntry

REFERENCE_PATTERN: Final[re.Pattern] = re.compile(r"\{([^}]+)\}")


class TokenReferenceError(ValueError):
    """Base class for fatal reference resolution failures."""


class UnresolvableReferenceError(TokenReferenceError):
    """A reference names a key that is not in the index."""

    def __init__(self: Self, reference: str) -> None:
        self.reference: str = reference
        super().__init__(f"Unable to resolve token reference: {reference}")


class CircularReferenceError(TokenReferenceError):
    """Resolving a token requires resolving the token itself."""

    def __init__(self: Self, path: str) -> None:
        self.path: str = path
        super().__init__(f"Circular token reference detected for {path}")


def key_normalize(key: str) -> str:
    """Normalize a reference key for lookup.

    Whitespace runs collapse to one space, underscores become spaces, and the
    result is trimmed and lower-cased.
    """
    collapsed: str = re.sub(r"\s+", " ", key).replace("_", " ")
    return collapsed.strip().lower()


def references_find(value: Any) -> list[re.Match]:
    """All reference matches in a value; non-strings have none."""
    if not isinstance(value, str):
        return []
    return list(REFERENCE_PATTERN.finditer(value))


class ReferenceIndex:
    """Lookup from normalized reference keys to token entries.

    Attributes:
        short_roots: Roots whose tokens are also registered without the root
    """

    def __init__(self: Self, short_roots: Iterable[str] = ()) -> None:
        self.short_roots: frozenset[str] = frozenset(short_roots)
        self._entries: dict[str, TokenEntry] = {}

    @classmethod
    def from_tokens(
        cls, tokens: Iterable[TokenEntry], short_roots: Iterable[str] = ()
    ) -> "ReferenceIndex":
        index = cls(short_roots)
        for token in tokens:
            index.register(token)
        return index

    def _insert(self: Self, key: str, token: TokenEntry) -> None:
        self._entries.setdefault(key, token)

    def register(self: Self, token: TokenEntry) -> None:
        """Register a token under its full key and, if eligible, its short key."""
        self._insert(key_normalize(".".join(token.path)), token)

        if token.root in self.short_roots:
            short_segments: tuple[str, ...] = token.path[1:]
            if short_segments:
                self._insert(key_normalize(".".join(short_segments)), token)

    def lookup(self: Self, reference: str) -> TokenEntry:
        """Find the token a reference points at.

        Args:
            reference: Reference text as written between the braces

        Returns:
            The registered token

        Raises:
            UnresolvableReferenceError: If no token is registered for the key
        """
        token: TokenEntry | None = self._entries.get(key_normalize(reference))
        if token is None:
            raise UnresolvableReferenceError(reference)
        return token

    def __contains__(self: Self, reference: object) -> bool:
        return isinstance(reference, str) and key_normalize(reference) in self._entries

    def __len__(self: Self) -> int:
        return len(self._entries)


@runtime_checkable
class TokenResolver(Protocol):
    """Protocol defining the resolver interface for token values.

    Resolvers turn a token's raw value into the value emitted for one
    output format, using a ReferenceIndex to follow references.
    """

    index: ReferenceIndex

    def resolve(self: Self, token: TokenEntry) -> Any:
        """Resolve a token's value.

        Args:
            token: Token whose value is resolved

        Raises:
            TokenReferenceError: If a reference cannot be resolved
        """
        ...
