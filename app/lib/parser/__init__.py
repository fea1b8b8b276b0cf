"""
Parser package for token references.

Provides the reference index and the alias-preserving and literal
resolution strategies built on top of it.
"""

from .base import (
    REFERENCE_PATTERN,
    CircularReferenceError,
    ReferenceIndex,
    TokenReferenceError,
    TokenResolver,
    UnresolvableReferenceError,
    key_normalize,
)
from .resolvers import AliasResolver, LiteralResolver

__all__ = [
    "REFERENCE_PATTERN",
    "CircularReferenceError",
    "ReferenceIndex",
    "TokenReferenceError",
    "TokenResolver",
    "UnresolvableReferenceError",
    "key_normalize",
    "AliasResolver",
    "LiteralResolver",
]
