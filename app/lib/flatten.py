"""
Token document flattening.

Walks a nested token document (as exported by a design tool) and produces
a flat list of addressable token entries. A mapping holding a `$value` key
is a leaf token; any other mapping is a group to recurse into. Keys that
start with `$` are document metadata and are skipped.
"""

from typing import Any, Mapping
from app.models.dataModel import TokenEntry

VALUE_KEY = "$value"
META_PREFIX = "$"


def tokens_flatten(
    node: Mapping[str, Any], current_path: tuple[str, ...] = ()
) -> list[TokenEntry]:
    """Flatten a token document depth-first, preserving source key order.

    Args:
        node: Document (or sub-document) to walk
        current_path: Path segments leading to `node`

    Returns:
        Token entries in traversal order
    """
    entries: list[TokenEntry] = []
    for key, value in node.items():
        if key.startswith(META_PREFIX):
            continue

        next_path: tuple[str, ...] = current_path + (key,)
        if not isinstance(value, Mapping):
            continue
        if VALUE_KEY in value:
            entries.append(
                TokenEntry(
                    path=next_path,
                    value=value[VALUE_KEY],
                    type=value.get("$type"),
                    description=value.get("$description"),
                )
            )
        else:
            entries.extend(tokens_flatten(value, next_path))
    return entries
