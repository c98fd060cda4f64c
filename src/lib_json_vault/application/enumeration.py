"""Read-only enumeration of vault keys and entries.

Nothing here mutates the document; the store wraps these helpers in its
integrity check so a violation would still be repaired.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple

from ..domain.keys import join_path
from ..domain.values import Document, ValueKind, kind_of


class Entry(NamedTuple):
    """Top-level vault entry as shown by the ``full`` listing format."""

    key: str
    value: Any
    is_nested: bool = False


def list_keys(doc: Document, include_nested: bool) -> list[str]:
    """Return top-level keys, or every dotted path depth-first when *include_nested*.

    Objects are descended into; arrays are opaque leaves.

    Examples
    --------
    >>> doc = {"users": {"admin": {"settings": {"theme": "dark"}}}, "tags": [{"x": 1}]}
    >>> list_keys(doc, include_nested=False)
    ['users', 'tags']
    >>> list_keys(doc, include_nested=True)
    ['users', 'users.admin', 'users.admin.settings', 'users.admin.settings.theme', 'tags']
    """

    if not include_nested:
        return list(doc.keys())
    return list(_walk(doc, ()))


def list_entries(doc: Document) -> list[Entry]:
    """Pair each top-level key with its whole value; composites are not exploded."""

    return [Entry(key, value) for key, value in doc.items()]


def count_keys(doc: Document, include_nested: bool) -> int:
    """Return how many keys :func:`list_keys` would report."""

    if not include_nested:
        return len(doc)
    return sum(1 for _ in _walk(doc, ()))


def _walk(node: Document, prefix: tuple[str, ...]) -> Iterator[str]:
    """Yield dotted paths in pre-order, parents before children."""

    for key, value in node.items():
        segments = (*prefix, key)
        yield join_path(segments)
        match kind_of(value):
            case ValueKind.OBJECT:
                yield from _walk(value, segments)
            case _:
                continue
