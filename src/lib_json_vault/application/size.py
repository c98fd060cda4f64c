"""Serialized-size guard and JSON snapshot helpers.

The vault is bounded by the length of its compact JSON serialization, encoded
as UTF-8. The same serializer produces the snapshots the store restores from,
so a document that passes the guard always round-trips through a snapshot.
"""

from __future__ import annotations

import json
from typing import Final

from ..domain.errors import VaultSizeExceeded
from ..domain.values import Document

MAX_VAULT_SIZE: Final[int] = 10 * 1024 * 1024
SIZE_EXCEEDED_MESSAGE: Final[str] = "Vault size limit exceeded (10MB maximum)"


def serialize(doc: Document) -> str:
    """Return the compact JSON text used for sizing and snapshots.

    Examples
    --------
    >>> serialize({"a": [1, 2], "b": "é"})
    '{"a":[1,2],"b":"é"}'
    """

    return json.dumps(doc, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def serialized_size(doc: Document) -> int:
    """Return the UTF-8 byte length of :func:`serialize` for *doc*.

    Examples
    --------
    >>> serialized_size({}), serialized_size({"k": "é"})
    (2, 10)
    """

    return len(serialize(doc).encode("utf-8"))


def validate_size(doc: Document, *, max_size: int = MAX_VAULT_SIZE) -> int:
    """Return the serialized size of *doc* or raise :class:`VaultSizeExceeded`."""

    size = serialized_size(doc)
    if size > max_size:
        if max_size == MAX_VAULT_SIZE:
            message = SIZE_EXCEEDED_MESSAGE
        else:
            message = f"Vault size limit exceeded ({max_size} bytes maximum)"
        raise VaultSizeExceeded(message)
    return size


def snapshot(doc: Document) -> str:
    """Capture an immutable copy of *doc* as JSON text."""

    return serialize(doc)


def restore(doc: Document, frozen: str) -> None:
    """Reinstate *doc* in place from a :func:`snapshot`.

    The live ``dict`` object is kept so every holder of a reference observes
    the restored state.
    """

    doc.clear()
    doc.update(json.loads(frozen))
