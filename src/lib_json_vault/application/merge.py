"""Application-layer deep merge policy.

Purpose
-------
Combine an existing object stored in the vault with an incoming object payload.
The policy is pure and free of I/O so both insert and update reuse it.

Contents
    - ``deep_merge``: public entry point.
    - ``can_merge``: tells callers whether merge applies or replace semantics do.
    - ``_merge_mapping`` / ``_merge_branch``: recursive stanzas that keep the
      precedence rule readable.

Rules
-----
Source wins. Objects present on both sides merge recursively; every other
combination (scalar over object, object over scalar, arrays anywhere) takes
the source value wholesale. Arrays are never merged element-wise.
"""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from ..domain.values import Document, ValueKind, kind_of


def can_merge(existing: Any, incoming: Any) -> bool:
    """Return ``True`` when both values are objects and merge semantics apply.

    Examples
    --------
    >>> can_merge({"a": 1}, {"b": 2}), can_merge({"a": 1}, [1]), can_merge(None, {})
    (True, False, False)
    """

    match (kind_of(existing), kind_of(incoming)):
        case (ValueKind.OBJECT, ValueKind.OBJECT):
            return True
        case _:
            return False


def deep_merge(target: Document, source: Document) -> Document:
    """Merge *source* into a copy of *target* and return the new object.

    Why
    ----
    Merge-mode writes must combine nested settings without disturbing keys the
    payload does not mention, and must never alias caller payloads or the
    previously stored value.

    Parameters
    ----------
    target:
        Existing object (left untouched).
    source:
        Incoming object whose values win on conflict (left untouched).

    Returns
    -------
    dict
        Fresh object; nested containers taken from either side are copies.

    Examples
    --------
    >>> deep_merge({"name": "John", "age": 30}, {"age": 31})
    {'name': 'John', 'age': 31}
    >>> deep_merge({"a": {"x": 1, "l": [1, 2]}}, {"a": {"y": 2, "l": [3]}})
    {'a': {'x': 1, 'l': [3], 'y': 2}}
    """

    merged = deepcopy(target)
    _merge_mapping(merged, source)
    return merged


def _merge_mapping(target: Document, incoming: Document) -> None:
    """Fold ``incoming`` into ``target`` (a private copy) key by key."""

    for key, value in incoming.items():
        match kind_of(value):
            case ValueKind.OBJECT:
                _merge_branch(target, key, value)
            case _:
                target[key] = deepcopy(value)


def _merge_branch(target: Document, key: str, value: Document) -> None:
    """Merge object ``value`` into ``target[key]`` or install a copy of it."""

    existing = target.get(key)
    if key in target and kind_of(existing) is ValueKind.OBJECT:
        _merge_mapping(existing, value)
    else:
        target[key] = deepcopy(value)
