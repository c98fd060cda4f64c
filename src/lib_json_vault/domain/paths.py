"""Dotted-path addressing into a vault document.

Purpose
-------
Read, write, and delete leaves of a nested ``dict`` given the path segments
produced by :func:`lib_json_vault.domain.keys.split_key`.

Contents
--------
* :data:`MISSING` – sentinel distinguishing "absent" from a stored ``None``.
* :func:`resolve` – read a value without side effects.
* :func:`ensure_and_set` – write a value, creating intermediate objects.
* :func:`remove` – delete a leaf without creating anything.

Single-segment paths skip the traversal loop and act on the top level
directly; the result is the same as the general walk.
"""

from __future__ import annotations

from typing import Any, Final, Sequence

from .values import Document, is_object


class _Missing:
    """Type of the :data:`MISSING` sentinel."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Final[_Missing] = _Missing()


def resolve(doc: Document, path: Sequence[str]) -> Any:
    """Return the value at *path* or :data:`MISSING`.

    An absent segment or an intermediate that is not an object both resolve
    to :data:`MISSING`.

    Examples
    --------
    >>> doc = {"users": {"admin": None}, "tags": ["a"]}
    >>> resolve(doc, ("users", "admin")) is None
    True
    >>> resolve(doc, ("users", "guest"))
    MISSING
    >>> resolve(doc, ("tags", "0"))
    MISSING
    """

    if len(path) == 1:
        return doc.get(path[0], MISSING)
    current: Any = doc
    for segment in path:
        if not is_object(current) or segment not in current:
            return MISSING
        current = current[segment]
    return current


def ensure_and_set(doc: Document, path: Sequence[str], value: Any) -> None:
    """Assign *value* at *path*, creating intermediate objects on the way.

    Any intermediate segment that is absent **or holds a non-object value**
    is replaced by an empty ``dict``. This coercion is destructive: writing
    ``a.b`` over ``{"a": 5}`` discards the ``5``.

    Examples
    --------
    >>> doc = {"a": 5}
    >>> ensure_and_set(doc, ("a", "b", "c"), True)
    >>> doc
    {'a': {'b': {'c': True}}}
    """

    if len(path) == 1:
        doc[path[0]] = value
        return
    cursor = doc
    for segment in path[:-1]:
        child = cursor.get(segment)
        if not is_object(child):
            child = {}
            cursor[segment] = child
        cursor = child
    cursor[path[-1]] = value


def remove(doc: Document, path: Sequence[str]) -> bool:
    """Delete the leaf at *path* and report whether it was present.

    Nothing is created: when an intermediate segment is absent or not an
    object the document is left untouched and ``False`` is returned.

    Examples
    --------
    >>> doc = {"a": {"b": 1, "c": 2}}
    >>> remove(doc, ("a", "b")), doc
    (True, {'a': {'c': 2}})
    >>> remove(doc, ("a", "b", "x")), remove(doc, ("zzz",))
    (False, False)
    """

    cursor = doc
    for segment in path[:-1]:
        child = cursor.get(segment)
        if not is_object(child):
            return False
        cursor = child
    if path[-1] in cursor:
        del cursor[path[-1]]
        return True
    return False
