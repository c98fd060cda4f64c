"""JSON value model for the vault document.

Purpose
-------
Name the closed set of value kinds a vault document may hold so traversal,
merge, and enumeration code can branch with exhaustive ``match`` statements
instead of scattered ``isinstance`` probes.

Contents
--------
* :data:`JsonValue` / :data:`Document` – type aliases for stored data.
* :class:`ValueKind` – Null, Bool, Number, String, Array, Object.
* :func:`kind_of` – classify a value, raising :class:`MalformedPayload` for
  anything that JSON cannot represent.
* :func:`is_object` – shortcut used by path addressing and merge.
* :func:`ensure_json_value` – validate a complete payload tree before it is
  written.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Union

from .errors import MalformedPayload

JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
Document = dict[str, Any]


class ValueKind(Enum):
    """Tag describing which JSON variant a value belongs to."""

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def kind_of(value: object) -> ValueKind:
    """Return the :class:`ValueKind` of *value*.

    ``bool`` is matched before ``int`` because it subclasses it. Non-finite
    floats have no JSON spelling and are rejected alongside foreign types.

    Examples
    --------
    >>> kind_of({"a": 1}), kind_of([1]), kind_of(None)
    (<ValueKind.OBJECT: 'object'>, <ValueKind.ARRAY: 'array'>, <ValueKind.NULL: 'null'>)
    >>> kind_of(True)
    <ValueKind.BOOL: 'bool'>
    """

    match value:
        case None:
            return ValueKind.NULL
        case bool():
            return ValueKind.BOOL
        case int():
            return ValueKind.NUMBER
        case float() if math.isfinite(value):
            return ValueKind.NUMBER
        case str():
            return ValueKind.STRING
        case list():
            return ValueKind.ARRAY
        case dict():
            return ValueKind.OBJECT
        case _:
            raise MalformedPayload(f"Value of type {type(value).__name__} is not JSON-representable")


def is_object(value: object) -> bool:
    """Return ``True`` when *value* is an object (a ``dict``), never for arrays."""

    return isinstance(value, dict)


def ensure_json_value(value: object) -> None:
    """Validate that *value* and everything below it is JSON-representable.

    Raises
    ------
    MalformedPayload
        When a nested value has an unsupported type, a float is not finite,
        an object has a non-string key, or text holds a lone surrogate that
        UTF-8 cannot encode.

    Examples
    --------
    >>> ensure_json_value({"tags": ["a", 1, None], "nested": {"ok": True}})
    >>> ensure_json_value({"when": {1, 2}})
    Traceback (most recent call last):
    ...
    lib_json_vault.domain.errors.MalformedPayload: Value of type set is not JSON-representable
    """

    match kind_of(value):
        case ValueKind.ARRAY:
            for item in value:  # type: ignore[union-attr]
                ensure_json_value(item)
        case ValueKind.OBJECT:
            for key, item in value.items():  # type: ignore[union-attr]
                if not isinstance(key, str):
                    raise MalformedPayload(f"Object keys must be strings, got {type(key).__name__}")
                _ensure_encodable(key)
                ensure_json_value(item)
        case ValueKind.STRING:
            _ensure_encodable(value)  # type: ignore[arg-type]
        case ValueKind.NULL | ValueKind.BOOL | ValueKind.NUMBER:
            return


def _ensure_encodable(text: str) -> None:
    """Reject *text* the vault could neither size nor persist as UTF-8.

    ``json.loads`` happily decodes escapes such as ``"\\ud800"`` into lone
    surrogates, so parsed payloads are not guaranteed to be encodable.
    """

    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise MalformedPayload(f"Text is not valid UTF-8: {exc.reason} at position {exc.start}") from exc
