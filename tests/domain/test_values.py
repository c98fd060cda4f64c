from __future__ import annotations

import datetime as dt
import json
import math

import pytest

from lib_json_vault.domain.errors import MalformedPayload
from lib_json_vault.domain.values import ValueKind, ensure_json_value, is_object, kind_of


@pytest.mark.parametrize(
    ("value", "kind"),
    [
        (None, ValueKind.NULL),
        (False, ValueKind.BOOL),
        (0, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        ("", ValueKind.STRING),
        ([], ValueKind.ARRAY),
        ({}, ValueKind.OBJECT),
    ],
)
def test_kind_of_classifies_json_values(value, kind) -> None:
    assert kind_of(value) is kind


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf, {1, 2}, (1, 2), b"raw", dt.date(2024, 1, 1)])
def test_kind_of_rejects_unrepresentable(value) -> None:
    with pytest.raises(MalformedPayload):
        kind_of(value)


def test_is_object_excludes_arrays() -> None:
    assert is_object({"a": 1})
    assert not is_object([{"a": 1}])
    assert not is_object(None)


def test_ensure_json_value_walks_nested_structures() -> None:
    ensure_json_value({"a": [1, {"b": None, "c": [True, "x", 2.5]}]})
    with pytest.raises(MalformedPayload):
        ensure_json_value({"a": [1, {"b": math.nan}]})


def test_ensure_json_value_requires_string_keys() -> None:
    with pytest.raises(MalformedPayload, match="Object keys must be strings"):
        ensure_json_value({"ok": {1: "no"}})


@pytest.mark.parametrize("payload", ["\ud800", ["ok", "\udfff"], {"k": "lone \ud83d"}, {"\ud800": 1}])
def test_ensure_json_value_rejects_unencodable_text(payload) -> None:
    with pytest.raises(MalformedPayload, match="not valid UTF-8"):
        ensure_json_value(payload)


def test_ensure_json_value_accepts_paired_surrogate_escapes() -> None:
    ensure_json_value({"emoji": json.loads('"\\ud83d\\ude00"')})
