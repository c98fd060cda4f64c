"""Dotted-path addressing: resolution, destructive intermediate coercion, removal."""

from __future__ import annotations

import copy

from lib_json_vault.domain.paths import MISSING, ensure_and_set, remove, resolve


def test_resolve_distinguishes_null_from_absent() -> None:
    doc = {"a": None, "b": {"c": None}}
    assert resolve(doc, ("a",)) is None
    assert resolve(doc, ("b", "c")) is None
    assert resolve(doc, ("z",)) is MISSING
    assert resolve(doc, ("b", "z")) is MISSING


def test_resolve_does_not_descend_into_arrays_or_scalars() -> None:
    doc = {"list": [{"x": 1}], "num": 5}
    assert resolve(doc, ("list", "0")) is MISSING
    assert resolve(doc, ("num", "x")) is MISSING


def test_resolve_does_not_mutate() -> None:
    doc = {"a": {"b": 1}}
    before = copy.deepcopy(doc)
    resolve(doc, ("a", "x", "y"))
    assert doc == before


def test_ensure_and_set_creates_intermediates() -> None:
    doc: dict = {}
    ensure_and_set(doc, ("users", "admin", "settings"), {"theme": "dark"})
    assert doc == {"users": {"admin": {"settings": {"theme": "dark"}}}}


def test_ensure_and_set_replaces_non_object_intermediates() -> None:
    doc = {"a": 5, "b": [1, 2]}
    ensure_and_set(doc, ("a", "x"), 1)
    ensure_and_set(doc, ("b", "y"), 2)
    assert doc == {"a": {"x": 1}, "b": {"y": 2}}


def test_ensure_and_set_keeps_siblings() -> None:
    doc = {"a": {"keep": True}}
    ensure_and_set(doc, ("a", "new"), 1)
    assert doc == {"a": {"keep": True, "new": 1}}


def test_ensure_and_set_top_level_overwrites() -> None:
    doc = {"a": {"nested": 1}}
    ensure_and_set(doc, ("a",), "flat")
    assert doc == {"a": "flat"}


def test_remove_leaf_and_report() -> None:
    doc = {"a": {"b": 1, "c": 2}}
    assert remove(doc, ("a", "b")) is True
    assert doc == {"a": {"c": 2}}


def test_remove_leaves_emptied_parent_in_place() -> None:
    doc = {"a": {"b": 1}}
    remove(doc, ("a", "b"))
    assert doc == {"a": {}}


def test_remove_absent_creates_nothing() -> None:
    doc = {"a": 5}
    assert remove(doc, ("x", "y")) is False
    assert remove(doc, ("a", "y")) is False
    assert doc == {"a": 5}


def test_missing_sentinel_survives_copies() -> None:
    assert copy.copy(MISSING) is MISSING
    assert copy.deepcopy({"v": MISSING})["v"] is MISSING
    assert not MISSING
    assert repr(MISSING) == "MISSING"
