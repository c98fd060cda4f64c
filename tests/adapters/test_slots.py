"""Document slot adapters: the shared in-memory entry and the JSON file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_json_vault.adapters.slots.json_file import JsonFileSlot
from lib_json_vault.adapters.slots.memory import VAULT_ENTRY, StaticDataSlot
from lib_json_vault.domain.errors import MalformedPayload


def test_static_slot_creates_entry_on_first_access() -> None:
    static: dict = {}
    doc = StaticDataSlot(static).load()
    assert doc == {}
    assert static[VAULT_ENTRY] is doc


@pytest.mark.parametrize("junk", [None, [], "text", 3])
def test_static_slot_replaces_non_mapping_entry(junk) -> None:
    static = {VAULT_ENTRY: junk, "other": 1}
    assert StaticDataSlot(static).load() == {}
    assert static == {VAULT_ENTRY: {}, "other": 1}


def test_static_slot_shares_document_between_slots() -> None:
    static = {VAULT_ENTRY: {"a": 1}}
    first = StaticDataSlot(static).load()
    first["b"] = 2
    assert StaticDataSlot(static).load() == {"a": 1, "b": 2}


def test_file_slot_missing_and_empty_files_yield_empty_vault(tmp_path: Path) -> None:
    assert JsonFileSlot(tmp_path / "absent.json").load() == {}
    empty = tmp_path / "empty.json"
    empty.write_text("  \n", encoding="utf-8")
    assert JsonFileSlot(empty).load() == {}


def test_file_slot_non_object_document_becomes_empty(tmp_path: Path) -> None:
    path = tmp_path / "vault.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert JsonFileSlot(path).load() == {}


def test_file_slot_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "vault.json"
    path.write_text("{broken", encoding="utf-8")
    with pytest.raises(MalformedPayload, match="Invalid JSON in vault file"):
        JsonFileSlot(path).load()


def test_file_slot_save_writes_atomically(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "vault.json"
    slot = JsonFileSlot(path, indent=None)
    doc = slot.load()
    doc["ünïcode"] = {"v": "é"}
    slot.save(doc)
    assert json.loads(path.read_text(encoding="utf-8")) == {"ünïcode": {"v": "é"}}
    assert not path.with_suffix(".json.tmp").exists()
    assert slot.load() is doc


def test_static_slot_view_does_not_bind_entry() -> None:
    static: dict = {"other": 1}
    assert StaticDataSlot(static).view() == {}
    assert static == {"other": 1}


def test_static_slot_view_returns_live_document() -> None:
    static = {VAULT_ENTRY: {"a": 1}}
    assert StaticDataSlot(static).view() is static[VAULT_ENTRY]


def test_file_slot_view_never_creates_file(tmp_path: Path) -> None:
    path = tmp_path / "vault.json"
    assert JsonFileSlot(path).view() == {}
    assert not path.exists()


def test_file_slot_rejects_escaped_lone_surrogate(tmp_path: Path) -> None:
    path = tmp_path / "vault.json"
    path.write_text('{"s": "\\ud800"}', encoding="utf-8")
    with pytest.raises(MalformedPayload, match="not valid UTF-8"):
        JsonFileSlot(path).load()
