from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_json_vault.adapters.payload import structured as structured_module
from lib_json_vault.adapters.payload.structured import (
    INVALID_JSON_MESSAGE,
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    loader_for,
    parse_payload,
)
from lib_json_vault.domain.errors import MalformedPayload


def test_parse_payload_accepts_any_json_value() -> None:
    assert parse_payload('{"a": [1, null]}') == {"a": [1, None]}
    assert parse_payload("42") == 42
    assert parse_payload('"text"') == "text"


def test_parse_payload_rejects_invalid_text() -> None:
    with pytest.raises(MalformedPayload) as excinfo:
        parse_payload("{not json")
    assert str(excinfo.value) == INVALID_JSON_MESSAGE


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "payload.toml"
    path.write_text("[db]\nport = 5432\n", encoding="utf-8")
    assert TOMLFileLoader().load(str(path)) == {"db": {"port": 5432}}


def test_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MalformedPayload, match="Payload file not found"):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "payload.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(MalformedPayload, match="Invalid JSON in"):
        JSONFileLoader().load(str(path))


def test_json_loader_valid(tmp_path: Path) -> None:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(["a", {"b": True}]), encoding="utf-8")
    assert JSONFileLoader().load(str(path)) == ["a", {"b": True}]


def test_yaml_loader(tmp_path: Path) -> None:
    path = tmp_path / "payload.yaml"
    path.write_text("service:\n  endpoint: https://api.example.com\n  retries: 3\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {"service": {"endpoint": "https://api.example.com", "retries": 3}}


def test_yaml_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "payload.yml"
    path.write_text("key: [unclosed\n", encoding="utf-8")
    with pytest.raises(MalformedPayload, match="Invalid YAML in"):
        YAMLFileLoader().load(str(path))


@pytest.mark.parametrize(
    ("name", "loader_type"),
    [("a.json", JSONFileLoader), ("a.TOML", TOMLFileLoader), ("a.yaml", YAMLFileLoader), ("a.yml", YAMLFileLoader)],
)
def test_loader_for_suffix(name, loader_type) -> None:
    assert isinstance(loader_for(name), loader_type)


def test_loader_for_rejects_unknown_suffix() -> None:
    with pytest.raises(MalformedPayload, match="Unsupported payload file type"):
        loader_for("payload.ini")


def test_invalid_payload_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR", logger="lib_json_vault")
    with pytest.raises(MalformedPayload):
        structured_module.parse_payload("[")
    record = caplog.records[-1]
    assert record.getMessage() == "payload_invalid"
    assert record.context["source"] == "inline"
