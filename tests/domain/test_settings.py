from __future__ import annotations

import dataclasses

import pytest

from lib_json_vault.domain.settings import VaultSettings


def test_defaults() -> None:
    settings = VaultSettings()
    assert settings.path == "vault.json"
    assert settings.indent == 2


def test_with_overrides_ignores_unknown_keys() -> None:
    settings = VaultSettings().with_overrides({"path": "other.json", "colour": "red"})
    assert settings == VaultSettings(path="other.json", indent=2)


def test_settings_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        VaultSettings().path = "x"  # type: ignore[misc]
