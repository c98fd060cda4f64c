from __future__ import annotations

import pytest

from lib_json_vault.application.options import (
    ClearMode,
    DataSource,
    MergeMode,
    OutputFormat,
    VaultAction,
    parse_choice,
)
from lib_json_vault.domain.errors import ErrorKind, InvalidOption


@pytest.mark.parametrize(
    ("enum_cls", "text", "member"),
    [
        (MergeMode, "replace", MergeMode.REPLACE),
        (DataSource, "input", DataSource.INPUT),
        (OutputFormat, "vault", OutputFormat.VAULT),
        (ClearMode, "key", ClearMode.KEY),
        (VaultAction, "init", VaultAction.INIT),
    ],
)
def test_parse_choice_accepts_documented_values(enum_cls, text, member) -> None:
    assert parse_choice(enum_cls, text, "option") is member
    assert parse_choice(enum_cls, member, "option") is member


def test_parse_choice_lists_expected_values() -> None:
    with pytest.raises(InvalidOption) as excinfo:
        parse_choice(OutputFormat, "xml", "output format")
    assert excinfo.value.kind is ErrorKind.INVALID_OPTION
    assert str(excinfo.value) == 'Unknown output format "xml". Expected one of: keys, full, vault'
