"""Closed option sets accepted by the vault operations.

Every option arrives from a host as plain text; :func:`parse_choice` turns it
into an enum member or raises :class:`InvalidOption` before anything is read
or written.
"""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..domain.errors import InvalidOption

E = TypeVar("E", bound=Enum)


class MergeMode(str, Enum):
    """How a write treats a value already stored at the target path."""

    REPLACE = "replace"
    MERGE = "merge"


class DataSource(str, Enum):
    """Where a write takes its payload from."""

    MANUAL = "manual"
    INPUT = "input"


class OutputFormat(str, Enum):
    """Shape of a listing record."""

    KEYS = "keys"
    FULL = "full"
    VAULT = "vault"


class ClearMode(str, Enum):
    """Whether a clear empties the vault or removes a single key."""

    ALL = "all"
    KEY = "key"


class VaultAction(str, Enum):
    """Actions of the vault view operation."""

    INIT = "init"
    CLEAR = "clear"


def parse_choice(enum_cls: type[E], value: E | str, option: str) -> E:
    """Return the member of *enum_cls* matching *value*.

    Examples
    --------
    >>> parse_choice(MergeMode, "merge", "merge mode")
    <MergeMode.MERGE: 'merge'>
    >>> parse_choice(ClearMode, "some", "clear mode")
    Traceback (most recent call last):
    ...
    lib_json_vault.domain.errors.InvalidOption: Unknown clear mode "some". Expected one of: all, key
    """

    try:
        return enum_cls(value)
    except ValueError as exc:
        expected = ", ".join(str(member.value) for member in enum_cls)
        raise InvalidOption(f'Unknown {option} "{value}". Expected one of: {expected}') from exc
