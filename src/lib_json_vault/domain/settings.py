"""Runtime settings value object.

:class:`VaultSettings` carries the few knobs the command line front end reads
from the environment. It is immutable so a loaded instance can be shared
between commands of one invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

DEFAULT_VAULT_PATH = "vault.json"
DEFAULT_INDENT = 2


@dataclass(frozen=True, slots=True)
class VaultSettings:
    """Settings resolved from defaults, environment, and CLI overrides.

    Attributes
    ----------
    path:
        File backing the vault for CLI use.
    indent:
        Indentation for the vault file and printed records; ``None`` is compact.

    Examples
    --------
    >>> VaultSettings().with_overrides({"indent": None})
    VaultSettings(path='vault.json', indent=None)
    """

    path: str = DEFAULT_VAULT_PATH
    indent: int | None = DEFAULT_INDENT

    def with_overrides(self, overrides: Mapping[str, Any]) -> VaultSettings:
        """Return a copy with the recognised *overrides* applied; unknown keys are ignored."""

        known = {name: value for name, value in overrides.items() if name in ("path", "indent")}
        return replace(self, **known)
