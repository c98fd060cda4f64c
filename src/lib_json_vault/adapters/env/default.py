"""Environment variable adapter.

Purpose
-------
Translate ``LIB_JSON_VAULT_*`` process environment variables into
:class:`VaultSettings` for the command line front end.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are read.
* Lowercases the remainder of each name (``LIB_JSON_VAULT_PATH`` → ``path``).
* Performs light type coercion for common scalar types (bools, ints, floats,
  ``null``/``none``).
* Emits structured logging via :mod:`lib_json_vault.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...domain.settings import VaultSettings
from ...observability import log_debug

PACKAGE_SLUG = "lib-json-vault"


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-json-vault')
    'LIB_JSON_VAULT'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the vault namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability."""

        self._environ = os.environ if environ is None else environ

    def load(self, prefix: str) -> dict[str, object]:
        """Return variables carrying *prefix*, keyed by their lowercased remainder.

        Examples
        --------
        >>> loader = DefaultEnvLoader(environ={'DEMO_INDENT': '4', 'DEMO_PATH': '/tmp/v.json', 'OTHER': 'x'})
        >>> sorted(loader.load('DEMO').items())
        [('indent', 4), ('path', '/tmp/v.json')]
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, object] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[stripped.lower()] = _coerce(value)
        log_debug("env_variables_loaded", source="env", path=None, keys=sorted(collected.keys()))
        return collected


def load_settings(environ: Mapping[str, str] | None = None) -> VaultSettings:
    """Return :class:`VaultSettings` with ``LIB_JSON_VAULT_*`` overrides applied.

    ``path`` is always kept as text so a purely numeric file name survives
    coercion.

    Examples
    --------
    >>> load_settings({'LIB_JSON_VAULT_PATH': 'state.json', 'LIB_JSON_VAULT_INDENT': 'none'})
    VaultSettings(path='state.json', indent=None)
    """

    values = DefaultEnvLoader(environ=environ).load(default_env_prefix(PACKAGE_SLUG))
    if "path" in values:
        values["path"] = str(values["path"])
    indent = values.get("indent")
    if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)):
        values.pop("indent")
    return VaultSettings().with_overrides(values)


def _coerce(value: str) -> object:
    """Coerce textual environment values to Python primitives where possible.

    Examples
    --------
    >>> _coerce('true'), _coerce('10'), _coerce('3.5'), _coerce('hello')
    (True, 10, 3.5, 'hello')
    """

    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    try:
        if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
            return int(value)
        return float(value)
    except ValueError:
        return value
