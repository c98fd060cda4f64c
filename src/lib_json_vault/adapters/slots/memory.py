"""In-memory document slot backed by a host's shared static-data mapping.

Workflow hosts keep per-execution state in a plain mutable mapping; the vault
lives under the ``"jsonVault"`` entry of that mapping and is shared by
reference between every operation of the execution.
"""

from __future__ import annotations

from typing import Any, MutableMapping

from ...observability import log_debug

VAULT_ENTRY = "jsonVault"


class StaticDataSlot:
    """Expose ``static_data["jsonVault"]`` as a :class:`DocumentSlot`.

    Examples
    --------
    >>> static = {}
    >>> slot = StaticDataSlot(static)
    >>> doc = slot.load()
    >>> doc["a"] = 1
    >>> static
    {'jsonVault': {'a': 1}}
    >>> slot.load() is doc
    True
    """

    def __init__(self, static_data: MutableMapping[str, Any] | None = None) -> None:
        self._static_data: MutableMapping[str, Any] = {} if static_data is None else static_data

    @property
    def static_data(self) -> MutableMapping[str, Any]:
        """Return the host mapping holding the vault entry."""

        return self._static_data

    def load(self) -> dict[str, Any]:
        """Return the live vault, replacing a missing or non-mapping entry with ``{}``."""

        current = self._static_data.get(VAULT_ENTRY)
        if not isinstance(current, dict):
            current = {}
            self._static_data[VAULT_ENTRY] = current
            log_debug("vault_slot_initialised", slot="memory", path=None)
        return current

    def view(self) -> dict[str, Any]:
        """Return the live vault for a read, or a detached ``{}`` when there is none.

        Unlike :meth:`load`, the host mapping is left untouched.

        Examples
        --------
        >>> static = {}
        >>> StaticDataSlot(static).view(), static
        ({}, {})
        """

        current = self._static_data.get(VAULT_ENTRY)
        return current if isinstance(current, dict) else {}

    def save(self, doc: dict[str, Any]) -> None:
        """Rebind the vault entry to *doc* (a no-op when it already is *doc*)."""

        self._static_data[VAULT_ENTRY] = doc
        log_debug("vault_slot_saved", slot="memory", path=None, keys=len(doc))
