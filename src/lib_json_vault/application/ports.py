"""Application-layer ports describing host and adapter responsibilities.

Purpose
-------
Define the structural contracts the composition root relies on so operations
never depend on where the vault document lives or where payloads come from.

Contents
--------
* :class:`DocumentSlot` – hands out the live vault document and persists it.
* :class:`PayloadLoader` – parses a structured payload file.

System Role
-----------
These protocols keep the dependency arrow pointing inwards: adapters under
:mod:`lib_json_vault.adapters` implement them, :mod:`lib_json_vault.core`
consumes them.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class DocumentSlot(Protocol):
    """Host-owned holder of the single shared vault document.

    Why
    ----
    Workflow hosts decide how long the vault lives (process memory, a file,
    per-execution static data). Operations borrow the document for one call
    and hand it back.

    Methods
    -------
    :meth:`load`
        Return the live document, creating an empty one when the slot is
        empty or holds something other than a mapping.
    :meth:`view`
        Return the document for a read-only operation without creating it;
        an empty slot yields a detached empty mapping.
    :meth:`save`
        Make the (possibly mutated) document visible to later executions.
    """

    def load(self) -> dict[str, Any]:
        """Return the live vault document (never ``None``)."""
        ...

    def view(self) -> dict[str, Any]:
        """Return the document for reading; must not bind anything into the slot."""
        ...

    def save(self, doc: dict[str, Any]) -> None:
        """Persist *doc* as the slot's current document."""
        ...


@runtime_checkable
class PayloadLoader(Protocol):
    """Parse a structured payload file into a JSON value.

    Why
    ----
    Write operations accept payloads from JSON, TOML, or YAML files on the
    command line; parsing concerns stay out of the composition root.
    """

    def load(self, path: str) -> Any:
        """Read *path* and return its value or raise ``MalformedPayload``."""
        ...
