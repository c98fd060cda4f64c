"""Document slot persisting the vault as a single JSON file.

Purpose
-------
Give command line use a durable vault: every invocation loads the file,
operates on the document, and writes it back atomically.

Contents
--------
* :class:`JsonFileSlot` – :class:`DocumentSlot` over a path on disk.

System Role
-----------
Used by :mod:`lib_json_vault.cli`. Writes go to a sibling temporary file that
then replaces the target, so readers never observe a half-written vault.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ...domain.errors import MalformedPayload
from ...domain.values import ensure_json_value
from ...observability import log_debug, log_error


class JsonFileSlot:
    """Load and save the vault document from *path*.

    Parameters
    ----------
    path:
        Target file. Missing or empty files yield an empty vault.
    indent:
        Indentation used when writing; ``None`` writes compact JSON.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> slot = JsonFileSlot(Path(tmp.name) / "vault.json")
    >>> slot.load()
    {}
    >>> slot.save({"a": {"b": 1}})
    >>> JsonFileSlot(slot.path).load()
    {'a': {'b': 1}}
    >>> tmp.cleanup()
    """

    def __init__(self, path: str | Path, *, indent: int | None = 2) -> None:
        self._path = Path(path)
        self._indent = indent
        self._doc: dict[str, Any] | None = None

    @property
    def path(self) -> Path:
        """Return the file backing this slot."""

        return self._path

    def load(self) -> dict[str, Any]:
        """Return the document, reading the file on first access.

        Raises
        ------
        MalformedPayload
            When the file holds invalid JSON or text UTF-8 cannot encode
            (escaped lone surrogates, ``NaN``). A valid JSON value that is not
            an object is treated like a missing vault and replaced by ``{}``.
        """

        if self._doc is not None:
            return self._doc
        data: Any = None
        if self._path.is_file():
            raw = self._path.read_text(encoding="utf-8")
            if raw.strip():
                try:
                    data = json.loads(raw)
                    ensure_json_value(data)
                except (json.JSONDecodeError, MalformedPayload) as exc:
                    log_error("vault_file_invalid", slot="file", path=str(self._path), error=str(exc))
                    raise MalformedPayload(f"Invalid JSON in vault file {self._path}: {exc}") from exc
        self._doc = data if isinstance(data, dict) else {}
        log_debug("vault_slot_loaded", slot="file", path=str(self._path), keys=len(self._doc))
        return self._doc

    def view(self) -> dict[str, Any]:
        """Return the document for a read; reading never creates the file."""

        return self.load()

    def save(self, doc: dict[str, Any]) -> None:
        """Atomically write *doc* to :attr:`path`."""

        self._doc = doc
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(doc, handle, indent=self._indent, ensure_ascii=False)
            handle.write("\n")
        tmp_path.replace(self._path)
        log_debug("vault_slot_saved", slot="file", path=str(self._path), keys=len(doc))
