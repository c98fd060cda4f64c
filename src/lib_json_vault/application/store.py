"""Document store: atomic vault operations over a borrowed document.

Purpose
-------
Implement insert, update, delete, find, clear, and listing on top of path
addressing, deep merge, and the size guard, with an all-or-nothing guarantee
for every mutation.

Contents
--------
* :class:`WriteResult` / :class:`DeleteResult` / :class:`FindResult` – typed
  outcomes consumed by :mod:`lib_json_vault.core` to build result records.
* :class:`VaultStore` – the store itself.

System Role
-----------
A :class:`VaultStore` wraps the live document a :class:`DocumentSlot` handed
out and must not outlive the operation that created it. Mutations run inside
:meth:`VaultStore._atomic`, which snapshots the document, applies the change,
validates the size, and restores the snapshot in place on any failure. Reads
run inside :meth:`VaultStore._read_only`, which repairs the document should it
ever change during a read.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass
from typing import Any

from ..domain.errors import IntegrityViolation, KeyAlreadyExists, KeyNotFound
from ..domain.keys import split_key
from ..domain.paths import MISSING, ensure_and_set, remove, resolve
from ..domain.values import Document, ensure_json_value
from ..observability import log_debug, log_error, log_info, make_event
from . import enumeration, size
from .merge import can_merge, deep_merge
from .options import MergeMode, parse_choice


@dataclass(frozen=True, slots=True)
class WriteResult:
    """Outcome of an insert or update."""

    key: str
    action: str
    existed: bool
    vault_size: int


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Outcome of a delete; ``deleted_value`` is ``None`` when nothing existed."""

    key: str
    existed: bool
    deleted_value: Any
    vault_size: int


@dataclass(frozen=True, slots=True)
class FindResult:
    """Outcome of a lookup; ``value`` is ``None`` when the key is absent."""

    key: str
    found: bool
    value: Any
    vault_size: int


class VaultStore:
    """Apply vault operations to *doc* atomically.

    Parameters
    ----------
    doc:
        The live document borrowed from the host slot. It is mutated in place
        and never replaced, so the host's reference always sees the result.
    max_size:
        Serialized size cap in bytes. Defaults to the fixed 10 MiB ceiling.

    Examples
    --------
    >>> doc = {}
    >>> store = VaultStore(doc)
    >>> store.insert("users.admin", {"role": "root"}).action
    'inserted'
    >>> store.update("users.admin", {"active": True}).existed
    True
    >>> doc
    {'users': {'admin': {'role': 'root', 'active': True}}}
    """

    def __init__(self, doc: Document, *, max_size: int = size.MAX_VAULT_SIZE) -> None:
        self._doc = doc
        self._max_size = max_size

    @property
    def document(self) -> Document:
        """Return the live document this store operates on."""

        return self._doc

    @property
    def vault_size(self) -> int:
        """Return the number of top-level keys."""

        return len(self._doc)

    def serialized_size(self) -> int:
        """Return the current serialized size in bytes."""

        return size.serialized_size(self._doc)

    def insert(self, key: str, value: Any, *, merge_mode: MergeMode | str = MergeMode.REPLACE) -> WriteResult:
        """Store *value* at *key*.

        In ``replace`` mode the path must be free; in ``merge`` mode an
        existing object is deep-merged with an object payload and anything else
        is overwritten.

        Raises
        ------
        KeyInvalid, MalformedPayload, InvalidOption
            Before any mutation.
        KeyAlreadyExists
            Replace mode on an occupied path.
        VaultSizeExceeded
            After rolling the document back.
        """

        mode = parse_choice(MergeMode, merge_mode, "merge mode")
        path = split_key(key)
        ensure_json_value(value)
        existing = resolve(self._doc, path)
        if mode is MergeMode.REPLACE and existing is not MISSING:
            raise KeyAlreadyExists(
                f'Key "{key}" already exists in the vault. '
                "Use merge mode to update existing keys or use the update operation."
            )
        with self._atomic("insert", key):
            ensure_and_set(self._doc, path, self._combine(mode, existing, value))
        return WriteResult(key=key, action="inserted", existed=existing is not MISSING, vault_size=self.vault_size)

    def update(
        self,
        key: str,
        value: Any,
        *,
        merge_mode: MergeMode | str = MergeMode.MERGE,
        create_if_not_exists: bool = True,
    ) -> WriteResult:
        """Update the value at *key*, deep-merging objects in ``merge`` mode.

        Raises
        ------
        KeyNotFound
            When the key is absent and *create_if_not_exists* is false.
        VaultSizeExceeded
            After rolling the document back.
        """

        mode = parse_choice(MergeMode, merge_mode, "merge mode")
        path = split_key(key)
        existing = resolve(self._doc, path)
        if existing is MISSING and not create_if_not_exists:
            raise KeyNotFound(
                f'Key "{key}" does not exist in the vault. Enable "Create if Not Exists" to create it.'
            )
        ensure_json_value(value)
        with self._atomic("update", key):
            ensure_and_set(self._doc, path, self._combine(mode, existing, value))
        return WriteResult(key=key, action="updated", existed=existing is not MISSING, vault_size=self.vault_size)

    def delete(self, key: str, *, error_if_not_exists: bool = False) -> DeleteResult:
        """Remove *key* and return the value it held."""

        path = split_key(key)
        existing = resolve(self._doc, path)
        if existing is MISSING:
            if error_if_not_exists:
                raise KeyNotFound(f'Key "{key}" does not exist in the vault')
            log_debug("vault_key_absent", **make_event("delete", key))
            return DeleteResult(key=key, existed=False, deleted_value=None, vault_size=self.vault_size)
        with self._atomic("delete", key):
            existed = remove(self._doc, path)
        return DeleteResult(key=key, existed=existed, deleted_value=existing, vault_size=self.vault_size)

    def find(self, key: str, *, error_if_not_exists: bool = False) -> FindResult:
        """Look *key* up without mutating the document.

        ``found`` is ``False`` both for absent keys and for keys holding
        ``null``, matching the listing output hosts already rely on.
        """

        path = split_key(key)
        with self._read_only("find", key):
            value = resolve(self._doc, path)
            if value is MISSING:
                if error_if_not_exists:
                    raise KeyNotFound(f'Key "{key}" does not exist in the vault')
                value = None
            result = FindResult(key=key, found=value is not None, value=deepcopy(value), vault_size=self.vault_size)
        return result

    def clear(self) -> None:
        """Empty the document in place."""

        removed = len(self._doc)
        self._doc.clear()
        log_info("vault_cleared", **make_event("clear", None, {"removed_keys": removed}))

    def clear_key(self, key: str) -> bool:
        """Remove *key* when present; an absent key is a silent no-op."""

        path = split_key(key)
        with self._atomic("clear_key", key, check_size=False):
            existed = remove(self._doc, path)
        return existed

    def list_keys(self, include_nested: bool) -> list[str]:
        """Return keys as described by :func:`enumeration.list_keys`."""

        with self._read_only("list", None):
            return enumeration.list_keys(self._doc, include_nested)

    def list_entries(self) -> list[enumeration.Entry]:
        """Return top-level entries with deep-copied values."""

        with self._read_only("list", None):
            return [entry._replace(value=deepcopy(entry.value)) for entry in enumeration.list_entries(self._doc)]

    def count_keys(self, include_nested: bool) -> int:
        """Return the number of keys a listing would report."""

        with self._read_only("list", None):
            return enumeration.count_keys(self._doc, include_nested)

    def export(self) -> Document:
        """Return a deep copy of the whole document."""

        with self._read_only("export", None):
            return deepcopy(self._doc)

    def _combine(self, mode: MergeMode, existing: Any, value: Any) -> Any:
        """Return the value to store given the write *mode* and the *existing* value."""

        if mode is MergeMode.MERGE and existing is not MISSING and can_merge(existing, value):
            return deep_merge(existing, value)
        return deepcopy(value)

    @contextmanager
    def _atomic(self, operation: str, key: str | None, *, check_size: bool = True) -> Iterator[None]:
        """Run a mutation so it is either fully applied or not applied at all.

        Removing a key never needs the size cap, so ``clear_key`` opts out.
        """

        frozen = size.snapshot(self._doc)
        try:
            yield
            measured = size.validate_size(self._doc, max_size=self._max_size) if check_size else None
        except BaseException as exc:
            size.restore(self._doc, frozen)
            log_error("vault_operation_rolled_back", **make_event(operation, key, {"error": str(exc)}))
            raise
        log_debug(
            "vault_operation_applied",
            **make_event(operation, key, {"top_level_keys": len(self._doc), "bytes": measured}),
        )

    @contextmanager
    def _read_only(self, operation: str, key: str | None) -> Iterator[None]:
        """Guard a read: restore the entry snapshot if the document changed."""

        frozen = size.snapshot(self._doc)
        try:
            yield
        finally:
            if size.serialize(self._doc) != frozen:
                size.restore(self._doc, frozen)
                violation = IntegrityViolation(f"Vault changed during read-only operation {operation}; restored")
                log_error(
                    "vault_integrity_restored",
                    **make_event(operation, key, {"kind": violation.kind.value, "error": str(violation)}),
                )
