"""Composition root for ``lib_json_vault``.

Purpose
-------
Provide the host-facing operations (Insert JSON, Update JSON, Delete JSON,
Find Key, Clear JSON, List JSON, JSON Vault). Each operation borrows the
document from a :class:`DocumentSlot`, runs every input item through a
:class:`VaultStore`, and turns the typed outcomes into result records.

Contents
--------
* ``InsertParams`` … ``ListParams`` – per-operation parameters.
* :func:`insert_json`, :func:`update_json`, :func:`delete_json`,
  :func:`find_key`, :func:`clear_json`, :func:`list_json` – batch operations.
* :func:`vault_action` – initialise/view or clear the whole vault.
* :func:`_run_batch` – the continue-on-fail batch convention.

System Role
-----------
Records spread the input item's fields and add ``success`` plus the
operation's own fields. By default the first failing item aborts the batch
with a :class:`VaultError` tagged with that item's index; with
``continue_on_fail`` the item yields an error record instead. Mutating
operations save the slot even when the batch aborts, so items applied before
the failing one persist the same way for in-memory and file-backed slots. Read
operations use :meth:`DocumentSlot.view` and never create a vault.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

from .adapters.payload.structured import parse_payload
from .application import size
from .application.options import (
    ClearMode,
    DataSource,
    OutputFormat,
    VaultAction,
    parse_choice,
)
from .application.ports import DocumentSlot
from .application.store import VaultStore
from .domain.errors import KeyInvalid, VaultError
from .domain.keys import validate_key
from .observability import log_info

Item = Mapping[str, Any]
Record = dict[str, Any]


@dataclass(frozen=True, slots=True)
class InsertParams:
    """Parameters of :func:`insert_json`.

    ``data`` is used when ``data_source`` is ``"manual"``: text is parsed as
    JSON, any other value is stored as given. With ``"input"`` each item's own
    fields become the payload.
    """

    key: str
    data: Any = None
    merge_mode: str = "replace"
    data_source: str = "manual"


@dataclass(frozen=True, slots=True)
class UpdateParams:
    """Parameters of :func:`update_json` (merge mode and key creation on by default)."""

    key: str
    data: Any = None
    merge_mode: str = "merge"
    create_if_not_exists: bool = True
    data_source: str = "manual"


@dataclass(frozen=True, slots=True)
class DeleteParams:
    """Parameters of :func:`delete_json`."""

    key: str
    error_if_not_exists: bool = False


@dataclass(frozen=True, slots=True)
class FindParams:
    """Parameters of :func:`find_key`."""

    key: str
    error_if_not_exists: bool = False


@dataclass(frozen=True, slots=True)
class ClearParams:
    """Parameters of :func:`clear_json`; ``key`` is only read in ``"key"`` mode."""

    clear_mode: str = "all"
    key: str = ""


@dataclass(frozen=True, slots=True)
class ListParams:
    """Parameters of :func:`list_json`."""

    output_format: str = "full"
    include_nested: bool = True


def insert_json(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: InsertParams,
    *,
    continue_on_fail: bool = False,
    max_size: int = size.MAX_VAULT_SIZE,
) -> list[Record]:
    """Insert the payload at ``params.key`` for every item.

    Examples
    --------
    >>> from lib_json_vault.adapters.slots.memory import StaticDataSlot
    >>> slot = StaticDataSlot()
    >>> insert_json(slot, [{}], InsertParams(key="users.admin", data='{"theme": "dark"}'))
    [{'success': True, 'key': 'users.admin', 'action': 'inserted', 'vaultSize': 1}]
    """

    doc = slot.load()
    store = VaultStore(doc, max_size=max_size)

    def apply(item: Item) -> Record:
        key = validate_key(params.key)
        value = _resolve_payload(params.data, params.data_source, item)
        result = store.insert(key, value, merge_mode=params.merge_mode)
        return {"success": True, "key": result.key, "action": result.action, "vaultSize": result.vault_size}

    try:
        return _run_batch("insert", items, apply, continue_on_fail)
    finally:
        slot.save(doc)


def update_json(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: UpdateParams,
    *,
    continue_on_fail: bool = False,
    max_size: int = size.MAX_VAULT_SIZE,
) -> list[Record]:
    """Update ``params.key`` for every item, deep-merging objects by default."""

    doc = slot.load()
    store = VaultStore(doc, max_size=max_size)

    def apply(item: Item) -> Record:
        key = validate_key(params.key)
        value = _resolve_payload(params.data, params.data_source, item)
        result = store.update(
            key,
            value,
            merge_mode=params.merge_mode,
            create_if_not_exists=params.create_if_not_exists,
        )
        return {
            "success": True,
            "key": result.key,
            "action": result.action,
            "existed": result.existed,
            "vaultSize": result.vault_size,
        }

    try:
        return _run_batch("update", items, apply, continue_on_fail)
    finally:
        slot.save(doc)


def delete_json(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: DeleteParams,
    *,
    continue_on_fail: bool = False,
) -> list[Record]:
    """Delete ``params.key`` for every item; ``deletedValue`` appears only when something was removed."""

    doc = slot.load()
    store = VaultStore(doc)

    def apply(item: Item) -> Record:
        result = store.delete(params.key, error_if_not_exists=params.error_if_not_exists)
        record: Record = {"success": True, "key": result.key, "action": "deleted", "existed": result.existed}
        if result.existed:
            record["deletedValue"] = result.deleted_value
        record["vaultSize"] = result.vault_size
        return record

    try:
        return _run_batch("delete", items, apply, continue_on_fail)
    finally:
        slot.save(doc)


def find_key(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: FindParams,
    *,
    continue_on_fail: bool = False,
) -> list[Record]:
    """Look ``params.key`` up for every item; the vault is never written back."""

    store = VaultStore(slot.view())

    def apply(item: Item) -> Record:
        result = store.find(params.key, error_if_not_exists=params.error_if_not_exists)
        return {
            "success": True,
            "key": result.key,
            "found": result.found,
            "value": result.value,
            "vaultSize": result.vault_size,
        }

    return _run_batch("find", items, apply, continue_on_fail)


def clear_json(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: ClearParams,
    *,
    continue_on_fail: bool = False,
) -> list[Record]:
    """Empty the vault or remove one key (silently when absent) for every item."""

    doc = slot.load()
    store = VaultStore(doc)

    def apply(item: Item) -> Record:
        match parse_choice(ClearMode, params.clear_mode, "clear mode"):
            case ClearMode.ALL:
                store.clear()
                return {"success": True, "action": "cleared_all", "vaultSize": store.vault_size}
            case ClearMode.KEY:
                if not params.key:
                    raise KeyInvalid('Key is required when Clear Mode is "Clear Specific Key"')
                store.clear_key(params.key)
                return {"success": True, "action": "cleared_key", "key": params.key, "vaultSize": store.vault_size}

    try:
        return _run_batch("clear", items, apply, continue_on_fail)
    finally:
        slot.save(doc)


def list_json(
    slot: DocumentSlot,
    items: Sequence[Item],
    params: ListParams,
    *,
    continue_on_fail: bool = False,
) -> list[Record]:
    """Describe the vault once per item (or once for an empty batch) without mutating it."""

    store = VaultStore(slot.view())

    def apply(item: Item) -> Record:
        match parse_choice(OutputFormat, params.output_format, "output format"):
            case OutputFormat.VAULT:
                output: Record = {
                    "vault": store.export(),
                    "totalKeys": store.count_keys(False),
                    "totalKeysNested": store.count_keys(params.include_nested),
                }
            case OutputFormat.KEYS:
                keys = store.list_keys(params.include_nested)
                output = {"keys": keys, "count": len(keys)}
            case OutputFormat.FULL:
                entries = [
                    {"key": entry.key, "value": entry.value, "isNested": entry.is_nested}
                    for entry in store.list_entries()
                ]
                output = {"items": entries, "count": len(entries)}
        return {**output, "success": True}

    return _run_batch("list", items or [{}], apply, continue_on_fail)


def vault_action(slot: DocumentSlot, action: str = "init") -> Record:
    """Initialise/view the vault, or clear it, and return a copy of the whole document.

    Examples
    --------
    >>> from lib_json_vault.adapters.slots.memory import StaticDataSlot
    >>> slot = StaticDataSlot({"jsonVault": {"a": 1}})
    >>> vault_action(slot), vault_action(slot, "clear")
    ({'a': 1}, {})
    """

    doc = slot.load()
    store = VaultStore(doc)
    match parse_choice(VaultAction, action, "vault action"):
        case VaultAction.CLEAR:
            store.clear()
            slot.save(doc)
        case VaultAction.INIT:
            pass
    size.validate_size(doc)
    return store.export()


def _resolve_payload(data: Any, data_source: str, item: Item) -> Any:
    """Return the value a write should store for *item*."""

    match parse_choice(DataSource, data_source, "data source"):
        case DataSource.MANUAL:
            return parse_payload(data) if isinstance(data, str) else data
        case DataSource.INPUT:
            return dict(item)


def _run_batch(
    operation: str,
    items: Sequence[Item],
    apply: Callable[[Item], Record],
    continue_on_fail: bool,
) -> list[Record]:
    """Apply *apply* to each item and collect records.

    A :class:`VaultError` either aborts the batch, re-raised with the failing
    item's index, or becomes an error record when *continue_on_fail* is set.
    """

    records: list[Record] = []
    for index, item in enumerate(items):
        try:
            outcome = apply(item)
        except VaultError as exc:
            log_info("batch_item_failed", operation=operation, item_index=index, kind=exc.kind.value, error=str(exc))
            if not continue_on_fail:
                tagged = exc.with_item_index(index)
                if tagged is exc:
                    raise
                raise tagged from exc
            records.append({**item, "error": str(exc), "success": False})
            continue
        records.append({**item, **outcome})
    return records