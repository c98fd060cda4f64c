"""Public package surface for ``lib_json_vault``.

Exports the host-facing operations, the document store, the slot adapters, and
the error taxonomy so ``import lib_json_vault`` is enough for embedding hosts.
"""

from __future__ import annotations

from .adapters.slots.json_file import JsonFileSlot
from .adapters.slots.memory import StaticDataSlot
from .application.enumeration import list_entries, list_keys
from .application.merge import deep_merge
from .application.size import MAX_VAULT_SIZE
from .application.store import VaultStore
from .core import (
    ClearParams,
    DeleteParams,
    FindParams,
    InsertParams,
    ListParams,
    UpdateParams,
    clear_json,
    delete_json,
    find_key,
    insert_json,
    list_json,
    update_json,
    vault_action,
)
from .domain.errors import (
    ErrorKind,
    InvalidOption,
    KeyAlreadyExists,
    KeyInvalid,
    KeyNotFound,
    MalformedPayload,
    VaultError,
    VaultSizeExceeded,
)
from .observability import bind_trace_id, get_logger, trace_scope

__all__ = [
    "ClearParams",
    "DeleteParams",
    "ErrorKind",
    "FindParams",
    "InsertParams",
    "InvalidOption",
    "JsonFileSlot",
    "KeyAlreadyExists",
    "KeyInvalid",
    "KeyNotFound",
    "ListParams",
    "MAX_VAULT_SIZE",
    "MalformedPayload",
    "StaticDataSlot",
    "UpdateParams",
    "VaultError",
    "VaultSizeExceeded",
    "VaultStore",
    "bind_trace_id",
    "clear_json",
    "deep_merge",
    "delete_json",
    "find_key",
    "get_logger",
    "insert_json",
    "list_entries",
    "list_json",
    "list_keys",
    "update_json",
    "trace_scope",
    "vault_action",
]
