"""Structured logging for vault operations.

Purpose
    Every store mutation, rollback, integrity repair, and slot round trip is
    reported as a named event with a ``context`` mapping, so a host can follow
    one workflow run through the vault without the library picking a logging
    backend for it.

Contents
    - ``TRACE_ID``: context variable holding the identifier of the current run.
    - ``get_logger``: the package logger, silent until the host adds handlers.
    - ``bind_trace_id`` / ``trace_scope``: set the identifier for the rest of a
      context, or only for a ``with`` block.
    - ``log_debug`` / ``log_info`` / ``log_error``: emit an event at a level.
    - ``make_event``: ``operation``/``key`` payload shared by store events.

System Integration
    :mod:`lib_json_vault.application.store` reports commits, rollbacks and
    repairs; the slot and payload adapters report I/O; :mod:`lib_json_vault.core`
    reports failed batch items. The CLI opens a :func:`trace_scope` per
    invocation. The domain layer never logs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any, Final, Mapping

TRACE_ID: ContextVar[str | None] = ContextVar("lib_json_vault_trace_id", default=None)

_LOGGER: Final[logging.Logger] = logging.getLogger("lib_json_vault")
_LOGGER.addHandler(logging.NullHandler())


def get_logger() -> logging.Logger:
    """Return the ``lib_json_vault`` logger so hosts can attach handlers."""

    return _LOGGER


def bind_trace_id(trace_id: str | None) -> Token[str | None]:
    """Bind *trace_id* (``None`` clears it) and return the token to undo it.

    Examples
    --------
    >>> token = bind_trace_id('run-42')
    >>> TRACE_ID.get()
    'run-42'
    >>> TRACE_ID.reset(token)
    >>> TRACE_ID.get() is None
    True
    """

    return TRACE_ID.set(trace_id)


@contextmanager
def trace_scope(trace_id: str | None) -> Iterator[str | None]:
    """Bind *trace_id* for the duration of a ``with`` block only.

    Examples
    --------
    >>> with trace_scope('cli-1'):
    ...     TRACE_ID.get()
    'cli-1'
    >>> TRACE_ID.get() is None
    True
    """

    token = bind_trace_id(trace_id)
    try:
        yield trace_id
    finally:
        TRACE_ID.reset(token)


def log_debug(event: str, **fields: Any) -> None:
    """Emit *event* at debug level (commits, slot I/O)."""

    _emit(logging.DEBUG, event, fields)


def log_info(event: str, **fields: Any) -> None:
    """Emit *event* at info level (clears, failed batch items)."""

    _emit(logging.INFO, event, fields)


def log_error(event: str, **fields: Any) -> None:
    """Emit *event* at error level (rollbacks, integrity repairs, bad input)."""

    _emit(logging.ERROR, event, fields)


def make_event(
    operation: str,
    key: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the ``operation``/``key`` fields of a store event plus *payload*.

    Examples
    --------
    >>> make_event('insert', 'users.admin', {'top_level_keys': 1})
    {'operation': 'insert', 'key': 'users.admin', 'top_level_keys': 1}
    """

    return {"operation": operation, "key": key, **(payload or {})}


def _emit(level: int, event: str, fields: Mapping[str, Any]) -> None:
    if not _LOGGER.isEnabledFor(level):
        return
    _LOGGER.log(level, event, extra={"context": {"trace_id": TRACE_ID.get(), **fields}})
