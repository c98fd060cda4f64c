"""Unit tests for structured logging utilities in ``observability``.

Validates the null handler, trace binding, and event construction behaviour
the store and the operations rely on.
"""

from __future__ import annotations

import logging

import pytest

from lib_json_vault import bind_trace_id, get_logger, trace_scope
from lib_json_vault.observability import TRACE_ID, log_debug, log_info, make_event


def test_null_handler_present() -> None:
    """Package logger should always include a NullHandler to avoid surprises."""

    logger = get_logger()
    assert any(isinstance(handler, logging.NullHandler) for handler in logger.handlers)


def test_trace_id_in_log(caplog: pytest.LogCaptureFixture) -> None:
    """Structured logs should include the bound trace identifier and contextual fields."""

    caplog.set_level(logging.INFO, logger="lib_json_vault")
    bind_trace_id("trace-123")
    try:
        log_info("vault_cleared", operation="clear", key=None)
    finally:
        bind_trace_id(None)
    record = caplog.records[-1]
    assert getattr(record, "context") == {"trace_id": "trace-123", "operation": "clear", "key": None}


def test_bind_trace_id_clears_context() -> None:
    """Clearing the trace ID should reset the context variable to None."""

    bind_trace_id("trace-temp")
    bind_trace_id(None)
    assert TRACE_ID.get() is None


def test_make_event_merges_optional_payload() -> None:
    """make_event should merge optional metadata without dropping base keys."""

    event = make_event("delete", "users.admin", {"top_level_keys": 3})
    assert event == {"operation": "delete", "key": "users.admin", "top_level_keys": 3}
    assert make_event("find", None) == {"operation": "find", "key": None}


def test_trace_scope_restores_previous_binding(caplog: pytest.LogCaptureFixture) -> None:
    """A scoped trace id applies only inside the block and restores the outer one."""

    caplog.set_level(logging.DEBUG, logger="lib_json_vault")
    token = bind_trace_id("outer")
    try:
        with trace_scope("inner"):
            log_debug("vault_slot_saved", slot="memory")
        assert TRACE_ID.get() == "outer"
    finally:
        TRACE_ID.reset(token)
    assert caplog.records[-1].context == {"trace_id": "inner", "slot": "memory"}


def test_events_below_logger_level_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    """Disabled levels produce no records."""

    caplog.set_level(logging.ERROR, logger="lib_json_vault")
    log_info("vault_cleared", operation="clear", key=None)
    assert not [record for record in caplog.records if record.name == "lib_json_vault"]
