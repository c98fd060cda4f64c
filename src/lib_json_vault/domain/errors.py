"""Domain-level exception hierarchy.

Purpose
-------
Expose the stable error taxonomy shared by the store, the operations layer,
and consuming hosts. The hierarchy lives in the domain layer so every outer
layer can depend on it.

Contents
--------
* :class:`ErrorKind` – closed enumeration of failure categories.
* :class:`VaultError` – umbrella base class carrying kind, message and an
  optional batch item index.
* :class:`KeyInvalid`, :class:`KeyAlreadyExists`, :class:`KeyNotFound`,
  :class:`MalformedPayload`, :class:`VaultSizeExceeded`,
  :class:`InvalidOption`, :class:`IntegrityViolation` – concrete failures.

System Role
-----------
Validation failures are raised before the document is touched. Failures raised
after a tentative mutation are re-raised by the store only once the snapshot has
been restored. The batch runner in :mod:`lib_json_vault.core` attaches the
failing item index exactly once via :meth:`VaultError.with_item_index`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced to hosts."""

    KEY_INVALID = "key_invalid"
    KEY_ALREADY_EXISTS = "key_already_exists"
    KEY_NOT_FOUND = "key_not_found"
    MALFORMED_PAYLOAD = "malformed_payload"
    VAULT_SIZE_EXCEEDED = "vault_size_exceeded"
    INVALID_OPTION = "invalid_option"
    INTEGRITY_VIOLATION = "integrity_violation"


class VaultError(Exception):
    """Base type for all exceptions emitted by ``lib_json_vault``.

    Why
    ----
    Provide a single catch-all type for hosts that do not need fine-grained
    handling, while still exposing :attr:`kind` for those that do.

    What
    ----
    Stores a human readable :attr:`message` and the :attr:`item_index` of the
    batch item that failed (``None`` until the batch boundary sets it).

    Examples
    --------
    >>> error = KeyNotFound('Key "a" does not exist in the vault')
    >>> error.kind.value, error.item_index
    ('key_not_found', None)
    >>> error.with_item_index(2).item_index
    2
    """

    kind: ErrorKind = ErrorKind.INTEGRITY_VIOLATION

    def __init__(self, message: str, *, item_index: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.item_index = item_index

    def with_item_index(self, item_index: int) -> VaultError:
        """Return a copy of this error tagged with *item_index*.

        The original instance is left untouched; callers raise the copy
        ``from`` the original so the traceback chain is preserved. An index
        that is already set is kept.
        """

        if self.item_index is not None:
            return self
        return type(self)(self.message, item_index=item_index)

    def __str__(self) -> str:
        return self.message


class KeyInvalid(VaultError):
    """Raised when a key is empty or violates the key grammar."""

    kind = ErrorKind.KEY_INVALID


class KeyAlreadyExists(VaultError):
    """Raised by replace-mode inserts that target an occupied path."""

    kind = ErrorKind.KEY_ALREADY_EXISTS


class KeyNotFound(VaultError):
    """Raised when a required key is absent (update without create, strict delete/find)."""

    kind = ErrorKind.KEY_NOT_FOUND


class MalformedPayload(VaultError):
    """Raised when a payload cannot be parsed or is not JSON-representable."""

    kind = ErrorKind.MALFORMED_PAYLOAD


class VaultSizeExceeded(VaultError):
    """Raised when a mutation would push the serialized vault over the size cap."""

    kind = ErrorKind.VAULT_SIZE_EXCEEDED


class InvalidOption(VaultError):
    """Raised when an operation option holds a value outside its documented choices."""

    kind = ErrorKind.INVALID_OPTION


class IntegrityViolation(VaultError):
    """Describes a read-only operation that found the document changed underneath it.

    Current Usage
    -------------
    Never raised to callers; the store restores the document and logs the
    violation through :mod:`lib_json_vault.observability`.
    """

    kind = ErrorKind.INTEGRITY_VIOLATION
