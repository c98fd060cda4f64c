"""Key grammar and dotted-path parsing.

Keys are the external names of vault paths: ASCII letters, digits, ``.``,
``-`` and ``_``. The dot doubles as the nesting separator, so a key such as
``users.admin`` addresses ``{"users": {"admin": ...}}``. There is no escaping;
a segment can never contain a literal dot.

Keys that would split into an empty segment (``a..b``, ``.a``, ``a.``) are
rejected here so the path layer only ever sees non-empty segments.
"""

from __future__ import annotations

import re
from typing import Final

from .errors import KeyInvalid

KEY_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_.-]+$")
SEPARATOR: Final[str] = "."

EMPTY_KEY_MESSAGE: Final[str] = "Key is required and cannot be empty"
INVALID_KEY_MESSAGE: Final[str] = (
    "Invalid key format. Keys can only contain letters, numbers, dots, hyphens, and underscores"
)


def validate_key(key: object) -> str:
    """Return *key* unchanged or raise :class:`KeyInvalid`."""

    if not key:
        raise KeyInvalid(EMPTY_KEY_MESSAGE)
    if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
        raise KeyInvalid(INVALID_KEY_MESSAGE)
    if not all(key.split(SEPARATOR)):
        raise KeyInvalid(f'Invalid key format. Key "{key}" contains an empty path segment')
    return key


def split_key(key: str) -> tuple[str, ...]:
    """Validate *key* and return its path segments.

    Examples
    --------
    >>> split_key("users.admin.settings")
    ('users', 'admin', 'settings')
    >>> split_key("plain")
    ('plain',)
    """

    return tuple(validate_key(key).split(SEPARATOR))


def join_path(segments: tuple[str, ...] | list[str]) -> str:
    """Join *segments* back into a dotted key (inverse of :func:`split_key`)."""

    return SEPARATOR.join(segments)
