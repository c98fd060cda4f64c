"""Structured payload loaders.

Purpose
-------
Turn inline JSON text or JSON/TOML/YAML files into the values written by the
insert and update operations. Parsing failures surface uniformly as
:class:`MalformedPayload` before the vault is touched.

Contents
--------
* :func:`parse_payload` – inline JSON text.
* :class:`BaseFileLoader` – shared file reading.
* :class:`JSONFileLoader`, :class:`TOMLFileLoader`, :class:`YAMLFileLoader` –
  one loader per format.
* :func:`loader_for` – pick a loader from the file suffix.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

import yaml

from ...domain.errors import MalformedPayload
from ...observability import log_debug, log_error

INVALID_JSON_MESSAGE = "Invalid JSON format"


def parse_payload(text: str) -> Any:
    """Parse inline JSON *text*.

    Examples
    --------
    >>> parse_payload('{"theme": "dark"}')
    {'theme': 'dark'}
    >>> parse_payload('{oops')
    Traceback (most recent call last):
    ...
    lib_json_vault.domain.errors.MalformedPayload: Invalid JSON format
    """

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        log_error("payload_invalid", source="inline", path=None, format="json", error=str(exc))
        raise MalformedPayload(INVALID_JSON_MESSAGE) from exc


class BaseFileLoader:
    """Common utilities shared by the structured file loaders."""

    format_name = "file"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`MalformedPayload` when it is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise MalformedPayload(f"Payload file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("payload_file_read", source="file", path=path, size=len(payload))
        return payload

    def _invalid(self, path: str, exc: Exception) -> MalformedPayload:
        """Log and build the error for a file that failed to parse."""

        log_error("payload_invalid", source="file", path=path, format=self.format_name, error=str(exc))
        return MalformedPayload(f"Invalid {self.format_name.upper()} in {path}: {exc}")


class JSONFileLoader(BaseFileLoader):
    """Load JSON payload files; any JSON value is accepted."""

    format_name = "json"

    def load(self, path: str) -> Any:
        """Return the value stored in the JSON file at *path*."""

        try:
            return json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc


class TOMLFileLoader(BaseFileLoader):
    """Load TOML payload files; TOML documents are always tables (objects)."""

    format_name = "toml"

    def load(self, path: str) -> Any:
        """Return the table parsed from the TOML file at *path*.

        TOML dates and times have no JSON form and are rejected later by the
        store's payload validation.
        """

        try:
            return tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise self._invalid(path, exc) from exc


class YAMLFileLoader(BaseFileLoader):
    """Load YAML payload files with ``yaml.safe_load``; an empty file yields ``None``."""

    format_name = "yaml"

    def load(self, path: str) -> Any:
        """Return the value parsed from the YAML file at *path*."""

        try:
            return yaml.safe_load(self._read(path))
        except yaml.YAMLError as exc:
            raise self._invalid(path, exc) from exc


_LOADERS: dict[str, BaseFileLoader] = {
    ".json": JSONFileLoader(),
    ".toml": TOMLFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str | Path) -> BaseFileLoader:
    """Return the loader registered for the suffix of *path*.

    Examples
    --------
    >>> type(loader_for("payload.yml")).__name__
    'YAMLFileLoader'
    >>> loader_for("payload.txt")
    Traceback (most recent call last):
    ...
    lib_json_vault.domain.errors.MalformedPayload: Unsupported payload file type: .txt (expected .json, .toml, .yaml, .yml)
    """

    suffix = Path(path).suffix.lower()
    try:
        return _LOADERS[suffix]
    except KeyError as exc:
        supported = ", ".join(_LOADERS)
        raise MalformedPayload(f"Unsupported payload file type: {suffix} (expected {supported})") from exc
