"""Override bag for Request construction.

A Request is built from a URL plus an optional override bag: values that
replace what the URL (or the defaults) would give. Whoever extracts request
data from a server environment hands it over in this shape:

    dict → parse_overrides() → RequestOverrides → Request(url, overrides)

Recognized keys:

| Key          | Field          | Value                               |
|--------------|----------------|-------------------------------------|
| method       | method         | str                                 |
| scheme       | scheme         | "http" or "https"                   |
| user         | user           | str                                 |
| pass         | password       | str                                 |
| host         | host           | str                                 |
| port         | port           | int, or a str of digits             |
| path         | path           | str                                 |
| basePath     | base_path      | str                                 |
| scriptPath   | script_path    | str                                 |
| search       | search         | dict (query parameters)             |
| headers      | headers        | dict[str, str]                      |
| post         | post           | dict (form fields)                  |
| files        | files          | dict[str, UploadedFile or dict]     |
| payload      | payload        | bytes, or str (encoded as UTF-8)    |
| params       | params         | dict[str, str] (route parameters)   |

``password``, ``base_path`` and ``script_path`` are accepted as aliases.
A key whose value is None is treated as missing.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from frontpath._errors import OverridesParseError

# ═══════════════════════════════════════════════════════════════════════════════
# Override types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """Descriptor of one uploaded file. The content itself is not held."""

    filename: str
    content_type: str = "application/octet-stream"
    size: int = 0
    tmp_path: str | None = None
    error: int = 0

    @property
    def ok(self) -> bool:
        """True when the upload completed without error."""
        return self.error == 0


@dataclass(frozen=True, slots=True)
class RequestOverrides:
    """Field values that override URL-derived values and defaults.

    None means "not overridden".
    """

    method: str | None = None
    scheme: str | None = None
    user: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    base_path: str | None = None
    script_path: str | None = None
    search: dict[str, Any] | None = None
    headers: dict[str, str] | None = None
    post: dict[str, Any] | None = None
    files: dict[str, UploadedFile] | None = None
    payload: bytes | None = None
    params: dict[str, str] | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → RequestOverrides)
# ═══════════════════════════════════════════════════════════════════════════════

_KEYS = {
    "method": "method",
    "scheme": "scheme",
    "user": "user",
    "pass": "password",
    "password": "password",
    "host": "host",
    "port": "port",
    "path": "path",
    "basePath": "base_path",
    "base_path": "base_path",
    "scriptPath": "script_path",
    "script_path": "script_path",
    "search": "search",
    "headers": "headers",
    "post": "post",
    "files": "files",
    "payload": "payload",
    "params": "params",
}

_STRING_FIELDS = frozenset(
    {"method", "scheme", "user", "password", "host", "path", "base_path", "script_path"}
)
_DICT_FIELDS = frozenset({"search", "post"})
_STRING_DICT_FIELDS = frozenset({"headers", "params"})

# Server-style upload keys (name, type, tmp_name) next to our own field names
_FILE_KEYS = {
    "name": "filename",
    "filename": "filename",
    "type": "content_type",
    "content_type": "content_type",
    "size": "size",
    "tmp_name": "tmp_path",
    "tmp_path": "tmp_path",
    "error": "error",
}


def parse_overrides(data: Mapping[str, Any]) -> RequestOverrides:
    """Parse an override dict into RequestOverrides.

    Raises:
        OverridesParseError: If the dict has unknown keys or a value has the
            wrong type.
    """
    if not isinstance(data, Mapping):
        msg = f"expected a mapping, got {type(data).__name__}"
        raise OverridesParseError(msg)

    values: dict[str, Any] = {}
    for key, value in data.items():
        name = _KEYS.get(key)
        if name is None:
            msg = f"unknown override key: {key!r} (expected one of {sorted(_KEYS)})"
            raise OverridesParseError(msg)
        if value is None:
            continue
        if name in values:
            msg = f"override {name!r} given more than once"
            raise OverridesParseError(msg)
        values[name] = _parse_value(key, name, value)

    return RequestOverrides(**values)


def _parse_value(key: str, name: str, value: Any) -> Any:
    if name in _STRING_FIELDS:
        return _parse_string(key, value)
    if name == "port":
        return _parse_port(value)
    if name in _DICT_FIELDS:
        return dict(_parse_mapping(key, value))
    if name in _STRING_DICT_FIELDS:
        return {
            str(k): _parse_string(f"{key}.{k}", v)
            for k, v in _parse_mapping(key, value).items()
        }
    if name == "files":
        return {
            str(k): _parse_file(f"files.{k}", v)
            for k, v in _parse_mapping(key, value).items()
        }
    return _parse_payload(value)


def _parse_string(key: str, value: Any) -> str:
    if not isinstance(value, str):
        msg = f"{key!r} must be a string, got {type(value).__name__}"
        raise OverridesParseError(msg)
    return value


def _parse_mapping(key: str, value: Any) -> Mapping[Any, Any]:
    if not isinstance(value, Mapping):
        msg = f"{key!r} must be a mapping, got {type(value).__name__}"
        raise OverridesParseError(msg)
    return value


def _parse_port(value: Any) -> int:
    """Server environments hand the port over as a string of digits."""
    if isinstance(value, bool):
        msg = "'port' must be an integer, got bool"
        raise OverridesParseError(msg)
    if isinstance(value, str):
        if not (value.isascii() and value.strip().isdigit()):
            msg = f"'port' must be numeric, got {value!r}"
            raise OverridesParseError(msg)
        value = int(value)
    if not isinstance(value, int):
        msg = f"'port' must be an integer, got {type(value).__name__}"
        raise OverridesParseError(msg)
    if not 0 <= value <= 65535:
        msg = f"'port' out of range 0-65535: {value}"
        raise OverridesParseError(msg)
    return value


def _parse_payload(value: Any) -> bytes:
    if isinstance(value, str):
        return value.encode()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    msg = f"'payload' must be bytes or str, got {type(value).__name__}"
    raise OverridesParseError(msg)


def _parse_file(key: str, value: Any) -> UploadedFile:
    if isinstance(value, UploadedFile):
        return value

    kwargs: dict[str, Any] = {}
    for file_key, file_value in _parse_mapping(key, value).items():
        name = _FILE_KEYS.get(file_key)
        if name is None:
            msg = f"unknown upload key: {key}.{file_key}"
            raise OverridesParseError(msg)
        kwargs[name] = file_value

    if not isinstance(kwargs.get("filename"), str):
        msg = f"{key!r} requires a 'name' string"
        raise OverridesParseError(msg)
    for int_field in ("size", "error"):
        if int_field in kwargs and not isinstance(kwargs[int_field], int):
            msg = f"{key}.{int_field} must be an integer"
            raise OverridesParseError(msg)
    return UploadedFile(**kwargs)
