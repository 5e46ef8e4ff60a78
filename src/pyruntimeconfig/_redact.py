"""Helpers for safe debug logging.

Requests carry bearer tokens, and the ``text`` field of every variable
holds a whole configuration document, which routinely contains API keys.
Embedded documents are decoded and logged by shape only: keys survive,
string values are replaced by their size.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

_MAX_DEPTH = 20

# Lowercased key fragments; "apiKey", "x-api-key" and "client_secret" all match.
_SECRET_KEY_FRAGMENTS: tuple[str, ...] = (
    "authorization",
    "token",
    "password",
    "secret",
    "privatekey",
    "apikey",
    "credential",
    "cookie",
)

_EMBEDDED_DOCUMENT_KEYS: frozenset[str] = frozenset({"text"})


def _is_secret_key(key: str) -> bool:
    folded = key.lower().replace("_", "").replace("-", "")
    return any(fragment in folded for fragment in _SECRET_KEY_FRAGMENTS)


def _size(text: str) -> int:
    return len(text.encode("utf-8"))


def redact_text(text: str | None) -> Any:
    """Describe an embedded configuration document without its values.

    Text that does not decode to a JSON object or array is reduced to
    ``<text:Nb>``.
    """
    if text is None:
        return "<text:missing>"
    try:
        document = json.loads(text)
    except ValueError:
        return f"<text:{_size(text)}b>"
    if not isinstance(document, (dict, list)):
        return f"<text:{_size(text)}b>"
    return _walk(document, mask_strings=True, max_string=0, depth=0)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    return _walk(value, mask_strings=False, max_string=max_string, depth=0)


def _walk(value: Any, *, mask_strings: bool, max_string: int, depth: int) -> Any:
    if depth > _MAX_DEPTH:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if mask_strings:
            return f"<str:{_size(value)}b>"
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        out: dict[str, Any] = {}
        for raw_key, item in value.items():
            key = str(raw_key)
            if _is_secret_key(key):
                out[key] = "<redacted>"
            elif key in _EMBEDDED_DOCUMENT_KEYS and isinstance(item, str):
                out[key] = redact_text(item)
            else:
                out[key] = _walk(item, mask_strings=mask_strings, max_string=max_string, depth=depth + 1)
        return out

    if isinstance(value, Sequence):
        return [_walk(item, mask_strings=mask_strings, max_string=max_string, depth=depth + 1) for item in value]

    # Credentials and other live objects are shown by type only.
    return f"<{type(value).__name__}>"
