"""Redaction helpers for request/response traces.

Headers carry the bearer token; step bodies are plain JSON but can hold
long field lists. :func:`redact_headers` masks credentials while keeping
the auth scheme visible, and :func:`redact_for_log` shortens JSON bodies
and masks credential-like keys before they reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SECRET_HEADERS: frozenset[str] = frozenset({"authorization", "cookie", "set-cookie", "proxy-authorization"})
_SECRET_BODY_KEYS: frozenset[str] = frozenset({"token", "accesstoken", "refreshtoken", "password", "secret"})

_REDACTED = "<redacted>"


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Mask credential headers, keeping the scheme (``Bearer <redacted>``)."""
    redacted: dict[str, str] = {}
    for name, value in headers.items():
        if name.lower() not in _SECRET_HEADERS:
            redacted[name] = value
            continue
        scheme, sep, _credentials = str(value).partition(" ")
        redacted[name] = f"{scheme} {_REDACTED}" if sep else _REDACTED
    return redacted


def redact_for_log(body: Any, *, max_string: int = 200, max_items: int = 20) -> Any:
    """Return a log-safe copy of a JSON body.

    Strings longer than *max_string* are cut, lists keep their first
    *max_items* entries plus a count of the rest.
    """
    if isinstance(body, str):
        return body if len(body) <= max_string else f"{body[:max_string]}…<+{len(body) - max_string} chars>"

    if isinstance(body, Mapping):
        return {
            str(key): _REDACTED
            if str(key).lower() in _SECRET_BODY_KEYS
            else redact_for_log(value, max_string=max_string, max_items=max_items)
            for key, value in body.items()
        }

    if isinstance(body, (list, tuple)):
        kept = [redact_for_log(item, max_string=max_string, max_items=max_items) for item in body[:max_items]]
        if len(body) > max_items:
            kept.append(f"<+{len(body) - max_items} more>")
        return kept

    return body
