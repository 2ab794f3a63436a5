# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header utilities.

HTTP header field names are case-insensitive (RFC 9110). Responses are stored as plain
dicts, so reads go through these helpers instead of indexing directly.
"""

from __future__ import annotations

from collections.abc import Mapping

AUTH_HEADER = "X-API-Key"
_SECRET_HEADERS = {AUTH_HEADER.lower(), "authorization", "cookie", "set-cookie"}


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def redact_headers(headers: Mapping[object, object] | None) -> list[tuple[str, str]]:
    """Header pairs safe to print: credential-bearing values are masked."""
    if not headers:
        return []
    pairs: list[tuple[str, str]] = []
    for key, value in headers.items():
        if key is None:
            continue
        name = str(key)
        shown = "..." if name.lower() in _SECRET_HEADERS else ("" if value is None else str(value))
        pairs.append((name, shown))
    return pairs


__all__ = ["AUTH_HEADER", "header_value", "redact_headers"]
