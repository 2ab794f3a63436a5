# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Portainer base URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

API_SEGMENT = "/api"


def normalize_base_url(raw_url: str) -> str:
    """
    Reduce a user-supplied Portainer URL to the base that `/api/<route>` is appended to.

    Drops the query string, fragment, trailing slashes and any `/api` or `/api/...`
    suffix. Only the path is inspected, so a host named `api` survives. A proxy
    prefix that itself contains an `/api/` segment is cut at that segment.

    Example:
      https://portainer.example.com/api/stacks?x=1 -> https://portainer.example.com
    """
    raw = str(raw_url or "").strip()
    if not raw:
        return ""
    parts = urlsplit(raw)
    path = parts.path.rstrip("/")

    cut = path.find(API_SEGMENT + "/")
    if cut != -1:
        path = path[:cut]
    if path.endswith(API_SEGMENT):
        path = path[: -len(API_SEGMENT)]
    path = path.rstrip("/")

    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def api_url(base_url: str, route: str) -> str:
    """Join a normalized base with an API route: api_url(base, "stacks") -> <base>/api/stacks."""
    return f"{base_url}{API_SEGMENT}/{str(route).lstrip('/')}"


__all__ = ["api_url", "normalize_base_url"]
