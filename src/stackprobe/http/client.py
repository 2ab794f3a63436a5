# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""The seam between probe flows and the network."""

from __future__ import annotations

from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """
    What every probe sends its requests through.

    `request` performs exactly one exchange: no retries, and nothing is raised for
    transport failures. A failure comes back as an HttpResponse with `ok=False`,
    `status_code=None` and the error recorded, so a probe run always reaches its end.
    """

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None: ...


def create_default_http_client(settings: HttpSettings | None = None) -> HttpClient:
    """httpx-backed client built from STACKPROBE_HTTP_* settings unless given explicit ones."""
    from .httpx_client import HttpxClient

    return HttpxClient(settings or load_http_settings())


__all__ = ["HttpClient", "create_default_http_client"]
