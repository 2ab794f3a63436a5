# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations."""

from __future__ import annotations

from .client import HttpClient
from .models import HttpRequest, HttpResponse


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and dry runs.

    Responses are keyed by `(METHOD, url)` first, then by bare `url`.
    """

    def __init__(self, responses: dict[str, HttpResponse] | None = None):
        self._responses: dict[object, HttpResponse] = dict(responses or {})
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse, *, method: str | None = None) -> None:
        key: object = (method.upper(), url) if method else url
        self._responses[key] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        keyed = (request.method.upper(), request.url)
        if keyed in self._responses:
            return self._responses[keyed]
        if request.url in self._responses:
            return self._responses[request.url]
        return HttpResponse(
            ok=False,
            status_code=None,
            url=request.url,
            error_type="StubMiss",
            error_message="No stubbed response configured",
        )

    def close(self) -> None:
        self.closed = True


__all__ = ["StubHttpClient"]
