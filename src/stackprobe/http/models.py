# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across stackprobe."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import error_category_to_reason

Headers = dict[str, str]

NO_RESPONSE_CODE = "000"


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations."""

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    timeout: float | None = None
    allow_redirects: bool | None = None


@dataclass
class HttpResponse:
    """
    Normalized HTTP response.

    `status_code` is None when no response was received at all (DNS failure, refused
    connection, timeout); that case is kept apart from any real status the server sent.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    http_version: str = "HTTP/1.1"
    reason_phrase: str = ""
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def received(self) -> bool:
        return self.status_code is not None

    @property
    def truncated(self) -> bool:
        return bool(self.meta.get("body_truncated"))

    @property
    def status_label(self) -> str:
        """`HTTP <code>`, or `HTTP 000 (no response: ...)` when the transport failed."""
        if self.status_code is not None:
            return f"HTTP {self.status_code}"
        reason = error_category_to_reason(self.meta.get("error_category"))
        detail = ": ".join(part for part in (reason, self.error_type, self.error_message) if part)
        return f"HTTP {NO_RESPONSE_CODE} (no response: {detail or 'unknown error'})"

    @property
    def status_line(self) -> str:
        """Raw-style status line, e.g. `HTTP/1.1 204 No Content`."""
        if self.status_code is None:
            return self.status_label
        return " ".join(part for part in (self.http_version, str(self.status_code), self.reason_phrase) if part)
