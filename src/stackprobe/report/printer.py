# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable rendering of probe results."""

from __future__ import annotations

import json
import sys
from typing import TextIO

from ..http.headers import header_value, redact_headers
from ..http.models import HttpResponse

OPTIONS_MAX_LINES = 25


def format_body(text: str | None) -> str:
    """Pretty-print a JSON body with 2-space indent; anything else comes back verbatim."""
    raw = text or ""
    if not raw.strip():
        return raw
    try:
        parsed = json.loads(raw)
    except ValueError:
        return raw
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def truncation_note(response: HttpResponse) -> str:
    limit = response.meta.get("body_bytes_limit", "?")
    return f"(body cut at {limit} bytes; raise STACKPROBE_HTTP_MAX_BODY_BYTES to see all of it)"


class ResultPrinter:
    """Writes report sections to a text stream (stdout unless given)."""

    def __init__(self, stream: TextIO | None = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def line(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def lines(self, texts: list[str]) -> None:
        for text in texts:
            self.line(text)

    def block(self, text: str) -> None:
        self.stream.write(text if text.endswith("\n") else f"{text}\n")

    def heading(self, title: str) -> None:
        self.line(f"== {title} ==")

    def body(self, response: HttpResponse) -> None:
        if response.text:
            self.block(format_body(response.text))
        if response.truncated:
            self.line(truncation_note(response))

    def status(self, response: HttpResponse) -> None:
        self.line(response.status_label)
        self.body(response)

    def print_result(self, label: str, method: str, url: str, response: HttpResponse) -> None:
        self.line()
        self.line(f"-- {label}")
        self.line(f"{method.upper()} {url}")
        self.status(response)

    def print_headers(self, label: str, method: str, url: str, response: HttpResponse) -> None:
        """Status line plus headers and body, cut at OPTIONS_MAX_LINES like `curl -i | sed -n 1,25p`."""
        self.line()
        self.line(f"-- {label}")
        self.line(f"{method.upper()} {url}")

        raw: list[str] = [response.status_line]
        if response.received:
            raw.extend(f"{name}: {value}" for name, value in redact_headers(response.headers))
            raw.append("")
            if response.text:
                raw.extend(response.text.splitlines())
        self.lines(raw[:OPTIONS_MAX_LINES])

        allow = header_value(response.headers, "Allow")
        if allow:
            self.line(f"Allow => {allow}")


__all__ = ["OPTIONS_MAX_LINES", "ResultPrinter", "format_body", "truncation_note"]
