# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import AUTH_HEADER, header_value, redact_headers
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .url import api_url, normalize_base_url

__all__ = [
    "AUTH_HEADER",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "api_url",
    "create_default_http_client",
    "header_value",
    "normalize_base_url",
    "redact_headers",
]
