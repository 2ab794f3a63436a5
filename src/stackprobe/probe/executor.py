# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-shot authenticated requests against the Portainer API."""

from __future__ import annotations

import json
import logging
from typing import Any

from ..credentials import ApiKey
from ..http.client import HttpClient
from ..http.headers import AUTH_HEADER
from ..http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


def encode_payload(payload: Any) -> str | None:
    """JSON-encode a payload; strings are assumed to be JSON already, None means no body."""
    if payload is None:
        return None
    if isinstance(payload, (str, bytes)):
        return payload.decode("utf-8") if isinstance(payload, bytes) else payload
    return json.dumps(payload)


class ProbeExecutor:
    """Issues exactly one request per call with the API key attached."""

    def __init__(self, http_client: HttpClient, api_key: ApiKey):
        self.http_client = http_client
        self._api_key = api_key

    def send(self, method: str, url: str, payload: Any = None) -> HttpResponse:
        headers = {AUTH_HEADER: self._api_key.value}
        body = encode_payload(payload)
        if body:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        request = HttpRequest(url=url, method=method.upper(), headers=headers, body=body or None)
        logger.debug("%s %s", request.method, url)
        response = self.http_client.request(request)
        if response.url is None:
            response.url = url
        if not response.received:
            logger.info("No response for %s %s: %s", request.method, url, response.error_message)
        return response

    def get(self, url: str) -> HttpResponse:
        return self.send("GET", url)

    def options(self, url: str) -> HttpResponse:
        return self.send("OPTIONS", url)


__all__ = ["JSON_CONTENT_TYPE", "ProbeExecutor", "encode_payload"]
