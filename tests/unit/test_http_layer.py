# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from stackprobe.config import HttpSettings
from stackprobe.credentials import ApiKey
from stackprobe.http.adapters import StubHttpClient
from stackprobe.http.client import create_default_http_client
from stackprobe.http.headers import header_value, redact_headers
from stackprobe.http.httpx_client import HttpxClient
from stackprobe.http.models import HttpRequest, HttpResponse
from stackprobe.http.url import api_url, normalize_base_url
from stackprobe.probe.executor import ProbeExecutor, encode_payload

BASE = "https://portainer.example.com"


def _httpx_client(handler, **settings):
    transport = httpx.MockTransport(handler)
    return HttpxClient(HttpSettings(**settings), client=httpx.Client(transport=transport))


@pytest.mark.parametrize(
    "raw",
    [
        BASE,
        f"{BASE}/",
        f"{BASE}//",
        f"{BASE}/api",
        f"{BASE}/api/",
        f"{BASE}/api?x=1",
        f"{BASE}/api/?x=1",
        f"{BASE}/?token=abc",
        f"{BASE}/api/stacks?endpointId=2",
        f"{BASE}/api/status/",
        f"{BASE}/#/home",
    ],
)
def test_normalize_base_url_variants_converge(raw):
    normalized = normalize_base_url(raw)
    assert normalized == BASE
    assert normalize_base_url(normalized) == normalized


def test_normalize_base_url_keeps_proxy_prefix_and_port():
    assert normalize_base_url("http://10.0.0.5:9000/portainer/api/") == "http://10.0.0.5:9000/portainer"
    assert normalize_base_url("http://10.0.0.5:9000/portainer") == "http://10.0.0.5:9000/portainer"


def test_normalize_base_url_ignores_host_named_api():
    assert normalize_base_url("http://api/api/") == "http://api"
    assert normalize_base_url("https://api.example.com/api") == "https://api.example.com"


def test_normalize_base_url_cuts_at_first_api_segment():
    # Known limitation: a proxy path containing /api/ is truncated there.
    assert normalize_base_url("https://h/tools/api/portainer/api") == "https://h/tools"


def test_api_url_joins_route():
    assert api_url(BASE, "stacks") == f"{BASE}/api/stacks"
    assert api_url(BASE, "/status") == f"{BASE}/api/status"


def test_httpx_client_returns_status_body_and_headers():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["User-Agent"] == "UA/1.0"
        return httpx.Response(404, headers={"Allow": "GET"}, text='{"message":"not found"}\n\nsecond line')

    client = _httpx_client(handler, user_agent="UA/1.0")
    response = client.request(HttpRequest(url=f"{BASE}/api/stacks/1"))
    assert response.ok is True
    assert response.status_code == 404
    assert response.text == '{"message":"not found"}\n\nsecond line'
    assert header_value(response.headers, "allow") == "GET"
    assert response.status_label == "HTTP 404"
    assert response.status_line == "HTTP/1.1 404 Not Found"


def test_httpx_client_handles_empty_body():
    client = _httpx_client(lambda request: httpx.Response(204))
    response = client.request(HttpRequest(url=f"{BASE}/api/status"))
    assert response.status_code == 204
    assert response.text == ""


def test_httpx_client_truncates_large_bodies():
    client = _httpx_client(lambda request: httpx.Response(200, content=b"x" * 100), max_body_bytes=10)
    response = client.request(HttpRequest(url=f"{BASE}/api/status"))
    assert response.content == b"x" * 10
    assert response.meta["body_truncated"] is True
    assert response.truncated is True
    assert response.meta["body_bytes_limit"] == 10


def test_httpx_client_transport_failure_has_no_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _httpx_client(handler)
    response = client.request(HttpRequest(url=f"{BASE}/api/status"))
    assert response.ok is False
    assert response.status_code is None
    assert response.received is False
    assert response.error_type == "ConnectError"
    assert response.meta["error_category"] == "CONNECTION_ERROR"
    assert response.status_label == "HTTP 000 (no response: Could not connect: ConnectError: connection refused)"


def test_httpx_client_timeout_is_categorized():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    response = _httpx_client(handler).request(HttpRequest(url=f"{BASE}/api/status"))
    assert response.status_code is None
    assert response.meta["error_category"] == "TIMEOUT"


def test_httpx_client_never_raises_on_unexpected_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("transport blew up")

    response = _httpx_client(handler).request(HttpRequest(url=f"{BASE}/api/status"))
    assert response.status_code is None
    assert response.meta["error_category"] == "UNKNOWN_ERROR"
    assert response.status_label == "HTTP 000 (no response: Request failed: RuntimeError: transport blew up)"


def test_executor_with_unencodable_header_returns_no_response():
    client = _httpx_client(lambda request: httpx.Response(200))
    response = ProbeExecutor(client, ApiKey(value="cl\u00e9")).get(f"{BASE}/api/status")
    assert response.ok is False
    assert response.status_code is None
    assert response.error_type == "UnicodeEncodeError"


def test_executor_sets_auth_and_json_content_type_only_with_body():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(400, json={"message": "Invalid stack file"})

    executor = ProbeExecutor(_httpx_client(handler), ApiKey(value="ptr_key"))
    executor.get(f"{BASE}/api/stacks")
    executor.send("post", f"{BASE}/api/stacks?type=2", {"Name": "x"})

    get_request, post_request = seen
    assert get_request.headers["X-API-Key"] == "ptr_key"
    assert "content-type" not in get_request.headers
    assert post_request.method == "POST"
    assert post_request.headers["Content-Type"] == "application/json"
    assert post_request.content == b'{"Name": "x"}'


def test_executor_fills_missing_url_on_response():
    stub = StubHttpClient({f"{BASE}/api/status": HttpResponse(ok=True, status_code=200)})
    response = ProbeExecutor(stub, ApiKey(value="k")).get(f"{BASE}/api/status")
    assert response.url == f"{BASE}/api/status"


def test_encode_payload_variants():
    assert encode_payload(None) is None
    assert encode_payload('{"a": 1}') == '{"a": 1}'
    assert encode_payload(b"{}") == "{}"
    assert encode_payload({"a": [1]}) == '{"a": [1]}'


def test_stub_client_prefers_method_keyed_responses():
    stub = StubHttpClient()
    stub.add(f"{BASE}/x", HttpResponse(ok=True, status_code=200))
    stub.add(f"{BASE}/x", HttpResponse(ok=True, status_code=405), method="OPTIONS")
    assert stub.request(HttpRequest(url=f"{BASE}/x")).status_code == 200
    assert stub.request(HttpRequest(url=f"{BASE}/x", method="OPTIONS")).status_code == 405
    assert stub.request(HttpRequest(url=f"{BASE}/y")).status_code is None
    assert len(stub.requests) == 3


def test_header_helpers():
    headers = {"Content-Type": "application/json", "X-API-Key": "secret", "Allow": None}
    assert header_value(headers, "CONTENT-TYPE") == "application/json"
    assert header_value(headers, "allow", default="-") == "-"
    assert ("X-API-Key", "...") in redact_headers(headers)


def test_default_client_factory_uses_given_settings():
    client = create_default_http_client(HttpSettings(timeout=3.0, user_agent="UA/2.0"))
    try:
        assert isinstance(client, HttpxClient)
        assert client.settings.timeout == 3.0
        assert client.settings.user_agent == "UA/2.0"
    finally:
        client.close()
