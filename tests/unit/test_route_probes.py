# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io
import json

import pytest

from stackprobe.config import ProbeConfig
from stackprobe.credentials import ApiKey
from stackprobe.errors import ConfigurationError
from stackprobe.http.adapters import StubHttpClient
from stackprobe.http.models import HttpResponse
from stackprobe.probe.candidates import (
    CREATE_ROUTES,
    CREATE_VARIANTS,
    INVALID_STACK_CONTENT,
    UPDATE_VARIANTS,
    KeyCasing,
    build_create_payload,
    build_update_payload,
    probe_stack_name,
)
from stackprobe.probe.executor import ProbeExecutor
from stackprobe.probe.routes import CreateRouteProber, UpdateRouteProber
from stackprobe.report.printer import ResultPrinter

BASE = "http://portainer.local"


def _wire(responses=None, **config):
    cfg = ProbeConfig(base_url=BASE, stack_name="app", **config)
    stub = StubHttpClient(responses)
    out = io.StringIO()
    return cfg, stub, ProbeExecutor(stub, ApiKey(value="ptr_secret")), ResultPrinter(out), out


def test_candidate_tables_cross_routes_with_casings():
    assert len(CREATE_VARIANTS) == 10
    assert len(UPDATE_VARIANTS) == 6
    assert [v.casing for v in CREATE_VARIANTS[:2]] == [KeyCasing.CAPS, KeyCasing.LOWER]
    assert [v.casing for v in UPDATE_VARIANTS[:2]] == [KeyCasing.LOWER, KeyCasing.CAPS]
    assert CREATE_VARIANTS[0].label == "create (caps keys)"
    assert UPDATE_VARIANTS[0].label == "update (lower keys)"
    assert {v.route.method for v in CREATE_VARIANTS} == {"POST"}
    assert {v.route.method for v in UPDATE_VARIANTS} == {"PUT"}


def test_route_render():
    assert CREATE_ROUTES[0].render(BASE, 2) == f"{BASE}/api/stacks?type=2&method=string&endpointId=2"
    assert UPDATE_VARIANTS[2].route.render(BASE, 2, "80") == f"{BASE}/api/stacks/80?endpointId=2&method=string"


def test_payload_builders_keep_key_casing():
    assert build_create_payload("n", "c", KeyCasing.CAPS) == {"Name": "n", "StackFileContent": "c", "Env": []}
    assert build_create_payload("n", "c", KeyCasing.LOWER, {"A": "1"}) == {
        "name": "n",
        "stackFileContent": "c",
        "env": [{"name": "A", "value": "1"}],
    }
    assert build_update_payload("c", KeyCasing.LOWER) == {
        "stackFileContent": "c",
        "env": [],
        "prune": True,
        "pullImage": True,
    }
    assert build_update_payload("c", KeyCasing.CAPS) == {
        "StackFileContent": "c",
        "Env": [],
        "Prune": True,
        "PullImage": True,
    }


def test_probe_stack_name_uses_whole_seconds():
    assert probe_stack_name("app", 1700000000.9) == "probe-app-1700000000"


def test_create_prober_keeps_going_after_404():
    first_url = CREATE_ROUTES[0].render(BASE, 2)
    cfg, stub, executor, printer, out = _wire(
        {first_url: HttpResponse(ok=True, status_code=404, text="404 page not found")},
        probe_create_routes=True,
    )
    report = CreateRouteProber(cfg, executor, printer, clock=lambda: 1700000000).run()

    assert len(stub.requests) == 10
    assert report.status_codes[:2] == [404, 404]
    assert report.status_codes[2:] == [None] * 8
    for request in stub.requests:
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        payload = json.loads(request.body)
        assert INVALID_STACK_CONTENT in payload.values()
        assert "probe-app-1700000000" in payload.values()
    assert set(json.loads(stub.requests[0].body)) == {"Name", "StackFileContent", "Env"}
    assert set(json.loads(stub.requests[1].body)) == {"name", "stackFileContent", "env"}

    output = out.getvalue()
    assert "HTTP 404 => route not present" in output
    assert output.count("-- create (caps keys)") == 5
    assert "ptr_secret" not in output


def test_update_prober_requires_stack_id():
    cfg, _stub, executor, printer, _out = _wire()
    with pytest.raises(ConfigurationError):
        UpdateRouteProber(cfg, executor, printer)


def test_update_prober_puts_options_and_never_deletes():
    update_url = UPDATE_VARIANTS[0].route.render(BASE, 2, "80")
    cfg, stub, executor, printer, out = _wire(
        {
            update_url: HttpResponse(ok=True, status_code=400, text='{"message":"Invalid stack"}'),
        },
        stack_id="80",
        probe_update_routes=True,
    )
    stub.add(
        f"{BASE}/api/stacks/80",
        HttpResponse(ok=True, status_code=204, reason_phrase="No Content", headers={"allow": "GET, PUT, DELETE"}),
        method="OPTIONS",
    )
    stub.add(f"{BASE}/api/stacks/80?endpointId=2&type=2", HttpResponse(ok=True, status_code=200), method="PUT")

    report = UpdateRouteProber(cfg, executor, printer).run()

    methods = [request.method for request in stub.requests]
    assert methods == ["PUT"] * 6 + ["OPTIONS"] * 2
    assert "DELETE" not in methods
    assert report.status_codes[:2] == [400, 400]
    assert report.status_codes[4:6] == [200, 200]

    output = out.getvalue()
    assert "WARNING: the server accepted invalid stack content" in output
    assert "Allow => GET, PUT, DELETE" in output
    assert "If DELETE is allowed, the usual delete call is:" in output
    assert f"{BASE}/api/stacks/80?endpointId=2&external=true" in output
