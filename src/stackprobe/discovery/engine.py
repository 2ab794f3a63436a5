# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Capability discovery: status, swagger routes and the existing stack lookup.

Every step runs regardless of how the previous one went; a failed or non-200
probe is printed and the flow moves on.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import ProbeConfig
from ..http.models import HttpResponse
from ..http.url import api_url
from ..probe.executor import ProbeExecutor
from ..report.printer import ResultPrinter, truncation_note
from .stacks import find_stack_id
from .swagger import (
    SCHEMA_SEARCH_HINT,
    SWAGGER_PATHS,
    StackRoute,
    is_json_document_path,
    likely_action_paths,
    parse_document,
    stack_routes,
    stack_schema_names,
)

logger = logging.getLogger(__name__)


@dataclass
class DiscoveryResult:
    """What the discovery flow learned; kept only for the caller's summary and tests."""

    status_code: int | None = None
    swagger_path: str | None = None
    swagger_parsed: bool = False
    stack_routes: list[StackRoute] = field(default_factory=list)
    action_paths: list[str] = field(default_factory=list)
    schema_names: list[str] = field(default_factory=list)
    stacks_status_code: int | None = None
    stack_id: Any = None


class DiscoveryFlow:
    def __init__(self, config: ProbeConfig, executor: ProbeExecutor, printer: ResultPrinter):
        self.config = config
        self.executor = executor
        self.printer = printer

    def run(self) -> DiscoveryResult:
        result = DiscoveryResult()
        self.probe_status(result)
        self.printer.line()
        document = self.probe_swagger(result)
        if document is not None:
            self.report_swagger(document, result)
        self.printer.line()
        self.probe_existing_stack(result)
        return result

    def probe_status(self, result: DiscoveryResult) -> HttpResponse:
        self.printer.heading("/api/status")
        response = self.executor.get(api_url(self.config.base_url, "status"))
        result.status_code = response.status_code
        self.printer.status(response)
        return response

    def probe_swagger(self, result: DiscoveryResult) -> dict[str, Any] | None:
        """Try the documentation endpoints in order; return the parsed JSON document if one was found."""
        self.printer.heading("Swagger (best-effort)")
        for path in SWAGGER_PATHS:
            url = f"{self.config.base_url}{path}"
            response = self.executor.get(url)
            if response.status_code == 200 and response.text.strip():
                result.swagger_path = path
                if not is_json_document_path(path):
                    self.printer.line(f"Found: {path} (YAML), this probe only parses JSON.")
                    self.printer.line(f'You can inspect it manually: curl -H "X-API-Key: ..." {url}')
                    return None
                self.printer.line(f"Found: {path}")
                document = parse_document(response.text)
                if document is None:
                    logger.warning("%s returned HTTP 200 but the body is not a JSON object", path)
                    self.printer.line(f"{path} is not valid JSON; skipping route extraction.")
                    if response.truncated:
                        self.printer.line(truncation_note(response))
                    return None
                result.swagger_parsed = True
                return document
            self.printer.line(f"Tried {path}: {response.status_label}")
        return None

    def report_swagger(self, document: dict[str, Any], result: DiscoveryResult) -> None:
        routes = stack_routes(document)
        result.stack_routes = routes

        self.printer.line()
        self.printer.heading("Stack-related endpoints (from swagger)")
        for route in routes:
            self.printer.line()
            self.printer.line(route.path)
            self.printer.line(f"  methods: {', '.join(route.methods)}")

        result.action_paths = likely_action_paths(route.path for route in routes)
        self.printer.line()
        self.printer.heading("Hints: likely create/update routes")
        for path in result.action_paths:
            self.printer.line(f"  - {path}")

        result.schema_names = stack_schema_names(document)
        self.printer.line()
        self.printer.line("If Portainer exposes request schemas here, search for stack payload models:")
        self.printer.line(SCHEMA_SEARCH_HINT)
        for name in result.schema_names:
            self.printer.line(f"  * {name}")

    def probe_existing_stack(self, result: DiscoveryResult) -> Any:
        self.printer.heading("Existing stacks (for this endpoint)")
        response = self.executor.get(api_url(self.config.base_url, "stacks"))
        result.stacks_status_code = response.status_code
        self.printer.line(response.status_label)

        if response.status_code != 200:
            self.printer.body(response)
            return None

        try:
            stacks = json.loads(response.text or "")
        except ValueError:
            logger.warning("Stack listing is not valid JSON")
            stacks = None

        stack_id = find_stack_id(stacks, self.config.stack_name, self.config.endpoint_id)
        result.stack_id = stack_id
        if stack_id is not None:
            self.printer.line(f"Found stack: id={stack_id}")
        else:
            self.printer.line(
                f"No matching stack found for name='{self.config.stack_name}' and endpointId={self.config.endpoint_id}"
            )
        return stack_id


__all__ = ["DiscoveryFlow", "DiscoveryResult"]
