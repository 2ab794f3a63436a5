# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level stackprobe facade wiring discovery, command templates and opt-in probes."""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass

from .config import HttpSettings, ProbeConfig, load_http_settings
from .credentials import ApiKey
from .discovery.engine import DiscoveryFlow, DiscoveryResult
from .http.client import HttpClient, create_default_http_client
from .probe.executor import ProbeExecutor
from .probe.routes import ActiveProbeReport, CreateRouteProber, UpdateRouteProber
from .report.commands import render_manual_commands
from .report.printer import ResultPrinter


@dataclass
class RunSummary:
    discovery: DiscoveryResult
    create_probes: ActiveProbeReport | None = None
    update_probes: ActiveProbeReport | None = None


class StackProbe:
    """
    Convenience wrapper that shares one HTTP client and printer across every flow.

    The configuration and API key are resolved by the caller; constructing this object
    issues no requests.
    """

    def __init__(
        self,
        config: ProbeConfig,
        api_key: ApiKey,
        *,
        http_client: HttpClient | None = None,
        http_settings: HttpSettings | None = None,
        printer: ResultPrinter | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.config = config
        self.http_settings = http_settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings)
        self.printer = printer or ResultPrinter()
        self.executor = ProbeExecutor(self.http_client, api_key)
        self.clock = clock

    def print_summary(self) -> None:
        self.printer.line(f"Portainer base URL: {self.config.base_url}")
        self.printer.line(f"Endpoint ID: {self.config.endpoint_id}")
        self.printer.line(f"Stack name: {self.config.stack_name}")
        self.printer.line(f"Stack file: {self.config.stack_file}")
        if self.config.stack_id:
            self.printer.line(f"Stack id (probe): {self.config.stack_id}")
        self.printer.line()

    def discover(self) -> DiscoveryResult:
        return DiscoveryFlow(self.config, self.executor, self.printer).run()

    def print_manual_commands(self) -> None:
        self.printer.line()
        self.printer.heading("Manual curl commands to try")
        self.printer.block(render_manual_commands(self.config))

    def probe_create_routes(self) -> ActiveProbeReport:
        return CreateRouteProber(self.config, self.executor, self.printer, clock=self.clock).run()

    def probe_update_routes(self) -> ActiveProbeReport:
        return UpdateRouteProber(self.config, self.executor, self.printer).run()

    def run(self) -> RunSummary:
        self.print_summary()
        summary = RunSummary(discovery=self.discover())
        self.print_manual_commands()
        if self.config.probe_create_routes:
            summary.create_probes = self.probe_create_routes()
        if self.config.probe_update_routes:
            summary.update_probes = self.probe_update_routes()
        return summary

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> StackProbe:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["RunSummary", "StackProbe"]
