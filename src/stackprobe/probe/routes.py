# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Opt-in active probes for create and update routes.

Payloads always carry INVALID_STACK_CONTENT so Portainer rejects them; the status code
tells whether the route exists. The update flow ends with OPTIONS requests and printed
DELETE examples: no DELETE is ever sent.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..config import ProbeConfig
from ..errors import ConfigurationError
from ..http.models import HttpResponse
from ..report.commands import render_delete_examples
from ..report.printer import ResultPrinter
from .candidates import (
    CREATE_VARIANTS,
    INVALID_STACK_CONTENT,
    STACK_RESOURCE_ROUTES,
    UPDATE_VARIANTS,
    ProbeVariant,
    build_create_payload,
    build_update_payload,
    probe_stack_name,
)
from .executor import ProbeExecutor

logger = logging.getLogger(__name__)


@dataclass
class ProbeOutcome:
    label: str
    method: str
    url: str
    status_code: int | None


@dataclass
class ActiveProbeReport:
    outcomes: list[ProbeOutcome] = field(default_factory=list)

    def record(self, label: str, method: str, url: str, response: HttpResponse) -> None:
        self.outcomes.append(ProbeOutcome(label, method, url, response.status_code))

    @property
    def status_codes(self) -> list[int | None]:
        return [outcome.status_code for outcome in self.outcomes]


class CreateRouteProber:
    def __init__(
        self,
        config: ProbeConfig,
        executor: ProbeExecutor,
        printer: ResultPrinter,
        *,
        clock: Callable[[], float] = time.time,
        variants: Iterable[ProbeVariant] = CREATE_VARIANTS,
    ):
        self.config = config
        self.executor = executor
        self.printer = printer
        self.clock = clock
        self.variants = tuple(variants)

    def run(self) -> ActiveProbeReport:
        self.printer.line()
        self.printer.heading("Probing common CREATE endpoints (safe)")
        self.printer.line("This uses intentionally invalid stack content so Portainer should reject it.")
        self.printer.line("Interpretation: HTTP 404 => route not present; HTTP 400/401/403 => route exists.")

        name = probe_stack_name(self.config.stack_name, self.clock())
        report = ActiveProbeReport()
        for variant in self.variants:
            url = variant.route.render(self.config.base_url, self.config.endpoint_id)
            payload = build_create_payload(name, INVALID_STACK_CONTENT, variant.casing)
            response = self.executor.send(variant.route.method, url, payload)
            self.printer.print_result(variant.label, variant.route.method, url, response)
            report.record(variant.label, variant.route.method, url, response)
        return report


class UpdateRouteProber:
    def __init__(
        self,
        config: ProbeConfig,
        executor: ProbeExecutor,
        printer: ResultPrinter,
        *,
        variants: Iterable[ProbeVariant] = UPDATE_VARIANTS,
    ):
        if not config.stack_id:
            raise ConfigurationError("Set STACK_ID to probe update/delete routes (e.g. STACK_ID=80).")
        self.config = config
        self.executor = executor
        self.printer = printer
        self.variants = tuple(variants)

    def run(self) -> ActiveProbeReport:
        report = ActiveProbeReport()
        self.probe_updates(report)
        self.probe_delete_support(report)
        self.printer.line()
        self.printer.lines(render_delete_examples(self.config))
        return report

    def probe_updates(self, report: ActiveProbeReport) -> None:
        self.printer.line()
        self.printer.heading("Probing UPDATE endpoints (safe-ish)")
        self.printer.line("This uses intentionally invalid stack content; Portainer should reject it.")
        self.printer.line(
            "Interpretation: HTTP 404/405 => route not present; HTTP 400/500 => route exists; "
            "HTTP 200/204 => WARNING (it may have accepted the update)."
        )

        for variant in self.variants:
            url = variant.route.render(self.config.base_url, self.config.endpoint_id, self.config.stack_id)
            payload = build_update_payload(INVALID_STACK_CONTENT, variant.casing)
            response = self.executor.send(variant.route.method, url, payload)
            self.printer.print_result(variant.label, variant.route.method, url, response)
            if response.status_code in (200, 204):
                logger.warning("%s %s answered %s to invalid content", variant.route.method, url, response.status_code)
                self.printer.line("WARNING: the server accepted invalid stack content; check the stack.")
            report.record(variant.label, variant.route.method, url, response)

    def probe_delete_support(self, report: ActiveProbeReport) -> None:
        self.printer.line()
        self.printer.heading("Probing DELETE support (no deletion performed)")
        self.printer.line("Uses OPTIONS to discover whether DELETE is allowed on the stack resource.")
        self.printer.line("If you're behind a reverse proxy, OPTIONS may return 405 even when DELETE is permitted.")

        for route in STACK_RESOURCE_ROUTES:
            url = route.render(self.config.base_url, self.config.endpoint_id, self.config.stack_id)
            response = self.executor.send(route.method, url)
            self.printer.print_headers("options", route.method, url, response)
            report.record("options", route.method, url, response)


__all__ = ["ActiveProbeReport", "CreateRouteProber", "ProbeOutcome", "UpdateRouteProber"]
