# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Candidate create/update routes and payload key casings.

Portainer has moved stack create/update between route shapes and switched payload
key casing across releases. Each candidate is one (route, method, casing) record;
the probe loops only walk these tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import product
from typing import Any

INVALID_STACK_CONTENT = "this-is-not-a-compose-file"


class KeyCasing(str, Enum):
    CAPS = "caps"
    LOWER = "lower"


@dataclass(frozen=True)
class RouteCandidate:
    """A route template; placeholders are `{base}`, `{endpoint_id}` and `{stack_id}`."""

    template: str
    method: str

    def render(self, base_url: str, endpoint_id: int, stack_id: str | None = None) -> str:
        return self.template.format(base=base_url, endpoint_id=endpoint_id, stack_id=stack_id or "")


@dataclass(frozen=True)
class ProbeVariant:
    route: RouteCandidate
    casing: KeyCasing
    action: str

    @property
    def label(self) -> str:
        return f"{self.action} ({self.casing.value} keys)"


CREATE_ROUTES: tuple[RouteCandidate, ...] = (
    RouteCandidate("{base}/api/stacks?type=2&method=string&endpointId={endpoint_id}", "POST"),
    RouteCandidate("{base}/api/stacks?type=1&method=string&endpointId={endpoint_id}", "POST"),
    RouteCandidate("{base}/api/stacks/create/standalone/string?endpointId={endpoint_id}", "POST"),
    RouteCandidate("{base}/api/stacks/create/standalone/string?type=2&endpointId={endpoint_id}", "POST"),
    RouteCandidate("{base}/api/stacks/create/swarm/string?endpointId={endpoint_id}", "POST"),
)

UPDATE_ROUTES: tuple[RouteCandidate, ...] = (
    RouteCandidate("{base}/api/stacks/{stack_id}?endpointId={endpoint_id}", "PUT"),
    RouteCandidate("{base}/api/stacks/{stack_id}?endpointId={endpoint_id}&method=string", "PUT"),
    RouteCandidate("{base}/api/stacks/{stack_id}?endpointId={endpoint_id}&type=2", "PUT"),
)

# OPTIONS only; DELETE itself is never sent.
STACK_RESOURCE_ROUTES: tuple[RouteCandidate, ...] = (
    RouteCandidate("{base}/api/stacks/{stack_id}?endpointId={endpoint_id}", "OPTIONS"),
    RouteCandidate("{base}/api/stacks/{stack_id}", "OPTIONS"),
)

CREATE_CASINGS: tuple[KeyCasing, ...] = (KeyCasing.CAPS, KeyCasing.LOWER)
UPDATE_CASINGS: tuple[KeyCasing, ...] = (KeyCasing.LOWER, KeyCasing.CAPS)

CREATE_VARIANTS: tuple[ProbeVariant, ...] = tuple(
    ProbeVariant(route, casing, "create") for route, casing in product(CREATE_ROUTES, CREATE_CASINGS)
)
UPDATE_VARIANTS: tuple[ProbeVariant, ...] = tuple(
    ProbeVariant(route, casing, "update") for route, casing in product(UPDATE_ROUTES, UPDATE_CASINGS)
)


def _env_entries(env: dict[str, str] | None) -> list[dict[str, str]]:
    return [{"name": key, "value": value} for key, value in (env or {}).items()]


def build_create_payload(
    name: str,
    content: str,
    casing: KeyCasing,
    env: dict[str, str] | None = None,
) -> dict[str, Any]:
    entries = _env_entries(env)
    if casing is KeyCasing.CAPS:
        return {"Name": name, "StackFileContent": content, "Env": entries}
    return {"name": name, "stackFileContent": content, "env": entries}


def build_update_payload(
    content: str,
    casing: KeyCasing,
    env: dict[str, str] | None = None,
    *,
    prune: bool = True,
    pull_image: bool = True,
) -> dict[str, Any]:
    entries = _env_entries(env)
    if casing is KeyCasing.CAPS:
        return {"StackFileContent": content, "Env": entries, "Prune": prune, "PullImage": pull_image}
    return {"stackFileContent": content, "env": entries, "prune": prune, "pullImage": pull_image}


def probe_stack_name(stack_name: str, timestamp: float) -> str:
    """Unique throwaway name for create probes, e.g. `probe-my-app-1718000000`."""
    return f"probe-{stack_name}-{int(timestamp)}"


__all__ = [
    "CREATE_CASINGS",
    "CREATE_ROUTES",
    "CREATE_VARIANTS",
    "INVALID_STACK_CONTENT",
    "KeyCasing",
    "ProbeVariant",
    "RouteCandidate",
    "STACK_RESOURCE_ROUTES",
    "UPDATE_CASINGS",
    "UPDATE_ROUTES",
    "UPDATE_VARIANTS",
    "build_create_payload",
    "build_update_payload",
    "probe_stack_name",
]
