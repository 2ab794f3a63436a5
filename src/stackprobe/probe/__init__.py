# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe execution and opt-in route probing."""

from .candidates import CREATE_VARIANTS, UPDATE_VARIANTS, KeyCasing, ProbeVariant, RouteCandidate
from .executor import ProbeExecutor
from .routes import ActiveProbeReport, CreateRouteProber, UpdateRouteProber

__all__ = [
    "ActiveProbeReport",
    "CREATE_VARIANTS",
    "CreateRouteProber",
    "KeyCasing",
    "ProbeExecutor",
    "ProbeVariant",
    "RouteCandidate",
    "UPDATE_VARIANTS",
    "UpdateRouteProber",
]
