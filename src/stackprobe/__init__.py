# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
stackprobe package entrypoint.

Probes a Portainer instance to find which stack create/update routes and payload
key casings it accepts, without creating or changing stacks by default. HTTP is
abstracted behind an injectable client interface and results are modeled with
dataclasses.
"""

from .config import HttpSettings, ProbeConfig, load_http_settings
from .credentials import ApiKey, resolve_api_key
from .discovery import DiscoveryFlow, DiscoveryResult
from .errors import ConfigurationError, MissingDependencyError, SecretResolutionError, StackProbeError
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
    normalize_base_url,
)
from .log import setup_logging
from .probe import CreateRouteProber, ProbeExecutor, UpdateRouteProber
from .report import ResultPrinter, render_manual_commands
from .runtime import RunSummary, StackProbe
from .version import __version__

__all__ = [
    "ApiKey",
    "ConfigurationError",
    "CreateRouteProber",
    "DiscoveryFlow",
    "DiscoveryResult",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "MissingDependencyError",
    "ProbeConfig",
    "ProbeExecutor",
    "ResultPrinter",
    "RunSummary",
    "SecretResolutionError",
    "StackProbe",
    "StackProbeError",
    "StubHttpClient",
    "UpdateRouteProber",
    "create_default_http_client",
    "load_http_settings",
    "normalize_base_url",
    "render_manual_commands",
    "resolve_api_key",
    "setup_logging",
    "__version__",
]
