# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for stackprobe."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .errors import ConfigurationError
from .version import __version__

DEFAULT_USER_AGENT = f"stackprobe/{__version__}"
DEFAULT_ENDPOINT_ID = 2
DEFAULT_STACK_FILE = "docker-compose.yml"

ENV_URL = "PORTAINER_URL"
ENV_STACK_NAME = "STACK_NAME"
ENV_ENDPOINT_ID = "ENDPOINT_ID"
ENV_STACK_FILE = "STACK_FILE"
ENV_STACK_ID = "STACK_ID"
ENV_API_KEY = "PORTAINER_API_KEY"
ENV_API_KEY_REF = "OP_PORTAINER_API_KEY_REF"
ENV_PROBE_CREATE = "PROBE_CREATE_ROUTES"
ENV_PROBE_UPDATE = "PROBE_UPDATE_ROUTES"

_TRUTHY = {"1", "true", "yes", "on"}


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def _flag(value: str | None) -> bool:
    return str(value or "").strip().lower() in _TRUTHY


@dataclass
class HttpSettings:
    """HTTP client defaults."""

    timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    allow_redirects: bool = False
    verify_ssl: bool = True
    max_body_bytes: int = 16 * 1024 * 1024

    @classmethod
    def from_env(cls) -> HttpSettings:
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("STACKPROBE_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_body_bytes = _int_env("STACKPROBE_HTTP_MAX_BODY_BYTES", cls.max_body_bytes)
        if max_body_bytes <= 0:
            max_body_bytes = cls.max_body_bytes
        return cls(
            timeout=timeout,
            user_agent=os.getenv("STACKPROBE_USER_AGENT", cls.user_agent),
            allow_redirects=_bool_env("STACKPROBE_HTTP_REDIRECTS", cls.allow_redirects),
            verify_ssl=_bool_env("STACKPROBE_HTTP_VERIFY_SSL", cls.verify_ssl),
            max_body_bytes=max_body_bytes,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()


@dataclass(frozen=True)
class ProbeConfig:
    """
    Resolved inputs for one probe run.

    Built once at startup and handed to every component; nothing downstream reads
    the process environment.
    """

    base_url: str
    stack_name: str
    endpoint_id: int = DEFAULT_ENDPOINT_ID
    stack_file: str = DEFAULT_STACK_FILE
    stack_id: str | None = None
    probe_create_routes: bool = False
    probe_update_routes: bool = False

    def __post_init__(self) -> None:
        if self.probe_update_routes and not self.stack_id:
            raise ConfigurationError("Set STACK_ID to probe update/delete routes (e.g. STACK_ID=80).")

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        url: str | None = None,
        stack_name: str | None = None,
        endpoint_id: int | str | None = None,
        stack_file: str | None = None,
        stack_id: str | None = None,
        probe_create_routes: bool | None = None,
        probe_update_routes: bool | None = None,
    ) -> ProbeConfig:
        """
        Resolve configuration from an environment mapping.

        Keyword overrides (typically CLI flags) win over environment values when not None.
        Raises ConfigurationError for missing required values, an unparseable URL or an unusable endpoint id.
        """
        from .http.url import normalize_base_url

        env = os.environ if environ is None else environ

        raw_url = url if url is not None else env.get(ENV_URL, "")
        if not str(raw_url or "").strip():
            raise ConfigurationError(f"Set {ENV_URL}")

        name = stack_name if stack_name is not None else env.get(ENV_STACK_NAME, "")
        if not str(name or "").strip():
            raise ConfigurationError(f"Set {ENV_STACK_NAME}")

        raw_endpoint = endpoint_id if endpoint_id is not None else env.get(ENV_ENDPOINT_ID) or DEFAULT_ENDPOINT_ID
        try:
            parsed_endpoint = int(str(raw_endpoint).strip())
        except ValueError:
            raise ConfigurationError(f"{ENV_ENDPOINT_ID} must be an integer, got {raw_endpoint!r}") from None

        raw_stack_id = stack_id if stack_id is not None else env.get(ENV_STACK_ID, "")
        raw_stack_id = str(raw_stack_id or "").strip() or None

        if probe_create_routes is None:
            probe_create_routes = _flag(env.get(ENV_PROBE_CREATE))
        if probe_update_routes is None:
            probe_update_routes = _flag(env.get(ENV_PROBE_UPDATE))

        try:
            base_url = normalize_base_url(str(raw_url))
        except ValueError:
            raise ConfigurationError(f"{ENV_URL} is not a usable URL: {raw_url!r}") from None

        return cls(
            base_url=base_url,
            stack_name=str(name),
            endpoint_id=parsed_endpoint,
            stack_file=(stack_file if stack_file is not None else env.get(ENV_STACK_FILE)) or DEFAULT_STACK_FILE,
            stack_id=raw_stack_id,
            probe_create_routes=bool(probe_create_routes),
            probe_update_routes=bool(probe_update_routes),
        )


__all__ = [
    "DEFAULT_ENDPOINT_ID",
    "DEFAULT_STACK_FILE",
    "DEFAULT_USER_AGENT",
    "HttpSettings",
    "ProbeConfig",
    "load_http_settings",
]
