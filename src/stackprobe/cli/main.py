# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""stackprobe CLI."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Mapping

from ..config import HttpSettings, ProbeConfig, load_http_settings
from ..credentials import resolve_api_key
from ..errors import StackProbeError
from ..http import create_default_http_client
from ..log import setup_logging
from ..runtime import StackProbe

logger = logging.getLogger(__name__)

ENV_HELP = """\
environment:
  PORTAINER_URL             Portainer URL, e.g. https://portainer.example.com (required)
  STACK_NAME                stack name, e.g. my-app (required)
  ENDPOINT_ID               endpoint id (default: 2)
  STACK_FILE                stack file path (default: docker-compose.yml)
  STACK_ID                  existing stack id, needed for update/delete probing
  PORTAINER_API_KEY         Portainer access token
  OP_PORTAINER_API_KEY_REF  1Password secret reference, e.g. op://Dev/Portainer/api-key
  PROBE_CREATE_ROUTES=1     probe common create routes with invalid content
  PROBE_UPDATE_ROUTES=1     probe update routes and OPTIONS on STACK_ID

Nothing is created or updated by default. Probes send intentionally invalid stack
content: HTTP 404 usually means the route is absent, 400 that it exists.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackprobe",
        description="Discover which Portainer stack API routes and payload shapes a server accepts",
        epilog=ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--url", help="Portainer URL (overrides PORTAINER_URL)")
    parser.add_argument("--stack-name", help="Stack name (overrides STACK_NAME)")
    parser.add_argument("--endpoint-id", help="Endpoint id (overrides ENDPOINT_ID)")
    parser.add_argument("--stack-file", help="Stack file path (overrides STACK_FILE)")
    parser.add_argument("--stack-id", help="Existing stack id (overrides STACK_ID)")
    parser.add_argument(
        "--probe-create-routes",
        action="store_true",
        default=None,
        help="POST invalid content to candidate create routes",
    )
    parser.add_argument(
        "--probe-update-routes",
        action="store_true",
        default=None,
        help="PUT invalid content to candidate update routes and send OPTIONS (requires a stack id)",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for self-signed Portainer certificates)",
    )
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--log-level", help="Logging level (default: STACKPROBE_LOG_LEVEL or WARNING)")
    return parser


def main(argv: list[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)
    env = os.environ if environ is None else environ

    try:
        config = ProbeConfig.from_env(
            env,
            url=args.url,
            stack_name=args.stack_name,
            endpoint_id=args.endpoint_id,
            stack_file=args.stack_file,
            stack_id=args.stack_id,
            probe_create_routes=args.probe_create_routes,
            probe_update_routes=args.probe_update_routes,
        )
        api_key = resolve_api_key(env)
    except StackProbeError as exc:
        print(f"stackprobe: {exc}", file=sys.stderr)
        return exc.exit_code

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.timeout is not None and args.timeout > 0:
        settings.timeout = args.timeout

    logger.debug("API key source: %s", api_key.source)
    http_client = create_default_http_client(settings)
    with StackProbe(config, api_key, http_client=http_client, http_settings=settings) as probe:
        probe.run()

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
