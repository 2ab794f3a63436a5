# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging setup for the stackprobe CLI. Records go to stderr; stdout carries the report."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

ENV_LOG_LEVEL = "STACKPROBE_LOG_LEVEL"
DEFAULT_LOG_LEVEL = logging.WARNING

# httpx logs every request line at INFO; executor debug lines already cover that.
_CHATTY_LOGGERS = ("httpx", "httpcore")


def resolve_log_level(level: str | int | None = None, environ: Mapping[str, str] | None = None) -> int:
    """Explicit level, else STACKPROBE_LOG_LEVEL, else WARNING. Unknown names fall back to WARNING."""
    env = os.environ if environ is None else environ
    raw = level if level not in (None, "") else env.get(ENV_LOG_LEVEL, "")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper()) if text else DEFAULT_LOG_LEVEL
    return resolved if isinstance(resolved, int) else DEFAULT_LOG_LEVEL


def setup_logging(level: str | int | None = None) -> int:
    effective = resolve_log_level(level)
    logging.basicConfig(level=effective, format="%(levelname)s %(name)s: %(message)s")
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(effective if effective <= logging.DEBUG else logging.WARNING)
    return effective


__all__ = ["ENV_LOG_LEVEL", "resolve_log_level", "setup_logging"]
