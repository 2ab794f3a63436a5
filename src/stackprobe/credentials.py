# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
API key resolution.

The key comes from PORTAINER_API_KEY when set, otherwise from a 1Password secret
reference (OP_PORTAINER_API_KEY_REF) resolved with `op read`. The key value is
never logged or echoed.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from .config import ENV_API_KEY, ENV_API_KEY_REF
from .errors import ConfigurationError, MissingDependencyError, SecretResolutionError

logger = logging.getLogger(__name__)

SECRET_COMMAND = "op"
SOURCE_ENV = "env"
SOURCE_SECRET_REF = "secret-ref"


@dataclass(frozen=True)
class ApiKey:
    value: str = field(repr=False)
    source: str = SOURCE_ENV

    def __str__(self) -> str:
        return "<redacted>"


def read_secret_reference(
    reference: str,
    *,
    which: Callable[[str], str | None] = shutil.which,
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> str:
    """Resolve a secret reference with `op read <reference>` and return its stdout."""
    if which(SECRET_COMMAND) is None:
        raise MissingDependencyError(SECRET_COMMAND)

    try:
        completed = run(
            [SECRET_COMMAND, "read", reference],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise SecretResolutionError(f"Could not run '{SECRET_COMMAND} read' for {reference}: {exc}") from exc

    if completed.returncode != 0:
        # stderr of `op` may echo vault details; keep it out of the message.
        raise SecretResolutionError(
            f"'{SECRET_COMMAND} read {reference}' failed with exit status {completed.returncode}"
        )

    secret = (completed.stdout or "").rstrip("\r\n")
    if not secret:
        raise SecretResolutionError(f"'{SECRET_COMMAND} read {reference}' returned an empty value")
    return secret


def _checked(api_key: ApiKey) -> ApiKey:
    # Header values go out as ASCII; the message names the source, never the value.
    if not api_key.value.isascii():
        raise ConfigurationError(f"The API key from {api_key.source} contains non-ASCII characters")
    return api_key


def resolve_api_key(
    environ: Mapping[str, str] | None = None,
    *,
    which: Callable[[str], str | None] = shutil.which,
    run: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> ApiKey:
    env = os.environ if environ is None else environ

    direct = env.get(ENV_API_KEY, "")
    if direct:
        logger.debug("Using API key from %s", ENV_API_KEY)
        return _checked(ApiKey(value=direct, source=SOURCE_ENV))

    reference = env.get(ENV_API_KEY_REF, "")
    if not reference:
        raise ConfigurationError(f"Set {ENV_API_KEY} or {ENV_API_KEY_REF} (1Password secret reference).")

    logger.debug("Resolving API key from secret reference %s", reference)
    return _checked(ApiKey(value=read_secret_reference(reference, which=which, run=run), source=SOURCE_SECRET_REF))


__all__ = ["ApiKey", "read_secret_reference", "resolve_api_key"]
