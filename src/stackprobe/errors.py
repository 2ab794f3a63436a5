# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx

EXIT_PRECONDITION = 2


class StackProbeError(Exception):
    """Base class for errors that stop a probe run."""

    exit_code: int = 1


class ConfigurationError(StackProbeError):
    """A required input is missing or unusable."""

    exit_code = EXIT_PRECONDITION


class MissingDependencyError(ConfigurationError):
    """A required external command is not installed."""

    def __init__(self, command: str):
        super().__init__(f"Missing required command: {command}")
        self.command = command


class SecretResolutionError(ConfigurationError):
    """The secret-reference command ran but did not yield a credential."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx transport exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the underlying ssl/socket error; look at the cause first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR
    if isinstance(cause, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | str | None) -> str:
    """Short reason shown next to a no-response result; empty when the category is unknown."""
    if not category:
        return ""
    reasons = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate problem (see --ignore-ssl-errors)",
        ErrorCategory.CONNECTION_ERROR: "Could not connect",
        ErrorCategory.DNS_ERROR: "Host name did not resolve",
        ErrorCategory.UNKNOWN_ERROR: "Request failed",
    }
    try:
        return reasons[ErrorCategory(category)]
    except ValueError:
        return ""


__all__ = [
    "EXIT_PRECONDITION",
    "ConfigurationError",
    "ErrorCategory",
    "MissingDependencyError",
    "SecretResolutionError",
    "StackProbeError",
    "categorize_exception",
    "error_category_to_reason",
]
