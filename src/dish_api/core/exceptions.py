"""Custom exception classes for the API."""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Failure categories a recognition run can end in."""

    CALLER = "caller"
    CONFIGURATION = "configuration"
    UPSTREAM_TRANSPORT = "upstream_transport"
    CLASSIFIED_PROVIDER = "classified_provider"


class APIError(Exception):
    """Base exception for API errors."""

    kind: ErrorKind | None = None

    def __init__(self, message: str, status_code: int = 400, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class CallerError(APIError):
    """Bad or missing input from the client."""

    kind = ErrorKind.CALLER

    def __init__(self, message: str, details: Any = None):
        super().__init__(message=message, status_code=400, details=details)


class ConfigurationError(APIError):
    """Provider credentials are not configured."""

    kind = ErrorKind.CONFIGURATION

    def __init__(self, message: str = "configuration error", details: Any = None):
        super().__init__(message=message, status_code=500, details=details)


class UpstreamTransportError(APIError):
    """Network failure or non-2xx status from an outbound call."""

    kind = ErrorKind.UPSTREAM_TRANSPORT

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(
            message=message,
            status_code=500,
            details={"upstream_status": status_code, "body": body},
        )
        self.upstream_status = status_code


class CredentialError(UpstreamTransportError):
    """Access token could not be obtained."""


class ClassifiedProviderError(APIError):
    """Well-formed provider response carrying a provider error code."""

    kind = ErrorKind.CLASSIFIED_PROVIDER

    def __init__(self, message: str, error_code: int, provider_message: str = ""):
        super().__init__(
            message=message,
            status_code=400,
            details={"error_code": error_code, "error_msg": provider_message},
        )
        self.error_code = error_code
        self.provider_message = provider_message
