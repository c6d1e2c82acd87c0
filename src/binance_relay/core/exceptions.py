"""
Relay exceptions for the Binance signing relay.

Every failure the relay can report to its caller is an instance of
RelayError. Each exception knows the HTTP status code it is surfaced with
and how to render itself as the JSON envelope the caller receives.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


DEFAULT_INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class RelayError(Exception):
    """
    Base exception for relay failures.

    Anything not covered by a more specific subclass is an internal failure
    and is reported as a 500 envelope carrying a timestamp.
    """

    status_code: int = 500

    def __init__(self, message: Optional[str] = None, error_code: Optional[str] = None):
        message = message or DEFAULT_INTERNAL_ERROR_MESSAGE
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "internal_failure"

    def get_http_status_code(self) -> int:
        """HTTP status code of the envelope returned to the caller."""
        return self.status_code

    def to_dict(self) -> Dict[str, Any]:
        """Render the client-facing error envelope."""
        return {
            "error": self.message,
            "timestamp": utc_timestamp()
        }


class MissingCredentialError(RelayError):
    """Raised when the API key or the endpoint path is missing."""

    status_code = 400

    def __init__(self, message: str = "API Key y endpoint son requeridos"):
        super().__init__(message, "missing_credential")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class MissingSecretError(RelayError):
    """Raised when an authenticated endpoint is requested without a secret key."""

    status_code = 400

    def __init__(self, message: str = "Secret Key es requerido para endpoint autenticado"):
        super().__init__(message, "missing_secret")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class InvalidRequestBodyError(RelayError):
    """Raised when the inbound body is not a JSON object."""

    status_code = 400

    def __init__(self, message: str = "Cuerpo de la petición inválido"):
        super().__init__(message, "invalid_request_body")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class UpstreamRejectedError(RelayError):
    """
    Raised when the upstream answers with a non-success status.

    The envelope status is always 400; the upstream's own status code is
    carried in the body as data.

    Attributes:
        upstream_status: Status code the upstream actually returned
        upstream_message: Message extracted from the upstream body
    """

    status_code = 400

    def __init__(self, upstream_status: int, upstream_message: str):
        super().__init__(f"Error de Binance: {upstream_message}", "upstream_rejected")
        self.upstream_status = upstream_status
        self.upstream_message = upstream_message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "status": self.upstream_status
        }


class UpstreamUnreachableError(RelayError):
    """
    Raised when the upstream cannot be reached or does not answer in time.

    Attributes:
        url: URL that was being requested, without the query string
        original_exception: Transport error that caused the failure
    """

    def __init__(self, message: str, url: Optional[str] = None,
                 original_exception: Optional[Exception] = None):
        super().__init__(message, "upstream_unreachable")
        self.url = url
        self.original_exception = original_exception
