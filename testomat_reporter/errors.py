"""Errors raised while talking to the Testomat.io reporter API."""


class ReporterError(Exception):
    """Base class for all reporter errors."""


class ConfigurationError(ReporterError):
    """Raised when required configuration (the API key) is missing."""


class TransportError(ReporterError):
    """Raised when a request times out or the connection fails."""


class RemoteError(ReporterError):
    """Raised when the service answers with an unexpected status."""

    def __init__(self, operation: str, status: int, body: str) -> None:
        super().__init__(f"Failed to {operation}: HTTP {status} {body}")
        self.operation = operation
        self.status = status
        self.body = body


class DecodeError(ReporterError):
    """Raised when a response body is malformed or lacks an expected field."""


class RunStateError(ReporterError):
    """Raised when an operation is not allowed in the current run state."""


class EncodeError(ReporterError):
    """Raised when a request body cannot be serialized to JSON."""
