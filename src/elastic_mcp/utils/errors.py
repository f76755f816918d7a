"""
Custom exception classes for the Elasticsearch MCP server.
"""

from dataclasses import dataclass
from typing import Any

from elasticsearch import ApiError, TransportError


class ElasticMCPError(Exception):
    """Base exception for all server errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        suggestions: list[str] | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize error with enhanced information.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            suggestions: List of suggested remediation steps
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigurationError(ElasticMCPError):
    """Raised when there is an issue with the application configuration."""
    pass


class ValidationError(ElasticMCPError):
    """Raised when tool input fails validation."""
    pass


class BackendError(ElasticMCPError):
    """Raised when the Elasticsearch backend fails or answers unexpectedly."""
    pass


class ToolExecutionError(ElasticMCPError):
    """Raised when an MCP tool encounters an error during execution."""
    pass


class PluginError(ElasticMCPError):
    """Raised when there's a plugin-related error."""
    pass


@dataclass(frozen=True)
class ErrorDetail:
    """A failure reduced to a kind and a human-readable message."""

    kind: str
    message: str


def _api_error_reason(error: ApiError) -> str:
    body = error.body
    if isinstance(body, dict):
        cause = body.get("error")
        if isinstance(cause, dict):
            reason = cause.get("reason") or cause.get("type")
            if reason:
                return f"{reason} (status {error.status_code})"
        elif isinstance(cause, str) and cause:
            return f"{cause} (status {error.status_code})"
    return str(error)


def _transport_error_message(error: TransportError) -> str:
    # str() of a transport error is a fixed label ("Connection error"), the
    # caller's description lives in .message
    message = error.message if isinstance(error.message, str) and error.message else type(error).__name__
    if error.errors:
        message = f"{message} (caused by: {error.errors[0]})"
    return message


def describe_error(error: BaseException) -> ErrorDetail:
    """Normalize any raised value into an ``ErrorDetail``.

    Elasticsearch API errors carry their reason in the response body,
    transport errors describe the connection problem, and our own errors
    already hold a message. Anything else falls back to ``str()`` or the
    exception type name.
    """
    if isinstance(error, ElasticMCPError):
        return ErrorDetail(kind=error.error_code, message=error.message)
    if isinstance(error, ApiError):
        return ErrorDetail(kind="BACKEND_ERROR", message=_api_error_reason(error))
    if isinstance(error, TransportError):
        return ErrorDetail(kind="CONNECTION_ERROR", message=_transport_error_message(error))

    message = str(error).strip()
    return ErrorDetail(kind=type(error).__name__.upper(), message=message or type(error).__name__)
