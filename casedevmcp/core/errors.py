"""Exceptions raised by the Case.dev client layer."""
from typing import Optional


class CaseDevError(Exception):
    """Base class for all Case.dev client errors."""


class AuthError(CaseDevError):
    """No API key could be resolved."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "Case.dev API key not found. Please set THURGOOD_API_KEY or "
            "CASEDEV_API_KEY environment variable, or connect Case.dev in the "
            "provider settings."
        )


class RequestTimeoutError(CaseDevError, TimeoutError):
    """The request deadline expired before the exchange completed."""

    def __init__(self, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Case.dev API request timed out after {timeout_ms}ms")


class HttpError(CaseDevError):
    """The backend (or blob storage) answered with a non-success status."""

    def __init__(self, status: int, body: str, source: str = "Case.dev API"):
        self.status = status
        self.body = body
        super().__init__(f"{source} error ({status}): {body}")


class ValidationError(CaseDevError):
    """The caller supplied an invalid parameter combination."""


class SchemaError(CaseDevError):
    """A decoded payload does not match the expected schema."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"Unexpected response from {path}: {detail}")
