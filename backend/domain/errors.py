"""
Custom domain exceptions for consistent error handling.

These exceptions are mapped to HTTP status codes by the global exception handler
in main.py.
"""
from fastapi import HTTPException, status


class DomainError(HTTPException):
    """Base class for all domain-specific errors."""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST, details: dict | None = None):
        super().__init__(status_code=status_code, detail=message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """Unreadable request (400)."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, details=details)


class UnauthorizedError(DomainError):
    """Unauthorized access (401)."""
    def __init__(self, message: str = "Unauthorized", details: dict | None = None):
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED, details=details)


class UpstreamError(DomainError):
    """
    Payment processor call failed (500).

    The processor's own error body is logged, never returned; only its
    HTTP status (when there was one) is passed through in details.
    """
    def __init__(
        self,
        message: str = "Failed to create order",
        upstream_status: int | None = None,
        details: dict | None = None,
    ):
        details = dict(details or {})
        if upstream_status is not None:
            details["upstream_status"] = upstream_status
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
        self.upstream_status = upstream_status
