"""
Standard API error envelope.

Error responses produced by the handlers in main.py look like:
    { "success": false, "error": { "code": "...", "message": "...", "details": {...} } }
"""
from typing import Any
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Standard error detail structure."""
    code: str = Field(..., description="Error code (e.g., 'upstream', 'http_error')")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error context")


class StandardErrorResponse(BaseModel):
    """Standard error response envelope."""
    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")


def error_response(code: str, message: str, details: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build the error envelope as a plain dict."""
    return {
        "success": False,
        "error": {"code": code, "message": message, "details": details},
    }
