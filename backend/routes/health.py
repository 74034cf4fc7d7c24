"""
Health check endpoints.
"""
from datetime import datetime, timezone
import logging

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Basic liveness check."""
    return "Payment Test Server is running"


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Health check — reports whether merchant API credentials are configured."""
    return {
        "status": "healthy",
        "environment": settings.environment,
        "checkout_mode": settings.checkout_mode,
        "merchant_configured": settings.merchant_configured,
        "webhook_verification": settings.verify_webhook_signatures,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
