"""
In-memory rate limiting for the order-creation endpoint.

Every order request costs a call to the merchant API, so each client IP
gets a fixed number of create-order calls per sliding window. Keys whose
window has emptied are dropped. Not shared between worker processes.
"""
import time
import logging

from fastapi import HTTPException, Request

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Sliding-window counter per "client:scope" key.

    Only keys with a request still inside their window are held.
    """

    def __init__(self):
        # {key: [timestamp1, timestamp2, ...]}
        self._requests: dict[str, list[float]] = {}

    def _cleanup(self, key: str, window_seconds: int) -> list[float]:
        """Drop expired timestamps for key; forget the key once none are left."""
        cutoff = time.time() - window_seconds
        live = [ts for ts in self._requests.get(key, ()) if ts > cutoff]
        if live:
            self._requests[key] = live
        else:
            self._requests.pop(key, None)
        return live

    def check(self, key: str, max_requests: int, window_seconds: int) -> bool:
        """
        Record a request for key if the window has room.

        Returns:
            True if allowed, False if rate-limited
        """
        live = self._cleanup(key, window_seconds)
        if len(live) >= max_requests:
            return False

        live.append(time.time())
        self._requests[key] = live
        return True

    def remaining(self, key: str, max_requests: int, window_seconds: int) -> int:
        """Requests key may still make in the current window."""
        return max(0, max_requests - len(self._cleanup(key, window_seconds)))

    def reset(self):
        """Forget every tracked request."""
        self._requests.clear()


_limiter = RateLimiter()


def rate_limit(scope: str, max_requests: int, window_seconds: int):
    """
    Dependency factory limiting one endpoint per client IP.

    The key is the client IP plus a fixed scope name, never the raw URL
    path, so distinct paths cannot mint fresh keys.

        @router.post("/create-order")
        async def create_order(request: Request, _=Depends(rate_limit("create-order", 30, 60))):
            ...
    """
    async def _check_rate_limit(request: Request):
        client_ip = request.client.host if request.client else "unknown"
        key = f"{client_ip}:{scope}"

        if not _limiter.check(key, max_requests, window_seconds):
            logger.warning(
                f"Rate limit exceeded: {client_ip} on {scope} "
                f"({max_requests}/{window_seconds}s)"
            )
            raise HTTPException(
                status_code=429,
                detail=f"Too many {scope} requests. Limit is {max_requests} "
                       f"per {window_seconds} seconds.",
                headers={
                    "Retry-After": str(window_seconds),
                    "X-RateLimit-Limit": str(max_requests),
                    "X-RateLimit-Remaining": str(_limiter.remaining(key, max_requests, window_seconds)),
                },
            )

    return _check_rate_limit
