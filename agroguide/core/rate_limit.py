"""
Rate limiting for write endpoints (feedback submission)
"""
import time
from threading import Lock
from typing import Dict, List

from fastapi import status
from fastapi.responses import JSONResponse

from agroguide.core.config import get_settings


class RateLimiter:
    """
    In-memory sliding-window rate limiter, keyed by client.
    Thread-safe; state is per process.
    """

    def __init__(self, max_requests: int = 10, window_seconds: int = 60):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._hits: Dict[str, List[float]] = {}
        self._lock = Lock()

    def _prune(self, key: str, now: float) -> List[float]:
        window_start = now - self.window_seconds
        hits = [t for t in self._hits.get(key, ()) if t > window_start]
        if hits:
            self._hits[key] = hits
        else:
            # Idle keys are dropped so the map only holds active clients
            self._hits.pop(key, None)
        return hits

    def check_rate_limit(self, key: str) -> tuple[bool, int]:
        """
        Record a hit for key if it is within the limit.

        Returns:
            (is_allowed, retry_after_seconds); retry_after is 0 when allowed
        """
        with self._lock:
            now = time.time()
            hits = self._prune(key, now)

            if len(hits) >= self.max_requests:
                retry_after = int(self.window_seconds - (now - min(hits))) + 1
                return False, retry_after

            hits.append(now)
            self._hits[key] = hits
            return True, 0

    def reset(self, key: str | None = None) -> None:
        with self._lock:
            if key:
                self._hits.pop(key, None)
            else:
                self._hits.clear()


# Feedback submissions: FEEDBACK_RATE_LIMIT per minute per signed-in user
feedback_limiter = RateLimiter(max_requests=get_settings().feedback_rate_limit, window_seconds=60)


def rate_limit_response(limiter: RateLimiter, retry_after: int, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={
            "detail": detail,
            "retry_after": retry_after,
            "limit": limiter.max_requests,
            "window_seconds": limiter.window_seconds,
        },
        headers={"Retry-After": str(retry_after)},
    )
