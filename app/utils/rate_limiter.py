"""
Rate limiting middleware for API endpoints
"""
import time
from collections import defaultdict
from fastapi import Request, HTTPException
from typing import Dict, List
import logging

from app.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    In-memory sliding window rate limiter
    Counts are per process; run behind a shared limiter when scaled out
    """

    def __init__(self, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour

        # Storage: {client_id: [timestamp, ...]}
        self.minute_tracker: Dict[str, List[float]] = defaultdict(list)
        self.hour_tracker: Dict[str, List[float]] = defaultdict(list)

    def _get_client_id(self, request: Request) -> str:
        """
        Client IP address

        Identity headers are client-controlled and unverified at this point,
        so they cannot select the bucket.
        """
        return request.client.host if request.client else "unknown"

    def _cleanup_old_entries(self, tracker: Dict[str, List[float]], window_seconds: int, now: float):
        """Remove entries older than window and clients left with none"""
        cutoff_time = now - window_seconds

        for client_id in list(tracker.keys()):
            tracker[client_id] = [ts for ts in tracker[client_id] if ts > cutoff_time]

            if not tracker[client_id]:
                del tracker[client_id]

    def _limit_exceeded(self, limit: int, window: str, retry_after: int) -> HTTPException:
        return HTTPException(
            status_code=429,
            detail={
                "error": "rate_limit_exceeded",
                "message": f"Too many requests. Limit: {limit} requests per {window}",
                "retry_after": retry_after
            }
        )

    async def check_rate_limit(self, request: Request) -> None:
        """
        Check if request exceeds rate limits

        Raises:
            HTTPException: 429 if rate limit exceeded
        """
        client_id = self._get_client_id(request)
        now = time.time()

        self._cleanup_old_entries(self.minute_tracker, 60, now)
        self._cleanup_old_entries(self.hour_tracker, 3600, now)

        minute_requests = len(self.minute_tracker.get(client_id, []))
        if minute_requests >= self.requests_per_minute:
            logger.warning(f"Rate limit exceeded (minute): {client_id}")
            raise self._limit_exceeded(self.requests_per_minute, "minute", 60)

        hour_requests = len(self.hour_tracker.get(client_id, []))
        if hour_requests >= self.requests_per_hour:
            logger.warning(f"Rate limit exceeded (hour): {client_id}")
            raise self._limit_exceeded(self.requests_per_hour, "hour", 3600)

        self.minute_tracker[client_id].append(now)
        self.hour_tracker[client_id].append(now)

        logger.debug(f"Rate limit check passed: {client_id} (minute: {minute_requests+1}, hour: {hour_requests+1})")


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR
)
