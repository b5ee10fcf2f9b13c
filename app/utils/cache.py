"""
Redis cache utility for derived progress results
"""
import redis
import json
import logging
from datetime import date
from typing import Optional, Any
from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """
    Redis-based cache for snapshots and leaderboards

    Cached values are query results, never a source of truth. Every
    mutation deletes the affected keys and the next read recomputes.
    """

    def __init__(self):
        try:
            self.redis_client = redis.from_url(
                settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except Exception as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None

    def snapshot_key(self, user_id: str, as_of: date) -> str:
        return f"snapshot:{user_id}:{as_of.isoformat()}"

    def leaderboard_key(self, as_of: date) -> str:
        return f"leaderboard:{as_of.isoformat()}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.info(f"Cache hit: {key}")
                return json.loads(value)
            logger.info(f"Cache miss: {key}")
            return None
        except Exception as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(
        self,
        key: str,
        value: Any,
        ttl: int = None
    ) -> bool:
        """
        Set value in cache

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds (default from settings)

        Returns:
            Success status
        """
        if not self.redis_client:
            return False

        try:
            ttl = ttl or settings.SNAPSHOT_CACHE_TTL
            serialized = json.dumps(value, default=str)
            self.redis_client.set(key, serialized, ex=ttl)
            logger.info(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"Cache set error: {str(e)}")
            return False

    def delete_pattern(self, pattern: str) -> bool:
        """Delete every key matching a glob pattern"""
        if not self.redis_client:
            return False

        try:
            keys = list(self.redis_client.scan_iter(match=pattern))
            if keys:
                self.redis_client.delete(*keys)
                logger.info(f"Cleared {len(keys)} cache entries for {pattern}")
            return True
        except Exception as e:
            logger.error(f"Cache clear error: {str(e)}")
            return False

    def invalidate_user(self, user_id: str) -> None:
        """Drop a user's snapshots and every leaderboard they appear on"""
        self.delete_pattern(f"snapshot:{user_id}:*")
        self.invalidate_leaderboards()

    def invalidate_leaderboards(self) -> None:
        """Drop every cached leaderboard, e.g. after a reader joins"""
        self.delete_pattern("leaderboard:*")

    def invalidate_all(self) -> None:
        self.delete_pattern("snapshot:*")
        self.invalidate_leaderboards()


# Global instance
cache_service = CacheService()
