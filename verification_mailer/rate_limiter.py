"""
Hybrid in-memory + Redis rate limiting

Counts live in process memory and are mirrored to Redis every few seconds,
so several workers converge on a shared count without a Redis round trip
per request. When Redis is unreachable each worker keeps counting on its
own and the connection is retried after a short backoff.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import HTTPException, Request, status

from .config import TRUST_PROXY_HEADERS

logger = logging.getLogger(__name__)

redis_client: Optional[redis.Redis] = None
redis_retry_at = 0.0

REDIS_RETRY_BACKOFF_SECONDS = 30

# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

MEMORY_CACHE_SYNC_INTERVAL = 10
MEMORY_CACHE_CLEANUP_INTERVAL = 60
last_cleanup_time = 0


def get_redis_client() -> Optional[redis.Redis]:
    """
    Get or create the Redis client from REDIS_URL or REDIS_HOST/PORT/...

    Returns None while Redis is unreachable; a failed connection is not
    retried until REDIS_RETRY_BACKOFF_SECONDS have passed.
    """
    global redis_client, redis_retry_at

    if redis_client is None:
        if time.monotonic() < redis_retry_at:
            return None

        redis_url = os.getenv("REDIS_URL")
        common = {
            "decode_responses": True,
            "socket_connect_timeout": 5,
            "socket_timeout": 5,
            "retry_on_timeout": True,
            "health_check_interval": 30,
            "max_connections": 20,
        }

        if redis_url:
            client = redis.from_url(redis_url, **common)
            target = redis_url.split("@")[-1]
        else:
            redis_host = os.getenv("REDIS_HOST", "localhost")
            redis_port = int(os.getenv("REDIS_PORT", "6379"))
            client = redis.Redis(
                host=redis_host,
                port=redis_port,
                password=os.getenv("REDIS_PASSWORD", None),
                db=int(os.getenv("REDIS_DB", "0")),
                ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                **common,
            )
            target = f"{redis_host}:{redis_port}"

        try:
            client.ping()
        except Exception as e:
            redis_retry_at = time.monotonic() + REDIS_RETRY_BACKOFF_SECONDS
            logger.warning(
                f"Redis unavailable at {target}, rate limiting in memory only "
                f"for {REDIS_RETRY_BACKOFF_SECONDS}s: {str(e)}"
            )
            return None
        logger.info(f"Redis connected for rate limiting at {target}")
        redis_client = client

    return redis_client


def cleanup_expired_cache():
    """Remove expired entries from memory cache"""
    global last_cleanup_time
    current_time = int(time.time())

    if current_time - last_cleanup_time < MEMORY_CACHE_CLEANUP_INTERVAL:
        return

    with cache_lock:
        expired_keys = [k for k, v in memory_cache.items() if current_time >= v.get("reset_time", 0)]
        for k in expired_keys:
            del memory_cache[k]

    last_cleanup_time = current_time


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """
    Count one request against ``key``. With no Redis client the count is
    kept in this process only.

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    try:
        current_time = int(time.time())
        cleanup_expired_cache()

        with cache_lock:
            if key not in memory_cache:
                # Another worker may already have counted requests in this window
                entry = {
                    "count": 0,
                    "reset_time": current_time + window_seconds,
                    "last_redis_sync": current_time,
                }
                if client is not None:
                    try:
                        redis_count = client.get(key)
                        redis_ttl = client.ttl(key)
                        if redis_count and redis_ttl > 0:
                            entry["count"] = int(redis_count)
                            entry["reset_time"] = current_time + redis_ttl
                    except Exception as e:
                        logger.warning(f"Failed to load {key} from Redis, using memory only: {e}")
                memory_cache[key] = entry

            cache_entry = memory_cache[key]

            if current_time >= cache_entry["reset_time"]:
                cache_entry["count"] = 0
                cache_entry["reset_time"] = current_time + window_seconds
                cache_entry["last_redis_sync"] = 0

            is_allowed = cache_entry["count"] < limit
            if is_allowed:
                cache_entry["count"] += 1

            since_sync = current_time - cache_entry.get("last_redis_sync", 0)
            if client is not None and since_sync >= MEMORY_CACHE_SYNC_INTERVAL:
                try:
                    client.set(key, cache_entry["count"], ex=window_seconds)
                    cache_entry["last_redis_sync"] = current_time
                except Exception as e:
                    logger.warning(f"Failed to sync {key} to Redis: {e}")

            ttl = cache_entry["reset_time"] - current_time
            return is_allowed, cache_entry["count"], max(0, ttl)

    except Exception as e:
        logger.error(f"Rate limit check failed: {str(e)}")
        # Fail closed
        return False, limit, 0


def client_ip(request: Request) -> str:
    """
    Caller address for per-IP limits.

    X-Forwarded-For is only read behind a trusted proxy, and then only its
    right-most hop: earlier entries are whatever the client chose to send.
    """
    if TRUST_PROXY_HEADERS:
        forwarded = request.headers.get("X-Forwarded-For", "")
        hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
        if hops:
            return hops[-1]
    return request.client.host if request.client else "unknown"


def rate_limit_dependency(request: Request, limit: int, window_seconds: int, key_prefix: str):
    """Per-IP limit; 429 with Retry-After when exceeded"""
    try:
        client = get_redis_client()
        key = f"{key_prefix}:{client_ip(request)}"

        is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, client)
        if not is_allowed:
            logger.warning(f"Rate limit exceeded for {key} - {current_count}/{limit}")
            raise HTTPException(
                status_code=429,
                detail=f"Too many requests. Try again in {ttl} seconds.",
                headers={"Retry-After": str(ttl)},
            )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Rate limiting error: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Rate limiting service temporarily unavailable",
        ) from e


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a rate limiter dependency with specific parameters

    Example usage:
        limit_codes = create_rate_limiter(limit=5, window_seconds=600, key_prefix="send_verification")

        @app.post("/api/send-verification")
        async def send_verification(data: VerificationRequest, _: None = Depends(limit_codes)):
            ...
    """

    # Sync so FastAPI runs the blocking Redis calls in its threadpool
    def rate_limiter(request: Request):
        return rate_limit_dependency(request, limit, window_seconds, key_prefix)

    return rate_limiter
