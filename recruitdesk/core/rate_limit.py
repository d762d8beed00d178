"""
Simple in-memory rate limiter for API endpoints.

Bots (ingestion) get a tighter budget than authenticated operators.
"""
import logging
import time
from collections import defaultdict
from typing import Dict, List
from fastapi import Request, HTTPException, status

from recruitdesk.core import config

logger = logging.getLogger(__name__)

# {bucket:ip: [timestamps]}
rate_limit_store: Dict[str, List[float]] = defaultdict(list)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        # Take the first IP in the chain
        return forwarded.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


def check_rate_limit(
    request: Request,
    max_requests: int = 10,
    window_seconds: int = 60,
    bucket: str = "default",
) -> None:
    """
    Check if client has exceeded rate limit.

    Args:
        request: FastAPI request object
        max_requests: Maximum number of requests allowed
        window_seconds: Time window in seconds
        bucket: Limiter name, so bot and operator budgets are counted apart

    Raises:
        HTTPException: 429 if rate limit exceeded
    """
    ip = get_client_ip(request)
    key = f"{bucket}:{ip}"
    now = time.time()

    cutoff = now - window_seconds
    rate_limit_store[key] = [
        timestamp for timestamp in rate_limit_store[key]
        if timestamp > cutoff
    ]

    request_count = len(rate_limit_store[key])

    if request_count >= max_requests:
        logger.warning(f"Rate limit exceeded for {bucket} IP: {ip} ({request_count} requests in {window_seconds}s)")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests, please try again later."
        )

    rate_limit_store[key].append(now)

    logger.debug(f"Rate limit check passed for {bucket} IP: {ip} ({request_count + 1}/{max_requests})")


def bot_rate_limit(request: Request) -> None:
    """Dependency for bot-facing routes."""
    check_rate_limit(
        request,
        max_requests=config.BOT_RATE_LIMIT,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        bucket="bot",
    )


def user_rate_limit(request: Request) -> None:
    """Dependency for login and operator routes."""
    check_rate_limit(
        request,
        max_requests=config.USER_RATE_LIMIT,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        bucket="user",
    )
