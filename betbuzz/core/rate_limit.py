"""Per-client rate limiting for the public endpoints (slowapi)."""
from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from betbuzz.core.config import settings


def get_rate_limit_key(request: Request) -> str:
    """
    Rate limit key for a request.

    Uses the first X-Forwarded-For hop when behind a proxy, the peer
    address otherwise.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_rate_limit_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)
