"""
Short-lived bearer token cache for OAuth client-credentials providers.

One cache instance is shared by every request in the process. It is lazily
populated, reused until it is within `refresh_margin` seconds of expiry and
then refreshed. There is no refresh lock: two requests that find the token
stale at the same moment will both fetch a new one, and the last write wins.
"""
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Union

from betbuzz.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_REFRESH_MARGIN = 60.0

# Async callable returning (token, lifetime in seconds)
RefreshFn = Callable[[], Awaitable[Tuple[str, Union[int, float]]]]
Clock = Callable[[], float]


@dataclass
class TokenCache:
    """Cached token value and its absolute expiry (epoch seconds)."""

    value: Optional[str] = None
    expires_at: float = 0.0
    refresh_margin: float = DEFAULT_REFRESH_MARGIN

    def is_fresh(self, now: float) -> bool:
        return bool(self.value) and now < self.expires_at - self.refresh_margin

    async def get_valid_token(self, refresh_fn: RefreshFn, now: Clock = time.time) -> str:
        """
        Return the cached token, refreshing it first when it is missing or stale.

        Args:
            refresh_fn: Fetches a new token; awaited only when needed
            now: Clock, injectable for tests

        Returns:
            A token valid for at least `refresh_margin` more seconds, as far
            as the provider's stated lifetime goes.
        """
        if self.is_fresh(now()):
            return self.value

        token, expires_in = await refresh_fn()
        self.value = token
        self.expires_at = now() + float(expires_in or 0)
        logger.info(f"Refreshed bearer token, expires in {expires_in}s")
        return token

    def clear(self) -> None:
        self.value = None
        self.expires_at = 0.0
