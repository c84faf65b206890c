"""
Reddit search service for betting chatter.

Authentication is OAuth client credentials: a short-lived application token
is fetched from the token endpoint and reused through a TokenCache that the
caller passes in. The token fetch always completes before the search that
needs it.
"""
import time
from typing import Any, Dict, List, Optional, Tuple

import httpx

from betbuzz.core.config import settings
from betbuzz.core.errors import UpstreamError
from betbuzz.core.logging import get_logger
from betbuzz.services.core.http_client import ProviderClient
from betbuzz.services.core.token_cache import Clock, TokenCache

logger = get_logger(__name__)


class RedditService(ProviderClient):
    """Reddit API client for searching posts across all subreddits."""

    provider_name = "Reddit"

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        user_agent: Optional[str] = None,
        search_limit: Optional[int] = None,
        token_url: Optional[str] = None,
        api_base: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client=client)
        if not client_id or not client_secret:
            logger.warning("Reddit client credentials are not configured; token requests will fail")
        self.client_id = client_id
        self.client_secret = client_secret
        self.user_agent = user_agent or settings.REDDIT_USER_AGENT
        self.search_limit = search_limit or settings.REDDIT_SEARCH_LIMIT
        self.token_url = token_url or settings.REDDIT_TOKEN_URL
        self.api_base = (api_base or settings.REDDIT_API_BASE).rstrip("/")

    async def fetch_token(self) -> Tuple[str, float]:
        """
        Request a new application-only access token.

        Returns:
            (access_token, expires_in seconds)
        """
        payload = await self._request_json(
            "POST",
            self.token_url,
            auth=(self.client_id, self.client_secret),
            data={"grant_type": "client_credentials"},
            headers={"User-Agent": self.user_agent},
        )
        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise UpstreamError("Reddit token response had no access_token", provider=self.provider_name)
        return token, payload.get("expires_in") or 0

    async def search(
        self,
        query: str,
        token_cache: TokenCache,
        now: Clock = time.time,
    ) -> List[Dict[str, Any]]:
        """
        Search hot posts matching `query`.

        Args:
            query: Free-text search
            token_cache: Process-wide token cache, refreshed through fetch_token()
            now: Clock for the cache's expiry check

        Returns:
            Post payloads (`children[].data`) in provider order; empty
            entries are skipped.
        """
        token = await token_cache.get_valid_token(self.fetch_token, now)

        payload = await self._request_json(
            "GET",
            f"{self.api_base}/search",
            params={"q": query, "restrict_sr": 0, "sort": "hot", "limit": self.search_limit},
            headers={"Authorization": f"Bearer {token}", "User-Agent": self.user_agent},
        )
        listing = payload.get("data") if isinstance(payload, dict) else None
        children = (listing or {}).get("children") or []
        posts = [child.get("data") for child in children if isinstance(child, dict)]
        posts = [post for post in posts if post]

        logger.info(f"Reddit search returned {len(posts)} posts", extra={"query": query})
        return posts
