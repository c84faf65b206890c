"""
Shared plumbing for the third-party provider clients.

Each provider client owns one lazily created `httpx.AsyncClient`. Every
failure on the way to a decoded JSON body (transport error, non-2xx status,
undecodable payload) surfaces as `UpstreamError`; nothing is retried.
"""
from typing import Any, Optional

import httpx

from betbuzz.core.config import settings
from betbuzz.core.errors import UpstreamError
from betbuzz.core.logging import get_logger

logger = get_logger(__name__)


class ProviderClient:
    """
    Base class for provider clients.

    Args:
        client: Pre-built AsyncClient (tests pass one with a MockTransport).
            When omitted, one is created on first use and closed by close().
        timeout: Request timeout in seconds
    """

    provider_name = "provider"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise UpstreamError(
                f"{self.provider_name} request failed: {exc!r}", provider=self.provider_name
            ) from exc

        if not response.is_success:
            # Body is logged, never returned to the caller
            logger.warning(
                f"{self.provider_name} returned {response.status_code}",
                extra={"provider": self.provider_name, "body": response.text[:500]},
            )
            raise UpstreamError(
                f"{self.provider_name} {response.status_code}",
                provider=self.provider_name,
                status=response.status_code,
            )
        return response

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self._request(method, url, **kwargs)
        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"{self.provider_name} returned invalid JSON",
                provider=self.provider_name,
                status=response.status_code,
            ) from exc
