"""
The Odds API service for fetching college football betting odds.

One call returns every upcoming event with head-to-head, spread and total
markets from the configured bookmakers, in American odds format.

Quota Tracking: Response headers x-requests-remaining, x-requests-used
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import httpx

from betbuzz.core.config import settings
from betbuzz.core.errors import UpstreamError
from betbuzz.core.logging import get_logger
from betbuzz.services.core.http_client import ProviderClient

logger = get_logger(__name__)


class OddsApiService(ProviderClient):
    """
    The Odds API client (API key passed as a query parameter).

    Quota: captures x-requests-remaining and x-requests-used headers and
    warns as the monthly allowance runs out.
    """

    provider_name = "Odds API"

    def __init__(
        self,
        api_key: str,
        sport_key: Optional[str] = None,
        bookmakers: Optional[Sequence[str]] = None,
        base_url: Optional[str] = None,
        monthly_quota: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize The Odds API service.

        Args:
            api_key: The Odds API key
            sport_key: Sport to fetch (default from settings, NCAA football)
            bookmakers: Bookmaker keys to include, in the order odds boards show them
            base_url: API base URL override
            monthly_quota: Plan allowance used for quota alerts
            client: Optional pre-built HTTP client
        """
        super().__init__(client=client)
        if not api_key:
            logger.warning("ODDS_API_KEY is not configured; odds requests will be rejected upstream")
        self.api_key = api_key
        self.sport_key = sport_key or settings.ODDS_SPORT_KEY
        self.bookmakers = list(bookmakers) if bookmakers is not None else settings.odds_bookmakers
        self.base_url = (base_url or settings.ODDS_API_BASE).rstrip("/")
        self.monthly_quota = monthly_quota or settings.ODDS_API_MONTHLY_QUOTA

        self._requests_remaining: Optional[int] = None
        self._requests_used: Optional[int] = None
        self._quota_last_updated: Optional[datetime] = None

    def _odds_params(self) -> Dict[str, str]:
        return {
            "regions": settings.ODDS_API_REGIONS,
            "markets": settings.ODDS_API_MARKETS,
            "oddsFormat": "american",
            "bookmakers": ",".join(self.bookmakers),
            "dateFormat": "iso",
            "apiKey": self.api_key,
        }

    async def get_events(self) -> List[Dict[str, Any]]:
        """
        Fetch all upcoming events with odds.

        Returns:
            Raw provider events (`id`, `commence_time`, `home_team`,
            `away_team`, `bookmakers`), in provider order.

        Raises:
            UpstreamError: on transport failure, non-2xx status or a payload
                that is not a list of events
        """
        response = await self._request(
            "GET",
            f"{self.base_url}/sports/{self.sport_key}/odds",
            params=self._odds_params(),
        )
        self._update_quota_from_headers(response)

        try:
            events = response.json()
        except ValueError as exc:
            raise UpstreamError("Odds API returned invalid JSON", provider=self.provider_name) from exc

        if not isinstance(events, list):
            raise UpstreamError(
                f"Odds API returned {type(events).__name__}, expected a list of events",
                provider=self.provider_name,
            )

        logger.info(f"Fetched {len(events)} events from The Odds API")
        return events

    def _update_quota_from_headers(self, response: httpx.Response) -> None:
        """
        Update quota tracking from response headers.

        The Odds API returns:
        - x-requests-remaining: Requests left in current billing period
        - x-requests-used: Requests used in current billing period
        """
        try:
            remaining = response.headers.get("x-requests-remaining")
            used = response.headers.get("x-requests-used")
            if remaining:
                self._requests_remaining = int(float(remaining))
            if used:
                self._requests_used = int(float(used))
            self._quota_last_updated = datetime.now()
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to parse quota headers: {e}")
            return

        if self._requests_remaining is None:
            return

        logger.info(
            f"The Odds API Quota: {self._requests_remaining} remaining, "
            f"{self._requests_used} used"
        )
        # Alert thresholds: < 5% remaining is an error, < 20% a warning
        if self._requests_remaining < self.monthly_quota * 0.05:
            logger.error(
                f"CRITICAL: Odds API quota critically low! "
                f"Only {self._requests_remaining} requests remaining (< 5%)."
            )
        elif self._requests_remaining < self.monthly_quota * 0.20:
            logger.warning(
                f"WARNING: Odds API quota running low. "
                f"{self._requests_remaining} requests remaining (< 20%)."
            )

    def get_quota_status(self) -> Dict[str, Any]:
        """Current quota status as last reported by the provider."""
        return {
            "requests_remaining": self._requests_remaining,
            "requests_used": self._requests_used,
            "last_updated": self._quota_last_updated.isoformat() if self._quota_last_updated else None,
            "monthly_quota": self.monthly_quota,
        }
