"""
CollegeFootballData (CFBD) schedule service.

Fetches one week of the regular-season schedule and maps it to the game
records served by /api/games. CFBD has shipped both snake_case and
camelCase payloads; both are read.
"""
from typing import Any, Dict, List, Optional

import httpx

from betbuzz.core.config import settings
from betbuzz.core.errors import UpstreamError
from betbuzz.core.logging import get_logger
from betbuzz.services.core.http_client import ProviderClient
from betbuzz.services.sync.matchers.event_matcher import derive_event_id

logger = get_logger(__name__)


def _field(raw: Dict[str, Any], snake: str, camel: str) -> Any:
    value = raw.get(snake)
    return value if value is not None else raw.get(camel)


def to_schedule_game(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map a CFBD game to the API's schedule record.

    Missing ids are derived from the normalized matchup and kickoff; a
    missing venue becomes "", missing or zero rankings become None.
    """
    home = _field(raw, "home_team", "homeTeam")
    away = _field(raw, "away_team", "awayTeam")
    kickoff = _field(raw, "start_date", "startDate")
    game_id = raw.get("id")

    return {
        "id": str(game_id) if game_id is not None else derive_event_id(home, away, kickoff),
        "kickoff": kickoff,
        "home": home,
        "away": away,
        "venue": raw.get("venue") or "",
        "home_rank": _field(raw, "home_ranking", "homeRanking") or None,
        "away_rank": _field(raw, "away_ranking", "awayRanking") or None,
    }


class ScheduleService(ProviderClient):
    """CFBD client (bearer token in the Authorization header)."""

    provider_name = "CFBD"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        season_type: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(client=client)
        if not api_key:
            logger.warning("CFBD_API_KEY is not configured; schedule requests will be rejected upstream")
        self.api_key = api_key
        self.base_url = (base_url or settings.CFBD_API_BASE).rstrip("/")
        self.season_type = season_type or settings.SEASON_TYPE

    async def get_games(self, year: int, week: int) -> List[Dict[str, Any]]:
        """
        Fetch one week of games.

        Returns:
            Schedule records in provider order.

        Raises:
            UpstreamError: on transport failure, non-2xx status or a
                payload that is not a list
        """
        data = await self._request_json(
            "GET",
            f"{self.base_url}/games",
            params={"year": year, "seasonType": self.season_type, "week": week},
            headers={"Authorization": f"Bearer {self.api_key}"},
        )
        if not isinstance(data, list):
            raise UpstreamError(
                f"CFBD returned {type(data).__name__}, expected a list of games",
                provider=self.provider_name,
            )

        logger.info(f"Fetched {len(data)} CFBD games for {year} week {week}")
        return [to_schedule_game(game) for game in data]
