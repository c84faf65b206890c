"""
Schedule routes.

Provides:
- GET /api/games: one week of the college football schedule
"""
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from betbuzz.api.deps import get_schedule_service
from betbuzz.core.config import settings
from betbuzz.core.errors import ClientInputError, translate_failures
from betbuzz.core.logging import get_logger
from betbuzz.core.rate_limit import limiter
from betbuzz.services.core.schedule_service import ScheduleService

logger = get_logger(__name__)

router = APIRouter(tags=["games"])


def _int_param(value: Optional[str], default: int) -> int:
    """Parse a non-negative integer query value; absent or blank means `default`."""
    if value is None or not value.strip():
        return default
    try:
        number = int(value)
    except ValueError:
        raise ClientInputError("invalid query parameters")
    if number < 0:
        raise ClientInputError("invalid query parameters")
    return number


@router.get("/games")
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def get_games(
    request: Request,
    year: Optional[str] = Query(None, description="Season year (default: current season)"),
    week: Optional[str] = Query(None, description="Week number (default: current week)"),
    schedule: ScheduleService = Depends(get_schedule_service),
) -> Dict:
    """
    Get one week of the regular-season schedule.

    Each game: id, kickoff, home, away, venue, home_rank, away_rank.
    """
    season_year = _int_param(year, settings.DEFAULT_SEASON_YEAR)
    season_week = _int_param(week, settings.DEFAULT_SEASON_WEEK)

    with translate_failures("CFBD schedule failed"):
        games = await schedule.get_games(season_year, season_week)

    return {"games": games}
