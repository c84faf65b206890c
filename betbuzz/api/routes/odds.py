"""
Odds routes.

Provides:
- GET /api/odds: canonical odds for one matchup, looked up by team names
- GET /api/odds-all: canonical odds for every event in the feed

Home/away in responses follow the odds provider's framing, which can be
the reverse of the caller's.
"""
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from betbuzz.api.deps import get_odds_service
from betbuzz.core.config import settings
from betbuzz.core.errors import ClientInputError, NotFoundError, translate_failures
from betbuzz.core.logging import get_logger
from betbuzz.core.rate_limit import limiter
from betbuzz.services.core.odds_api_service import OddsApiService
from betbuzz.services.markets.summary import build_event_odds, build_odds_board
from betbuzz.services.sync.matchers.event_matcher import find_event

logger = get_logger(__name__)

router = APIRouter(tags=["odds"])


@router.get("/odds")
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def get_event_odds(
    request: Request,
    home: Optional[str] = Query(None, description="Home team, e.g. 'Ohio State'"),
    away: Optional[str] = Query(None, description="Away team, e.g. 'Texas'"),
    odds_service: OddsApiService = Depends(get_odds_service),
) -> Dict:
    """
    Get spread, moneyline and total lines for one matchup.

    - **home**, **away**: team names in any casing/punctuation; the matchup
      is found regardless of which side the feed lists at home

    Returns 400 when either team is missing, 404 when the feed has no such
    matchup.
    """
    if not home or not away:
        raise ClientInputError("home & away required")

    with translate_failures("odds fetch failed"):
        events = await odds_service.get_events()
        event = find_event(events, home, away)

    if event is None:
        raise NotFoundError("game not found in odds feed")

    with translate_failures("odds fetch failed"):
        return build_event_odds(event)


@router.get("/odds-all")
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def get_all_odds(
    request: Request,
    odds_service: OddsApiService = Depends(get_odds_service),
) -> Dict:
    """Get canonical odds for every event in the feed, in provider order."""
    with translate_failures("odds-all failed"):
        events = await odds_service.get_events()
        return {"events": build_odds_board(events)}
