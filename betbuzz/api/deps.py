"""
FastAPI dependency providers.

Provider clients are process-wide singletons, created on first use from
settings and closed at shutdown. Tests swap them out through
`app.dependency_overrides`.
"""
from typing import Optional

from fastapi import Request

from betbuzz.core.config import settings
from betbuzz.services.core.odds_api_service import OddsApiService
from betbuzz.services.core.reddit_service import RedditService
from betbuzz.services.core.schedule_service import ScheduleService
from betbuzz.services.core.token_cache import TokenCache
from betbuzz.services.sentiment.scorer import SentimentScorer, get_sentiment_scorer

_schedule_service: Optional[ScheduleService] = None
_odds_service: Optional[OddsApiService] = None
_reddit_service: Optional[RedditService] = None


def get_schedule_service() -> ScheduleService:
    global _schedule_service
    if _schedule_service is None:
        _schedule_service = ScheduleService(api_key=settings.CFBD_API_KEY)
    return _schedule_service


def get_odds_service() -> OddsApiService:
    global _odds_service
    if _odds_service is None:
        _odds_service = OddsApiService(api_key=settings.ODDS_API_KEY)
    return _odds_service


def get_reddit_service() -> RedditService:
    global _reddit_service
    if _reddit_service is None:
        _reddit_service = RedditService(
            client_id=settings.REDDIT_CLIENT_ID,
            client_secret=settings.REDDIT_CLIENT_SECRET,
        )
    return _reddit_service


def get_token_cache(request: Request) -> TokenCache:
    """The process-wide Reddit token cache held on the application state."""
    return request.app.state.reddit_token_cache


def get_scorer() -> SentimentScorer:
    return get_sentiment_scorer()


async def close_services() -> None:
    """Close every provider client that has been created."""
    global _schedule_service, _odds_service, _reddit_service
    for service in (_schedule_service, _odds_service, _reddit_service):
        if service is not None:
            await service.close()
    _schedule_service = _odds_service = _reddit_service = None
