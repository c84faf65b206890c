"""
Provider clients and the shared token cache.

- schedule_service: CollegeFootballData schedule (bearer header auth)
- odds_api_service: The Odds API odds board (API key query param)
- reddit_service: Reddit search (OAuth client credentials via TokenCache)
"""
from betbuzz.services.core.odds_api_service import OddsApiService
from betbuzz.services.core.reddit_service import RedditService
from betbuzz.services.core.schedule_service import ScheduleService
from betbuzz.services.core.token_cache import TokenCache

__all__ = [
    "OddsApiService",
    "RedditService",
    "ScheduleService",
    "TokenCache",
]
