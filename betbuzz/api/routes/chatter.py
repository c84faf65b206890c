"""
Chatter routes.

Provides:
- GET /api/chatter: sentiment of hot Reddit posts matching a query
"""
from dataclasses import asdict
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Query, Request

from betbuzz.api.deps import get_reddit_service, get_scorer, get_token_cache
from betbuzz.core.config import settings
from betbuzz.core.errors import translate_failures
from betbuzz.core.logging import get_logger
from betbuzz.core.rate_limit import limiter
from betbuzz.services.core.reddit_service import RedditService
from betbuzz.services.core.token_cache import TokenCache
from betbuzz.services.sentiment.chatter import aggregate_chatter, build_snippets
from betbuzz.services.sentiment.scorer import SentimentScorer

logger = get_logger(__name__)

router = APIRouter(tags=["chatter"])


@router.get("/chatter")
@limiter.limit(settings.RATE_LIMIT_DEFAULT)
async def get_chatter(
    request: Request,
    q: Optional[str] = Query(None, description="Search query"),
    reddit: RedditService = Depends(get_reddit_service),
    token_cache: TokenCache = Depends(get_token_cache),
    scorer: SentimentScorer = Depends(get_scorer),
) -> Dict:
    """
    Score hot Reddit posts for a query.

    - **q**: search text (default: "college football betting")

    `score` is the mean snippet score in [-1, 1], 0 when nothing was found.
    """
    query = q or settings.CHATTER_DEFAULT_QUERY

    with translate_failures("reddit chatter failed"):
        posts = await reddit.search(query, token_cache)
        snippets = build_snippets(posts, scorer, settings.SNIPPET_MAX_CHARS)

    return {
        "score": aggregate_chatter(snippets),
        "snippets": [asdict(snippet) for snippet in snippets],
    }
