"""Shared pytest fixtures for bet-buzz-api tests."""
import os
import sys
from pathlib import Path
from typing import Any, Dict, Generator, List
from unittest.mock import AsyncMock

import pytest

# Settings are read at import time; pin them before anything imports betbuzz
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("CFBD_API_KEY", "test-cfbd-key")
os.environ.setdefault("ODDS_API_KEY", "test-odds-key")
os.environ.setdefault("REDDIT_CLIENT_ID", "test-client-id")
os.environ.setdefault("REDDIT_CLIENT_SECRET", "test-client-secret")

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


class StubLexicon:
    """Lexicon with fixed word valences; unknown words score 0."""

    def __init__(self, valences: Dict[str, int]):
        self.valences = valences

    def score(self, text: str) -> int:
        return sum(self.valences.get(word.strip(".,!?").lower(), 0) for word in text.split())


def outcome(name: str, price: Any = None, point: Any = None) -> Dict[str, Any]:
    record = {"name": name}
    if price is not None:
        record["price"] = price
    if point is not None:
        record["point"] = point
    return record


def make_event(
    home: str,
    away: str,
    bookmakers: List[Dict[str, Any]],
    event_id: str = "evt-1",
    commence_time: str = "2025-08-30T16:00:00Z",
) -> Dict[str, Any]:
    return {
        "id": event_id,
        "sport_key": "americanfootball_ncaaf",
        "commence_time": commence_time,
        "home_team": home,
        "away_team": away,
        "bookmakers": bookmakers,
    }


@pytest.fixture
def sample_odds_event() -> Dict[str, Any]:
    """Texas hosting Ohio State, priced by two books with all three markets."""
    return make_event(
        "Texas",
        "Ohio State",
        [
            {
                "key": "draftkings",
                "title": "DraftKings",
                "markets": [
                    {"key": "h2h", "outcomes": [outcome("Texas", -150), outcome("Ohio State", 130)]},
                    {"key": "spreads", "outcomes": [
                        outcome("Texas", -110, -3.5), outcome("Ohio State", -110, 3.5)]},
                    {"key": "totals", "outcomes": [
                        outcome("Over", -110, 47.5), outcome("Under", -110, 47.5)]},
                ],
            },
            {
                "key": "fanduel",
                "title": "FanDuel",
                "markets": [
                    {"key": "h2h", "outcomes": [outcome("Ohio State", 125), outcome("Texas", -145)]},
                    {"key": "spreads", "outcomes": [
                        outcome("Ohio State", -108, 3.0), outcome("Texas", -112, -3.0)]},
                    {"key": "totals", "outcomes": [
                        outcome("Under", -105, 50.5), outcome("Over", -115, 50.5)]},
                ],
            },
        ],
    )


@pytest.fixture
def odds_feed(sample_odds_event) -> List[Dict[str, Any]]:
    """A small odds feed with an unrelated event ahead of the Texas game."""
    return [
        make_event(
            "Georgia",
            "Clemson",
            [{"key": "betmgm", "markets": [
                {"key": "h2h", "outcomes": [outcome("Georgia", -200), outcome("Clemson", 170)]}]}],
            event_id="evt-0",
        ),
        sample_odds_event,
    ]


@pytest.fixture
def stub_scorer():
    from betbuzz.services.sentiment.scorer import SentimentScorer

    return SentimentScorer(lexicon=StubLexicon({"love": 3, "lock": 2, "hate": -3, "awful": -3, "disaster": -25}))


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def odds_service() -> AsyncMock:
    service = AsyncMock()
    service.get_events.return_value = []
    return service


@pytest.fixture
def schedule_service() -> AsyncMock:
    service = AsyncMock()
    service.get_games.return_value = []
    return service


@pytest.fixture
def reddit_service() -> AsyncMock:
    service = AsyncMock()
    service.search.return_value = []
    return service


@pytest.fixture(scope="function")
def test_client(odds_service, schedule_service, reddit_service, stub_scorer) -> Generator:
    """
    FastAPI TestClient with every provider client replaced by an AsyncMock.

    Not used as a context manager, so the lifespan (which closes the real
    provider clients) does not run.
    """
    from fastapi.testclient import TestClient

    from betbuzz.api import deps
    from betbuzz.main import app
    from betbuzz.services.core.token_cache import TokenCache

    app.dependency_overrides[deps.get_odds_service] = lambda: odds_service
    app.dependency_overrides[deps.get_schedule_service] = lambda: schedule_service
    app.dependency_overrides[deps.get_reddit_service] = lambda: reddit_service
    app.dependency_overrides[deps.get_scorer] = lambda: stub_scorer
    app.state.reddit_token_cache = TokenCache()

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
