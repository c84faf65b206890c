"""
Tests for the provider clients.

Outbound requests go to an httpx.MockTransport, so these check the exact
request each provider receives and how each failure mode surfaces.
"""
import base64

import httpx
import pytest

from betbuzz.core.errors import UpstreamError
from betbuzz.services.core.odds_api_service import OddsApiService
from betbuzz.services.core.reddit_service import RedditService
from betbuzz.services.core.schedule_service import ScheduleService, to_schedule_game
from betbuzz.services.core.token_cache import TokenCache


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def recording_handler(responses):
    """Serve `responses` in order and keep every request seen."""
    seen = []
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return queue.pop(0)

    return handler, seen


# =============================================================================
# THE ODDS API
# =============================================================================

class TestOddsApiService:

    @pytest.mark.asyncio
    async def test_get_events_request(self, sample_odds_event):
        handler, seen = recording_handler([httpx.Response(200, json=[sample_odds_event])])
        service = OddsApiService(
            api_key="odds-key",
            base_url="https://odds.test/v4",
            client=mock_client(handler),
        )

        events = await service.get_events()

        assert events == [sample_odds_event]
        (request,) = seen
        assert request.method == "GET"
        assert request.url.path == "/v4/sports/americanfootball_ncaaf/odds"
        params = request.url.params
        assert params["regions"] == "us"
        assert params["markets"] == "h2h,spreads,totals"
        assert params["oddsFormat"] == "american"
        assert params["bookmakers"] == "draftkings,fanduel,betmgm,pointsbetus"
        assert params["dateFormat"] == "iso"
        assert params["apiKey"] == "odds-key"

    @pytest.mark.asyncio
    async def test_non_success_status(self):
        handler, _ = recording_handler([httpx.Response(401, text="invalid api key")])
        service = OddsApiService(api_key="bad", client=mock_client(handler))

        with pytest.raises(UpstreamError) as exc_info:
            await service.get_events()

        assert exc_info.value.status == 401
        assert exc_info.value.provider == "Odds API"
        assert "invalid api key" not in exc_info.value.public_message

    @pytest.mark.asyncio
    async def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        service = OddsApiService(api_key="k", client=mock_client(handler))

        with pytest.raises(UpstreamError) as exc_info:
            await service.get_events()
        assert exc_info.value.status is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_payload_must_be_a_list(self):
        handler, _ = recording_handler([httpx.Response(200, json={"message": "quota exceeded"})])
        service = OddsApiService(api_key="k", client=mock_client(handler))

        with pytest.raises(UpstreamError):
            await service.get_events()

    @pytest.mark.asyncio
    async def test_quota_headers(self):
        handler, _ = recording_handler([
            httpx.Response(200, json=[], headers={"x-requests-remaining": "950", "x-requests-used": "19050"})
        ])
        service = OddsApiService(api_key="k", monthly_quota=20000, client=mock_client(handler))

        await service.get_events()
        status = service.get_quota_status()

        assert status["requests_remaining"] == 950
        assert status["requests_used"] == 19050
        assert status["monthly_quota"] == 20000
        assert status["last_updated"] is not None

    def test_quota_unknown_before_first_call(self):
        status = OddsApiService(api_key="k").get_quota_status()
        assert status["requests_remaining"] is None
        assert status["last_updated"] is None


# =============================================================================
# CFBD SCHEDULE
# =============================================================================

class TestScheduleService:

    @pytest.mark.asyncio
    async def test_get_games_request(self):
        handler, seen = recording_handler([httpx.Response(200, json=[{
            "id": 401628374,
            "start_date": "2025-08-30T16:00:00.000Z",
            "home_team": "Ohio State",
            "away_team": "Texas",
            "venue": "Ohio Stadium",
            "home_ranking": 3,
            "away_ranking": 1,
        }])])
        service = ScheduleService(api_key="cfbd-key", base_url="https://cfbd.test", client=mock_client(handler))

        games = await service.get_games(2025, 1)

        (request,) = seen
        assert request.url.path == "/games"
        assert request.url.params["year"] == "2025"
        assert request.url.params["week"] == "1"
        assert request.url.params["seasonType"] == "regular"
        assert request.headers["authorization"] == "Bearer cfbd-key"
        assert games == [{
            "id": "401628374",
            "kickoff": "2025-08-30T16:00:00.000Z",
            "home": "Ohio State",
            "away": "Texas",
            "venue": "Ohio Stadium",
            "home_rank": 3,
            "away_rank": 1,
        }]

    @pytest.mark.asyncio
    async def test_upstream_failure(self):
        handler, _ = recording_handler([httpx.Response(503, text="maintenance")])
        service = ScheduleService(api_key="k", client=mock_client(handler))

        with pytest.raises(UpstreamError) as exc_info:
            await service.get_games(2025, 1)
        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        handler, _ = recording_handler([httpx.Response(200, text="<html>oops</html>")])
        service = ScheduleService(api_key="k", client=mock_client(handler))

        with pytest.raises(UpstreamError):
            await service.get_games(2025, 1)


class TestToScheduleGame:

    def test_camel_case_payload(self):
        game = to_schedule_game({
            "id": 7,
            "startDate": "2025-09-06T19:30:00.000Z",
            "homeTeam": "Texas",
            "awayTeam": "San José State",
            "homeRanking": 1,
        })
        assert game["home"] == "Texas"
        assert game["away"] == "San José State"
        assert game["kickoff"] == "2025-09-06T19:30:00.000Z"
        assert game["home_rank"] == 1
        assert game["away_rank"] is None

    def test_defaults(self):
        game = to_schedule_game({
            "start_date": "2025-08-30T16:00:00Z",
            "home_team": "Texas A&M",
            "away_team": "UTSA",
            "home_ranking": 0,
        })
        assert game["id"] == "texas a m-utsa-2025-08-30T16:00:00Z"
        assert game["venue"] == ""
        assert game["home_rank"] is None
        assert game["away_rank"] is None


# =============================================================================
# REDDIT
# =============================================================================

def reddit_listing(*posts):
    return {"data": {"children": [{"kind": "t3", "data": post} for post in posts]}}


class TestRedditService:

    def make_service(self, handler) -> RedditService:
        return RedditService(
            client_id="cid",
            client_secret="secret",
            token_url="https://auth.test/api/v1/access_token",
            api_base="https://oauth.test",
            client=mock_client(handler),
        )

    @pytest.mark.asyncio
    async def test_token_then_search(self):
        handler, seen = recording_handler([
            httpx.Response(200, json={"access_token": "tok", "expires_in": 3600}),
            httpx.Response(200, json=reddit_listing({"title": "Texas -3"}, {"title": "OSU ML"})),
        ])
        service = self.make_service(handler)

        posts = await service.search("texas ohio state", TokenCache(), now=lambda: 1_000.0)

        assert [p["title"] for p in posts] == ["Texas -3", "OSU ML"]

        token_request, search_request = seen
        assert token_request.method == "POST"
        assert str(token_request.url) == "https://auth.test/api/v1/access_token"
        expected_auth = base64.b64encode(b"cid:secret").decode()
        assert token_request.headers["authorization"] == f"Basic {expected_auth}"
        assert token_request.headers["user-agent"] == "bet-buzz/0.1"
        assert token_request.content == b"grant_type=client_credentials"

        assert search_request.url.path == "/search"
        assert search_request.url.params["q"] == "texas ohio state"
        assert search_request.url.params["restrict_sr"] == "0"
        assert search_request.url.params["sort"] == "hot"
        assert search_request.url.params["limit"] == "10"
        assert search_request.headers["authorization"] == "Bearer tok"
        assert search_request.headers["user-agent"] == "bet-buzz/0.1"

    @pytest.mark.asyncio
    async def test_token_is_reused(self):
        handler, seen = recording_handler([
            httpx.Response(200, json={"access_token": "tok", "expires_in": 3600}),
            httpx.Response(200, json=reddit_listing()),
            httpx.Response(200, json=reddit_listing()),
        ])
        service = self.make_service(handler)
        cache = TokenCache()

        await service.search("a", cache, now=lambda: 1_000.0)
        await service.search("b", cache, now=lambda: 2_000.0)

        assert [r.method for r in seen] == ["POST", "GET", "GET"]
        assert cache.value == "tok"

    @pytest.mark.asyncio
    async def test_token_failure_skips_search(self):
        handler, seen = recording_handler([httpx.Response(401, json={"error": "invalid_grant"})])
        service = self.make_service(handler)

        with pytest.raises(UpstreamError):
            await service.search("a", TokenCache())
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_token_response_without_token(self):
        handler, _ = recording_handler([httpx.Response(200, json={"error": "unsupported_grant_type"})])
        service = self.make_service(handler)

        with pytest.raises(UpstreamError):
            await service.fetch_token()

    @pytest.mark.asyncio
    async def test_empty_children_are_skipped(self):
        cache = TokenCache(value="cached", expires_at=10_000.0)
        handler, seen = recording_handler([
            httpx.Response(200, json={"data": {"children": [{"data": {}}, {"data": {"title": "x"}}, {}]}}),
        ])
        service = self.make_service(handler)

        posts = await service.search("a", cache, now=lambda: 1_000.0)

        assert posts == [{"title": "x"}]
        assert seen[0].headers["authorization"] == "Bearer cached"

    @pytest.mark.asyncio
    async def test_close_leaves_injected_client_open(self):
        client = mock_client(lambda request: httpx.Response(200, json={}))
        service = RedditService(client_id="cid", client_secret="secret", client=client)

        await service.close()

        assert not client.is_closed
        await client.aclose()
