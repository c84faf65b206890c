"""Compose flattened markets into the per-event odds payloads served by the API."""
from typing import Any, Dict, Iterable, List

from betbuzz.services.markets.consensus import consensus_total
from betbuzz.services.markets.flattener import flatten_market
from betbuzz.services.markets.models import MarketSummary, MarketType
from betbuzz.services.sync.matchers.event_matcher import derive_matchup_id

# Spread and moneyline lines are quoted from the home side
HOME_SIDE = "home"


def summarize_markets(event: Dict[str, Any]) -> Dict[str, MarketSummary]:
    """Flatten all three market types of an event."""
    totals = flatten_market(event, MarketType.TOTALS)
    return {
        "spread": MarketSummary(
            MarketType.SPREADS, flatten_market(event, MarketType.SPREADS), side=HOME_SIDE
        ),
        "moneyline": MarketSummary(
            MarketType.H2H, flatten_market(event, MarketType.H2H), side=HOME_SIDE
        ),
        "total": MarketSummary(MarketType.TOTALS, totals, target=consensus_total(totals)),
    }


def _markets_payload(event: Dict[str, Any]) -> Dict[str, Any]:
    return {name: summary.to_dict() for name, summary in summarize_markets(event).items()}


def build_event_odds(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Odds payload for a single matched event.

    `teams` reflects the provider's framing of home/away, which may be the
    reverse of how the caller asked.
    """
    return {
        "teams": {"home": event.get("home_team"), "away": event.get("away_team")},
        "commence_time": event.get("commence_time"),
        **_markets_payload(event),
    }


def build_odds_board(events: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Odds payload for every event in a feed, in provider order."""
    board = []
    for event in events:
        home = event.get("home_team")
        away = event.get("away_team")
        commence_time = event.get("commence_time")
        board.append({
            "id": event.get("id") or derive_matchup_id(home, away, commence_time),
            "commence_time": commence_time,
            "home": home,
            "away": away,
            "odds": _markets_payload(event),
        })
    return board
