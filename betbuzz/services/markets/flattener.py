"""Flatten one event's bookmaker listings into canonical lines per market type.

Flattening runs as a collect-then-filter pipeline so that what gets dropped,
and why, is an explicit step:

1. collect_candidates()   one BookCandidate per bookmaker, in provider order,
                          tagged with a skip reason when the (book, market)
                          pair cannot produce a line
2. complete_candidates()  keep the untagged candidates
3. flatten_market()       build one CanonicalLine per survivor

Provider order is kept as-is; it reflects the provider's own book ranking.
A book that lacks one market still contributes to the others.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from betbuzz.core.logging import get_logger
from betbuzz.services.markets.models import (
    CanonicalLine,
    MarketType,
    MoneylineLine,
    SpreadLine,
    TotalLine,
)
from betbuzz.services.sync.utils.name_normalizer import names_match

logger = get_logger(__name__)

# Skip reasons
MARKET_MISSING = "market_missing"
OUTCOME_COUNT = "outcome_count"
SIDE_UNMATCHED = "side_unmatched"
POINT_MISSING = "point_missing"

DEFAULT_BOOK_LABEL = "book"


@dataclass
class BookCandidate:
    """
    One bookmaker's contribution to one market type.

    `first`/`second` are the matched outcomes: home/away for h2h and
    spreads, over/under for totals.
    """

    book: str
    first: Optional[Dict[str, Any]] = None
    second: Optional[Dict[str, Any]] = None
    skip_reason: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.skip_reason is None


def book_label(bookmaker: Dict[str, Any]) -> str:
    """Short key, else display title, else "book"; upper-cased."""
    return str(bookmaker.get("key") or bookmaker.get("title") or DEFAULT_BOOK_LABEL).upper()


def find_market(bookmaker: Dict[str, Any], market_type: MarketType) -> Optional[Dict[str, Any]]:
    """First market entry of the requested type, or None."""
    for market in bookmaker.get("markets") or []:
        if market.get("key") == market_type.value:
            return market
    return None


def _side_names(event: Dict[str, Any], market_type: MarketType) -> Tuple[Optional[str], Optional[str]]:
    if market_type is MarketType.TOTALS:
        return "over", "under"
    return event.get("home_team"), event.get("away_team")


def _find_outcome(outcomes: List[Dict[str, Any]], name: Optional[str]) -> Optional[Dict[str, Any]]:
    for outcome in outcomes:
        if names_match(outcome.get("name"), name):
            return outcome
    return None


def collect_candidates(event: Dict[str, Any], market_type: MarketType) -> List[BookCandidate]:
    """
    Evaluate every bookmaker of `event` for `market_type`.

    Args:
        event: Odds provider event with `home_team`, `away_team`, `bookmakers`
        market_type: Market to extract

    Returns:
        One candidate per bookmaker in provider order, including the ones
        that will be dropped (with their skip reason set).
    """
    first_name, second_name = _side_names(event, market_type)
    candidates = []

    for bookmaker in event.get("bookmakers") or []:
        candidate = BookCandidate(book=book_label(bookmaker))
        candidates.append(candidate)

        market = find_market(bookmaker, market_type)
        if market is None:
            candidate.skip_reason = MARKET_MISSING
            continue

        outcomes = market.get("outcomes") or []
        if len(outcomes) != 2:
            candidate.skip_reason = OUTCOME_COUNT
            continue

        candidate.first = _find_outcome(outcomes, first_name)
        candidate.second = _find_outcome(outcomes, second_name)
        if candidate.first is None or candidate.second is None:
            candidate.skip_reason = SIDE_UNMATCHED
        elif market_type is MarketType.SPREADS and (
            candidate.first.get("point") is None or candidate.second.get("point") is None
        ):
            candidate.skip_reason = POINT_MISSING

    return candidates


def complete_candidates(candidates: List[BookCandidate]) -> List[BookCandidate]:
    """Drop candidates that cannot produce a full line; order is preserved."""
    kept = []
    for candidate in candidates:
        if candidate.complete:
            kept.append(candidate)
        else:
            logger.debug(f"Skipping {candidate.book}: {candidate.skip_reason}")
    return kept


def _build_line(market_type: MarketType, candidate: BookCandidate) -> CanonicalLine:
    first, second = candidate.first, candidate.second

    if market_type is MarketType.H2H:
        return MoneylineLine(book=candidate.book, home=first.get("price"), away=second.get("price"))

    if market_type is MarketType.SPREADS:
        return SpreadLine(
            book=candidate.book,
            home=first.get("point"),
            away=second.get("point"),
            price_home=first.get("price"),
            price_away=second.get("price"),
        )

    return TotalLine(
        book=candidate.book,
        over=first.get("point"),
        under=second.get("point"),
        price_over=first.get("price"),
        price_under=second.get("price"),
    )


def flatten_market(event: Dict[str, Any], market_type: MarketType) -> List[CanonicalLine]:
    """
    Canonical lines for one market type of one event.

    Examples:
        >>> event = {
        ...     "home_team": "Texas", "away_team": "Ohio State",
        ...     "bookmakers": [{"key": "draftkings", "markets": [{"key": "h2h", "outcomes": [
        ...         {"name": "Texas", "price": -150}, {"name": "Ohio State", "price": 130}]}]}],
        ... }
        >>> flatten_market(event, MarketType.H2H)
        [MoneylineLine(book='DRAFTKINGS', home=-150, away=130)]
    """
    market_type = MarketType(market_type)
    candidates = complete_candidates(collect_candidates(event, market_type))
    return [_build_line(market_type, candidate) for candidate in candidates]
