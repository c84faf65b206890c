"""Market normalization: flatten per-book markets and derive consensus values."""
from betbuzz.services.markets.consensus import consensus_total
from betbuzz.services.markets.flattener import flatten_market
from betbuzz.services.markets.models import (
    MarketSummary,
    MarketType,
    MoneylineLine,
    SpreadLine,
    TotalLine,
)
from betbuzz.services.markets.summary import build_event_odds, build_odds_board

__all__ = [
    "MarketSummary",
    "MarketType",
    "MoneylineLine",
    "SpreadLine",
    "TotalLine",
    "build_event_odds",
    "build_odds_board",
    "consensus_total",
    "flatten_market",
]
