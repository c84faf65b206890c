"""Canonical market records shared by the flattener, consensus and summary code.

Prices are American odds and points are handicaps/thresholds, both passed
through exactly as the provider sent them.
"""
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class MarketType(str, Enum):
    """Market keys as used by the odds provider."""

    H2H = "h2h"
    SPREADS = "spreads"
    TOTALS = "totals"


@dataclass
class MoneylineLine:
    """Head-to-head prices for one book; `home`/`away` are prices."""

    book: str
    home: Any
    away: Any


@dataclass
class SpreadLine:
    """Spread for one book; `home`/`away` are points."""

    book: str
    home: Any
    away: Any
    price_home: Any = None
    price_away: Any = None


@dataclass
class TotalLine:
    """Total for one book; `over`/`under` are points."""

    book: str
    over: Any
    under: Any
    price_over: Any = None
    price_under: Any = None


CanonicalLine = Union[MoneylineLine, SpreadLine, TotalLine]


def line_to_dict(line: CanonicalLine) -> Dict[str, Any]:
    """Serialize a line, leaving out prices and points the book did not quote."""
    return {key: value for key, value in asdict(line).items() if value is not None}


@dataclass
class MarketSummary:
    """
    Lines for one market type plus the derived values reported with them.

    `side` is the perspective the lines are quoted from (spread and
    moneyline are quoted from the home side); `target` is the consensus
    value (totals only).
    """

    market_type: MarketType
    lines: List[CanonicalLine] = field(default_factory=list)
    side: Optional[str] = None
    target: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        lines = [line_to_dict(line) for line in self.lines]
        if self.market_type is MarketType.TOTALS:
            return {"target": self.target, "lines": lines}
        return {"side": self.side, "lines": lines}
