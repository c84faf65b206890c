"""
Bounded sentiment scores for short social-media text.

Magnitude estimation is delegated to a lexicon (AFINN via the `afinn`
package): it returns the signed sum of word valences, which is unbounded.
The score reported by the API is that intensity divided by a fixed
calibration constant and clamped into [-1, 1].
"""
from typing import Optional, Protocol, Union

from afinn import Afinn

from betbuzz.core.logging import get_logger

logger = get_logger(__name__)

# Raw intensity that maps to a full-strength score of +/-1
CALIBRATION_DIVISOR = 10


class Lexicon(Protocol):
    """Anything that rates text with a signed, unbounded intensity."""

    def score(self, text: str) -> Union[int, float]:
        ...


def clamp_score(raw: Union[int, float]) -> float:
    """
    Map a raw lexicon intensity into [-1, 1].

    >>> clamp_score(3)
    0.3
    >>> clamp_score(25), clamp_score(-25)
    (1.0, -1.0)
    """
    return max(-1.0, min(1.0, raw / CALIBRATION_DIVISOR))


class SentimentScorer:
    """Scores text into [-1, 1] using an injectable lexicon."""

    def __init__(self, lexicon: Optional[Lexicon] = None):
        """
        Args:
            lexicon: Raw intensity source. Defaults to the English AFINN word list.
        """
        self.lexicon = lexicon if lexicon is not None else Afinn(language="en")

    def raw_score(self, text: Optional[str]) -> float:
        if not text:
            return 0.0
        return float(self.lexicon.score(text))

    def score_text(self, text: Optional[str]) -> float:
        return clamp_score(self.raw_score(text))


_scorer: Optional[SentimentScorer] = None


def get_sentiment_scorer() -> SentimentScorer:
    """Get or create the SentimentScorer singleton (the AFINN table loads once)."""
    global _scorer
    if _scorer is None:
        _scorer = SentimentScorer()
        logger.info("Loaded AFINN sentiment lexicon")
    return _scorer
