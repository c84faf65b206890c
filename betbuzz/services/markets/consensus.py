"""Consensus values derived across independently priced books."""
import math
from typing import Any, Optional, Sequence

from betbuzz.services.markets.models import TotalLine


def coerce_point(value: Any) -> float:
    """
    Numeric value of a provider point, 0.0 when it has none.

    None, empty strings, non-numeric strings and NaN all coerce to 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def consensus_total(lines: Sequence[TotalLine]) -> Optional[float]:
    """
    Mean target total across books.

    Each line contributes its over point; when that is missing or zero, its
    under point; when both are, 0. Only total lines are accepted.

    Returns:
        The mean, or None when there are no lines.

    Examples:
        >>> consensus_total([TotalLine("A", 47.5, 47.5), TotalLine("B", 50.5, 50.5)])
        49.0
        >>> consensus_total([]) is None
        True
    """
    if not lines:
        return None

    for line in lines:
        if not isinstance(line, TotalLine):
            raise TypeError(f"consensus_total expects TotalLine, got {type(line).__name__}")

    # TODO: drop the zero contribution from the mean once consumers confirm a
    # line with neither point should be excluded rather than averaged as 0.
    total = sum(coerce_point(line.over) or coerce_point(line.under) or 0.0 for line in lines)
    return total / len(lines)
