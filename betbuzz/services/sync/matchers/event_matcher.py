"""Event matcher for locating a requested matchup in a provider's event list.

Providers frame the same matchup differently: one feed lists Texas at home,
another lists Ohio State. Matching is therefore order-insensitive on the
normalized team names. When a feed carries the same matchup more than once,
the first event in provider order wins.
"""
from typing import Any, Dict, Iterable, Optional

from betbuzz.core.logging import get_logger
from betbuzz.services.sync.utils.name_normalizer import normalize

logger = get_logger(__name__)


def find_event(
    events: Iterable[Dict[str, Any]],
    home: Optional[str],
    away: Optional[str],
) -> Optional[Dict[str, Any]]:
    """
    Find the event for a (home, away) pair.

    Args:
        events: Provider events, each with `home_team` and `away_team`
        home: Requested home team, any casing/punctuation
        away: Requested away team, any casing/punctuation

    Returns:
        The first event whose normalized team pair equals the query pair in
        either orientation, or None when nothing matches.
    """
    home_key = normalize(home)
    away_key = normalize(away)
    if not home_key or not away_key:
        return None

    for event in events:
        event_home = normalize(event.get("home_team"))
        event_away = normalize(event.get("away_team"))

        if (event_home == home_key and event_away == away_key) or (
            event_home == away_key and event_away == home_key
        ):
            logger.debug(
                f"Matched {home} vs {away} to event {event.get('id')}",
                extra={"swapped": event_home != home_key},
            )
            return event

    logger.info(f"No event found for {home} vs {away}")
    return None


def derive_event_id(home: Optional[str], away: Optional[str], kickoff: Optional[str]) -> str:
    """
    Deterministic identity for a schedule entry that came without an id.

    >>> derive_event_id("Ohio State", "Texas", "2025-08-30T16:00:00Z")
    'ohio state-texas-2025-08-30T16:00:00Z'
    """
    return f"{normalize(home)}-{normalize(away)}-{kickoff or ''}"


def derive_matchup_id(home: Optional[str], away: Optional[str], kickoff: Optional[str]) -> str:
    """
    Deterministic identity for an odds event that came without an id.

    Uses "away-at-home" ordering, the way odds boards list matchups.

    >>> derive_matchup_id("Texas", "Ohio State", "2025-08-30T16:00:00Z")
    'ohio state-at-texas-2025-08-30T16:00:00Z'
    """
    return f"{normalize(away)}-at-{normalize(home)}-{kickoff or ''}"
