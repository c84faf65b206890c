"""Name normalization for matching team and outcome names across providers.

Providers disagree on casing and punctuation for the same participant:
- Case: "OHIO STATE" → "ohio state"
- Punctuation: "Texas A&M" → "texas a m", "Miami (FL)" → "miami fl"
- Extra spaces: "Ohio   State " → "ohio state"

The normalized form is a comparison key only; it is never shown to users.
"""
import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_WHITESPACE = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """
    Normalize a name into its comparison key.

    Steps:
    1. Convert to lowercase
    2. Replace every character outside [a-z0-9] with a space
    3. Collapse whitespace runs and trim

    Idempotent: normalize(normalize(x)) == normalize(x).

    Examples:
        >>> normalize("Ohio State!")
        'ohio state'
        >>> normalize("Texas A&M")
        'texas a m'
        >>> normalize(None)
        ''
    """
    if not text:
        return ""

    key = _NON_ALNUM.sub(" ", str(text).lower())
    return _WHITESPACE.sub(" ", key).strip()


def names_match(name1: Optional[str], name2: Optional[str]) -> bool:
    """
    Check if two names are equal after normalization.

    Two names that both normalize to the empty key are not a match; a
    missing name never identifies anything.
    """
    key = normalize(name1)
    return bool(key) and key == normalize(name2)
