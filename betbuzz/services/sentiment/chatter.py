"""Turn discussion posts into scored snippets and one aggregate chatter score."""
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from betbuzz.services.sentiment.scorer import SentimentScorer

SNIPPET_MAX_CHARS = 300
REDDIT_WEB_BASE = "https://reddit.com"


@dataclass
class ChatterSnippet:
    src: str
    text: str
    url: str
    score: float


def snippet_from_post(
    post: Dict[str, Any],
    scorer: SentimentScorer,
    max_chars: int = SNIPPET_MAX_CHARS,
) -> ChatterSnippet:
    """
    Build a scored snippet from one Reddit post (`data.children[].data`).

    The excerpt is the title followed by the self text, cut to `max_chars`.
    """
    text = f"{post.get('title') or ''} {post.get('selftext') or ''}"[:max_chars]
    return ChatterSnippet(
        src=f"Reddit r/{post.get('subreddit') or ''}",
        text=text,
        url=f"{REDDIT_WEB_BASE}{post.get('permalink') or ''}",
        score=scorer.score_text(text),
    )


def build_snippets(
    posts: Sequence[Dict[str, Any]],
    scorer: SentimentScorer,
    max_chars: int = SNIPPET_MAX_CHARS,
) -> List[ChatterSnippet]:
    return [snippet_from_post(post, scorer, max_chars) for post in posts]


def aggregate_chatter(snippets: Sequence[ChatterSnippet]) -> float:
    """
    Mean snippet score.

    No snippets means neutral chatter, so an empty set scores exactly 0
    rather than None.
    """
    if not snippets:
        return 0.0
    return sum(snippet.score for snippet in snippets) / len(snippets)
