"""
Keyword Extraction

Derives a short list of salient terms from the latest user message. The
terms drive both the collection queries and the relevance scores.

Patterns Applied:
- Module-level frozenset constants, built once per process
- Pure functions, no I/O
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any, Final

MAX_KEYWORDS: Final[int] = 5
MIN_KEYWORD_LENGTH: Final[int] = 3

# Anything that is not a lowercase letter, digit, whitespace or hyphen
NON_KEYWORD_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9\s-]")

# Common English function words
FUNCTION_WORDS: Final[frozenset[str]] = frozenset({
    "the", "and", "for", "are", "but", "not", "you", "all", "any", "can",
    "had", "her", "was", "one", "our", "out", "has", "have", "him", "his",
    "how", "its", "into", "who", "what", "when", "where", "which", "why",
    "with", "about", "from", "that", "this", "these", "those", "there",
    "their", "them", "they", "then", "than", "too", "very", "just", "also",
    "some", "such", "more", "most", "other", "been", "being", "were",
    "does", "did", "doing", "done", "get", "got", "give", "show", "tell",
    "find", "want", "need", "like", "know", "think", "use", "using",
    "over", "under", "again", "only", "own", "same", "each", "few", "both",
    "off", "onto", "upon", "via", "yes", "yeah", "okay", "thanks", "thank",
    "something", "anything", "things", "thing", "way", "ways", "here",
})

# Pronouns
PRONOUNS: Final[frozenset[str]] = frozenset({
    "me", "my", "mine", "myself", "we", "us", "our", "ours", "ourselves",
    "you", "your", "yours", "yourself", "she", "hers", "herself",
    "himself", "itself", "themselves", "theirs", "someone", "anyone",
    "everyone", "everybody", "somebody",
})

# Modal and auxiliary verbs
MODAL_VERBS: Final[frozenset[str]] = frozenset({
    "can", "could", "would", "should", "shall", "will", "may", "might",
    "must", "cannot", "can't", "won't", "don't", "doesn't",
})

# Request filler that says what to do, not what it is about
TASK_FILLER: Final[frozenset[str]] = frozenset({
    "remix", "remixing", "create", "creating", "build", "building", "make",
    "making", "help", "helping", "please", "let", "lets", "me", "us",
    "try", "start", "idea", "ideas", "some", "new",
})

STOP_WORDS: Final[frozenset[str]] = FUNCTION_WORDS | PRONOUNS | MODAL_VERBS | TASK_FILLER


def extract_keywords(message: str, max_keywords: int = MAX_KEYWORDS) -> list[str]:
    """Extract up to max_keywords salient terms from a user message.

    Terms keep their left-to-right order. Duplicates are not removed.

    Args:
        message: Free-text user message
        max_keywords: Maximum number of keywords to return

    Returns:
        Ordered list of keywords (possibly empty)
    """
    normalized = NON_KEYWORD_CHARS.sub(" ", message.lower())
    keywords = [
        token
        for token in normalized.split()
        if len(token) >= MIN_KEYWORD_LENGTH and token not in STOP_WORDS
    ]
    return keywords[:max_keywords]


def latest_user_message(messages: Iterable[Mapping[str, Any]]) -> str:
    """Return the content of the last user-authored message, or ''."""
    latest = ""
    for message in messages:
        if message.get("role") == "user":
            latest = message.get("content") or ""
    return latest
