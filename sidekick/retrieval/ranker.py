"""
Relevance Ranker

Scores candidate records against the extracted keywords and keeps the top
records per collection.

A hit is plain substring containment of the lowercased keyword in the
lowercased field value. Each (keyword, field) hit adds the field weight.
Story attribution takes part in retrieval but is not scored.

Patterns Applied:
- Weight tables as module-level constants
- Stable sort so equal scores keep retrieval order
"""

from collections.abc import Sequence
from typing import Final

from sidekick.retrieval.models import (
    ContentRecord,
    ContentType,
    RankedContent,
    RetrievedContent,
    ScoredRecord,
)

DEFAULT_TOP_N: Final[int] = 3

# field name -> weight, per collection
FIELD_WEIGHTS: Final[dict[ContentType, dict[str, int]]] = {
    ContentType.STORY: {"title": 10, "body": 3},
    ContentType.PROMPT: {"title": 10, "category": 5, "description": 3},
    ContentType.TOOL: {"name": 10, "description": 5},
}


def score_record(record: ContentRecord, keywords: Sequence[str]) -> int:
    """Sum weighted substring hits of every keyword over the scored fields.

    Args:
        record: Story, PromptTemplate or ToolListing
        keywords: Extracted keywords

    Returns:
        Non-negative integer score
    """
    score = 0
    for field_name, weight in FIELD_WEIGHTS[record.content_type].items():
        value = (getattr(record, field_name) or "").lower()
        if not value:
            continue
        for keyword in keywords:
            if keyword.lower() in value:
                score += weight
    return score


class RelevanceRanker:
    """Ranks candidate records per collection by keyword score.

    Attributes:
        top_n: Maximum records kept per collection
    """

    def __init__(self, top_n: int = DEFAULT_TOP_N) -> None:
        self.top_n = top_n

    def rank(
        self,
        records: Sequence[ContentRecord],
        keywords: Sequence[str],
    ) -> list[ScoredRecord]:
        """Score all records and return the top_n, highest first.

        Zero-score records are kept; they can still fill the top_n when
        fewer candidates exist.
        """
        scored = [ScoredRecord(record=r, score=score_record(r, keywords)) for r in records]
        # sorted() is stable: ties keep retrieval order
        ranked = sorted(scored, key=lambda s: s.score, reverse=True)
        return ranked[: self.top_n]

    def rank_all(self, content: RetrievedContent, keywords: Sequence[str]) -> RankedContent:
        """Rank each collection independently."""
        return RankedContent(
            stories=self.rank(content.stories, keywords),
            prompts=self.rank(content.prompts, keywords),
            tools=self.rank(content.tools, keywords),
        )


