"""
Content Retriever

Fans out one filtered query per library collection and joins the results.

Patterns Applied:
- asyncio.gather with per-branch error isolation
- Best-effort retrieval: a failing collection becomes an empty candidate set
"""

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Final, TypeVar

from sidekick.clients.content_store import ContentStoreProtocol
from sidekick.core.logging import get_logger
from sidekick.retrieval.models import PromptTemplate, RetrievedContent, Story, ToolListing

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", Story, PromptTemplate, ToolListing)

DEFAULT_RETRIEVAL_LIMIT: Final[int] = 10


@dataclass(frozen=True)
class CollectionSpec:
    """Where a collection lives and which columns its filter searches."""

    table: str
    filter_fields: tuple[str, ...]
    identity_field: str


# Story attribution is searched but not scored
STORIES: Final[CollectionSpec] = CollectionSpec(
    table="stories",
    filter_fields=("title", "story_text", "attribution"),
    identity_field="title",
)
PROMPTS: Final[CollectionSpec] = CollectionSpec(
    table="prompts",
    filter_fields=("title", "category", "description"),
    identity_field="title",
)
TOOLS: Final[CollectionSpec] = CollectionSpec(
    table="tools",
    filter_fields=("name", "description"),
    identity_field="name",
)


class ContentRetriever:
    """Retrieves candidate records from the three library collections.

    Attributes:
        store: Content store implementing ContentStoreProtocol
        limit: Maximum candidates per collection
    """

    def __init__(
        self,
        store: ContentStoreProtocol,
        limit: int = DEFAULT_RETRIEVAL_LIMIT,
    ) -> None:
        self.store = store
        self.limit = limit

    async def retrieve(self, keywords: Sequence[str]) -> RetrievedContent:
        """Query all collections concurrently.

        No queries are issued when keywords is empty.

        Args:
            keywords: Extracted keywords

        Returns:
            RetrievedContent with candidates in store order
        """
        if not keywords:
            return RetrievedContent.empty()

        stories, prompts, tools = await asyncio.gather(
            self._query(STORIES, Story.from_row, keywords),
            self._query(PROMPTS, PromptTemplate.from_row, keywords),
            self._query(TOOLS, ToolListing.from_row, keywords),
        )

        content = RetrievedContent(stories=stories, prompts=prompts, tools=tools)
        logger.info(
            "content_retrieved",
            stories=len(content.stories),
            prompts=len(content.prompts),
            tools=len(content.tools),
        )
        return content

    async def _query(
        self,
        collection: CollectionSpec,
        from_row: Callable[[dict[str, Any]], RecordT],
        keywords: Sequence[str],
    ) -> list[RecordT]:
        # Exception (not BaseException) so cancellation still propagates.
        # Malformed rows fail the whole collection, like a failed query.
        try:
            rows = await self.store.search(
                collection.table,
                collection.filter_fields,
                keywords,
                limit=self.limit,
            )
            return [from_row(row) for row in rows[: self.limit]]
        except Exception as e:
            logger.warning(
                "collection_query_failed",
                table=collection.table,
                error=str(e),
            )
            return []
