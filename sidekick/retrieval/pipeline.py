"""
Context Pipeline

Runs the per-turn retrieval stages: extract keywords -> retrieve -> rank ->
assemble context -> build system prompt.

Each stage runs inside an OpenTelemetry span.
"""

from collections.abc import Mapping, Sequence
from typing import Any

from sidekick.clients.content_store import ContentStoreProtocol
from sidekick.core.logging import get_logger
from sidekick.core.tracing import get_tracer
from sidekick.prompts import build_system_prompt
from sidekick.retrieval.context import ContextAssembler
from sidekick.retrieval.keywords import MAX_KEYWORDS, extract_keywords, latest_user_message
from sidekick.retrieval.ranker import DEFAULT_TOP_N, RelevanceRanker
from sidekick.retrieval.retriever import DEFAULT_RETRIEVAL_LIMIT, ContentRetriever

logger = get_logger(__name__)
tracer = get_tracer(__name__)


class ContextPipeline:
    """Builds the library-aware system prompt for one chat turn.

    Attributes:
        retriever: Collection fan-out
        ranker: Per-collection top-N ranking
        assembler: Identifier resolution and rendering
        max_keywords: Keyword cap per turn
    """

    def __init__(
        self,
        store: ContentStoreProtocol,
        max_keywords: int = MAX_KEYWORDS,
        retrieval_limit: int = DEFAULT_RETRIEVAL_LIMIT,
        top_n: int = DEFAULT_TOP_N,
    ) -> None:
        self.retriever = ContentRetriever(store, limit=retrieval_limit)
        self.ranker = RelevanceRanker(top_n=top_n)
        self.assembler = ContextAssembler(store)
        self.max_keywords = max_keywords

    async def build_context(self, message: str) -> str:
        """Return the library context block for a user message ('' if none)."""
        with tracer.start_as_current_span("sidekick.extract_keywords"):
            keywords = extract_keywords(message, self.max_keywords)
        logger.info("keywords_extracted", keywords=keywords)

        if not keywords:
            return ""

        with tracer.start_as_current_span("sidekick.retrieve"):
            content = await self.retriever.retrieve(keywords)

        with tracer.start_as_current_span("sidekick.rank"):
            ranked = self.ranker.rank_all(content, keywords)

        with tracer.start_as_current_span("sidekick.assemble_context"):
            return await self.assembler.assemble(ranked)

    async def build_system_prompt(self, messages: Sequence[Mapping[str, Any]]) -> str:
        """Return the Sidekick preamble plus context for the latest user message."""
        context = await self.build_context(latest_user_message(messages))
        return build_system_prompt(context)
