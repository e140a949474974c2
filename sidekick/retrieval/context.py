"""
Context Assembler

Renders the top-ranked library records into the text block appended to the
Sidekick system instruction. Every rendered record carries an ID so the model
can cite it as [LIBRARY_ITEM:type:id:title].

Section order is fixed: prompts, stories, tools. Empty sections are omitted
and an empty ranking renders as ''.
"""

import asyncio
from collections.abc import Sequence
from typing import Final

from sidekick.clients.content_store import ContentStoreProtocol
from sidekick.core.logging import get_logger
from sidekick.retrieval.models import (
    ContentRecord,
    ContentType,
    PromptTemplate,
    RankedContent,
    ScoredRecord,
    Story,
    ToolListing,
)
from sidekick.retrieval.retriever import PROMPTS, STORIES, TOOLS, CollectionSpec

logger = get_logger(__name__)

UNKNOWN_ID: Final[str] = "unknown"
RECORD_SEPARATOR: Final[str] = "---"
FENCE: Final[str] = "```"

SECTION_HEADERS: Final[dict[ContentType, str]] = {
    ContentType.PROMPT: "RELEVANT PROMPTS FROM THE LIBRARY",
    ContentType.STORY: "RELEVANT STORIES FROM THE LIBRARY",
    ContentType.TOOL: "RELEVANT TOOLS FROM THE LIBRARY",
}

COLLECTIONS: Final[dict[ContentType, CollectionSpec]] = {
    ContentType.STORY: STORIES,
    ContentType.PROMPT: PROMPTS,
    ContentType.TOOL: TOOLS,
}


def record_fields(record: ContentRecord, record_id: str) -> list[tuple[str, str]]:
    """Label/value pairs for one record, in render order."""
    if isinstance(record, PromptTemplate):
        return [
            ("ID", record_id),
            ("Title", record.title),
            ("Category", record.category),
            ("Description", record.description),
            ("Example Prompt", record.example_prompt),
        ]
    if isinstance(record, Story):
        return [
            ("ID", record_id),
            ("Title", record.title),
            ("Attribution", record.attribution),
            ("Story", record.body),
        ]
    if isinstance(record, ToolListing):
        return [
            ("ID", record_id),
            ("Name", record.name),
            ("Description", record.description),
            ("URL", record.url),
        ]
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def render_section(content_type: ContentType, entries: Sequence[tuple[ContentRecord, str]]) -> str:
    """Render one fenced section; '' when entries is empty."""
    if not entries:
        return ""

    blocks = [
        "\n".join(f"{label}: {value}" for label, value in record_fields(record, record_id))
        for record, record_id in entries
    ]
    body = f"\n{RECORD_SEPARATOR}\n".join(blocks)
    return f"{SECTION_HEADERS[content_type]}:\n{FENCE}\n{body}\n{FENCE}"


class ContextAssembler:
    """Resolves record identifiers and renders the context block.

    Attributes:
        store: Content store used to look up missing identifiers
    """

    def __init__(self, store: ContentStoreProtocol) -> None:
        self.store = store

    async def assemble(self, ranked: RankedContent) -> str:
        """Render the ranked records as the library context block."""
        if ranked.is_empty():
            return ""

        ordered: list[tuple[ContentType, list[ScoredRecord]]] = [
            (ContentType.PROMPT, ranked.prompts),
            (ContentType.STORY, ranked.stories),
            (ContentType.TOOL, ranked.tools),
        ]

        records = [scored.record for _, group in ordered for scored in group]
        ids = await asyncio.gather(*(self.resolve_id(record) for record in records))

        sections = []
        position = 0
        for content_type, group in ordered:
            entries = list(zip((s.record for s in group), ids[position : position + len(group)]))
            position += len(group)
            section = render_section(content_type, entries)
            if section:
                sections.append(section)

        return "\n\n".join(sections)

    async def resolve_id(self, record: ContentRecord) -> str:
        """Return the record's ID, looking it up by title/name if missing.

        Failed or empty lookups resolve to 'unknown'.
        """
        if record.id:
            return str(record.id)

        title = record.display_title
        if not title:
            return UNKNOWN_ID

        collection = COLLECTIONS[record.content_type]
        try:
            found = await self.store.lookup_id(collection.table, collection.identity_field, title)
        except Exception as e:
            logger.warning(
                "identifier_lookup_failed",
                table=collection.table,
                title=title,
                error=str(e),
            )
            return UNKNOWN_ID

        return str(found) if found else UNKNOWN_ID
