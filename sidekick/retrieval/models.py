"""
Library Content Models

Read-only records from the three library collections, plus the scored and
reference wrappers used by the ranking and context stages.

Patterns Applied:
- Frozen dataclasses (records are never mutated during a request)
- Tagged variant: one record shape per collection, dispatched on content_type
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


def _text(row: dict[str, Any], column: str) -> str:
    """Column value as text; missing or null columns become ''."""
    value = row.get(column)
    return "" if value is None else str(value)


def _identifier(row: dict[str, Any]) -> str | None:
    value = row.get("id")
    return None if value is None else str(value)


class ContentType(str, Enum):
    """Collection tag, also used as the marker type in LIBRARY_ITEM references."""

    STORY = "story"
    PROMPT = "prompt"
    TOOL = "tool"


@dataclass(frozen=True)
class Story:
    """A neighborhood story from the `stories` table."""

    id: str | None
    title: str
    body: str
    attribution: str = ""

    content_type = ContentType.STORY

    @property
    def display_title(self) -> str:
        return self.title

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "Story":
        return cls(
            id=_identifier(row),
            title=_text(row, "title"),
            body=_text(row, "story_text"),
            attribution=_text(row, "attribution"),
        )


@dataclass(frozen=True)
class PromptTemplate:
    """A remixable prompt from the `prompts` table."""

    id: str | None
    title: str
    category: str = ""
    description: str = ""
    example_prompt: str = ""

    content_type = ContentType.PROMPT

    @property
    def display_title(self) -> str:
        return self.title

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PromptTemplate":
        return cls(
            id=_identifier(row),
            title=_text(row, "title"),
            category=_text(row, "category"),
            description=_text(row, "description"),
            example_prompt=_text(row, "example_prompt"),
        )


@dataclass(frozen=True)
class ToolListing:
    """A relational tech tool from the `tools` table."""

    id: str | None
    name: str
    description: str = ""
    url: str = ""

    content_type = ContentType.TOOL

    @property
    def display_title(self) -> str:
        return self.name

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ToolListing":
        return cls(
            id=_identifier(row),
            name=_text(row, "name"),
            description=_text(row, "description"),
            url=_text(row, "url"),
        )


ContentRecord = Union[Story, PromptTemplate, ToolListing]


@dataclass(frozen=True)
class ScoredRecord:
    """A candidate record annotated with its keyword relevance score."""

    record: ContentRecord
    score: int


@dataclass(frozen=True)
class LibraryReference:
    """Identifier tuple cited by the model as [LIBRARY_ITEM:type:id:title]."""

    type: ContentType
    id: str
    title: str


@dataclass
class RetrievedContent:
    """Candidate records per collection, in retrieval order."""

    stories: list[Story]
    prompts: list[PromptTemplate]
    tools: list[ToolListing]

    @classmethod
    def empty(cls) -> "RetrievedContent":
        return cls(stories=[], prompts=[], tools=[])


@dataclass
class RankedContent:
    """Top-ranked records per collection."""

    stories: list[ScoredRecord]
    prompts: list[ScoredRecord]
    tools: list[ScoredRecord]

    def is_empty(self) -> bool:
        return not (self.stories or self.prompts or self.tools)
