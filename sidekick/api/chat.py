"""
Chat Remix Endpoint

POST /v1/chat-remix - one Sidekick chat turn: build the library-aware system
prompt, forward the conversation to the AI gateway, return the reply verbatim
(markers stripped for the public demo chat).

Patterns Applied:
- FastAPI router pattern
- Pydantic request/response models
- Dependency injection for clients and pipeline
"""

import time
from typing import Literal

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, ConfigDict, Field

from sidekick.api.dependencies import get_completion_client, get_context_pipeline
from sidekick.api.cors import CORS_HEADERS
from sidekick.clients.completion import CompletionClientProtocol
from sidekick.core.logging import get_logger
from sidekick.core.tracing import get_tracer
from sidekick.retrieval.markers import parse_library_references, strip_library_markers
from sidekick.retrieval.pipeline import ContextPipeline

logger = get_logger(__name__)
tracer = get_tracer(__name__)


# =============================================================================
# Request/Response Models
# =============================================================================


class ChatMessage(BaseModel):
    """One conversation turn."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request body for the chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    messages: list[ChatMessage] = Field(..., min_length=1, description="Conversation so far")
    demo_mode: bool = Field(
        default=False,
        alias="demoMode",
        description="Public demo chat: reply without library item markers",
    )


class ChatResponse(BaseModel):
    """Assistant reply, possibly containing [LIBRARY_ITEM:...] markers."""

    response: str


# =============================================================================
# Router
# =============================================================================

chat_router = APIRouter(prefix="/v1", tags=["chat"])


@chat_router.options("/chat-remix", include_in_schema=False)
async def chat_remix_preflight() -> Response:
    """Answer CORS preflight with no body."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@chat_router.post("/chat-remix", response_model=ChatResponse)
async def chat_remix(
    request: ChatRequest,
    pipeline: ContextPipeline = Depends(get_context_pipeline),
    completion: CompletionClientProtocol = Depends(get_completion_client),
) -> ChatResponse:
    """Run one chat turn.

    Args:
        request: ChatRequest with the conversation history

    Returns:
        ChatResponse with the model reply
    """
    start_time = time.perf_counter()
    history = [message.model_dump() for message in request.messages]

    system_prompt = await pipeline.build_system_prompt(history)

    with tracer.start_as_current_span("sidekick.completion"):
        reply = await completion.complete(
            [{"role": "system", "content": system_prompt}, *history]
        )

    references = len(parse_library_references(reply))
    if request.demo_mode:
        reply = strip_library_markers(reply)

    logger.info(
        "chat_turn_completed",
        turns=len(history),
        references_cited=references,
        demo_mode=request.demo_mode,
        processing_time_ms=round((time.perf_counter() - start_time) * 1000, 1),
    )
    return ChatResponse(response=reply)
