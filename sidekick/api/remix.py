"""
Prompt Remix Endpoint

POST /v1/remix-prompt - one-shot remix of a library prompt with the user's
community context and customization ideas. Returns plain text.
"""

from typing import Final

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from sidekick.api.cors import CORS_HEADERS
from sidekick.api.dependencies import get_completion_client
from sidekick.api.errors import error_response
from sidekick.clients.completion import (
    CompletionClientProtocol,
    PaymentRequiredError,
    RateLimitError,
)
from sidekick.core.config import get_settings
from sidekick.core.logging import get_logger
from sidekick.prompts import build_remix_messages

logger = get_logger(__name__)

# The remix page words quota errors differently from the chat panel.
REMIX_RATE_LIMIT_MESSAGE: Final[str] = "Rate limit exceeded. Please try again later."
REMIX_PAYMENT_REQUIRED_MESSAGE: Final[str] = "Payment required. Please add credits to continue."


class RemixRequest(BaseModel):
    """Request body for the remix endpoint (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    example_prompt: str = Field(..., alias="examplePrompt", min_length=1)
    community_context: str = Field(default="", alias="communityContext")
    customization_ideas: str = Field(default="", alias="customizationIdeas")


class RemixResponse(BaseModel):
    """Remixed prompt in plain text."""

    model_config = ConfigDict(populate_by_name=True)

    remixed_prompt: str = Field(..., alias="remixedPrompt")


remix_router = APIRouter(prefix="/v1", tags=["remix"])


@remix_router.options("/remix-prompt", include_in_schema=False)
async def remix_prompt_preflight() -> Response:
    """Answer CORS preflight with no body."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@remix_router.post("/remix-prompt", response_model=RemixResponse)
async def remix_prompt(
    request: RemixRequest,
    completion: CompletionClientProtocol = Depends(get_completion_client),
) -> RemixResponse | JSONResponse:
    """Remix an example prompt for a specific community."""
    messages = build_remix_messages(
        example_prompt=request.example_prompt,
        community_context=request.community_context,
        customization_ideas=request.customization_ideas,
    )
    logger.info("remixing_prompt")
    try:
        remixed = await completion.complete(messages, model=get_settings().remix_model)
    except RateLimitError as e:
        logger.warning("remix_rate_limited", upstream_status=e.upstream_status)
        return error_response(e.status_code, REMIX_RATE_LIMIT_MESSAGE)
    except PaymentRequiredError as e:
        logger.warning("remix_payment_required", upstream_status=e.upstream_status)
        return error_response(e.status_code, REMIX_PAYMENT_REQUIRED_MESSAGE)
    return RemixResponse(remixed_prompt=remixed)
