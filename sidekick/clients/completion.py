"""
AI Gateway Completion Client

HTTP client for the OpenAI-compatible chat completions endpoint of the AI
gateway.

Patterns Applied:
- Connection pooling (reuse httpx.AsyncClient)
- Custom namespaced exceptions, one per caller-visible failure mode
- Protocol for duck typing to enable FakeCompletionClient

No automatic retries: rate limits and billing limits are reported to the
caller, which decides whether to resubmit.
"""

import asyncio
from collections.abc import Sequence
from typing import Any, Final, Protocol

import httpx

from sidekick.core.exceptions import SidekickError
from sidekick.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT: Final[float] = 60.0
DEFAULT_MODEL: Final[str] = "google/gemini-2.5-flash"

ENDPOINT_CHAT: Final[str] = "/v1/chat/completions"

ChatMessage = dict[str, str]


# =============================================================================
# Custom Exceptions
# =============================================================================


class CompletionClientError(SidekickError):
    """Base exception for completion failures.

    status_code is the HTTP status returned to the caller of the service.
    public_message is safe to show to end users.
    """

    status_code: int = 500
    public_message: str = "AI gateway error"

    def __init__(self, message: str, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class RateLimitError(CompletionClientError):
    """Raised when the gateway answers 429."""

    status_code = 429
    public_message = "Rate limit exceeded. Please try again in a moment."


class PaymentRequiredError(CompletionClientError):
    """Raised when the gateway answers 402."""

    status_code = 402
    public_message = "Payment required. Please add credits to your workspace."


class GatewayError(CompletionClientError):
    """Raised on any other non-2xx status or a malformed gateway response."""

    status_code = 500
    public_message = "AI gateway error"


class CompletionUnavailableError(CompletionClientError):
    """Raised on timeouts and transport failures."""

    status_code = 500
    public_message = "The assistant could not be reached. Please try again."


# =============================================================================
# Protocol for Duck Typing
# =============================================================================


class CompletionClientProtocol(Protocol):
    """Protocol for completion client duck typing."""

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
    ) -> str:
        """Return the assistant reply for the given messages."""
        ...


# =============================================================================
# CompletionClient Implementation
# =============================================================================


class CompletionClient:
    """HTTP client for the AI gateway.

    Attributes:
        base_url: Base URL of the gateway
        timeout: Request timeout in seconds (default: 60)
        model: Default model identifier
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        model: str = DEFAULT_MODEL,
    ) -> None:
        """Initialize the completion client.

        Args:
            base_url: Base URL of the gateway
            api_key: Bearer key for the gateway
            timeout: Request timeout in seconds
            model: Default model identifier
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.model = model

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
    ) -> str:
        """Send messages to the gateway and return the reply verbatim.

        Args:
            messages: Role-tagged messages, system instruction first
            model: Model override (default: self.model)

        Returns:
            Assistant message content

        Raises:
            RateLimitError: Gateway answered 429
            PaymentRequiredError: Gateway answered 402
            GatewayError: Other non-2xx status or malformed body
            CompletionUnavailableError: Timeout or transport failure
        """
        payload = {
            "model": model or self.model,
            "messages": list(messages),
        }

        try:
            response = await self._client.post(ENDPOINT_CHAT, json=payload)
        except httpx.TimeoutException as e:
            logger.error("ai_gateway_timeout", timeout=self.timeout)
            raise CompletionUnavailableError("AI gateway request timed out") from e
        except httpx.HTTPError as e:
            logger.error("ai_gateway_unreachable", error=str(e))
            raise CompletionUnavailableError(f"AI gateway request failed: {e}") from e

        if response.status_code == 429:
            raise RateLimitError("AI gateway rate limit", upstream_status=429)
        if response.status_code == 402:
            raise PaymentRequiredError("AI gateway payment required", upstream_status=402)
        if response.status_code >= 300:
            logger.error(
                "ai_gateway_error",
                status_code=response.status_code,
                body=response.text,
            )
            raise GatewayError(
                f"AI gateway error: {response.status_code}",
                upstream_status=response.status_code,
            )

        return self._parse_content(response.json())

    def _parse_content(self, data: dict[str, Any]) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error("ai_gateway_malformed_response", keys=list(data or {}))
            raise GatewayError("AI gateway returned no completion") from e
        return content if isinstance(content, str) else str(content)

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# FakeCompletionClient for Testing
# =============================================================================


class FakeCompletionClient:
    """Fake client for unit testing without real HTTP.

    Records every call; returns a preset reply or raises a preset error.
    """

    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[list[ChatMessage], str | None]] = []

    async def complete(
        self,
        messages: Sequence[ChatMessage],
        model: str | None = None,
    ) -> str:
        await asyncio.sleep(0)
        self.calls.append((list(messages), model))
        if self.error is not None:
            raise self.error
        return self.reply
