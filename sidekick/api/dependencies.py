"""
API Dependencies

FastAPI dependency providers for the external clients and the context
pipeline. Clients are created lazily, once per process, and closed by the
application lifespan. The providers are coroutines so they run on the event
loop rather than in the threadpool, which keeps the lazy creation race-free. Missing credentials raise ConfigurationError on the
request that needs them.

Tests replace these providers through app.dependency_overrides.
"""

from fastapi import Depends

from sidekick.clients.completion import CompletionClient, CompletionClientProtocol
from sidekick.clients.content_store import ContentStoreProtocol, SupabaseContentStore
from sidekick.core.config import get_settings
from sidekick.core.exceptions import ConfigurationError
from sidekick.retrieval.pipeline import ContextPipeline

_content_store: SupabaseContentStore | None = None
_completion_client: CompletionClient | None = None


async def get_content_store() -> ContentStoreProtocol:
    """Return the process-wide content store client."""
    global _content_store

    if _content_store is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_key:
            raise ConfigurationError("SIDEKICK_SUPABASE_URL and SIDEKICK_SUPABASE_KEY must be set")
        _content_store = SupabaseContentStore(
            base_url=settings.supabase_url,
            api_key=settings.supabase_key,
        )
    return _content_store


async def get_completion_client() -> CompletionClientProtocol:
    """Return the process-wide AI gateway client."""
    global _completion_client

    if _completion_client is None:
        settings = get_settings()
        if not settings.ai_gateway_api_key:
            raise ConfigurationError("SIDEKICK_AI_GATEWAY_API_KEY is not configured")
        _completion_client = CompletionClient(
            base_url=settings.ai_gateway_url,
            api_key=settings.ai_gateway_api_key,
            timeout=settings.completion_timeout,
            model=settings.chat_model,
        )
    return _completion_client


async def get_context_pipeline(
    store: ContentStoreProtocol = Depends(get_content_store),
) -> ContextPipeline:
    """Build a per-request pipeline over the shared content store."""
    settings = get_settings()
    return ContextPipeline(
        store,
        max_keywords=settings.max_keywords,
        retrieval_limit=settings.retrieval_limit,
        top_n=settings.top_n,
    )


async def close_clients() -> None:
    """Close the shared HTTP connection pools (lifespan shutdown)."""
    global _content_store, _completion_client

    if _content_store is not None:
        await _content_store.close()
        _content_store = None
    if _completion_client is not None:
        await _completion_client.close()
        _completion_client = None
