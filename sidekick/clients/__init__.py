"""HTTP clients for the external collaborators.

- content_store: Supabase PostgREST library tables (read-only)
- completion: AI gateway chat completions
"""

from sidekick.clients.completion import (
    CompletionClient,
    CompletionClientError,
    CompletionClientProtocol,
    CompletionUnavailableError,
    FakeCompletionClient,
    GatewayError,
    PaymentRequiredError,
    RateLimitError,
)
from sidekick.clients.content_store import (
    ContentStoreError,
    ContentStoreProtocol,
    FakeContentStore,
    SupabaseContentStore,
)

__all__ = [
    "CompletionClient",
    "CompletionClientError",
    "CompletionClientProtocol",
    "CompletionUnavailableError",
    "ContentStoreError",
    "ContentStoreProtocol",
    "FakeCompletionClient",
    "FakeContentStore",
    "GatewayError",
    "PaymentRequiredError",
    "RateLimitError",
    "SupabaseContentStore",
]
