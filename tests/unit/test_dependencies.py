"""
API Dependency Tests

Tests for the process-wide client providers:
- Providers run on the event loop (coroutines, not threadpool functions)
- Concurrent first requests share one client
- Missing credentials raise ConfigurationError
"""

import asyncio
import inspect

import pytest

from sidekick.api import dependencies
from sidekick.api.dependencies import (
    close_clients,
    get_completion_client,
    get_content_store,
    get_context_pipeline,
)
from sidekick.core.exceptions import ConfigurationError


@pytest.fixture
def configured_env(monkeypatch):
    monkeypatch.setenv("SIDEKICK_SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setenv("SIDEKICK_SUPABASE_KEY", "anon-key")
    monkeypatch.setenv("SIDEKICK_AI_GATEWAY_API_KEY", "gateway-key")
    monkeypatch.setattr(dependencies, "_content_store", None)
    monkeypatch.setattr(dependencies, "_completion_client", None)


class TestClientProviders:
    """Tests for get_content_store() and get_completion_client()."""

    def test_providers_are_coroutines(self) -> None:
        assert inspect.iscoroutinefunction(get_content_store)
        assert inspect.iscoroutinefunction(get_completion_client)
        assert inspect.iscoroutinefunction(get_context_pipeline)

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_content_store(self, configured_env) -> None:
        first, second = await asyncio.gather(get_content_store(), get_content_store())

        assert first is second
        await close_clients()

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_completion_client(self, configured_env) -> None:
        first, second = await asyncio.gather(get_completion_client(), get_completion_client())

        assert first is second
        await close_clients()

    @pytest.mark.asyncio
    async def test_close_clients_resets_providers(self, configured_env) -> None:
        store = await get_content_store()
        await close_clients()

        assert dependencies._content_store is None
        assert await get_content_store() is not store
        await close_clients()

    @pytest.mark.asyncio
    async def test_missing_store_credentials_raise(self, configured_env, monkeypatch) -> None:
        monkeypatch.delenv("SIDEKICK_SUPABASE_KEY")

        with pytest.raises(ConfigurationError):
            await get_content_store()

    @pytest.mark.asyncio
    async def test_missing_gateway_key_raises(self, configured_env, monkeypatch) -> None:
        monkeypatch.delenv("SIDEKICK_AI_GATEWAY_API_KEY")

        with pytest.raises(ConfigurationError):
            await get_completion_client()
