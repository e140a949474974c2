"""
Settings Tests

Tests for environment-driven configuration.
"""

from sidekick.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("SIDEKICK_CHAT_MODEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.service_name == "sidekick-service"
        assert settings.chat_model == "google/gemini-2.5-flash"
        assert settings.max_keywords == 5
        assert settings.retrieval_limit == 10
        assert settings.top_n == 3
        assert 30 <= settings.completion_timeout <= 60

    def test_env_prefix_override(self, monkeypatch) -> None:
        monkeypatch.setenv("SIDEKICK_TOP_N", "5")
        monkeypatch.setenv("SIDEKICK_AI_GATEWAY_API_KEY", "key")

        settings = get_settings()

        assert settings.top_n == 5
        assert settings.ai_gateway_api_key == "key"

    def test_unrelated_env_vars_are_ignored(self, monkeypatch) -> None:
        monkeypatch.setenv("SIDEKICK_UNKNOWN_OPTION", "x")

        assert Settings(_env_file=None).service_name == "sidekick-service"
