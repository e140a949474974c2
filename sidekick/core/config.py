"""
Sidekick Service - Application Configuration

Patterns Applied:
- Pydantic Settings with SettingsConfigDict
- Environment variable prefix SIDEKICK_ for Sidekick Service

Credentials are optional at load time. Missing values are reported per
request by the API dependencies, so the service can still answer /health.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables with SIDEKICK_ prefix.
    Example: SIDEKICK_SUPABASE_URL=https://xyz.supabase.co
    """

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 8080

    # Application metadata
    service_name: str = "sidekick-service"
    version: str = "0.1.0"
    environment: str = "development"

    # Logging configuration
    log_level: str = "INFO"
    log_json: bool = True

    # Tracing configuration
    tracing_enabled: bool = True
    tracing_console_export: bool = False

    # CORS - the browser client calls the service directly
    cors_allow_origins: list[str] = ["*"]

    # Content store (Supabase PostgREST)
    supabase_url: str | None = None
    supabase_key: str | None = None

    # AI gateway (OpenAI-compatible chat completions)
    ai_gateway_url: str = "https://ai.gateway.lovable.dev"
    ai_gateway_api_key: str | None = None
    chat_model: str = "google/gemini-2.5-flash"
    remix_model: str = "google/gemini-3-pro-preview"
    completion_timeout: float = 60.0

    # Retrieval tuning
    max_keywords: int = 5
    retrieval_limit: int = 10
    top_n: int = 3

    model_config = SettingsConfigDict(
        env_prefix="SIDEKICK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


def get_settings() -> Settings:
    """Get application settings instance.

    Returns:
        Settings instance with values from environment
    """
    return Settings()
