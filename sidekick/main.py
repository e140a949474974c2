"""
Sidekick Service - Main Application Entry Point

Patterns Applied:
- Lifespan context manager (startup/shutdown)
- One-time configure_logging() at module load

Run with: uvicorn sidekick.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sidekick.api.chat import chat_router
from sidekick.api.cors import EmptyPreflightCORSMiddleware
from sidekick.api.dependencies import close_clients
from sidekick.api.errors import register_error_handlers
from sidekick.api.health import router as health_router
from sidekick.api.remix import remix_router
from sidekick.core.config import get_settings
from sidekick.core.logging import configure_logging, get_logger
from sidekick.core.tracing import configure_tracing

settings = get_settings()

configure_logging(
    service_name=settings.service_name,
    log_level=settings.log_level,
    json_output=settings.log_json,
    version=settings.version,
    environment=settings.environment,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager for startup/shutdown events."""
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    app.state.initialized = True
    app.state.environment = settings.environment

    yield

    logger.info("shutdown", service=settings.service_name)

    # HTTP connection pools are shared across requests
    await close_clients()
    app.state.initialized = False


app = FastAPI(
    title="Sidekick-Service",
    description="Library-aware chat assistant for the Relational Technology Project",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(chat_router)
app.include_router(remix_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint pointing at the docs."""
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
