"""
Sidekick Service - Structured Logging

Every entry carries the service identity taken from Settings (service name,
version, environment) so log lines from several deployments can be told apart.

Patterns Applied:
- One-time configure_logging() at startup, driven by Settings
- structlog processor object bound to the configured service identity
- JSON output in production, console output for local runs
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

# Libraries that log every outbound request at INFO.
QUIET_LOGGERS = ("httpx", "httpcore")

_configured: bool = False


@dataclass(frozen=True)
class ServiceInfo:
    """structlog processor stamping the service identity onto each entry."""

    service: str
    version: str | None = None
    environment: str | None = None

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", self.service)
        if self.version:
            event_dict.setdefault("version", self.version)
        if self.environment:
            event_dict.setdefault("environment", self.environment)
        return event_dict


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    json_output: bool = True,
    version: str | None = None,
    environment: str | None = None,
) -> None:
    """Configure structlog once for the process.

    Later calls are ignored until reset_logging().

    Args:
        service_name: Value of the `service` field on every entry
        log_level: Logging level name (DEBUG, INFO, WARNING, ...)
        json_output: JSON renderer when True, console renderer otherwise
        version: Service version added to every entry, if given
        environment: Deployment environment added to every entry, if given
    """
    global _configured

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    renderer: Any = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            ServiceInfo(service=service_name, version=version, environment=environment),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configured = True


def get_logger(name: str) -> Any:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)


def reset_logging() -> None:
    """Reset logging configuration for testing."""
    global _configured
    _configured = False
    structlog.reset_defaults()
