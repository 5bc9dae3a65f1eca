"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from attestation_platform.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)

ENVIRONMENT_ENV = "ENVIRONMENT"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog, defaulting to the ENVIRONMENT variable."""
    _configure_structlog(
        environment=environment or os.environ.get(ENVIRONMENT_ENV, "development")
    )


__all__ = ["configure_structlog"]
