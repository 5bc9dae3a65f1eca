"""FastAPI application entry point for the attestation ledger."""

from fastapi import FastAPI

from attestation_platform import __version__
from attestation_platform.api.middleware.logging_middleware import LoggingMiddleware
from attestation_platform.api.routes.attestations import router as attestations_router
from attestation_platform.api.routes.attestors import router as attestors_router
from attestation_platform.api.routes.health import router as health_router
from attestation_platform.api.routes.ledger import router as ledger_router
from attestation_platform.api.routes.periods import router as periods_router
from attestation_platform.api.routes.rules import router as rules_router
from attestation_platform.api.startup import lifespan


def create_app() -> FastAPI:
    app = FastAPI(
        title="Attestation Platform API",
        description="Multi-party confidential financial attestation ledger",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(LoggingMiddleware)
    app.include_router(health_router)
    app.include_router(ledger_router)
    app.include_router(attestors_router)
    app.include_router(attestations_router)
    app.include_router(periods_router)
    app.include_router(rules_router)
    return app


app = create_app()
