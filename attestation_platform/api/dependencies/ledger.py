"""Ledger API dependencies.

The API serves a single process-wide Period Engine built from
LedgerConfig.from_environment() on first use. Tests swap it with
set_ledger_runtime() and restore it with reset_ledger_runtime().
"""

from typing import Annotated

import structlog
from fastapi import Header, HTTPException, status

from attestation_platform.application.services.period_engine import PeriodEngine
from attestation_platform.bootstrap.ledger import LedgerRuntime, build_ledger_runtime
from attestation_platform.config import LedgerConfig

logger = structlog.get_logger(__name__)

CALLER_HEADER = "X-Caller-Identity"

_ledger_runtime: LedgerRuntime | None = None


def get_ledger_runtime() -> LedgerRuntime:
    """Get the ledger runtime singleton, building it on first use."""
    global _ledger_runtime
    if _ledger_runtime is None:
        config = LedgerConfig.from_environment()
        _ledger_runtime = build_ledger_runtime(config)
        logger.info(
            "ledger_runtime_built",
            required_attestor_count=config.required_attestor_count,
            admin_identity=config.admin_identity,
        )
    return _ledger_runtime


def set_ledger_runtime(runtime: LedgerRuntime) -> None:
    global _ledger_runtime
    _ledger_runtime = runtime


def reset_ledger_runtime() -> None:
    """Drop the singleton (for test cleanup)."""
    global _ledger_runtime
    _ledger_runtime = None


def get_period_engine() -> PeriodEngine:
    return get_ledger_runtime().engine


def get_caller_identity(
    x_caller_identity: Annotated[
        str | None,
        Header(description="Identity issuing the call (attestor or administrator)."),
    ] = None,
) -> str:
    """Extract the caller identity from the X-Caller-Identity header.

    Raises:
        HTTPException 401: If the header is missing or blank.
    """
    if not x_caller_identity or not x_caller_identity.strip():
        logger.warning("caller_identity_missing")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{CALLER_HEADER} header is required",
        )
    return x_caller_identity.strip()
