#!/usr/bin/env python3
"""Run one attestor-side submission round against the ledger API.

Generates the shared keys if needed, encrypts the exchange's reserves and
the regulator's liabilities, registers both parties when the registry is
empty and submits whatever has not been submitted for the current period.
"""

from __future__ import annotations

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv

from attestation_platform.application.services.attestation_flow_service import (
    AttestorAccount,
)
from attestation_platform.bootstrap.logging import configure_structlog
from attestation_platform.bootstrap.orchestrator import build_attestation_flow
from attestation_platform.config import LedgerConfig, OrchestratorConfig
from attestation_platform.domain import AttestationPlatformError
from attestation_platform.infrastructure.adapters.http_ledger_client import (
    HttpLedgerClient,
)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--api-url", default=os.environ.get("LEDGER_API_URL", "http://localhost:8000")
    )
    parser.add_argument(
        "--exchange-address", default=os.environ.get("EXCHANGE_ADDRESS", "exchange")
    )
    parser.add_argument(
        "--regulator-address", default=os.environ.get("REGULATOR_ADDRESS", "regulator")
    )
    parser.add_argument("--exchange-value", type=int, default=None)
    parser.add_argument("--regulator-value", type=int, default=None)
    parser.add_argument(
        "--direct",
        action="store_true",
        help="Submit as each party instead of through the administrator",
    )
    parser.add_argument(
        "--use-stubs",
        action="store_true",
        help="Use the deterministic encryptor stub instead of the binary",
    )
    return parser.parse_args()


def _first_set(*values: int | None) -> int | None:
    for value in values:
        if value is not None:
            return value
    return None


async def _run(args: argparse.Namespace) -> int:
    config = OrchestratorConfig.from_environment()
    exchange_value = _first_set(args.exchange_value, config.exchange_value)
    regulator_value = _first_set(args.regulator_value, config.regulator_value)
    if exchange_value is None or regulator_value is None:
        print(
            "ERROR: exchange and regulator values are required "
            "(--exchange-value/--regulator-value or EXCHANGE_VALUE/REGULATOR_VALUE)"
        )
        return 1
    if len(config.attestor_roles) < 2:
        print("ERROR: ATTESTOR_ROLES must name the exchange and regulator roles")
        return 1

    exchange_role, regulator_role = config.attestor_roles[:2]
    accounts = [
        AttestorAccount(exchange_role, args.exchange_address, exchange_value),
        AttestorAccount(regulator_role, args.regulator_address, regulator_value),
    ]

    operator = LedgerConfig.from_environment().admin_identity
    async with HttpLedgerClient(args.api_url, operator=operator) as ledger:
        flow = build_attestation_flow(
            ledger, config, submit_on_behalf=not args.direct, use_stubs=args.use_stubs
        )
        try:
            report = await flow.run(accounts)
        except AttestationPlatformError as exc:
            print(f"ERROR: {exc}")
            return 1

    print(
        f"Period {report.period_id}: "
        f"{report.attestor_count}/{report.required_count} attestations"
    )
    for address in report.submitted:
        print(f"  submitted: {address}")
    for address in report.skipped:
        print(f"  already submitted: {address}")
    if report.quorum_reached:
        print("Quorum reached; the proof worker will generate and publish the proof.")
    return 0


def main() -> None:
    load_dotenv()
    configure_structlog()
    sys.exit(asyncio.run(_run(_parse_args())))


if __name__ == "__main__":
    main()
