#!/usr/bin/env python3
"""Print the state of the ledger served by the API.

Shows the administrator, quorum threshold, registered attestors and the
status of the most recent periods.
"""

from __future__ import annotations

import argparse
import os
import sys

import httpx
from dotenv import load_dotenv


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--api-url", default=os.environ.get("LEDGER_API_URL", "http://localhost:8000")
    )
    parser.add_argument(
        "--periods", type=int, default=3, help="How many recent periods to show"
    )
    return parser.parse_args()


def main() -> None:
    load_dotenv()
    args = _parse_args()

    try:
        with httpx.Client(base_url=args.api_url, timeout=10.0) as client:
            summary = client.get("/v1/ledger").raise_for_status().json()
            attestors = client.get("/v1/attestors").raise_for_status().json()
            current = summary["current_period_id"]
            first = max(0, current - args.periods + 1)
            periods = [
                client.get(f"/v1/periods/{period_id}").raise_for_status().json()
                for period_id in range(first, current + 1)
            ]
    except httpx.HTTPError as exc:
        print(f"ERROR: ledger API at {args.api_url} is not reachable: {exc}")
        sys.exit(1)

    print(f"Ledger API: {args.api_url}")
    print(f"Administrator: {summary['admin_identity']}")
    print(f"Required attestors: {summary['required_attestor_count']}")
    print(f"Verification rules: {summary['rule_count']}")
    print(f"Attestors ({summary['attestor_count']}):")
    for attestor in attestors:
        print(f"  - {attestor['name']}: {attestor['address']}")
    print(f"Current period: {current}")
    for period in periods:
        line = (
            f"  period {period['period_id']}: {period['status']} "
            f"({period['attestor_count']}/{period['required_count']})"
        )
        if period["result"] is not None:
            verdict = "PASSED" if period["result"]["passed"] else "FAILED"
            line += f" result {verdict}, proof {period['result']['proof_hash'][:16]}"
        print(line)


if __name__ == "__main__":
    main()
