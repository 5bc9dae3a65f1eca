#!/usr/bin/env python3
"""Serve the ledger API, with the proof worker attached to its event bus."""

from __future__ import annotations

import argparse

import uvicorn
from dotenv import load_dotenv


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--log-level",
        default="info",
        help="uvicorn log level (application logs follow LOG_LEVEL)",
    )
    return parser.parse_args()


def main() -> None:
    load_dotenv()
    args = _parse_args()
    uvicorn.run(
        "attestation_platform.api.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
