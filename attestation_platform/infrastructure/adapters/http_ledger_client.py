"""AttestationLedgerProtocol over the ledger HTTP API.

Used by processes that do not host the Period Engine themselves: the
standalone proof worker (backlog re-scan only, there is no event stream
over HTTP) and the attestor flow script.

Rejections come back as RFC 7807 bodies and are re-raised as the matching
domain error, so callers handle remote and in-process ledgers alike.
Transport failures surface as httpx exceptions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import httpx
from structlog import get_logger

from attestation_platform.domain.errors import (
    AlreadyRegisteredError,
    DuplicateSubmissionError,
    InvalidPayloadError,
    LedgerError,
    PeriodNotCompleteError,
    ResultAlreadyPublishedError,
    UnauthorizedError,
)
from attestation_platform.domain.models import (
    Attestation,
    Attestor,
    SubmissionChannel,
    VerificationResult,
    normalize_identity,
)

logger = get_logger(__name__)

CALLER_HEADER = "X-Caller-Identity"
DEFAULT_TIMEOUT_SECONDS = 10.0


def _parse_time(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _parse_hex(value: str) -> bytes:
    return bytes.fromhex(value[2:] if value.startswith("0x") else value)


def _attestor(data: dict[str, Any]) -> Attestor:
    return Attestor(
        address=data["address"],
        name=data["name"],
        registered_at=_parse_time(data["registered_at"]),
    )


def _attestation(data: dict[str, Any]) -> Attestation:
    return Attestation(
        period_id=data["period_id"],
        attestor=data["attestor"],
        payload=_parse_hex(data["payload"]),
        submitted_at=_parse_time(data["submitted_at"]),
        channel=SubmissionChannel(data["channel"]),
    )


def _result(data: dict[str, Any]) -> VerificationResult:
    return VerificationResult(
        period_id=data["period_id"],
        passed=data["passed"],
        proof_data=_parse_hex(data["proof_data"]),
        published_at=_parse_time(data["published_at"]),
    )


def problem_to_error(status_code: int, problem: dict[str, Any]) -> Exception | None:
    """Rebuild the domain error described by an RFC 7807 body, if known."""
    problem_type = problem.get("type", "")
    if problem_type == UnauthorizedError.error_type:
        return UnauthorizedError(problem["caller"], problem["required_role"])
    if problem_type == AlreadyRegisteredError.error_type:
        return AlreadyRegisteredError(problem["address"])
    if problem_type == DuplicateSubmissionError.error_type:
        return DuplicateSubmissionError(problem["period_id"], problem["address"])
    if problem_type == PeriodNotCompleteError.error_type:
        return PeriodNotCompleteError(
            problem["period_id"], problem["attestor_count"], problem["required_count"]
        )
    if problem_type == ResultAlreadyPublishedError.error_type:
        return ResultAlreadyPublishedError(problem["period_id"])
    if status_code == 422 and "field" in problem:
        return InvalidPayloadError(problem["field"], problem.get("detail", "invalid"))
    return None


class HttpLedgerClient:
    """Ledger client speaking the /v1 HTTP API."""

    def __init__(
        self,
        base_url: str,
        operator: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000``.
            operator: Identity used for privileged calls.
            client: Pre-built client (tests pass one with an ASGI transport).
            timeout: Per-request timeout when the client is built here.
        """
        self._operator = normalize_identity(operator, "operator")
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._owns_client = client is None

    @property
    def operator(self) -> str:
        return self._operator

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HttpLedgerClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def current_period_id(self) -> int:
        return (await self._get("/v1/ledger"))["current_period_id"]

    async def required_attestor_count(self) -> int:
        return (await self._get("/v1/ledger"))["required_attestor_count"]

    async def list_attestors(self) -> list[Attestor]:
        return [_attestor(item) for item in await self._get("/v1/attestors")]

    async def period_attestors(self, period_id: int) -> list[str]:
        return list((await self._get(f"/v1/periods/{period_id}"))["attestors"])

    async def period_attestor_count(self, period_id: int) -> int:
        return (await self._get(f"/v1/periods/{period_id}"))["attestor_count"]

    async def get_attestation(self, period_id: int, address: str) -> Attestation | None:
        response = await self._client.get(
            f"/v1/periods/{period_id}/attestations/{address}"
        )
        if response.status_code == 404:
            return None
        return _attestation(self._check(response))

    async def get_verification_result(self, period_id: int) -> VerificationResult | None:
        result = (await self._get(f"/v1/periods/{period_id}"))["result"]
        return _result(result) if result is not None else None

    async def register_attestor(self, address: str, name: str) -> Attestor:
        data = await self._post(
            "/v1/attestors", {"address": address, "name": name}, self._operator
        )
        return _attestor(data)

    async def submit_attestation(self, address: str, payload: bytes) -> Attestation:
        data = await self._post(
            "/v1/attestations", {"payload": "0x" + payload.hex()}, address
        )
        return _attestation(data)

    async def submit_attestation_on_behalf(
        self, address: str, payload: bytes
    ) -> Attestation:
        data = await self._post(
            "/v1/attestations/on-behalf",
            {"address": address, "payload": "0x" + payload.hex()},
            self._operator,
        )
        return _attestation(data)

    async def publish_verification_result(
        self, period_id: int, passed: bool, proof_data: bytes
    ) -> VerificationResult:
        data = await self._post(
            f"/v1/periods/{period_id}/result",
            {"passed": passed, "proof_data": "0x" + proof_data.hex()},
            self._operator,
        )
        return _result(data)

    async def _get(self, path: str) -> Any:
        return self._check(await self._client.get(path))

    async def _post(self, path: str, body: dict[str, Any], caller: str) -> Any:
        response = await self._client.post(path, json=body, headers={CALLER_HEADER: caller})
        return self._check(response)

    def _check(self, response: httpx.Response) -> Any:
        if response.status_code < 300:
            return response.json()
        try:
            detail = response.json().get("detail")
        except ValueError:
            detail = None
        if isinstance(detail, dict):
            error = problem_to_error(response.status_code, detail)
            if error is not None:
                logger.warning(
                    "ledger_call_rejected",
                    path=response.request.url.path,
                    status_code=response.status_code,
                    error_type=type(error).__name__,
                )
                raise error
        response.raise_for_status()
        raise LedgerError(f"unexpected status {response.status_code}")
