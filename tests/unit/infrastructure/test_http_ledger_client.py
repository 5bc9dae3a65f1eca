"""Unit tests for HttpLedgerClient against the in-process ASGI app."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import httpx
import pytest

from attestation_platform.api.dependencies.ledger import (
    reset_ledger_runtime,
    set_ledger_runtime,
)
from attestation_platform.api.main import create_app
from attestation_platform.bootstrap.ledger import LedgerRuntime, build_ledger_runtime
from attestation_platform.config import LedgerConfig
from attestation_platform.domain.errors import (
    DuplicateSubmissionError,
    InvalidPayloadError,
    PeriodNotCompleteError,
    ResultAlreadyPublishedError,
    UnauthorizedError,
)
from attestation_platform.domain.models import SubmissionChannel
from attestation_platform.infrastructure.adapters import HttpLedgerClient
from attestation_platform.infrastructure.adapters.http_ledger_client import problem_to_error
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.identities import ADMIN, EXCHANGE, OUTSIDER, REGULATOR


@pytest.fixture
def runtime(fake_time_authority: FakeTimeAuthority) -> Iterator[LedgerRuntime]:
    runtime = build_ledger_runtime(
        LedgerConfig(admin_identity=ADMIN), time_authority=fake_time_authority
    )
    set_ledger_runtime(runtime)
    yield runtime
    reset_ledger_runtime()


@pytest.fixture
async def client(runtime: LedgerRuntime) -> AsyncIterator[HttpLedgerClient]:
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://ledger") as http:
        yield HttpLedgerClient("http://ledger", operator=ADMIN, client=http)


@pytest.fixture
async def registered_client(client: HttpLedgerClient) -> HttpLedgerClient:
    await client.register_attestor(EXCHANGE, "Exchange")
    await client.register_attestor(REGULATOR, "Regulator")
    return client


class TestReads:
    async def test_ledger_parameters(self, client: HttpLedgerClient) -> None:
        assert await client.current_period_id() == 0
        assert await client.required_attestor_count() == 2

    async def test_attestors_round_trip_as_domain_objects(
        self, registered_client: HttpLedgerClient, fake_time_authority: FakeTimeAuthority
    ) -> None:
        attestors = await registered_client.list_attestors()

        assert [a.name for a in attestors] == ["Exchange", "Regulator"]
        assert attestors[0].registered_at == fake_time_authority.now()

    async def test_missing_attestation_is_none(self, registered_client: HttpLedgerClient) -> None:
        assert await registered_client.get_attestation(0, EXCHANGE) is None
        assert await registered_client.get_verification_result(0) is None


class TestWrites:
    async def test_submission_and_publication(self, registered_client: HttpLedgerClient) -> None:
        direct = await registered_client.submit_attestation(EXCHANGE, b"\x00\x01")
        on_behalf = await registered_client.submit_attestation_on_behalf(REGULATOR, b"\xff")

        assert direct.channel is SubmissionChannel.DIRECT
        assert on_behalf.channel is SubmissionChannel.ON_BEHALF
        assert await registered_client.period_attestors(0) == [EXCHANGE, REGULATOR]
        assert (await registered_client.get_attestation(0, EXCHANGE)).payload == b"\x00\x01"

        result = await registered_client.publish_verification_result(0, True, b"proof")

        assert result.proof_data == b"proof"
        assert (await registered_client.get_verification_result(0)).passed is True
        assert await registered_client.current_period_id() == 1


class TestErrorMapping:
    async def test_duplicate_submission(self, registered_client: HttpLedgerClient) -> None:
        await registered_client.submit_attestation(EXCHANGE, b"\x01")

        with pytest.raises(DuplicateSubmissionError) as exc_info:
            await registered_client.submit_attestation(EXCHANGE, b"\x02")
        assert exc_info.value.period_id == 0

    async def test_unauthorized(self, registered_client: HttpLedgerClient) -> None:
        with pytest.raises(UnauthorizedError):
            await registered_client.submit_attestation(OUTSIDER, b"\x01")

    async def test_period_not_complete(self, registered_client: HttpLedgerClient) -> None:
        with pytest.raises(PeriodNotCompleteError) as exc_info:
            await registered_client.publish_verification_result(0, True, b"proof")
        assert exc_info.value.required_count == 2

    async def test_result_already_published(self, registered_client: HttpLedgerClient) -> None:
        await registered_client.submit_attestation(EXCHANGE, b"\x01")
        await registered_client.submit_attestation(REGULATOR, b"\x02")
        await registered_client.publish_verification_result(0, True, b"proof")

        with pytest.raises(ResultAlreadyPublishedError):
            await registered_client.publish_verification_result(0, False, b"proof")

    async def test_invalid_payload(self, registered_client: HttpLedgerClient) -> None:
        with pytest.raises(InvalidPayloadError) as exc_info:
            await registered_client.submit_attestation(EXCHANGE, b"")
        assert exc_info.value.field == "payload"

    def test_unknown_problem_type_is_not_mapped(self) -> None:
        assert problem_to_error(500, {"type": "about:blank"}) is None

    async def test_unmapped_status_raises_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, json={"detail": "maintenance"})

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://ledger"
        ) as http:
            client = HttpLedgerClient("http://ledger", operator=ADMIN, client=http)
            with pytest.raises(httpx.HTTPStatusError):
                await client.current_period_id()
