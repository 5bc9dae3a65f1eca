"""Unit tests for the ledger HTTP API.

The TestClient is used without a ``with`` block so the lifespan (and the
proof worker it starts) does not run.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from attestation_platform.api.dependencies.ledger import (
    reset_ledger_runtime,
    set_ledger_runtime,
)
from attestation_platform.api.main import create_app
from attestation_platform.bootstrap.ledger import LedgerRuntime, build_ledger_runtime
from attestation_platform.config import LedgerConfig
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.identities import ADMIN, EXCHANGE, OUTSIDER, REGULATOR


def _as(identity: str) -> dict[str, str]:
    return {"X-Caller-Identity": identity}


@pytest.fixture
def runtime(fake_time_authority: FakeTimeAuthority) -> Iterator[LedgerRuntime]:
    runtime = build_ledger_runtime(
        LedgerConfig(admin_identity=ADMIN, max_payload_bytes=16),
        time_authority=fake_time_authority,
    )
    set_ledger_runtime(runtime)
    yield runtime
    reset_ledger_runtime()


@pytest.fixture
def client(runtime: LedgerRuntime) -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def registered_client(client: TestClient) -> TestClient:
    for address, name in ((EXCHANGE, "Exchange"), (REGULATOR, "Regulator")):
        response = client.post(
            "/v1/attestors", json={"address": address, "name": name}, headers=_as(ADMIN)
        )
        assert response.status_code == 201
    return client


def _complete_period(client: TestClient) -> None:
    for identity, payload in ((EXCHANGE, "0x0a0b"), (REGULATOR, "0c0d")):
        response = client.post(
            "/v1/attestations", json={"payload": payload}, headers=_as(identity)
        )
        assert response.status_code == 201


class TestHealthAndSummary:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "current_period_id": 0}

    def test_ledger_summary(self, registered_client: TestClient) -> None:
        data = registered_client.get("/v1/ledger").json()

        assert data == {
            "admin_identity": ADMIN,
            "current_period_id": 0,
            "required_attestor_count": 2,
            "attestor_count": 2,
            "rule_count": 0,
        }

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get("/v1/health", headers={"X-Correlation-ID": "trace-1"})

        assert response.headers["X-Correlation-ID"] == "trace-1"


class TestAttestorRoutes:
    def test_register_and_lookup(self, registered_client: TestClient) -> None:
        data = registered_client.get(f"/v1/attestors/{EXCHANGE.upper()}").json()

        assert data["address"] == EXCHANGE
        assert data["name"] == "Exchange"
        assert data["registered"] is True
        assert data["registered_at"] == "2026-01-15T10:00:00Z"

    def test_unknown_attestor_reads_as_unregistered(self, client: TestClient) -> None:
        response = client.get(f"/v1/attestors/{OUTSIDER}")

        assert response.status_code == 200
        assert response.json()["registered"] is False

    def test_list_in_registration_order(self, registered_client: TestClient) -> None:
        data = registered_client.get("/v1/attestors").json()

        assert [a["address"] for a in data] == [EXCHANGE, REGULATOR]

    def test_non_admin_registration_is_forbidden(self, client: TestClient) -> None:
        response = client.post(
            "/v1/attestors", json={"address": EXCHANGE, "name": "Exchange"}, headers=_as(OUTSIDER)
        )

        assert response.status_code == 403
        problem = response.json()["detail"]
        assert problem["type"] == "urn:attestation:ledger:unauthorized"
        assert problem["required_role"] == "administrator"
        assert problem["instance"].endswith("/v1/attestors")

    def test_duplicate_registration_conflicts(self, registered_client: TestClient) -> None:
        response = registered_client.post(
            "/v1/attestors", json={"address": EXCHANGE, "name": "Again"}, headers=_as(ADMIN)
        )

        assert response.status_code == 409
        assert response.json()["detail"]["address"] == EXCHANGE

    def test_missing_caller_header(self, client: TestClient) -> None:
        response = client.post("/v1/attestors", json={"address": EXCHANGE, "name": "Exchange"})

        assert response.status_code == 401


class TestAttestationRoutes:
    def test_submit_direct(self, registered_client: TestClient) -> None:
        response = registered_client.post(
            "/v1/attestations", json={"payload": "0xdeadbeef"}, headers=_as(EXCHANGE)
        )

        assert response.status_code == 201
        data = response.json()
        assert data["period_id"] == 0
        assert data["payload"] == "0xdeadbeef"
        assert data["channel"] == "direct"

    def test_submit_on_behalf(self, registered_client: TestClient) -> None:
        response = registered_client.post(
            "/v1/attestations/on-behalf",
            json={"address": REGULATOR, "payload": "ff"},
            headers=_as(ADMIN),
        )

        assert response.status_code == 201
        assert response.json()["channel"] == "on_behalf"

    def test_duplicate_submission_conflicts(self, registered_client: TestClient) -> None:
        registered_client.post("/v1/attestations", json={"payload": "01"}, headers=_as(EXCHANGE))

        response = registered_client.post(
            "/v1/attestations", json={"payload": "02"}, headers=_as(EXCHANGE)
        )

        assert response.status_code == 409
        assert response.json()["detail"]["type"] == "urn:attestation:ledger:duplicate-submission"

    def test_unregistered_submitter_forbidden(self, registered_client: TestClient) -> None:
        response = registered_client.post(
            "/v1/attestations", json={"payload": "01"}, headers=_as(OUTSIDER)
        )

        assert response.status_code == 403

    @pytest.mark.parametrize("payload", ["", "0x" + "00" * 17])
    def test_empty_or_oversized_payload(self, registered_client: TestClient, payload: str) -> None:
        response = registered_client.post(
            "/v1/attestations", json={"payload": payload}, headers=_as(EXCHANGE)
        )

        assert response.status_code == 422
        assert response.json()["detail"]["field"] == "payload"

    def test_non_hex_payload_rejected(self, registered_client: TestClient) -> None:
        response = registered_client.post(
            "/v1/attestations", json={"payload": "not-hex"}, headers=_as(EXCHANGE)
        )

        assert response.status_code == 422


class TestPeriodRoutes:
    def test_current_period_snapshot(self, registered_client: TestClient) -> None:
        registered_client.post("/v1/attestations", json={"payload": "01"}, headers=_as(EXCHANGE))

        data = registered_client.get("/v1/periods/current").json()

        assert data["period_id"] == 0
        assert data["status"] == "open"
        assert data["attestors"] == [EXCHANGE]
        assert data["result"] is None

    def test_publish_result_advances_period(self, registered_client: TestClient) -> None:
        _complete_period(registered_client)

        response = registered_client.post(
            "/v1/periods/0/result",
            json={"passed": True, "proof_data": "0xabcd"},
            headers=_as(ADMIN),
        )

        assert response.status_code == 201
        assert response.json()["proof_data"] == "0xabcd"
        period = registered_client.get("/v1/periods/0").json()
        assert period["status"] == "verified"
        assert period["result"]["passed"] is True
        assert registered_client.get("/v1/health").json()["current_period_id"] == 1

    def test_publish_before_quorum_conflicts(self, registered_client: TestClient) -> None:
        registered_client.post("/v1/attestations", json={"payload": "01"}, headers=_as(EXCHANGE))

        response = registered_client.post(
            "/v1/periods/0/result", json={"passed": True, "proof_data": "01"}, headers=_as(ADMIN)
        )

        assert response.status_code == 409
        problem = response.json()["detail"]
        assert problem["type"] == "urn:attestation:ledger:period-not-complete"
        assert problem["attestor_count"] == 1

    def test_second_publish_conflicts(self, registered_client: TestClient) -> None:
        _complete_period(registered_client)
        body = {"passed": False, "proof_data": "01"}
        registered_client.post("/v1/periods/0/result", json=body, headers=_as(ADMIN))

        response = registered_client.post("/v1/periods/0/result", json=body, headers=_as(ADMIN))

        assert response.status_code == 409
        assert response.json()["detail"]["type"] == (
            "urn:attestation:ledger:result-already-published"
        )

    def test_force_advance(self, registered_client: TestClient) -> None:
        response = registered_client.post("/v1/periods/advance", headers=_as(ADMIN))

        assert response.json() == {"previous_period_id": 0, "current_period_id": 1}
        assert registered_client.get("/v1/periods/0").json()["status"] == "abandoned"

    def test_force_advance_forbidden_for_attestor(self, registered_client: TestClient) -> None:
        response = registered_client.post("/v1/periods/advance", headers=_as(EXCHANGE))

        assert response.status_code == 403

    def test_attestation_lookup(self, registered_client: TestClient) -> None:
        registered_client.post("/v1/attestations", json={"payload": "0a"}, headers=_as(EXCHANGE))

        found = registered_client.get(f"/v1/periods/0/attestations/{EXCHANGE}")
        missing = registered_client.get(f"/v1/periods/0/attestations/{REGULATOR}")

        assert found.status_code == 200
        assert found.json()["payload"] == "0x0a"
        assert missing.status_code == 404

    def test_future_period_reads_empty(self, client: TestClient) -> None:
        data = client.get("/v1/periods/42").json()

        assert data["attestor_count"] == 0
        assert data["status"] == "open"

    def test_negative_period_is_not_found(self, client: TestClient) -> None:
        assert client.get("/v1/periods/-1").status_code == 404


class TestRuleRoutes:
    def test_add_and_read_rules(self, client: TestClient) -> None:
        response = client.post(
            "/v1/rules",
            json={"description": "Reserves > Liabilities", "rule_data": "0x01"},
            headers=_as(ADMIN),
        )

        assert response.status_code == 201
        assert response.json()["index"] == 0
        assert client.get("/v1/rules/0").json()["description"] == "Reserves > Liabilities"
        assert len(client.get("/v1/rules").json()) == 1
        assert client.get("/v1/rules/1").status_code == 404

    def test_rules_are_admin_only(self, client: TestClient) -> None:
        response = client.post(
            "/v1/rules", json={"description": "x", "rule_data": "01"}, headers=_as(EXCHANGE)
        )

        assert response.status_code == 403
