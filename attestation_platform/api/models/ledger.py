"""Request/response models for the ledger API.

Byte fields (payloads, proofs, rule data) travel as hex strings, with or
without a ``0x`` prefix, and are always rendered with the prefix.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer

from attestation_platform.domain.models import (
    Attestation,
    Attestor,
    PeriodSnapshot,
    VerificationResult,
    VerificationRule,
)


def _decode_hex(value: Any) -> Any:
    if isinstance(value, str):
        text = value[2:] if value[:2].lower() == "0x" else value
        try:
            return bytes.fromhex(text)
        except ValueError:
            raise ValueError("must be a hex string") from None
    return value


HexBytes = Annotated[
    bytes,
    BeforeValidator(_decode_hex),
    PlainSerializer(lambda v: "0x" + v.hex(), return_type=str),
]

DateTimeWithZ = Annotated[
    datetime,
    PlainSerializer(lambda v: v.isoformat().replace("+00:00", "Z"), return_type=str),
]


class RegisterAttestorRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Attestor identity")
    name: str = Field(..., min_length=1, description="Display and role name")


class SubmitAttestationRequest(BaseModel):
    payload: HexBytes = Field(..., description="Encrypted commitment as hex")


class SubmitOnBehalfRequest(BaseModel):
    address: str = Field(..., min_length=1, description="Attestor identity")
    payload: HexBytes = Field(..., description="Encrypted commitment as hex")


class PublishResultRequest(BaseModel):
    passed: bool
    proof_data: HexBytes = Field(..., description="Proof bytes as hex")


class AddRuleRequest(BaseModel):
    description: str = Field(..., min_length=1)
    rule_data: HexBytes


class AttestorResponse(BaseModel):
    """Registry entry. Unknown identities are reported as not registered."""

    address: str
    name: str | None = None
    registered: bool
    registered_at: DateTimeWithZ | None = None

    @classmethod
    def from_domain(cls, attestor: Attestor) -> AttestorResponse:
        return cls(
            address=attestor.address,
            name=attestor.name,
            registered=True,
            registered_at=attestor.registered_at,
        )


class AttestationResponse(BaseModel):
    period_id: int
    attestor: str
    payload: HexBytes
    payload_hash: str
    submitted_at: DateTimeWithZ
    channel: str

    @classmethod
    def from_domain(cls, attestation: Attestation) -> AttestationResponse:
        return cls(
            period_id=attestation.period_id,
            attestor=attestation.attestor,
            payload=attestation.payload,
            payload_hash=attestation.payload_hash,
            submitted_at=attestation.submitted_at,
            channel=attestation.channel.value,
        )


class VerificationResultResponse(BaseModel):
    period_id: int
    passed: bool
    proof_data: HexBytes
    proof_hash: str
    published_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, result: VerificationResult) -> VerificationResultResponse:
        return cls(
            period_id=result.period_id,
            passed=result.passed,
            proof_data=result.proof_data,
            proof_hash=result.proof_hash,
            published_at=result.published_at,
        )


class PeriodResponse(BaseModel):
    """Derived view of one period."""

    period_id: int
    status: str
    attestor_count: int
    required_count: int
    attestors: list[str]
    result: VerificationResultResponse | None = None

    @classmethod
    def from_domain(cls, snapshot: PeriodSnapshot) -> PeriodResponse:
        return cls(
            period_id=snapshot.period_id,
            status=snapshot.status.value,
            attestor_count=snapshot.attestor_count,
            required_count=snapshot.required_count,
            attestors=list(snapshot.attestors),
            result=(
                VerificationResultResponse.from_domain(snapshot.result)
                if snapshot.result is not None
                else None
            ),
        )


class PeriodAdvancedResponse(BaseModel):
    previous_period_id: int
    current_period_id: int


class RuleResponse(BaseModel):
    index: int
    description: str
    rule_data: HexBytes
    added_at: DateTimeWithZ

    @classmethod
    def from_domain(cls, rule: VerificationRule) -> RuleResponse:
        return cls(
            index=rule.index,
            description=rule.description,
            rule_data=rule.rule_data,
            added_at=rule.added_at,
        )


class LedgerSummaryResponse(BaseModel):
    admin_identity: str
    current_period_id: int
    required_attestor_count: int
    attestor_count: int
    rule_count: int


class ProblemResponse(BaseModel):
    """RFC 7807 problem details."""

    type: str
    title: str
    status: int
    detail: str
    instance: str | None = None
