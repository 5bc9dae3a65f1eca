"""Attestation platform configuration.

This module defines configuration for the ledger (Period Engine) and the
proof orchestrator, with environment variable overrides for deployment.

Environment Variables (Ledger):
- REQUIRED_ATTESTOR_COUNT: Quorum threshold, fixed for the ledger's life (default: 2)
- ADMIN_IDENTITY: The single designated administrator identity (default: "admin")
- MAX_PAYLOAD_BYTES: Upper bound for attestation payloads (default: 65536)
- MAX_PROOF_BYTES: Upper bound for proof blobs (default: 1048576)

Environment Variables (Orchestrator):
- PROVER_BINARY: Path of the proving collaborator executable
- ENCRYPTOR_BINARY: Path of the encryption collaborator executable
- ATTESTATION_WORK_DIR: Working directory for artifacts (default: ./attestation_temp)
- PROVING_OPERATION: Relation to prove (default: GreaterThan)
- PROVING_TIMEOUT_SECONDS: Bound on a proving run (default: 600)
- RESCAN_INTERVAL_SECONDS: Backlog re-scan period (default: 60)
- ATTESTOR_ROLES: Comma separated role names in artifact order (default: Exchange,Regulator)
- AUTO_GENERATE_PROOF: Dispatch proofs on quorum events (default: true)
- EXCHANGE_VALUE / REGULATOR_VALUE: Optional plaintext values (attestor flow, verdict fallback)
- KEY_SIZE_BITS: Key size for shared key generation (default: 1024)
- PAYLOAD_CACHE_SIZE: Periods kept in the payload artifact cache (default: 16)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from attestation_platform.domain.models.constraints import (
    DEFAULT_MAX_PAYLOAD_BYTES,
    DEFAULT_MAX_PROOF_BYTES,
)
from attestation_platform.domain.models.relation import SUPPORTED_OPERATIONS


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_optional_int_env(key: str) -> int | None:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() not in {"false", "0", "no", "off"}


def _get_list_env(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
    value = os.environ.get(key)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or default


@dataclass(frozen=True)
class LedgerConfig:
    """Configuration for the Period Engine.

    Attributes:
        required_attestor_count: Distinct attestors needed for quorum.
            Fixed at initialization and never changed afterwards.
        admin_identity: The single designated administrator.
        max_payload_bytes: Size bound for attestation payloads.
        max_proof_bytes: Size bound for proof data.
    """

    required_attestor_count: int = 2
    admin_identity: str = "admin"
    max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES
    max_proof_bytes: int = DEFAULT_MAX_PROOF_BYTES

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.required_attestor_count < 1:
            raise ValueError(
                "required_attestor_count must be positive, "
                f"got {self.required_attestor_count}"
            )
        if not self.admin_identity or not self.admin_identity.strip():
            raise ValueError("admin_identity must be a non-empty string")
        if self.max_payload_bytes < 1:
            raise ValueError(
                f"max_payload_bytes must be positive, got {self.max_payload_bytes}"
            )
        if self.max_proof_bytes < 1:
            raise ValueError(
                f"max_proof_bytes must be positive, got {self.max_proof_bytes}"
            )

    @classmethod
    def from_environment(cls) -> LedgerConfig:
        """Create config from environment variables with defaults."""
        return cls(
            required_attestor_count=_get_int_env("REQUIRED_ATTESTOR_COUNT", 2),
            admin_identity=os.environ.get("ADMIN_IDENTITY", "admin"),
            max_payload_bytes=_get_int_env("MAX_PAYLOAD_BYTES", DEFAULT_MAX_PAYLOAD_BYTES),
            max_proof_bytes=_get_int_env("MAX_PROOF_BYTES", DEFAULT_MAX_PROOF_BYTES),
        )


@dataclass(frozen=True)
class OrchestratorConfig:
    """Configuration for the proof orchestrator and proof worker.

    Attributes:
        prover_binary: Proving collaborator executable.
        encryptor_binary: Encryption collaborator executable.
        work_dir: Root for keys/, attestations/ and proof.bin.
        operation: Relation proved over the commitments.
        proving_timeout_seconds: Bound on a single proving run.
        rescan_interval_seconds: Period of the backlog re-scan.
        attestor_roles: Role names resolved against attestor names; their
            order is the artifact order handed to the prover.
        auto_generate_proof: When False the worker only logs events.
        exchange_value: Plaintext reserves, used by the attestor flow and
            as verdict fallback.
        regulator_value: Plaintext liabilities, same uses.
        key_size_bits: Key size for shared key generation.
        payload_cache_size: Periods kept in the artifact cache.
    """

    prover_binary: str = "epic_attestation"
    encryptor_binary: str = "epic-node"
    work_dir: Path = field(default_factory=lambda: Path("attestation_temp"))
    operation: str = "GreaterThan"
    proving_timeout_seconds: float = 600.0
    rescan_interval_seconds: float = 60.0
    attestor_roles: tuple[str, ...] = ("Exchange", "Regulator")
    auto_generate_proof: bool = True
    exchange_value: int | None = None
    regulator_value: int | None = None
    key_size_bits: int = 1024
    payload_cache_size: int = 16

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.operation not in SUPPORTED_OPERATIONS:
            raise ValueError(
                f"operation must be one of {SUPPORTED_OPERATIONS}, got {self.operation!r}"
            )
        if self.proving_timeout_seconds <= 0:
            raise ValueError(
                "proving_timeout_seconds must be positive, "
                f"got {self.proving_timeout_seconds}"
            )
        if self.rescan_interval_seconds <= 0:
            raise ValueError(
                "rescan_interval_seconds must be positive, "
                f"got {self.rescan_interval_seconds}"
            )
        if not self.attestor_roles:
            raise ValueError("attestor_roles must name at least one role")
        if self.payload_cache_size < 1:
            raise ValueError(
                f"payload_cache_size must be positive, got {self.payload_cache_size}"
            )

    @property
    def plaintext_values(self) -> tuple[int, int] | None:
        """(exchange_value, regulator_value) when both are configured."""
        if self.exchange_value is None or self.regulator_value is None:
            return None
        return (self.exchange_value, self.regulator_value)

    @classmethod
    def from_environment(cls) -> OrchestratorConfig:
        """Create config from environment variables with defaults."""
        return cls(
            prover_binary=os.environ.get("PROVER_BINARY", "epic_attestation"),
            encryptor_binary=os.environ.get("ENCRYPTOR_BINARY", "epic-node"),
            work_dir=Path(os.environ.get("ATTESTATION_WORK_DIR", "attestation_temp")),
            operation=os.environ.get("PROVING_OPERATION", "GreaterThan"),
            proving_timeout_seconds=_get_float_env("PROVING_TIMEOUT_SECONDS", 600.0),
            rescan_interval_seconds=_get_float_env("RESCAN_INTERVAL_SECONDS", 60.0),
            attestor_roles=_get_list_env("ATTESTOR_ROLES", ("Exchange", "Regulator")),
            auto_generate_proof=_get_bool_env("AUTO_GENERATE_PROOF", True),
            exchange_value=_get_optional_int_env("EXCHANGE_VALUE"),
            regulator_value=_get_optional_int_env("REGULATOR_VALUE"),
            key_size_bits=_get_int_env("KEY_SIZE_BITS", 1024),
            payload_cache_size=_get_int_env("PAYLOAD_CACHE_SIZE", 16),
        )


# Pre-defined configurations for common use cases

DEFAULT_LEDGER_CONFIG = LedgerConfig()

# Testing config with short time bounds for unit tests
TEST_ORCHESTRATOR_CONFIG = OrchestratorConfig(
    proving_timeout_seconds=5.0,
    rescan_interval_seconds=0.05,
    payload_cache_size=4,
)
