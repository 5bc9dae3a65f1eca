"""Configuration module for the attestation platform.

Available Configurations:
- LedgerConfig: Quorum threshold, administrator, blob size bounds
- OrchestratorConfig: Collaborator binaries, timeouts, roles, re-scan period
"""

from attestation_platform.config.platform_config import (
    DEFAULT_LEDGER_CONFIG,
    SUPPORTED_OPERATIONS,
    TEST_ORCHESTRATOR_CONFIG,
    LedgerConfig,
    OrchestratorConfig,
)

__all__ = [
    "DEFAULT_LEDGER_CONFIG",
    "LedgerConfig",
    "OrchestratorConfig",
    "SUPPORTED_OPERATIONS",
    "TEST_ORCHESTRATOR_CONFIG",
]
