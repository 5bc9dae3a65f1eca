"""Domain events signalled by the Period Engine."""

from attestation_platform.domain.events.ledger import (
    ATTESTATION_RECORDED_EVENT_TYPE,
    ATTESTOR_REGISTERED_EVENT_TYPE,
    PERIOD_ADVANCED_EVENT_TYPE,
    PERIOD_QUORUM_REACHED_EVENT_TYPE,
    VERIFICATION_PUBLISHED_EVENT_TYPE,
    VERIFICATION_RULE_ADDED_EVENT_TYPE,
    AttestationRecordedEvent,
    AttestorRegisteredEvent,
    LedgerEvent,
    PeriodAdvancedEvent,
    PeriodQuorumReachedEvent,
    VerificationPublishedEvent,
    VerificationRuleAddedEvent,
)

__all__: list[str] = [
    "ATTESTATION_RECORDED_EVENT_TYPE",
    "ATTESTOR_REGISTERED_EVENT_TYPE",
    "PERIOD_ADVANCED_EVENT_TYPE",
    "PERIOD_QUORUM_REACHED_EVENT_TYPE",
    "VERIFICATION_PUBLISHED_EVENT_TYPE",
    "VERIFICATION_RULE_ADDED_EVENT_TYPE",
    "AttestationRecordedEvent",
    "AttestorRegisteredEvent",
    "LedgerEvent",
    "PeriodAdvancedEvent",
    "PeriodQuorumReachedEvent",
    "VerificationPublishedEvent",
    "VerificationRuleAddedEvent",
]
