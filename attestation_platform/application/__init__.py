"""
Application layer - use cases and orchestration.

This layer contains:
- Ports (abstract interfaces for ledger, events, proving, encryption)
- Services (Period Engine, Proof Orchestrator, attestor-side flow)

Application may import from the domain layer, and from
infrastructure.observability for logging.
"""
