"""
Infrastructure layer - adapters and stubs behind the application ports.

This layer contains:
- Adapters (in-process ledger, artifact files, collaborator subprocesses)
- Stubs (in-memory ledger state, event bus, deterministic collaborators)
- Observability (structlog configuration, correlation ids)
"""
