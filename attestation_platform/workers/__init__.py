"""Long-lived background workers."""

from attestation_platform.workers.proof_worker import ProofWorker, ProofWorkerMetrics

__all__: list[str] = ["ProofWorker", "ProofWorkerMetrics"]
