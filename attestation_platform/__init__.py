"""
Attestation Platform - Multi-party confidential financial attestation.

Designated parties (an exchange and a regulator) submit encrypted
commitments for a period. Once a quorum of commitments is collected an
independent verifier proves a pass/fail relation over the ciphertexts
and publishes the result alongside the proof material.

Operating principles:
- At most one attestation per attestor per period
- Exactly one verification result per period, never overwritten
- Proof generation is serialized and idempotent
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
