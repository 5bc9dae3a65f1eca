"""Health check response models."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Health status string (e.g., "healthy").
        current_period_id: Current period of the served ledger.
    """

    status: str
    current_period_id: int
