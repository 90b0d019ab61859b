from __future__ import annotations
from pydantic import BaseModel, Field


class VerificationResult(BaseModel):
    """Parsed model reply. Wire keys are camelCase, as requested in the prompt."""

    waste_type: str = Field(alias="wasteType")
    quantity: str
    confidence: float

    model_config = {"populate_by_name": True}
