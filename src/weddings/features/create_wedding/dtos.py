from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.weddings.dtos import WeddingMode


class CreateWeddingRequest(BaseModel):
    name: str
    date: date
    venue: str
    city: str
    mode: WeddingMode = WeddingMode.COMBINED
    budget_limit: float | None = Field(default=None, ge=0)
    guest_limit: int | None = Field(default=None, gt=0)


class WeddingCreatedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    events_created: int
    wedding_id: UUID | None = None
    error_message: str | None = None
