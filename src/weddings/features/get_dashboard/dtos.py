import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.weddings.dtos import CoupleStatus, WeddingMode, WeddingStatus


class _FromDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CoupleBody(_FromDTO):
    id: UUID
    user1_id: UUID
    user2_id: UUID
    status: CoupleStatus
    engaged_date: dt.date


class PersonBody(_FromDTO):
    id: UUID
    full_name: str
    email: str


class WeddingBody(_FromDTO):
    id: UUID
    couple_id: UUID
    name: str
    date: dt.date
    venue: str
    city: str
    mode: WeddingMode
    guest_limit: int
    status: WeddingStatus
    budget_limit: float | None = None


class WeddingStatsBody(_FromDTO):
    total_events: int
    total_guests: int
    confirmed_vendors: int
    total_vendors: int


class DashboardResponse(_FromDTO):
    couple: CoupleBody
    user: PersonBody
    partner: PersonBody
    wedding: WeddingBody | None = None
    days_until: int | None = None
    wedding_stats: WeddingStatsBody
