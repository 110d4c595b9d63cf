from uuid import UUID

from fastapi import APIRouter, Depends

from src.auth import get_caller_id
from src.errors import NotFoundError
from src.weddings.features.get_dashboard.dtos import DashboardResponse
from src.weddings.repository.read_models import WeddingReadModel, get_wedding_read_model

router = APIRouter()

DASHBOARD_URL = "/api/v1/dashboard"


@router.get(DASHBOARD_URL, response_model=DashboardResponse)
async def get_dashboard(
    caller_id: UUID = Depends(get_caller_id),
    read_model: WeddingReadModel = Depends(get_wedding_read_model),
):
    """Everything the engaged couple's home screen shows, in one read."""
    dashboard = await read_model.get_engaged_dashboard_data(caller_id)
    if dashboard is None:
        raise NotFoundError("Couple for user", caller_id)
    return dashboard
