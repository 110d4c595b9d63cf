from fastapi import APIRouter

from .features.create_wedding.router import router as create_wedding_router
from .features.get_dashboard.router import router as get_dashboard_router
from .features.manage_events.router import router as manage_events_router

router = APIRouter()

router.include_router(create_wedding_router)
router.include_router(manage_events_router)
router.include_router(get_dashboard_router)
