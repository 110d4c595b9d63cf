from fastapi import APIRouter

from .features.manage_guests.router import router as manage_guests_router
from .features.submit_rsvp.router import router as submit_rsvp_router

router = APIRouter()

router.include_router(manage_guests_router)
router.include_router(submit_rsvp_router)
