from fastapi import APIRouter

from .features.read_notifications.router import router as read_notifications_router

router = APIRouter()

router.include_router(read_notifications_router)
