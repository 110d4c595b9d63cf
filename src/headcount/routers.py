from fastapi import APIRouter

from .features.compute_snapshot.router import router as compute_snapshot_router

router = APIRouter()

router.include_router(compute_snapshot_router)
