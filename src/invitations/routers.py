from fastapi import APIRouter

from .features.guest_invitation.router import router as guest_invitation_router
from .features.partner_invitation.router import router as partner_invitation_router
from .features.vendor_invitation.router import router as vendor_invitation_router

router = APIRouter()

router.include_router(partner_invitation_router)
router.include_router(guest_invitation_router)
router.include_router(vendor_invitation_router)
