"""API router initialization."""

from fastapi import APIRouter

from .health import router as health_router
from .portal import router as portal_router

router = APIRouter()

router.include_router(portal_router, prefix="/portal", tags=["portal"])
router.include_router(health_router, prefix="/health", tags=["health"])
