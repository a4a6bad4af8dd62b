"""Versioned API route modules."""

from fastapi import APIRouter

from geocoin.api.routes.caches import router as caches_router
from geocoin.api.routes.config import router as config_router
from geocoin.api.routes.control import router as control_router
from geocoin.api.routes.save import router as save_router
from geocoin.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(state_router, tags=["State"])
api_router.include_router(control_router, tags=["Control"])
api_router.include_router(caches_router, tags=["Caches"])
api_router.include_router(save_router, tags=["Save"])
api_router.include_router(config_router, tags=["Config"])

__all__ = ["api_router"]
