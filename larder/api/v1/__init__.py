"""API v1 routes. Every route requires the API key; /admin also requires an ADMIN bearer."""

from fastapi import APIRouter, Depends

from larder.api.v1 import auth, health, tags
from larder.api.v1.dependencies import require_admin, require_api_key

admin_router = APIRouter(dependencies=[Depends(require_admin)])
admin_router.include_router(tags.router, prefix="/tags", tags=["admin-tags"])

router = APIRouter(dependencies=[Depends(require_api_key)])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin_router, prefix="/admin")
