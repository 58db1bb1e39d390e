from fastapi import APIRouter

from app.api.v1.endpoints import leads, health

router = APIRouter(prefix="/api/v1")

router.include_router(leads.router)
router.include_router(health.router)
