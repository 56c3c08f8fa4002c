from fastapi import APIRouter

from app.api.v1.projects import router as projects_router

router = APIRouter(tags=["v1"])

router.include_router(projects_router)
