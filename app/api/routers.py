from fastapi import APIRouter

from app.api.v1.activity import router as activity_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(activity_router)
