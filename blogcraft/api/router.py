from fastapi import APIRouter

from blogcraft.api.http import (
    auth_router, blogs_router, feedback_router, generate_router, health_router, versions_router
)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(blogs_router)
api_router.include_router(generate_router)
api_router.include_router(feedback_router)
api_router.include_router(versions_router)
