from blogcraft.api.http.health import router as health_router
from blogcraft.api.http.auth import router as auth_router
from blogcraft.api.http.blogs import router as blogs_router
from blogcraft.api.http.generate import router as generate_router
from blogcraft.api.http.feedback import router as feedback_router
from blogcraft.api.http.versions import router as versions_router

__all__ = [
    "health_router",
    "auth_router",
    "blogs_router",
    "generate_router",
    "feedback_router",
    "versions_router",
]
