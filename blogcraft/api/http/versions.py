from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blogcraft.core.db import get_db
from blogcraft.core.errors import AppError
from blogcraft.core.logging import get_logger
from blogcraft.domains.blogs.schemas import BlogResponse, SaveVersionRequest, SaveVersionResponse, VersionResponse
from blogcraft.domains.blogs.services import BlogService

logger = get_logger(__name__)

router = APIRouter(prefix="/versions", tags=["versions"])

SAVE_FAILED = "Failed to save version"


@router.post("/save", response_model=SaveVersionResponse, response_model_exclude_none=True)
async def save_version(
    request: SaveVersionRequest,
    db: AsyncSession = Depends(get_db)
):
    """Append a client-supplied version, e.g. an accepted improvement"""
    service = BlogService(db)
    try:
        version = await service.append_version(
            request.blog_id,
            content=request.content,
            feedback_text=request.feedback,
            user_prompt=request.user_prompt,
            ai_response=request.ai_response,
        )
        blog = await service.get_blog(request.blog_id)
    except AppError as e:
        message = e.message if e.status_code < 500 else SAVE_FAILED
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": message})
    except Exception:
        logger.error("Error saving version for blog %s", request.blog_id, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": SAVE_FAILED},
        )

    return SaveVersionResponse(
        success=True,
        version=VersionResponse.from_entity(version),
        blog=BlogResponse.from_entity(blog),
    )
