from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from blogcraft.api.deps import get_generation_service
from blogcraft.core.db import get_db
from blogcraft.core.errors import AppError
from blogcraft.core.logging import get_logger
from blogcraft.domains.blogs.schemas import FeedbackResponse, SaveFeedbackRequest, SaveFeedbackResponse
from blogcraft.domains.blogs.services import BlogService
from blogcraft.domains.generation.schemas import ImproveRequest, ImproveResponse
from blogcraft.domains.generation.services import FEEDBACK_RECEIVED, GenerationService

logger = get_logger(__name__)

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", response_model=ImproveResponse, response_model_exclude_none=True)
async def improve_content(
    request: ImproveRequest,
    service: GenerationService = Depends(get_generation_service)
):
    """Improve a post from negative feedback with a suggestion; nothing is stored"""
    try:
        improved = await service.improve(request)
    except Exception:
        logger.error("Error processing feedback", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Error processing feedback"},
        )

    if improved is None:
        return ImproveResponse(message=FEEDBACK_RECEIVED)
    return ImproveResponse(improved_content=improved)


@router.post("/save", response_model=SaveFeedbackResponse, response_model_exclude_none=True)
async def save_feedback(
    request: SaveFeedbackRequest,
    db: AsyncSession = Depends(get_db)
):
    """Record a reaction against a blog at the current time"""
    try:
        event = await BlogService(db).append_feedback(request.blog_id, request.content, request.polarity)
    except AppError as e:
        message = e.message if e.status_code < 500 else "Failed to save feedback"
        return JSONResponse(status_code=e.status_code, content={"success": False, "error": message})
    except Exception:
        logger.error("Error saving feedback for blog %s", request.blog_id, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Failed to save feedback"},
        )

    return SaveFeedbackResponse(success=True, feedback=FeedbackResponse.from_entity(event))
