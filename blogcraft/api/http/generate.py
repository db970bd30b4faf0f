from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from blogcraft.api.deps import get_generation_service
from blogcraft.core.errors import AppError
from blogcraft.core.logging import get_logger
from blogcraft.domains.generation.schemas import GenerateRequest, GenerateResponse
from blogcraft.domains.generation.services import GenerationService

logger = get_logger(__name__)

router = APIRouter(tags=["generation"])


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"content": "", "error": message})


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    service: GenerationService = Depends(get_generation_service)
):
    """Generate a new post, or revise an existing one from feedback.

    Failures keep the response shape: empty ``content`` plus ``error``.
    """
    try:
        result = await service.generate(request)
    except AppError as e:
        if e.status_code >= 500:
            logger.error("Generation failed: %s", e.message)
        return _failure(e.status_code, e.message)
    except Exception:
        logger.error("Unexpected error during generation", exc_info=True)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to generate content")

    if result.created_blog:
        logger.info("Created blog %s for user %s", result.blog_id, request.user_id)
    return GenerateResponse(content=result.content, blog_id=result.blog_id)
