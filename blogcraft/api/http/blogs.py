from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blogcraft.core.db import get_db
from blogcraft.core.errors import AppError
from blogcraft.core.logging import get_logger
from blogcraft.domains.blogs.schemas import BlogListResponse, BlogResponse, TimelineEntryResponse, TimelineResponse
from blogcraft.domains.blogs.services import BlogService

logger = get_logger(__name__)

router = APIRouter(prefix="/blogs", tags=["blogs"])

FETCH_FAILED = "Failed to fetch blogs"


async def _list_blogs(user_id: uuid.UUID, db: AsyncSession):
    try:
        blogs = await BlogService(db).list_blogs_for_user(user_id)
    except AppError as e:
        message = e.message if e.status_code < 500 else FETCH_FAILED
        return JSONResponse(status_code=e.status_code, content={"blogs": [], "error": message})
    except Exception:
        logger.error("Error fetching blogs for %s", user_id, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"blogs": [], "error": FETCH_FAILED},
        )

    return BlogListResponse(blogs=[BlogResponse.from_entity(blog) for blog in blogs])


@router.get("", response_model=BlogListResponse)
async def list_blogs(
    user_id: uuid.UUID = Query(..., alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Blogs of a user, newest first, with versions and feedback"""
    return await _list_blogs(user_id, db)


@router.get("/{user_id}", response_model=BlogListResponse)
async def list_blogs_by_path(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    """Same as ``GET /blogs?userId=`` with the user id in the path"""
    return await _list_blogs(user_id, db)


@router.get("/{blog_id}/timeline", response_model=TimelineResponse)
async def get_blog_timeline(
    blog_id: uuid.UUID,
    user_id: uuid.UUID = Query(..., alias="userId"),
    db: AsyncSession = Depends(get_db)
):
    """Versions newest first, each with the feedback given while it was current.

    The blog must belong to ``userId``; anyone else gets 404.
    """
    blog, entries = await BlogService(db).get_timeline(blog_id, owner_id=user_id)
    return TimelineResponse(
        blog_id=blog.id,
        topic=blog.topic,
        entries=[TimelineEntryResponse.from_entry(entry) for entry in entries],
    )
