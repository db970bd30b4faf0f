from datetime import datetime, timezone
from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
import uuid

from blogcraft.core.errors import PersistenceError
from blogcraft.core.logging import get_logger
from blogcraft.db.models.blog import Blog as BlogModel, Version as VersionModel, Feedback as FeedbackModel
from blogcraft.domains.blogs.entities import BlogPost, FeedbackEvent, FeedbackPolarity, Version

logger = get_logger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes for timezone-aware columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


async def _execute(session: AsyncSession, statement, action: str):
    try:
        return await session.execute(statement)
    except SQLAlchemyError as exc:
        logger.error("Failed to %s: %s", action, exc, exc_info=True)
        raise PersistenceError(f"Failed to {action}") from exc


async def _commit(session: AsyncSession, action: str) -> None:
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.error("Failed to %s: %s", action, exc, exc_info=True)
        raise PersistenceError(f"Failed to {action}") from exc


def version_to_domain(db_version: VersionModel) -> Version:
    return Version(
        id=db_version.id,
        blog_id=db_version.blog_id,
        content=db_version.content,
        version_number=db_version.version_number,
        timestamp=_as_utc(db_version.timestamp),
        user_prompt=db_version.user_prompt,
        ai_response=db_version.ai_response,
        feedback_text=db_version.feedback_text,
    )


def feedback_to_domain(db_feedback: FeedbackModel) -> FeedbackEvent:
    return FeedbackEvent(
        id=db_feedback.id,
        blog_id=db_feedback.blog_id,
        content=db_feedback.content,
        polarity=FeedbackPolarity(db_feedback.polarity),
        timestamp=_as_utc(db_feedback.timestamp),
    )


class BlogRepository:
    """Blogs with their versions and feedback loaded eagerly"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _history_query(self):
        return select(BlogModel).options(
            selectinload(BlogModel.versions),
            selectinload(BlogModel.feedback),
        )

    async def create(self, blog: BlogPost) -> BlogPost:
        """Insert a blog together with the versions it already holds"""
        db_blog = BlogModel(
            id=blog.id,
            topic=blog.topic,
            owner_id=blog.owner_id,
            created_at=blog.created_at,
            updated_at=blog.updated_at,
        )
        self.session.add(db_blog)
        for version in blog.versions:
            self.session.add(
                VersionModel(
                    id=version.id,
                    blog_id=db_blog.id,
                    version_number=version.version_number,
                    content=version.content,
                    user_prompt=version.user_prompt,
                    ai_response=version.ai_response,
                    feedback_text=version.feedback_text,
                    timestamp=version.timestamp,
                )
            )
        await _commit(self.session, "create blog")
        return await self.get_by_id(blog.id)

    async def get_by_id(self, blog_id: uuid.UUID) -> Optional[BlogPost]:
        """Blog with its full history, or None"""
        result = await _execute(
            self.session,
            self._history_query().where(BlogModel.id == blog_id).execution_options(populate_existing=True),
            "fetch blog",
        )
        db_blog = result.scalar_one_or_none()
        return self._to_domain(db_blog) if db_blog else None

    async def list_by_owner(self, owner_id: uuid.UUID) -> List[BlogPost]:
        """Blogs of an owner, newest first"""
        result = await _execute(
            self.session,
            self._history_query()
            .where(BlogModel.owner_id == owner_id)
            .order_by(BlogModel.created_at.desc())
            .execution_options(populate_existing=True),
            "fetch blogs",
        )
        db_blogs = result.scalars().all()
        return [self._to_domain(blog) for blog in db_blogs]

    def _to_domain(self, db_blog: BlogModel) -> BlogPost:
        versions = sorted(
            (version_to_domain(v) for v in db_blog.versions),
            key=lambda v: (v.timestamp, v.version_number),
            reverse=True,
        )
        feedback = sorted(
            (feedback_to_domain(f) for f in db_blog.feedback),
            key=lambda f: f.timestamp,
            reverse=True,
        )
        return BlogPost(
            id=db_blog.id,
            topic=db_blog.topic,
            owner_id=db_blog.owner_id,
            versions=versions,
            feedback=feedback,
            created_at=_as_utc(db_blog.created_at),
            updated_at=_as_utc(db_blog.updated_at),
        )


class VersionRepository:
    """Append-only version store"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_version_number(self, blog_id: uuid.UUID) -> int:
        """One past the highest version number of the blog, 1 for none"""
        result = await _execute(
            self.session,
            select(func.max(VersionModel.version_number)).where(VersionModel.blog_id == blog_id),
            "number version",
        )
        return (result.scalar() or 0) + 1

    async def create(self, version: Version) -> Version:
        """Insert a version; versions are never updated afterwards"""
        db_version = VersionModel(
            id=version.id,
            blog_id=version.blog_id,
            version_number=version.version_number,
            content=version.content,
            user_prompt=version.user_prompt,
            ai_response=version.ai_response,
            feedback_text=version.feedback_text,
            timestamp=version.timestamp,
        )
        self.session.add(db_version)
        await _commit(self.session, "save version")
        await self.session.refresh(db_version)
        return version_to_domain(db_version)

    async def list_by_blog(self, blog_id: uuid.UUID, newest_first: bool = True) -> List[Version]:
        """Versions of a blog ordered by timestamp, then version number"""
        order = (
            (VersionModel.timestamp.desc(), VersionModel.version_number.desc())
            if newest_first
            else (VersionModel.timestamp.asc(), VersionModel.version_number.asc())
        )
        result = await _execute(
            self.session,
            select(VersionModel).where(VersionModel.blog_id == blog_id).order_by(*order),
            "fetch versions",
        )
        return [version_to_domain(v) for v in result.scalars().all()]


class FeedbackRepository:
    """Append-only feedback store"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: FeedbackEvent) -> FeedbackEvent:
        """Insert a feedback event; events are never updated afterwards"""
        db_feedback = FeedbackModel(
            id=event.id,
            blog_id=event.blog_id,
            content=event.content,
            polarity=event.polarity.value,
            timestamp=event.timestamp,
        )
        self.session.add(db_feedback)
        await _commit(self.session, "save feedback")
        await self.session.refresh(db_feedback)
        return feedback_to_domain(db_feedback)

