from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blogcraft.core.errors import NotFoundError, ValidationError
from blogcraft.core.logging import get_logger
from blogcraft.db.repositories.blog_repository import BlogRepository, FeedbackRepository, VersionRepository
from blogcraft.db.repositories.user_repository import UserRepository
from blogcraft.domains.blogs.entities import BlogPost, FeedbackEvent, FeedbackPolarity, Version
from blogcraft.domains.blogs.timeline import TimelineEntry, build_timeline

logger = get_logger(__name__)


class BlogService:
    """Blogs, their append-only version and feedback stores, and the timeline view"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.blog_repository = BlogRepository(session)
        self.version_repository = VersionRepository(session)
        self.feedback_repository = FeedbackRepository(session)
        self.user_repository = UserRepository(session)

    async def list_blogs_for_user(self, user_id: uuid.UUID) -> List[BlogPost]:
        """All blogs of a user, newest first, with versions and feedback loaded"""
        if await self.user_repository.get_by_id(user_id) is None:
            raise NotFoundError("User not found")
        blogs = await self.blog_repository.list_by_owner(user_id)
        logger.debug("Fetched %d blog(s) for user %s", len(blogs), user_id)
        return blogs

    async def get_blog(self, blog_id: uuid.UUID, owner_id: Optional[uuid.UUID] = None) -> BlogPost:
        """Blog by id; with ``owner_id`` it must also belong to that user"""
        blog = await self.blog_repository.get_by_id(blog_id)
        if blog is None or (owner_id is not None and not blog.is_owned_by(owner_id)):
            raise NotFoundError("Blog not found")
        return blog

    async def create_blog(
        self,
        owner_id: uuid.UUID,
        topic: str,
        content: str,
        user_prompt: Optional[str] = None,
        ai_response: Optional[str] = None,
    ) -> BlogPost:
        """New blog holding exactly one initial version"""
        if not topic or not topic.strip():
            raise ValidationError("topic is required to start a new blog")
        blog = BlogPost.create_blog(topic=topic, owner_id=owner_id)
        blog.versions.append(
            Version.create_version(
                blog_id=blog.id,
                content=content,
                version_number=1,
                user_prompt=user_prompt,
                ai_response=ai_response,
            )
        )
        created = await self.blog_repository.create(blog)
        logger.info("Created blog %s for user %s", created.id, owner_id)
        return created

    async def append_version(
        self,
        blog_id: uuid.UUID,
        content: str,
        feedback_text: Optional[str] = None,
        user_prompt: Optional[str] = None,
        ai_response: Optional[str] = None,
    ) -> Version:
        """Append a version stamped with the current server time"""
        await self.get_blog(blog_id)
        version = Version.create_version(
            blog_id=blog_id,
            content=content,
            version_number=await self.version_repository.next_version_number(blog_id),
            user_prompt=user_prompt,
            ai_response=ai_response,
            feedback_text=feedback_text,
        )
        saved = await self.version_repository.create(version)
        logger.info("Saved version %d of blog %s", saved.version_number, blog_id)
        return saved

    async def append_feedback(
        self,
        blog_id: uuid.UUID,
        content: str,
        polarity: FeedbackPolarity,
    ) -> FeedbackEvent:
        """Record a feedback event stamped with the current server time"""
        await self.get_blog(blog_id)
        event = FeedbackEvent.create_feedback(blog_id=blog_id, content=content, polarity=polarity)
        saved = await self.feedback_repository.create(event)
        logger.info("Saved %s feedback for blog %s", saved.polarity.value, blog_id)
        return saved

    async def get_prior_turns(self, blog_id: uuid.UUID) -> List[Version]:
        """Versions of a blog oldest first, as conversation turns"""
        return await self.version_repository.list_by_blog(blog_id, newest_first=False)

    async def get_timeline(
        self,
        blog_id: uuid.UUID,
        owner_id: Optional[uuid.UUID] = None,
    ) -> Tuple[BlogPost, List[TimelineEntry]]:
        """Blog together with its reconciled conversation history"""
        blog = await self.get_blog(blog_id, owner_id)
        return blog, build_timeline(blog)
