from dataclasses import dataclass
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blogcraft.core.errors import NotFoundError
from blogcraft.core.logging import get_logger
from blogcraft.db.repositories.user_repository import UserRepository
from blogcraft.domains.blogs.entities import FeedbackPolarity, Version
from blogcraft.domains.blogs.services import BlogService
from blogcraft.domains.generation.gateway import GenerationGateway
from blogcraft.domains.generation.prompts import build_improve_messages, build_messages, build_prompt
from blogcraft.domains.generation.schemas import GenerateRequest, ImproveRequest

logger = get_logger(__name__)

FEEDBACK_RECEIVED = "Feedback received"


@dataclass
class GenerationResult:
    content: str
    blog_id: Optional[uuid.UUID] = None
    version: Optional[Version] = None
    created_blog: bool = False


class GenerationService:
    """Prompt assembly around the gateway, and persistence of what it returns"""

    def __init__(self, session: AsyncSession, gateway: GenerationGateway):
        self.session = session
        self.gateway = gateway
        self.blog_service = BlogService(session)
        self.user_repository = UserRepository(session)

    async def generate(self, request: GenerateRequest) -> GenerationResult:
        """Generate or revise a post for ``request.user_id``.

        No blog id: a new blog is created with one version. Blog id plus
        feedback: one version is appended to that blog. Blog id alone:
        the text is returned and nothing is stored.
        """
        user = await self.user_repository.get_by_id(request.user_id)
        if user is None:
            raise NotFoundError("User not found")

        prior_turns = []
        if request.blog_id is not None:
            await self.blog_service.get_blog(request.blog_id, owner_id=user.id)
            prior_turns = await self.blog_service.get_prior_turns(request.blog_id)

        prompt = build_prompt(request.topic, request.content, request.feedback)
        generated = await self.gateway.complete(build_messages(prompt, prior_turns))

        if request.blog_id is None:
            blog = await self.blog_service.create_blog(
                owner_id=user.id,
                topic=request.topic,
                content=generated,
                user_prompt=prompt,
                ai_response=generated,
            )
            return GenerationResult(
                content=generated,
                blog_id=blog.id,
                version=blog.latest_version,
                created_blog=True,
            )

        if request.feedback:
            version = await self.blog_service.append_version(
                request.blog_id,
                content=generated,
                feedback_text=request.feedback,
                user_prompt=prompt,
                ai_response=generated,
            )
            return GenerationResult(content=generated, blog_id=request.blog_id, version=version)

        logger.debug("Generated text for blog %s without feedback, nothing stored", request.blog_id)
        return GenerationResult(content=generated, blog_id=request.blog_id)

    async def improve(self, request: ImproveRequest) -> Optional[str]:
        """Improved content for negative feedback with a suggestion, else None"""
        suggestion = (request.improvement_suggestion or "").strip()
        if request.feedback_type is not FeedbackPolarity.NEGATIVE or not suggestion:
            return None
        return await self.gateway.complete(
            build_improve_messages(request.content, suggestion),
            max_tokens=self.gateway.settings.llm_improve_max_tokens,
        )
