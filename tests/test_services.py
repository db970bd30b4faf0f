"""Tests for the blog and generation services against an in-memory store."""

import uuid

import pytest

from blogcraft.core.errors import NotFoundError, ValidationError
from blogcraft.domains.blogs.entities import FeedbackPolarity
from blogcraft.domains.blogs.services import BlogService
from blogcraft.domains.generation.schemas import GenerateRequest, ImproveRequest
from blogcraft.domains.generation.services import GenerationService


class TestBlogService:
    """Tests for BlogService."""

    async def test_create_blog_holds_one_version(self, session, user):
        blog = await BlogService(session).create_blog(user.id, "Owls", "Owls are great", user_prompt="p")

        assert blog.owner_id == user.id
        assert len(blog.versions) == 1
        assert blog.latest_version.version_number == 1
        assert blog.latest_version.user_prompt == "p"

    async def test_create_blog_requires_topic(self, session, user):
        with pytest.raises(ValidationError):
            await BlogService(session).create_blog(user.id, "  ", "text")

    async def test_versions_are_numbered_in_order(self, session, user):
        service = BlogService(session)
        blog = await service.create_blog(user.id, "Owls", "v1")

        v2 = await service.append_version(blog.id, "v2", feedback_text="more")
        v3 = await service.append_version(blog.id, "v3")

        assert (v2.version_number, v3.version_number) == (2, 3)
        assert v2.feedback_text == "more"
        turns = await service.get_prior_turns(blog.id)
        assert [t.content for t in turns] == ["v1", "v2", "v3"]

    async def test_append_to_unknown_blog(self, session):
        service = BlogService(session)

        with pytest.raises(NotFoundError):
            await service.append_version(uuid.uuid4(), "text")
        with pytest.raises(NotFoundError):
            await service.append_feedback(uuid.uuid4(), "text", FeedbackPolarity.NEGATIVE)

    async def test_get_blog_checks_owner(self, session, user):
        service = BlogService(session)
        blog = await service.create_blog(user.id, "Owls", "v1")

        assert (await service.get_blog(blog.id, owner_id=user.id)).id == blog.id
        with pytest.raises(NotFoundError):
            await service.get_blog(blog.id, owner_id=uuid.uuid4())

    async def test_list_for_unknown_user(self, session):
        with pytest.raises(NotFoundError):
            await BlogService(session).list_blogs_for_user(uuid.uuid4())

    async def test_timeline(self, session, user):
        service = BlogService(session)
        blog = await service.create_blog(user.id, "Owls", "v1")
        await service.append_feedback(blog.id, "too short", FeedbackPolarity.NEGATIVE)
        await service.append_version(blog.id, "v2", feedback_text="too short")

        loaded, entries = await service.get_timeline(blog.id)

        assert loaded.id == blog.id
        assert [e.content for e in entries] == ["v2", "v1"]
        assert [f.content for f in entries[1].feedback] == ["too short"]
        assert entries[0].feedback == []


class TestGenerationService:
    """Tests for GenerationService with a fake gateway."""

    async def test_generate_new_blog(self, session, user, gateway):
        result = await GenerationService(session, gateway).generate(
            GenerateRequest(user_id=user.id, topic="Owls")
        )

        assert result.created_blog
        assert result.content == "Generated post"
        assert result.version.version_number == 1

    async def test_generate_unknown_user(self, session, gateway):
        with pytest.raises(NotFoundError):
            await GenerationService(session, gateway).generate(
                GenerateRequest(user_id=uuid.uuid4(), topic="Owls")
            )
        assert gateway.calls == []

    async def test_generate_revision_without_feedback_stores_nothing(self, session, user, gateway):
        service = GenerationService(session, gateway)
        created = await service.generate(GenerateRequest(user_id=user.id, topic="Owls"))

        result = await service.generate(GenerateRequest(user_id=user.id, blog_id=created.blog_id, topic="Owls"))

        assert result.version is None
        assert not result.created_blog
        assert len(await BlogService(session).get_prior_turns(created.blog_id)) == 1

    async def test_improve_positive_returns_none(self, session, gateway):
        improved = await GenerationService(session, gateway).improve(
            ImproveRequest(content="Post", feedback_type=FeedbackPolarity.POSITIVE, improvement_suggestion="x")
        )

        assert improved is None
        assert gateway.calls == []


class TestGenerateRequest:
    """Tests for GenerateRequest validation."""

    def test_blank_fields_are_cleared(self):
        request = GenerateRequest(user_id=uuid.uuid4(), topic=" Owls ", feedback="   ")

        assert request.topic == "Owls"
        assert request.feedback is None

    def test_new_blog_needs_topic(self):
        with pytest.raises(ValueError):
            GenerateRequest(user_id=uuid.uuid4(), feedback="shorter")

    def test_existing_blog_needs_topic_or_feedback(self):
        with pytest.raises(ValueError):
            GenerateRequest(user_id=uuid.uuid4(), blog_id=uuid.uuid4())

    def test_accepts_camel_case(self):
        user_id, blog_id = uuid.uuid4(), uuid.uuid4()
        request = GenerateRequest.model_validate(
            {"userId": str(user_id), "blogId": str(blog_id), "feedback": "shorter"}
        )

        assert request.user_id == user_id
        assert request.blog_id == blog_id
