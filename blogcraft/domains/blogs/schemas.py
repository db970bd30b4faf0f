from pydantic import AliasChoices, Field, field_validator
from typing import Optional, List
import uuid
from datetime import datetime

from blogcraft.core.schemas import CamelModel
from blogcraft.domains.blogs.entities import BlogPost, FeedbackEvent, FeedbackPolarity, Version
from blogcraft.domains.blogs.timeline import TimelineEntry, coerce_timestamp


class VersionResponse(CamelModel):
    """A stored version as returned to the client"""
    id: uuid.UUID
    blog_id: uuid.UUID
    version_number: int
    content: str
    user_prompt: Optional[str] = None
    ai_response: Optional[str] = None
    feedback_text: Optional[str] = Field(None, alias="feedback")
    timestamp: datetime

    @classmethod
    def from_entity(cls, version: Version) -> "VersionResponse":
        return cls(
            id=version.id,
            blog_id=version.blog_id,
            version_number=version.version_number,
            content=version.content,
            user_prompt=version.user_prompt,
            ai_response=version.ai_response,
            feedback_text=version.feedback_text,
            timestamp=coerce_timestamp(version.timestamp),
        )


class FeedbackResponse(CamelModel):
    """A stored feedback event; polarity travels as ``type``"""
    id: uuid.UUID
    blog_id: uuid.UUID
    content: str
    polarity: FeedbackPolarity = Field(..., alias="type")
    timestamp: datetime

    @classmethod
    def from_entity(cls, event: FeedbackEvent) -> "FeedbackResponse":
        return cls(
            id=event.id,
            blog_id=event.blog_id,
            content=event.content,
            polarity=event.polarity,
            timestamp=coerce_timestamp(event.timestamp),
        )


class BlogResponse(CamelModel):
    id: uuid.UUID
    topic: str
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    versions: List[VersionResponse]
    feedback: List[FeedbackResponse]

    @classmethod
    def from_entity(cls, blog: BlogPost) -> "BlogResponse":
        return cls(
            id=blog.id,
            topic=blog.topic,
            owner_id=blog.owner_id,
            created_at=blog.created_at,
            updated_at=blog.updated_at,
            versions=[VersionResponse.from_entity(v) for v in blog.versions],
            feedback=[FeedbackResponse.from_entity(f) for f in blog.feedback],
        )


class BlogListResponse(CamelModel):
    blogs: List[BlogResponse]
    error: Optional[str] = None


class TimelineEntryResponse(CamelModel):
    """A version and the feedback attributed to it"""
    number: int
    is_latest: bool
    version_id: uuid.UUID
    content: str
    user_prompt: Optional[str] = None
    ai_response: Optional[str] = None
    feedback_text: Optional[str] = None
    timestamp: datetime
    feedback: List[FeedbackResponse]

    @classmethod
    def from_entry(cls, entry: TimelineEntry) -> "TimelineEntryResponse":
        return cls(
            number=entry.number,
            is_latest=entry.is_latest,
            version_id=entry.version.id,
            content=entry.content,
            user_prompt=entry.user_prompt,
            ai_response=entry.ai_response,
            feedback_text=entry.feedback_text,
            timestamp=entry.timestamp,
            feedback=[FeedbackResponse.from_entity(f) for f in entry.feedback],
        )


class TimelineResponse(CamelModel):
    blog_id: uuid.UUID
    topic: str
    entries: List[TimelineEntryResponse]


class SaveFeedbackRequest(CamelModel):
    """Body of a feedback save: the reaction to the displayed version"""
    blog_id: uuid.UUID
    content: str = Field(..., min_length=1, max_length=10000)
    polarity: FeedbackPolarity = Field(..., alias="type")

    @field_validator('content')
    @classmethod
    def validate_content(cls, v):
        if not v.strip():
            raise ValueError('Feedback content cannot be empty')
        return v.strip()


class SaveFeedbackResponse(CamelModel):
    success: bool
    feedback: Optional[FeedbackResponse] = None
    error: Optional[str] = None


class SaveVersionRequest(CamelModel):
    """Body of a version save; ``improvementPrompt`` is accepted for ``userPrompt``"""
    blog_id: uuid.UUID
    content: str = Field(..., min_length=1, max_length=1000000)
    feedback: Optional[str] = Field(None, max_length=10000)
    user_prompt: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("userPrompt", "improvementPrompt", "user_prompt"),
    )
    ai_response: Optional[str] = None


class SaveVersionResponse(CamelModel):
    success: bool
    version: Optional[VersionResponse] = None
    blog: Optional[BlogResponse] = None
    error: Optional[str] = None
