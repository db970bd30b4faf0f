from pydantic import Field, model_validator
from typing import Optional
import uuid

from blogcraft.core.schemas import CamelModel
from blogcraft.domains.blogs.entities import FeedbackPolarity


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class GenerateRequest(CamelModel):
    """Generate a new blog, or revise an existing one from feedback.

    ``userId`` is always required. Without ``blogId`` a ``topic`` is required
    and a new blog is created; with ``blogId`` either ``feedback`` (revision)
    or ``topic`` must be present.
    """
    user_id: uuid.UUID
    blog_id: Optional[uuid.UUID] = None
    topic: Optional[str] = Field(None, max_length=1000)
    content: Optional[str] = Field(None, max_length=1000000)
    feedback: Optional[str] = Field(None, max_length=10000)

    @model_validator(mode="after")
    def check_instruction(self):
        self.topic = _clean(self.topic)
        self.feedback = _clean(self.feedback)
        if self.blog_id is None and not self.topic:
            raise ValueError("topic is required to start a new blog")
        if not self.topic and not self.feedback:
            raise ValueError("topic or feedback is required")
        return self


class GenerateResponse(CamelModel):
    content: str
    error: Optional[str] = None
    blog_id: Optional[uuid.UUID] = None


class ImproveRequest(CamelModel):
    """Stand-alone improvement of a post from a user's reaction"""
    content: str = Field(..., max_length=1000000)
    feedback_type: FeedbackPolarity
    improvement_suggestion: Optional[str] = Field(None, max_length=10000)


class ImproveResponse(CamelModel):
    improved_content: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
