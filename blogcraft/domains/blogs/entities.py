import enum
import uuid
from datetime import datetime, timezone
from typing import Optional, List


APPROVAL_MARKER = "User liked this version"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackPolarity(str, enum.Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class Version:
    """Immutable snapshot of a blog post's content"""

    def __init__(
        self,
        id: uuid.UUID,
        blog_id: uuid.UUID,
        content: str,
        version_number: int,
        timestamp: Optional[datetime] = None,
        user_prompt: Optional[str] = None,
        ai_response: Optional[str] = None,
        feedback_text: Optional[str] = None,
    ):
        self.id = id
        self.blog_id = blog_id
        self.content = content
        self.version_number = version_number
        self.timestamp = _utcnow() if timestamp is None else timestamp
        self.user_prompt = user_prompt
        self.ai_response = ai_response
        self.feedback_text = feedback_text

    @property
    def assistant_text(self) -> str:
        """What the model said for this turn, falling back to the stored content"""
        return self.ai_response or self.content

    @classmethod
    def create_version(
        cls,
        blog_id: uuid.UUID,
        content: str,
        version_number: int,
        user_prompt: Optional[str] = None,
        ai_response: Optional[str] = None,
        feedback_text: Optional[str] = None,
    ) -> "Version":
        """New version stamped with the current server time"""
        return cls(
            id=uuid.uuid4(),
            blog_id=blog_id,
            content=content,
            version_number=version_number,
            timestamp=_utcnow(),
            user_prompt=user_prompt,
            ai_response=ai_response,
            feedback_text=feedback_text,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Version(id={self.id}, blog_id={self.blog_id}, number={self.version_number})"


class FeedbackEvent:
    """A user's reaction to the version displayed at the time"""

    def __init__(
        self,
        id: uuid.UUID,
        blog_id: uuid.UUID,
        content: str,
        polarity: FeedbackPolarity,
        timestamp: Optional[datetime] = None,
    ):
        self.id = id
        self.blog_id = blog_id
        self.content = content
        self.polarity = FeedbackPolarity(polarity)
        self.timestamp = _utcnow() if timestamp is None else timestamp

    @property
    def is_approval(self) -> bool:
        return self.polarity is FeedbackPolarity.POSITIVE

    @classmethod
    def create_feedback(
        cls,
        blog_id: uuid.UUID,
        content: str,
        polarity: FeedbackPolarity,
    ) -> "FeedbackEvent":
        return cls(
            id=uuid.uuid4(),
            blog_id=blog_id,
            content=content,
            polarity=polarity,
            timestamp=_utcnow(),
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, FeedbackEvent):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"FeedbackEvent(id={self.id}, polarity={self.polarity.value}, timestamp={self.timestamp})"


class BlogPost:
    """A topic together with its revision chain and feedback"""

    def __init__(
        self,
        id: uuid.UUID,
        topic: str,
        owner_id: uuid.UUID,
        versions: Optional[List[Version]] = None,
        feedback: Optional[List[FeedbackEvent]] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self.id = id
        self.topic = topic
        self.owner_id = owner_id
        self.versions = versions or []
        self.feedback = feedback or []
        self.created_at = created_at or _utcnow()
        self.updated_at = updated_at or self.created_at

    @property
    def latest_version(self) -> Optional[Version]:
        """Newest version, versions being held newest first"""
        return self.versions[0] if self.versions else None

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.owner_id == user_id

    @classmethod
    def create_blog(cls, topic: str, owner_id: uuid.UUID) -> "BlogPost":
        """New blog without versions"""
        return cls(id=uuid.uuid4(), topic=topic, owner_id=owner_id)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BlogPost):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id}, topic={self.topic!r}, versions={len(self.versions)})"
