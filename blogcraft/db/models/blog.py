from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text, UUID
from sqlalchemy.orm import relationship

from blogcraft.db.base import BaseModel, utcnow


class Blog(BaseModel):
    __tablename__ = "blogs"

    topic = Column(Text, nullable=False)
    owner_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    owner = relationship("User", back_populates="blogs")
    versions = relationship("Version", back_populates="blog", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="blog", cascade="all, delete-orphan")


class Version(BaseModel):
    __tablename__ = "versions"
    __table_args__ = (
        Index("ix_versions_blog_id_timestamp", "blog_id", "timestamp"),
    )

    blog_id = Column(UUID(as_uuid=True), ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)
    user_prompt = Column(Text, nullable=True)
    ai_response = Column(Text, nullable=True)
    feedback_text = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    blog = relationship("Blog", back_populates="versions")


class Feedback(BaseModel):
    __tablename__ = "feedback"
    __table_args__ = (
        Index("ix_feedback_blog_id_timestamp", "blog_id", "timestamp"),
    )

    blog_id = Column(UUID(as_uuid=True), ForeignKey("blogs.id", ondelete="CASCADE"), nullable=False)
    content = Column(Text, nullable=False)
    polarity = Column(String(16), nullable=False)  # "positive" | "negative"
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Relationships
    blog = relationship("Blog", back_populates="feedback")
