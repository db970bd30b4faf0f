from blogcraft.db.repositories.user_repository import UserRepository
from blogcraft.db.repositories.blog_repository import BlogRepository, VersionRepository, FeedbackRepository

__all__ = [
    "UserRepository",
    "BlogRepository",
    "VersionRepository",
    "FeedbackRepository",
]
