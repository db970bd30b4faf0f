from blogcraft.db.models.user import User
from blogcraft.db.models.blog import Blog, Version, Feedback

__all__ = [
    "User",
    "Blog",
    "Version",
    "Feedback",
]
