import uuid
from datetime import datetime, timezone
from typing import Optional

from blogcraft.core.security import get_password_hash, verify_password


class User:
    """Registered author who owns blogs"""

    def __init__(
        self,
        id: uuid.UUID,
        email: str,
        username: str,
        password_hash: str,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.id = id
        self.email = email
        self.username = username
        self.password_hash = password_hash
        self.is_active = is_active
        self.created_at = created_at or datetime.now(timezone.utc)
        self.updated_at = updated_at or self.created_at

    def authenticate(self, password: str) -> bool:
        """Check the password against the stored hash"""
        return verify_password(password, self.password_hash)

    @classmethod
    def create_user(cls, email: str, username: str, password: str) -> "User":
        """New user with a hashed password"""
        return cls(
            id=uuid.uuid4(),
            email=email,
            username=username,
            password_hash=get_password_hash(password)
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, username={self.username})"
