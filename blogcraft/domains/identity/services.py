from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from blogcraft.core.errors import AuthenticationError, ConflictError
from blogcraft.core.logging import get_logger
from blogcraft.core.security import create_access_token, verify_token
from blogcraft.db.repositories.user_repository import UserRepository
from blogcraft.domains.identity.entities import User
from blogcraft.domains.identity.schemas import UserCreate, UserLogin

logger = get_logger(__name__)


class IdentityService:
    """Registration, login and token resolution"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def register_user(self, user_data: UserCreate) -> User:
        """Register a new user"""
        if await self.user_repository.email_exists(user_data.email):
            raise ConflictError("Email already registered")

        if await self.user_repository.username_exists(user_data.username):
            raise ConflictError("Username already taken")

        user = User.create_user(
            email=user_data.email,
            username=user_data.username,
            password=user_data.password
        )

        created = await self.user_repository.create(user)
        logger.info("Registered user %s", created.id)
        return created

    async def authenticate_user(self, login_data: UserLogin) -> Optional[User]:
        user = await self.user_repository.get_by_email(login_data.email)

        if not user or not user.is_active:
            return None

        if not user.authenticate(login_data.password):
            return None

        return user

    async def login_user(self, login_data: UserLogin) -> tuple[str, User]:
        """Authenticate and issue an access token"""
        user = await self.authenticate_user(login_data)

        if not user:
            raise AuthenticationError("Incorrect email or password")

        token_data = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email
        }

        return create_access_token(data=token_data), user

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Resolve the active user a JWT was issued for"""
        payload = verify_token(token)
        if not payload or not payload.get("sub"):
            return None

        try:
            user_id = uuid.UUID(payload["sub"])
        except ValueError:
            return None

        user = await self.user_repository.get_by_id(user_id)
        if user is None or not user.is_active:
            return None

        return user
