from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import uuid

from blogcraft.core.errors import ConflictError, PersistenceError
from blogcraft.db.models.user import User as UserModel
from blogcraft.domains.identity.entities import User


class UserRepository:
    """Repository for user accounts"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Insert a new user"""
        db_user = UserModel(
            id=user.id,
            email=user.email,
            username=user.username,
            password_hash=user.password_hash,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

        self.session.add(db_user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError("User with this email or username already exists")
        except SQLAlchemyError as exc:
            await self.session.rollback()
            raise PersistenceError("Failed to create user") from exc
        await self.session.refresh(db_user)
        return self._to_domain(db_user)

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """User by id, or None"""
        return await self._get_one(select(UserModel).where(UserModel.id == user_id))

    async def get_by_email(self, email: str) -> Optional[User]:
        """User by email, or None"""
        return await self._get_one(select(UserModel).where(UserModel.email == email))

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def username_exists(self, username: str) -> bool:
        return await self._get_one(select(UserModel).where(UserModel.username == username)) is not None

    async def _get_one(self, statement) -> Optional[User]:
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to fetch user") from exc
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    def _to_domain(self, db_user: UserModel) -> User:
        """Map a database row onto the domain entity"""
        return User(
            id=db_user.id,
            email=db_user.email,
            username=db_user.username,
            password_hash=db_user.password_hash,
            is_active=db_user.is_active,
            created_at=db_user.created_at,
            updated_at=db_user.updated_at,
        )
