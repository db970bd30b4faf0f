from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from blogcraft.api.deps import get_current_user
from blogcraft.core.db import get_db
from blogcraft.domains.identity.entities import User
from blogcraft.domains.identity.schemas import UserCreate, UserLogin, UserResponse, Token
from blogcraft.domains.identity.services import IdentityService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        is_active=user.is_active,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a new user"""
    user = await IdentityService(db).register_user(user_data)
    return _user_response(user)


@router.post("/login", response_model=Token)
async def login(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """Log in and receive a bearer token together with the user id"""
    token, user = await IdentityService(db).login_user(login_data)
    return Token(access_token=token, user_id=user.id)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Profile of the authenticated user"""
    return _user_response(current_user)
