from pydantic import EmailStr, Field, field_validator
from datetime import datetime
import uuid

from blogcraft.core.schemas import CamelModel


def _check_password_strength(v: str) -> str:
    if len(v) < 8:
        raise ValueError('Password must be at least 8 characters long')
    if not any(c.isupper() for c in v):
        raise ValueError('Password must contain at least one uppercase letter')
    if not any(c.islower() for c in v):
        raise ValueError('Password must contain at least one lowercase letter')
    if not any(c.isdigit() for c in v):
        raise ValueError('Password must contain at least one digit')
    return v


class UserBase(CamelModel):
    """Base user schema"""
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=100)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        if not v.replace('_', '').replace('-', '').isalnum():
            raise ValueError('Username must contain only alphanumeric characters, underscores, and hyphens')
        return v


class UserCreate(UserBase):
    """Registration request"""
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator('password')
    @classmethod
    def validate_password(cls, v):
        return _check_password_strength(v)


class UserLogin(CamelModel):
    """Login request"""
    email: EmailStr
    password: str


class UserResponse(UserBase):
    """User as returned to the client"""
    id: uuid.UUID
    is_active: bool
    created_at: datetime
    updated_at: datetime


class Token(CamelModel):
    """Issued JWT; the client keeps ``userId`` for the blog endpoints"""
    access_token: str
    token_type: str = "bearer"
    user_id: uuid.UUID
