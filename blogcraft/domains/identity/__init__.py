from blogcraft.domains.identity.entities import User
from blogcraft.domains.identity.schemas import (
    UserBase, UserCreate, UserLogin, UserResponse, Token
)

__all__ = [
    "User",
    "UserBase", "UserCreate", "UserLogin", "UserResponse", "Token",
]
