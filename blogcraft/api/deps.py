from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from blogcraft.core.db import get_db
from blogcraft.core.errors import AuthenticationError
from blogcraft.domains.generation.gateway import GenerationGateway, get_generation_gateway
from blogcraft.domains.generation.services import GenerationService
from blogcraft.domains.identity.entities import User
from blogcraft.domains.identity.services import IdentityService

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Dependency resolving the authenticated user from the bearer token"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    user = await IdentityService(db).get_current_user_from_token(credentials.credentials)
    if not user:
        raise AuthenticationError()

    return user


def get_generation_service(
    db: AsyncSession = Depends(get_db),
    gateway: GenerationGateway = Depends(get_generation_gateway)
) -> GenerationService:
    """Generation service bound to the request session"""
    return GenerationService(db, gateway)
