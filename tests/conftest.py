"""Shared fixtures: in-memory database, fake generation gateway, HTTP client."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LLM_API_KEY", "test-key")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import blogcraft.db.models  # noqa: F401
from blogcraft.core.config import get_settings
from blogcraft.core.db import Base, get_db
from blogcraft.db.repositories.user_repository import UserRepository
from blogcraft.domains.generation.gateway import get_generation_gateway
from blogcraft.domains.identity.entities import User
from blogcraft.main import create_app


class FakeGateway:
    """Stands in for the hosted model; records every call"""

    def __init__(self, reply: str = "Generated post"):
        self.settings = get_settings()
        self.reply = reply
        self.error = None
        self.calls = []

    async def complete(self, messages, *, max_tokens=None):
        self.calls.append({"messages": messages, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
async def client(session_factory, gateway):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_generation_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def _create_user(session_factory, email: str, username: str) -> User:
    async with session_factory() as session:
        return await UserRepository(session).create(
            User.create_user(email=email, username=username, password="Secret123")
        )


@pytest.fixture
async def user(session_factory):
    """Registered author, stored directly through the repository"""
    return await _create_user(session_factory, "author@example.com", "author")


@pytest.fixture
async def other_user(session_factory):
    return await _create_user(session_factory, "other@example.com", "other")
