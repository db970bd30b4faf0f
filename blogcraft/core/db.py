from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from blogcraft.core.config import settings

# Declarative base shared by all ORM models
Base = declarative_base()

engine = create_async_engine(settings.database_url, future=True, echo=settings.sql_echo)

SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """Session per request for FastAPI dependency injection"""
    async with SessionLocal() as session:
        yield session


async def init_models() -> None:
    """Create all tables known to the ORM metadata"""
    # Register the mapped classes on Base.metadata
    import blogcraft.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
