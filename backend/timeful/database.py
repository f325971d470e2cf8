"""SQLAlchemy async engine and session management."""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from timeful.config import Settings


class Base(DeclarativeBase):
    pass


def create_engine_for(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured database."""
    kw: dict = {"echo": False}
    if not settings.is_sqlite:
        kw.update(pool_size=20, max_overflow=10, pool_pre_ping=True)
    return create_async_engine(settings.DATABASE_URL, **kw)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency that yields an async database session."""
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine):
    """Create all tables."""
    async with engine.begin() as conn:
        from timeful.models import Event  # noqa
        await conn.run_sync(Base.metadata.create_all)
