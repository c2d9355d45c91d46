"""Async SQLAlchemy declarative base and per-call session scope."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(database_url: str) -> AsyncIterator[AsyncSession]:
    """Open an engine and one transactional session for the duration of a call.

    The session is closed and the engine disposed on every exit path, so no
    connection outlives the forecast that needed it.
    """
    engine = create_engine(database_url)
    try:
        async with create_session_factory(engine)() as session:
            async with session.begin():
                yield session
    finally:
        await engine.dispose()
