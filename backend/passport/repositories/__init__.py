from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import Request

from passport.config import Settings
from passport.database import Base, create_engine, create_session_factory
from passport.repositories.base import Repository
from passport.repositories.memory import MemoryRepository
from passport.repositories.sql import SqlRepository


class MemoryStore:
    """Process-wide in-memory store. Every request shares one repository."""

    def __init__(self, repository: Optional[MemoryRepository] = None):
        self._repository = repository or MemoryRepository()

    @asynccontextmanager
    async def repository(self) -> AsyncIterator[Repository]:
        yield self._repository

    async def create_all(self) -> None:
        pass

    async def dispose(self) -> None:
        pass


class SqlStore:
    """Relational store: one session (and repository) per request."""

    def __init__(self, database_url: str, echo: bool = False):
        self.engine = create_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)

    @asynccontextmanager
    async def repository(self) -> AsyncIterator[Repository]:
        async with self._session_factory() as session:
            try:
                yield SqlRepository(session)
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_store(settings: Settings):
    """Relational store when DATABASE_URL is set, in-memory otherwise."""
    if settings.database_url:
        return SqlStore(settings.database_url, echo=settings.database_echo)
    return MemoryStore()


async def get_repository(request: Request) -> AsyncIterator[Repository]:
    async with request.app.state.store.repository() as repo:
        yield repo


__all__ = ["Repository", "MemoryRepository", "SqlRepository", "MemoryStore", "SqlStore",
           "create_store", "get_repository"]
