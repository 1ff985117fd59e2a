# hr_admin/core/database.py
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from hr_admin.core.config import Settings
from hr_admin.models.model import Base

logger = logging.getLogger(__name__)


class Database:
    """Process-wide connection pool with an explicit init/close lifecycle.

    One instance is built at startup and shared by every request. The engine
    opens connections lazily, so ``init`` succeeds even while the server is
    unreachable; ``connect`` is the explicit round-trip used to (re)establish
    connectivity before a retry.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine_options = engine_options
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        options: Dict[str, Any] = {"echo": settings.SQL_ECHO, "pool_pre_ping": True}
        if not settings.database_url.startswith("sqlite"):
            options["pool_size"] = settings.DB_POOL_SIZE
            options["max_overflow"] = settings.DB_MAX_OVERFLOW
        return cls(settings.database_url, **options)

    def init(self) -> None:
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, **self.engine_options)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def connect(self) -> None:
        """Make sure a live connection can be checked out of the pool."""
        self.init()
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        self.init()
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Tables created successfully")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """One unit of work: commit on success, roll back on any error."""
        self.init()
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.debug(f"DB session rolled back: {str(e)}")
            raise
        finally:
            await session.close()

    async def close(self) -> None:
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        logger.info("Database connections closed")
