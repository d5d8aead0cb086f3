from sqlmodel import SQLModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.handler import storage_errors
from .base import BaseDatabaseDriver

class SQLDriver(BaseDatabaseDriver):
    """Async SQLAlchemy engine (pooled) plus session factory for any SQL backend."""

    def __init__(self, url: str, **engine_options):
        self.url = url
        self.engine = create_async_engine(url, future=True, **engine_options)
        self.session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def connect(self):
        """Check the database is reachable (the engine manages pooled connections)."""
        with storage_errors("connect"):
            async with self.engine.begin() as conn:
                await conn.execute(text("SELECT 1"))

    async def disconnect(self):
        """Dispose of the connection pool."""
        await self.engine.dispose()

    async def create_all(self):
        """Create tables for every registered SQLModel table model."""
        import apps.models  # noqa: F401  (registers tables in SQLModel.metadata)

        with storage_errors("create_all"):
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self):
        with storage_errors("drop_all"):
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.drop_all)
