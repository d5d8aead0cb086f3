from contextlib import asynccontextmanager
from typing import AsyncIterator
from framework.logging.logger import get_logger
from framework.repository.unit_of_work import UnitOfWork
from .sql_driver import SQLDriver

logger = get_logger("database")

class DatabaseManager:
    _instance = None

    def __init__(self, settings):
        self.sql = SQLDriver(settings.DATABASE_URL, **settings.engine_options)

    @classmethod
    def get_instance(cls, settings=None):
        if cls._instance is None:
            if settings is None:
                from framework.config import settings as app_settings
                settings = app_settings
            cls._instance = cls(settings)
        return cls._instance

    @classmethod
    def reset_instance(cls):
        cls._instance = None

    async def connect(self):
        await self.sql.connect()
        logger.info(f"Database connected: {self.sql.engine.url.render_as_string(hide_password=True)}")

    async def disconnect(self):
        await self.sql.disconnect()
        logger.info("Database disconnected")

    async def create_all(self):
        await self.sql.create_all()

    async def drop_all(self):
        await self.sql.drop_all()

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[UnitOfWork]:
        """
        Open a pooled session wrapped in a UnitOfWork.

        Commits when the block exits cleanly, rolls back and re-raises
        otherwise; the session goes back to the pool on every path.
        """
        async with self.sql.session_factory() as session:
            async with UnitOfWork(session) as uow:
                yield uow
