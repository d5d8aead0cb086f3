"""
Unit of Work: manages repositories and transaction boundaries.
"""

from typing import Dict, Optional, Type, TypeVar
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.exceptions.handler import storage_errors
from framework.logging.logger import get_logger

R = TypeVar("R")

logger = get_logger("unit_of_work")


class UnitOfWork:
    """Manages related repositories with a shared session and transaction commit/rollback."""

    def __init__(self, session: Optional[AsyncSession] = None):
        """Initialize UnitOfWork; session must be provided (e.g. UnitOfWork.from_session())."""
        if session is None:
            raise ValueError("Session must be provided. Use UnitOfWork.from_session() or pass session explicitly.")

        self.session = session
        self._repositories: Dict[type, object] = {}

    @classmethod
    async def from_session(cls, session: AsyncSession) -> "UnitOfWork":
        """Create UnitOfWork from an existing session."""
        return cls(session=session)

    def get_repository(self, repo_class: Type[R]) -> R:
        """Get or create a repository instance bound to this session (cached per class)."""
        if repo_class not in self._repositories:
            self._repositories[repo_class] = repo_class(self.session)
        return self._repositories[repo_class]

    async def commit(self) -> None:
        """Commit all changes."""
        with storage_errors("commit"):
            await self.session.commit()
        logger.debug("Transaction committed")

    async def rollback(self) -> None:
        """Rollback all changes."""
        await self.session.rollback()
        logger.debug("Transaction rolled back")

    async def flush(self) -> None:
        """Flush session (e.g. to get auto-increment IDs)."""
        with storage_errors("flush"):
            await self.session.flush()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            await self.rollback()
        else:
            await self.commit()
