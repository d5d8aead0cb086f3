"""Storage error translation test cases."""
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from apps.users.repository import UserRepository
from framework.exceptions.errors import InvalidArgument, RepositoryError, StorageError
from framework.exceptions.handler import storage_errors


class TestStorageErrors:
    """Test the SQLAlchemy -> StorageError translation."""

    def test_integrity_error(self):
        original = IntegrityError("INSERT INTO users", {}, Exception("UNIQUE constraint failed: users.email"))

        with pytest.raises(StorageError) as exc_info:
            with storage_errors("save", "User"):
                raise original

        error = exc_info.value
        assert error.integrity is True
        assert error.__cause__ is original
        assert "UNIQUE constraint failed" in error.message
        assert error.details == {"operation": "save", "model": "User"}

    def test_operational_error(self):
        with pytest.raises(StorageError) as exc_info:
            with storage_errors("count", "User"):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        assert exc_info.value.integrity is False
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with storage_errors("save"):
                raise KeyError("not a storage failure")

    def test_no_error(self):
        with storage_errors("save"):
            value = 1
        assert value == 1


class TestHierarchy:

    def test_error_types(self):
        assert issubclass(StorageError, RepositoryError)
        assert issubclass(InvalidArgument, RepositoryError)
        assert issubclass(InvalidArgument, ValueError)

    def test_str_includes_details(self):
        error = InvalidArgument("Page size must be an integer of at least 1", {"size": -1})

        assert str(error) == "Page size must be an integer of at least 1 (size=-1)"

    def test_str_without_details(self):
        assert str(RepositoryError("plain")) == "plain"


class TestUnreachableStore:
    """Repository operations against a store that cannot be opened."""

    @pytest.mark.asyncio
    async def test_find_by_id_raises_storage_error(self, tmp_path):
        missing = tmp_path / "missing-dir" / "course.db"
        engine = create_async_engine(f"sqlite+aiosqlite:///{missing}")
        factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        try:
            async with factory() as session:
                with pytest.raises(StorageError) as exc_info:
                    await UserRepository(session).find_by_id(1)
        finally:
            await engine.dispose()

        assert exc_info.value.operation == "find_by_id"
        assert exc_info.value.model == "User"
