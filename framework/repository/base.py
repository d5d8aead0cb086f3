"""
Repository abstract base class and generic implementation.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Optional, Type, TypeVar
from sqlmodel import SQLModel, col, func, select
from sqlmodel.ext.asyncio.session import AsyncSession
from framework.config import settings
from framework.exceptions.errors import InvalidArgument
from framework.exceptions.handler import storage_errors
from framework.logging.logger import get_logger
from framework.pagination import Page, PageRequest, Sort, SortLike

T = TypeVar("T", bound=SQLModel)

logger = get_logger("repository")


class IRepository(ABC, Generic[T]):
    """Repository interface; defines standard data access API."""

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Insert entity when its id is unset, otherwise update the record with that id."""
        pass

    @abstractmethod
    async def find_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID; None when absent."""
        pass

    @abstractmethod
    async def find_all(self, sort: SortLike = None) -> List[T]:
        """Get all entities, in storage order unless sorted."""
        pass

    @abstractmethod
    async def find_page(self, page: int = 0, size: Optional[int] = None, sort: SortLike = None) -> Page[T]:
        """Get one page of entities plus total-count metadata."""
        pass

    @abstractmethod
    async def exists_by_id(self, id: int) -> bool:
        """Check whether an entity with this ID exists."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count all entities."""
        pass

    @abstractmethod
    async def delete_by_id(self, id: int) -> None:
        """Delete entity by ID; no-op when absent."""
        pass

    @abstractmethod
    async def delete(self, entity: T) -> None:
        """Delete entity (same as delete_by_id(entity.id))."""
        pass


class BaseRepository(IRepository[T]):
    """
    Generic repository implementation with SQLModel CRUD.

    Operations flush but never commit: transaction boundaries belong to the
    caller (see UnitOfWork). SQLAlchemy failures surface as StorageError.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Initialize repository with session and model."""
        self.session = session
        self.model = model

    @property
    def model_name(self) -> str:
        return self.model.__name__

    async def save(self, entity: T) -> T:
        """
        Insert (id unset) or update the record with entity.id.

        An id that matches no record is never written: the entity is
        inserted as a copy without its id and the store assigns a fresh one.
        """
        if entity.id is not None and not await self.exists_by_id(entity.id):
            logger.debug(f"{self.model_name} id={entity.id} not found, inserting with a new id")
            entity = self.model(**entity.model_dump(exclude={"id"}))

        with storage_errors("save", self.model_name):
            if entity.id is None:
                self.session.add(entity)
                await self.session.flush()
                await self.session.refresh(entity)
                return entity

            merged = await self.session.merge(entity)
            await self.session.flush()
            return merged

    async def save_all(self, entities: Iterable[T]) -> List[T]:
        """Save each entity in order."""
        return [await self.save(entity) for entity in entities]

    async def find_by_id(self, id: int) -> Optional[T]:
        """Get entity by ID."""
        self._require_id(id)
        statement = select(self.model).where(self.model.id == id)
        with storage_errors("find_by_id", self.model_name):
            result = await self.session.exec(statement)
            return result.first()

    async def find_all(self, sort: SortLike = None) -> List[T]:
        """Get all entities, optionally sorted (e.g. sort="-id")."""
        statement = self._apply_sort(select(self.model), Sort.of(sort))
        with storage_errors("find_all", self.model_name):
            result = await self.session.exec(statement)
            return list(result.all())

    async def find_all_by_id(self, ids: Iterable[int]) -> List[T]:
        """Get entities whose ID is in ids; missing IDs are skipped."""
        ids = list(ids)
        for id in ids:
            self._require_id(id)
        if not ids:
            return []

        statement = select(self.model).where(col(self.model.id).in_(ids))
        with storage_errors("find_all_by_id", self.model_name):
            result = await self.session.exec(statement)
            return list(result.all())

    async def find_page(self, page: int = 0, size: Optional[int] = None, sort: SortLike = None) -> Page[T]:
        """Get a page (zero-based) of entities; primary key breaks ordering ties."""
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        request = PageRequest.of(page, size, sort)
        statement = self._apply_sort(select(self.model), request.sort)
        statement = statement.order_by(col(self.model.id).asc())
        statement = statement.offset(request.offset).limit(request.size)

        with storage_errors("find_page", self.model_name):
            total = await self.count()
            result = await self.session.exec(statement)
            content = list(result.all())

        return Page.create(content, request, total)

    async def exists_by_id(self, id: int) -> bool:
        """Check if an entity with this ID exists."""
        self._require_id(id)
        statement = select(self.model.id).where(self.model.id == id).limit(1)
        with storage_errors("exists_by_id", self.model_name):
            result = await self.session.exec(statement)
            return result.first() is not None

    async def count(self) -> int:
        """Count entities."""
        statement = select(func.count(self.model.id))
        with storage_errors("count", self.model_name):
            result = await self.session.exec(statement)
            return result.one()

    async def delete_by_id(self, id: int) -> None:
        """Delete entity by ID."""
        entity = await self.find_by_id(id)
        if entity is None:
            logger.debug(f"{self.model_name} id={id} not found, nothing to delete")
            return
        with storage_errors("delete_by_id", self.model_name):
            await self.session.delete(entity)
            await self.session.flush()

    async def delete(self, entity: T) -> None:
        """Delete entity; an entity that was never saved (id unset) is ignored."""
        if entity.id is None:
            logger.debug(f"Ignoring delete of unsaved {self.model_name}")
            return
        await self.delete_by_id(entity.id)

    async def delete_all_by_id(self, ids: Iterable[int]) -> None:
        """Delete every entity whose ID is in ids."""
        for id in ids:
            await self.delete_by_id(id)

    async def delete_all(self, entities: Optional[Iterable[T]] = None) -> None:
        """Delete the given entities, or every entity when none are given."""
        if entities is None:
            entities = await self.find_all()
        for entity in list(entities):
            await self.delete(entity)

    async def flush(self) -> None:
        """Flush pending changes to the store."""
        with storage_errors("flush", self.model_name):
            await self.session.flush()

    def _require_id(self, id: Optional[int]) -> None:
        if id is None:
            raise InvalidArgument(f"{self.model_name} id must not be None")

    def _apply_sort(self, statement, sort: Sort):
        columns = self.model.__table__.columns
        for order in sort.orders:
            if order.field not in columns:
                raise InvalidArgument(
                    f"Cannot sort {self.model_name} by unknown property",
                    {"property": order.field},
                )
            column = col(getattr(self.model, order.field))
            statement = statement.order_by(column.desc() if order.is_descending else column.asc())
        return statement
