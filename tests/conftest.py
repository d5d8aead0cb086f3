"""Test config and shared fixtures."""
import pytest
from decimal import Decimal
from typing import AsyncGenerator
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import apps.models  # noqa: F401  (registers tables in SQLModel.metadata)
from apps.orders.models import OrderItem
from apps.orders.repository import OrderItemRepository
from apps.users.models import User
from apps.users.repository import UserRepository


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory engine with the schema created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine):
    """Session factory bound to the test engine (for cross-session checks)."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def async_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create async test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def user_repo(async_session: AsyncSession) -> UserRepository:
    return UserRepository(async_session)


@pytest.fixture
def order_item_repo(async_session: AsyncSession) -> OrderItemRepository:
    return OrderItemRepository(async_session)


@pytest.fixture
async def sample_users(user_repo: UserRepository) -> list:
    """Create five users, saved in name order."""
    users = []
    for name in ["Ana", "Bruno", "Carla", "Diego", "Elisa"]:
        users.append(await user_repo.save(User(name=name, email=f"{name.lower()}@example.com")))
    return users


@pytest.fixture
async def sample_order_items(order_item_repo: OrderItemRepository) -> list:
    """Create three order items."""
    return await order_item_repo.save_all([
        OrderItem(quantity=2, price=Decimal("10.00")),
        OrderItem(quantity=1, price=Decimal("99.50")),
        OrderItem(quantity=5, price=Decimal("1.25")),
    ])
