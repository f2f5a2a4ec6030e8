"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from pathlib import Path

# Minimal environment for tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from refnet.database import init_models
from refnet.models import User


class FakeClock:
    """Controllable clock for deposit processing."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Clock starting at a fixed UTC moment."""
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=UTC))


@pytest_asyncio.fixture
async def engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    """Database session bound to the in-memory engine."""
    session_maker = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_user(session):
    """Factory creating committed users."""
    counter = {"n": 0}

    async def _make_user(
        username: str | None = None,
        referrer: User | None = None,
        vip_level: int = 0,
        balance: Decimal = Decimal("0"),
    ) -> User:
        counter["n"] += 1
        user = User(
            username=username or f"user{counter['n']}",
            referral_code=f"CODE{counter['n']:04d}",
            referrer_id=referrer.id if referrer else None,
            vip_level=vip_level,
            balance=balance,
        )
        session.add(user)
        await session.commit()
        return user

    return _make_user


class DbInspector:
    """Reads current values straight from the database."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def balance_of(self, user_id: int) -> Decimal:
        result = await self.session.execute(
            select(User.balance).where(User.id == user_id)
        )
        return Decimal(str(result.scalar_one()))

    async def vip_level_of(self, user_id: int) -> int:
        result = await self.session.execute(
            select(User.vip_level).where(User.id == user_id)
        )
        return result.scalar_one()

    async def count(self, model, **filters) -> int:
        stmt = select(func.count()).select_from(model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return result.scalar_one()


@pytest.fixture
def db(session):
    """Database inspector for assertions."""
    return DbInspector(session)


@pytest.fixture
def mock_ledger():
    """Mock LedgerStore."""
    ledger = AsyncMock()
    ledger.get_user = AsyncMock(return_value=None)
    ledger.sum_direct_team_deposits = AsyncMock(return_value=Decimal("0"))
    ledger.bonus_already_granted = AsyncMock(return_value=False)
    return ledger
