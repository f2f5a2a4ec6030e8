"""Integration tests for engine, sessions and logging setup."""

from decimal import Decimal

import pytest
from loguru import logger
from sqlalchemy import func, inspect, select

from refnet.database import (
    create_engine,
    create_session_maker,
    init_models,
    session_scope,
)
from refnet.logging_config import setup_logging
from refnet.models import User


@pytest.fixture
def database_url(tmp_path):
    """File-backed SQLite URL shared by every connection."""
    return f"sqlite+aiosqlite:///{tmp_path / 'refnet.db'}"


class TestDatabase:
    """Tests for refnet.database helpers."""

    @pytest.mark.asyncio
    async def test_init_models_creates_schema(self, database_url):
        """All tables and indexes exist after init; init is repeatable."""
        engine = create_engine(database_url, echo=False)
        try:
            await init_models(engine)
            await init_models(engine)

            async with engine.connect() as conn:
                tables, user_indexes = await conn.run_sync(
                    lambda sync_conn: (
                        set(inspect(sync_conn).get_table_names()),
                        {
                            ix["name"]
                            for ix in inspect(sync_conn).get_indexes("users")
                        },
                    )
                )
        finally:
            await engine.dispose()

        assert tables == {
            "users",
            "deposits",
            "referral_rewards",
            "team_bonuses",
        }
        assert "ix_users_referral_code" in user_indexes
        assert "ix_users_referrer_id" in user_indexes

    @pytest.mark.asyncio
    async def test_session_scope_rolls_back(self, database_url):
        """Uncommitted work is discarded when the block raises."""
        engine = create_engine(database_url, echo=False)
        try:
            await init_models(engine)
            session_maker = create_session_maker(engine)

            with pytest.raises(RuntimeError):
                async with session_scope(session_maker) as session:
                    session.add(
                        User(
                            username="ghost",
                            referral_code="GHOST001",
                            balance=Decimal("0"),
                        )
                    )
                    await session.flush()
                    raise RuntimeError("abort")

            async with session_scope(session_maker) as session:
                result = await session.execute(
                    select(func.count()).select_from(User)
                )
                assert result.scalar_one() == 0
        finally:
            await engine.dispose()

    @pytest.mark.asyncio
    async def test_objects_survive_commit(self, database_url):
        """Sessions keep attributes loaded after commit."""
        engine = create_engine(database_url, echo=False)
        try:
            await init_models(engine)
            session_maker = create_session_maker(engine)

            async with session_scope(session_maker) as session:
                user = User(
                    username="alice",
                    referral_code="ALICE001",
                    balance=Decimal("0"),
                )
                session.add(user)
                await session.commit()

                assert user.username == "alice"
                assert user.id is not None
        finally:
            await engine.dispose()


class TestLogging:
    """Tests for setup_logging."""

    def test_file_sink_receives_messages(self, tmp_path):
        """Messages at or above the level reach the log file."""
        log_file = tmp_path / "refnet.log"
        setup_logging(log_file=str(log_file), level="INFO")
        try:
            logger.debug("hidden message")
            logger.info("Deposit processed")
        finally:
            logger.remove()

        content = log_file.read_text(encoding="utf-8")
        assert "Deposit processed" in content
        assert "hidden message" not in content
