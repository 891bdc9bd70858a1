"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
"""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import clarityflow.infrastructure.database as db_module
from clarityflow.db.base import Base
from clarityflow.infrastructure.card_repository import SqlCardRepository
from clarityflow.infrastructure.database import DatabaseSessionManager, get_db
from clarityflow.main import app
from clarityflow.models.card import Card
from clarityflow.services.card_service import CardService


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def repository(test_db):
    return SqlCardRepository(test_db)


@pytest.fixture
def service(repository):
    return CardService(repository)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seed_card(test_db):
    """Insert a card directly, bypassing every rule. Returns an async factory."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    async def _seed(**fields) -> Card:
        counter["n"] += 1
        created = fields.pop("created_at", base + timedelta(minutes=counter["n"]))
        card = Card(
            title=fields.pop("title", f"Card {counter['n']}"),
            problem=fields.pop("problem", ""),
            success_criteria=fields.pop("success_criteria", ""),
            status=fields.pop("status", "NEEDS_CLARIFICATION"),
            version=fields.pop("version", 0),
            created_at=created,
            updated_at=fields.pop("updated_at", created),
            **fields,
        )
        test_db.add(card)
        await test_db.commit()
        await test_db.refresh(card)
        return card

    return _seed
