"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Two owners available: owner_id (the caller) and other_owner_id

Design Decisions:
    - SQLite in-memory: fast, no external dependency, supports RETURNING; foreign
      keys switched on so ON DELETE SET NULL runs as on Postgres
    - Rows seeded directly through test_db; assertions go through the API where possible
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from invoicing.db.base import Base
from invoicing.infrastructure.database import (
    DatabaseSessionManager, enable_sqlite_foreign_keys, get_db,
)
from invoicing.models.client import Client
from invoicing.models.invoice import Invoice
import invoicing.infrastructure.database as db_module
from invoicing.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    enable_sqlite_foreign_keys(engine)
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
def owner_id():
    return uuid4()


@pytest.fixture
def other_owner_id():
    return uuid4()


@pytest.fixture
def auth(owner_id):
    """Headers identifying the caller."""
    return {"X-User-Id": str(owner_id)}


@pytest.fixture
def make_invoice(test_db):
    """Insert an invoice; created_at increases with each call."""
    counter = {"n": 0}
    base_time = datetime(2024, 6, 1, tzinfo=timezone.utc)

    async def _make(
        owner, status="draft", issue_date="2024-01-15", amount="100.00",
        client_id=None, due_date=None,
    ) -> Invoice:
        counter["n"] += 1
        invoice = Invoice(
            owner_id=owner,
            client_id=client_id,
            invoice_number=f"INV-{counter['n']:04d}",
            status=status,
            issue_date=date.fromisoformat(issue_date),
            due_date=date.fromisoformat(due_date) if due_date else None,
            total_amount=Decimal(amount),
            created_at=base_time + timedelta(minutes=counter["n"]),
        )
        test_db.add(invoice)
        await test_db.commit()
        return invoice

    return _make


@pytest.fixture
def make_client(test_db):
    async def _make(owner, company_name="Acme Corp", status="active") -> Client:
        row = Client(owner_id=owner, company_name=company_name, status=status)
        test_db.add(row)
        await test_db.commit()
        return row

    return _make
