"""Route test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database (tables + loan_summary view)
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes see the test engine
    - fake_procedures replaces the stored-procedure gateway (SQLite has none)

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Seed helpers insert through Core so assertions can re-read fresh rows
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from httpx import ASGITransport, AsyncClient

import library_api.infrastructure.database as db_module
from library_api.api.dependencies import get_procedures
from library_api.db.base import Base
from library_api.infrastructure.database import DatabaseSessionManager, get_db
from library_api.main import app
from tests.api.db_helpers import insert_row


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


class FakeProcedures:
    """Stands in for SqlProcedureGateway; records calls, returns canned rows."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.results: dict[str, list[dict]] = {
            "issue_book": [{"message": "Book issued successfully"}],
            "return_book": [{"message": "Book returned"}],
            "register_member": [{"message": "Member registered"}],
        }

    async def issue_book(self, member_id, book_id, due_days):
        self.calls.append((
            "issue_book",
            {"member_id": member_id, "book_id": book_id, "due_days": due_days},
        ))
        return self.results["issue_book"]

    async def return_book(self, loan_id):
        self.calls.append(("return_book", {"loan_id": loan_id}))
        return self.results["return_book"]

    async def register_member(self, name, email, phone, address):
        self.calls.append((
            "register_member",
            {"name": name, "email": email, "phone": phone, "address": address},
        ))
        return self.results["register_member"]


@pytest.fixture
def fake_procedures():
    return FakeProcedures()


@pytest.fixture
async def client(test_engine, test_session_factory, fake_procedures):
    """FastAPI test client with DB and procedure dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_procedures] = lambda: fake_procedures

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
async def sql_procedures_client(client):
    """Client whose procedure calls reach the real gateway (and SQLite)."""
    app.dependency_overrides.pop(get_procedures, None)
    yield client


@pytest.fixture
async def seed_book(test_db):
    """A book with 10 copies, 3 of them on loan."""
    return await insert_row(
        test_db, "books",
        title="Dune", author="Frank Herbert", publisher="Chilton",
        year_published=1965, isbn="9780441013593",
        total_copies=10, available_copies=7,
    )


@pytest.fixture
async def seed_member(test_db):
    return await insert_row(
        test_db, "members",
        name="Ada Lovelace", email="ada@example.org",
        phone="555-0100", address="12 St James's Square",
    )


@pytest.fixture
async def seed_loan(test_db, seed_book, seed_member):
    return await insert_row(
        test_db, "loans",
        member_id=seed_member, book_id=seed_book,
        issue_date=date(2024, 3, 1), due_date=date(2024, 3, 1) + timedelta(days=14),
    )


@pytest.fixture
async def seed_reservation(test_db, seed_book, seed_member):
    return await insert_row(
        test_db, "reservations",
        member_id=seed_member, book_id=seed_book, status="Active",
    )


@pytest.fixture
async def seed_fine(test_db, seed_loan):
    return await insert_row(
        test_db, "fines", loan_id=seed_loan, amount=Decimal("2.50"), paid=False,
    )
