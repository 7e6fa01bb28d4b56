"""Library Repository — parameterized table reads and writes over an AsyncSession.

Invariants:
    - One SQL statement per method
    - insert_row/update_row commit themselves; the book read-modify-write
      (lock_copy_counts + write_book) leaves commit() to the caller
    - Rows are returned as plain dicts keyed by column name, in primary-key order
    - Unknown table names raise KeyError (programming error, not a store failure)
    - Every statement runs inside translate_store_errors()

Design Decisions:
    - SQLAlchemy Core against Table objects instead of ORM entities: the router
      relays field bags and raw rows, it never hydrates domain objects
    - write_book is a compare-and-swap on the copy counts read by
      lock_copy_counts, so a concurrent change makes it match zero rows
"""

from typing import Any

from sqlalchemy import Table, insert, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.domain_types import BookId, CopyCounts
from library_api.infrastructure.database import translate_store_errors
from library_api.models import TABLES, primary_key_of
from library_api.models.loan_summary import VIEW_NAME


_books = TABLES["books"]


class LibraryRepository:
    """Implements core.repository_protocols.LibraryStore on SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    @staticmethod
    def _table(name: str) -> Table:
        return TABLES[name]

    async def list_rows(self, table: str) -> list[dict[str, Any]]:
        t = self._table(table)
        async with translate_store_errors(self._db, f"list {table}"):
            result = await self._db.execute(
                select(t).order_by(primary_key_of(t)),
            )
            return [dict(row) for row in result.mappings().all()]

    async def list_loan_summary(self) -> list[dict[str, Any]]:
        async with translate_store_errors(self._db, f"list {VIEW_NAME}"):
            result = await self._db.execute(
                text(f"SELECT * FROM {VIEW_NAME} ORDER BY loan_id"),
            )
            return [dict(row) for row in result.mappings().all()]

    async def insert_row(self, table: str, fields: dict[str, Any]) -> int:
        """Insert one row and return its assigned primary key."""
        t = self._table(table)
        async with translate_store_errors(self._db, f"insert {table}"):
            result = await self._db.execute(insert(t).values(**fields))
            await self._db.commit()
            return result.inserted_primary_key[0]

    async def update_row(
        self, table: str, row_id: int, fields: dict[str, Any],
    ) -> int:
        """Update one row by primary key and return the affected-row count."""
        t = self._table(table)
        async with translate_store_errors(self._db, f"update {table}"):
            result = await self._db.execute(
                update(t).where(primary_key_of(t) == row_id).values(**fields),
            )
            await self._db.commit()
            return result.rowcount

    async def lock_copy_counts(self, book_id: BookId) -> CopyCounts | None:
        """Read (and row-lock, where supported) a book's copy counts."""
        async with translate_store_errors(self._db, "read book copies"):
            result = await self._db.execute(
                select(_books.c.total_copies, _books.c.available_copies)
                .where(_books.c.book_id == book_id)
                .with_for_update(),
            )
            row = result.one_or_none()
        if row is None:
            return None
        return CopyCounts(total=row.total_copies, available=row.available_copies)

    async def write_book(
        self,
        book_id: BookId,
        fields: dict[str, Any],
        expected: CopyCounts,
        counts: CopyCounts,
    ) -> int:
        """Write book fields and counts if the counts still equal `expected`."""
        async with translate_store_errors(self._db, "update books"):
            result = await self._db.execute(
                update(_books)
                .where(
                    _books.c.book_id == book_id,
                    _books.c.total_copies == expected.total,
                    _books.c.available_copies == expected.available,
                )
                .values(
                    **fields,
                    total_copies=counts.total,
                    available_copies=counts.available,
                ),
            )
            return result.rowcount

    async def commit(self) -> None:
        async with translate_store_errors(self._db, "commit"):
            await self._db.commit()

    async def rollback(self) -> None:
        await self._db.rollback()
