"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - All store IO is reached through these Protocol types
    - Implementations are provided by the shell via FastAPI dependencies

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass plain fakes
    - Async in Protocol: implementations do IO, the pure functions that sit
      between calls (reconciliation, parameter resolution) are never async
"""

from typing import Any, Protocol

from library_api.core.domain_types import BookId, CopyCounts, LoanId


class LibraryStore(Protocol):
    """Contract for table-level reads and writes: implemented by shell."""
    async def list_rows(self, table: str) -> list[dict[str, Any]]: ...
    async def list_loan_summary(self) -> list[dict[str, Any]]: ...
    async def insert_row(self, table: str, fields: dict[str, Any]) -> int: ...
    async def update_row(
        self, table: str, row_id: int, fields: dict[str, Any],
    ) -> int: ...
    async def lock_copy_counts(self, book_id: BookId) -> CopyCounts | None: ...
    async def write_book(
        self,
        book_id: BookId,
        fields: dict[str, Any],
        expected: CopyCounts,
        counts: CopyCounts,
    ) -> int: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...


class CirculationProcedures(Protocol):
    """Contract for the store's stored procedures: implemented by shell."""
    async def issue_book(
        self, member_id: int | None, book_id: int | None, due_days: int | None,
    ) -> list[dict[str, Any]]: ...
    async def return_book(self, loan_id: LoanId | None) -> list[dict[str, Any]]: ...
    async def register_member(
        self,
        name: str | None,
        email: str | None,
        phone: str | None,
        address: str | None,
    ) -> list[dict[str, Any]]: ...
