"""Stored Procedure Gateway — invokes the store's circulation procedures.

Invariants:
    - Arguments are always bound positionally, never interpolated
    - The first result set is returned verbatim as a list of row dicts
    - A successful call is committed; any failure rolls back and surfaces as
      StoreFailureError with the procedure's public message

Design Decisions:
    - The procedures are opaque: their transaction logic lives in the store
    - MySQL procedures are reached with CALL; other dialects (PostgreSQL) expose
      them as set-returning functions reached with SELECT * FROM name(...)
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from library_api.core.domain_types import LoanId
from library_api.infrastructure.database import translate_store_errors

logger = logging.getLogger(__name__)

ISSUE_BOOK_FAILURE = "Error issuing book"
RETURN_BOOK_FAILURE = "Error returning book"
REGISTER_MEMBER_FAILURE = "Error registering member"


def build_procedure_call(dialect_name: str, procedure: str, params: list[str]) -> str:
    """Render the statement that invokes `procedure` with bound `params`."""
    placeholders = ", ".join(f":{p}" for p in params)
    if dialect_name in ("mysql", "mariadb"):
        return f"CALL {procedure}({placeholders})"
    return f"SELECT * FROM {procedure}({placeholders})"


class SqlProcedureGateway:
    """Implements core.repository_protocols.CirculationProcedures on SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def _call(
        self, procedure: str, args: dict[str, Any], public_message: str,
    ) -> list[dict[str, Any]]:
        dialect = self._db.get_bind().dialect.name
        statement = build_procedure_call(dialect, procedure, list(args))
        logger.debug(f"Calling {procedure} on {dialect}")
        async with translate_store_errors(self._db, procedure, public_message):
            result = await self._db.execute(text(statement), args)
            rows = (
                [dict(row) for row in result.mappings().all()]
                if result.returns_rows else []
            )
            await self._db.commit()
        return rows

    async def issue_book(
        self, member_id: int | None, book_id: int | None, due_days: int | None,
    ) -> list[dict[str, Any]]:
        return await self._call(
            "issue_book",
            {"member_id": member_id, "book_id": book_id, "due_days": due_days},
            ISSUE_BOOK_FAILURE,
        )

    async def return_book(self, loan_id: LoanId | None) -> list[dict[str, Any]]:
        return await self._call(
            "return_book", {"loan_id": loan_id}, RETURN_BOOK_FAILURE,
        )

    async def register_member(
        self,
        name: str | None,
        email: str | None,
        phone: str | None,
        address: str | None,
    ) -> list[dict[str, Any]]:
        return await self._call(
            "register_member",
            {"name": name, "email": email, "phone": phone, "address": address},
            REGISTER_MEMBER_FAILURE,
        )
