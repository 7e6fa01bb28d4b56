"""Loan table — one row per issued copy.

Invariants:
    - Rows are written by the issue_book / return_book stored procedures only
    - return_date is NULL while the copy is out
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from library_api.db.base import Base


class Loan(Base):
    __tablename__ = "loans"

    loan_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.member_id"), nullable=False,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.book_id"), nullable=False,
    )
    issue_date: Mapped[date] = mapped_column(Date, nullable=False, default=date.today)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    return_date: Mapped[date | None] = mapped_column(Date, nullable=True)
