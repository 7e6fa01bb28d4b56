"""Reservation table — a member's hold on a book.

Invariants:
    - status holds a ReservationStatus value, "Active" by default
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.core.domain_types import ReservationStatus
from library_api.db.base import Base


class Reservation(Base):
    __tablename__ = "reservations"

    reservation_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    member_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("members.member_id"), nullable=False,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.book_id"), nullable=False,
    )
    reservation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReservationStatus.ACTIVE.value,
    )
