"""Member table — registered library members.

Members are normally created by the register_member stored procedure.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from library_api.db.base import Base


class Member(Base):
    __tablename__ = "members"

    member_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
