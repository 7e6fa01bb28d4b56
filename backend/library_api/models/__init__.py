"""Table Models — SQLAlchemy declarations for every table the router addresses.

Invariants:
    - All models inherit from Base (db/base.py)
    - TABLES maps the public resource name to its Table and primary key column

Design Decisions:
    - One file per table for locality
    - All models imported here so Base.metadata is complete (and the
      loan_summary view DDL registered) before create_all runs
"""

from sqlalchemy import Column, Table

from library_api.models.book import Book
from library_api.models.member import Member
from library_api.models.loan import Loan
from library_api.models.reservation import Reservation
from library_api.models.fine import Fine
from library_api.models import loan_summary  # noqa: F401

TABLES: dict[str, Table] = {
    "books": Book.__table__,
    "members": Member.__table__,
    "loans": Loan.__table__,
    "reservations": Reservation.__table__,
    "fines": Fine.__table__,
}


def primary_key_of(table: Table) -> Column:
    """Return the single-column primary key of a library table."""
    return list(table.primary_key.columns)[0]
