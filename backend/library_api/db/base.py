"""SQLAlchemy Declarative Base — shared base class for all table declarations.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for table metadata

Design Decisions:
    - Separate file for Base: avoids circular imports between models
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all library tables."""
    pass
