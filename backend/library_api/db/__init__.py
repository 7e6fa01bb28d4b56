"""Database Declarations — SQLAlchemy Base shared by every table.

Invariants:
    - Tables are declared against Base.metadata only
"""
