"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - BookId, MemberId, LoanId, ReservationId, FineId wrap integer primary keys
    - CopyCounts always satisfies 0 <= available <= total when read from the store
    - Reservation status values are encoded as an Enum, never matched as raw strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum for ReservationStatus: the value is what the store column holds
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

BookId = NewType("BookId", int)
MemberId = NewType("MemberId", int)
LoanId = NewType("LoanId", int)
ReservationId = NewType("ReservationId", int)
FineId = NewType("FineId", int)


# ─── Enums ───────────────────────────────────────────────────────

class ReservationStatus(str, Enum):
    """Reservation states. Any value may follow any other (no transition edges)."""
    ACTIVE = "Active"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value: object) -> "ReservationStatus | None":
        """Return the matching member, or None if value is not a valid status."""
        try:
            return cls(value)
        except ValueError:
            return None


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CopyCounts:
    """Snapshot of a book's (total_copies, available_copies) pair."""
    total: int
    available: int

    @property
    def borrowed(self) -> int:
        return self.total - self.available
