"""Copy Reconciliation — recomputes available_copies when total_copies changes.

Invariants:
    - Input snapshot is read from the store, never taken from the request
    - Growing the total adds every new copy to the available pool
    - Shrinking the total keeps available within [0, new_total - borrowed]
    - Unchanged total leaves available untouched
    - Result is never negative

Design Decisions:
    - Shrinking below the borrowed count is allowed and clamps to 0 available.
      The result is flagged `overdrawn` so the shell can log it; rejecting such
      updates is a product decision that has not been made.
"""

from dataclasses import dataclass

from library_api.core.domain_types import CopyCounts


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of reconciling a book's copy counts against a new total."""
    old_total: int
    old_available: int
    new_total: int
    new_available: int

    @property
    def copy_difference(self) -> int:
        return self.new_total - self.old_total

    @property
    def borrowed(self) -> int:
        return self.old_total - self.old_available

    @property
    def overdrawn(self) -> bool:
        """True when the new total cannot cover the copies already on loan."""
        return self.new_total < self.borrowed

    def counts_after(self) -> CopyCounts:
        return CopyCounts(total=self.new_total, available=self.new_available)


def reconcile_available_copies(current: CopyCounts, new_total: int) -> Reconciliation:
    """Compute the available-copy count that goes with new_total."""
    diff = new_total - current.total
    if diff > 0:
        new_available = current.available + diff
    elif diff < 0:
        upper = new_total - current.borrowed
        new_available = max(0, min(current.available, upper))
    else:
        new_available = current.available
    return Reconciliation(
        old_total=current.total,
        old_available=current.available,
        new_total=new_total,
        new_available=new_available,
    )
