"""Copy Reconciliation — pure tests for available-copy recomputation.

Tests cover:
    - growing the total adds the difference to available
    - shrinking respects both zero and the borrowed count
    - shrinking below borrowed clamps to zero and flags overdrawn
    - unchanged total leaves available alone
    - bounds hold over an exhaustive small grid
"""

import pytest

from library_api.core.domain_types import CopyCounts
from library_api.core.reconcile_copies import reconcile_available_copies


def test_grow_adds_new_copies_to_available():
    result = reconcile_available_copies(CopyCounts(total=5, available=2), 8)
    assert result.copy_difference == 3
    assert result.new_available == 5


def test_shrink_with_slack_caps_at_remaining():
    result = reconcile_available_copies(CopyCounts(total=10, available=7), 8)
    assert result.copy_difference == -2
    assert result.borrowed == 3
    assert result.new_available == 5
    assert not result.overdrawn


def test_shrink_removes_copies_from_the_shelf():
    result = reconcile_available_copies(CopyCounts(total=10, available=2), 9)
    assert result.new_available == 1


def test_shrink_below_borrowed_clamps_to_zero():
    result = reconcile_available_copies(CopyCounts(total=10, available=7), 2)
    assert result.new_available == 0
    assert result.overdrawn


def test_shrink_to_exactly_borrowed_is_not_overdrawn():
    result = reconcile_available_copies(CopyCounts(total=10, available=7), 3)
    assert result.new_available == 0
    assert not result.overdrawn


def test_unchanged_total_keeps_available():
    result = reconcile_available_copies(CopyCounts(total=4, available=1), 4)
    assert result.copy_difference == 0
    assert result.new_available == 1


def test_counts_after():
    result = reconcile_available_copies(CopyCounts(total=5, available=2), 8)
    assert result.counts_after() == CopyCounts(total=8, available=5)


@pytest.mark.parametrize("old_total", range(0, 7))
def test_bounds_hold_for_all_small_inputs(old_total):
    for old_available in range(0, old_total + 1):
        borrowed = old_total - old_available
        for new_total in range(0, 10):
            result = reconcile_available_copies(
                CopyCounts(total=old_total, available=old_available), new_total,
            )
            assert result.new_available >= 0
            if new_total >= borrowed:
                assert result.new_available <= new_total
                assert result.new_available + borrowed <= max(new_total, borrowed)
