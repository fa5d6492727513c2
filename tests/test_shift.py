"""
Tests for the animated row shift.
"""

import pytest

from bubblepop.games.bubble_shooter.grid import BubbleColor, HexGrid
from bubblepop.games.bubble_shooter.shift import (
    RowShiftAnimator,
    ShiftDirection,
    ShiftState,
    ease_out_quad,
)


@pytest.fixture
def grid():
    grid = HexGrid(10, 8)
    grid.set(0, 0, BubbleColor.RED)
    return grid


@pytest.fixture
def animator(clock):
    return RowShiftAnimator(clock, row_spacing=15.0, default_duration_ms=300)


def test_ease_out_quad_endpoints():
    assert ease_out_quad(0.0) == 0.0
    assert ease_out_quad(1.0) == 1.0
    assert ease_out_quad(0.5) == 0.75


class TestRowShiftAnimator:
    """Tests for the IDLE -> SHIFTING -> IDLE cycle."""

    def test_starts_idle(self, animator):
        assert animator.state is ShiftState.IDLE
        assert not animator.locked
        assert animator.offset() == 0.0

    def test_start_locks(self, animator):
        assert animator.start(ShiftDirection.DOWN)
        assert animator.locked

    def test_second_start_ignored(self, animator, clock):
        animator.start(ShiftDirection.DOWN)
        clock.advance(50)

        assert not animator.start(ShiftDirection.UP)
        assert animator.direction is ShiftDirection.DOWN
        assert animator.start_time == 0

    def test_invalid_direction(self, animator):
        with pytest.raises(ValueError):
            animator.start(3)

    def test_offset_follows_easing(self, animator, clock):
        animator.start(ShiftDirection.DOWN)
        clock.advance(100)

        assert animator.offset() == pytest.approx(-(5 / 9) * 15.0)

    def test_offset_sign_follows_direction(self, animator, clock):
        animator.start(ShiftDirection.UP)
        clock.advance(150)

        assert animator.offset() == pytest.approx(0.75 * 15.0)

    def test_grid_untouched_until_duration(self, animator, clock, grid):
        animator.start(ShiftDirection.DOWN)
        clock.advance(299)

        assert not animator.update(grid)
        assert grid.cell_at(0, 0) == BubbleColor.RED

    def test_commit_once_then_unlock(self, animator, clock, grid):
        animator.start(ShiftDirection.DOWN)
        clock.advance(300)

        # Commit frame: data moves exactly once, lock still held
        assert animator.update(grid)
        assert grid.cell_at(1, 0) == BubbleColor.RED
        assert grid.is_empty(0, 0)
        assert animator.locked
        assert animator.offset() == 0.0

        # Grace frame releases the lock without shifting again
        clock.advance(16)
        assert not animator.update(grid)
        assert not animator.locked
        assert grid.cell_at(1, 0) == BubbleColor.RED
        assert grid.count_occupied() == 1

    def test_late_update_still_commits_once(self, animator, clock, grid):
        """A long stall between frames does not shift twice."""
        animator.start(ShiftDirection.DOWN)
        clock.advance(5000)

        assert animator.update(grid)
        assert not animator.update(grid)
        assert not animator.update(grid)
        assert grid.cell_at(1, 0) == BubbleColor.RED

    def test_custom_duration(self, animator, clock, grid):
        animator.start(ShiftDirection.UP, duration_ms=50)
        grid.set(1, 0, BubbleColor.BLUE)
        clock.advance(50)

        assert animator.update(grid)
        assert grid.cell_at(0, 0) == BubbleColor.BLUE

    def test_reset_drops_shift(self, animator, grid):
        animator.start(ShiftDirection.DOWN)
        animator.reset()

        assert not animator.locked
        assert not animator.update(grid)
        assert grid.cell_at(0, 0) == BubbleColor.RED

    def test_update_when_idle(self, animator, grid):
        assert not animator.update(grid)
