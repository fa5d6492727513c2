"""
Row shift - animated one-row translation of the whole grid.

The shift runs in two phases. While SHIFTING, only a visual offset is
produced and the lock is held, so firing and physics stay paused. Once the
duration has elapsed the grid data is shifted exactly once, and the lock
is released on the following update. Time comes from an injected clock so
the whole sequence can be driven deterministically.
"""

import logging
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from .grid import HexGrid

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ShiftDirection(IntEnum):
    """Which way the grid contents move."""
    UP = -1    # Contents move toward row 0
    DOWN = 1   # Contents move away from row 0


class ShiftState(Enum):
    IDLE = "idle"
    SHIFTING = "shifting"


def ease_out_quad(t: float) -> float:
    return 1 - (1 - t) * (1 - t)


class RowShiftAnimator:
    """
    Two-state machine (IDLE, SHIFTING) driving a grid row shift.

    Only one shift can be in flight; a shift always runs to completion.
    """

    def __init__(
        self,
        clock: Clock,
        row_spacing: float,
        default_duration_ms: float = 300.0,
    ):
        """
        Initialize the animator.

        Args:
            clock: Callable returning the current time in milliseconds
            row_spacing: Vertical distance of one row, in pixels
            default_duration_ms: Duration used when start() is given none
        """
        self.clock = clock
        self.row_spacing = row_spacing
        self.default_duration_ms = default_duration_ms
        self.reset()

    def reset(self) -> None:
        """Drop any in-flight shift without touching the grid."""
        self.state = ShiftState.IDLE
        self.direction: Optional[ShiftDirection] = None
        self.start_time = 0.0
        self.duration = self.default_duration_ms
        self.committed = False

    @property
    def active(self) -> bool:
        return self.state is ShiftState.SHIFTING

    @property
    def locked(self) -> bool:
        """True while firing and physics must stay paused."""
        return self.active

    def start(self, direction: int, duration_ms: Optional[float] = None) -> bool:
        """
        Begin a shift.

        Args:
            direction: ShiftDirection (or -1 / 1)
            duration_ms: Animation length; defaults to default_duration_ms

        Returns:
            True if started, False if a shift is already in flight
        """
        if self.active:
            logger.debug("Ignoring shift request: shift already in progress")
            return False

        self.direction = ShiftDirection(direction)
        self.duration = self.default_duration_ms if duration_ms is None else duration_ms
        self.start_time = self.clock()
        self.committed = False
        self.state = ShiftState.SHIFTING
        logger.debug("Shift %s started (%.0f ms)", self.direction.name, self.duration)
        return True

    def progress(self, now: Optional[float] = None) -> float:
        if not self.active:
            return 0.0
        if now is None:
            now = self.clock()
        return min(1.0, (now - self.start_time) / max(1.0, self.duration))

    def offset(self, now: Optional[float] = None) -> float:
        """Vertical draw offset for the grid; never stored in the grid."""
        if not self.active or self.committed or self.direction is None:
            return 0.0
        eased = ease_out_quad(self.progress(now))
        return -int(self.direction) * eased * self.row_spacing

    def update(self, grid: "HexGrid") -> bool:
        """
        Advance the state machine by one frame.

        Returns:
            True on the frame where the grid data was shifted
        """
        if not self.active:
            return False

        if self.committed:
            # Grace frame after the commit: hand control back
            self.reset()
            return False

        if self.clock() - self.start_time >= self.duration:
            grid.shift_rows(int(self.direction))
            self.committed = True
            logger.debug("Shift %s committed", self.direction.name)
            return True

        return False
