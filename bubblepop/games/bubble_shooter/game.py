"""
Bubble Shooter Game Core - the game session implementing GameInterface.

The session is the single owner of every piece of mutable state: grid,
launcher, aim, row-shift animation, score and pause flag. Input handlers
call the public methods below; a frame loop calls update() and reads
get_state().
"""

import logging
import math
import random
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from ...core.game_interface import GameInterface, GameMetadata
from .config import BubbleShooterConfig
from .grid import PALETTE, BubbleColor, HexGrid
from .projectile import (
    HudAnimation,
    LandingResult,
    ProjectileSimulator,
    Shooter,
    clamp_launch_angle,
)
from .shift import RowShiftAnimator
from .trajectory import TrajectoryResult, predict_trajectory

logger = logging.getLogger(__name__)

LAYOUT_PADDING = 10       # Extra play width beyond the last column
LAYOUT_FOOTER = 110       # Space below the grid for the launcher
LAUNCHER_MARGIN = 30      # Launcher distance from the bottom edge


def _default_clock() -> float:
    """Monotonic time in milliseconds."""
    return time.perf_counter() * 1000.0


@dataclass
class AimState:
    """Current aim; active only while the pointer is engaged and not firing."""
    angle: float = -math.pi / 2
    active: bool = False


class BubbleShooterGame(GameInterface):
    """
    Bubble shooter on a staggered hex grid.

    Features:
    - Aim preview with wall bounces
    - Fixed-step projectile flight and snap-to-grid landing
    - Clusters of 3+ same-colored bubbles pop, unsupported bubbles drop
    - Animated whole-grid row shifts that lock firing until committed
    - Injectable clock and random source for reproducible runs
    """

    @classmethod
    def get_metadata(cls) -> GameMetadata:
        """Return metadata about Bubble Shooter game."""
        return GameMetadata(
            name="Bubble Shooter",
            id="bubble_shooter",
            description="Aim, bounce and pop clusters of three or more bubbles",
            version="1.0.0",
            min_players=1,
            max_players=1,
            supports_human=True,
        )

    def __init__(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        config: Optional[BubbleShooterConfig] = None,
        seed: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a game session.

        Args:
            rows: Grid rows (overrides config)
            cols: Grid columns (overrides config)
            config: Optional game configuration
            seed: Seed for the random source when rng is not given
            clock: Callable returning time in milliseconds
            rng: Random source for grid fill and next colors
        """
        config = config or BubbleShooterConfig()
        if rows is not None:
            config = replace(config, rows=rows)
        if cols is not None:
            config = replace(config, cols=cols)
        self.config = config

        self.rng = rng or random.Random(seed)
        self.clock = clock or _default_clock
        self.palette: Tuple[BubbleColor, ...] = PALETTE

        self.paused: bool = False
        self._paused_ms = 0.0
        self._pause_started: Optional[float] = None

        self.grid = HexGrid(config.rows, config.cols, config.cell_size, config.row_overlap)
        self.simulator = ProjectileSimulator(
            speed=config.projectile_speed,
            min_vy=config.min_vy,
            match_points=config.match_points,
            floating_points=config.floating_points,
            min_match=config.min_match,
        )
        self.animator = RowShiftAnimator(
            self.game_time, self.grid.row_spacing, config.shift_duration_ms
        )
        self.shooter = Shooter(
            x=0.0,
            y=0.0,
            radius=self.grid.cell_radius,
            main=self._random_color(),
            secondary=self._random_color(),
        )
        self.aim = AimState()

        self.score: int = 0
        self.frame_count: int = 0

        self.play_width = 0.0
        self.play_height = 0.0
        width, height = self.default_layout()
        self.resize(width, height)

        self.reset()

    # ------------------------------------------------------------------
    # Layout

    def default_layout(self) -> Tuple[float, float]:
        """Play area size that fits the whole grid plus the launcher."""
        width = self.grid.cols * self.grid.cell_size + LAYOUT_PADDING
        height = self.grid.rows * self.grid.row_spacing + LAYOUT_FOOTER
        return (width, height)

    def resize(self, width: float, height: float) -> None:
        """Set the play area size; the launcher stays bottom-centre."""
        self.play_width = float(width)
        self.play_height = float(height)
        self.shooter.x = self.play_width / 2
        self.shooter.y = self.play_height - LAUNCHER_MARGIN

    # ------------------------------------------------------------------
    # Session controls

    def reset(self) -> Dict[str, Any]:
        """Replace the grid and discard every in-flight state."""
        self.grid.fill_random(self.rng, self.palette, self.config.filled_rows)
        self.score = 0
        self.frame_count = 0

        self.shooter.projectile = None
        self.shooter.moving = False
        self.shooter.hud_animation = None
        self.shooter.main = self._random_color()
        self.shooter.secondary = self._random_color()

        self.animator.reset()
        self.aim = AimState()

        logger.info(
            "New game: %dx%d grid, %d bubbles",
            self.grid.rows, self.grid.cols, self.grid.count_occupied(),
        )
        return self.get_state()

    def restart(self) -> Dict[str, Any]:
        return self.reset()

    def toggle_pause(self) -> bool:
        """
        Flip the pause flag. Returns the new value.

        Game time stands still while paused, so a row shift or launcher
        animation resumes exactly where it stopped.
        """
        if self.paused:
            self._paused_ms += self.clock() - self._pause_started
            self._pause_started = None
        else:
            self._pause_started = self.clock()
        self.paused = not self.paused
        logger.debug("Paused" if self.paused else "Resumed")
        return self.paused

    def game_time(self) -> float:
        """Clock time in milliseconds with paused spans removed."""
        now = self._pause_started if self.paused else self.clock()
        return now - self._paused_ms

    @property
    def locked(self) -> bool:
        """True while a row shift holds firing and physics."""
        return self.animator.locked

    # ------------------------------------------------------------------
    # Input events

    def update_aim(self, angle: float) -> bool:
        """
        Point the launcher.

        Downward or horizontal angles switch the preview off; shallow upward
        angles are clamped the same way a fired shot would be.

        Returns:
            True if the aim is now active
        """
        if self.shooter.moving:
            return False
        if math.sin(angle) >= 0:
            self.aim.active = False
            return False
        self.aim.angle = clamp_launch_angle(angle, self.config.min_vy)
        self.aim.active = True
        return True

    def aim_at(self, x: float, y: float) -> bool:
        """Aim toward a point in play-area coordinates."""
        return self.update_aim(math.atan2(y - self.shooter.y, x - self.shooter.x))

    def attempt_fire(self, angle: Optional[float] = None) -> bool:
        """
        Fire the loaded bubble.

        Args:
            angle: Launch angle; defaults to the current aim

        Returns:
            True if a shot was fired. Rejected silently while paused, while
            a shot is in flight, while a row shift is running, or when
            aiming downward.
        """
        if angle is None:
            angle = self.aim.angle
        if self.paused:
            logger.debug("Fire rejected: paused")
            return False
        if self.shooter.moving or self.animator.locked:
            logger.debug("Fire rejected: moving=%s locked=%s",
                         self.shooter.moving, self.animator.locked)
            return False
        if math.sin(angle) >= 0:
            logger.debug("Fire rejected: aim %.3f rad is not upward", angle)
            return False

        self.simulator.launch(self.shooter, angle, self._random_color())
        self.shooter.hud_animation = HudAnimation(
            "fire", self.game_time(), self.config.fire_animation_ms
        )
        self.aim.active = False
        return True

    def swap_loaded(self) -> bool:
        """Exchange the loaded and on-deck colors."""
        if self.shooter.moving:
            return False
        self.shooter.main, self.shooter.secondary = self.shooter.secondary, self.shooter.main
        self.shooter.hud_animation = HudAnimation(
            "swap", self.game_time(), self.config.swap_animation_ms
        )
        return True

    def start_shift(self, direction: int, duration_ms: Optional[float] = None) -> bool:
        """Start a row shift. Ignored while one is already running."""
        return self.animator.start(direction, duration_ms)

    # ------------------------------------------------------------------
    # Frame loop

    def update(self) -> List[LandingResult]:
        """
        Run one frame: row-shift animation, then physics unless locked.

        Returns:
            Landing results produced this frame; they are not kept
            after the call returns
        """
        if self.paused:
            return []

        self.frame_count += 1
        self._expire_hud_animation()

        self.animator.update(self.grid)

        events: List[LandingResult] = []
        if not self.animator.locked:
            result = self.simulator.step(
                self.shooter, self.grid, self.play_width, self.play_height
            )
            if result is not None:
                self.score += result.points
                events.append(result)

        return events

    # ------------------------------------------------------------------
    # Queries

    def current_trajectory(self) -> Optional[TrajectoryResult]:
        """Aim preview for the current aim, or None when not aiming."""
        if self.shooter.moving or not self.aim.active:
            return None
        return predict_trajectory(
            (self.shooter.x, self.shooter.y),
            self.aim.angle,
            self.grid,
            self.play_width,
            self.shooter.radius,
            max_bounces=self.config.preview_bounces,
            epsilon=self.config.collision_epsilon,
        )

    def hud_scales(self) -> Tuple[float, float]:
        """Draw scale of the (loaded, on-deck) launcher bubbles."""
        anim = self.shooter.hud_animation
        if anim is None:
            return (1.0, 1.0)
        return anim.scales(self.game_time())

    def get_score(self) -> int:
        """Get current score."""
        return self.score

    def get_state(self) -> Dict[str, Any]:
        """Get current game state for rendering."""
        trajectory = self.current_trajectory()
        projectile = self.shooter.projectile
        main_scale, secondary_scale = self.hud_scales()

        return {
            "grid": self.grid.snapshot(),
            "rows": self.grid.rows,
            "cols": self.grid.cols,
            "cell_size": self.grid.cell_size,
            "row_spacing": self.grid.row_spacing,
            "cell_radius": self.grid.cell_radius,
            "width": self.play_width,
            "height": self.play_height,
            "shooter": self.shooter.to_dict(),
            "hud": {
                **{k: list(v) for k, v in self.shooter.hud_positions().items()},
                "main_scale": main_scale,
                "secondary_scale": secondary_scale,
            },
            "projectile": projectile.to_dict() if projectile else None,
            "aim": {"angle": self.aim.angle, "active": self.aim.active},
            "trajectory": trajectory.to_dict() if trajectory else None,
            "offset": self.animator.offset(),
            "score": self.score,
            "locked": self.animator.locked,
            "paused": self.paused,
            "frame": self.frame_count,
        }

    # ------------------------------------------------------------------

    def _random_color(self) -> BubbleColor:
        return self.rng.choice(self.palette)

    def _expire_hud_animation(self) -> None:
        anim = self.shooter.hud_animation
        if anim is not None and anim.progress(self.game_time()) >= 1.0:
            self.shooter.hud_animation = None
