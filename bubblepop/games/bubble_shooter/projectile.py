"""
Projectile flight - per-tick kinematics, wall reflection, landing and snap.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Set, Tuple

from .connectivity import floating_cells, match_cluster, remove_cells
from .grid import BubbleColor, Cell, HexGrid
from .shift import ease_out_quad

logger = logging.getLogger(__name__)

HUD_MAIN_ANGLE = -math.pi * 3 / 4   # Loaded bubble sits up-left of the launcher
HUD_SECONDARY_ANGLE = -math.pi / 4  # On-deck bubble sits up-right


@dataclass
class Projectile:
    """A bubble in flight."""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    color: BubbleColor
    alive: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "vx": self.vx,
            "vy": self.vy,
            "radius": self.radius,
            "color": int(self.color),
            "alive": self.alive,
        }


@dataclass
class HudAnimation:
    """Short pulse on the launcher bubbles after a fire or swap."""
    kind: str  # fire | swap
    start: float
    duration: float

    def progress(self, now: float) -> float:
        return min(1.0, max(0.0, (now - self.start) / max(1.0, self.duration)))

    def scales(self, now: float) -> Tuple[float, float]:
        """Draw scale of the (loaded, on-deck) bubbles at time now."""
        eased = ease_out_quad(self.progress(now))
        if self.kind == "swap":
            return (1 + 0.32 * eased, 1 - 0.12 * eased)
        return (1 + 0.12 * eased, 1.0)


@dataclass
class Shooter:
    """
    The launcher: position, loaded and on-deck colors, and the live shot.

    moving is True exactly while a live projectile exists.
    """
    x: float
    y: float
    radius: float
    main: BubbleColor
    secondary: BubbleColor
    projectile: Optional[Projectile] = None
    moving: bool = False
    hud_animation: Optional[HudAnimation] = None

    def hud_positions(self, orbit_radius: float = 48.0) -> Dict[str, Tuple[float, float]]:
        """Screen positions of the loaded and on-deck bubbles."""
        return {
            "main": (
                self.x + math.cos(HUD_MAIN_ANGLE) * orbit_radius,
                self.y + math.sin(HUD_MAIN_ANGLE) * orbit_radius,
            ),
            "secondary": (
                self.x + math.cos(HUD_SECONDARY_ANGLE) * orbit_radius,
                self.y + math.sin(HUD_SECONDARY_ANGLE) * orbit_radius,
            ),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "radius": self.radius,
            "main": int(self.main),
            "secondary": int(self.secondary),
            "moving": self.moving,
        }


@dataclass
class LandingResult:
    """Outcome of a projectile converting into a grid cell."""
    cell: Optional[Cell]
    color: BubbleColor
    placed: bool = False
    matched: Set[Cell] = field(default_factory=set)
    floating: Set[Cell] = field(default_factory=set)
    points: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cell": list(self.cell) if self.cell else None,
            "color": int(self.color),
            "placed": self.placed,
            "matched": sorted(list(c) for c in self.matched),
            "floating": sorted(list(c) for c in self.floating),
            "points": self.points,
        }


def clamp_launch_angle(angle: float, min_vy: float = -0.02) -> float:
    """
    Keep a launch direction pointing upward.

    If the vertical component is shallower than min_vy (or downward), it
    is pinned to min_vy while the horizontal component is kept.
    """
    vx = math.cos(angle)
    vy = math.sin(angle)
    if vy > min_vy:
        vy = min_vy
        return math.atan2(vy, vx)
    return angle


class ProjectileSimulator:
    """
    Fixed-step projectile physics.

    Motion is integrated one velocity step per tick, independent of wall
    time, so a given shot always plays out the same way.
    """

    def __init__(
        self,
        speed: float = 8.0,
        min_vy: float = -0.02,
        match_points: int = 10,
        floating_points: int = 5,
        min_match: int = 3,
    ):
        self.speed = speed
        self.min_vy = min_vy
        self.match_points = match_points
        self.floating_points = floating_points
        self.min_match = min_match

    def launch(self, shooter: Shooter, angle: float, next_color: BubbleColor) -> Projectile:
        """
        Fire the loaded bubble and rotate the on-deck one into place.

        Args:
            shooter: Launcher to fire from
            angle: Aim angle in radians (clamped upward)
            next_color: Color that becomes the new on-deck bubble

        Returns:
            The projectile now in flight
        """
        angle = clamp_launch_angle(angle, self.min_vy)
        projectile = Projectile(
            x=shooter.x,
            y=shooter.y,
            vx=math.cos(angle) * self.speed,
            vy=math.sin(angle) * self.speed,
            radius=shooter.radius,
            color=shooter.main,
        )
        shooter.projectile = projectile
        shooter.moving = True
        shooter.main = shooter.secondary
        shooter.secondary = next_color
        return projectile

    def step(
        self,
        shooter: Shooter,
        grid: HexGrid,
        play_width: float,
        play_height: Optional[float] = None,
    ) -> Optional[LandingResult]:
        """
        Advance the live projectile by one tick.

        Returns:
            LandingResult when the projectile landed or left the play area
            this tick, otherwise None
        """
        p = shooter.projectile
        if p is None or not p.alive:
            return None

        p.x += p.vx
        p.y += p.vy

        # Side walls
        if p.x - p.radius < 0:
            p.x = p.radius
            p.vx = -p.vx
        if p.x + p.radius > play_width:
            p.x = play_width - p.radius
            p.vx = -p.vx

        # Ceiling
        if p.y - p.radius <= 0:
            p.y = p.radius
            return self.land(shooter, grid)

        # Occupied cells
        contact = p.radius + grid.cell_radius
        for row, col, _ in grid.occupied():
            cx, cy = grid.to_position(row, col)
            if math.hypot(cx - p.x, cy - p.y) <= contact:
                return self.land(shooter, grid)

        if play_height is not None and p.y - p.radius > play_height:
            logger.debug("Projectile left the play area at (%.1f, %.1f)", p.x, p.y)
            result = LandingResult(cell=None, color=p.color)
            self._finish(shooter)
            return result

        return None

    def land(self, shooter: Shooter, grid: HexGrid) -> LandingResult:
        """
        Snap the live projectile onto the grid and resolve matches.

        The shot is discarded if the nearest cell is already occupied.
        The live projectile is cleared in every case.
        """
        p = shooter.projectile
        if p is None:
            raise RuntimeError("land() called without a live projectile")

        row, col = grid.nearest_cell(p.x, p.y)
        result = LandingResult(cell=(row, col), color=p.color)

        if grid.is_empty(row, col):
            grid.set(row, col, p.color)
            result.placed = True
            matched = match_cluster(grid, row, col, p.color)
            if len(matched) >= self.min_match:
                remove_cells(grid, matched)
                result.matched = matched
                result.points += len(matched) * self.match_points
                dropped = floating_cells(grid)
                remove_cells(grid, dropped)
                result.floating = dropped
                result.points += len(dropped) * self.floating_points
            logger.debug(
                "Landed %s at %s: matched=%d floating=%d points=%d",
                p.color.name, (row, col), len(result.matched),
                len(result.floating), result.points,
            )
        else:
            logger.debug("Discarded shot: nearest cell %s already occupied", (row, col))

        self._finish(shooter)
        return result

    @staticmethod
    def _finish(shooter: Shooter) -> None:
        if shooter.projectile is not None:
            shooter.projectile.alive = False
        shooter.projectile = None
        shooter.moving = False
