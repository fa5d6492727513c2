"""
Aim preview - analytic one-shot trace of a shot with side-wall bounces.

The trace is a pure query over the grid. It uses the same wall and cell
geometry as ProjectileSimulator so the preview matches the real shot.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .grid import Cell, HexGrid

Point = Tuple[float, float]


@dataclass
class PathSegment:
    """One straight leg of the predicted path."""
    x1: float
    y1: float
    x2: float
    y2: float

    def to_dict(self) -> Dict[str, float]:
        return {"x1": self.x1, "y1": self.y1, "x2": self.x2, "y2": self.y2}


@dataclass
class TrajectoryResult:
    """
    Predicted path of a shot.

    hit is True when the path ends on an occupied cell; point is then the
    contact point and cell the cell that was touched. Without a hit, point
    is where the path stopped (ceiling or bounce limit) and cell is None.
    """
    segments: List[PathSegment] = field(default_factory=list)
    hit: bool = False
    point: Optional[Point] = None
    cell: Optional[Cell] = None
    bounces: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segments": [s.to_dict() for s in self.segments],
            "hit": self.hit,
            "point": list(self.point) if self.point else None,
            "cell": list(self.cell) if self.cell else None,
            "bounces": self.bounces,
        }


def segment_intersects_circle(
    sx: float, sy: float, ex: float, ey: float,
    cx: float, cy: float, radius: float,
) -> bool:
    """True if the closest point of segment (s, e) to (cx, cy) is within radius."""
    dx = ex - sx
    dy = ey - sy
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(cx - sx, cy - sy) <= radius
    t = ((cx - sx) * dx + (cy - sy) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    px = sx + t * dx
    py = sy + t * dy
    return math.hypot(px - cx, py - cy) <= radius


def segment_circle_entry(
    sx: float, sy: float, ex: float, ey: float,
    cx: float, cy: float, radius: float,
) -> float:
    """
    Parameter t in [0, 1] where the segment first enters the circle.

    Assumes the segment touches the circle. Returns 0 when the segment
    starts inside it.
    """
    dx = ex - sx
    dy = ey - sy
    fx = sx - cx
    fy = sy - cy
    a = dx * dx + dy * dy
    c = fx * fx + fy * fy - radius * radius
    if c <= 0 or a == 0:
        return 0.0
    b = 2 * (fx * dx + fy * dy)
    disc = max(b * b - 4 * a * c, 0.0)
    t = (-b - math.sqrt(disc)) / (2 * a)
    return min(max(t, 0.0), 1.0)


def _first_collision(
    grid: HexGrid,
    start: Point,
    end: Point,
    hit_radius: float,
) -> Optional[Tuple[float, Cell]]:
    """Earliest occupied cell touched by the segment, as (t, cell)."""
    sx, sy = start
    ex, ey = end
    best: Optional[Tuple[float, Cell]] = None
    for row, col, _ in grid.occupied():
        cx, cy = grid.to_position(row, col)
        if not segment_intersects_circle(sx, sy, ex, ey, cx, cy, hit_radius):
            continue
        t = segment_circle_entry(sx, sy, ex, ey, cx, cy, hit_radius)
        if best is None or t < best[0]:
            best = (t, (row, col))
    return best


def predict_trajectory(
    origin: Point,
    angle: float,
    grid: HexGrid,
    play_width: float,
    projectile_radius: float,
    max_bounces: int = 5,
    epsilon: float = 0.5,
) -> TrajectoryResult:
    """
    Trace a shot from origin at angle until it touches a bubble or stops.

    Each leg runs to the next wall or ceiling event. Occupied cells are
    tested against the leg first; the earliest contact ends the trace.
    A ceiling event ends the trace without a hit, a wall event reflects
    the horizontal direction. Tracing stops after max_bounces reflections.

    Args:
        origin: Launch position (x, y)
        angle: Launch angle in radians (screen coordinates, -pi/2 is up)
        grid: Grid to trace against
        play_width: Width of the play area
        projectile_radius: Radius of the projectile
        max_bounces: Maximum wall reflections
        epsilon: Amount the hit radius is shrunk to avoid grazing hits

    Returns:
        TrajectoryResult with the path segments and outcome
    """
    r = projectile_radius
    hit_radius = grid.cell_radius + r - epsilon
    x, y = origin
    vx = math.cos(angle)
    vy = math.sin(angle)
    result = TrajectoryResult()

    while True:
        tx = math.inf
        if vx > 0:
            tx = (play_width - r - x) / vx
        elif vx < 0:
            tx = (r - x) / vx
        ty = math.inf
        if vy < 0:
            ty = (r - y) / vy
        t_event = min(tx, ty)
        if not math.isfinite(t_event):
            break
        t_event = max(t_event, 0.0)

        end_x = x + vx * t_event
        end_y = y + vy * t_event
        if tx < ty:
            # Land exactly on the wall line
            end_x = play_width - r if vx > 0 else r

        collision = _first_collision(grid, (x, y), (end_x, end_y), hit_radius)
        if collision is not None:
            t, cell = collision
            px = x + (end_x - x) * t
            py = y + (end_y - y) * t
            result.segments.append(PathSegment(x, y, px, py))
            result.hit = True
            result.point = (px, py)
            result.cell = cell
            return result

        result.segments.append(PathSegment(x, y, end_x, end_y))
        result.point = (end_x, end_y)
        if ty <= tx:
            return result
        if result.bounces >= max_bounces:
            break

        x, y = end_x, end_y
        vx = -vx
        result.bounces += 1

    return result
