"""
Bubble Shooter game configuration.
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass
class BubbleShooterConfig:
    """Configuration for Bubble Shooter game."""

    # Grid dimensions
    rows: int = 10
    cols: int = 8
    filled_rows: int = 4  # Rows randomly filled on restart

    # Cell geometry (pixels)
    cell_size: float = 18.0   # Cell diameter
    row_overlap: float = 3.0  # Rows pack this much tighter than a diameter

    # Shooter
    projectile_speed: float = 8.0    # Pixels per tick
    min_vy: float = -0.02            # Shallowest allowed upward direction
    preview_bounces: int = 5         # Wall reflections shown in the aim preview
    collision_epsilon: float = 0.5   # Preview shrinks hit circles by this much

    # Animations (milliseconds)
    shift_duration_ms: float = 300.0
    fire_animation_ms: float = 180.0
    swap_animation_ms: float = 220.0

    # Scoring
    match_points: int = 10     # Per cell in a popped cluster
    floating_points: int = 5   # Per dropped floating cell
    min_match: int = 3         # Smallest cluster that pops

    @property
    def row_spacing(self) -> float:
        """Vertical distance between row centres."""
        return self.cell_size - self.row_overlap

    def get_scoring_config(self) -> Dict[str, int]:
        """Get scoring configuration dictionary."""
        return {
            "match": self.match_points,
            "floating": self.floating_points,
            "min_match": self.min_match,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "filled_rows": self.filled_rows,
            "cell_size": self.cell_size,
            "row_overlap": self.row_overlap,
            "projectile_speed": self.projectile_speed,
            "min_vy": self.min_vy,
            "preview_bounces": self.preview_bounces,
            "collision_epsilon": self.collision_epsilon,
            "shift_duration_ms": self.shift_duration_ms,
            "fire_animation_ms": self.fire_animation_ms,
            "swap_animation_ms": self.swap_animation_ms,
            "scoring": self.get_scoring_config(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BubbleShooterConfig":
        """Create config from dictionary."""
        scoring = data.get("scoring", {})
        return cls(
            rows=data.get("rows", 10),
            cols=data.get("cols", 8),
            filled_rows=data.get("filled_rows", 4),
            cell_size=data.get("cell_size", 18.0),
            row_overlap=data.get("row_overlap", 3.0),
            projectile_speed=data.get("projectile_speed", 8.0),
            min_vy=data.get("min_vy", -0.02),
            preview_bounces=data.get("preview_bounces", 5),
            collision_epsilon=data.get("collision_epsilon", 0.5),
            shift_duration_ms=data.get("shift_duration_ms", 300.0),
            fire_animation_ms=data.get("fire_animation_ms", 180.0),
            swap_animation_ms=data.get("swap_animation_ms", 220.0),
            match_points=scoring.get("match", 10),
            floating_points=scoring.get("floating", 5),
            min_match=scoring.get("min_match", 3),
        )
