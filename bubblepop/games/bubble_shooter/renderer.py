"""
Bubble Shooter Renderer - Pygame-based visualization implementing RendererInterface.
"""

import pygame
from typing import Dict, Any, Tuple

from ...core.renderer_interface import RendererInterface
from .grid import BubbleColor, EMPTY


# Colors
BACKGROUND = (30, 41, 59)
EMPTY_CELL = (17, 24, 39)
EMPTY_DOT = (11, 18, 32)
OUTLINE = (15, 23, 42)
WHITE = (255, 255, 255)
PREVIEW_COLOR = (200, 200, 200)
GHOST_HIT = (120, 120, 130)
GHOST_MISS = (70, 70, 80)
TEXT_COLOR = (220, 220, 220)

BUBBLE_COLORS: Dict[int, Tuple[int, int, int]] = {
    BubbleColor.RED: (239, 68, 68),
    BubbleColor.ORANGE: (249, 115, 22),
    BubbleColor.AMBER: (245, 158, 11),
    BubbleColor.GREEN: (16, 185, 129),
    BubbleColor.BLUE: (59, 130, 246),
    BubbleColor.VIOLET: (139, 92, 246),
}


class BubbleShooterRenderer(RendererInterface):
    """
    Renders the bubble shooter using Pygame.

    Draws, in order: grid (with the row-shift offset), launcher bubbles,
    projectile, aim preview. Reads only the get_state() dictionary.
    """

    def __init__(self, width: int = 154, height: int = 260, scale: float = 2.0):
        """
        Initialize the renderer.

        Args:
            width: Play area width in game units
            height: Play area height in game units
            scale: Screen pixels per game unit
        """
        self._width = width
        self._height = height
        self._scale = scale
        self._offset_x = 0
        self._offset_y = 0
        self._font = None

    def get_preferred_size(self) -> Tuple[int, int]:
        """Get the preferred render size."""
        return (int(self._width * self._scale), int(self._height * self._scale) + 30)

    def set_render_area(self, x: int, y: int, width: int, height: int) -> None:
        """Set the render area and fit the scale to it."""
        self._offset_x = x
        self._offset_y = y
        self._scale = max(0.5, min(width / self._width, (height - 30) / self._height))

    def _to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return (
            int(self._offset_x + x * self._scale),
            int(self._offset_y + y * self._scale),
        )

    def screen_to_game(self, x: float, y: float) -> Tuple[float, float]:
        """Map a screen pixel back to play-area coordinates."""
        return ((x - self._offset_x) / self._scale, (y - self._offset_y) / self._scale)

    def render(self, game_state: Dict[str, Any], surface: pygame.Surface) -> None:
        """
        Render the game state to a surface.

        Args:
            game_state: Dictionary from BubbleShooterGame.get_state()
            surface: Pygame surface to draw on
        """
        self._width = game_state.get("width", self._width)
        self._height = game_state.get("height", self._height)

        surface.fill(BACKGROUND)
        self._draw_grid(surface, game_state)
        self._draw_launcher(surface, game_state)
        self._draw_projectile(surface, game_state)
        self._draw_preview(surface, game_state)
        self._draw_score(surface, game_state)

    def _draw_grid(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        cell_size = state["cell_size"]
        row_spacing = state["row_spacing"]
        radius = max(1, int(state["cell_radius"] * self._scale))
        offset = state.get("offset", 0.0)

        for row, cells in enumerate(state["grid"]):
            for col, value in enumerate(cells):
                cx = col * cell_size + (row % 2) * (cell_size / 2) + cell_size / 2
                cy = row * row_spacing + cell_size / 2 + offset
                center = self._to_screen(cx, cy)
                color = BUBBLE_COLORS.get(value, EMPTY_CELL) if value != EMPTY else EMPTY_CELL
                pygame.draw.circle(surface, color, center, radius)
                pygame.draw.circle(surface, OUTLINE, center, radius, 1)
                if value == EMPTY:
                    pygame.draw.circle(surface, EMPTY_DOT, center, max(1, int(1.5 * self._scale)))

    def _draw_launcher(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        shooter = state["shooter"]
        hud = state["hud"]
        radius = shooter["radius"] * self._scale

        main_center = self._to_screen(*hud["main"])
        pygame.draw.circle(surface, BUBBLE_COLORS[shooter["main"]], main_center,
                           int(radius * hud["main_scale"]))
        pygame.draw.circle(surface, WHITE, main_center, int(radius * hud["main_scale"]), 1)

        sec_center = self._to_screen(*hud["secondary"])
        pygame.draw.circle(surface, BUBBLE_COLORS[shooter["secondary"]], sec_center,
                           int(radius * hud["secondary_scale"]))
        pygame.draw.circle(surface, OUTLINE, sec_center, int(radius * hud["secondary_scale"]), 1)

    def _draw_projectile(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        projectile = state.get("projectile")
        if not projectile:
            return
        center = self._to_screen(projectile["x"], projectile["y"])
        radius = int(projectile["radius"] * self._scale)
        pygame.draw.circle(surface, BUBBLE_COLORS[projectile["color"]], center, radius)
        pygame.draw.circle(surface, (0, 0, 0), center, radius, 1)

    def _draw_preview(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        trajectory = state.get("trajectory")
        if not trajectory:
            return
        for seg in trajectory["segments"]:
            pygame.draw.line(
                surface, PREVIEW_COLOR,
                self._to_screen(seg["x1"], seg["y1"]),
                self._to_screen(seg["x2"], seg["y2"]),
                1,
            )
        point = trajectory.get("point")
        if point:
            ghost = GHOST_HIT if trajectory["hit"] else GHOST_MISS
            radius = int(state["shooter"]["radius"] * self._scale)
            pygame.draw.circle(surface, ghost, self._to_screen(*point), radius, 1)

    def _draw_score(self, surface: pygame.Surface, state: Dict[str, Any]) -> None:
        if self._font is None:
            self._font = pygame.font.Font(None, 24)
        label = f"Score: {state['score']}"
        if state.get("paused"):
            label += "  [PAUSED]"
        text = self._font.render(label, True, TEXT_COLOR)
        surface.blit(text, self._to_screen(4, self._height + 2))
