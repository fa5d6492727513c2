"""
Pytest configuration and fixtures for Bubble Pop tests.

This module sets up pygame mocking so the renderer can be exercised
without a display, and provides a manual clock so time-driven behavior
(row shifts, launcher animations) can be stepped deterministically.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest


# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))


def create_mock_pygame():
    """Create a mock of the parts of pygame the renderer and scripts use."""
    mock_pygame = MagicMock()

    # Basic initialization
    mock_pygame.init.return_value = (6, 0)  # (success, fail) count
    mock_pygame.quit.return_value = None

    # Display
    mock_surface = MagicMock()
    mock_surface.get_width.return_value = 308
    mock_surface.get_height.return_value = 550
    mock_surface.fill.return_value = None
    mock_surface.blit.return_value = None
    mock_pygame.display.set_mode.return_value = mock_surface
    mock_pygame.display.set_caption.return_value = None
    mock_pygame.display.flip.return_value = None

    # Fonts
    mock_font = MagicMock()
    mock_font.render.return_value = MagicMock()  # Returns a surface
    mock_font.size.return_value = (100, 30)  # (width, height)
    mock_pygame.font.Font.return_value = mock_font
    mock_pygame.font.init.return_value = None

    # Drawing
    mock_pygame.draw.circle.return_value = None
    mock_pygame.draw.line.return_value = None

    # Events
    mock_pygame.event.get.return_value = []

    # Constants
    mock_pygame.QUIT = 256
    mock_pygame.KEYDOWN = 768
    mock_pygame.MOUSEBUTTONDOWN = 1025
    mock_pygame.MOUSEMOTION = 1024
    mock_pygame.K_ESCAPE = 27
    mock_pygame.K_UP = 273
    mock_pygame.K_DOWN = 274
    mock_pygame.K_r = 114
    mock_pygame.K_p = 112

    # Time
    mock_clock = MagicMock()
    mock_clock.tick.return_value = 16  # ~60fps
    mock_pygame.time.Clock.return_value = mock_clock
    mock_pygame.time.get_ticks.return_value = 0

    mock_pygame.Surface.return_value = mock_surface

    return mock_pygame


@pytest.fixture(scope="session", autouse=True)
def mock_pygame_module():
    """
    Session-scoped fixture that mocks pygame for the test run.

    Modules that already imported the real pygame keep their reference;
    renderer tests patch the module attribute directly.
    """
    mock_pygame = create_mock_pygame()

    # Store original module if it exists
    original_pygame = sys.modules.get('pygame')

    # Install mock
    sys.modules['pygame'] = mock_pygame

    yield mock_pygame

    # Restore original (or remove mock)
    if original_pygame:
        sys.modules['pygame'] = original_pygame
    else:
        del sys.modules['pygame']


class ManualClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


@pytest.fixture
def clock():
    """Provide a manual millisecond clock starting at 0."""
    return ManualClock()


@pytest.fixture
def game(clock):
    """A seeded 10x8 game driven by the manual clock."""
    from bubblepop.games.bubble_shooter.game import BubbleShooterGame

    return BubbleShooterGame(seed=1234, clock=clock)


@pytest.fixture
def empty_game(game):
    """A seeded game whose grid has been emptied."""
    game.grid.clear()
    return game
