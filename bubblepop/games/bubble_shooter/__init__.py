"""
Bubble Shooter game module for Bubble Pop.

This module auto-registers the Bubble Shooter game when imported.
"""

from ..registry import GameRegistry
from .game import BubbleShooterGame, AimState
from .grid import HexGrid, BubbleColor, PALETTE
from .shift import RowShiftAnimator, ShiftDirection
from .renderer import BubbleShooterRenderer
from .config import BubbleShooterConfig

# Auto-register Bubble Shooter game when this module is imported
GameRegistry.register(
    game_class=BubbleShooterGame,
    renderer_class=BubbleShooterRenderer,
    config_class=BubbleShooterConfig
)

__all__ = [
    'BubbleShooterGame',
    'BubbleShooterRenderer',
    'BubbleShooterConfig',
    'AimState',
    'HexGrid',
    'BubbleColor',
    'PALETTE',
    'RowShiftAnimator',
    'ShiftDirection',
]
