"""
Games module for Bubble Pop.

This module auto-discovers and registers all available games.
Import this module to populate the GameRegistry.
"""

from .registry import GameRegistry

# Import game modules to trigger registration
# Each game's __init__.py calls GameRegistry.register()
from . import bubble_shooter

__all__ = [
    'GameRegistry',
]
