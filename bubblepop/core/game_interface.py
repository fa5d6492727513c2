"""
Abstract game interface for Bubble Pop.

All games must implement GameInterface and provide GameMetadata.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Any, List


@dataclass
class GameMetadata:
    """Metadata describing a game."""

    name: str                           # Display name (e.g., "Bubble Shooter")
    id: str                             # Unique identifier (e.g., "bubble_shooter")
    description: str                    # Brief description for UI
    version: str = "1.0.0"              # Game version
    min_players: int = 1                # Minimum players
    max_players: int = 1                # Maximum players
    supports_human: bool = True         # Can humans play?


class GameInterface(ABC):
    """
    Abstract base class for all games in Bubble Pop.

    Games own the core logic, rules, and state. Rendering and input
    devices live outside and talk to the game through this contract:
    input events mutate the game, and the render layer reads get_state()
    once per frame.
    """

    @classmethod
    @abstractmethod
    def get_metadata(cls) -> GameMetadata:
        """
        Return metadata about this game.

        Returns:
            GameMetadata describing the game
        """
        pass

    @abstractmethod
    def reset(self) -> Dict[str, Any]:
        """
        Reset the game to initial state.

        Returns:
            Initial game state dictionary
        """
        pass

    @abstractmethod
    def update(self) -> List[Any]:
        """
        Advance the simulation by one frame.

        Returns:
            List of events produced during this frame
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get the current game state for rendering.

        Returns:
            Dictionary containing all state needed for rendering
        """
        pass

    def get_score(self) -> int:
        """
        Get the current score.

        Returns:
            Current game score
        """
        return 0
