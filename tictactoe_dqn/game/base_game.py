"""
Base Game Interface
===================

Abstract base class that defines the interface all games must implement.
This allows the DQN agent to work with any turn-based game that follows
this interface.

To add a new game:
1. Create a new file in tictactoe_dqn/game/
2. Inherit from BaseGame
3. Implement all abstract methods
4. Register in __init__.py
"""

from abc import ABC, abstractmethod
from typing import List, Optional
import numpy as np


class BaseGame(ABC):
    """
    Abstract base class for two-player, turn-based games.

    Properties:
        state_size: int - Dimension of the state vector
        action_size: int - Number of possible actions
        current_player: int - Player to move
        winner: Optional[int] - Winning player, None if undecided or drawn

    Methods:
        reset() -> None
            Reset game to initial state

        get_state_vector(perspective: int) -> np.ndarray
            State vector as seen by one player

        get_legal_actions() -> List[int]
            Action indices that may be played now

        apply_action(action: int) -> bool
            Play an action for the current player, return True if the game ended

        get_reward(perspective: int) -> float
            Reward of the most recent transition for one player

        render() -> str
            Text rendering of the current position
    """

    @property
    @abstractmethod
    def state_size(self) -> int:
        """Return the dimension of the state vector."""
        pass

    @property
    @abstractmethod
    def action_size(self) -> int:
        """Return the number of possible actions."""
        pass

    @property
    @abstractmethod
    def current_player(self) -> int:
        """Return the identifier of the player to move."""
        pass

    @property
    @abstractmethod
    def winner(self) -> Optional[int]:
        """Return the winning player, or None while undecided or drawn."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset the game to its initial state."""
        pass

    @abstractmethod
    def get_state_vector(self, perspective: int) -> np.ndarray:
        """
        Get the current state from one player's point of view.

        Args:
            perspective: Player identifier

        Returns:
            np.ndarray: Fixed-length state vector
        """
        pass

    @abstractmethod
    def get_legal_actions(self) -> List[int]:
        """Return the currently legal action indices (empty when none)."""
        pass

    @abstractmethod
    def apply_action(self, action: int) -> bool:
        """
        Play an action for the current player.

        Args:
            action: Legal action index

        Returns:
            True if the episode has terminated
        """
        pass

    @abstractmethod
    def get_reward(self, perspective: int) -> float:
        """Return the reward of the most recent transition for a player."""
        pass

    @abstractmethod
    def render(self) -> str:
        """Return a text rendering of the current position."""
        pass
