"""
Tic-Tac-Toe Implementation
==========================

Classic 3x3 Tic-Tac-Toe used as the DQN training environment.

Game Rules:
- X always moves first, players alternate
- Three of your marks in a row, column, or diagonal wins
- A full board without a line is a draw
"""

from typing import List, Optional

import numpy as np

from ..config import Config
from .base_game import BaseGame


EMPTY = 0
PLAYER_X = 1
PLAYER_O = -1

WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # Rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # Columns
    (0, 4, 8), (2, 4, 6),             # Diagonals
)

SYMBOLS = {PLAYER_X: 'X', PLAYER_O: 'O', EMPTY: ' '}


class TicTacToe(BaseGame):
    """
    Tic-Tac-Toe board.

    State representation (9 features), from a given player's perspective:
        - 1.0 = that player's mark
        - -1.0 = opponent's mark
        - 0.0 = empty

    Actions:
        0-8 = cell index, row-major from the top-left corner
    """

    BOARD_CELLS = 9

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the game.

        Args:
            config: Configuration object (uses default if None)
        """
        self.config = config or Config()
        self.cells = np.zeros(self.BOARD_CELLS, dtype=np.int8)
        self._current_player = PLAYER_X
        self._winner: Optional[int] = None
        self.moves_played = 0

    @property
    def state_size(self) -> int:
        return self.BOARD_CELLS

    @property
    def action_size(self) -> int:
        return self.BOARD_CELLS

    @property
    def current_player(self) -> int:
        return self._current_player

    @property
    def winner(self) -> Optional[int]:
        return self._winner

    def reset(self) -> None:
        """Clear the board; X moves first."""
        self.cells[:] = EMPTY
        self._current_player = PLAYER_X
        self._winner = None
        self.moves_played = 0

    def get_state_vector(self, perspective: int) -> np.ndarray:
        state = np.zeros(self.BOARD_CELLS, dtype=np.float64)
        state[self.cells == perspective] = 1.0
        state[self.cells == -perspective] = -1.0
        return state

    def get_legal_actions(self) -> List[int]:
        if self.is_game_over():
            return []
        return [int(i) for i in np.flatnonzero(self.cells == EMPTY)]

    def apply_action(self, action: int) -> bool:
        """
        Place the current player's mark.

        The turn passes to the other player unless the move ended the game.

        Raises:
            ValueError: If the cell is out of range, occupied, or the game is over
        """
        if self.is_game_over():
            raise ValueError("Game is already over")
        if not 0 <= action < self.BOARD_CELLS:
            raise ValueError(f"Cell {action} is outside the board")
        if self.cells[action] != EMPTY:
            raise ValueError(f"Cell {action} is already taken")

        mover = self._current_player
        self.cells[action] = mover
        self.moves_played += 1

        if self.check_win(mover):
            self._winner = mover
            return True
        if self.is_board_full():
            return True

        self._current_player = -mover
        return False

    def get_reward(self, perspective: int) -> float:
        """
        Reward for the position reached by the last move.

        Win and loss are judged from the perspective player's side; any
        unfinished position costs a small step penalty.
        """
        if self.winner is not None:
            return self.config.REWARD_WIN if self.winner == perspective else self.config.REWARD_LOSS
        if self.is_board_full():
            return self.config.REWARD_DRAW
        return self.config.REWARD_STEP

    def check_win(self, player: int) -> bool:
        """Check whether player owns a full line."""
        return any(all(self.cells[i] == player for i in line) for line in WIN_LINES)

    def is_board_full(self) -> bool:
        return not np.any(self.cells == EMPTY)

    def is_game_over(self) -> bool:
        return self.winner is not None or self.is_board_full()

    def render(self) -> str:
        separator = '-------------'
        rows = [separator]
        for r in range(3):
            marks = ' | '.join(SYMBOLS[int(c)] for c in self.cells[r * 3:(r + 1) * 3])
            rows.append(f'| {marks} |')
            rows.append(separator)
        return '\n'.join(rows)
