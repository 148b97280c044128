"""
Game Module
===========

Contains the environments the agent can learn to play.

Classes:
    TicTacToe - Classic 3x3 Tic-Tac-Toe
    BaseGame  - Abstract base class for creating new games

Game Registry:
    Use get_game(name) to get a game class by name
    Use list_games() to get all available games
"""

from typing import Any, Dict, List, Optional, Type

from .base_game import BaseGame
from .tic_tac_toe import TicTacToe, EMPTY, PLAYER_X, PLAYER_O


GAME_REGISTRY: Dict[str, Dict[str, Any]] = {
    'tictactoe': {
        'class': TicTacToe,
        'name': 'Tic-Tac-Toe',
        'description': 'Three in a row on a 3x3 board',
    },
}


def get_game(name: str) -> Optional[Type[BaseGame]]:
    """
    Get a game class by name.

    Example:
        >>> GameClass = get_game('tictactoe')
        >>> game = GameClass(config)
    """
    entry = GAME_REGISTRY.get(name.lower())
    if entry:
        return entry['class']
    return None


def list_games() -> List[str]:
    """Get a list of all available game names."""
    return list(GAME_REGISTRY.keys())


__all__ = [
    'TicTacToe',
    'BaseGame',
    'EMPTY',
    'PLAYER_X',
    'PLAYER_O',
    'GAME_REGISTRY',
    'get_game',
    'list_games',
]
