"""Scripted opponents the DQN agent trains and evaluates against."""

from typing import Optional

import numpy as np

from ..game.base_game import BaseGame
from .agent import NO_ACTION


class RandomOpponent:
    """Plays a uniformly random legal move."""

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    def choose_action(self, game: BaseGame) -> int:
        legal_actions = game.get_legal_actions()
        if not legal_actions:
            return NO_ACTION
        return int(legal_actions[self.rng.integers(len(legal_actions))])
