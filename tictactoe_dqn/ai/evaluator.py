"""
Deterministic Model Evaluator
=============================

Plays greedy games (ε=0) against the opponent to measure how well the
policy actually plays, separate from noisy training metrics.

Usage:
    evaluator = Evaluator(game, agent, config)
    results = evaluator.evaluate(num_games=100)
    evaluator.log_results(results)
"""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np

from ..config import Config
from ..game.base_game import BaseGame
from ..utils.logger import get_logger
from .agent import DQNAgent, NO_ACTION
from .opponent import RandomOpponent
from .trainer import Outcome, game_outcome


logger = get_logger(__name__)


@dataclass
class EvalResults:
    """Results from a deterministic evaluation run."""
    timestamp: str
    episode: int
    num_games: int

    wins: int
    losses: int
    draws: int
    win_rate: float
    loss_rate: float
    draw_rate: float

    mean_moves: float
    max_moves: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Evaluator:
    """
    Runs greedy evaluation games to measure true model performance.

    Key features:
    - Runs with ε=0 and restores the agent's epsilon afterwards
    - Tracks wins, losses, draws and game length
    - Detects plateau (no win-rate improvement over N evals)
    """

    def __init__(
        self,
        game: BaseGame,
        agent: DQNAgent,
        config: Optional[Config] = None,
        opponent: Optional[RandomOpponent] = None,
        plateau_threshold: int = 5
    ):
        """
        Initialize the evaluator.

        Args:
            game: Game instance
            agent: Agent instance
            config: Config object
            opponent: Opponent for the other side (random if None)
            plateau_threshold: Number of evals without improvement to trigger plateau warning
        """
        self.game = game
        self.agent = agent
        self.config = config or Config()
        self.opponent = opponent or RandomOpponent(agent.rng)
        self.plateau_threshold = plateau_threshold

        # History tracking
        self.eval_history: List[EvalResults] = []
        self.best_win_rate: float = 0.0
        self.evals_since_improvement: int = 0

    def _play_game(self, boards: Optional[List[str]] = None) -> int:
        """Play one game greedily; return the number of moves made."""
        self.game.reset()
        done = False
        moves = 0

        while not done and moves < self.config.MAX_STEPS_PER_EPISODE:
            if boards is not None:
                boards.append(self.game.render())

            if self.game.current_player == self.agent.player:
                action = self.agent.choose_action(self.game)
            else:
                action = self.opponent.choose_action(self.game)
            if action == NO_ACTION:
                break

            done = self.game.apply_action(action)
            moves += 1

        if boards is not None:
            boards.append(self.game.render())
        return moves

    def evaluate(self, num_games: Optional[int] = None, episode_num: int = 0) -> EvalResults:
        """
        Run deterministic evaluation.

        Args:
            num_games: Number of evaluation games (default from config)
            episode_num: Current training episode (for logging)

        Returns:
            EvalResults with all metrics

        Raises:
            ValueError: If num_games is not positive
        """
        if num_games is None:
            num_games = self.config.EVAL_GAMES
        if num_games <= 0:
            raise ValueError(f"num_games must be positive, got {num_games}")

        original_epsilon = self.agent.epsilon
        self.agent.epsilon = 0.0

        counts = {outcome: 0 for outcome in Outcome}
        moves_list = []
        try:
            for _ in range(num_games):
                moves_list.append(self._play_game())
                counts[game_outcome(self.game, self.agent.player)] += 1
        finally:
            self.agent.epsilon = original_epsilon

        results = EvalResults(
            timestamp=datetime.now().isoformat(),
            episode=episode_num,
            num_games=num_games,
            wins=counts[Outcome.WIN],
            losses=counts[Outcome.LOSS],
            draws=counts[Outcome.DRAW],
            win_rate=counts[Outcome.WIN] / num_games,
            loss_rate=counts[Outcome.LOSS] / num_games,
            draw_rate=counts[Outcome.DRAW] / num_games,
            mean_moves=float(np.mean(moves_list)),
            max_moves=int(np.max(moves_list))
        )

        self._update_history(results)
        return results

    def _update_history(self, results: EvalResults) -> None:
        """Update evaluation history and check for plateau."""
        self.eval_history.append(results)

        if results.win_rate > self.best_win_rate:
            self.best_win_rate = results.win_rate
            self.evals_since_improvement = 0
        else:
            self.evals_since_improvement += 1

    def is_plateau(self) -> bool:
        """Check if model has plateaued (no improvement in N evals)."""
        return self.evals_since_improvement >= self.plateau_threshold

    def log_results(self, results: EvalResults) -> None:
        """Log formatted evaluation results."""
        plateau_warning = " | PLATEAU" if self.is_plateau() else ""
        logger.info(
            f"EVAL @ episode {results.episode}{plateau_warning} | "
            f"games={results.num_games} | wins={results.wins} | "
            f"losses={results.losses} | draws={results.draws} | "
            f"win_rate={results.win_rate * 100:.1f}% | "
            f"mean_moves={results.mean_moves:.1f}"
        )

    def play_demo_game(self) -> List[str]:
        """
        Play one greedy game and return the rendered board before every move
        and after the last one.
        """
        original_epsilon = self.agent.epsilon
        self.agent.epsilon = 0.0
        boards: List[str] = []
        try:
            self._play_game(boards)
        finally:
            self.agent.epsilon = original_epsilon
        return boards

    def get_summary(self) -> Dict[str, Any]:
        """Get summary of all evaluations."""
        if not self.eval_history:
            return {}

        return {
            'num_evals': len(self.eval_history),
            'best_win_rate': self.best_win_rate,
            'latest_win_rate': self.eval_history[-1].win_rate,
            'is_plateau': self.is_plateau(),
            'evals_since_improvement': self.evals_since_improvement,
        }
