"""
Training Loop
=============

Orchestrates self-play training against a scripted opponent:
    1. Run episodes of the game
    2. Record the agent's own transitions
    3. Train the agent once enough experience is stored
    4. Track metrics and log progress

Only the agent's moves become experiences. The transition stored for a move
ends at the board right after that move, so the opponent's reply (and a loss
caused by it) is never credited back to the agent.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

import numpy as np

from ..config import Config
from ..game.base_game import BaseGame
from ..utils.logger import get_logger, log_training_metrics
from .agent import DQNAgent, NO_ACTION
from .opponent import RandomOpponent


logger = get_logger(__name__)


class Outcome(Enum):
    """Result of a game from the agent's side."""
    WIN = 'win'
    LOSS = 'loss'
    DRAW = 'draw'
    UNFINISHED = 'unfinished'


def game_outcome(game: BaseGame, player: int) -> Outcome:
    """Classify the finished (or abandoned) game for one player."""
    winner = game.winner
    if winner == player:
        return Outcome.WIN
    if winner is not None:
        return Outcome.LOSS
    if game.get_legal_actions():
        return Outcome.UNFINISHED
    return Outcome.DRAW


@dataclass
class EpisodeStats:
    """Statistics for a single episode."""
    episode: int
    outcome: Outcome
    steps: int
    agent_moves: int
    total_reward: float
    epsilon: float
    avg_loss: float
    duration: float


class TrainingMetrics:
    """
    Tracks and stores training metrics over time.

    Metrics tracked:
        - Episode outcomes
        - Total agent rewards
        - Moves per episode
        - Loss values
        - Epsilon values
        - Episode durations
    """

    def __init__(self, history_length: int = 1000):
        """
        Initialize metrics tracker.

        Args:
            history_length: Maximum history to store
        """
        self.history_length = history_length

        self.outcomes: List[Outcome] = []
        self.rewards: List[float] = []
        self.steps: List[int] = []
        self.losses: List[float] = []
        self.epsilons: List[float] = []
        self.durations: List[float] = []

    def add(self, stats: EpisodeStats) -> None:
        """Add episode statistics."""
        self.outcomes.append(stats.outcome)
        self.rewards.append(stats.total_reward)
        self.steps.append(stats.steps)
        self.losses.append(stats.avg_loss)
        self.epsilons.append(stats.epsilon)
        self.durations.append(stats.duration)

        # Trim to history length
        if len(self.outcomes) > self.history_length:
            for attr in ['outcomes', 'rewards', 'steps', 'losses', 'epsilons', 'durations']:
                setattr(self, attr, getattr(self, attr)[-self.history_length:])

    def get_recent_average(self, metric: str, n: int = 100) -> float:
        """Get average of last n values for a metric."""
        values = getattr(self, metric, [])
        if not values:
            return 0.0
        return float(np.mean(values[-n:]))

    def count(self, outcome: Outcome, n: int = 100) -> int:
        """Number of the last n episodes that ended with outcome."""
        return sum(1 for o in self.outcomes[-n:] if o is outcome)

    def _rate(self, outcome: Outcome, n: int) -> float:
        recent = self.outcomes[-n:]
        if not recent:
            return 0.0
        return self.count(outcome, n) / len(recent)

    def get_win_rate(self, n: int = 100) -> float:
        """Get win rate over last n episodes."""
        return self._rate(Outcome.WIN, n)

    def get_loss_rate(self, n: int = 100) -> float:
        return self._rate(Outcome.LOSS, n)

    def get_draw_rate(self, n: int = 100) -> float:
        return self._rate(Outcome.DRAW, n)


class Trainer:
    """
    Manages the training loop for the DQN agent.

    Responsibilities:
        1. Alternate agent and opponent moves until the game ends
        2. Store the agent's transitions and call agent.train()
        3. Track metrics and log progress

    Example:
        >>> game = TicTacToe()
        >>> agent = DQNAgent(game.state_size, game.action_size)
        >>> trainer = Trainer(game, agent)
        >>> trainer.train(num_episodes=1000)
    """

    def __init__(
        self,
        game: BaseGame,
        agent: DQNAgent,
        config: Optional[Config] = None,
        opponent: Optional[RandomOpponent] = None
    ):
        """
        Initialize the trainer.

        Args:
            game: Game instance (implements BaseGame)
            agent: DQN agent instance
            config: Configuration object
            opponent: Opponent for the other side (random, sharing the
                agent's random source, if None)
        """
        self.game = game
        self.agent = agent
        self.config = config or Config()
        self.opponent = opponent or RandomOpponent(agent.rng)

        self.metrics = TrainingMetrics()
        self.current_episode = 0
        self.total_steps = 0

    def run_episode(self) -> EpisodeStats:
        """
        Run a single training episode.

        Returns:
            Episode statistics
        """
        start_time = time.time()

        self.game.reset()
        agent = self.agent
        done = False
        steps = 0
        agent_moves = 0
        total_reward = 0.0
        losses: List[float] = []

        while not done and steps < self.config.MAX_STEPS_PER_EPISODE:
            if self.game.current_player == agent.player:
                state = self.game.get_state_vector(agent.player)
                action = agent.choose_action(self.game)
                if action == NO_ACTION:
                    break

                done = self.game.apply_action(action)
                next_state = self.game.get_state_vector(agent.player)
                reward = self.game.get_reward(agent.player)

                agent.remember(state, action, reward, next_state, done)
                total_reward += reward
                agent_moves += 1
                self.total_steps += 1

                # Warm-up: wait for enough experience before learning
                if len(agent.memory) >= self.config.MEMORY_MIN:
                    loss = agent.train(self.config.BATCH_SIZE, self.total_steps)
                    if loss is not None:
                        losses.append(loss)
            else:
                action = self.opponent.choose_action(self.game)
                if action == NO_ACTION:
                    break
                done = self.game.apply_action(action)

            steps += 1

        return EpisodeStats(
            episode=self.current_episode,
            outcome=game_outcome(self.game, agent.player),
            steps=steps,
            agent_moves=agent_moves,
            total_reward=total_reward,
            epsilon=agent.epsilon,
            avg_loss=float(np.mean(losses)) if losses else 0.0,
            duration=time.time() - start_time
        )

    def train(
        self,
        num_episodes: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int, EpisodeStats], None]] = None
    ) -> TrainingMetrics:
        """
        Run the training loop.

        Args:
            num_episodes: Number of episodes (default from config)
            progress_callback: Function to call with progress updates

        Returns:
            Training metrics
        """
        if num_episodes is None:
            num_episodes = self.config.MAX_EPISODES
        log_every = self.config.LOG_EVERY

        logger.info(
            f"Starting DQN training | episodes={num_episodes} | "
            f"state_size={self.game.state_size} | action_size={self.game.action_size} | "
            f"network={self.agent.policy_net}"
        )

        window = {Outcome.WIN: 0, Outcome.LOSS: 0, Outcome.DRAW: 0}

        for episode in range(num_episodes):
            self.current_episode = episode
            stats = self.run_episode()
            self.metrics.add(stats)

            if stats.outcome in window:
                window[stats.outcome] += 1

            if (episode + 1) % log_every == 0:
                log_training_metrics(
                    episode=episode + 1,
                    wins=window[Outcome.WIN],
                    losses=window[Outcome.LOSS],
                    draws=window[Outcome.DRAW],
                    epsilon=self.agent.epsilon,
                    avg_loss=self.agent.get_average_loss(100),
                    steps=self.total_steps
                )
                window = dict.fromkeys(window, 0)

            if progress_callback:
                progress_callback(episode, num_episodes, stats)

        logger.info(
            f"Training complete | final_epsilon={self.agent.epsilon:.4f} | "
            f"total_steps={self.total_steps} | "
            f"win_rate(100)={self.metrics.get_win_rate(100) * 100:.1f}%"
        )

        return self.metrics
