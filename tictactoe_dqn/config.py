"""
Configuration file for the Tic-Tac-Toe DQN
==========================================

All hyperparameters, reward values, and run settings are centralized here.
Modify these values to experiment with different training configurations.

Usage:
    from tictactoe_dqn.config import Config
    cfg = Config()
    print(cfg.LEARNING_RATE)
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Config:
    """
    Central configuration for the entire project.

    Sections:
    1. Neural Network - Architecture configuration
    2. Training - Learning hyperparameters
    3. Exploration - Epsilon-greedy settings
    4. Rewards - Tic-Tac-Toe reward values
    5. Training Control - Episode counts and logging cadence
    6. XOR Demo - Sanity-check regression settings
    7. System - Logging and seeding
    """

    # =========================================================================
    # NEURAL NETWORK ARCHITECTURE
    # =========================================================================

    # Input and output sizes come from the game (9 cells, one Q-value each)

    # Hidden layer architecture
    HIDDEN_LAYERS: List[int] = field(default_factory=lambda: [64, 64])

    # Hidden activation: 'relu', 'sigmoid', 'identity'
    # The output layer is always linear (raw Q-values)
    ACTIVATION: str = 'relu'

    # =========================================================================
    # TRAINING HYPERPARAMETERS
    # =========================================================================

    # Learning rate for plain SGD
    LEARNING_RATE: float = 0.001

    # Discount factor (gamma) - How much to value future rewards
    GAMMA: float = 0.99

    # Experiences sampled per training step. Each one is a separate
    # SGD step, applied in sampling order.
    BATCH_SIZE: int = 32

    # Replay buffer capacity
    MEMORY_SIZE: int = 50_000

    # Minimum experiences before training starts
    MEMORY_MIN: int = 1000

    # Hard target network sync interval (in agent steps)
    TARGET_UPDATE: int = 1000

    # =========================================================================
    # EXPLORATION SETTINGS (Epsilon-Greedy)
    # =========================================================================

    # Starting exploration rate (1.0 = 100% random)
    EPSILON_START: float = 1.0

    # Minimum exploration rate
    EPSILON_END: float = 0.01

    # Multiplier applied after every training step that processed a batch
    EPSILON_DECAY: float = 0.995

    # =========================================================================
    # REWARDS
    # =========================================================================

    REWARD_WIN: float = 1.0
    REWARD_LOSS: float = -1.0
    REWARD_DRAW: float = 0.0
    # Small per-move penalty to encourage quick wins
    REWARD_STEP: float = -0.01

    # =========================================================================
    # TRAINING CONTROL
    # =========================================================================

    # Total episodes to train
    MAX_EPISODES: int = 10_000

    # Maximum moves per episode (a full board ends the game after 9)
    MAX_STEPS_PER_EPISODE: int = 100

    # Log windowed win/loss/draw counts every N episodes
    LOG_EVERY: int = 100

    # Greedy games played against the random opponent after training
    EVAL_GAMES: int = 100

    # =========================================================================
    # XOR DEMO
    # =========================================================================

    XOR_HIDDEN_LAYERS: List[int] = field(default_factory=lambda: [2])
    XOR_ACTIVATION: str = 'sigmoid'
    XOR_LEARNING_RATE: float = 0.01
    XOR_EPOCHS: int = 20_000
    XOR_LOG_EVERY: int = 1000

    # =========================================================================
    # SYSTEM SETTINGS
    # =========================================================================

    LOG_DIR: str = 'logs'

    # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
    LOG_LEVEL: str = 'INFO'

    # Random seed for reproducibility (None for random)
    SEED: Optional[int] = None

    def __post_init__(self):
        """Validation."""
        assert self.LEARNING_RATE > 0, "Learning rate must be positive"
        assert 0 <= self.GAMMA <= 1, "Gamma must be in [0, 1]"
        assert self.BATCH_SIZE > 0, "Batch size must be positive"
        assert self.MEMORY_SIZE >= self.BATCH_SIZE, "Memory size must be >= batch size"
        assert self.TARGET_UPDATE > 0, "Target update interval must be positive"
        assert 0 < self.EPSILON_DECAY <= 1, "Epsilon decay must be in (0, 1]"
        assert 0 <= self.EPSILON_END <= self.EPSILON_START <= 1, \
            "Epsilon must satisfy 0 <= end <= start <= 1"


# Global config instance for easy importing
config = Config()
