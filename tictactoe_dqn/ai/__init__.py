"""
AI Module
=========

A numpy neural network engine and the Deep Q-Learning components built on it.

Classes:
    DenseLayer         - Fully-connected layer with manual backpropagation
    FeedforwardNetwork - Stack of dense layers trained by per-example SGD
    ReplayBuffer       - Experience replay memory
    DQNAgent           - DQN agent with epsilon-greedy exploration
    RandomOpponent     - Uniformly random legal-move player
    Trainer            - Training loop orchestration
    Evaluator          - Greedy evaluation games
"""

from .errors import NetworkConfigError, UnknownActivationError, DimensionMismatchError
from .activations import Activation, get_activation
from .layer import DenseLayer
from .network import FeedforwardNetwork
from .replay_buffer import Experience, ReplayBuffer
from .agent import DQNAgent, NO_ACTION
from .opponent import RandomOpponent
from .trainer import Trainer, TrainingMetrics, EpisodeStats, Outcome
from .evaluator import Evaluator, EvalResults

__all__ = [
    'NetworkConfigError', 'UnknownActivationError', 'DimensionMismatchError',
    'Activation', 'get_activation',
    'DenseLayer', 'FeedforwardNetwork',
    'Experience', 'ReplayBuffer',
    'DQNAgent', 'NO_ACTION', 'RandomOpponent',
    'Trainer', 'TrainingMetrics', 'EpisodeStats', 'Outcome',
    'Evaluator', 'EvalResults',
]
