"""
Tic-Tac-Toe DQN - Source Package
================================

A small numpy neural network engine and a Deep Q-Network agent that
learns Tic-Tac-Toe by playing against a random opponent.

Modules:
    ai/     - Activations, dense layers, networks, replay buffer, agent, training
    game/   - Environment interface and the Tic-Tac-Toe board
    utils/  - Logging infrastructure
"""

__version__ = "1.0.0"
