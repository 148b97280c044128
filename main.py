#!/usr/bin/env python3
"""
Tic-Tac-Toe DQN - Main Entry Point
==================================

Trains a DQN agent to play Tic-Tac-Toe against a random opponent, or runs
the XOR sanity check of the numpy network engine.

Usage:
    # Train the agent (plays X) with the default config
    python main.py

    # Shorter run with a fixed seed
    python main.py --episodes 2000 --seed 42

    # Custom training parameters
    python main.py --episodes 5000 --lr 0.0005 --batch-size 64

    # XOR demonstration: 2-2-1 sigmoid network trained by backpropagation
    python main.py --xor
"""

import argparse
import os
import sys
from typing import List, Optional, Sequence

import numpy as np

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tictactoe_dqn.config import Config
from tictactoe_dqn.ai import DQNAgent, Evaluator, FeedforwardNetwork, Trainer
from tictactoe_dqn.game import TicTacToe, PLAYER_X
from tictactoe_dqn.utils.logger import LogLevel, get_logger, setup_logging


XOR_INPUTS = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
XOR_OUTPUTS = np.array([[0.0], [1.0], [1.0], [0.0]])


def train_xor(
    config: Config,
    inputs: Sequence[np.ndarray] = XOR_INPUTS,
    targets: Sequence[np.ndarray] = XOR_OUTPUTS,
    rng: Optional[np.random.Generator] = None,
    epochs: Optional[int] = None
) -> FeedforwardNetwork:
    """
    Train a small network on XOR, one example at a time.

    Args:
        config: Supplies architecture, learning rate and epoch count
        inputs: Training inputs
        targets: Training targets
        rng: Random source for weight initialization
        epochs: Override config.XOR_EPOCHS

    Returns:
        The trained network
    """
    logger = get_logger('xor')
    rng = rng if rng is not None else np.random.default_rng(config.SEED)
    epochs = epochs or config.XOR_EPOCHS

    network = FeedforwardNetwork(
        len(inputs[0]),
        config.XOR_HIDDEN_LAYERS,
        len(targets[0]),
        activation=config.XOR_ACTIVATION,
        rng=rng
    )

    for x, t in zip(inputs, targets):
        logger.debug(f"Untrained | input={x.tolist()} | expected={t.tolist()} | "
                     f"predicted={network.predict(x).round(4).tolist()}")

    for epoch in range(epochs):
        total_loss = 0.0
        for x, t in zip(inputs, targets):
            network.train(x, t, config.XOR_LEARNING_RATE)
            total_loss += float(np.sum((network.predict(x) - t) ** 2))

        if (epoch + 1) % config.XOR_LOG_EVERY == 0:
            logger.info(f"Epoch {epoch + 1} | avg_loss={total_loss / len(inputs):.6f}")

    return network


def run_xor(config: Config) -> None:
    """Train on XOR and log the predictions."""
    logger = get_logger('xor')
    logger.info(f"Starting XOR training | hidden={config.XOR_HIDDEN_LAYERS} | "
                f"lr={config.XOR_LEARNING_RATE} | epochs={config.XOR_EPOCHS}")

    network = train_xor(config)

    for x, t in zip(XOR_INPUTS, XOR_OUTPUTS):
        logger.info(f"input={x.tolist()} | expected={t.tolist()} | "
                    f"predicted={network.predict(x).round(4).tolist()}")


def run_training(config: Config, episodes: int, eval_games: int) -> None:
    """Train the agent as X, evaluate it (unless eval_games is 0), and log one demo game."""
    logger = get_logger('main')

    game = TicTacToe(config)
    agent = DQNAgent(game.state_size, game.action_size, config, player=PLAYER_X)

    trainer = Trainer(game, agent, config)
    trainer.train(num_episodes=episodes)

    evaluator = Evaluator(game, agent, config)
    if eval_games > 0:
        results = evaluator.evaluate(num_games=eval_games, episode_num=episodes)
        evaluator.log_results(results)

    boards: List[str] = evaluator.play_demo_game()
    logger.info("Demo game after training (agent is X):\n" + "\n\n".join(boards))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tic-Tac-Toe DQN - a numpy Deep Q-Network trained by self-play",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES
========
    python main.py                        Train with the default config
    python main.py --episodes 2000        Shorter run
    python main.py --seed 7 --log-file    Reproducible run, also logged to logs/
    python main.py --xor                  XOR backpropagation demo
        """
    )

    parser.add_argument(
        '--xor', action='store_true',
        help='Run the XOR demonstration instead of DQN training'
    )
    parser.add_argument(
        '--episodes', type=int, default=None,
        help='Number of training episodes (default: config MAX_EPISODES)'
    )
    parser.add_argument(
        '--eval-games', type=int, default=None,
        help='Greedy games played against the random opponent after training'
    )
    parser.add_argument(
        '--batch-size', type=int, default=None,
        help='Experiences sampled per training step'
    )
    parser.add_argument(
        '--lr', type=float, default=None,
        help='Learning rate'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducibility'
    )
    parser.add_argument(
        '--log-level', type=str, default=None,
        choices=[level.name for level in LogLevel],
        help='Console log level'
    )
    parser.add_argument(
        '--log-file', action='store_true',
        help='Also write logs to a timestamped file in LOG_DIR'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    config = Config()
    if args.batch_size is not None:
        config.BATCH_SIZE = args.batch_size
    if args.lr is not None:
        config.LEARNING_RATE = args.lr
    if args.seed is not None:
        config.SEED = args.seed
    if args.log_level is not None:
        config.LOG_LEVEL = args.log_level
    config.__post_init__()

    setup_logging(
        log_dir=config.LOG_DIR,
        level=LogLevel[config.LOG_LEVEL],
        file_output=args.log_file
    )

    if args.xor:
        run_xor(config)
        return

    episodes = args.episodes if args.episodes is not None else config.MAX_EPISODES
    eval_games = args.eval_games if args.eval_games is not None else config.EVAL_GAMES
    run_training(config, episodes=episodes, eval_games=eval_games)


if __name__ == "__main__":
    main()
