"""Utility modules for the Tic-Tac-Toe DQN project."""

from .logger import get_logger, setup_logging, log_training_metrics, LogLevel

__all__ = ['get_logger', 'setup_logging', 'log_training_metrics', 'LogLevel']
