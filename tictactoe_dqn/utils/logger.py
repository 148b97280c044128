"""
Centralized logging infrastructure for the Tic-Tac-Toe DQN project.

Usage:
    from tictactoe_dqn.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Training started")
    logger.debug("Epsilon: 0.95")

Configuration:
    Call setup_logging() once at startup (main.py does this from the
    LOG_LEVEL / LOG_DIR config values). Without it, get_logger() falls back
    to console-only logging at INFO.
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


ROOT_LOGGER_NAME = 'tictactoe_dqn'


class LogLevel(Enum):
    """Log levels for configuration."""
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


# Module-level state
_initialized = False
_file_handler: Optional[logging.FileHandler] = None


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def __init__(self, fmt: str, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        if self.use_colors:
            color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.COLORS['RESET']}"
        return super().format(record)


def setup_logging(
    log_dir: str = 'logs',
    level: LogLevel = LogLevel.INFO,
    console_output: bool = True,
    file_output: bool = False,
    log_filename: Optional[str] = None,
) -> None:
    """
    Initialize the logging system.

    Args:
        log_dir: Directory for log files
        level: Minimum log level to capture
        console_output: Whether to output to console
        file_output: Whether to output to file
        log_filename: Custom log filename (default: training_YYYYMMDD_HHMMSS.log)
    """
    global _initialized, _file_handler

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level.value)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.propagate = False
    _file_handler = None

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            use_colors=True
        ))
        root_logger.addHandler(console_handler)

    if file_output:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        if log_filename is None:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            log_filename = f'training_{timestamp}.log'

        _file_handler = logging.FileHandler(path / log_filename, mode='a', encoding='utf-8')
        _file_handler.setLevel(logging.DEBUG)  # Capture everything in file
        _file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        ))
        root_logger.addHandler(_file_handler)

    _initialized = True
    root_logger.debug(f"Logging initialized (level={level.name}, file={file_output})")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under the project namespace

    Example:
        logger = get_logger(__name__)
        logger.info("Message")
    """
    if not _initialized:
        setup_logging()

    prefix = ROOT_LOGGER_NAME + '.'
    if name.startswith(prefix):
        name = name[len(prefix):]

    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def get_log_path() -> Optional[Path]:
    """Get the current log file path."""
    if _file_handler is not None:
        return Path(_file_handler.baseFilename)
    return None


def log_training_metrics(
    episode: int,
    wins: int,
    losses: int,
    draws: int,
    epsilon: float,
    avg_loss: Optional[float] = None,
    steps: Optional[int] = None,
) -> None:
    """
    Log a window of training results in a consistent format.

    Args:
        episode: Episode number at the end of the window
        wins: Agent wins in the window
        losses: Agent losses in the window
        draws: Draws in the window
        epsilon: Current exploration rate
        avg_loss: Recent training loss (if available)
        steps: Total agent steps so far (if available)
    """
    logger = get_logger('training')

    metrics = [
        f"ep={episode}",
        f"wins={wins}",
        f"losses={losses}",
        f"draws={draws}",
        f"eps={epsilon:.4f}",
    ]
    if avg_loss is not None:
        metrics.append(f"loss={avg_loss:.6f}")
    if steps is not None:
        metrics.append(f"steps={steps}")

    logger.info(" | ".join(metrics))
