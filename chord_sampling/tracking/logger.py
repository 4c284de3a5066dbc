"""Structured logging utilities for chord sampling.

Samplers and the factory report through these helpers instead of printing,
so the outer optimizer controls verbosity and destinations.
"""

import logging
from pathlib import Path
from typing import Optional

from chord_sampling.config import TrackingConfig


LOGGER_NAME = 'chord_sampling'


def get_logger() -> logging.Logger:
    """Return the package logger used when a component is given none."""
    return logging.getLogger(LOGGER_NAME)


def setup_logger(
    name: str = LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[Path] = None
) -> logging.Logger:
    """Setup a logger with consistent formatting.

    Parameters
    ----------
    name : str, default='chord_sampling'
        Logger name.
    level : int, default=logging.INFO
        Logging level.
    log_file : Path, optional
        Path to log file. If provided, logs will be written to both console and file.
        File will be overwritten (mode='w') to start fresh each run.

    Returns
    -------
    logger : logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear any existing handlers to start fresh
    logger.handlers.clear()

    # Format: [2025-12-10 10:30:45] INFO: Message
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def configure_logging(config: TrackingConfig, name: str = LOGGER_NAME) -> logging.Logger:
    """Setup the package logger from a TrackingConfig.

    The log file, when enabled, is <log_directory>/<name>.log.
    """
    config.validate()
    log_file = None
    if config.log_to_file:
        log_file = Path(config.log_directory) / f"{name}.log"
    return setup_logger(name=name, level=getattr(logging, config.log_level), log_file=log_file)


def log_phase_start(logger: logging.Logger, phase_name: str, details: str = "") -> None:
    """Log the start of a major phase.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance.
    phase_name : str
        Name of the phase.
    details : str, optional
        Additional details.
    """
    separator = "=" * 80
    logger.info(separator)
    logger.info(f"{phase_name.upper()}")
    if details:
        logger.info(details)
    logger.info(separator)


def log_phase_end(logger: logging.Logger, phase_name: str, elapsed_time: float = None) -> None:
    """Log the end of a major phase.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance.
    phase_name : str
        Name of the phase.
    elapsed_time : float, optional
        Time elapsed in seconds.
    """
    separator = "=" * 80
    logger.info(separator)
    msg = f"{phase_name.upper()} COMPLETE"
    if elapsed_time is not None:
        msg += f" ({elapsed_time:.1f}s)"
    logger.info(msg)
    logger.info(separator)


def log_ranking_summary(
    logger: logging.Logger,
    n_chords: int,
    boundary_index: int,
    binomial_p: float,
    index_std: float
) -> None:
    """Log where the uncertain sampler will concentrate its draws.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance.
    n_chords : int
        Number of ranked chords.
    boundary_index : int
        Number of chords estimated more likely possible than not.
    binomial_p : float
        Success probability of the rank distribution.
    index_std : float
        Standard deviation of the sampled rank.
    """
    logger.info(f"Ranked {n_chords} chords")
    logger.info(f"  Boundary index: {boundary_index}")
    logger.info(f"  Binomial p: {binomial_p:.6f}")
    logger.info(f"  Rank std: {index_std:.2f}")
    if boundary_index == 0 or boundary_index == n_chords:
        log_warning(
            logger,
            f"Degenerate ranking (boundary index {boundary_index}); "
            f"every draw returns the same chord"
        )


def log_rejection_stats(logger: logging.Logger, attempts: int, probability: float) -> None:
    """Log how many draws the rejection sampler needed for one chord.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance.
    attempts : int
        Draws including the accepted one.
    probability : float
        Estimated probability of the accepted chord.
    """
    logger.debug(f"Accepted chord after {attempts} draw(s) (p={probability:.4f})")


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """Log an error with context.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance.
    error : Exception
        The exception that occurred.
    context : str, optional
        Additional context about where the error occurred.
    """
    if context:
        logger.error(f"Error in {context}: {type(error).__name__}: {str(error)}")
    else:
        logger.error(f"{type(error).__name__}: {str(error)}")


def log_warning(logger: logging.Logger, message: str) -> None:
    """Log a warning message."""
    logger.warning(f"⚠️  {message}")


def log_success(logger: logging.Logger, message: str) -> None:
    """Log a success message."""
    logger.info(f"✓ {message}")
