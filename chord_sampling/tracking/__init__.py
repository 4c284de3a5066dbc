"""Tracking and monitoring utilities.

This subpackage handles structured logging for the samplers.
"""

from .logger import (
    LOGGER_NAME,
    get_logger,
    setup_logger,
    configure_logging,
    log_phase_start,
    log_phase_end,
    log_ranking_summary,
    log_rejection_stats,
    log_error,
    log_warning,
    log_success
)

__all__ = [
    'LOGGER_NAME',
    'get_logger',
    'setup_logger',
    'configure_logging',
    'log_phase_start',
    'log_phase_end',
    'log_ranking_summary',
    'log_rejection_stats',
    'log_error',
    'log_warning',
    'log_success'
]
