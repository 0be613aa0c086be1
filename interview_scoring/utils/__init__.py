"""Utility modules for the interview scoring engine."""

from .logging import setup_logging, get_logger, set_correlation_id, get_correlation_id, log_performance
from .exceptions import (
    InterviewScoringError,
    ConfigurationError,
    SessionError,
    ParsingError,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "log_performance",
    "InterviewScoringError",
    "ConfigurationError",
    "SessionError",
    "ParsingError",
]
