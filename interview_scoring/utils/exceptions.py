"""Errors raised at the edges of the scoring engine.

The scorers themselves never raise; these belong to configuration
loading, the interview wizard and the command line.
"""

from typing import Any, Dict, Optional


class InterviewScoringError(Exception):
    """Base error carrying a machine-readable code and free-form details."""

    error_code: Optional[str] = None

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}" if self.error_code else self.message


class ConfigurationError(InterviewScoringError):
    """A settings, policy or role file is unreadable or inconsistent.

    ``config_key`` is the dotted path of the offending section, for
    example ``interview.completion_bands``.
    """

    error_code = "CONFIG_ERROR"

    def __init__(self, message: str, config_key: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.config_key = config_key


class SessionError(InterviewScoringError):
    """A wizard transition was attempted from the wrong step."""

    error_code = "SESSION_ERROR"

    def __init__(self, message: str, step: Optional[str] = None, action: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.step = step
        self.action = action


class ParsingError(InterviewScoringError):
    """An input file given on the command line could not be read."""

    error_code = "PARSING_ERROR"

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
        self.file_path = file_path
