"""Service modules for the interview scoring engine."""

from .role_catalog import RoleCatalog, DEFAULT_ROLE_PROFILES
from .question_bank import QuestionBank, PERSONAL_QUESTIONS, ROLE_QUESTIONS

from .configuration_manager import ConfigurationManager, AppConfig, LoggingConfig, SessionConfig
from .interview_session import WizardState

__all__ = [
    "RoleCatalog",
    "DEFAULT_ROLE_PROFILES",
    "QuestionBank",
    "PERSONAL_QUESTIONS",
    "ROLE_QUESTIONS",
    "ConfigurationManager",
    "AppConfig",
    "LoggingConfig",
    "SessionConfig",
    "WizardState",
]
