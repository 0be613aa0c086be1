"""Configuration Manager for scoring policies, role profiles and settings."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from ..scorers.interview_scorer import InterviewScorer
from ..scorers.policy import InterviewScoringPolicy, ResumeScoringPolicy
from ..scorers.resume_scorer import ResumeScorer
from ..utils.exceptions import ConfigurationError
from ..utils.logging import get_logger
from .question_bank import QuestionBank
from .role_catalog import RoleCatalog

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """``logging:`` section, mapped onto ``setup_logging`` arguments."""

    level: str = "WARNING"
    structured: bool = False
    file_path: Optional[str] = None
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3
    console_output: bool = True
    file_output: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Build from a YAML section, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class SessionConfig:
    """Practice session settings."""

    personal_questions: int = 2
    role_questions: int = 3
    answer_time_limit_seconds: int = 120

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """Build from a YAML section, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


class AppConfig(BaseModel):
    """Application settings outside the scoring policies."""

    app_name: str = Field(default="Interview Scoring Engine", description="Application name")
    environment: str = Field(default="development", description="Name used to pick scoring.<environment>.yaml")
    debug: bool = Field(default=False, description="Verbose diagnostics")

    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")
    session: SessionConfig = Field(default_factory=SessionConfig, description="Practice session settings")

    class Config:
        validate_assignment = True


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """Loads settings, scoring policies and role profiles.

    Sources, later ones winning:

    1. built-in defaults
    2. ``<config_path>/scoring.yaml``
    3. ``<config_path>/scoring.<ENVIRONMENT>.yaml``
    4. ``LOG_LEVEL`` / ``DEBUG`` environment variables (``.env`` is read first)

    Role profiles and question lists come from ``<config_path>/roles.yaml``
    and extend the built-in roles. Missing files are not an error.
    """

    def __init__(self, config_path: str = "config", env_file: str = ".env"):
        self.config_path = Path(config_path)
        self.env_file = Path(env_file)
        self.logger = get_logger("configuration_manager")

        self.config: Optional[AppConfig] = None
        self.resume_policy = ResumeScoringPolicy()
        self.interview_policy = InterviewScoringPolicy()
        self.role_catalog = RoleCatalog()
        self.question_bank = QuestionBank()
        self._raw: Dict[str, Any] = {}

    def initialize(self) -> "ConfigurationManager":
        """Load and validate every configuration source.

        Raises:
            ConfigurationError: If a file is unreadable or a value is invalid.
        """
        try:
            self._load_environment_variables()
            self._raw = self._load_scoring_files()
            self.config = self._build_app_config(self._raw)
            self.resume_policy = self._build_policy(ResumeScoringPolicy, "resume")
            self.interview_policy = self._build_policy(InterviewScoringPolicy, "interview")
            self._load_roles()
        except ConfigurationError:
            raise
        except Exception as e:
            self.logger.error(f"Could not load scoring configuration from {self.config_path}: {e}")
            raise ConfigurationError(f"Invalid scoring configuration: {e}")

        self.logger.info(
            "Scoring configuration loaded",
            extra={"environment": self.config.environment, "roles": len(self.role_catalog)},
        )
        return self

    def _load_environment_variables(self) -> None:
        """Apply ``.env`` without overriding variables already set."""
        if self.env_file.exists():
            load_dotenv(self.env_file)
            self.logger.debug(f"Applied {self.env_file}")

    def _load_scoring_files(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}

        base_file = self.config_path / "scoring.yaml"
        if base_file.exists():
            data = _deep_merge(data, self._load_yaml_file(base_file))
            self.logger.debug(f"Read {base_file}")

        environment = os.getenv("ENVIRONMENT") or "development"
        overlay_file = self.config_path / f"scoring.{environment}.yaml"
        if overlay_file.exists():
            data = _deep_merge(data, self._load_yaml_file(overlay_file))
            self.logger.debug(f"Read {overlay_file} for {environment}")

        return data

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse one YAML file that must hold a mapping (an empty file is ``{}``)."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load YAML file {file_path}: {str(e)}",
                                     details={"file_path": str(file_path)})

        if not isinstance(content, dict):
            raise ConfigurationError(f"Expected a mapping at the top of {file_path}",
                                     details={"file_path": str(file_path)})
        return content

    def _build_app_config(self, data: Dict[str, Any]) -> AppConfig:
        app = data.get("app", {}) or {}
        logging_config = LoggingConfig.from_dict(data.get("logging", {}) or {})

        env_level = os.getenv("LOG_LEVEL")
        if env_level:
            logging_config.level = env_level.upper()
        if logging_config.level.upper() not in LOG_LEVELS:
            raise ConfigurationError(f"Unknown log level '{logging_config.level}'", config_key="logging.level")

        debug = os.getenv("DEBUG", str(app.get("debug", False))).lower() in ("1", "true", "yes")
        session = SessionConfig.from_dict(data.get("session", {}) or {})
        if session.personal_questions < 0 or session.role_questions < 0:
            raise ConfigurationError("Question counts must not be negative", config_key="session")

        return AppConfig(
            app_name=app.get("name", "Interview Scoring Engine"),
            environment=os.getenv("ENVIRONMENT") or "development",
            debug=debug,
            logging=logging_config,
            session=session,
        )

    def _build_policy(self, policy_cls, section: str):
        overrides = self._raw.get(section, {}) or {}
        if not isinstance(overrides, dict):
            raise ConfigurationError(f"'{section}' must be a mapping", config_key=section)
        try:
            policy = policy_cls.from_dict(overrides)
            policy.validate()
        except (TypeError, KeyError, ValueError) as e:
            raise ConfigurationError(f"Invalid {section} policy: {str(e)}", config_key=section)
        return policy

    def _load_roles(self) -> None:
        roles_file = self.config_path / "roles.yaml"
        if not roles_file.exists():
            self.logger.debug(f"Roles configuration file not found: {roles_file}")
            return

        roles_config = self._load_yaml_file(roles_file)
        entries = roles_config.get("roles", {}) or {}
        include_defaults = bool(roles_config.get("include_defaults", True))

        profiles: Dict[str, Dict[str, Any]] = {}
        questions: Dict[str, List[str]] = {}
        for name, entry in entries.items():
            entry = dict(entry or {})
            if "questions" in entry:
                questions[str(name)] = list(entry.pop("questions") or [])
            profiles[str(name)] = entry

        self.role_catalog = RoleCatalog.from_mapping(profiles, include_defaults=include_defaults)
        base_questions = dict(self.question_bank.role_questions) if include_defaults else {}
        base_questions.update(questions)
        personal = roles_config.get("personal_questions")
        self.question_bank = QuestionBank(personal_questions=personal, role_questions=base_questions)
        self.logger.info(f"Loaded {len(entries)} role profiles from {roles_file}")

    def get_config(self) -> AppConfig:
        """Loaded settings; ``initialize`` must have run."""
        if not self.config:
            raise ConfigurationError("Configuration not loaded")
        return self.config

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``session.role_questions``."""
        if not self.config:
            return default

        value: Any = self.config
        for part in key.split("."):
            if hasattr(value, part):
                value = getattr(value, part)
            elif isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default
        return value

    def get_environment(self) -> str:
        if not self.config:
            return "development"
        return self.config.environment

    def is_debug_mode(self) -> bool:
        if not self.config:
            return False
        return self.config.debug

    def get_logging_config(self) -> Dict[str, Any]:
        """Keyword arguments for ``setup_logging``."""
        logging_config = self.config.logging if self.config else LoggingConfig()
        return {
            "level": logging_config.level,
            "structured": logging_config.structured,
            "log_file": logging_config.file_path,
            "max_file_size": logging_config.max_file_size,
            "backup_count": logging_config.backup_count,
            "enable_console": logging_config.console_output,
            "enable_file": logging_config.file_output,
        }

    def get_resume_policy(self) -> ResumeScoringPolicy:
        return self.resume_policy

    def get_interview_policy(self) -> InterviewScoringPolicy:
        return self.interview_policy

    def get_role_catalog(self) -> RoleCatalog:
        return self.role_catalog

    def get_question_bank(self) -> QuestionBank:
        return self.question_bank

    def create_resume_scorer(self) -> ResumeScorer:
        """A resume scorer wired with the loaded policy and roles."""
        return ResumeScorer(policy=self.resume_policy, role_catalog=self.role_catalog)

    def create_interview_scorer(self) -> InterviewScorer:
        """An interview scorer wired with the loaded policy and roles."""
        return InterviewScorer(policy=self.interview_policy, role_catalog=self.role_catalog)

    def get_configuration_summary(self) -> Dict[str, Any]:
        """Get a summary of the current configuration."""
        if not self.config:
            return {"error": "Configuration not loaded"}

        return {
            "app_name": self.config.app_name,
            "environment": self.config.environment,
            "debug": self.config.debug,
            "log_level": self.config.logging.level,
            "roles": self.role_catalog.supported_roles(),
            "resume": {
                "strict_format": self.resume_policy.strict_format,
                "score_ceiling": self.resume_policy.score_ceiling,
            },
            "interview": {
                "completion_bands": [band.name for band in self.interview_policy.completion_bands],
                "rushed_penalty": self.interview_policy.rushed_penalty,
            },
        }
