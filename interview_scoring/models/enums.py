"""Enumeration types for the interview scoring engine."""

from enum import Enum, auto
from typing import List, Optional


class JobRole(Enum):
    """Job roles with built-in keyword profiles and question sets."""

    SOFTWARE_ENGINEER = "Software Engineer"
    PRODUCT_MANAGER = "Product Manager"
    DATA_SCIENTIST = "Data Scientist"
    UX_DESIGNER = "UX Designer"
    SALES_REPRESENTATIVE = "Sales Representative"
    MARKETING_MANAGER = "Marketing Manager"
    BUSINESS_ANALYST = "Business Analyst"
    DEVOPS_ENGINEER = "DevOps Engineer"

    @classmethod
    def _missing_(cls, value):
        """Handle names, lower-case labels and snake_case during lookup."""
        if isinstance(value, str):
            # Handle cases like "JobRole.DATA_SCIENTIST", "data scientist" or "data_scientist"
            if value.startswith("JobRole."):
                value = value.split(".", 1)[1]
            normalized = value.strip().replace("-", " ").replace("_", " ").lower()
            for member in cls:
                if member.value.lower() == normalized or member.name.replace("_", " ").lower() == normalized:
                    return member
        return None

    @classmethod
    def lookup(cls, value: Optional[str]) -> Optional["JobRole"]:
        """Return the matching role, or None for unknown or empty values."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def labels(cls) -> List[str]:
        """Display labels in declaration order."""
        return [member.value for member in cls]


class ScoreDimension(Enum):
    """The four independent interview sub-scores."""

    BODY_LANGUAGE = "body_language"
    GRAMMAR = "grammar"
    SKILLS = "skills"
    CONFIDENCE = "confidence"

    @property
    def label(self) -> str:
        """Human readable dimension name."""
        return {
            ScoreDimension.BODY_LANGUAGE: "Body Language",
            ScoreDimension.GRAMMAR: "Grammar & Speech",
            ScoreDimension.SKILLS: "Role-Specific Skills",
            ScoreDimension.CONFIDENCE: "Confidence Level",
        }[self]


class WizardStep(Enum):
    """Steps of the mock interview wizard."""

    WELCOME = auto()
    UPLOAD = auto()
    ROLE = auto()
    INTERVIEW = auto()
    ANALYSIS = auto()
    RESULTS = auto()

    @property
    def progress(self) -> float:
        """Wizard progress percentage for this step."""
        return (self.value - 1) / (len(WizardStep) - 1) * 100
