"""Data models for the interview scoring engine."""

from .base import BaseModel
from .enums import JobRole, ScoreDimension, WizardStep
from .interview import (
    GrammarIssueReport,
    InterviewAnalysis,
    InterviewSessionMetrics,
    ResponseContentProfile,
)
from .resume import ResumeAnalysis, ResumeInput, RoleProfile

__all__ = [
    "BaseModel",
    "JobRole",
    "ScoreDimension",
    "WizardStep",
    "GrammarIssueReport",
    "InterviewAnalysis",
    "InterviewSessionMetrics",
    "ResponseContentProfile",
    "ResumeAnalysis",
    "ResumeInput",
    "RoleProfile",
]
