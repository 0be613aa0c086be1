"""Heuristic resume and mock interview scoring engine."""

from .models import (
    GrammarIssueReport,
    InterviewAnalysis,
    InterviewSessionMetrics,
    JobRole,
    ResponseContentProfile,
    ResumeAnalysis,
    ResumeInput,
)
from .services import ConfigurationManager, QuestionBank, RoleCatalog, WizardState
from .scorers import (
    InterviewScorer,
    ResponseContentAnalyzer,
    ResumeScorer,
    analyze_interview_performance,
    analyze_resume,
)

__version__ = "1.0.0"

__all__ = [
    "GrammarIssueReport",
    "InterviewAnalysis",
    "InterviewSessionMetrics",
    "JobRole",
    "ResponseContentProfile",
    "ResumeAnalysis",
    "ResumeInput",
    "ConfigurationManager",
    "QuestionBank",
    "RoleCatalog",
    "WizardState",
    "InterviewScorer",
    "ResponseContentAnalyzer",
    "ResumeScorer",
    "analyze_interview_performance",
    "analyze_resume",
]
