"""Scorer modules for the interview scoring engine."""

from typing import Optional

from ..models.interview import InterviewAnalysis, InterviewSessionMetrics
from ..models.resume import ResumeAnalysis, ResumeInput
from .base_scorer import BaseScorer, Findings, clamp
from .content_analyzer import ResponseContentAnalyzer
from .interview_scorer import InterviewScorer
from .policy import (
    CompletionBand,
    FeedbackBand,
    InterviewScoringPolicy,
    ResumeScoringPolicy,
    SizeBucket,
    band_for,
)
from .resume_scorer import ResumeScorer


def analyze_resume(resume: Optional[ResumeInput], selected_role: Optional[str] = None) -> ResumeAnalysis:
    """Score a resume with the built-in policy.

    Args:
        resume: Resume metadata, or None when nothing was uploaded.
        selected_role: Overrides ``resume.selected_role`` when given.
    """
    if resume is not None and selected_role is not None:
        resume = resume.model_copy(update={"selected_role": selected_role})
    return ResumeScorer().score(resume)


def analyze_interview_performance(session: InterviewSessionMetrics) -> InterviewAnalysis:
    """Score an interview session with the built-in policy."""
    return InterviewScorer().score(session)


__all__ = [
    "BaseScorer",
    "Findings",
    "clamp",
    "ResponseContentAnalyzer",
    "InterviewScorer",
    "ResumeScorer",
    "CompletionBand",
    "FeedbackBand",
    "InterviewScoringPolicy",
    "ResumeScoringPolicy",
    "SizeBucket",
    "band_for",
    "analyze_resume",
    "analyze_interview_performance",
]
