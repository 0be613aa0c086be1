"""Interview session models for the interview scoring engine."""

from typing import List, Optional

from pydantic import Field

from .base import BaseModel


class InterviewSessionMetrics(BaseModel):
    """Telemetry of one completed (or aborted) mock interview."""

    questions_answered: int = Field(..., ge=0, description="Questions the candidate answered")
    total_questions: int = Field(..., ge=0, description="Questions offered in the session")
    time_spent_per_question_seconds: List[float] = Field(default_factory=list,
                                                         description="Elapsed seconds per answered question")
    camera_used: bool = Field(default=False, description="Camera was enabled")
    microphone_used: bool = Field(default=False, description="Microphone was enabled")
    interview_completed: bool = Field(default=False, description="Session reached the last question")
    selected_role: str = Field(default="", description="Target job role")
    responses: Optional[List[str]] = Field(default=None, description="Free-text or transcribed answers")

    @property
    def completion_rate(self) -> float:
        """Fraction of offered questions answered, within [0, 1]."""
        if self.total_questions <= 0:
            return 0.0
        return min(1.0, self.questions_answered / self.total_questions)

    def effective_timings(self) -> List[float]:
        """Per-question timings, padded with zeros for unrecorded answers."""
        timings = [max(0.0, float(t)) for t in self.time_spent_per_question_seconds]
        missing = self.questions_answered - len(timings)
        if missing > 0:
            timings.extend([0.0] * missing)
        return timings

    @property
    def average_time_per_question(self) -> float:
        """Mean of the effective timings, 0 when nothing was recorded."""
        timings = self.effective_timings()
        if not timings:
            return 0.0
        return sum(timings) / len(timings)


class ResponseContentProfile(BaseModel):
    """Aggregate content quality of the free-text answers, each on 0-10."""

    quality_score: float = Field(default=5.0, ge=0.0, le=10.0)
    communication_score: float = Field(default=5.0, ge=0.0, le=10.0)
    skills_relevance: float = Field(default=5.0, ge=0.0, le=10.0)
    clarity: float = Field(default=5.0, ge=0.0, le=10.0)
    confidence: float = Field(default=5.0, ge=0.0, le=10.0)
    response_count: int = Field(default=0, ge=0)


class GrammarIssueReport(BaseModel):
    """Counts of surface grammar problems across the answers."""

    filler_count: int = Field(default=0, ge=0)
    fragment_count: int = Field(default=0, ge=0)
    agreement_error_count: int = Field(default=0, ge=0)
    response_count: int = Field(default=0, ge=0)

    def _rate(self, count: int) -> float:
        if self.response_count == 0:
            return 0.0
        return count / self.response_count

    @property
    def filler_rate(self) -> float:
        return self._rate(self.filler_count)

    @property
    def fragment_rate(self) -> float:
        return self._rate(self.fragment_count)

    @property
    def agreement_error_rate(self) -> float:
        return self._rate(self.agreement_error_count)


class InterviewAnalysis(BaseModel):
    """Scores and feedback for one interview session."""

    overall_score: int = Field(..., ge=0, le=100)
    body_language_score: int = Field(..., ge=0, le=100)
    grammar_score: int = Field(..., ge=0, le=100)
    skills_score: int = Field(..., ge=0, le=100)
    confidence_score: int = Field(..., ge=0, le=100)
    feedback: str = Field(..., description="Overall feedback paragraph")
    strengths: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)

    def sub_scores(self) -> dict:
        """The four dimension scores keyed by dimension value."""
        return {
            "body_language": self.body_language_score,
            "grammar": self.grammar_score,
            "skills": self.skills_score,
            "confidence": self.confidence_score,
        }
