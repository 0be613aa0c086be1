"""Scoring of mock interview sessions.

Four sub-scores (body language, grammar, skills, confidence) are computed
independently from the same session and averaged into the overall score.
Each follows the same pipeline:

1. zero-engagement gate (nothing answered => 0)
2. device gate (camera / microphone not used => 0, or a small floor)
3. completion-rate band => base score
4. average answer time modulation
5. rushed-answer penalty
6. content adjustment from the answer text, when supplied
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..models.enums import ScoreDimension
from ..models.interview import (
    GrammarIssueReport,
    InterviewAnalysis,
    InterviewSessionMetrics,
    ResponseContentProfile,
)
from ..services.role_catalog import RoleCatalog
from .base_scorer import BaseScorer, Findings, clamp
from .content_analyzer import ResponseContentAnalyzer
from .policy import CompletionBand, InterviewScoringPolicy, band_for

# Completion bands at or above this base score are reported as strengths
STRENGTH_BASE_SCORE = 60

CONTENT_METRIC = {
    ScoreDimension.BODY_LANGUAGE: "quality_score",
    ScoreDimension.GRAMMAR: "communication_score",
    ScoreDimension.SKILLS: "skills_relevance",
    ScoreDimension.CONFIDENCE: "confidence",
}

DIMENSION_MESSAGES: Dict[ScoreDimension, Dict[str, str]] = {
    ScoreDimension.BODY_LANGUAGE: {
        "zero": "Skipped all questions - no visible engagement to assess",
        "device_off": "Camera not enabled - no body language assessment possible",
        "very_low": "Extremely poor engagement - answered less than 30% of questions",
        "low": "Poor engagement - answer at least 60% of questions",
        "moderate": "Moderate engagement - aim for 80%+ completion",
        "good": "Good visual presence and engagement",
        "excellent": "Excellent visual engagement throughout",
        "brief": "Very short answers leave little time for engaged on-camera presence",
        "sweet": "Comfortable, sustained on-camera presence",
        "verbose": "Long answers - keep eye contact and avoid fidgeting",
        "rushed": "Too many rushed answers - slow down and stay engaged on camera",
        "content_strong": "Substantive answers backed by examples",
        "content_weak": "Add substance and concrete examples to your answers",
    },
    ScoreDimension.GRAMMAR: {
        "zero": "No questions answered - cannot assess communication skills",
        "device_off": "Microphone not enabled - no speech assessment possible",
        "very_low": "Too few answers to judge communication - answer more questions",
        "low": "Limited speaking time - answer most questions to show communication skills",
        "moderate": "Adequate communication sample - complete more questions for a fuller picture",
        "good": "Good communication across most answers",
        "excellent": "Clear communication sustained across the interview",
        "brief": "Responses too brief - give fuller, structured answers",
        "sweet": "Well-paced, detailed responses",
        "verbose": "Answers run long - keep responses focused",
        "rushed": "Many answers were cut short - finish your thoughts before moving on",
        "content_strong": "Well-structured, articulate answers",
        "content_weak": "Structure answers in complete sentences",
        "fillers": "Reduce filler words such as 'um', 'basically' and 'you know'",
        "fragments": "Finish answers with complete sentences",
        "agreement": "Watch subject-verb agreement (e.g. 'they were', not 'they was')",
    },
    ScoreDimension.SKILLS: {
        "zero": "Cannot assess skills without answering questions",
        "very_low": "Extremely limited skill demonstration",
        "low": "Insufficient skill demonstration - complete the majority of questions",
        "moderate": "Basic skill demonstration - aim for 80%+ completion",
        "good": "Good demonstration of role-specific skills",
        "excellent": "Excellent demonstration of {role} expertise",
        "brief": "Rushed responses show little real skill demonstration",
        "sweet": "Thoughtful responses demonstrating depth of expertise",
        "verbose": "Long answers may bury your key skills - lead with the most relevant point",
        "rushed": "Most answers were too quick to demonstrate skills",
        "content_strong": "Answers reference relevant {role} skills and evidence",
        "content_weak": "Mention concrete {role} skills, tools, and measurable results",
    },
    ScoreDimension.CONFIDENCE: {
        "zero": "Skipping the entire interview leaves no confidence to assess",
        "device_off": "Professional confidence requires both camera and microphone",
        "device_partial": "Enable both camera and microphone for a full confidence assessment",
        "very_low": "Very low participation suggests confidence issues",
        "low": "Low participation suggests confidence issues",
        "moderate": "Moderate confidence - complete more questions to show strength",
        "good": "Good confidence shown through strong participation",
        "excellent": "Excellent confidence shown through complete engagement",
        "brief": "Rushed responses suggest nervousness or lack of preparation",
        "sweet": "Steady response timing shows professional composure",
        "verbose": "Over-long answers can read as uncertainty - be decisive",
        "rushed": "Many rushed answers suggest nervousness",
        "content_strong": "Confident, ownership-driven phrasing",
        "content_weak": "Use first-person achievement language, e.g. 'I led' or 'I delivered'",
        "completed": "Completed the full interview",
        "incomplete": "Finish the full interview to build stamina and confidence",
    },
}

INTERVIEW_FEEDBACK_TEMPLATES = {
    "No Participation": (
        "No measurable interview performance. You answered {answered}/{total} questions "
        "({rate:.1f}% completion) with {avg:.1f}s average response time. "
        "Restart with camera and microphone enabled and answer each {role} question."
    ),
    "Critical Failure": (
        "Severely inadequate performance. You answered only {answered}/{total} questions "
        "({rate:.1f}% completion) with {avg:.1f}s average response time. "
        "Comprehensive preparation is needed before a {role} interview."
    ),
    "Poor Performance": (
        "Completion rate: {rate:.1f}% with {avg:.1f}s average response time. "
        "Significant gaps in preparation and communication for the {role} role."
    ),
    "Below Average": (
        "You completed {rate:.1f}% of questions with {avg:.1f}s average responses. "
        "Basic participation, but answers lack the depth expected for the {role} role."
    ),
    "Average Performance": (
        "{rate:.1f}% completion rate with {avg:.1f}s average response time. "
        "Demonstrates basic {role} competency; work on depth, confidence and polish."
    ),
    "Good Performance": (
        "{rate:.1f}% completion with {avg:.1f}s average response time. "
        "Shows professional readiness and solid {role} competency."
    ),
    "Excellent Performance": (
        "{rate:.1f}% completion with {avg:.1f}s average response time. "
        "Exceptional preparation and strong {role} expertise - interview ready."
    ),
}


@dataclass(frozen=True)
class SessionFacts:
    """Values derived once per session and shared by every sub-score."""

    answered: int
    completion_rate: float
    average_time: float
    rushed_count: int
    content: Optional[ResponseContentProfile]
    grammar: Optional[GrammarIssueReport]
    role: str


class InterviewScorer(BaseScorer):
    """Scores a completed interview session across four dimensions."""

    def __init__(self, policy: Optional[InterviewScoringPolicy] = None,
                 role_catalog: Optional[RoleCatalog] = None,
                 content_analyzer: Optional[ResponseContentAnalyzer] = None):
        super().__init__("interview")
        self.policy = policy or InterviewScoringPolicy()
        self.content_analyzer = content_analyzer or ResponseContentAnalyzer(role_catalog)

    def _score(self, session: InterviewSessionMetrics) -> InterviewAnalysis:
        facts = self._derive_facts(session)

        scores: Dict[ScoreDimension, int] = {}
        findings = Findings()
        for dimension in ScoreDimension:
            score, dimension_findings = self._score_dimension(dimension, facts, session)
            scores[dimension] = score
            findings.extend(dimension_findings)

        overall = int(round(clamp(sum(scores.values()) / len(scores))))
        feedback = self._feedback(overall, facts, session)

        self.log_operation("score_interview", {
            "role": session.selected_role,
            "completion_rate": facts.completion_rate,
            "average_time": facts.average_time,
            "overall_score": overall,
        })
        return InterviewAnalysis(
            overall_score=overall,
            body_language_score=scores[ScoreDimension.BODY_LANGUAGE],
            grammar_score=scores[ScoreDimension.GRAMMAR],
            skills_score=scores[ScoreDimension.SKILLS],
            confidence_score=scores[ScoreDimension.CONFIDENCE],
            feedback=feedback,
            strengths=findings.strengths,
            improvements=findings.improvements,
        )

    def _derive_facts(self, session: InterviewSessionMetrics) -> SessionFacts:
        timings = session.effective_timings()
        rushed = sum(1 for seconds in timings if seconds < self.policy.rushed_threshold_seconds)
        if session.questions_answered > session.total_questions:
            self.logger.warning(
                f"Session reports {session.questions_answered} answers for "
                f"{session.total_questions} questions; using completion rate {session.completion_rate:.0%}"
            )
        return SessionFacts(
            answered=session.questions_answered,
            completion_rate=session.completion_rate,
            average_time=session.average_time_per_question,
            rushed_count=rushed,
            content=self.content_analyzer.profile(session.responses, session.selected_role),
            grammar=self.content_analyzer.grammar_issues(session.responses) if session.responses else None,
            role=session.selected_role or "target",
        )

    def completion_band(self, completion_rate: float) -> CompletionBand:
        """The highest completion band the rate reaches."""
        chosen = self.policy.completion_bands[0]
        for band in self.policy.completion_bands:
            if completion_rate >= band.min_rate:
                chosen = band
        return chosen

    def _score_dimension(self, dimension: ScoreDimension, facts: SessionFacts,
                         session: InterviewSessionMetrics) -> Tuple[int, Findings]:
        policy = self.policy
        messages = DIMENSION_MESSAGES[dimension]
        findings = Findings()

        def note(key: str, is_strength: bool) -> None:
            if key in messages:
                findings.add(messages[key].format(role=facts.role), is_strength)

        if facts.answered == 0:
            note("zero", False)
            return 0, findings

        gated = self._device_gate(dimension, session)
        if gated is not None:
            score, key = gated
            note(key, False)
            return score, findings

        band = self.completion_band(facts.completion_rate)
        score: float = band.base_score
        note(band.name, band.base_score >= STRENGTH_BASE_SCORE)

        score += self._timing_adjustment(facts.average_time, note)

        if facts.rushed_count > policy.rushed_fraction * facts.answered:
            score -= policy.rushed_penalty
            note("rushed", False)

        if facts.content is not None:
            metric = getattr(facts.content, CONTENT_METRIC[dimension])
            score += (metric - policy.content_neutral) * 10 * policy.content_weight
            if metric >= policy.content_strength_threshold:
                note("content_strong", True)
            elif metric <= policy.content_weakness_threshold:
                note("content_weak", False)

        if dimension is ScoreDimension.GRAMMAR and facts.grammar is not None:
            score -= self._grammar_penalty(facts.grammar, note)

        if dimension is ScoreDimension.CONFIDENCE:
            if session.interview_completed:
                score += policy.completion_bonus
                note("completed", True)
            else:
                note("incomplete", False)

        return int(round(clamp(score))), findings

    def _device_gate(self, dimension: ScoreDimension,
                     session: InterviewSessionMetrics) -> Optional[Tuple[int, str]]:
        """Forced score and message key when required devices were off."""
        if dimension is ScoreDimension.BODY_LANGUAGE and not session.camera_used:
            return 0, "device_off"
        if dimension is ScoreDimension.GRAMMAR and not session.microphone_used:
            return 0, "device_off"
        if dimension is ScoreDimension.CONFIDENCE:
            devices = int(session.camera_used) + int(session.microphone_used)
            if devices == 0:
                return 0, "device_off"
            if devices == 1:
                return self.policy.partial_device_confidence_floor, "device_partial"
        return None

    def _timing_adjustment(self, average_time: float, note) -> int:
        policy = self.policy
        if average_time < policy.brief_threshold_seconds:
            note("brief", False)
            return -policy.brief_penalty
        if policy.sweet_spot_min_seconds <= average_time <= policy.sweet_spot_max_seconds:
            note("sweet", True)
            return policy.sweet_spot_bonus
        if average_time > policy.verbose_threshold_seconds:
            note("verbose", False)
            return -policy.verbose_penalty
        return 0

    def _grammar_penalty(self, report: GrammarIssueReport, note) -> int:
        policy = self.policy
        penalty = 0
        if report.filler_rate > policy.filler_rate_limit:
            penalty += policy.filler_penalty
            note("fillers", False)
        if report.fragment_rate > policy.fragment_rate_limit:
            penalty += policy.fragment_penalty
            note("fragments", False)
        if report.agreement_error_rate > policy.agreement_rate_limit:
            penalty += policy.agreement_penalty
            note("agreement", False)
        return penalty

    def _feedback(self, overall: int, facts: SessionFacts, session: InterviewSessionMetrics) -> str:
        band = band_for(overall, self.policy.feedback_bands)
        template = INTERVIEW_FEEDBACK_TEMPLATES.get(
            band.label, "{rate:.1f}% completion with {avg:.1f}s average response time."
        )
        detail = template.format(
            answered=session.questions_answered,
            total=session.total_questions,
            rate=facts.completion_rate * 100,
            avg=facts.average_time,
            role=facts.role,
        )
        return f"{band.label} ({overall}%): {detail}"


def summarize_scores(analysis: InterviewAnalysis) -> List[Tuple[str, int]]:
    """Dimension labels with their scores, in display order."""
    return [(dimension.label, analysis.sub_scores()[dimension.value]) for dimension in ScoreDimension]
