"""Heuristic analysis of free-text interview answers.

Each answer starts every metric at a neutral 5.0 and moves it up or down
on simple text signals (length, evidence, structure, phrasing, role
keywords). The profile is the per-metric mean across answers.
"""

import re
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.interview import GrammarIssueReport, ResponseContentProfile
from ..services.role_catalog import RoleCatalog
from ..utils.logging import get_logger

METRICS = ("quality_score", "communication_score", "skills_relevance", "clarity", "confidence")

NEUTRAL_BASELINE = 5.0
SHORT_ANSWER_WORDS = 10
MODERATE_ANSWER_WORDS = 20
DETAILED_ANSWER_WORDS = (50, 200)
RAMBLING_ANSWER_WORDS = 250
KEYWORD_HIT_WEIGHT = 0.75
KEYWORD_BONUS_CAP = 4.0

QUANTIFIABLE_PATTERN = re.compile(
    r"\d+(?:\.\d+)?\s*(?:%|percent\b)"
    r"|\$\s?\d[\d,]*(?:\.\d+)?[kmb]?"
    r"|\b\d+\+?\s+(?:years?|months?)\b",
    re.IGNORECASE,
)
EXAMPLE_PHRASES = (
    "for example", "for instance", "such as", "specifically",
    "in my previous", "at my last", "as a result", "the result was",
)
ACHIEVEMENT_PATTERN = re.compile(
    r"\bi (?:achieved|led|built|delivered|managed|designed|improved|created|launched|increased|reduced)\b",
    re.IGNORECASE,
)
HEDGE_PATTERN = re.compile(
    r"\b(?:i think|maybe|i guess|sort of|kind of|probably|i'm not sure|i am not sure)\b",
    re.IGNORECASE,
)
FILLER_PATTERN = re.compile(r"\b(?:um+|uh+|erm|you know|basically|literally)\b", re.IGNORECASE)
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]+")
TERMINAL_PUNCTUATION_PATTERN = re.compile(r"[.!?][\"')\]]*$")
AGREEMENT_ERROR_PATTERNS = (
    re.compile(r"\b(?:he|she|it) (?:are|don't)\b", re.IGNORECASE),
    re.compile(r"\b(?:i|you|we|they) (?:is|has|does|doesn't)\b", re.IGNORECASE),
    re.compile(r"\b(?:you|we|they) was\b", re.IGNORECASE),
    re.compile(r"\bi are\b", re.IGNORECASE),
)


def count_sentences(text: str) -> int:
    """Number of non-empty sentences split on terminal punctuation."""
    return sum(1 for part in SENTENCE_SPLIT_PATTERN.split(text) if part.strip())


def has_quantifiable_evidence(text: str) -> bool:
    """Percentages, dollar amounts or an 'N years' style duration."""
    return QUANTIFIABLE_PATTERN.search(text) is not None


class ResponseContentAnalyzer:
    """Derives content and grammar signals from interview answers."""

    def __init__(self, role_catalog: Optional[RoleCatalog] = None):
        self.role_catalog = role_catalog or RoleCatalog()
        self.logger = get_logger("scorer.content")

    def profile(self, responses: Optional[Sequence[str]], role: str = "") -> Optional[ResponseContentProfile]:
        """Aggregate content profile, or None when no answers were captured."""
        if not responses:
            return None

        role_profile = self.role_catalog.get_profile(role)
        keywords = role_profile.all_keywords if role_profile else ()

        per_response = [self._score_response(text or "", keywords) for text in responses]
        averaged = {
            metric: round(sum(scores[metric] for scores in per_response) / len(per_response), 2)
            for metric in METRICS
        }
        self.logger.debug("Response content profile computed", extra={"responses": len(responses), **averaged})
        return ResponseContentProfile(response_count=len(responses), **averaged)

    def _score_response(self, text: str, keywords: Iterable[str]) -> Dict[str, float]:
        if not text.strip():
            return dict.fromkeys(METRICS, 0.0)

        metrics = dict.fromkeys(METRICS, NEUTRAL_BASELINE)
        lowered = text.lower()

        words = len(text.split())
        if words < SHORT_ANSWER_WORDS:
            metrics["quality_score"] -= 2
        elif DETAILED_ANSWER_WORDS[0] <= words <= DETAILED_ANSWER_WORDS[1]:
            metrics["quality_score"] += 2
        elif words > RAMBLING_ANSWER_WORDS:
            metrics["quality_score"] -= 1
            metrics["clarity"] -= 1
        elif words >= MODERATE_ANSWER_WORDS:
            metrics["quality_score"] += 1

        if has_quantifiable_evidence(text):
            metrics["quality_score"] += 1.5
            metrics["skills_relevance"] += 1

        if any(phrase in lowered for phrase in EXAMPLE_PHRASES):
            metrics["quality_score"] += 1
            metrics["skills_relevance"] += 0.5

        sentences = count_sentences(text)
        if sentences >= 3:
            metrics["communication_score"] += 2
            metrics["clarity"] += 1.5
        elif sentences == 2:
            metrics["communication_score"] += 1
            metrics["clarity"] += 0.5

        achievements = len(ACHIEVEMENT_PATTERN.findall(text))
        if achievements:
            metrics["confidence"] += min(3.0, 2 + 0.5 * (achievements - 1))
        hedges = len(HEDGE_PATTERN.findall(text))
        metrics["confidence"] -= min(3, hedges)

        hits = sum(1 for keyword in keywords if keyword in lowered)
        metrics["skills_relevance"] += min(KEYWORD_BONUS_CAP, KEYWORD_HIT_WEIGHT * hits)

        return {metric: max(0.0, min(10.0, value)) for metric, value in metrics.items()}

    def grammar_issues(self, responses: Optional[Sequence[str]]) -> GrammarIssueReport:
        """Count filler words, unterminated answers and agreement slips."""
        answers: List[str] = [text for text in (responses or []) if text and text.strip()]
        fillers = sum(len(FILLER_PATTERN.findall(text)) for text in answers)
        fragments = sum(1 for text in answers if not TERMINAL_PUNCTUATION_PATTERN.search(text.strip()))
        agreement_errors = sum(
            len(pattern.findall(text)) for text in answers for pattern in AGREEMENT_ERROR_PATTERNS
        )
        return GrammarIssueReport(
            filler_count=fillers,
            fragment_count=fragments,
            agreement_error_count=agreement_errors,
            response_count=len(responses or []),
        )
