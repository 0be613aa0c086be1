"""Threshold and weight tables used by the scorers.

Every number the scorers use lives here so that scoring variants are a
matter of configuration. Policies are frozen dataclasses; YAML overrides go
through ``from_dict`` and are checked by ``validate``.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from ..utils.exceptions import ConfigurationError


@dataclass(frozen=True)
class FeedbackBand:
    """Lowest score that earns a feedback label."""

    min_score: int
    label: str


@dataclass(frozen=True)
class SizeBucket:
    """File size range (exclusive upper bound, None for unbounded)."""

    name: str
    upper_bound: Optional[int]
    points: int
    message: str
    is_strength: bool

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SizeBucket":
        """Create SizeBucket from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass(frozen=True)
class CompletionBand:
    """Lowest completion rate that earns a base score."""

    name: str
    min_rate: float
    base_score: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CompletionBand":
        """Create CompletionBand from dictionary."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


# Shared with the test suite; ordered from the lowest band upwards.
RESUME_FEEDBACK_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(0, "Critical Failure"),
    FeedbackBand(20, "Poor"),
    FeedbackBand(40, "Below Average"),
    FeedbackBand(60, "Average"),
    FeedbackBand(75, "Good"),
    FeedbackBand(90, "Excellent"),
)

INTERVIEW_FEEDBACK_BANDS: Tuple[FeedbackBand, ...] = (
    FeedbackBand(0, "No Participation"),
    FeedbackBand(1, "Critical Failure"),
    FeedbackBand(20, "Poor Performance"),
    FeedbackBand(40, "Below Average"),
    FeedbackBand(60, "Average Performance"),
    FeedbackBand(75, "Good Performance"),
    FeedbackBand(90, "Excellent Performance"),
)

DEFAULT_SIZE_BUCKETS: Tuple[SizeBucket, ...] = (
    SizeBucket("too_small", 30_000, -5,
               "Resume appears too brief - add more experience, skills, and achievements", False),
    SizeBucket("adequate", 100_000, 8,
               "Resume may lack detailed content - consider adding more specifics", False),
    SizeBucket("ideal", 300_000, 20,
               "Comprehensive resume with substantial content", True),
    SizeBucket("large", 500_000, 12,
               "Detailed resume content", True),
    SizeBucket("oversized", None, -5,
               "File size too large - may indicate formatting issues or embedded images", False),
)

DEFAULT_COMPLETION_BANDS: Tuple[CompletionBand, ...] = (
    CompletionBand("very_low", 0.0, 10),
    CompletionBand("low", 0.30, 25),
    CompletionBand("moderate", 0.60, 45),
    CompletionBand("good", 0.80, 65),
    CompletionBand("excellent", 0.95, 80),
)


def band_for(score: float, bands: Sequence[FeedbackBand]) -> FeedbackBand:
    """Return the highest band whose minimum the score reaches."""
    chosen = bands[0]
    for band in bands:
        if score >= band.min_score:
            chosen = band
    return chosen


def _coerce(value: Any, default: Any) -> Any:
    if isinstance(default, tuple) and isinstance(value, list):
        return tuple(value)
    return value


def _check_feedback_bands(bands: Sequence[FeedbackBand], key: str) -> None:
    if not bands or bands[0].min_score != 0:
        raise ConfigurationError("Feedback bands must start at score 0", config_key=key)
    for lower, upper in zip(bands, bands[1:]):
        if upper.min_score <= lower.min_score:
            raise ConfigurationError("Feedback bands must be strictly increasing", config_key=key)


def _feedback_bands_from(data: Any) -> Tuple[FeedbackBand, ...]:
    return tuple(
        FeedbackBand(int(item["min_score"]), str(item["label"])) if isinstance(item, dict) else item
        for item in data
    )


@dataclass(frozen=True)
class ResumeScoringPolicy:
    """Point weights and thresholds of the ATS resume scorer."""

    accepted_formats: Tuple[str, ...] = ("pdf", "doc", "docx")
    preferred_format: str = "pdf"
    preferred_format_points: int = 15
    accepted_format_points: int = 10
    strict_format: bool = False

    size_buckets: Tuple[SizeBucket, ...] = DEFAULT_SIZE_BUCKETS

    naming_tokens: Tuple[str, ...] = ("resume", "cv")
    naming_points: int = 10
    transient_tokens: Tuple[str, ...] = ("draft", "temp", "copy")
    transient_penalty: int = 5

    content_depth_points: int = 10

    required_keyword_points: int = 25
    preferred_keyword_points: int = 15
    missing_required_ceiling: int = 20
    exclusion_penalty_per_hit: int = 5
    exclusion_penalty_cap: int = 15

    section_names: Tuple[str, ...] = ("experience", "education", "skills", "contact")
    min_sections: int = 3
    section_points: int = 10
    section_penalty: int = 10

    contact_points: int = 10
    contact_partial_penalty: int = 5
    contact_missing_penalty: int = 15

    score_ceiling: int = 100
    feedback_bands: Tuple[FeedbackBand, ...] = RESUME_FEEDBACK_BANDS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeScoringPolicy":
        """Create ResumeScoringPolicy from dictionary, ignoring unknown keys."""
        defaults = cls()
        values: Dict[str, Any] = {}
        for item in fields(cls):
            if item.name not in data:
                continue
            value = data[item.name]
            if item.name == "size_buckets":
                value = tuple(SizeBucket.from_dict(b) if isinstance(b, dict) else b for b in value)
            elif item.name == "feedback_bands":
                value = _feedback_bands_from(value)
            values[item.name] = _coerce(value, getattr(defaults, item.name))
        return replace(defaults, **values)

    def validate(self) -> None:
        """Check that the tables are ordered and the ceiling is sane."""
        if not 0 < self.score_ceiling <= 100:
            raise ConfigurationError("score_ceiling must be within (0, 100]", config_key="resume.score_ceiling")
        if self.preferred_format not in self.accepted_formats:
            raise ConfigurationError("preferred_format must be an accepted format",
                                     config_key="resume.preferred_format")
        if not self.size_buckets or self.size_buckets[-1].upper_bound is not None:
            raise ConfigurationError("The last size bucket must be unbounded", config_key="resume.size_buckets")
        bounds = [bucket.upper_bound for bucket in self.size_buckets[:-1]]
        if any(b is None for b in bounds) or bounds != sorted(set(bounds)):
            raise ConfigurationError("Size bucket bounds must be strictly increasing",
                                     config_key="resume.size_buckets")
        # Rewards climb to the ideal bucket and only fall after it
        points = [bucket.points for bucket in self.size_buckets]
        peak = points.index(max(points))
        if points[:peak + 1] != sorted(points[:peak + 1]) or points[peak:] != sorted(points[peak:], reverse=True):
            raise ConfigurationError("Size bucket points must rise to a single peak",
                                     config_key="resume.size_buckets")
        if not 0 <= self.min_sections <= len(self.section_names):
            raise ConfigurationError("min_sections exceeds the number of sections",
                                     config_key="resume.min_sections")
        _check_feedback_bands(self.feedback_bands, "resume.feedback_bands")


@dataclass(frozen=True)
class InterviewScoringPolicy:
    """Bands, timing thresholds and penalties of the interview scorer."""

    completion_bands: Tuple[CompletionBand, ...] = DEFAULT_COMPLETION_BANDS

    brief_threshold_seconds: float = 10.0
    brief_penalty: int = 15
    sweet_spot_min_seconds: float = 25.0
    sweet_spot_max_seconds: float = 60.0
    sweet_spot_bonus: int = 10
    verbose_threshold_seconds: float = 120.0
    verbose_penalty: int = 5

    rushed_threshold_seconds: float = 5.0
    rushed_fraction: float = 0.30
    rushed_penalty: int = 20

    partial_device_confidence_floor: int = 5
    completion_bonus: int = 5

    content_neutral: float = 5.0
    content_weight: float = 0.3
    content_strength_threshold: float = 7.0
    content_weakness_threshold: float = 3.0

    filler_rate_limit: float = 1.5
    filler_penalty: int = 10
    fragment_rate_limit: float = 0.5
    fragment_penalty: int = 5
    agreement_rate_limit: float = 0.25
    agreement_penalty: int = 10

    feedback_bands: Tuple[FeedbackBand, ...] = INTERVIEW_FEEDBACK_BANDS

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InterviewScoringPolicy":
        """Create InterviewScoringPolicy from dictionary, ignoring unknown keys."""
        defaults = cls()
        values: Dict[str, Any] = {}
        for item in fields(cls):
            if item.name not in data:
                continue
            value = data[item.name]
            if item.name == "completion_bands":
                value = tuple(CompletionBand.from_dict(b) if isinstance(b, dict) else b for b in value)
            elif item.name == "feedback_bands":
                value = _feedback_bands_from(value)
            values[item.name] = _coerce(value, getattr(defaults, item.name))
        return replace(defaults, **values)

    def validate(self) -> None:
        """Check band monotonicity and the ordering of timing zones."""
        bands = self.completion_bands
        if not bands or bands[0].min_rate != 0.0:
            raise ConfigurationError("Completion bands must start at rate 0", config_key="interview.completion_bands")
        for lower, upper in zip(bands, bands[1:]):
            if upper.min_rate <= lower.min_rate:
                raise ConfigurationError("Completion band rates must be strictly increasing",
                                         config_key="interview.completion_bands")
            if upper.base_score < lower.base_score:
                raise ConfigurationError("Completion band scores must not decrease",
                                         config_key="interview.completion_bands")
        if not (self.brief_threshold_seconds <= self.sweet_spot_min_seconds
                <= self.sweet_spot_max_seconds < self.verbose_threshold_seconds):
            raise ConfigurationError("Timing thresholds must be ordered brief < sweet spot < verbose",
                                     config_key="interview.sweet_spot_min_seconds")
        if not 0.0 < self.rushed_fraction <= 1.0:
            raise ConfigurationError("rushed_fraction must be within (0, 1]", config_key="interview.rushed_fraction")
        _check_feedback_bands(self.feedback_bands, "interview.feedback_bands")
