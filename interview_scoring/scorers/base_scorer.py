"""Base scorer interface for the interview scoring engine."""

import time
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..utils.logging import get_correlation_id, get_logger, log_performance


class Findings:
    """Ordered strengths and improvements collected while scoring."""

    def __init__(self):
        self.strengths: List[str] = []
        self.improvements: List[str] = []

    def strength(self, message: str) -> None:
        self.strengths.append(message)

    def improvement(self, message: str) -> None:
        self.improvements.append(message)

    def add(self, message: str, is_strength: bool) -> None:
        if is_strength:
            self.strength(message)
        else:
            self.improvement(message)

    def extend(self, other: "Findings") -> None:
        self.strengths.extend(other.strengths)
        self.improvements.extend(other.improvements)


def clamp(value: float, lower: float = 0, upper: float = 100) -> float:
    """Limit a value to ``[lower, upper]``."""
    return max(lower, min(upper, value))


class BaseScorer(ABC):
    """Base interface for all scorers.

    Scorers are stateless after construction: ``score`` may be called any
    number of times, from any thread, and always returns a fresh result.
    """

    def __init__(self, scorer_name: str):
        """Initialize the base scorer.

        Args:
            scorer_name: Name of the scorer for logging and identification
        """
        self.scorer_name = scorer_name
        self.logger = get_logger(f"scorer.{scorer_name}")

    def score(self, data: Any) -> Any:
        """Score the input and log how long it took."""
        started = time.perf_counter()
        result = self._score(data)
        log_performance(f"{self.scorer_name}.score", time.perf_counter() - started)
        return result

    @abstractmethod
    def _score(self, data: Any) -> Any:
        """Scorer-specific computation. Must not raise for any valid input."""
        pass

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Log scorer operation with correlation ID."""
        extra = {"correlation_id": get_correlation_id(), "scorer": self.scorer_name}
        if details:
            extra.update(details)

        self.logger.info(f"Operation: {operation}", extra=extra)
