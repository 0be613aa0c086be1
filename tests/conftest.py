import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from interview_scoring.models import InterviewSessionMetrics, ResumeInput
from interview_scoring.scorers import InterviewScorer, ResumeScorer


@pytest.fixture
def resume_scorer():
    return ResumeScorer()


@pytest.fixture
def interview_scorer():
    return InterviewScorer()


@pytest.fixture
def strong_resume_text():
    """Extracted text of a well-formed Software Engineer resume."""
    return (
        "Jane Doe\n"
        "Contact: jane.doe@example.com | 555-123-4567\n"
        "Experience: Senior engineer building javascript and react applications.\n"
        "Education: BSc Computer Science\n"
        "Skills: javascript, react, testing\n"
    )


@pytest.fixture
def strong_resume(strong_resume_text):
    return ResumeInput(
        file_name="resume_2024.pdf",
        file_size_bytes=200_000,
        file_extension=".pdf",
        extracted_text=strong_resume_text,
        selected_role="Software Engineer",
    )


@pytest.fixture
def make_session():
    """Factory for interview sessions with sensible defaults."""
    def _make(**overrides):
        data = {
            "questions_answered": 7,
            "total_questions": 7,
            "time_spent_per_question_seconds": [35.0] * 7,
            "camera_used": True,
            "microphone_used": True,
            "interview_completed": True,
            "selected_role": "Software Engineer",
        }
        data.update(overrides)
        return InterviewSessionMetrics(**data)
    return _make


@pytest.fixture
def isolated_env(monkeypatch):
    """Clear environment variables read by the configuration manager."""
    for name in ("ENVIRONMENT", "LOG_LEVEL", "DEBUG"):
        # setenv first so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
