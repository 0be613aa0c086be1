"""Mock interview wizard as an explicit state machine.

The wizard walks welcome -> upload -> role -> interview -> analysis ->
results. ``WizardState`` is immutable: every transition returns a new
state and an illegal transition raises ``SessionError``.
"""

from typing import Optional, Tuple

from pydantic import Field

from ..models.base import BaseModel
from ..models.enums import JobRole, WizardStep
from ..models.interview import InterviewSessionMetrics
from ..models.resume import ResumeInput
from ..utils.exceptions import SessionError
from ..utils.logging import get_logger

logger = get_logger("interview_session")

DEVICE_STEPS = (WizardStep.ROLE, WizardStep.INTERVIEW)


class WizardState(BaseModel):
    """Snapshot of the interview wizard."""

    step: WizardStep = Field(default=WizardStep.WELCOME)
    resume: Optional[ResumeInput] = Field(default=None, description="Uploaded resume metadata")
    selected_role: str = Field(default="")

    questions: Tuple[str, ...] = Field(default=())
    current_index: int = Field(default=0, ge=0, description="Index of the question being asked")
    timings: Tuple[float, ...] = Field(default=(), description="Seconds spent on each answered question")
    responses: Tuple[str, ...] = Field(default=())

    camera_on: bool = False
    microphone_on: bool = False
    camera_used: bool = False
    microphone_used: bool = False
    interview_completed: bool = False

    @property
    def progress(self) -> float:
        return self.step.progress

    @property
    def questions_answered(self) -> int:
        return len(self.timings)

    @property
    def current_question(self) -> Optional[str]:
        """The question being asked, or None once all have been asked."""
        if self.step is not WizardStep.INTERVIEW or self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    @property
    def questions_remaining(self) -> int:
        return max(0, len(self.questions) - self.current_index)

    def _require(self, action: str, *steps: WizardStep) -> None:
        if self.step not in steps:
            allowed = ", ".join(step.name.lower() for step in steps)
            raise SessionError(
                f"Cannot {action.replace('_', ' ')} during the {self.step.name.lower()} step (allowed: {allowed})",
                step=self.step.name.lower(),
                action=action,
            )

    def _advance(self, action: str, **changes) -> "WizardState":
        state = self.model_copy(update=changes)
        if state.step is not self.step:
            logger.debug(f"Wizard {action}: {self.step.name.lower()} -> {state.step.name.lower()}")
        return state

    def begin(self) -> "WizardState":
        self._require("begin", WizardStep.WELCOME)
        return self._advance("begin", step=WizardStep.UPLOAD)

    def upload_resume(self, resume: Optional[ResumeInput]) -> "WizardState":
        """Attach resume metadata (None to continue without one) and move to role selection."""
        self._require("upload_resume", WizardStep.UPLOAD)
        return self._advance("upload_resume", step=WizardStep.ROLE, resume=resume)

    def select_role(self, role: str) -> "WizardState":
        """Choose the target role; known roles are normalized to their label."""
        self._require("select_role", WizardStep.ROLE)
        if not role or not role.strip():
            raise SessionError("A job role must be selected", step="role", action="select_role")

        job_role = JobRole.lookup(role)
        label = job_role.value if job_role else role.strip()
        resume = self.resume.model_copy(update={"selected_role": label}) if self.resume else None
        return self._advance("select_role", selected_role=label, resume=resume)

    def start_interview(self, questions) -> "WizardState":
        """Begin asking the given questions."""
        self._require("start_interview", WizardStep.ROLE)
        if not self.selected_role:
            raise SessionError("Select a job role before starting the interview",
                               step="role", action="start_interview")
        questions = tuple(questions)
        if not questions:
            raise SessionError("An interview needs at least one question", step="role", action="start_interview")

        return self._advance(
            "start_interview",
            step=WizardStep.INTERVIEW,
            questions=questions,
            current_index=0,
            timings=(),
            responses=(),
            camera_used=self.camera_on,
            microphone_used=self.microphone_on,
            interview_completed=False,
        )

    def _next_question(self, action: str) -> int:
        self._require(action, WizardStep.INTERVIEW)
        if self.current_index >= len(self.questions):
            raise SessionError("No questions remaining", step="interview", action=action)
        return self.current_index + 1

    def record_answer(self, seconds: float, response: Optional[str] = None) -> "WizardState":
        """Record an answer to the current question.

        Args:
            seconds: Time spent answering.
            response: Optional answer text or transcript.
        """
        next_index = self._next_question("record_answer")
        if seconds < 0:
            raise SessionError("Answer time cannot be negative", step="interview", action="record_answer")

        return self._advance(
            "record_answer",
            current_index=next_index,
            timings=self.timings + (float(seconds),),
            responses=self.responses + ((response or ""),),
            interview_completed=next_index >= len(self.questions),
        )

    def skip_question(self) -> "WizardState":
        next_index = self._next_question("skip_question")
        return self._advance(
            "skip_question",
            current_index=next_index,
            interview_completed=next_index >= len(self.questions),
        )

    def toggle_camera(self) -> "WizardState":
        self._require("toggle_camera", *DEVICE_STEPS)
        camera_on = not self.camera_on
        used = self.camera_used or (camera_on and self.step is WizardStep.INTERVIEW)
        return self._advance("toggle_camera", camera_on=camera_on, camera_used=used)

    def toggle_microphone(self) -> "WizardState":
        self._require("toggle_microphone", *DEVICE_STEPS)
        microphone_on = not self.microphone_on
        used = self.microphone_used or (microphone_on and self.step is WizardStep.INTERVIEW)
        return self._advance("toggle_microphone", microphone_on=microphone_on, microphone_used=used)

    def finish(self) -> "WizardState":
        """End the interview, whether or not every question was asked."""
        self._require("finish", WizardStep.INTERVIEW)
        return self._advance("finish", step=WizardStep.ANALYSIS)

    def show_results(self) -> "WizardState":
        self._require("show_results", WizardStep.ANALYSIS)
        return self._advance("show_results", step=WizardStep.RESULTS)

    def restart(self) -> "WizardState":
        logger.debug(f"Wizard restart from {self.step.name.lower()}")
        return WizardState()

    def to_metrics(self) -> InterviewSessionMetrics:
        """Session metrics for the interview scorer.

        Raises:
            SessionError: If the interview has not started yet.
        """
        self._require("to_metrics", WizardStep.INTERVIEW, WizardStep.ANALYSIS, WizardStep.RESULTS)
        has_text = any(text.strip() for text in self.responses)
        return InterviewSessionMetrics(
            questions_answered=self.questions_answered,
            total_questions=len(self.questions),
            time_spent_per_question_seconds=list(self.timings),
            camera_used=self.camera_used,
            microphone_used=self.microphone_used,
            interview_completed=self.interview_completed,
            selected_role=self.selected_role,
            responses=list(self.responses) if has_text else None,
        )
