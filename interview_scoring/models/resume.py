"""Resume data models for the interview scoring engine."""

from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from pydantic import Field, ValidationInfo, field_validator

from .base import BaseModel


def _normalize_keywords(value: Any) -> Tuple[str, ...]:
    """Lower-case, strip and de-duplicate keywords, keeping a stable order."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    elif isinstance(value, (set, frozenset)):
        value = sorted(value)
    keywords: List[str] = []
    for keyword in value:
        cleaned = str(keyword).strip().lower()
        if cleaned and cleaned not in keywords:
            keywords.append(cleaned)
    return tuple(keywords)


class RoleProfile(BaseModel):
    """Static keyword and size expectations for one job role."""

    name: str = Field(..., description="Role display name")
    required_keywords: Tuple[str, ...] = Field(default=(), description="Core keywords the role expects")
    preferred_keywords: Tuple[str, ...] = Field(default=(), description="Bonus keywords")
    exclusion_keywords: Tuple[str, ...] = Field(default=(), description="Phrases that hurt ATS ranking")
    min_expected_size_bytes: int = Field(default=90_000, ge=0, description="Minimum file size for adequate depth")

    @field_validator("required_keywords", "preferred_keywords", "exclusion_keywords", mode="before")
    @classmethod
    def _clean_keywords(cls, value: Any) -> Tuple[str, ...]:
        return _normalize_keywords(value)

    @property
    def all_keywords(self) -> Tuple[str, ...]:
        """Required then preferred keywords."""
        return self.required_keywords + tuple(k for k in self.preferred_keywords if k not in self.required_keywords)


class ResumeInput(BaseModel):
    """Metadata of an uploaded resume plus optionally extracted text."""

    file_name: str = Field(..., description="Uploaded file name")
    file_size_bytes: int = Field(..., ge=0, description="File size in bytes")
    file_extension: str = Field(default="", validate_default=True, description="Extension without the dot")
    extracted_text: Optional[str] = Field(default=None, description="Text extracted by the caller")
    selected_role: str = Field(default="", description="Target job role")

    @field_validator("file_extension", mode="before")
    @classmethod
    def _normalize_extension(cls, value: Any, info: ValidationInfo) -> str:
        extension = str(value or "").strip().lower().lstrip(".")
        if not extension:
            file_name = str(info.data.get("file_name") or "")
            suffix = Path(file_name).suffix
            extension = suffix.lower().lstrip(".")
        return extension

    @field_validator("extracted_text", mode="before")
    @classmethod
    def _normalize_text(cls, value: Any) -> Optional[str]:
        # Unreadable content degrades to empty text instead of failing the upload
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray)):
            try:
                value = bytes(value).decode("utf-8")
            except UnicodeDecodeError:
                return ""
        if not isinstance(value, str):
            return ""
        return value.replace("\x00", "")

    @property
    def has_text(self) -> bool:
        """Whether any readable text was supplied."""
        return bool(self.extracted_text and self.extracted_text.strip())

    @classmethod
    def from_path(cls, path: Union[str, Path], selected_role: str,
                  extracted_text: Optional[str] = None) -> "ResumeInput":
        """Build an input from a file on disk. Only metadata is read."""
        file_path = Path(path)
        return cls(
            file_name=file_path.name,
            file_size_bytes=file_path.stat().st_size,
            file_extension=file_path.suffix,
            extracted_text=extracted_text,
            selected_role=selected_role,
        )


class ResumeAnalysis(BaseModel):
    """ATS compatibility result for one resume."""

    ats_score: int = Field(..., ge=0, le=100, description="ATS compatibility score")
    feedback: str = Field(..., description="Overall feedback sentence")
    strengths: List[str] = Field(default_factory=list, description="What the resume does well")
    improvements: List[str] = Field(default_factory=list, description="Suggested improvements")
