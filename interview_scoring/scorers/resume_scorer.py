"""ATS compatibility scoring for uploaded resumes."""

import re
from typing import List, Optional, Tuple

from ..models.resume import ResumeAnalysis, ResumeInput, RoleProfile
from ..services.role_catalog import RoleCatalog
from .base_scorer import BaseScorer, Findings, clamp
from .policy import ResumeScoringPolicy, SizeBucket, band_for

NO_RESUME_FEEDBACK = "No resume uploaded. Please upload your resume to get an ATS analysis."
UPLOAD_PROMPT = "Upload a resume in an accepted format (PDF, DOC, or DOCX)"
UNREADABLE_TEXT_ADVISORY = (
    "Resume content could not be assessed - keyword, section, and contact checks were limited to the file name"
)

EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
PHONE_PATTERN = re.compile(r"(?:\+?\d{1,3}[\s.-]?)?\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4}\b")

RESUME_FEEDBACK_TEMPLATES = {
    "Critical Failure": "Major overhaul required before this resume can compete for {role} roles.",
    "Poor": "Significant improvements needed for {role} competitiveness.",
    "Below Average": "Needs better {role} keyword optimization and content depth.",
    "Average": "Solid foundation for {role} roles with clear optimization opportunities.",
    "Good": "Strong {role} potential. Some optimization opportunities remain.",
    "Excellent": "Outstanding {role} optimization with ATS-friendly formatting and comprehensive content.",
}


class ResumeScorer(BaseScorer):
    """Scores a resume's ATS compatibility for a target role.

    Points from each step accumulate independently; the total is clamped
    to ``[0, policy.score_ceiling]``. Extracted text missing every required keyword caps
    the score at ``policy.missing_required_ceiling`` while the remaining
    steps still contribute feedback.
    """

    def __init__(self, policy: Optional[ResumeScoringPolicy] = None,
                 role_catalog: Optional[RoleCatalog] = None):
        super().__init__("resume")
        self.policy = policy or ResumeScoringPolicy()
        self.role_catalog = role_catalog or RoleCatalog()

    def _score(self, resume: Optional[ResumeInput]) -> ResumeAnalysis:
        if resume is None:
            self.log_operation("score_resume", {"uploaded": False})
            return ResumeAnalysis(ats_score=0, feedback=NO_RESUME_FEEDBACK, improvements=[UPLOAD_PROMPT])

        policy = self.policy
        findings = Findings()
        role = resume.selected_role or "the selected"

        format_points, accepted = self._score_format(resume, findings)
        if not accepted and policy.strict_format:
            return self._build(0, role, findings)

        total = float(format_points)
        total += self._score_size(resume, findings)
        total += self._score_naming(resume, findings)

        profile = self.role_catalog.get_profile(resume.selected_role)
        total += self._score_content_depth(resume, profile, findings)
        keyword_points, required_missed = self._score_keywords(resume, profile, findings)
        total += keyword_points

        if resume.has_text:
            total += self._score_sections(resume.extracted_text, findings)
            total += self._score_contact(resume.extracted_text, findings)
        else:
            findings.improvement(UNREADABLE_TEXT_ADVISORY)

        ceiling = policy.score_ceiling
        if required_missed:
            ceiling = min(ceiling, policy.missing_required_ceiling)
        score = int(round(clamp(total, 0, ceiling)))

        self.log_operation("score_resume", {
            "role": resume.selected_role,
            "raw_points": total,
            "ats_score": score,
            "required_keywords_missed": required_missed,
        })
        return self._build(score, role, findings)

    def _build(self, score: int, role: str, findings: Findings) -> ResumeAnalysis:
        band = band_for(score, self.policy.feedback_bands)
        template = RESUME_FEEDBACK_TEMPLATES.get(band.label, "Resume scored for {role} roles.")
        feedback = f"{band.label} ({score}%): {template.format(role=role)}"
        return ResumeAnalysis(
            ats_score=score,
            feedback=feedback,
            strengths=findings.strengths,
            improvements=findings.improvements,
        )

    def _score_format(self, resume: ResumeInput, findings: Findings) -> Tuple[int, bool]:
        policy = self.policy
        extension = resume.file_extension
        if extension == policy.preferred_format:
            findings.strength(f"{extension.upper()} format - excellent ATS compatibility")
            return policy.preferred_format_points, True
        if extension in policy.accepted_formats:
            findings.strength("Acceptable ATS format")
            findings.improvement(f"{policy.preferred_format.upper()} format is preferred for better ATS parsing")
            return policy.accepted_format_points, True

        accepted = ", ".join(fmt.upper() for fmt in policy.accepted_formats)
        shown = f".{extension}" if extension else "without an extension"
        findings.improvement(f"Unsupported file format ({shown}) - upload your resume as {accepted}")
        return 0, False

    def size_bucket(self, size_bytes: int) -> SizeBucket:
        """The size bucket a file falls into."""
        for bucket in self.policy.size_buckets:
            if bucket.upper_bound is None or size_bytes < bucket.upper_bound:
                return bucket
        return self.policy.size_buckets[-1]

    def _score_size(self, resume: ResumeInput, findings: Findings) -> int:
        bucket = self.size_bucket(resume.file_size_bytes)
        findings.add(bucket.message, bucket.is_strength)
        return bucket.points

    def _score_naming(self, resume: ResumeInput, findings: Findings) -> int:
        policy = self.policy
        name = resume.file_name.lower()
        points = 0
        if any(token in name for token in policy.naming_tokens):
            points += policy.naming_points
            findings.strength("Professional file naming")
        else:
            findings.improvement("Use 'Resume' or 'CV' in the file name, e.g. 'FirstName_LastName_Resume.pdf'")

        transient = [token for token in policy.transient_tokens if token in name]
        if transient:
            points -= policy.transient_penalty
            findings.improvement(f"Remove '{transient[0]}' from the file name - it looks like an unfinished version")
        return points

    def _score_content_depth(self, resume: ResumeInput, profile: Optional[RoleProfile],
                             findings: Findings) -> int:
        if profile is None:
            return 0
        if resume.file_size_bytes >= profile.min_expected_size_bytes:
            findings.strength(f"Content depth fits {profile.name} expectations")
            return self.policy.content_depth_points
        findings.improvement(f"Resume may be too brief for a {profile.name} role - add more role-specific detail")
        return 0

    def _score_keywords(self, resume: ResumeInput, profile: Optional[RoleProfile],
                        findings: Findings) -> Tuple[float, bool]:
        """Keyword points and whether every required keyword was missed."""
        policy = self.policy
        if profile is None:
            role = resume.selected_role or "No role"
            findings.improvement(
                f"'{role}' is not a supported role - choose one of the supported roles for keyword analysis"
            )
            return 0.0, False

        # Without text only the file name can be searched, so absences prove nothing
        has_text = resume.has_text
        haystack = f"{resume.extracted_text or ''} {resume.file_name}".lower()
        points = 0.0
        required_missed = False

        if profile.required_keywords:
            matched, missing = _partition(profile.required_keywords, haystack)
            points += policy.required_keyword_points * len(matched) / len(profile.required_keywords)
            if matched and not missing:
                findings.strength(f"All core {profile.name} keywords present: {', '.join(matched)}")
            elif matched:
                findings.strength(
                    f"Matched {len(matched)}/{len(profile.required_keywords)} core keywords: {', '.join(matched)}"
                )
                if has_text:
                    findings.improvement(f"Add missing core keywords: {', '.join(missing)}")
            elif has_text:
                required_missed = True
                findings.improvement(
                    f"None of the core {profile.name} keywords found ({', '.join(missing)})"
                )

        if profile.preferred_keywords:
            matched, missing = _partition(profile.preferred_keywords, haystack)
            fraction = len(matched) / len(profile.preferred_keywords)
            points += policy.preferred_keyword_points * fraction
            if matched:
                findings.strength(f"Preferred keywords present: {', '.join(matched)}")
            if has_text and fraction < 0.5:
                findings.improvement(f"Consider adding preferred keywords: {', '.join(missing)}")

        excluded, _ = _partition(profile.exclusion_keywords, haystack)
        if excluded:
            points -= min(policy.exclusion_penalty_cap, policy.exclusion_penalty_per_hit * len(excluded))
            findings.improvement(f"Remove outdated or filler phrases: {', '.join(excluded)}")

        return points, required_missed

    def _score_sections(self, text: str, findings: Findings) -> int:
        policy = self.policy
        found, missing = _partition(policy.section_names, text.lower())
        if len(found) >= policy.min_sections:
            findings.strength(f"Standard resume sections present: {', '.join(found)}")
            if missing:
                findings.improvement(f"Consider adding a {', '.join(missing)} section")
            return policy.section_points
        findings.improvement(f"Add missing resume sections: {', '.join(missing)}")
        return -policy.section_penalty

    def _score_contact(self, text: str, findings: Findings) -> int:
        policy = self.policy
        has_email = EMAIL_PATTERN.search(text) is not None
        has_phone = PHONE_PATTERN.search(text) is not None
        if has_email and has_phone:
            findings.strength("Contact details include email and phone")
            return policy.contact_points
        if not has_email and not has_phone:
            findings.improvement("No contact details found - add an email address and phone number")
            return -policy.contact_missing_penalty
        missing = "a phone number" if has_email else "an email address"
        findings.improvement(f"Add {missing} to your contact details")
        return -policy.contact_partial_penalty


def _partition(keywords, haystack: str) -> Tuple[List[str], List[str]]:
    """Split keywords into those found in the haystack and those missing."""
    found = [keyword for keyword in keywords if keyword in haystack]
    missing = [keyword for keyword in keywords if keyword not in haystack]
    return found, missing
