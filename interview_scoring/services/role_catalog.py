"""Per-role keyword profiles shared by the resume and interview scorers."""

from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..models.enums import JobRole
from ..models.resume import RoleProfile
from ..utils.exceptions import ConfigurationError
from ..utils.logging import get_logger

# Phrases recruiters and ATS rankers treat as filler on any resume
GENERIC_EXCLUSIONS = (
    "references available upon request",
    "to whom it may concern",
    "duties included",
)

DEFAULT_ROLE_PROFILES: Dict[str, RoleProfile] = {
    profile.name: profile
    for profile in (
        RoleProfile(
            name=JobRole.SOFTWARE_ENGINEER.value,
            required_keywords=["javascript", "python", "react", "git"],
            preferred_keywords=["node", "api", "database", "typescript"],
            exclusion_keywords=[*GENERIC_EXCLUSIONS, "typing speed"],
            min_expected_size_bytes=120_000,
        ),
        RoleProfile(
            name=JobRole.PRODUCT_MANAGER.value,
            required_keywords=["product", "strategy", "roadmap", "stakeholder"],
            preferred_keywords=["agile", "analytics", "user", "market"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=100_000,
        ),
        RoleProfile(
            name=JobRole.DATA_SCIENTIST.value,
            required_keywords=["python", "sql", "data", "analysis"],
            preferred_keywords=["machine learning", "statistics", "modeling"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=110_000,
        ),
        RoleProfile(
            name=JobRole.UX_DESIGNER.value,
            required_keywords=["user", "design", "wireframe"],
            preferred_keywords=["prototype", "figma", "research"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=90_000,
        ),
        RoleProfile(
            name=JobRole.SALES_REPRESENTATIVE.value,
            required_keywords=["sales", "client", "revenue"],
            preferred_keywords=["crm", "negotiation", "target"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=80_000,
        ),
        RoleProfile(
            name=JobRole.MARKETING_MANAGER.value,
            required_keywords=["marketing", "campaign", "digital"],
            preferred_keywords=["brand", "analytics", "roi"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=95_000,
        ),
        RoleProfile(
            name=JobRole.BUSINESS_ANALYST.value,
            required_keywords=["business", "analysis", "requirements"],
            preferred_keywords=["process", "stakeholder", "documentation"],
            exclusion_keywords=GENERIC_EXCLUSIONS,
            min_expected_size_bytes=100_000,
        ),
        RoleProfile(
            name=JobRole.DEVOPS_ENGINEER.value,
            required_keywords=["aws", "docker", "automation"],
            preferred_keywords=["kubernetes", "ci/cd", "monitoring"],
            exclusion_keywords=[*GENERIC_EXCLUSIONS, "manual deployment"],
            min_expected_size_bytes=115_000,
        ),
    )
}


class RoleCatalog:
    """Read-only lookup of role profiles."""

    def __init__(self, profiles: Optional[Mapping[str, RoleProfile]] = None):
        """Initialize the catalog.

        Args:
            profiles: Profiles keyed by role name. Defaults to the built-in roles.
        """
        self._profiles: Dict[str, RoleProfile] = dict(DEFAULT_ROLE_PROFILES if profiles is None else profiles)
        self.logger = get_logger("role_catalog")

    def get_profile(self, role: Optional[str]) -> Optional[RoleProfile]:
        """Return the profile for a role name, or None if it is not supported.

        Lookup is exact first, then through ``JobRole`` aliases, then
        case-insensitive against the configured names.
        """
        if not role:
            return None
        if role in self._profiles:
            return self._profiles[role]

        job_role = JobRole.lookup(role)
        if job_role is not None and job_role.value in self._profiles:
            return self._profiles[job_role.value]

        wanted = role.strip().lower()
        for name, profile in self._profiles.items():
            if name.lower() == wanted:
                return profile

        self.logger.debug(f"No role profile for '{role}'")
        return None

    def supported_roles(self) -> List[str]:
        """Role names in catalog order."""
        return list(self._profiles)

    def __contains__(self, role: str) -> bool:
        return self.get_profile(role) is not None

    def __len__(self) -> int:
        return len(self._profiles)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], include_defaults: bool = True) -> "RoleCatalog":
        """Build a catalog from a ``roles.yaml`` style mapping.

        Args:
            data: Mapping of role name to profile fields.
            include_defaults: Start from the built-in roles and override them.

        Raises:
            ConfigurationError: If a profile entry is invalid.
        """
        profiles: Dict[str, RoleProfile] = dict(DEFAULT_ROLE_PROFILES) if include_defaults else {}
        for name, fields in (data or {}).items():
            try:
                profiles[str(name)] = RoleProfile(name=str(name), **(fields or {}))
            except (TypeError, ValidationError) as e:
                raise ConfigurationError(f"Invalid role profile '{name}': {e}", config_key=f"roles.{name}")
        return cls(profiles)
