"""Interview questions offered by the practice session."""

import random
from typing import Dict, List, Optional, Sequence

from ..models.enums import JobRole

PERSONAL_QUESTIONS: List[str] = [
    "Tell me about yourself and your background.",
    "What are your greatest strengths?",
    "Where do you see yourself in 5 years?",
    "Why are you interested in this position?",
    "Describe a challenge you overcame.",
    "How do you handle tight deadlines?",
    "Describe a time you solved a complex problem.",
]

ROLE_QUESTIONS: Dict[str, List[str]] = {
    JobRole.SOFTWARE_ENGINEER.value: [
        "Explain the difference between REST and GraphQL APIs.",
        "How do you handle error handling in your code?",
        "Describe your experience with version control systems.",
        "What testing strategies do you use?",
        "How do you optimize application performance?",
    ],
    JobRole.PRODUCT_MANAGER.value: [
        "How do you prioritize features in a product roadmap?",
        "Describe your experience with user research.",
        "How do you handle conflicting stakeholder requirements?",
        "What metrics do you use to measure product success?",
        "How do you work with engineering teams?",
    ],
    JobRole.DATA_SCIENTIST.value: [
        "Explain the difference between supervised and unsupervised learning.",
        "How do you handle missing data in datasets?",
        "Describe your experience with statistical modeling.",
        "What tools do you use for data visualization?",
        "How do you validate model performance?",
    ],
    JobRole.UX_DESIGNER.value: [
        "Walk me through your design process.",
        "How do you conduct user research?",
        "Describe a time you had to advocate for users.",
        "How do you measure design success?",
        "What's your experience with accessibility design?",
    ],
    JobRole.SALES_REPRESENTATIVE.value: [
        "How do you handle objections from potential clients?",
        "Describe your sales process from lead to close.",
        "How do you build relationships with clients?",
        "What CRM tools have you used?",
        "How do you handle rejection?",
    ],
    JobRole.MARKETING_MANAGER.value: [
        "How do you develop a marketing strategy?",
        "Describe your experience with digital marketing.",
        "How do you measure campaign effectiveness?",
        "What's your approach to brand management?",
        "How do you work with cross-functional teams?",
    ],
    JobRole.BUSINESS_ANALYST.value: [
        "How do you gather requirements from stakeholders?",
        "Describe a process you improved and how you measured it.",
        "How do you document business requirements?",
        "How do you handle scope changes mid-project?",
        "What analysis tools do you rely on?",
    ],
    JobRole.DEVOPS_ENGINEER.value: [
        "How would you design a CI/CD pipeline for a new service?",
        "Describe your experience with container orchestration.",
        "How do you approach monitoring and alerting?",
        "Tell me about an outage you helped resolve.",
        "How do you manage infrastructure as code?",
    ],
}


class QuestionBank:
    """Selects personal and role-specific questions for a session."""

    def __init__(self, personal_questions: Optional[Sequence[str]] = None,
                 role_questions: Optional[Dict[str, Sequence[str]]] = None):
        self.personal_questions = list(personal_questions if personal_questions is not None else PERSONAL_QUESTIONS)
        self.role_questions = {
            role: list(questions)
            for role, questions in (role_questions if role_questions is not None else ROLE_QUESTIONS).items()
        }

    def questions_for(self, role: str) -> List[str]:
        """All role-specific questions, empty for unknown roles."""
        if role in self.role_questions:
            return list(self.role_questions[role])
        job_role = JobRole.lookup(role)
        if job_role is not None:
            return list(self.role_questions.get(job_role.value, []))
        return []

    def select(self, role: str, personal_count: int = 2, role_count: int = 3,
               rng: Optional[random.Random] = None) -> List[str]:
        """Pick personal questions first, then role questions.

        Args:
            role: Target role.
            personal_count: Number of personal questions.
            role_count: Number of role-specific questions.
            rng: Random source; pass a seeded ``random.Random`` for repeatable sessions.

        Returns:
            The selected questions. Fewer are returned when a pool is short.
        """
        rng = rng or random.Random()
        personal = rng.sample(self.personal_questions, min(personal_count, len(self.personal_questions)))
        role_pool = self.questions_for(role)
        role_specific = rng.sample(role_pool, min(role_count, len(role_pool)))
        return personal + role_specific
