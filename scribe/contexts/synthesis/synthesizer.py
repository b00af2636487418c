"""
Resume synthesis orchestrator for the Synthesis context.

Combines the Targeting context's repository selection and skill
categorization with raw profile and contribution data to draft every resume
field, then validates the result against the resume schema.

Usage:
    synthesizer = ResumeSynthesizer(now=frozen_time)
    payload = synthesizer.synthesize(profile, repositories, languages, contributions)
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from scribe.contexts.intake.github_records import (
    ContributionActivity,
    LanguageStats,
    Profile,
    Repository,
)
from scribe.contexts.synthesis.exceptions import SchemaValidationError
from scribe.contexts.synthesis.inputs import SynthesisOptions, UserHints
from scribe.contexts.synthesis.logger import (
    _log_debug,
    _log_error,
    log_synthesis_result,
    log_synthesis_start,
)
from scribe.contexts.synthesis.resume_schema import (
    MAX_ACHIEVEMENTS,
    MAX_PROJECTS,
    MAX_SKILLS,
    MAX_TECHNOLOGIES,
    ResumePayload,
    SynthesisMetadata,
    validate_resume,
)
from scribe.contexts.targeting.repository_scorer import (
    ESTIMATE_TAG,
    RepositoryScore,
    RepositoryScorer,
    SelectionCriteria,
)
from scribe.contexts.targeting.skill_categorizer import CategorizedSkills, SkillCategorizer
from scribe.contexts.targeting.skill_vocabulary import SkillCategory, role_title
from scribe.utils.timestamp import resolve_clock, whole_years_between

PLACEHOLDER_PHONE = "(555) 123-4567"
DEFAULT_LOCATION = "Remote"
DEFAULT_NAME = "GitHub User"
EDUCATION_PLACEHOLDER = "Add your educational background"
PROJECT_DESCRIPTION_FALLBACK = "GitHub repository project"
TECH_STACK_FALLBACK = "modern software technologies"

OPEN_SOURCE_TITLE = "Open-Source Contributor"
OPEN_SOURCE_COMPANY = "GitHub Community"
OPEN_SOURCE_DESCRIPTION = (
    "Active contributor to open-source projects with focus on code quality and community collaboration"
)
PROJECT_COMPANY = "Independent Projects"
PROJECT_DESCRIPTION = (
    "Developed and maintained multiple software projects with focus on modern technologies "
    "and best practices"
)
PLACEHOLDER_COMPANY = "Add Your Experience"

# Activity counts above which open-source work earns its own experience entry
SIGNIFICANT_COMMITS = 100
SIGNIFICANT_PRS = 20

REPO_COUNT_SENTENCE_THRESHOLD = 10
FOLLOWER_SENTENCE_THRESHOLD = 50

# Skills taken from each category for the flat skills list, in list order
SKILLS_PER_CATEGORY = (
    (SkillCategory.LANGUAGES, 5),
    (SkillCategory.FRAMEWORKS, 4),
    (SkillCategory.TOOLS, 4),
    (SkillCategory.DATABASES, 3),
    (SkillCategory.CLOUD, 3),
    (SkillCategory.TESTING, 2),
)

# Topic tags too generic to count as a technology
GENERIC_TOPICS = frozenset({"project", "app", "tool", "library", "framework"})

ESTIMATED_FIELDS = ["experience.achievements", "projects.description", "skills", "summary"]


class ResumeSynthesizer:
    """
    Stateless resume drafting service.

    Attributes:
        clock: Callable returning the current aware datetime, shared with the
               scorer and categorizer so a frozen clock freezes the whole pipeline
        scorer: RepositoryScorer used for selection and impact bullets
        categorizer: SkillCategorizer used for the skills list and summary
    """

    def __init__(
        self,
        now: Optional[Union[datetime, Callable[[], datetime]]] = None,
        scorer: Optional[RepositoryScorer] = None,
        categorizer: Optional[SkillCategorizer] = None,
    ):
        self.clock = resolve_clock(now)
        self.scorer = scorer or RepositoryScorer(now=self.clock)
        self.categorizer = categorizer or SkillCategorizer(now=self.clock)

    def synthesize(
        self,
        profile: Profile,
        repositories: Sequence[Repository],
        language_stats: LanguageStats,
        contributions: ContributionActivity,
        hints: Union[UserHints, Mapping[str, Any], None] = None,
        options: Union[SynthesisOptions, Mapping[str, Any], None] = None,
        criteria: Optional[Union[SelectionCriteria, Mapping[str, float]]] = None,
    ) -> ResumePayload:
        """
        Draft a resume from GitHub signals.

        Args:
            profile: GitHub profile
            repositories: All of the user's repositories
            language_stats: Language -> byte count across repositories
            contributions: Aggregate contribution activity
            hints: Optional role/stack hints (UserHints or partial mapping)
            options: Optional processing options (SynthesisOptions or partial mapping)
            criteria: Optional repository selection weights

        Returns:
            Validated ResumePayload

        Raises:
            SchemaValidationError: If the drafted payload violates the resume schema
        """
        hints = UserHints.from_mapping(hints)
        options = SynthesisOptions.from_mapping(options)
        now = self.clock()

        log_synthesis_start(profile.login, len(repositories), hints.preferred_role)

        selected = self.scorer.select_top(
            repositories, options.max_repositories, hints.preferred_role, criteria
        )
        skills = self.categorizer.categorize(language_stats, repositories)

        draft = {
            "name": self.extract_name(profile),
            "email": self.extract_email(profile),
            "phone": PLACEHOLDER_PHONE,
            "location": profile.location or DEFAULT_LOCATION,
            "linkedin": None,
            "website": self.extract_website(profile),
            "summary": self.build_summary(profile, skills, hints, now),
            "experience": self.build_experience(contributions, selected, hints, options, now),
            "skills": self.build_skills_list(skills),
            "education": EDUCATION_PLACEHOLDER,
            "projects": self.build_projects(selected, options),
            "certifications": [],
        }

        try:
            payload = validate_resume(draft)
        except SchemaValidationError as e:
            _log_error(f"{profile.login}: resume validation failed on {', '.join(e.fields)}")
            raise

        log_synthesis_result(profile.login, payload)
        return payload

    # =========================================================================
    # CONTACT FIELDS
    # =========================================================================

    @staticmethod
    def extract_name(profile: Profile) -> str:
        return profile.name or profile.login or DEFAULT_NAME

    @staticmethod
    def extract_email(profile: Profile) -> str:
        return profile.email or f"{profile.login}@example.com"

    @staticmethod
    def extract_website(profile: Profile) -> Optional[str]:
        """Profile blog when it is a URL, otherwise the GitHub profile page."""
        if profile.blog and profile.blog.startswith("http"):
            return profile.blog
        return profile.html_url

    # =========================================================================
    # SUMMARY
    # =========================================================================

    def build_summary(
        self, profile: Profile, skills: CategorizedSkills, hints: UserHints, now: datetime
    ) -> str:
        """
        Professional summary: role-targeted or generic template plus GitHub context.

        The tech stack is the top 3 languages and top 2 frameworks, capped at 4 names.
        """
        stack_names = [entry.name for entry in skills.languages[:3]]
        stack_names += [entry.name for entry in skills.frameworks[:2]]
        tech_stack = ", ".join(stack_names[:4]) or TECH_STACK_FALLBACK
        years_active = max(whole_years_between(profile.created_at, now), 1)

        if hints.preferred_role:
            sentences = [
                f"Experienced {role_title(hints.preferred_role)} with {years_active}+ years of "
                f"active development using {tech_stack}.",
                "Proven track record of building scalable applications and contributing to "
                "open-source projects.",
                "Strong focus on code quality, performance optimization, and collaborative "
                "development practices.",
            ]
        else:
            sentences = [
                f"Software Developer with {years_active}+ years of experience building "
                f"applications using {tech_stack}.",
                "Passionate about clean code, open-source contribution, and continuous learning.",
                "Experienced in collaborative development and project management through GitHub.",
            ]

        if profile.public_repos > REPO_COUNT_SENTENCE_THRESHOLD:
            sentences.append(
                f"Maintains {profile.public_repos}+ open-source repositories with active "
                f"community engagement."
            )
        if profile.followers > FOLLOWER_SENTENCE_THRESHOLD:
            sentences.append(
                f"Active in the developer community with {profile.followers} GitHub followers."
            )

        return " ".join(sentences)

    # =========================================================================
    # EXPERIENCE
    # =========================================================================

    @staticmethod
    def has_significant_activity(contributions: ContributionActivity) -> bool:
        return (
            contributions.total_commits > SIGNIFICANT_COMMITS
            or contributions.total_prs > SIGNIFICANT_PRS
            or len(contributions.organization_contributions) > 0
        )

    def build_experience(
        self,
        contributions: ContributionActivity,
        selected: Sequence[RepositoryScore],
        hints: UserHints,
        options: SynthesisOptions,
        now: datetime,
    ) -> List[Dict[str, Any]]:
        """
        Open-source entry first, then the project entry; a placeholder only when
        neither applies.
        """
        experience = []

        if options.include_open_source_experience and self.has_significant_activity(contributions):
            experience.append(self.open_source_entry(contributions, selected, now))

        if selected:
            experience.append(self.project_entry(selected, hints, options))

        if not experience:
            _log_debug("No significant activity or selected repositories; using placeholder experience")
            experience.append(self.placeholder_entry(now))

        return experience

    @staticmethod
    def open_source_entry(
        contributions: ContributionActivity, selected: Sequence[RepositoryScore], now: datetime
    ) -> Dict[str, Any]:
        start_year = now.year - contributions.contribution_years
        achievements = []

        if contributions.total_commits > 0:
            achievements.append(
                f"Contributed {contributions.total_commits}+ commits across multiple "
                f"open-source projects {ESTIMATE_TAG}"
            )
        if contributions.total_prs > 0:
            achievements.append(
                f"Submitted {contributions.total_prs}+ pull requests with code reviews and "
                f"collaboration {ESTIMATE_TAG}"
            )
        if contributions.organization_contributions:
            org_names = ", ".join(
                org.organization for org in contributions.organization_contributions[:2]
            )
            achievements.append(
                f"Collaborated with organizations including {org_names} on technical projects "
                f"{ESTIMATE_TAG}"
            )
        if selected and selected[0].repository.stargazers_count > 10:
            stars = selected[0].repository.stargazers_count
            achievements.append(
                f"Maintained popular repository with {stars}+ stars and community engagement "
                f"{ESTIMATE_TAG}"
            )

        return {
            "title": OPEN_SOURCE_TITLE,
            "company": OPEN_SOURCE_COMPANY,
            "years": f"{start_year} - {now.year}",
            "description": OPEN_SOURCE_DESCRIPTION,
            "achievements": achievements[:MAX_ACHIEVEMENTS],
        }

    def project_entry(
        self, selected: Sequence[RepositoryScore], hints: UserHints, options: SynthesisOptions
    ) -> Dict[str, Any]:
        """Entry spanning the top selected repository, with 2 impact bullets from each of the top 3."""
        top = selected[0].repository
        achievements = []
        for repo_score in selected[:3]:
            metrics = self.scorer.generate_impact_metrics(
                repo_score.repository, is_estimated=options.conservative_estimates
            )
            achievements.extend(metrics[:2])

        return {
            "title": role_title(hints.preferred_role),
            "company": PROJECT_COMPANY,
            "years": f"{top.created_at.year} - {top.updated_at.year}",
            "description": PROJECT_DESCRIPTION,
            "achievements": achievements[:MAX_ACHIEVEMENTS],
        }

    @staticmethod
    def placeholder_entry(now: datetime) -> Dict[str, Any]:
        return {
            "title": role_title(None),
            "company": PLACEHOLDER_COMPANY,
            "years": f"{now.year} - Present",
            "description": "Please add your professional experience details",
            "achievements": [
                "Add your key accomplishments and achievements",
                "Include quantified results and impact metrics",
                "Highlight relevant technologies and skills used",
            ],
        }

    # =========================================================================
    # SKILLS & PROJECTS
    # =========================================================================

    @staticmethod
    def build_skills_list(skills: CategorizedSkills) -> List[str]:
        """Top skills per category in fixed order, deduplicated, at most MAX_SKILLS."""
        names: List[str] = []
        for category, limit in SKILLS_PER_CATEGORY:
            for entry in skills.get(category)[:limit]:
                if entry.name not in names:
                    names.append(entry.name)
        return names[:MAX_SKILLS]

    def build_projects(
        self, selected: Sequence[RepositoryScore], options: SynthesisOptions
    ) -> List[Dict[str, Any]]:
        eligible = [
            repo_score.repository
            for repo_score in selected
            if repo_score.repository.stargazers_count >= options.min_stars_for_projects
        ]
        return [
            {
                "name": repo.name,
                "description": repo.description or PROJECT_DESCRIPTION_FALLBACK,
                "technologies": self.project_technologies(repo),
                "link": repo.html_url or None,
            }
            for repo in eligible[:MAX_PROJECTS]
        ]

    @staticmethod
    def project_technologies(repo: Repository) -> List[str]:
        """Primary language plus up to 4 non-generic topics, deduplicated."""
        candidates = [repo.language] if repo.language else []
        candidates += [topic for topic in repo.topics if topic.lower() not in GENERIC_TOPICS][:4]

        technologies: List[str] = []
        for tech in candidates:
            if tech not in technologies:
                technologies.append(tech)
        return technologies[:MAX_TECHNOLOGIES]

    # =========================================================================
    # METADATA
    # =========================================================================

    def generate_metadata(
        self,
        username: str,
        repositories_analyzed: int,
        hints: Union[UserHints, Mapping[str, Any], None] = None,
        options: Union[SynthesisOptions, Mapping[str, Any], None] = None,
    ) -> SynthesisMetadata:
        """Provenance record for a synthesis run; lists the fields that are estimates."""
        return SynthesisMetadata(
            github_username=username,
            processed_at=self.clock(),
            repositories_analyzed=repositories_analyzed,
            estimated_fields=list(ESTIMATED_FIELDS),
            user_hints=UserHints.from_mapping(hints).to_dict() if hints is not None else None,
            processing_options=SynthesisOptions.from_mapping(options).to_dict(),
        )
