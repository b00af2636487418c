"""
Repository scoring and selection for the Targeting context.

Ranks a user's repositories by a weighted combination of five independently
computed sub-scores, each in [0, 1]:

    stars           popularity, as a diminishing-returns step function
    recency         days since last update
    documentation   description, homepage, topics, issue tracking
    role_relevance  keyword overlap with a role hint (neutral 0.5 without one)
    language        mainstream-language tier

The overall score is the weighted sum; weights live in SelectionCriteria and
must sum to 1.0, so the overall score is bounded in [0, 1] as well.
"""

import math
from dataclasses import asdict, dataclass, field, fields, replace
from datetime import datetime
from typing import Callable, List, Mapping, Optional, Sequence, Union

from scribe.contexts.intake.github_records import Repository
from scribe.contexts.targeting.logger import _log_debug, log_selection_result
from scribe.contexts.targeting.skill_vocabulary import POPULAR_LANGUAGES, role_keywords
from scribe.utils.timestamp import days_since, resolve_clock

# Repositories at or below this size (KB) are treated as scaffolding
MIN_REPOSITORY_SIZE = 10

NEUTRAL_ROLE_SCORE = 0.5
ESTIMATE_TAG = "[ESTIMATE]"
MAX_IMPACT_METRICS = 4

NO_DESCRIPTION = "No description provided"
UNKNOWN_LANGUAGE = "Unknown"

# Ordered substring heuristics for project type; first match wins
PROJECT_TYPE_KEYWORDS = (
    ("Framework", ("framework", "boilerplate", "template", "starter")),
    ("Library", ("library", "package", "module", "sdk")),
    ("Tool", ("tool", "cli", "utility", "script")),
    ("Application", ("app", "website", "dashboard", "platform")),
)


@dataclass(frozen=True)
class SelectionCriteria:
    """
    Weights for the five repository sub-scores.

    Raises:
        ValueError: If any weight is negative or the weights do not sum to 1.0
    """

    star_weight: float = 0.30
    recent_activity_weight: float = 0.25
    readme_presence_weight: float = 0.15
    role_relevance_weight: float = 0.20
    language_relevance_weight: float = 0.10

    def __post_init__(self):
        weights = asdict(self)
        negative = [name for name, value in weights.items() if value < 0]
        if negative:
            raise ValueError(f"Selection weights must be non-negative: {negative}")
        total = sum(weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Selection weights must sum to 1.0, got {total:.4f}")

    def with_overrides(self, overrides: Optional[Mapping[str, float]] = None) -> "SelectionCriteria":
        """
        Return a copy with some weights replaced.

        Raises:
            ValueError: On unknown weight names or if the result no longer sums to 1.0
        """
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown selection weights: {unknown}. Known weights: {sorted(known)}")
        return replace(self, **{name: float(value) for name, value in overrides.items()})


DEFAULT_CRITERIA = SelectionCriteria()


@dataclass(frozen=True)
class ScoreBreakdown:
    """The five sub-scores behind a RepositoryScore, each in [0, 1]."""

    star_score: float
    activity_score: float
    readme_score: float
    role_relevance_score: float
    language_relevance_score: float

    def weighted_total(self, criteria: SelectionCriteria) -> float:
        total = (
            self.star_score * criteria.star_weight
            + self.activity_score * criteria.recent_activity_weight
            + self.readme_score * criteria.readme_presence_weight
            + self.role_relevance_score * criteria.role_relevance_weight
            + self.language_relevance_score * criteria.language_relevance_weight
        )
        # Weights summing to 1.0 within tolerance can push the float sum past 1.0
        return min(max(total, 0.0), 1.0)


@dataclass(frozen=True)
class RepositoryScore:
    """A repository with its overall score, sub-score breakdown and justifications."""

    repository: Repository
    score: float
    breakdown: ScoreBreakdown
    reasons: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RepositoryMetrics:
    """Denormalized repository summary used when building resume projects."""

    name: str
    description: str
    language: str
    stars: int
    forks: int
    last_updated: datetime
    topics: List[str]
    has_readme: bool
    has_homepage: bool
    open_issues: int
    url: str
    estimated_complexity: str
    project_type: str


class RepositoryScorer:
    """
    Stateless repository ranking service.

    Attributes:
        clock: Callable returning the current aware datetime. Inject a fixed
               clock for reproducible output.
    """

    def __init__(self, now: Optional[Union[datetime, Callable[[], datetime]]] = None):
        """
        Args:
            now: Fixed datetime or zero-argument clock; defaults to the wall clock
        """
        self.clock = resolve_clock(now)

    # =========================================================================
    # SELECTION
    # =========================================================================

    def select_top(
        self,
        repositories: Sequence[Repository],
        max_count: int = 6,
        preferred_role: Optional[str] = None,
        criteria: Optional[Union[SelectionCriteria, Mapping[str, float]]] = None,
    ) -> List[RepositoryScore]:
        """
        Rank repositories and return the best `max_count`.

        Forks and repositories at or below MIN_REPOSITORY_SIZE are excluded.
        Repositories without stars stay eligible; they only score lower.
        Ties keep input order (stable sort).

        Args:
            repositories: Candidate repositories
            max_count: Maximum number of results
            preferred_role: Optional role hint (e.g., "frontend")
            criteria: SelectionCriteria, or a partial mapping of weight overrides

        Returns:
            Scored repositories, best first, at most max_count long
        """
        final_criteria = self._resolve_criteria(criteria)
        eligible = [repo for repo in repositories if self.is_eligible(repo)]
        scored = [self.score_repository(repo, preferred_role, final_criteria) for repo in eligible]
        scored.sort(key=lambda item: item.score, reverse=True)
        selected = scored[: max(max_count, 0)]

        log_selection_result(len(repositories), len(eligible), len(selected), preferred_role)
        return selected

    @staticmethod
    def is_eligible(repo: Repository) -> bool:
        return not repo.fork and repo.size > MIN_REPOSITORY_SIZE

    @staticmethod
    def _resolve_criteria(
        criteria: Optional[Union[SelectionCriteria, Mapping[str, float]]]
    ) -> SelectionCriteria:
        if criteria is None:
            return DEFAULT_CRITERIA
        if isinstance(criteria, SelectionCriteria):
            return criteria
        return DEFAULT_CRITERIA.with_overrides(criteria)

    def score_repository(
        self,
        repo: Repository,
        preferred_role: Optional[str] = None,
        criteria: SelectionCriteria = DEFAULT_CRITERIA,
    ) -> RepositoryScore:
        """Score a single repository against the given criteria."""
        breakdown = ScoreBreakdown(
            star_score=self.star_score(repo.stargazers_count),
            activity_score=self.activity_score(repo),
            readme_score=self.readme_score(repo),
            role_relevance_score=self.role_relevance_score(repo, preferred_role),
            language_relevance_score=self.language_relevance_score(repo),
        )
        score = breakdown.weighted_total(criteria)
        _log_debug(f"{repo.name}: score={score:.3f} {breakdown}")

        return RepositoryScore(
            repository=repo,
            score=score,
            breakdown=breakdown,
            reasons=self.score_reasons(repo, breakdown),
        )

    # =========================================================================
    # SUB-SCORES
    # =========================================================================

    @staticmethod
    def star_score(stars: int) -> float:
        """Diminishing-returns step function of star count."""
        if stars <= 0:
            return 0.1
        if stars == 1:
            return 0.3
        if stars <= 5:
            return 0.5
        if stars <= 20:
            return 0.7
        if stars <= 100:
            return 0.85
        return 1.0

    def activity_score(self, repo: Repository) -> float:
        """
        Step function of days since last update.

        Projects untouched for over a year keep 0.2 if they are themselves
        older than a year, otherwise 0.1.
        """
        now = self.clock()
        days_since_update = days_since(repo.updated_at, now)
        project_age = days_since(repo.created_at, now)

        if days_since_update <= 30:
            return 1.0
        if days_since_update <= 90:
            return 0.8
        if days_since_update <= 180:
            return 0.6
        if days_since_update <= 365:
            return 0.4
        if project_age > 365:
            return 0.2
        return 0.1

    @staticmethod
    def readme_score(repo: Repository) -> float:
        """Additive documentation points, capped at 1.0."""
        score = 0.0
        if repo.description and len(repo.description) > 20:
            score += 0.4
        if repo.homepage:
            score += 0.3
        if repo.topics:
            score += 0.2
        if repo.has_issues:
            score += 0.1
        return min(score, 1.0)

    @staticmethod
    def role_relevance_score(repo: Repository, preferred_role: Optional[str] = None) -> float:
        """
        Keyword overlap between a repository and a role hint.

        Returns NEUTRAL_ROLE_SCORE when no hint is given or the role is unknown,
        so absence of a hint never penalizes a repository.
        """
        keywords = role_keywords(preferred_role)
        if not keywords:
            return NEUTRAL_ROLE_SCORE

        search_text = " ".join(
            [repo.name, repo.description or "", repo.language or "", " ".join(repo.topics)]
        ).lower()
        matched = [keyword for keyword in keywords if keyword in search_text]
        relevance = min(len(matched) / len(keywords) * 2, 1.0)

        if repo.language and repo.language.lower() in keywords:
            relevance = min(relevance + 0.3, 1.0)

        return relevance

    @staticmethod
    def language_relevance_score(repo: Repository) -> float:
        if not repo.language:
            return 0.3
        if repo.language.lower() in POPULAR_LANGUAGES:
            return 0.8
        return 0.5

    @staticmethod
    def score_reasons(repo: Repository, breakdown: ScoreBreakdown) -> List[str]:
        """Human-readable justifications for a score."""
        reasons = []
        if breakdown.star_score >= 0.7:
            reasons.append(f"Popular project with {repo.stargazers_count} stars")
        if breakdown.activity_score >= 0.8:
            reasons.append("Recently updated and actively maintained")
        if breakdown.readme_score >= 0.6:
            reasons.append("Well-documented with good project description")
        if breakdown.role_relevance_score >= 0.7:
            reasons.append("Highly relevant to specified role")
        if repo.forks_count > 5:
            reasons.append(f"Community engagement with {repo.forks_count} forks")
        if len(repo.topics) > 2:
            reasons.append("Well-categorized with relevant topics")
        if repo.homepage:
            reasons.append("Includes live demo or project website")
        return reasons

    # =========================================================================
    # METRICS
    # =========================================================================

    def extract_metrics(self, repo: Repository) -> RepositoryMetrics:
        """Summarize a repository for resume generation."""
        return RepositoryMetrics(
            name=repo.name,
            description=repo.description or NO_DESCRIPTION,
            language=repo.language or UNKNOWN_LANGUAGE,
            stars=repo.stargazers_count,
            forks=repo.forks_count,
            last_updated=repo.updated_at,
            topics=list(repo.topics),
            has_readme=bool(repo.description and len(repo.description) > 10),
            has_homepage=bool(repo.homepage),
            open_issues=repo.open_issues_count,
            url=repo.html_url,
            estimated_complexity=self.estimate_complexity(repo),
            project_type=self.classify_project_type(repo),
        )

    @staticmethod
    def estimate_complexity(repo: Repository) -> str:
        """Simple / Moderate / Complex from size and community indicators."""
        points = 0

        if repo.size > 10000:
            points += 2
        elif repo.size > 1000:
            points += 1

        if repo.stargazers_count > 100:
            points += 2
        elif repo.stargazers_count > 10:
            points += 1

        if repo.forks_count > 20:
            points += 1
        if repo.open_issues_count > 10:
            points += 1
        if len(repo.topics) > 3:
            points += 1

        if points >= 5:
            return "Complex"
        if points >= 2:
            return "Moderate"
        return "Simple"

    @staticmethod
    def classify_project_type(repo: Repository) -> str:
        """Framework, Library, Tool, Application or Other; first match wins."""
        search_text = repo.search_text
        for project_type, keywords in PROJECT_TYPE_KEYWORDS:
            if any(keyword in search_text for keyword in keywords):
                return project_type
        if repo.homepage:
            return "Application"
        return "Other"

    def generate_impact_metrics(self, repo: Repository, is_estimated: bool = True) -> List[str]:
        """
        Turn repository counters into resume bullet strings.

        Each bullet ends with " [ESTIMATE]" when is_estimated is True, marking the
        figure as inferred from public activity rather than verified.

        Returns:
            At most MAX_IMPACT_METRICS bullets, most impactful first
        """
        tag = f" {ESTIMATE_TAG}" if is_estimated else ""
        metrics = []

        if repo.stargazers_count >= 100:
            metrics.append(
                f"Achieved {repo.stargazers_count}+ GitHub stars demonstrating community adoption{tag}"
            )
        elif repo.stargazers_count >= 10:
            metrics.append(f"Gained {repo.stargazers_count} GitHub stars from developer community{tag}")

        if repo.forks_count >= 5:
            metrics.append(f"Generated {repo.forks_count} community forks and contributions{tag}")

        if days_since(repo.updated_at, self.clock()) <= 30:
            metrics.append(f"Actively maintained with recent updates within 30 days{tag}")

        if repo.has_issues:
            if repo.open_issues_count == 0:
                metrics.append(f"Maintained clean issue tracker with zero open issues{tag}")
            elif repo.open_issues_count <= 5:
                metrics.append(
                    f"Managed project issues with {repo.open_issues_count} active items{tag}"
                )

        if repo.description and len(repo.description) > 50:
            metrics.append(
                f"Documented project with comprehensive description and setup instructions{tag}"
            )

        if len(repo.topics) >= 3:
            metrics.append(f"Organized project with {len(repo.topics)} relevant technology tags{tag}")

        return metrics[:MAX_IMPACT_METRICS]
