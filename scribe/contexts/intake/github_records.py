"""
GitHub record data structures for the Intake context.

Typed, immutable views over already-fetched GitHub REST payloads. The
Targeting and Synthesis contexts consume only these records, never raw dicts.

Factory methods (`from_api`) tolerate the nulls GitHub returns for optional
fields (description, language, topics, homepage, profile contact fields).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Tuple

from scribe.utils.timestamp import parse_github_timestamp

# Language name -> bytes of code across a user's repositories
LanguageStats = Dict[str, int]


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-None value among keys (camelCase/snake_case aliases)."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


@dataclass(frozen=True)
class Repository:
    """
    A single GitHub repository as returned by /users/{user}/repos.

    Attributes:
        name: Repository name (without owner)
        created_at: Creation time (aware datetime)
        updated_at: Last update time (aware datetime)
        description: Free-text description, None when absent
        language: Primary language reported by GitHub, None when absent
        stargazers_count: Star count
        forks_count: Fork count
        topics: Topic tags
        homepage: Project website, None when absent
        html_url: Repository page on github.com
        has_issues: Whether issue tracking is enabled
        open_issues_count: Open issue count
        fork: Whether this repository is a fork
        size: Repository size in KB
    """

    name: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    topics: Tuple[str, ...] = ()
    homepage: Optional[str] = None
    html_url: str = ""
    has_issues: bool = False
    open_issues_count: int = 0
    fork: bool = False
    size: int = 0

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Repository":
        """
        Build a Repository from a GitHub REST payload.

        Raises:
            KeyError: If the payload has no name
            ValueError: If created_at/updated_at are missing or malformed
        """
        created_at = parse_github_timestamp(data.get("created_at"))
        updated_at = parse_github_timestamp(data.get("updated_at")) or created_at
        if created_at is None:
            raise ValueError(f"Repository {data.get('name')!r} has no created_at timestamp")

        return cls(
            name=data["name"],
            created_at=created_at,
            updated_at=updated_at,
            description=data.get("description") or None,
            language=data.get("language") or None,
            stargazers_count=int(data.get("stargazers_count") or 0),
            forks_count=int(data.get("forks_count") or 0),
            topics=tuple(data.get("topics") or ()),
            homepage=data.get("homepage") or None,
            html_url=data.get("html_url") or "",
            has_issues=bool(data.get("has_issues", False)),
            open_issues_count=int(data.get("open_issues_count") or 0),
            fork=bool(data.get("fork", False)),
            size=int(data.get("size") or 0),
        )

    @property
    def search_text(self) -> str:
        """Lowercased name, description and topics joined for keyword matching."""
        return " ".join([self.name, self.description or "", " ".join(self.topics)]).lower()


@dataclass(frozen=True)
class Profile:
    """
    A GitHub user profile as returned by /users/{user}.

    Only the fields the resume pipeline reads are kept.
    """

    login: str
    html_url: str
    created_at: datetime
    public_repos: int = 0
    followers: int = 0
    name: Optional[str] = None
    email: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Profile":
        created_at = parse_github_timestamp(data.get("created_at"))
        if created_at is None:
            raise ValueError(f"Profile {data.get('login')!r} has no created_at timestamp")

        return cls(
            login=data["login"],
            html_url=data.get("html_url") or f"https://github.com/{data['login']}",
            created_at=created_at,
            public_repos=int(data.get("public_repos") or 0),
            followers=int(data.get("followers") or 0),
            name=data.get("name") or None,
            email=data.get("email") or None,
            location=data.get("location") or None,
            blog=data.get("blog") or None,
        )


@dataclass(frozen=True)
class OrganizationContribution:
    """Contribution count to one organization, with an inferred role label."""

    organization: str
    contributions: int
    role: str = "Contributor"

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "OrganizationContribution":
        organization = _pick(data, "organization", "org")
        if not organization:
            raise ValueError(f"Organization contribution has no organization name: {dict(data)!r}")

        return cls(
            organization=organization,
            contributions=int(_pick(data, "contributions", default=0)),
            role=_pick(data, "role", default="Contributor"),
        )


@dataclass(frozen=True)
class ContributionActivity:
    """
    Aggregate public contribution counters for a user.

    Attributes:
        total_commits: Commits pushed
        total_prs: Pull requests opened
        total_issues: Issues opened
        contribution_years: Number of distinct calendar years with activity
        organization_contributions: Per-organization contribution summaries
    """

    total_commits: int = 0
    total_prs: int = 0
    total_issues: int = 0
    contribution_years: int = 0
    organization_contributions: Tuple[OrganizationContribution, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ContributionActivity":
        """Accepts both camelCase (totalCommits) and snake_case (total_commits) keys."""
        orgs = _pick(data, "organizationContributions", "organization_contributions", default=())
        return cls(
            total_commits=int(_pick(data, "totalCommits", "total_commits", default=0)),
            total_prs=int(_pick(data, "totalPRs", "total_prs", default=0)),
            total_issues=int(_pick(data, "totalIssues", "total_issues", default=0)),
            contribution_years=int(_pick(data, "contributionYears", "contribution_years", default=0)),
            organization_contributions=tuple(
                org if isinstance(org, OrganizationContribution) else OrganizationContribution.from_api(org)
                for org in orgs
            ),
        )
