"""
Activity aggregation helpers for the Intake context.

Pure functions that condense already-fetched GitHub data into the shapes the
rest of the pipeline consumes:

- summarize_events(): public event stream -> ContributionActivity
- merge_language_stats(): per-repository language maps -> LanguageStats
- rank_languages() / top_languages(): byte-share ranking
- filter_repositories() / repository_stats() / profile_overview(): profile digests
"""

from collections import defaultdict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from scribe.contexts.intake.github_records import (
    ContributionActivity,
    LanguageStats,
    OrganizationContribution,
    Profile,
    Repository,
)
from scribe.contexts.intake.logger import _log_warning, log_events_summarized
from scribe.utils.timestamp import parse_github_timestamp

# Organizations with more events than this are labelled active
ACTIVE_CONTRIBUTOR_THRESHOLD = 10
ROLE_ACTIVE_CONTRIBUTOR = "Active Contributor"
ROLE_CONTRIBUTOR = "Contributor"


def summarize_events(events: Iterable[Mapping[str, Any]]) -> ContributionActivity:
    """
    Aggregate GitHub public events into contribution counters.

    Counting rules:
    - PushEvent: adds the number of commits in the payload
    - PullRequestEvent / IssuesEvent: counted only when action == "opened"
    - Every event contributes its calendar year to the distinct-year count
    - Events carrying an "org" are tallied per organization

    Args:
        events: Events as returned by /users/{user}/events/public

    Returns:
        ContributionActivity with organizations in first-seen order
    """
    commits = prs = issues = 0
    years = set()
    org_counts: Dict[str, int] = {}
    event_count = 0

    for event in events:
        event_count += 1
        created_at = parse_github_timestamp(event.get("created_at"))
        if created_at is not None:
            years.add(created_at.year)

        payload = event.get("payload") or {}
        event_type = event.get("type")
        if event_type == "PushEvent":
            commits += len(payload.get("commits") or [])
        elif event_type == "PullRequestEvent" and payload.get("action") == "opened":
            prs += 1
        elif event_type == "IssuesEvent" and payload.get("action") == "opened":
            issues += 1

        org = event.get("org")
        if org and org.get("login"):
            org_counts[org["login"]] = org_counts.get(org["login"], 0) + 1

    organizations = tuple(
        OrganizationContribution(
            organization=name,
            contributions=count,
            role=ROLE_ACTIVE_CONTRIBUTOR if count > ACTIVE_CONTRIBUTOR_THRESHOLD else ROLE_CONTRIBUTOR,
        )
        for name, count in org_counts.items()
    )

    log_events_summarized(event_count, commits, prs, len(organizations))

    return ContributionActivity(
        total_commits=commits,
        total_prs=prs,
        total_issues=issues,
        contribution_years=len(years),
        organization_contributions=organizations,
    )


def merge_language_stats(per_repository: Iterable[Mapping[str, int]]) -> LanguageStats:
    """
    Sum language byte counts across repositories.

    Args:
        per_repository: One /repos/{owner}/{repo}/languages map per repository

    Returns:
        Combined language -> bytes map
    """
    totals: Dict[str, int] = defaultdict(int)
    for languages in per_repository:
        for language, byte_count in languages.items():
            if byte_count < 0:
                _log_warning(f"Ignoring negative byte count for {language}: {byte_count}")
                continue
            totals[language] += byte_count
    return dict(totals)


def rank_languages(language_stats: LanguageStats) -> List[Tuple[str, int, int]]:
    """
    Rank languages by bytes of code.

    Returns:
        (language, bytes, rounded percentage) tuples, largest first
    """
    total = sum(language_stats.values())
    ranked = [
        (language, byte_count, round(byte_count / total * 100) if total else 0)
        for language, byte_count in language_stats.items()
    ]
    return sorted(ranked, key=lambda item: item[1], reverse=True)


def top_languages(language_stats: LanguageStats, limit: int = 5) -> List[str]:
    """Names of the `limit` languages with the most bytes."""
    return [language for language, _, _ in rank_languages(language_stats)[:limit]]


def filter_repositories(
    repositories: Iterable[Repository],
    exclude_forks: bool = True,
    min_stars: int = 0,
    max_results: int = 50,
) -> List[Repository]:
    """Keep repositories passing the fork/star filters, preserving input order."""
    kept = [
        repo
        for repo in repositories
        if not (exclude_forks and repo.fork) and repo.stargazers_count >= min_stars
    ]
    return kept[:max_results]


def repository_stats(repositories: Iterable[Repository]) -> Dict[str, Any]:
    """
    Headline statistics over a user's own (non-fork) repositories.

    Returns:
        Dict with total_repos, total_stars, total_forks, languages (distinct,
        first-seen order) and most_starred_repo (None when nothing has stars)
    """
    repos = filter_repositories(repositories)

    languages: List[str] = []
    for repo in repos:
        if repo.language and repo.language not in languages:
            languages.append(repo.language)

    most_starred: Optional[Repository] = None
    for repo in repos:
        best = most_starred.stargazers_count if most_starred else 0
        if repo.stargazers_count > best:
            most_starred = repo

    return {
        "total_repos": len(repos),
        "total_stars": sum(repo.stargazers_count for repo in repos),
        "total_forks": sum(repo.forks_count for repo in repos),
        "languages": languages,
        "most_starred_repo": most_starred,
    }


def profile_overview(
    profile: Profile, repositories: Iterable[Repository], language_stats: LanguageStats
) -> Dict[str, Any]:
    """Compact profile digest used by reports."""
    return {
        "username": profile.login,
        "name": profile.name or profile.login,
        "location": profile.location,
        "blog": profile.blog,
        "email": profile.email,
        "public_repos": profile.public_repos,
        "followers": profile.followers,
        "created_at": profile.created_at.strftime("%B %d, %Y"),
        "stats": repository_stats(repositories),
        "top_languages": top_languages(language_stats, 3),
        "profile_url": profile.html_url,
    }
