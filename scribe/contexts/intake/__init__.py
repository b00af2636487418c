"""
Intake Context

Responsibilities:
- Defines typed, immutable records for GitHub profiles, repositories and activity
- Builds those records from already-fetched GitHub REST payloads
- Aggregates raw event streams and per-repository language maps
- Loads input bundles (YAML/JSON) into typed records

Owns: Input record types, payload normalization, activity aggregation
Never: Performs HTTP requests or makes scoring decisions
"""

from scribe.contexts.intake.bundle import ProfileBundle, bundle_from_mapping, load_bundle
from scribe.contexts.intake.activity import (
    filter_repositories,
    merge_language_stats,
    profile_overview,
    rank_languages,
    repository_stats,
    summarize_events,
    top_languages,
)
from scribe.contexts.intake.github_records import (
    ContributionActivity,
    LanguageStats,
    OrganizationContribution,
    Profile,
    Repository,
)

__all__ = [
    # Records
    "ContributionActivity",
    "LanguageStats",
    "OrganizationContribution",
    "Profile",
    "Repository",
    # Bundles
    "ProfileBundle",
    "bundle_from_mapping",
    "load_bundle",
    # Aggregation helpers
    "filter_repositories",
    "merge_language_stats",
    "profile_overview",
    "rank_languages",
    "repository_stats",
    "summarize_events",
    "top_languages",
]
