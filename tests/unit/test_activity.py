"""Unit tests for activity aggregation, profile digests and bundle loading."""

from pathlib import Path

import pytest

from scribe.contexts.intake.activity import (
    filter_repositories,
    merge_language_stats,
    profile_overview,
    rank_languages,
    repository_stats,
    summarize_events,
    top_languages,
)
from scribe.contexts.intake.bundle import bundle_from_mapping, load_bundle

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


@pytest.mark.unit
def test_summarize_events(events_data):
    activity = summarize_events(events_data["events"])

    assert activity.total_commits == 4
    assert activity.total_prs == 1
    assert activity.total_issues == 1
    assert activity.contribution_years == 3
    assert len(activity.organization_contributions) == 1

    org = activity.organization_contributions[0]
    assert org.organization == "rust-lang"
    assert org.contributions == 2
    assert org.role == "Contributor"


@pytest.mark.unit
def test_summarize_events_marks_active_organizations():
    events = [
        {"type": "PushEvent", "created_at": "2023-01-01T00:00:00Z", "org": {"login": "busy"}, "payload": {}}
        for _ in range(11)
    ]

    activity = summarize_events(events)

    assert activity.organization_contributions[0].role == "Active Contributor"
    assert activity.total_commits == 0


@pytest.mark.unit
def test_summarize_events_empty():
    activity = summarize_events([])

    assert activity.total_commits == 0
    assert activity.contribution_years == 0
    assert activity.organization_contributions == ()


@pytest.mark.unit
def test_merge_language_stats_skips_negative_counts():
    merged = merge_language_stats([{"Rust": 100, "Shell": 10}, {"Rust": 50, "Makefile": -5}])
    assert merged == {"Rust": 150, "Shell": 10}


@pytest.mark.unit
def test_rank_and_top_languages():
    stats = {"Shell": 100, "Python": 700, "Go": 200}

    assert rank_languages(stats) == [("Python", 700, 70), ("Go", 200, 20), ("Shell", 100, 10)]
    assert top_languages(stats, 2) == ["Python", "Go"]
    assert rank_languages({}) == []


@pytest.mark.unit
def test_filter_repositories(make_repo):
    repos = [
        make_repo("a", stargazers_count=5),
        make_repo("b", fork=True, stargazers_count=50),
        make_repo("c", stargazers_count=0),
        make_repo("d", stargazers_count=9),
    ]

    assert [r.name for r in filter_repositories(repos)] == ["a", "c", "d"]
    assert [r.name for r in filter_repositories(repos, exclude_forks=False, min_stars=5)] == ["a", "b", "d"]
    assert [r.name for r in filter_repositories(repos, max_results=1)] == ["a"]


@pytest.mark.unit
def test_repository_stats(johndoe):
    stats = repository_stats(johndoe.repositories)

    assert stats["total_repos"] == 4
    assert stats["total_stars"] == 250
    assert stats["total_forks"] == 48
    assert stats["languages"] == ["TypeScript", "Python", "Shell"]
    assert stats["most_starred_repo"].name == "awesome-react-app"


@pytest.mark.unit
def test_repository_stats_without_stars(make_repo):
    stats = repository_stats([make_repo(stargazers_count=0)])
    assert stats["most_starred_repo"] is None


@pytest.mark.unit
def test_profile_overview(johndoe):
    overview = profile_overview(johndoe.profile, johndoe.repositories, johndoe.language_stats)

    assert overview["username"] == "johndoe"
    assert overview["name"] == "John Doe"
    assert overview["created_at"] == "January 01, 2020"
    assert overview["top_languages"] == ["TypeScript", "Python", "JavaScript"]


# =============================================================================
# BUNDLES
# =============================================================================


@pytest.mark.unit
def test_bundle_with_precomputed_contributions(johndoe):
    assert johndoe.profile.login == "johndoe"
    assert len(johndoe.repositories) == 5
    assert johndoe.language_stats["TypeScript"] == 60000
    assert johndoe.contributions.total_commits == 250
    assert johndoe.contributions.organization_contributions[0].role == "Active Contributor"


@pytest.mark.unit
def test_bundle_from_events_and_language_list(events_data):
    bundle = bundle_from_mapping(events_data)

    assert bundle.language_stats == {"Rust": 50000, "Shell": 800, "Makefile": 200}
    assert bundle.contributions.total_commits == 4
    assert bundle.profile.name is None


@pytest.mark.unit
def test_bundle_requires_profile_and_repositories():
    with pytest.raises(ValueError, match="missing required keys"):
        bundle_from_mapping({"profile": {"login": "x", "created_at": "2020-01-01T00:00:00Z"}})


@pytest.mark.unit
def test_load_bundle_from_file():
    bundle = load_bundle(FIXTURES_PATH / "johndoe_bundle.yaml")
    assert bundle.profile.email == "john@example.com"


@pytest.mark.unit
def test_load_bundle_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_bundle(tmp_path / "nope.yaml")
