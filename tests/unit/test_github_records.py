"""Unit tests for GitHub record construction and timestamp helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from scribe.contexts.intake.github_records import (
    ContributionActivity,
    OrganizationContribution,
    Profile,
    Repository,
)
from scribe.utils.timestamp import (
    days_since,
    now_utc,
    parse_github_timestamp,
    resolve_clock,
    whole_years_between,
)


@pytest.mark.unit
def test_parse_github_timestamp_variants():
    expected = datetime(2023, 11, 1, tzinfo=timezone.utc)

    assert parse_github_timestamp("2023-11-01T00:00:00Z") == expected
    assert parse_github_timestamp("2023-11-01T00:00:00+00:00") == expected
    assert parse_github_timestamp(datetime(2023, 11, 1)) == expected
    assert parse_github_timestamp(None) is None
    assert parse_github_timestamp("") is None


@pytest.mark.unit
def test_parse_github_timestamp_rejects_garbage():
    with pytest.raises(ValueError):
        parse_github_timestamp("last tuesday")


@pytest.mark.unit
def test_resolve_clock_variants():
    expected = datetime(2023, 12, 1, tzinfo=timezone.utc)

    assert resolve_clock() is now_utc
    assert resolve_clock(expected)() == expected
    assert resolve_clock(datetime(2023, 12, 1))() == expected
    assert resolve_clock(lambda: datetime(2023, 12, 1))() == expected
    assert resolve_clock(datetime(2023, 12, 1))().tzinfo is not None


@pytest.mark.unit
def test_day_and_year_counts():
    now = datetime(2023, 12, 1, tzinfo=timezone.utc)

    assert days_since(datetime(2023, 11, 1, tzinfo=timezone.utc), now) == 30
    assert days_since(now + timedelta(days=2), now) == -2
    assert whole_years_between(datetime(2020, 1, 1, tzinfo=timezone.utc), now) == 3
    assert whole_years_between(datetime(2023, 6, 1, tzinfo=timezone.utc), now) == 0


@pytest.mark.unit
def test_repository_from_api_tolerates_nulls():
    repo = Repository.from_api(
        {
            "name": "bare",
            "created_at": "2022-01-01T00:00:00Z",
            "updated_at": None,
            "description": None,
            "language": None,
            "topics": None,
            "homepage": "",
            "stargazers_count": None,
        }
    )

    assert repo.updated_at == repo.created_at
    assert repo.description is None
    assert repo.language is None
    assert repo.topics == ()
    assert repo.homepage is None
    assert repo.stargazers_count == 0
    assert repo.fork is False


@pytest.mark.unit
def test_repository_requires_created_at():
    with pytest.raises(ValueError, match="created_at"):
        Repository.from_api({"name": "timeless"})


@pytest.mark.unit
def test_repository_search_text(make_repo):
    repo = make_repo("My-Repo", description="Built With React", topics=["GraphQL"])
    assert repo.search_text == "my-repo built with react graphql"


@pytest.mark.unit
def test_profile_from_api_fallbacks():
    profile = Profile.from_api(
        {"login": "ghost", "created_at": "2021-01-01T00:00:00Z", "name": None, "blog": ""}
    )

    assert profile.html_url == "https://github.com/ghost"
    assert profile.name is None
    assert profile.blog is None
    assert profile.public_repos == 0
    assert profile.followers == 0


@pytest.mark.unit
def test_contribution_activity_accepts_camel_and_snake_case():
    camel = ContributionActivity.from_api(
        {
            "totalCommits": 250,
            "totalPRs": 35,
            "totalIssues": 15,
            "contributionYears": 3,
            "organizationContributions": [{"organization": "open-source-org", "contributions": 25}],
        }
    )
    snake = ContributionActivity.from_api(
        {
            "total_commits": 250,
            "total_prs": 35,
            "total_issues": 15,
            "contribution_years": 3,
            "organization_contributions": [{"org": "open-source-org", "contributions": 25}],
        }
    )

    assert camel == snake
    assert camel.organization_contributions[0] == OrganizationContribution(
        "open-source-org", 25, "Contributor"
    )


@pytest.mark.unit
def test_contribution_activity_defaults():
    activity = ContributionActivity.from_api({})

    assert activity.total_commits == 0
    assert activity.organization_contributions == ()


@pytest.mark.unit
def test_organization_contribution_requires_a_name():
    with pytest.raises(ValueError, match="no organization name"):
        OrganizationContribution.from_api({"contributions": 12})

    with pytest.raises(ValueError, match="no organization name"):
        ContributionActivity.from_api({"organizationContributions": [{"organization": "", "contributions": 3}]})
