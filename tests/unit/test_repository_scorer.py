"""Unit tests for RepositoryScorer selection, sub-scores and metrics."""

from datetime import datetime, timezone
from itertools import product

import pytest

from scribe.contexts.targeting.repository_scorer import (
    DEFAULT_CRITERIA,
    ESTIMATE_TAG,
    NEUTRAL_ROLE_SCORE,
    RepositoryScorer,
    ScoreBreakdown,
    SelectionCriteria,
)

FROZEN_NOW = datetime(2023, 12, 1, tzinfo=timezone.utc)


@pytest.fixture
def scorer():
    return RepositoryScorer(now=FROZEN_NOW)


# =============================================================================
# SELECTION
# =============================================================================


@pytest.mark.unit
def test_select_top_excludes_forks_and_tiny_repositories(scorer, make_repo):
    """Forks and repositories at or below 10 KB never appear in the selection."""
    repos = [
        make_repo("real-project"),
        make_repo("forked-project", fork=True, stargazers_count=900),
        make_repo("scaffold", size=10),
        make_repo("just-big-enough", size=11),
    ]

    selected = scorer.select_top(repos, max_count=10)
    names = [item.repository.name for item in selected]

    assert "forked-project" not in names
    assert "scaffold" not in names
    assert set(names) == {"real-project", "just-big-enough"}


@pytest.mark.unit
def test_select_top_respects_max_count(scorer, make_repo):
    repos = [make_repo(f"repo-{i}", stargazers_count=i) for i in range(10)]

    assert len(scorer.select_top(repos, max_count=3)) == 3
    assert scorer.select_top(repos, max_count=0) == []


@pytest.mark.unit
def test_select_top_sorted_descending(scorer, make_repo):
    repos = [
        make_repo("quiet", stargazers_count=0, updated_at=datetime(2021, 1, 1, tzinfo=timezone.utc)),
        make_repo("popular", stargazers_count=500, homepage="https://popular.dev"),
        make_repo("modest", stargazers_count=8),
    ]

    selected = scorer.select_top(repos)
    scores = [item.score for item in selected]

    assert scores == sorted(scores, reverse=True)
    assert selected[0].repository.name == "popular"
    assert selected[-1].repository.name == "quiet"


@pytest.mark.unit
def test_select_top_ties_keep_input_order(scorer, make_repo):
    """Identically scored repositories come back in input order."""
    repos = [make_repo("first"), make_repo("second"), make_repo("third")]

    selected = scorer.select_top(repos)

    assert [item.repository.name for item in selected] == ["first", "second", "third"]


@pytest.mark.unit
def test_zero_star_repository_still_scores_above_zero(scorer, make_repo):
    selected = scorer.select_top([make_repo("brand-new", stargazers_count=0)])

    assert len(selected) == 1
    assert selected[0].score > 0


@pytest.mark.unit
def test_scores_bounded_between_zero_and_one(scorer, make_repo):
    repos = [
        make_repo("maximal", stargazers_count=10_000, homepage="https://x.dev", topics=["a", "b", "c"],
                  description="A thorough description that is comfortably long"),
        make_repo("minimal", stargazers_count=0, description=None, language=None, has_issues=False,
                  updated_at=datetime(2019, 1, 1, tzinfo=timezone.utc),
                  created_at=datetime(2018, 1, 1, tzinfo=timezone.utc)),
    ]

    for role in (None, "frontend", "backend", "not-a-role"):
        for item in scorer.select_top(repos, preferred_role=role):
            assert 0.0 <= item.score <= 1.0


def weight_grid(step=0.05):
    """Every criteria in 0.05 steps over four weights, with no language weight."""
    units = round(1 / step)
    for stars, activity, readme in product(range(units + 1), repeat=3):
        role = units - stars - activity - readme
        if role < 0:
            continue
        yield SelectionCriteria(
            star_weight=stars * step,
            recent_activity_weight=activity * step,
            readme_presence_weight=readme * step,
            role_relevance_weight=role * step,
            language_relevance_weight=0.0,
        )


@pytest.mark.unit
def test_scores_bounded_under_custom_criteria(scorer, make_repo):
    """A repository that maxes every weighted sub-score never scores above 1.0."""
    repo = make_repo(
        "react-vue-dashboard",
        stargazers_count=10_000,
        homepage="https://dashboard.dev",
        language="TypeScript",
        topics=["react", "vue", "angular", "css", "html"],
        description="A thorough description that is comfortably long",
    )

    scores = [
        scorer.score_repository(repo, preferred_role="frontend", criteria=criteria).score
        for criteria in weight_grid()
    ]

    assert len(scores) == 1771
    assert max(scores) <= 1.0
    assert min(scores) >= 0.0


@pytest.mark.unit
def test_weighted_total_is_clamped():
    perfect = ScoreBreakdown(1.0, 1.0, 1.0, 1.0, 1.0)
    nothing = ScoreBreakdown(0.0, 0.0, 0.0, 0.0, 0.0)

    for criteria in weight_grid():
        assert perfect.weighted_total(criteria) <= 1.0
        assert nothing.weighted_total(criteria) == 0.0


@pytest.mark.unit
def test_naive_frozen_time_is_treated_as_utc(make_repo):
    naive = RepositoryScorer(now=datetime(2023, 12, 1))
    aware = RepositoryScorer(now=FROZEN_NOW)
    repo = make_repo(updated_at=datetime(2023, 6, 1, tzinfo=timezone.utc))

    assert naive.activity_score(repo) == aware.activity_score(repo)
    assert naive.clock() == FROZEN_NOW


@pytest.mark.unit
def test_score_is_weighted_sum_of_breakdown(scorer, make_repo):
    repo_score = scorer.score_repository(make_repo(stargazers_count=42))

    assert repo_score.score == pytest.approx(repo_score.breakdown.weighted_total(DEFAULT_CRITERIA))


@pytest.mark.unit
def test_select_top_accepts_partial_weight_overrides(scorer, make_repo):
    """Shifting weight from recency to stars promotes the old but popular repository."""
    old_popular = make_repo(
        "old-popular",
        stargazers_count=30,
        created_at=datetime(2019, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
    )
    fresh_unknown = make_repo("fresh-unknown", stargazers_count=1)

    default_order = [item.repository.name for item in scorer.select_top([fresh_unknown, old_popular])]
    star_heavy = scorer.select_top(
        [fresh_unknown, old_popular],
        criteria={"star_weight": 0.50, "recent_activity_weight": 0.05},
    )

    assert default_order[0] == "fresh-unknown"
    assert star_heavy[0].repository.name == "old-popular"


# =============================================================================
# CRITERIA
# =============================================================================


@pytest.mark.unit
def test_criteria_defaults_sum_to_one():
    criteria = SelectionCriteria()
    total = (
        criteria.star_weight
        + criteria.recent_activity_weight
        + criteria.readme_presence_weight
        + criteria.role_relevance_weight
        + criteria.language_relevance_weight
    )
    assert total == pytest.approx(1.0)


@pytest.mark.unit
def test_criteria_rejects_weights_not_summing_to_one():
    with pytest.raises(ValueError, match="sum to 1.0"):
        SelectionCriteria(star_weight=0.9)


@pytest.mark.unit
def test_criteria_rejects_negative_weights():
    with pytest.raises(ValueError, match="non-negative"):
        SelectionCriteria(star_weight=-0.1, recent_activity_weight=0.65)


@pytest.mark.unit
def test_criteria_override_rejects_unknown_weight():
    with pytest.raises(ValueError, match="Unknown selection weights"):
        DEFAULT_CRITERIA.with_overrides({"fork_weight": 0.1})


# =============================================================================
# SUB-SCORES
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "stars,expected",
    [(0, 0.1), (1, 0.3), (2, 0.5), (5, 0.5), (6, 0.7), (20, 0.7), (21, 0.85), (100, 0.85), (101, 1.0)],
)
def test_star_score_steps(stars, expected):
    assert RepositoryScorer.star_score(stars) == expected


@pytest.mark.unit
def test_activity_score_buckets(scorer, make_repo):
    def updated(year, month, day):
        return make_repo(
            created_at=datetime(2021, 1, 1, tzinfo=timezone.utc),
            updated_at=datetime(year, month, day, tzinfo=timezone.utc),
        )

    assert scorer.activity_score(updated(2023, 11, 20)) == 1.0
    assert scorer.activity_score(updated(2023, 10, 1)) == 0.8
    assert scorer.activity_score(updated(2023, 7, 1)) == 0.6
    assert scorer.activity_score(updated(2023, 1, 1)) == 0.4
    assert scorer.activity_score(updated(2022, 1, 1)) == 0.2


@pytest.mark.unit
def test_readme_score_components(make_repo):
    bare = make_repo(description=None, has_issues=False)
    documented = make_repo(
        description="A description that is longer than twenty characters",
        homepage="https://docs.example.com",
        topics=["python"],
        has_issues=True,
    )

    assert RepositoryScorer.readme_score(bare) == 0.0
    assert RepositoryScorer.readme_score(make_repo()) == pytest.approx(0.5)
    assert RepositoryScorer.readme_score(documented) == pytest.approx(1.0)


@pytest.mark.unit
def test_role_relevance_without_hint_is_neutral(make_repo):
    repo = make_repo()

    assert RepositoryScorer.role_relevance_score(repo) == NEUTRAL_ROLE_SCORE
    assert RepositoryScorer.role_relevance_score(repo, None) == 0.5
    assert RepositoryScorer.role_relevance_score(repo, "astronaut") == 0.5


@pytest.mark.unit
def test_role_relevance_keyword_overlap_with_language_bonus(make_repo):
    repo = make_repo(
        "react-dashboard",
        description="Dashboard built with React and TypeScript",
        language="TypeScript",
        topics=["react", "css"],
    )

    # react, typescript, css out of 10 frontend keywords, doubled, plus the language bonus
    assert RepositoryScorer.role_relevance_score(repo, "frontend") == pytest.approx(0.9)
    assert RepositoryScorer.role_relevance_score(repo, "Frontend") == pytest.approx(0.9)
    assert RepositoryScorer.role_relevance_score(repo, "backend") == 0.0


@pytest.mark.unit
def test_language_relevance_tiers(make_repo):
    assert RepositoryScorer.language_relevance_score(make_repo(language="Python")) == 0.8
    assert RepositoryScorer.language_relevance_score(make_repo(language="Haskell")) == 0.5
    assert RepositoryScorer.language_relevance_score(make_repo(language=None)) == 0.3


@pytest.mark.unit
def test_score_reasons(scorer, make_repo):
    repo = make_repo(stargazers_count=50, forks_count=9, topics=["a", "b", "c"], homepage="https://x.dev")
    reasons = scorer.score_repository(repo).reasons

    assert "Popular project with 50 stars" in reasons
    assert "Recently updated and actively maintained" in reasons
    assert "Community engagement with 9 forks" in reasons
    assert "Includes live demo or project website" in reasons


# =============================================================================
# METRICS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,description,homepage,expected",
    [
        ("react-starter", "Opinionated starter for new apps", None, "Framework"),
        ("json-parser", "A small library for parsing JSON", None, "Library"),
        ("deploy-cli", "Command line deployer", None, "Tool"),
        ("photo-app", "Share photos with friends", None, "Application"),
        ("notes", "Personal notes", "https://notes.example.com", "Application"),
        ("notes", "Personal notes", None, "Other"),
    ],
)
def test_classify_project_type(make_repo, name, description, homepage, expected):
    repo = make_repo(name, description=description, homepage=homepage)
    assert RepositoryScorer.classify_project_type(repo) == expected


@pytest.mark.unit
def test_estimate_complexity(make_repo):
    assert RepositoryScorer.estimate_complexity(
        make_repo(size=20000, stargazers_count=150, forks_count=30)
    ) == "Complex"
    assert RepositoryScorer.estimate_complexity(make_repo(size=2000, stargazers_count=20)) == "Moderate"
    assert RepositoryScorer.estimate_complexity(make_repo(size=500, stargazers_count=3)) == "Simple"


@pytest.mark.unit
def test_extract_metrics_fills_missing_fields(scorer, make_repo):
    metrics = scorer.extract_metrics(make_repo("bare", description=None, language=None))

    assert metrics.description == "No description provided"
    assert metrics.language == "Unknown"
    assert metrics.has_readme is False
    assert metrics.project_type == "Other"


@pytest.mark.unit
def test_impact_metrics_are_capped_and_tagged(scorer, make_repo):
    repo = make_repo(
        stargazers_count=150,
        forks_count=10,
        open_issues_count=0,
        description="An extensive description of the project that is well over fifty characters",
        topics=["python", "cli", "automation"],
    )

    metrics = scorer.generate_impact_metrics(repo)

    assert len(metrics) == 4
    assert "150+ GitHub stars" in metrics[0]
    assert all(metric.endswith(f" {ESTIMATE_TAG}") for metric in metrics)


@pytest.mark.unit
def test_impact_metrics_untagged_when_verified(scorer, make_repo):
    metrics = scorer.generate_impact_metrics(make_repo(stargazers_count=12), is_estimated=False)

    assert metrics
    assert "Gained 12 GitHub stars from developer community" in metrics
    assert not any(ESTIMATE_TAG in metric for metric in metrics)
