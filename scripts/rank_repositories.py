#!/usr/bin/env python3
"""
Rank a User's Repositories and Summarize Their Skills

Prints the repository ranking the resume synthesizer would use, with the
sub-score breakdown behind each score, followed by the categorized skill
summary.

Usage:
    python scripts/rank_repositories.py data/johndoe.yaml
    python scripts/rank_repositories.py data/johndoe.yaml --role backend --top 10
    python scripts/rank_repositories.py data/johndoe.yaml --preset criteria_recent --reasons
"""

from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from scribe.contexts.intake import load_bundle, profile_overview, rank_languages
from scribe.contexts.synthesis import PresetNotFoundError, resolve_presets
from scribe.contexts.targeting import RepositoryScorer, SkillCategorizer
from scribe.utils.logger import setup_logger
from scribe.utils.report_formatter import Column, TableFormatter, format_percentage
from scribe.utils.timestamp import parse_github_timestamp

app = typer.Typer(help="Rank repositories and summarize skills from a GitHub input bundle.")

RANKING_COLUMNS = [
    Column("#", 3, ">"),
    Column("Repository", 28),
    Column("Score", 6, ">"),
    Column("Stars", 6, ">"),
    Column("Activity", 8, ">"),
    Column("Docs", 5, ">"),
    Column("Role", 5, ">"),
    Column("Lang", 5, ">"),
    Column("Type", 12),
]

LANGUAGE_COLUMNS = [
    Column("Language", 20),
    Column("Bytes", 12, ">"),
    Column("Share", 8, ">"),
]


@app.command()
def main(
    bundle_path: Annotated[Path, typer.Argument(help="Input bundle (YAML or JSON)")],
    role: Annotated[
        Optional[str], typer.Option("--role", "-r", help="Preferred role hint")
    ] = None,
    top: Annotated[int, typer.Option("--top", "-n", help="Number of repositories to show")] = 6,
    preset: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Criteria preset to apply (repeatable)"),
    ] = None,
    now: Annotated[
        Optional[str], typer.Option("--now", help="Freeze the clock at this ISO-8601 timestamp")
    ] = None,
    reasons: Annotated[
        bool, typer.Option("--reasons", help="List the reasons behind each score")
    ] = False,
):
    """Print repository ranking, language shares and skill summary."""
    setup_logger(context_name="rank_repositories", console_level="WARNING")

    try:
        bundle = load_bundle(bundle_path)
        criteria, _ = resolve_presets(preset or [])
        frozen_now = parse_github_timestamp(now) if now else None
    except (FileNotFoundError, PresetNotFoundError, ValueError, KeyError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    scorer = RepositoryScorer(now=frozen_now)
    categorizer = SkillCategorizer(now=frozen_now)

    ranked = scorer.select_top(bundle.repositories, top, role, criteria)
    skills = categorizer.categorize(bundle.language_stats, bundle.repositories)
    overview = profile_overview(bundle.profile, bundle.repositories, bundle.language_stats)

    report = TableFormatter(RANKING_COLUMNS, total_width=100)
    report.add_section_header(
        f"{overview['name']} (@{overview['username']}): {overview['stats']['total_repos']} repositories, "
        f"{overview['stats']['total_stars']} stars, {overview['followers']} followers"
    )
    report.add_text(f"Role hint: {role or 'none'}")
    report.add_blank_line()
    report.add_table_header()

    for position, repo_score in enumerate(ranked, start=1):
        breakdown = repo_score.breakdown
        report.add_row(
            [
                position,
                repo_score.repository.name,
                repo_score.score,
                breakdown.star_score,
                breakdown.activity_score,
                breakdown.readme_score,
                breakdown.role_relevance_score,
                breakdown.language_relevance_score,
                scorer.classify_project_type(repo_score.repository),
            ]
        )
        if reasons:
            for reason in repo_score.reasons:
                report.add_text(f"      - {reason}")

    if not ranked:
        report.add_text("No eligible repositories (forks and repositories under 10 KB are skipped)")

    typer.echo(report.render())

    languages = TableFormatter(LANGUAGE_COLUMNS, total_width=42)
    languages.add_blank_line().add_table_header()
    total_bytes = sum(bundle.language_stats.values())
    for language, byte_count, _ in rank_languages(bundle.language_stats):
        languages.add_row([language, byte_count, format_percentage(byte_count, total_bytes)])
    typer.echo(languages.render())

    typer.echo("")
    summary = categorizer.summarize(skills)
    if summary:
        typer.secho("Skills", bold=True)
        for line in summary:
            typer.echo(f"  {line}")
    else:
        typer.echo("No skills detected")


if __name__ == "__main__":
    app()
