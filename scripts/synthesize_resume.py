#!/usr/bin/env python3
"""
Synthesize a Resume Draft from a GitHub Input Bundle

Reads a bundle (profile, repositories, languages, contributions or events),
runs repository selection and skill categorization, and writes the validated
resume payload as YAML or JSON.

Examples:
    # Print a resume draft to stdout
    python scripts/synthesize_resume.py data/johndoe.yaml

    # Target a role and apply presets
    python scripts/synthesize_resume.py data/johndoe.yaml --role frontend \\
        --preset criteria_role_focused --preset options_showcase

    # Reproducible output with a frozen clock, written as JSON
    python scripts/synthesize_resume.py data/johndoe.yaml --now 2024-01-01T00:00:00Z \\
        --format json -o outs/johndoe_resume.json
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from omegaconf import OmegaConf
from typing_extensions import Annotated

from scribe.contexts.intake import load_bundle
from scribe.contexts.synthesis import (
    PresetNotFoundError,
    ResumeSynthesizer,
    SchemaValidationError,
    resolve_presets,
)
from scribe.contexts.synthesis.logger import setup_synthesis_logger
from scribe.utils.timestamp import parse_github_timestamp

app = typer.Typer(
    help="Synthesize a resume draft from GitHub profile data",
    add_completion=False,
)


@app.command()
def main(
    bundle_path: Annotated[
        Path,
        typer.Argument(help="Input bundle (YAML or JSON) with profile, repositories, languages"),
    ],
    role: Annotated[
        Optional[str],
        typer.Option("--role", "-r", help="Preferred role hint (e.g., 'frontend', 'backend')"),
    ] = None,
    preset: Annotated[
        Optional[List[str]],
        typer.Option("--preset", "-p", help="Preset to apply (repeatable, later wins)"),
    ] = None,
    now: Annotated[
        Optional[str],
        typer.Option("--now", help="Freeze the clock at this ISO-8601 timestamp"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: yaml or json"),
    ] = "yaml",
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output path (defaults to stdout)"),
    ] = None,
    with_metadata: Annotated[
        bool,
        typer.Option("--metadata", help="Include synthesis metadata in the output"),
    ] = False,
):
    """
    Synthesize a resume draft.

    Examples:\n
        $ synthesize_resume.py data/johndoe.yaml

        $ synthesize_resume.py data/johndoe.yaml --role backend --format json
    """
    if output_format not in ("yaml", "json"):
        typer.secho(f"Unknown format '{output_format}'. Use yaml or json.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    frozen_now = None
    if now:
        try:
            frozen_now = parse_github_timestamp(now)
        except ValueError as e:
            typer.secho(f"Invalid --now timestamp: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    try:
        bundle = load_bundle(bundle_path)
    except (FileNotFoundError, ValueError, KeyError) as e:
        typer.secho(f"Error loading bundle: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    setup_synthesis_logger(github_username=bundle.profile.login)

    try:
        criteria, options = resolve_presets(preset or [])
    except PresetNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        typer.secho(f"Invalid preset: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    hints = {"preferred_role": role} if role else None
    synthesizer = ResumeSynthesizer(now=frozen_now)

    try:
        payload = synthesizer.synthesize(
            bundle.profile,
            bundle.repositories,
            bundle.language_stats,
            bundle.contributions,
            hints=hints,
            options=options,
            criteria=criteria,
        )
    except SchemaValidationError as e:
        typer.secho(f"Resume failed validation: {', '.join(e.fields)}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    document = {"resume": payload.model_dump(mode="json")}
    if with_metadata:
        metadata = synthesizer.generate_metadata(
            bundle.profile.login, len(bundle.repositories), hints=hints, options=options
        )
        document["metadata"] = metadata.model_dump(mode="json")

    if output_format == "json":
        rendered = json.dumps(document, indent=2)
    else:
        rendered = OmegaConf.to_yaml(OmegaConf.create(document))

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(rendered, encoding="utf-8")
        typer.secho(f"Wrote {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(rendered)


if __name__ == "__main__":
    app()
