"""
Input bundle loading for the Intake context.

A bundle is one YAML or JSON file holding everything fetched for a user:

    profile:        /users/{user} payload
    repositories:   /users/{user}/repos payloads
    languages:      combined language -> bytes map, or a list of per-repository maps
    contributions:  pre-aggregated counters (camelCase or snake_case keys)
    events:         raw /users/{user}/events/public payloads (used when
                    contributions is absent)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Tuple

from omegaconf import OmegaConf

from scribe.contexts.intake.activity import merge_language_stats, summarize_events
from scribe.contexts.intake.github_records import (
    ContributionActivity,
    LanguageStats,
    Profile,
    Repository,
)
from scribe.contexts.intake.logger import _log_info

REQUIRED_KEYS = ("profile", "repositories")


@dataclass(frozen=True)
class ProfileBundle:
    """Typed records for one user, ready for targeting and synthesis."""

    profile: Profile
    repositories: Tuple[Repository, ...] = ()
    language_stats: LanguageStats = field(default_factory=dict)
    contributions: ContributionActivity = field(default_factory=ContributionActivity)


def bundle_from_mapping(data: Mapping[str, Any]) -> ProfileBundle:
    """
    Build a ProfileBundle from an already-parsed mapping.

    Raises:
        ValueError: If profile or repositories are missing
    """
    missing = [key for key in REQUIRED_KEYS if data.get(key) is None]
    if missing:
        raise ValueError(f"Input bundle is missing required keys: {missing}")

    languages = data.get("languages") or {}
    if isinstance(languages, Mapping):
        language_stats = {name: int(count) for name, count in languages.items()}
    else:
        language_stats = merge_language_stats(languages)

    if data.get("contributions") is not None:
        contributions = ContributionActivity.from_api(data["contributions"])
    else:
        contributions = summarize_events(data.get("events") or [])

    return ProfileBundle(
        profile=Profile.from_api(data["profile"]),
        repositories=tuple(Repository.from_api(repo) for repo in data["repositories"]),
        language_stats=language_stats,
        contributions=contributions,
    )


def load_bundle(path: Path) -> ProfileBundle:
    """
    Load a bundle file (YAML or JSON) with OmegaConf.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If required keys are missing or records are malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input bundle not found: {path}")

    data = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    bundle = bundle_from_mapping(data or {})

    _log_info(
        f"Loaded bundle for {bundle.profile.login}: {len(bundle.repositories)} repositories, "
        f"{len(bundle.language_stats)} languages"
    )
    return bundle
