"""Shared fixtures: frozen clock, fixture bundles and a repository factory."""

from datetime import datetime, timezone
from pathlib import Path

import pytest
from omegaconf import OmegaConf

from scribe.contexts.intake import Repository, bundle_from_mapping

FIXTURES_PATH = Path(__file__).parent / "fixtures"
FROZEN_NOW = datetime(2023, 12, 1, tzinfo=timezone.utc)


def load_fixture(name: str) -> dict:
    return OmegaConf.to_container(OmegaConf.load(FIXTURES_PATH / name), resolve=True)


@pytest.fixture
def frozen_now():
    return FROZEN_NOW


@pytest.fixture
def johndoe_data():
    return load_fixture("johndoe_bundle.yaml")


@pytest.fixture
def johndoe(johndoe_data):
    return bundle_from_mapping(johndoe_data)


@pytest.fixture
def events_data():
    return load_fixture("public_events.yaml")


@pytest.fixture
def make_repo():
    """Factory for repositories with sensible defaults; override any field by keyword."""

    def _make(name="sample-repo", **overrides):
        values = {
            "name": name,
            "created_at": datetime(2023, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2023, 11, 20, tzinfo=timezone.utc),
            "description": "A sample repository used in tests",
            "language": "Python",
            "stargazers_count": 3,
            "forks_count": 0,
            "topics": (),
            "homepage": None,
            "html_url": f"https://github.com/tester/{name}",
            "has_issues": True,
            "open_issues_count": 0,
            "fork": False,
            "size": 500,
        }
        values.update(overrides)
        if isinstance(values["topics"], list):
            values["topics"] = tuple(values["topics"])
        return Repository(**values)

    return _make
