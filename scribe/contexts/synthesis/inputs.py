"""
Caller-supplied hints and processing options for resume synthesis.

Both accept partial mappings (camelCase or snake_case keys) so callers can pass
what they got from a request body or a preset file.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

ExperienceLevel = Literal["junior", "mid", "senior", "lead"]

_CAMEL_TO_SNAKE = {
    "preferredRole": "preferred_role",
    "techStack": "tech_stack",
    "targetCompany": "target_company",
    "experienceLevel": "experience_level",
    "maxRepositories": "max_repositories",
    "minStarsForProjects": "min_stars_for_projects",
    "includeOpenSourceExperience": "include_open_source_experience",
    "conservativeEstimates": "conservative_estimates",
}


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_TO_SNAKE.get(key, key): value for key, value in data.items()}


@dataclass(frozen=True)
class UserHints:
    """Optional targeting hints; only preferred_role currently steers synthesis."""

    preferred_role: Optional[str] = None
    tech_stack: List[str] = field(default_factory=list)
    target_company: Optional[str] = None
    experience_level: Optional[ExperienceLevel] = None

    @classmethod
    def from_mapping(cls, data: Union["UserHints", Mapping[str, Any], None]) -> "UserHints":
        if data is None:
            return cls()
        if isinstance(data, UserHints):
            return data
        values = _normalize_keys(data)
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in values.items() if key in known and value is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SynthesisOptions:
    """
    Processing options.

    Attributes:
        max_repositories: How many repositories the scorer selects
        min_stars_for_projects: Star threshold for listing a selected repository as a project
        include_open_source_experience: Allow the open-source contributor entry
        conservative_estimates: Tag repository impact bullets with [ESTIMATE]
    """

    max_repositories: int = 6
    min_stars_for_projects: int = 0
    include_open_source_experience: bool = True
    conservative_estimates: bool = True

    @classmethod
    def from_mapping(
        cls, data: Union["SynthesisOptions", Mapping[str, Any], None]
    ) -> "SynthesisOptions":
        """
        Merge a partial mapping onto the defaults.

        Raises:
            ValueError: On unknown option names
        """
        if data is None:
            return cls()
        if isinstance(data, SynthesisOptions):
            return data
        return cls().with_overrides(data)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "SynthesisOptions":
        values = _normalize_keys(overrides)
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown synthesis options: {unknown}. Known options: {sorted(known)}")
        return replace(self, **{key: value for key, value in values.items() if value is not None})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
