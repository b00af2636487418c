"""
Resume payload schema for the Synthesis context.

The fixed shape every synthesized resume must satisfy before it is handed to
downstream persistence. Validation failures are surfaced as
SchemaValidationError naming the failing fields; nothing is coerced silently.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from scribe.contexts.synthesis.exceptions import SchemaValidationError

MAX_ACHIEVEMENTS = 4
MAX_SKILLS = 20
MAX_PROJECTS = 6
MAX_TECHNOLOGIES = 6

YEAR_RANGE_PATTERN = r"^\d{4} - (\d{4}|Present)$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class ExperienceEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    years: str = Field(pattern=YEAR_RANGE_PATTERN)
    description: str
    achievements: List[str] = Field(default_factory=list, max_length=MAX_ACHIEVEMENTS)


class ProjectEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    technologies: List[str] = Field(default_factory=list, max_length=MAX_TECHNOLOGIES)
    link: Optional[str] = None


class ResumePayload(BaseModel):
    """
    Synthesized resume draft.

    Contact fields are always populated (with placeholders where GitHub has no
    signal); education and certifications are placeholders the user fills in.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str
    location: str
    linkedin: Optional[str] = None
    website: Optional[str] = None
    summary: str = Field(min_length=1)
    experience: List[ExperienceEntry] = Field(min_length=1)
    skills: List[str] = Field(default_factory=list, max_length=MAX_SKILLS)
    education: str
    projects: List[ProjectEntry] = Field(default_factory=list, max_length=MAX_PROJECTS)
    certifications: List[str] = Field(default_factory=list)

    @field_validator("skills")
    @classmethod
    def skills_are_unique(cls, skills: List[str]) -> List[str]:
        duplicates = sorted({skill for skill in skills if skills.count(skill) > 1})
        if duplicates:
            raise ValueError(f"duplicate skills: {duplicates}")
        return skills


class SynthesisMetadata(BaseModel):
    """Provenance record describing how a resume draft was produced."""

    model_config = ConfigDict(frozen=True)

    source: Literal["github"] = "github"
    github_username: str
    processed_at: datetime
    repositories_analyzed: int = Field(ge=0)
    estimated_fields: List[str]
    user_hints: Optional[Dict[str, Any]] = None
    processing_options: Dict[str, Any]


def failing_fields(error: ValidationError) -> List[str]:
    """Dotted locations of every error in a pydantic ValidationError."""
    return [".".join(str(part) for part in err["loc"]) or "<root>" for err in error.errors()]


def validate_resume(data: Mapping[str, Any]) -> ResumePayload:
    """
    Validate a resume dict against the schema.

    Raises:
        SchemaValidationError: If any field violates the schema
    """
    try:
        return ResumePayload.model_validate(dict(data))
    except ValidationError as e:
        raise SchemaValidationError(
            "Generated resume payload does not match required schema",
            fields=failing_fields(e),
            original_error=e,
        ) from e
