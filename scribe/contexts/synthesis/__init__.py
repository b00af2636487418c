"""
Synthesis Context

Responsibilities:
- Orchestrates repository selection and skill categorization for one profile
- Drafts every resume field (summary, experience, skills, projects, placeholders)
- Validates the draft against the fixed resume schema
- Resolves named presets for selection weights and processing options

Owns: Resume schema, field templates, processing options, synthesis metadata
Never: Fetches GitHub data or persists resumes
"""

from scribe.contexts.synthesis.config_resolver import list_presets, resolve_presets
from scribe.contexts.synthesis.exceptions import PresetNotFoundError, SchemaValidationError
from scribe.contexts.synthesis.inputs import SynthesisOptions, UserHints
from scribe.contexts.synthesis.resume_schema import (
    ExperienceEntry,
    ProjectEntry,
    ResumePayload,
    SynthesisMetadata,
    validate_resume,
)
from scribe.contexts.synthesis.synthesizer import ResumeSynthesizer

__all__ = [
    # Orchestration
    "ResumeSynthesizer",
    "SynthesisOptions",
    "UserHints",
    # Schema
    "ExperienceEntry",
    "ProjectEntry",
    "ResumePayload",
    "SynthesisMetadata",
    "validate_resume",
    # Presets
    "list_presets",
    "resolve_presets",
    # Errors
    "PresetNotFoundError",
    "SchemaValidationError",
]
