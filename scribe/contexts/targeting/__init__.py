"""
Targeting Context

Responsibilities:
- Scores and selects a user's most resume-worthy repositories
- Collects evidence for skills and infers usage, recency and proficiency
- Buckets skills into a fixed, ordered set of categories
- Derives impact bullets and project metrics from repository counters

Owns: Scoring weights, ranking algorithms, skill vocabulary, proficiency inference
Never: Builds resume text or validates resume structure
"""

from scribe.contexts.targeting.repository_scorer import (
    DEFAULT_CRITERIA,
    ESTIMATE_TAG,
    RepositoryMetrics,
    RepositoryScore,
    RepositoryScorer,
    ScoreBreakdown,
    SelectionCriteria,
)
from scribe.contexts.targeting.skill_categorizer import (
    CategorizedSkills,
    EvidenceKind,
    Proficiency,
    SkillCategorizer,
    SkillEntry,
    SkillEvidence,
    determine_proficiency,
)
from scribe.contexts.targeting.skill_vocabulary import SkillCategory

__all__ = [
    # Repository selection
    "DEFAULT_CRITERIA",
    "ESTIMATE_TAG",
    "RepositoryMetrics",
    "RepositoryScore",
    "RepositoryScorer",
    "ScoreBreakdown",
    "SelectionCriteria",
    # Skill categorization
    "CategorizedSkills",
    "EvidenceKind",
    "Proficiency",
    "SkillCategorizer",
    "SkillCategory",
    "SkillEntry",
    "SkillEvidence",
    "determine_proficiency",
]
