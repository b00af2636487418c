"""
Evidence-based skill categorization for the Targeting context.

Three steps turn GitHub data into ranked, categorized skills:

1. Evidence collection: language byte shares, plus keyword alias matches in
   repository names, descriptions and topics. Evidence is deduplicated by
   (skill, repository, kind), first observation wins.
2. Aggregation: evidence grouped per skill into usage and recency scores and
   a proficiency level.
3. Categorization: each skill is bucketed into the first SkillCategory that
   lists it and every category is ranked by 0.7*usage + 0.3*recency.

Alias matching is token-bounded: an alias only matches where it is not glued
to other letters or digits, so short aliases like "r" or "go" do not fire
inside unrelated words.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from functools import lru_cache, total_ordering
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from scribe.contexts.intake.github_records import LanguageStats, Repository
from scribe.contexts.targeting.logger import _log_debug, log_categorization_result
from scribe.contexts.targeting.skill_vocabulary import (
    SKILL_VOCABULARY,
    SkillCategory,
    category_of,
)
from scribe.utils.timestamp import days_since, resolve_clock

UNKNOWN_REPOSITORY = "unknown"

USAGE_WEIGHT = 0.7
RECENCY_WEIGHT = 0.3

# Per-category display caps for summarize()
SUMMARY_LIMITS = {
    SkillCategory.LANGUAGES: 5,
    SkillCategory.FRAMEWORKS: 4,
    SkillCategory.TOOLS: 4,
    SkillCategory.DATABASES: 3,
    SkillCategory.CLOUD: 3,
    SkillCategory.TESTING: 2,
}


class EvidenceKind(Enum):
    """Where a piece of skill evidence was observed."""

    LANGUAGE = "language"
    DEPENDENCY = "dependency"
    FILENAME = "filename"
    TOPIC = "topic"
    DESCRIPTION = "description"


@total_ordering
class Proficiency(Enum):
    """Inferred proficiency ladder, ordered Beginner < Intermediate < Advanced < Expert."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"

    @property
    def rank(self) -> int:
        return list(Proficiency).index(self)

    def __lt__(self, other):
        if not isinstance(other, Proficiency):
            return NotImplemented
        return self.rank < other.rank


@dataclass(frozen=True)
class SkillEvidence:
    """One observation tying a skill to a repository."""

    skill: str
    repository: str
    kind: EvidenceKind
    confidence: float
    last_seen: datetime

    @property
    def key(self) -> tuple:
        return (self.skill, self.repository, self.kind)


@dataclass(frozen=True)
class SkillEntry:
    """
    Aggregated view of one skill.

    Attributes:
        name: Canonical skill name
        proficiency: Inferred proficiency level
        last_used: Most recent evidence timestamp
        is_estimated: Always True; nothing here is ground truth
        usage_score: Mean evidence confidence plus a multi-source bonus, in [0, 1]
        recency_score: Step function of days since last use, in [0, 1]
        evidence_count: Number of distinct evidence records
    """

    name: str
    proficiency: Proficiency
    last_used: datetime
    usage_score: float
    recency_score: float
    evidence_count: int
    is_estimated: bool = True

    @property
    def ranking_score(self) -> float:
        return USAGE_WEIGHT * self.usage_score + RECENCY_WEIGHT * self.recency_score


@dataclass
class CategorizedSkills:
    """Six independently ranked skill lists."""

    languages: List[SkillEntry] = field(default_factory=list)
    frameworks: List[SkillEntry] = field(default_factory=list)
    tools: List[SkillEntry] = field(default_factory=list)
    databases: List[SkillEntry] = field(default_factory=list)
    cloud: List[SkillEntry] = field(default_factory=list)
    testing: List[SkillEntry] = field(default_factory=list)

    def get(self, category: SkillCategory) -> List[SkillEntry]:
        return getattr(self, category.value)

    def items(self):
        """(category, entries) pairs in category order."""
        return [(category, self.get(category)) for category in SkillCategory]

    def all_entries(self) -> List[SkillEntry]:
        return [entry for _, entries in self.items() for entry in entries]

    def is_empty(self) -> bool:
        return not self.all_entries()


def rank_entries(entries: Iterable[SkillEntry]) -> List[SkillEntry]:
    """Sort by blended usage/recency score, descending; ties keep input order."""
    return sorted(entries, key=lambda entry: entry.ranking_score, reverse=True)


@lru_cache(maxsize=None)
def _alias_pattern(alias: str) -> "re.Pattern":
    return re.compile(rf"(?<![a-z0-9]){re.escape(alias.lower())}(?![a-z0-9])")


def count_alias(alias: str, text: str) -> int:
    """Occurrences of alias in already-lowercased text, token-bounded."""
    return len(_alias_pattern(alias).findall(text))


# =============================================================================
# Scoring functions
# =============================================================================


def language_confidence(byte_count: int, total_bytes: int) -> float:
    """Confidence from a language's share of all bytes."""
    share = byte_count / total_bytes if total_bytes > 0 else 0.0
    if share >= 0.3:
        return 1.0
    if share >= 0.15:
        return 0.8
    if share >= 0.05:
        return 0.6
    if share >= 0.01:
        return 0.4
    return 0.2


def keyword_confidence(occurrences: int) -> float:
    if occurrences >= 3:
        return 0.9
    if occurrences >= 2:
        return 0.7
    return 0.5


def usage_score(evidence: Sequence[SkillEvidence]) -> float:
    """Average confidence plus up to +0.2 for multiple evidence sources, capped at 1.0."""
    average = sum(ev.confidence for ev in evidence) / len(evidence)
    bonus = min(len(evidence) / 5, 1.0)
    return min(average + bonus * 0.2, 1.0)


def recency_score(days_since_use: int) -> float:
    if days_since_use <= 30:
        return 1.0
    if days_since_use <= 90:
        return 0.8
    if days_since_use <= 180:
        return 0.6
    if days_since_use <= 365:
        return 0.4
    return 0.2


def determine_proficiency(usage: float, evidence_count: int) -> Proficiency:
    """
    Threshold ladder over usage + evidence_count / 10.

    Non-decreasing in both arguments.
    """
    combined = usage + evidence_count / 10
    if combined >= 1.5:
        return Proficiency.EXPERT
    if combined >= 1.0:
        return Proficiency.ADVANCED
    if combined >= 0.6:
        return Proficiency.INTERMEDIATE
    return Proficiency.BEGINNER


class SkillCategorizer:
    """
    Stateless skill categorization service.

    Attributes:
        clock: Callable returning the current aware datetime
    """

    def __init__(self, now: Optional[Union[datetime, Callable[[], datetime]]] = None):
        self.clock = resolve_clock(now)

    def categorize(
        self, language_stats: LanguageStats, repositories: Sequence[Repository]
    ) -> CategorizedSkills:
        """
        Build ranked, categorized skills from language stats and repositories.

        Args:
            language_stats: Language -> byte count across the user's repositories
            repositories: Repositories to scan for keyword evidence

        Returns:
            CategorizedSkills; six empty lists when there is no evidence
        """
        now = self.clock()
        evidence = self.collect_evidence(language_stats, repositories, now)
        entries = self.aggregate_evidence(evidence, now)
        categorized = self.categorize_entries(entries)

        log_categorization_result(len(evidence), len(entries), len(categorized.all_entries()))
        return categorized

    # =========================================================================
    # STEP 1: EVIDENCE
    # =========================================================================

    def collect_evidence(
        self,
        language_stats: LanguageStats,
        repositories: Sequence[Repository],
        now: Optional[datetime] = None,
    ) -> List[SkillEvidence]:
        """Gather and deduplicate language and keyword evidence."""
        now = now or self.clock()
        evidence = self._language_evidence(language_stats, repositories, now)
        for repo in repositories:
            evidence.extend(self._keyword_evidence(repo))
        return deduplicate_evidence(evidence)

    @staticmethod
    def _language_evidence(
        language_stats: LanguageStats, repositories: Sequence[Repository], now: datetime
    ) -> List[SkillEvidence]:
        total_bytes = sum(language_stats.values())
        evidence = []
        for language, byte_count in language_stats.items():
            candidates = [repo for repo in repositories if repo.language == language]
            latest = max(candidates, key=lambda repo: repo.updated_at) if candidates else None
            evidence.append(
                SkillEvidence(
                    skill=language,
                    repository=latest.name if latest else UNKNOWN_REPOSITORY,
                    kind=EvidenceKind.LANGUAGE,
                    confidence=language_confidence(byte_count, total_bytes),
                    last_seen=latest.updated_at if latest else now,
                )
            )
        return evidence

    @staticmethod
    def _keyword_evidence(repo: Repository) -> List[SkillEvidence]:
        search_text = repo.search_text
        topics = set(repo.topics)
        evidence = []
        for category in SkillCategory:
            for skill_name, aliases in SKILL_VOCABULARY[category].items():
                for alias in aliases:
                    occurrences = count_alias(alias, search_text)
                    if not occurrences:
                        continue
                    kind = EvidenceKind.TOPIC if alias in topics else EvidenceKind.DESCRIPTION
                    evidence.append(
                        SkillEvidence(
                            skill=skill_name,
                            repository=repo.name,
                            kind=kind,
                            confidence=keyword_confidence(occurrences),
                            last_seen=repo.updated_at,
                        )
                    )
        return evidence

    # =========================================================================
    # STEP 2: AGGREGATION
    # =========================================================================

    def aggregate_evidence(
        self, evidence: Sequence[SkillEvidence], now: Optional[datetime] = None
    ) -> List[SkillEntry]:
        """Group evidence by skill (first-seen order) into SkillEntry records."""
        now = now or self.clock()
        grouped: Dict[str, List[SkillEvidence]] = {}
        for ev in evidence:
            grouped.setdefault(ev.skill, []).append(ev)

        entries = []
        for skill_name, skill_evidence in grouped.items():
            usage = usage_score(skill_evidence)
            last_used = max(ev.last_seen for ev in skill_evidence)
            entry = SkillEntry(
                name=skill_name,
                proficiency=determine_proficiency(usage, len(skill_evidence)),
                last_used=last_used,
                usage_score=usage,
                recency_score=recency_score(days_since(last_used, now)),
                evidence_count=len(skill_evidence),
            )
            _log_debug(
                f"{skill_name}: usage={entry.usage_score:.2f} recency={entry.recency_score:.2f} "
                f"evidence={entry.evidence_count} -> {entry.proficiency.value}"
            )
            entries.append(entry)
        return entries

    # =========================================================================
    # STEP 3: CATEGORIZATION
    # =========================================================================

    @staticmethod
    def categorize_entries(entries: Iterable[SkillEntry]) -> CategorizedSkills:
        """Bucket entries by vocabulary category; unknown skills are dropped."""
        buckets: Dict[SkillCategory, List[SkillEntry]] = {category: [] for category in SkillCategory}
        for entry in entries:
            category = category_of(entry.name)
            if category is not None:
                buckets[category].append(entry)

        return CategorizedSkills(
            **{category.value: rank_entries(bucket) for category, bucket in buckets.items()}
        )

    # =========================================================================
    # AUXILIARY OPERATIONS
    # =========================================================================

    @staticmethod
    def top_skills(categorized: CategorizedSkills, limit: int = 10) -> List[SkillEntry]:
        """Best `limit` skills across all categories by blended score."""
        return rank_entries(categorized.all_entries())[:limit]

    @staticmethod
    def filter_by_min_evidence(categorized: CategorizedSkills, min_evidence: int = 2) -> CategorizedSkills:
        """Drop entries with fewer than `min_evidence` evidence records."""
        return CategorizedSkills(
            **{
                category.value: [entry for entry in entries if entry.evidence_count >= min_evidence]
                for category, entries in categorized.items()
            }
        )

    @staticmethod
    def summarize(
        categorized: CategorizedSkills, limits: Optional[Mapping[SkillCategory, int]] = None
    ) -> List[str]:
        """
        One "Category: a, b, c" line per non-empty category.

        Example:
            ["Languages: TypeScript, Python", "Frameworks: React"]
        """
        limits = limits or SUMMARY_LIMITS
        lines = []
        for category, entries in categorized.items():
            shown = entries[: limits.get(category, len(entries))]
            if shown:
                lines.append(f"{category.label}: {', '.join(entry.name for entry in shown)}")
        return lines


def deduplicate_evidence(evidence: Iterable[SkillEvidence]) -> List[SkillEvidence]:
    """Keep the first evidence record for each (skill, repository, kind)."""
    seen = set()
    unique = []
    for ev in evidence:
        if ev.key in seen:
            continue
        seen.add(ev.key)
        unique.append(ev)
    return unique
