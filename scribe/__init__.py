"""
SCRIBE - Synthesizing Career Resumes from Inferred Build Evidence

A domain-driven pipeline that reads an already-fetched GitHub developer profile
and drafts a structured resume from the evidence it finds there.

Architecture:
- Intake Context: Typed GitHub records and activity aggregation
- Targeting Context: Repository scoring and evidence-based skill categorization
- Synthesis Context: Resume field construction and schema validation
"""

__version__ = "0.1.0"
