"""
Shared utilities for SCRIBE.

Common functionality used across contexts:
- Clock and GitHub timestamp handling
- Logger configuration
- Text table formatting for reports
"""

from scribe.utils.timestamp import (
    days_since,
    now_utc,
    parse_github_timestamp,
    resolve_clock,
    whole_years_between,
)

__all__ = ["days_since", "now_utc", "parse_github_timestamp", "resolve_clock", "whole_years_between"]
