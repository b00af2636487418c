"""
Targeting context logger.

Provides logging interface for targeting context with automatic [target] prefix.
All targeting modules should import from this module, not from loguru directly.
"""

from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[target]"


# Wrapper functions with automatic [target] prefix


def _log_info(message: str) -> None:
    """Log info message with [target] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [target] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level targeting-specific logging helpers


def log_selection_result(
    candidates: int, eligible: int, selected: int, preferred_role: Optional[str]
) -> None:
    """Log how many repositories survived filtering and ranking."""
    role = preferred_role or "none"
    _log_info(
        f"Selected {selected} of {eligible} eligible repositories "
        f"({candidates} candidates, role hint: {role})"
    )


def log_categorization_result(evidence_count: int, skill_count: int, categorized_count: int) -> None:
    """Log evidence and skill counts after categorization."""
    dropped = skill_count - categorized_count
    _log_info(
        f"Categorized {categorized_count} skills from {evidence_count} evidence records"
        + (f" ({dropped} outside vocabulary dropped)" if dropped else "")
    )
