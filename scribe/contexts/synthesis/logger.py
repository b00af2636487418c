"""
Synthesis context logger.

Provides logging interface for synthesis context with automatic [synth] prefix.
All synthesis modules should import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from scribe.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[synth]"


def setup_synthesis_logger(
    log_dir: Optional[Path] = None, github_username: Optional[str] = None
) -> Path:
    """
    Setup logger for a synthesis run.

    Args:
        log_dir: Directory for this session (defaults to LOGS_PATH)
        github_username: Recorded in the provenance header when known

    Returns:
        Path to log file
    """
    provenance = {"Phase": "synthesize"}
    if github_username:
        provenance["GitHub user"] = github_username
    return _setup_logger(context_name="synthesize", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [synth] prefix


def _log_info(message: str) -> None:
    """Log info message with [synth] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [synth] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [synth] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [synth] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level synthesis-specific logging helpers


def log_synthesis_start(login: str, repository_count: int, preferred_role: Optional[str]) -> None:
    _log_info(f"Synthesizing resume for {login} from {repository_count} repositories")
    _log_debug(f"Role hint: {preferred_role or 'none'}")


def log_synthesis_result(login: str, payload) -> None:
    """
    Log the shape of a validated payload.

    Args:
        login: GitHub login
        payload: ResumePayload returned by synthesize()
    """
    _log_success(
        f"{login}: resume synthesized ({len(payload.experience)} experience entries, "
        f"{len(payload.skills)} skills, {len(payload.projects)} projects)"
    )
