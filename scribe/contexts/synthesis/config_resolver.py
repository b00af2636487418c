"""
Preset resolution for resume synthesis.

Applies named presets from synthesis_presets.yaml to the repository selection
weights and the synthesis options. Presets are composable: later presets
override earlier ones.

Examples:
    >>> criteria, options = resolve_presets(["criteria_popularity", "options_showcase"])

    >>> # Mix a base preset with an override
    >>> criteria, options = resolve_presets(["options_thorough", "options_verified"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from scribe.contexts.synthesis.exceptions import PresetNotFoundError
from scribe.contexts.synthesis.inputs import SynthesisOptions
from scribe.contexts.synthesis.logger import _log_debug
from scribe.contexts.targeting.repository_scorer import DEFAULT_CRITERIA, SelectionCriteria

load_dotenv()
DEFAULT_PRESETS_PATH = Path(__file__).parent / "synthesis_presets.yaml"
SYNTHESIS_PRESETS_PATH = Path(os.getenv("SCRIBE_PRESETS_PATH", str(DEFAULT_PRESETS_PATH)))

CRITERIA_GROUP = "criteria"
OPTIONS_GROUP = "options"


def load_synthesis_presets(config_path: Optional[Path] = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the presets file and flatten it to a single-level dict.

    Collapses nested structure: criteria.popularity -> criteria_popularity

    Args:
        config_path: Optional path (defaults to SCRIBE_PRESETS_PATH env variable)

    Returns:
        Flattened dict mapping preset names to their settings
    """
    if config_path is None:
        config_path = SYNTHESIS_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for group, presets in (nested or {}).items():
        for name, settings in (presets or {}).items():
            flattened[f"{group}_{name}"] = dict(settings or {})

    return flattened


def list_presets(config_path: Optional[Path] = None) -> List[str]:
    return sorted(load_synthesis_presets(config_path))


def resolve_presets(
    preset_names: Sequence[str],
    config_path: Optional[Path] = None,
    criteria: SelectionCriteria = DEFAULT_CRITERIA,
    options: Optional[SynthesisOptions] = None,
) -> Tuple[SelectionCriteria, SynthesisOptions]:
    """
    Apply named presets on top of base criteria and options.

    Args:
        preset_names: Preset names in application order (e.g., ["criteria_recent"])
        config_path: Optional presets file (defaults to SCRIBE_PRESETS_PATH)
        criteria: Base selection weights
        options: Base synthesis options (defaults to SynthesisOptions())

    Returns:
        (criteria, options) with all presets applied

    Raises:
        PresetNotFoundError: If a preset name is not defined
        ValueError: If a preset names unknown keys or breaks the weight sum
    """
    options = options or SynthesisOptions()
    if not preset_names:
        return criteria, options

    presets = load_synthesis_presets(config_path)

    for preset_name in preset_names:
        if preset_name not in presets:
            raise PresetNotFoundError(preset_name, sorted(presets))

        settings = presets[preset_name]
        if preset_name.startswith(f"{CRITERIA_GROUP}_"):
            criteria = criteria.with_overrides(settings)
        elif preset_name.startswith(f"{OPTIONS_GROUP}_"):
            options = options.with_overrides(settings)
        else:
            raise ValueError(
                f"Preset '{preset_name}' belongs to no known group ({CRITERIA_GROUP}, {OPTIONS_GROUP})"
            )
        _log_debug(f"Applied preset {preset_name}: {settings}")

    return criteria, options
