"""
Customization Presets

Named, composable customization overlays. Presets are stored in YAML
(ATELIER_PRESETS_PATH, defaulting to customization_presets.yaml next to this
module) as <category>: <name>: <overlay> and flattened to <category>_<name>.

Examples:
    # Compose presets (later overrides earlier), then customize
    >>> overlay = compose_presets(["spacing_tight", "colors_warm"])
    >>> registry.customize("modern", overlay)
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from atelier.contexts.catalog.customizer import check_customization
from atelier.contexts.configuration.merge import merge_groups

load_dotenv()
PRESETS_PATH = Path(
    os.getenv("ATELIER_PRESETS_PATH", Path(__file__).parent / "customization_presets.yaml")
)


def load_customization_presets(config_path: Path = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the presets file and flatten it to a single-level dict.

    Collapses nested structure: spacing.tight -> spacing_tight

    Args:
        config_path: Optional path to presets file (defaults to ATELIER_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to overlays
        Example: {"spacing_tight": {...}, "colors_warm": {...}}
    """
    if config_path is None:
        config_path = PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        for name, overlay in presets.items():
            flattened[f"{category}_{name}"] = overlay

    return flattened


def compose_presets(
    preset_names: List[str],
    presets: Optional[Dict[str, Dict[str, Any]]] = None,
    config_path: Path = None,
) -> Dict[str, Any]:
    """
    Compose named presets into one customization overlay.

    Presets are applied in order, group by group, with later presets
    overriding earlier ones.

    Args:
        preset_names: Preset names (e.g., ["spacing_tight", "colors_warm"])
        presets: Already-loaded presets (loaded from config_path when None)
        config_path: Optional path to the presets file

    Returns:
        Customization overlay

    Raises:
        ValueError: If a preset name is unknown
        InvalidCustomizationError: If a preset is not a valid overlay
    """
    if presets is None:
        presets = load_customization_presets(config_path)

    overlay: Dict[str, Any] = {}
    for preset_name in preset_names:
        if preset_name not in presets:
            available = list(presets.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")

        overlay = merge_groups(overlay, check_customization(presets[preset_name]))

    return overlay
