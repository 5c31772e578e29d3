"""
Field-group merges for template configurations.

Every configuration group (colors, typography, layout, sections, metadata) has
its own merge function. The rule is the same everywhere: a key present in the
overlay overrides the base value, an absent key inherits it. Lists are replaced
wholesale, never concatenated. Neither argument is ever mutated.

Used by:
- catalog.customizer (user overlays on registered templates)
- catalog.presets (composing named presets into one overlay)
- apply_defaults (completing partial configurations from the built-in catalog)
"""

import copy
from typing import Any, Dict, Mapping, Optional, Sequence

from atelier.contexts.configuration.defaults import SECTION_NAMES, get_default_groups
from atelier.contexts.configuration.exceptions import InvalidCustomizationError

COLOR_FIELDS = ("primary", "secondary", "accent", "text", "background", "border")
TYPOGRAPHY_FIELDS = ("font_family", "custom_font", "font_size", "line_height", "font_weight")
FONT_SIZE_FIELDS = ("base", "heading", "small")
FONT_WEIGHT_FIELDS = ("normal", "bold")
LAYOUT_FIELDS = ("type", "spacing", "borders", "alignment")
SPACING_FIELDS = ("section", "element", "margin", "padding")
BORDER_FIELDS = ("enabled", "style", "width", "radius")
ALIGNMENT_FIELDS = ("text", "sections")
SECTION_FIELDS = ("enabled", "order", "title", "style", "columns", "custom_styles")
METADATA_FIELDS = ("author", "created_at", "updated_at", "tags", "industries", "roles")

MALFORMED_OVERLAY = "Malformed configuration overlay"


def check_overlay(overlay: Any, allowed: Sequence[str], path: str) -> Mapping[str, Any]:
    """
    Verify an overlay group is a mapping whose keys are all known fields.

    Args:
        overlay: Overlay value for one group
        allowed: Field names accepted in this group
        path: Dotted path used in error messages (e.g., "typography.font_size")

    Returns:
        The overlay itself

    Raises:
        InvalidCustomizationError: If overlay is not a mapping or has unknown keys
    """
    if not isinstance(overlay, Mapping):
        raise InvalidCustomizationError(
            MALFORMED_OVERLAY, [f"{path}: Expected a mapping, got {type(overlay).__name__}"]
        )

    unknown = [key for key in overlay if key not in allowed]
    if unknown:
        raise InvalidCustomizationError(
            MALFORMED_OVERLAY, [f"{path}: Unrecognized key '{key}'" for key in unknown]
        )

    return overlay


def _override(base: Optional[Mapping[str, Any]], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of base with every overlay key replacing the base value."""
    merged = copy.deepcopy(dict(base or {}))
    for key, value in overlay.items():
        merged[key] = copy.deepcopy(value)
    return merged


def _merge_flat(
    base: Optional[Mapping[str, Any]], overlay: Any, allowed: Sequence[str], path: str
) -> Dict[str, Any]:
    return _override(base, check_overlay(overlay, allowed, path))


def merge_colors(base: Mapping[str, Any], overlay: Any) -> Dict[str, Any]:
    return _merge_flat(base, overlay, COLOR_FIELDS, "colors")


def merge_typography(base: Mapping[str, Any], overlay: Any) -> Dict[str, Any]:
    """Merge typography, including the nested font_size and font_weight groups."""
    overlay = check_overlay(overlay, TYPOGRAPHY_FIELDS, "typography")

    merged = _override(
        base, {key: value for key, value in overlay.items() if key not in ("font_size", "font_weight")}
    )
    if "font_size" in overlay:
        merged["font_size"] = _merge_flat(
            base.get("font_size"), overlay["font_size"], FONT_SIZE_FIELDS, "typography.font_size"
        )
    if "font_weight" in overlay:
        merged["font_weight"] = _merge_flat(
            base.get("font_weight"),
            overlay["font_weight"],
            FONT_WEIGHT_FIELDS,
            "typography.font_weight",
        )
    return merged


def merge_layout(base: Mapping[str, Any], overlay: Any) -> Dict[str, Any]:
    """Merge layout, including the nested spacing, borders and alignment groups."""
    overlay = check_overlay(overlay, LAYOUT_FIELDS, "layout")
    nested = {
        "spacing": SPACING_FIELDS,
        "borders": BORDER_FIELDS,
        "alignment": ALIGNMENT_FIELDS,
    }

    merged = _override(base, {key: value for key, value in overlay.items() if key not in nested})
    for group, allowed in nested.items():
        if group in overlay:
            merged[group] = _merge_flat(base.get(group), overlay[group], allowed, f"layout.{group}")
    return merged


def merge_sections(base: Mapping[str, Any], overlay: Any) -> Dict[str, Any]:
    """
    Patch the section map.

    Only sections named in the overlay are touched; each touched section's
    fields follow the override-if-present rule. A section missing from the
    base becomes exactly its patch.
    """
    overlay = check_overlay(overlay, SECTION_NAMES, "sections")

    merged = copy.deepcopy(dict(base))
    for name, section_overlay in overlay.items():
        merged[name] = _merge_flat(
            base.get(name), section_overlay, SECTION_FIELDS, f"sections.{name}"
        )
    return merged


def merge_metadata(base: Mapping[str, Any], overlay: Any) -> Dict[str, Any]:
    return _merge_flat(base, overlay, METADATA_FIELDS, "metadata")


GROUP_MERGERS = {
    "colors": merge_colors,
    "typography": merge_typography,
    "layout": merge_layout,
    "sections": merge_sections,
    "metadata": merge_metadata,
}


def merge_groups(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Apply every group present in overlay onto base, group by group.

    Top-level keys that are not groups are copied over as-is; callers decide
    which top-level keys they accept before calling this. Two overlays compose
    the same way (the first acting as base), which is how presets stack.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in overlay.items():
        merger = GROUP_MERGERS.get(key)
        if merger is None:
            merged[key] = copy.deepcopy(value)
        else:
            merged[key] = merger(base.get(key) or {}, value)
    return merged


def apply_defaults(data: Mapping[str, Any], timestamp: Optional[str] = None) -> Dict[str, Any]:
    """
    Complete a partial configuration mapping with the model defaults.

    Args:
        data: Partial configuration (e.g., one entry of the built-in catalog YAML)
        timestamp: Value for metadata.created_at / updated_at when absent

    Returns:
        New mapping where every defaulted group is filled in

    Raises:
        InvalidCustomizationError: If a group in data is malformed
    """
    defaults = get_default_groups()
    if timestamp is not None:
        defaults["metadata"]["created_at"] = timestamp
        defaults["metadata"]["updated_at"] = timestamp

    completed = merge_groups(defaults, data)
    completed.setdefault("is_premium", False)
    completed.setdefault("version", 1)
    return completed
