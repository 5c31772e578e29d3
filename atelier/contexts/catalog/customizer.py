"""
Template customization and cloning.

Customization applies a user overlay onto a registered configuration one field
group at a time (see configuration.merge), refreshes metadata.updated_at and
re-validates the result. An invalid result is rejected whole: nothing is
partially applied and the base configuration is never touched.

Overlay shape (every key optional):
    name, description, category, is_premium,
    colors, typography, layout, sections, metadata

`id` is always derived by the caller and `version` tracks the configuration
shape, so neither can be customized.
"""

from typing import Any, Mapping, Optional

from atelier.contexts.configuration.exceptions import InvalidCustomizationError
from atelier.contexts.configuration.merge import MALFORMED_OVERLAY, merge_groups
from atelier.contexts.configuration.model import TemplateConfiguration
from atelier.contexts.configuration.validator import ensure_valid
from atelier.utils.timestamp import now_exact

CUSTOMIZABLE_FIELDS = (
    "name",
    "description",
    "category",
    "is_premium",
    "colors",
    "typography",
    "layout",
    "sections",
    "metadata",
)
LOCKED_FIELDS = ("id", "version")

CUSTOM_NAME_SUFFIX = " (Custom)"
COPY_NAME_SUFFIX = " (Copy)"


def check_customization(overlay: Any) -> Mapping[str, Any]:
    """
    Verify the top level of a customization overlay.

    Args:
        overlay: Customization overlay (None means "no changes")

    Returns:
        The overlay, or an empty dict for None

    Raises:
        InvalidCustomizationError: If overlay is not a mapping, names a locked
            field, has unknown keys, or has a non-string name
    """
    if overlay is None:
        return {}
    if not isinstance(overlay, Mapping):
        raise InvalidCustomizationError(
            MALFORMED_OVERLAY, [f"customization: Expected a mapping, got {type(overlay).__name__}"]
        )

    errors = []
    for key in overlay:
        if key in LOCKED_FIELDS:
            errors.append(f"{key}: Cannot be customized")
        elif key not in CUSTOMIZABLE_FIELDS:
            errors.append(f"customization: Unrecognized key '{key}'")

    if "name" in overlay and not isinstance(overlay["name"], str):
        errors.append(f"name: Expected a string, got {type(overlay['name']).__name__}")

    if errors:
        raise InvalidCustomizationError(MALFORMED_OVERLAY, errors)

    return overlay


def customize_configuration(
    base: TemplateConfiguration,
    overlay: Optional[Mapping[str, Any]],
    new_id: str,
    timestamp: Optional[str] = None,
) -> TemplateConfiguration:
    """
    Build a customized configuration from a base and an overlay.

    Args:
        base: Registered configuration (left untouched)
        overlay: Partial configuration; present keys override, absent keys inherit
        new_id: Identity of the customized configuration
        timestamp: Value for metadata.updated_at (defaults to now)

    Returns:
        New, validated TemplateConfiguration named "<name> (Custom)"

    Raises:
        InvalidCustomizationError: If the overlay itself is malformed
        TemplateValidationError: If the merged configuration is invalid
    """
    overlay = check_customization(overlay)

    merged = merge_groups(base.to_dict(), overlay)
    merged["id"] = new_id
    merged["name"] = f"{overlay.get('name', base.name)}{CUSTOM_NAME_SUFFIX}"
    merged["metadata"]["updated_at"] = timestamp or now_exact()

    ensure_valid(merged, context="Customization resulted in invalid template")
    return TemplateConfiguration.from_dict(merged)


def clone_configuration(
    base: TemplateConfiguration,
    new_id: str,
    new_name: Optional[str] = None,
    timestamp: Optional[str] = None,
) -> TemplateConfiguration:
    """
    Copy a configuration under a new identity.

    Args:
        base: Registered configuration (left untouched)
        new_id: Identity of the copy
        new_name: Display name (defaults to "<name> (Copy)")
        timestamp: Value for metadata.created_at and updated_at (defaults to now)

    Returns:
        New TemplateConfiguration sharing no state with base
    """
    timestamp = timestamp or now_exact()

    data = base.to_dict()
    data["id"] = new_id
    data["name"] = new_name or f"{base.name}{COPY_NAME_SUFFIX}"
    data["metadata"]["created_at"] = timestamp
    data["metadata"]["updated_at"] = timestamp

    return TemplateConfiguration.from_dict(data)
