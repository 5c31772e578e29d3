"""
Configuration Context

Responsibilities:
- Defines the canonical shape of a template (colors, typography, layout, sections, metadata)
- Provides structural defaults and closed vocabularies
- Merges partial overlays onto configurations, one field group at a time
- Validates configurations (hard structural errors, soft readability warnings)

Owns: Template schema, defaults, merge rules, validation
Never: Stores templates or decides which template a user should see
"""

from atelier.contexts.configuration.exceptions import (
    InvalidCustomizationError,
    TemplateValidationError,
)
from atelier.contexts.configuration.model import (
    TemplateConfiguration,
    TemplateRegistryEntry,
    TemplateValidationResult,
)
from atelier.contexts.configuration.validator import ensure_valid, validate_template

__all__ = [
    # Data structure classes
    "TemplateConfiguration",
    "TemplateRegistryEntry",
    "TemplateValidationResult",
    # Validation
    "validate_template",
    "ensure_valid",
    # Exceptions
    "TemplateValidationError",
    "InvalidCustomizationError",
]
