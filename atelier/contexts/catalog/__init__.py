"""
Catalog Context

Responsibilities:
- Holds registered templates (TemplateRegistry) keyed by id
- Customizes and clones registered templates into new, unregistered configurations
- Loads and registers the built-in template catalog
- Loads and composes named customization presets

Owns: Registry state, derived template identities, built-in catalog files
Never: Persists templates or decides how they are drawn
"""

from atelier.contexts.catalog.builtins import (
    RegistrationReport,
    load_builtin_configurations,
    load_builtin_entries,
    register_builtin_templates,
)
from atelier.contexts.catalog.customizer import clone_configuration, customize_configuration
from atelier.contexts.catalog.presets import compose_presets, load_customization_presets
from atelier.contexts.catalog.registry import TemplateRegistry

__all__ = [
    # Registry
    "TemplateRegistry",
    # Customization
    "customize_configuration",
    "clone_configuration",
    "compose_presets",
    "load_customization_presets",
    # Built-in catalog
    "register_builtin_templates",
    "load_builtin_entries",
    "load_builtin_configurations",
    "RegistrationReport",
]
