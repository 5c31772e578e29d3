"""Shared fixtures for ATELIER tests."""

import pytest

from atelier.contexts.catalog import TemplateRegistry
from atelier.contexts.configuration.merge import apply_defaults, merge_groups
from atelier.contexts.configuration.model import TemplateConfiguration, TemplateRegistryEntry

TIMESTAMP = "2025-01-15T12:00:00.000+00:00"


def build_config_data(template_id="modern", **overlay):
    """Complete configuration mapping: defaults, then the given groups/fields."""
    data = {
        "id": template_id,
        "name": f"{template_id.title()} Template",
        "description": f"The {template_id} template",
        "category": "professional",
    }
    return apply_defaults(merge_groups(data, overlay), timestamp=TIMESTAMP)


def build_entry(template_id="modern", renderer=None, **overlay):
    config = TemplateConfiguration.from_dict(build_config_data(template_id, **overlay))
    return TemplateRegistryEntry.from_config(config, renderer=renderer or f"{template_id}-renderer")


@pytest.fixture
def config_data():
    """Factory for complete configuration mappings."""
    return build_config_data


@pytest.fixture
def make_config():
    """Factory for TemplateConfiguration objects."""

    def _make(template_id="modern", **overlay):
        return TemplateConfiguration.from_dict(build_config_data(template_id, **overlay))

    return _make


@pytest.fixture
def make_entry():
    """Factory for TemplateRegistryEntry objects."""
    return build_entry


@pytest.fixture
def registry():
    """Registry holding a modern and an academic template."""
    registry = TemplateRegistry()
    registry.register(
        build_entry(
            "modern",
            name="Modern Professional",
            colors={"primary": "#2563eb", "background": "#ffffff"},
            metadata={"tags": ["modern"], "industries": ["technology"], "roles": ["developer"]},
        )
    )
    registry.register(
        build_entry(
            "academic",
            name="Academic Professional",
            category="academic",
            colors={"primary": "#7c2d12", "background": "#ffffff"},
            metadata={"tags": ["academic"], "industries": ["education"]},
        )
    )
    return registry
