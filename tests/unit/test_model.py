"""Unit tests for the template configuration model."""

import pytest

from atelier.contexts.configuration.defaults import DEFAULT_ENABLED_SECTIONS, SECTION_NAMES
from atelier.contexts.configuration.model import TemplateConfiguration, TemplateRegistryEntry


@pytest.mark.unit
def test_dict_round_trip(config_data):
    data = config_data(colors={"secondary": None}, sections={"skills": {"custom_styles": {"gap": "4px"}}})
    assert TemplateConfiguration.from_dict(data).to_dict() == data


@pytest.mark.unit
def test_from_dict_shares_no_state(config_data):
    data = config_data(metadata={"tags": ["modern"]})
    config = TemplateConfiguration.from_dict(data)

    data["metadata"]["tags"].append("changed")
    assert config.metadata.tags == ["modern"]


@pytest.mark.unit
def test_default_enabled_sections(make_config):
    assert make_config().enabled_sections() == list(DEFAULT_ENABLED_SECTIONS)


@pytest.mark.unit
def test_enabled_sections_follow_order(make_config):
    config = make_config(sections={"skills": {"order": 2}, "summary": {"enabled": False}})

    assert config.enabled_sections() == ["header", "skills", "experience", "education", "projects"]


@pytest.mark.unit
def test_equal_order_falls_back_to_canonical(make_config):
    config = make_config(sections={name: {"order": 0} for name in SECTION_NAMES})

    assert config.enabled_sections() == list(DEFAULT_ENABLED_SECTIONS)


@pytest.mark.unit
def test_entry_mirrors_config(make_config):
    config = make_config("executive", name="Executive", category="executive", is_premium=True)
    entry = TemplateRegistryEntry.from_config(config, renderer="executive", thumbnail="/t.jpg")

    assert entry.id == "executive"
    assert entry.name == "Executive"
    assert entry.category == "executive"
    assert entry.is_premium is True
    assert entry.renderer == "executive"
    assert entry.thumbnail == "/t.jpg"
    assert entry.preview is None
    assert entry.config is config
