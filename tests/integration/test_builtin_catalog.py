"""
Integration tests for the built-in template catalog.

Loads builtin_templates.yaml, registers every template, and exercises listing,
recommendation, customization and stylesheet rendering end to end.
"""

import pytest

from atelier.contexts.catalog import (
    TemplateRegistry,
    compose_presets,
    load_builtin_configurations,
    register_builtin_templates,
)
from atelier.contexts.configuration import validate_template
from atelier.contexts.styling import compile_variables, render_stylesheet

BUILTIN_IDS = ["modern", "classic", "minimal", "creative", "technical", "executive", "academic", "sales"]


@pytest.fixture
def builtin_registry():
    registry = TemplateRegistry()
    report = register_builtin_templates(registry)
    assert report.success, report.failed
    return registry


@pytest.mark.integration
def test_every_builtin_registers(builtin_registry):
    assert builtin_registry.ids() == BUILTIN_IDS


@pytest.mark.integration
def test_builtins_are_valid_without_warnings():
    for template_id, config in load_builtin_configurations().items():
        result = validate_template(config)
        assert result.is_valid, (template_id, result.errors)
        assert result.warnings == [], (template_id, result.warnings)


@pytest.mark.integration
def test_reregistration_is_idempotent(builtin_registry):
    register_builtin_templates(builtin_registry)

    assert builtin_registry.ids() == BUILTIN_IDS


@pytest.mark.integration
def test_entry_fields(builtin_registry):
    modern = builtin_registry.get("modern")

    assert modern.renderer == "modern-v2"
    assert modern.thumbnail == "/templates/modern-thumbnail.jpg"
    assert modern.config.version == 2
    assert modern.config.layout.type == "two-column"
    # Defaults fill what the catalog leaves out
    assert modern.config.colors.background == "#ffffff"
    assert modern.config.layout.borders.enabled is False


@pytest.mark.integration
def test_listing(builtin_registry):
    assert [e.id for e in builtin_registry.list_templates(category="academic")] == ["academic"]
    assert [e.id for e in builtin_registry.list_templates(is_premium=True)] == ["executive"]
    assert builtin_registry.categories() == ["academic", "creative", "executive", "professional"]


@pytest.mark.integration
def test_recommend_for_software_engineer(builtin_registry):
    result = builtin_registry.recommend(
        {"industry": "technology", "role": "software-engineer", "preferences": ["code"]}
    )

    assert [e.id for e in result] == ["technical", "modern"]


@pytest.mark.integration
def test_recommend_for_executive(builtin_registry):
    result = builtin_registry.recommend({"experience": "executive"})
    assert [e.id for e in result] == ["executive"]


@pytest.mark.integration
def test_academic_section_order(builtin_registry):
    config = builtin_registry.get("academic").config
    # publications and skills share order 5; canonical order breaks the tie
    assert config.enabled_sections() == [
        "header",
        "summary",
        "education",
        "experience",
        "skills",
        "publications",
        "projects",
        "awards",
    ]


@pytest.mark.integration
def test_customize_with_presets_and_render(builtin_registry):
    overlay = compose_presets(["colors_warm", "typography_serif"])
    config = builtin_registry.customize("modern", overlay)

    assert config.id.startswith("modern-custom-")
    assert config.colors.primary == "#b45309"
    assert config.typography.font_family == "serif"
    assert config.typography.font_size.heading == 28
    assert config.version == 2

    variables = compile_variables(config)
    assert variables["--template-color-primary"] == "#b45309"

    stylesheet = render_stylesheet(config)
    assert "Modern Professional (Custom)" in stylesheet
    assert "--template-spacing-section: 32px;" in stylesheet

    # The registered template is untouched
    assert builtin_registry.get("modern").config.colors.primary == "#2563eb"


@pytest.mark.integration
def test_broken_catalog_entry_is_skipped(tmp_path):
    catalog = tmp_path / "catalog.yaml"
    catalog.write_text(
        "templates:\n"
        "  good:\n"
        "    name: Good\n"
        "    description: Fine\n"
        "    category: professional\n"
        "  bad:\n"
        "    name: Bad\n"
        "    description: Broken\n"
        "    category: sports\n"
    )
    registry = TemplateRegistry()

    report = register_builtin_templates(registry, catalog_path=catalog)

    assert report.registered == ["good"]
    assert list(report.failed) == ["bad"]
    assert registry.ids() == ["good"]


@pytest.mark.integration
def test_missing_catalog(tmp_path):
    with pytest.raises(FileNotFoundError):
        register_builtin_templates(TemplateRegistry(), catalog_path=tmp_path / "missing.yaml")
