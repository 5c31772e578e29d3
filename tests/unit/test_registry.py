"""Unit tests for TemplateRegistry."""

import pytest

from atelier.contexts.catalog import TemplateRegistry
from atelier.contexts.configuration import TemplateValidationError


@pytest.mark.unit
def test_empty_registry():
    registry = TemplateRegistry()

    assert len(registry) == 0
    assert registry.ids() == []
    assert registry.categories() == []
    assert registry.list_templates() == []


@pytest.mark.unit
def test_register_and_get(make_entry):
    registry = TemplateRegistry()
    entry = make_entry("modern")

    result = registry.register(entry)

    assert result.is_valid
    assert "modern" in registry
    assert registry.get("modern") == entry
    assert registry.get_renderer("modern") == "modern-renderer"


@pytest.mark.unit
def test_unknown_id_is_absent(registry):
    assert registry.get("nonexistent") is None
    assert registry.get_renderer("nonexistent") is None
    assert "nonexistent" not in registry


@pytest.mark.unit
def test_register_returns_warnings(make_entry):
    registry = TemplateRegistry()
    result = registry.register(make_entry("pale", colors={"primary": "#fff", "background": "#fff"}))

    assert result.is_valid
    assert result.warnings
    assert "pale" in registry


@pytest.mark.unit
def test_reregistration_replaces_entry(make_entry):
    """Registering the same id twice leaves one entry equal to the second."""
    registry = TemplateRegistry()
    registry.register(make_entry("modern"))
    registry.register(make_entry("classic"))

    replacement = make_entry("modern", name="Modern v2")
    registry.register(replacement)

    assert len(registry) == 2
    assert registry.get("modern") == replacement
    assert registry.ids() == ["modern", "classic"]


@pytest.mark.unit
def test_invalid_registration_leaves_registry_unchanged(registry, make_entry):
    entry = make_entry("broken")
    entry.config.colors.primary = "blue"

    with pytest.raises(TemplateValidationError) as exc_info:
        registry.register(entry)

    assert exc_info.value.template_id == "broken"
    assert "colors.primary: Must be a valid hex color" in exc_info.value.errors
    assert "broken" not in registry
    assert registry.ids() == ["modern", "academic"]


@pytest.mark.unit
def test_non_finite_spacing_rejected(registry, make_entry):
    with pytest.raises(TemplateValidationError) as exc_info:
        registry.register(make_entry("hollow", layout={"spacing": {"margin": float("nan")}}))

    assert "layout.spacing.margin: Must be a finite number" in exc_info.value.errors
    assert "hollow" not in registry


@pytest.mark.unit
def test_registered_config_is_a_snapshot(make_entry):
    """Changing the caller's entry after registration does not reach the registry."""
    registry = TemplateRegistry()
    entry = make_entry("modern", renderer="modern-v2")
    registry.register(entry)

    entry.config.colors.primary = "blue"
    entry.config.metadata.tags.append("changed")

    stored = registry.get("modern")
    assert stored.config.colors.primary == "#2563eb"
    assert "changed" not in stored.config.metadata.tags
    assert stored.renderer == "modern-v2"


@pytest.mark.unit
def test_unregister_and_clear(registry):
    removed = registry.unregister("academic")

    assert removed.id == "academic"
    assert registry.unregister("academic") is None
    assert registry.ids() == ["modern"]

    registry.clear()
    assert len(registry) == 0


class TestListing:
    """list_templates filters and ordering."""

    @pytest.mark.unit
    def test_filter_by_category(self, registry):
        assert [e.id for e in registry.list_templates(category="academic")] == ["academic"]

    @pytest.mark.unit
    def test_sorted_by_name(self, registry):
        assert [e.name for e in registry.list_templates()] == [
            "Academic Professional",
            "Modern Professional",
        ]

    @pytest.mark.unit
    def test_filter_by_premium(self, registry, make_entry):
        registry.register(make_entry("executive", category="executive", is_premium=True))

        assert [e.id for e in registry.list_templates(is_premium=True)] == ["executive"]
        assert "executive" not in [e.id for e in registry.list_templates(is_premium=False)]

    @pytest.mark.unit
    def test_filter_by_any_tag(self, registry):
        entries = registry.list_templates(tags=["modern", "academic"])
        assert {e.id for e in entries} == {"modern", "academic"}

        assert registry.list_templates(tags=["retro"]) == []

    @pytest.mark.unit
    def test_filters_combine(self, registry):
        assert registry.list_templates(category="academic", tags=["modern"]) == []

    @pytest.mark.unit
    def test_categories(self, registry, make_entry):
        registry.register(make_entry("sales"))
        assert registry.categories() == ["academic", "professional"]


class TestSearch:
    """Unranked substring search."""

    @pytest.mark.unit
    def test_name_substring_case_insensitive(self, registry):
        assert [e.id for e in registry.search("MODERN prof")] == ["modern"]

    @pytest.mark.unit
    def test_matches_labels(self, registry):
        assert [e.id for e in registry.search("educ")] == ["academic"]
        assert [e.id for e in registry.search("developer")] == ["modern"]

    @pytest.mark.unit
    def test_iteration_order(self, registry):
        assert [e.id for e in registry.search("professional")] == ["modern", "academic"]

    @pytest.mark.unit
    def test_empty_query_matches_all(self, registry):
        assert len(registry.search("")) == 2

    @pytest.mark.unit
    def test_no_match(self, registry):
        assert registry.search("zzz") == []


class TestCustomize:
    """Registry-level customization and cloning."""

    @pytest.mark.unit
    def test_customize_overrides_and_inherits(self, registry):
        config = registry.customize("modern", {"colors": {"primary": "#000000"}})

        assert config.colors.primary == "#000000"
        assert config.colors.background == "#ffffff"
        assert config.id != "modern"
        assert config.id.startswith("modern-custom-")
        assert config.name == "Modern Professional (Custom)"

    @pytest.mark.unit
    def test_customize_unknown_is_absent(self, registry):
        assert registry.customize("nonexistent", {}) is None

    @pytest.mark.unit
    def test_customize_leaves_registry_untouched(self, registry):
        registry.customize("modern", {"colors": {"primary": "#000000"}, "metadata": {"tags": ["x"]}})

        stored = registry.get("modern").config
        assert stored.colors.primary == "#2563eb"
        assert stored.metadata.tags == ["modern"]
        assert len(registry) == 2

    @pytest.mark.unit
    def test_derived_ids_are_unique(self, registry):
        ids = [registry.customize("modern", {}).id for _ in range(5)]
        suffixes = [int(template_id.rsplit("-", 1)[1]) for template_id in ids]

        assert len(set(ids)) == 5
        assert suffixes == sorted(suffixes)

    @pytest.mark.unit
    def test_invalid_customization_raises(self, registry):
        with pytest.raises(TemplateValidationError):
            registry.customize("modern", {"colors": {"primary": "not-a-color"}})

    @pytest.mark.unit
    def test_clone(self, registry):
        clone = registry.clone("academic")

        assert clone.id.startswith("academic-clone-")
        assert clone.name == "Academic Professional (Copy)"
        assert clone.colors == registry.get("academic").config.colors

    @pytest.mark.unit
    def test_clone_with_name(self, registry):
        assert registry.clone("modern", new_name="Mine").name == "Mine"

    @pytest.mark.unit
    def test_clone_unknown_is_absent(self, registry):
        assert registry.clone("nonexistent") is None
