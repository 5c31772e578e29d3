"""
Template configuration validation.

Two stages:
1. Structural validation - required fields, primitive types, closed vocabularies,
   color syntax and numeric ranges. Any problem is a hard error and every problem
   is reported, not just the first.
2. Readability heuristics - only run when the structure is valid; they produce
   warnings and never fail validation.

Validation is pure: the same input always gives the same result.
"""

import math
import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from atelier.contexts.configuration.defaults import (
    BORDER_STYLES,
    CATEGORIES,
    FONT_FAMILIES,
    LAYOUT_TYPES,
    SECTION_ALIGNMENTS,
    SECTION_NAMES,
    SECTION_STYLES,
    TEXT_ALIGNMENTS,
)
from atelier.contexts.configuration.exceptions import TemplateValidationError
from atelier.contexts.configuration.model import TemplateConfiguration, TemplateValidationResult
from atelier.utils.timestamp import parse_iso_timestamp

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

TOP_LEVEL_FIELDS = (
    "id",
    "name",
    "description",
    "category",
    "is_premium",
    "version",
    "colors",
    "typography",
    "layout",
    "sections",
    "metadata",
)

# (field, minimum, maximum)
FONT_SIZE_RANGES = (("base", 8, 20), ("heading", 12, 36), ("small", 6, 16))
FONT_WEIGHT_RANGES = (("normal", 100, 900), ("bold", 100, 900))
SPACING_RANGES = (("section", 0, 100), ("element", 0, 50), ("margin", 0, 100), ("padding", 0, 50))
BORDER_RANGES = (("width", 0, 10), ("radius", 0, 20))
LINE_HEIGHT_RANGE = (1, 2.5)
COLUMNS_RANGE = (1, 3)

MIN_READABLE_FONT_SIZE = 10

_MISSING = object()


class _StructureChecker:
    """Collects structural errors while walking a configuration mapping."""

    def __init__(self):
        self.errors: List[str] = []

    def fail(self, path: str, message: str) -> None:
        self.errors.append(f"{path}: {message}")

    def mapping(
        self, parent: Mapping[str, Any], key: str, path: str, allowed: Sequence[str]
    ) -> Optional[Mapping[str, Any]]:
        """Return parent[key] if it is a mapping with only allowed keys, else record an error."""
        value = parent.get(key, _MISSING)
        if value is _MISSING or value is None:
            self.fail(path, "Required")
            return None
        if not isinstance(value, Mapping):
            self.fail(path, f"Expected a mapping, got {type(value).__name__}")
            return None
        self.unknown_keys(value, path, allowed)
        return value

    def unknown_keys(self, value: Mapping[str, Any], path: str, allowed: Sequence[str]) -> None:
        for key in value:
            if key not in allowed:
                self.fail(path, f"Unrecognized key '{key}'")

    def present(self, parent: Mapping[str, Any], key: str, path: str, optional: bool) -> Any:
        value = parent.get(key, _MISSING)
        if value is _MISSING or value is None:
            if not optional:
                self.fail(path, "Required")
            return _MISSING
        return value

    def string(
        self, parent: Mapping[str, Any], key: str, path: str, optional: bool = False,
        non_empty: bool = False,
    ) -> None:
        value = self.present(parent, key, path, optional)
        if value is _MISSING:
            return
        if not isinstance(value, str):
            self.fail(path, f"Expected a string, got {type(value).__name__}")
        elif non_empty and not value.strip():
            self.fail(path, "Must not be empty")

    def boolean(self, parent: Mapping[str, Any], key: str, path: str) -> None:
        value = self.present(parent, key, path, optional=False)
        if value is not _MISSING and not isinstance(value, bool):
            self.fail(path, f"Expected a boolean, got {type(value).__name__}")

    def number(
        self,
        parent: Mapping[str, Any],
        key: str,
        path: str,
        bounds: Optional[Tuple[float, float]] = None,
        integer: bool = False,
        optional: bool = False,
    ) -> None:
        value = self.present(parent, key, path, optional)
        if value is _MISSING:
            return
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            expected = "an integer" if integer else "a number"
            self.fail(path, f"Expected {expected}, got {type(value).__name__}")
            return
        if integer and not isinstance(value, int):
            self.fail(path, f"Expected an integer, got {type(value).__name__}")
            return
        # NaN compares False against both bounds
        if isinstance(value, float) and not math.isfinite(value):
            self.fail(path, "Must be a finite number")
            return
        if bounds is not None:
            low, high = bounds
            if value < low:
                self.fail(path, f"Must be greater than or equal to {low}")
            elif value > high:
                self.fail(path, f"Must be less than or equal to {high}")

    def enum(
        self, parent: Mapping[str, Any], key: str, path: str, choices: Sequence[str]
    ) -> None:
        value = self.present(parent, key, path, optional=False)
        if value is _MISSING:
            return
        if value not in choices:
            expected = " | ".join(f"'{choice}'" for choice in choices)
            self.fail(path, f"Invalid value {value!r}, expected {expected}")

    def color(
        self, parent: Mapping[str, Any], key: str, path: str, optional: bool = False
    ) -> None:
        value = self.present(parent, key, path, optional)
        if value is _MISSING:
            return
        if not isinstance(value, str) or not HEX_COLOR_PATTERN.match(value):
            self.fail(path, "Must be a valid hex color")

    def string_list(self, parent: Mapping[str, Any], key: str, path: str) -> None:
        value = self.present(parent, key, path, optional=False)
        if value is _MISSING:
            return
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            self.fail(path, f"Expected a list of strings, got {type(value).__name__}")
            return
        for index, item in enumerate(value):
            if not isinstance(item, str):
                self.fail(f"{path}.{index}", f"Expected a string, got {type(item).__name__}")

    def timestamp(self, parent: Mapping[str, Any], key: str, path: str) -> None:
        value = self.present(parent, key, path, optional=False)
        if value is _MISSING:
            return
        if not isinstance(value, str):
            self.fail(path, f"Expected an ISO 8601 string, got {type(value).__name__}")
            return
        try:
            parse_iso_timestamp(value)
        except ValueError:
            self.fail(path, f"Invalid ISO 8601 timestamp {value!r}")


def _check_colors(checker: _StructureChecker, data: Mapping[str, Any]) -> None:
    colors = checker.mapping(
        data, "colors", "colors",
        ("primary", "secondary", "accent", "text", "background", "border"),
    )
    if colors is None:
        return
    for key in ("primary", "text", "background"):
        checker.color(colors, key, f"colors.{key}")
    for key in ("secondary", "accent", "border"):
        checker.color(colors, key, f"colors.{key}", optional=True)


def _check_typography(checker: _StructureChecker, data: Mapping[str, Any]) -> None:
    typography = checker.mapping(
        data, "typography", "typography",
        ("font_family", "custom_font", "font_size", "line_height", "font_weight"),
    )
    if typography is None:
        return

    checker.enum(typography, "font_family", "typography.font_family", FONT_FAMILIES)
    checker.string(typography, "custom_font", "typography.custom_font", optional=True)
    checker.number(typography, "line_height", "typography.line_height", bounds=LINE_HEIGHT_RANGE)

    font_size = checker.mapping(
        typography, "font_size", "typography.font_size", [name for name, _, _ in FONT_SIZE_RANGES]
    )
    if font_size is not None:
        for name, low, high in FONT_SIZE_RANGES:
            checker.number(font_size, name, f"typography.font_size.{name}", bounds=(low, high))

    font_weight = checker.mapping(
        typography, "font_weight", "typography.font_weight",
        [name for name, _, _ in FONT_WEIGHT_RANGES],
    )
    if font_weight is not None:
        for name, low, high in FONT_WEIGHT_RANGES:
            checker.number(font_weight, name, f"typography.font_weight.{name}", bounds=(low, high))


def _check_layout(checker: _StructureChecker, data: Mapping[str, Any]) -> None:
    layout = checker.mapping(data, "layout", "layout", ("type", "spacing", "borders", "alignment"))
    if layout is None:
        return

    checker.enum(layout, "type", "layout.type", LAYOUT_TYPES)

    spacing = checker.mapping(
        layout, "spacing", "layout.spacing", [name for name, _, _ in SPACING_RANGES]
    )
    if spacing is not None:
        for name, low, high in SPACING_RANGES:
            checker.number(spacing, name, f"layout.spacing.{name}", bounds=(low, high))

    borders = checker.mapping(
        layout, "borders", "layout.borders", ("enabled", "style", "width", "radius")
    )
    if borders is not None:
        checker.boolean(borders, "enabled", "layout.borders.enabled")
        checker.enum(borders, "style", "layout.borders.style", BORDER_STYLES)
        for name, low, high in BORDER_RANGES:
            checker.number(borders, name, f"layout.borders.{name}", bounds=(low, high))

    alignment = checker.mapping(layout, "alignment", "layout.alignment", ("text", "sections"))
    if alignment is not None:
        checker.enum(alignment, "text", "layout.alignment.text", TEXT_ALIGNMENTS)
        checker.enum(alignment, "sections", "layout.alignment.sections", SECTION_ALIGNMENTS)


def _check_sections(checker: _StructureChecker, data: Mapping[str, Any]) -> None:
    sections = checker.mapping(data, "sections", "sections", SECTION_NAMES)
    if sections is None:
        return

    for name in SECTION_NAMES:
        path = f"sections.{name}"
        section = checker.mapping(
            sections, name, path,
            ("enabled", "order", "title", "style", "columns", "custom_styles"),
        )
        if section is None:
            continue

        checker.boolean(section, "enabled", f"{path}.enabled")
        checker.number(section, "order", f"{path}.order", integer=True)
        checker.string(section, "title", f"{path}.title", optional=True)
        checker.enum(section, "style", f"{path}.style", SECTION_STYLES)
        checker.number(
            section, "columns", f"{path}.columns",
            bounds=COLUMNS_RANGE, integer=True, optional=True,
        )

        custom_styles = section.get("custom_styles")
        if custom_styles is not None:
            if not isinstance(custom_styles, Mapping):
                checker.fail(
                    f"{path}.custom_styles",
                    f"Expected a mapping, got {type(custom_styles).__name__}",
                )
            else:
                for style_key, style_value in custom_styles.items():
                    if not isinstance(style_value, str):
                        checker.fail(
                            f"{path}.custom_styles.{style_key}",
                            f"Expected a string, got {type(style_value).__name__}",
                        )


def _check_metadata(checker: _StructureChecker, data: Mapping[str, Any]) -> None:
    metadata = checker.mapping(
        data, "metadata", "metadata",
        ("author", "created_at", "updated_at", "tags", "industries", "roles"),
    )
    if metadata is None:
        return

    checker.string(metadata, "author", "metadata.author")
    checker.timestamp(metadata, "created_at", "metadata.created_at")
    checker.timestamp(metadata, "updated_at", "metadata.updated_at")
    for key in ("tags", "industries", "roles"):
        checker.string_list(metadata, key, f"metadata.{key}")


def check_structure(data: Any) -> List[str]:
    """
    Run structural validation on a configuration mapping.

    Args:
        data: Configuration in nested-mapping form

    Returns:
        Every structural error found, each prefixed by its dotted field path
    """
    if not isinstance(data, Mapping):
        return [f"configuration: Expected a mapping, got {type(data).__name__}"]

    checker = _StructureChecker()
    checker.unknown_keys(data, "configuration", TOP_LEVEL_FIELDS)

    checker.string(data, "id", "id", non_empty=True)
    checker.string(data, "name", "name")
    checker.string(data, "description", "description")
    checker.enum(data, "category", "category", CATEGORIES)
    checker.boolean(data, "is_premium", "is_premium")
    checker.number(data, "version", "version", bounds=(1, float("inf")), integer=True)

    _check_colors(checker, data)
    _check_typography(checker, data)
    _check_layout(checker, data)
    _check_sections(checker, data)
    _check_metadata(checker, data)

    return checker.errors


def collect_warnings(data: Mapping[str, Any]) -> List[str]:
    """
    Readability heuristics for a structurally valid configuration mapping.

    Returns:
        Human-readable warnings (possibly empty)
    """
    warnings = []
    colors = data["colors"]
    typography = data["typography"]

    if colors["primary"].lower() == colors["background"].lower():
        warnings.append(
            "Primary color is the same as background color, which may cause readability issues"
        )

    if colors["text"].lower() == colors["background"].lower():
        warnings.append("Text color is the same as background color, so text will be invisible")

    if typography["font_size"]["base"] < MIN_READABLE_FONT_SIZE:
        warnings.append("Base font size is very small and may be hard to read")

    if typography["font_size"]["heading"] < typography["font_size"]["base"]:
        warnings.append("Heading font size is smaller than the base font size")

    if typography["font_family"] == "custom" and not typography.get("custom_font"):
        warnings.append("Custom font family selected without a custom font; a system font will be used")

    if not any(section["enabled"] for section in data["sections"].values()):
        warnings.append("No sections are enabled, so the template renders an empty document")

    return warnings


def validate_template(
    config: Union[TemplateConfiguration, Mapping[str, Any]],
) -> TemplateValidationResult:
    """
    Validate a template configuration.

    Args:
        config: TemplateConfiguration or its nested-mapping form

    Returns:
        TemplateValidationResult; when structural errors exist, is_valid is False
        and warnings is empty

    Example:
        >>> result = validate_template(config)
        >>> if not result.is_valid:
        ...     print(result.errors)
    """
    data = config.to_dict() if isinstance(config, TemplateConfiguration) else config

    errors = check_structure(data)
    if errors:
        return TemplateValidationResult(is_valid=False, errors=errors, warnings=[])

    return TemplateValidationResult(is_valid=True, errors=[], warnings=collect_warnings(data))


def ensure_valid(
    config: Union[TemplateConfiguration, Mapping[str, Any]],
    context: str = "Invalid template configuration",
) -> TemplateValidationResult:
    """
    Validate and raise on structural errors.

    Args:
        config: TemplateConfiguration or its nested-mapping form
        context: Leading text of the raised error message

    Returns:
        The (valid) TemplateValidationResult, warnings included

    Raises:
        TemplateValidationError: Carrying every structural error
    """
    result = validate_template(config)
    if not result.is_valid:
        template_id = None
        if isinstance(config, TemplateConfiguration):
            template_id = config.id
        elif isinstance(config, Mapping):
            template_id = config.get("id")
        raise TemplateValidationError(context, errors=result.errors, template_id=template_id)
    return result
