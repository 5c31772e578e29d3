"""
Default values for ATELIER template configurations.

Provides shared defaults used by:
- merge.apply_defaults (completing partial configurations from the built-in catalog)
- styling.variables (fallback border color)

Closed vocabularies for enum-like fields live here as well so the validator,
the model and the catalog agree on a single source.
"""

import copy
from typing import Any, Dict

CATEGORIES = ("professional", "creative", "academic", "technical", "executive")
FONT_FAMILIES = ("serif", "sans-serif", "monospace", "custom")
LAYOUT_TYPES = ("single-column", "two-column", "three-column", "mixed")
BORDER_STYLES = ("solid", "dashed", "dotted", "none")
TEXT_ALIGNMENTS = ("left", "center", "right", "justify")
SECTION_ALIGNMENTS = ("left", "center", "right")
SECTION_STYLES = ("default", "highlighted", "minimal", "bordered")

# Canonical section order (also the tiebreak for equal `order` values)
SECTION_NAMES = (
    "header",
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "languages",
    "awards",
    "publications",
    "volunteer",
    "custom",
)

# Sections shown by default; the rest start disabled
DEFAULT_ENABLED_SECTIONS = ("header", "summary", "experience", "education", "skills", "projects")

DEFAULT_BORDER_COLOR = "#e5e7eb"

DEFAULT_COLORS = {
    "primary": "#2563eb",
    "secondary": "#64748b",
    "accent": "#0ea5e9",
    "text": "#1f2937",
    "background": "#ffffff",
    "border": DEFAULT_BORDER_COLOR,
}

DEFAULT_TYPOGRAPHY = {
    "font_family": "sans-serif",
    "custom_font": None,
    "font_size": {
        "base": 14,
        "heading": 24,
        "small": 12,
    },
    "line_height": 1.5,
    "font_weight": {
        "normal": 400,
        "bold": 600,
    },
}

DEFAULT_LAYOUT = {
    "type": "single-column",
    "spacing": {
        "section": 24,
        "element": 12,
        "margin": 32,
        "padding": 16,
    },
    "borders": {
        "enabled": False,
        "style": "solid",
        "width": 1,
        "radius": 4,
    },
    "alignment": {
        "text": "left",
        "sections": "left",
    },
}

DEFAULT_SECTION_CONFIG = {
    "enabled": True,
    "order": 0,
    "title": None,
    "style": "default",
    "columns": 1,
    "custom_styles": None,
}

DEFAULT_METADATA = {
    "author": "ATELIER",
    "tags": [],
    "industries": [],
    "roles": [],
}


def default_sections() -> Dict[str, Dict[str, Any]]:
    """
    Build the default section map.

    Every section gets DEFAULT_SECTION_CONFIG with a 1-based order following
    SECTION_NAMES; sections outside DEFAULT_ENABLED_SECTIONS start disabled.

    Returns:
        Dict mapping section name to a fresh section config dict
    """
    sections = {}
    for index, name in enumerate(SECTION_NAMES, start=1):
        section = copy.deepcopy(DEFAULT_SECTION_CONFIG)
        section["order"] = index
        section["enabled"] = name in DEFAULT_ENABLED_SECTIONS
        sections[name] = section
    return sections


def get_default_groups() -> Dict[str, Any]:
    """
    Get deep copies of every defaulted configuration group.

    Returns:
        Dict with colors, typography, layout, sections and metadata defaults
    """
    return {
        "colors": copy.deepcopy(DEFAULT_COLORS),
        "typography": copy.deepcopy(DEFAULT_TYPOGRAPHY),
        "layout": copy.deepcopy(DEFAULT_LAYOUT),
        "sections": default_sections(),
        "metadata": copy.deepcopy(DEFAULT_METADATA),
    }
