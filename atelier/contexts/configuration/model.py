"""
Template Configuration Model

Defines the typed representation of a visual resume template for ATELIER.
This structure is the interface between every other context:

Configuration owns:
- The canonical shape of a template (colors, typography, layout, sections, metadata)
- Lossless conversion to and from the nested-mapping form used by YAML and overlays

Catalog, Styling and Discovery read these objects but never mutate them in place.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from atelier.contexts.configuration.defaults import SECTION_NAMES

# Opaque handle telling the rendering layer how to draw a template.
# The engine stores it and hands it back, nothing more.
RendererHandle = Any


@dataclass
class TemplateColors:
    primary: str
    text: str
    background: str
    secondary: Optional[str] = None
    accent: Optional[str] = None
    border: Optional[str] = None


@dataclass
class FontSize:
    base: float
    heading: float
    small: float


@dataclass
class FontWeight:
    normal: int
    bold: int


@dataclass
class TemplateTypography:
    """
    Typography settings.

    Attributes:
        font_family: One of serif, sans-serif, monospace, custom
        font_size: Base/heading/small sizes in px
        line_height: Unitless line height multiplier
        font_weight: Normal/bold numeric weights
        custom_font: Raw font stack, only meaningful when font_family is custom
    """

    font_family: str
    font_size: FontSize
    line_height: float
    font_weight: FontWeight
    custom_font: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateTypography":
        return cls(
            font_family=data["font_family"],
            font_size=FontSize(**data["font_size"]),
            line_height=data["line_height"],
            font_weight=FontWeight(**data["font_weight"]),
            custom_font=data.get("custom_font"),
        )


@dataclass
class Spacing:
    section: float
    element: float
    margin: float
    padding: float


@dataclass
class Borders:
    enabled: bool
    style: str
    width: float
    radius: float


@dataclass
class Alignment:
    text: str
    sections: str


@dataclass
class TemplateLayout:
    type: str
    spacing: Spacing
    borders: Borders
    alignment: Alignment

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateLayout":
        return cls(
            type=data["type"],
            spacing=Spacing(**data["spacing"]),
            borders=Borders(**data["borders"]),
            alignment=Alignment(**data["alignment"]),
        )


@dataclass
class SectionConfig:
    """
    Per-section rendering settings.

    `order` values need not be contiguous; they only decide the relative
    rendering order among enabled sections.
    """

    enabled: bool
    order: int
    title: Optional[str] = None
    style: str = "default"
    columns: Optional[int] = None
    custom_styles: Optional[Dict[str, str]] = None


@dataclass
class TemplateMetadata:
    author: str
    created_at: str
    updated_at: str
    tags: List[str] = field(default_factory=list)
    industries: List[str] = field(default_factory=list)
    roles: List[str] = field(default_factory=list)


@dataclass
class TemplateConfiguration:
    """
    Declarative description of one visual template.

    Attributes:
        id: Stable identifier, unique within a registry
        name: Display name
        description: Display description
        category: Classification tag (professional, creative, academic, technical, executive)
        is_premium: Advisory premium flag (enforcement happens elsewhere)
        version: Schema/shape version of this configuration
        colors: Color palette
        typography: Font settings
        layout: Layout, spacing, borders and alignment
        sections: Section name -> SectionConfig
        metadata: Author, timestamps and matching labels
    """

    id: str
    name: str
    description: str
    category: str
    is_premium: bool
    version: int
    colors: TemplateColors
    typography: TemplateTypography
    layout: TemplateLayout
    sections: Dict[str, SectionConfig]
    metadata: TemplateMetadata

    def to_dict(self) -> Dict[str, Any]:
        """Nested-mapping form of this configuration (fresh copy, safe to mutate)."""
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TemplateConfiguration":
        """
        Build a configuration from its nested-mapping form.

        Expects a structurally valid mapping (see validator.validate_template);
        lists and dicts are copied so the result shares no state with `data`.
        """
        metadata = data["metadata"]
        return cls(
            id=data["id"],
            name=data["name"],
            description=data["description"],
            category=data["category"],
            is_premium=data["is_premium"],
            version=data["version"],
            colors=TemplateColors(**data["colors"]),
            typography=TemplateTypography.from_dict(data["typography"]),
            layout=TemplateLayout.from_dict(data["layout"]),
            sections={
                name: SectionConfig(
                    **{
                        **section,
                        "custom_styles": (
                            dict(section["custom_styles"])
                            if section.get("custom_styles") is not None
                            else None
                        ),
                    }
                )
                for name, section in data["sections"].items()
            },
            metadata=TemplateMetadata(
                author=metadata["author"],
                created_at=metadata["created_at"],
                updated_at=metadata["updated_at"],
                tags=list(metadata.get("tags", [])),
                industries=list(metadata.get("industries", [])),
                roles=list(metadata.get("roles", [])),
            ),
        )

    def enabled_sections(self) -> List[str]:
        """
        Names of enabled sections in rendering order.

        Sorted by `order`; equal orders fall back to canonical section order.
        """
        canonical = {name: index for index, name in enumerate(SECTION_NAMES)}
        enabled = [name for name, section in self.sections.items() if section.enabled]
        return sorted(
            enabled,
            key=lambda name: (self.sections[name].order, canonical.get(name, len(canonical))),
        )


@dataclass
class TemplateRegistryEntry:
    """
    A registered, renderable template.

    Attributes:
        id: Registry key (normally equal to config.id)
        name: Display name used for listing order
        description: Display description
        category: Classification tag used for filtering
        is_premium: Advisory premium flag used for filtering
        config: The owned template configuration
        renderer: Opaque handle for the rendering layer
        thumbnail: Optional thumbnail reference
        preview: Optional preview reference
    """

    id: str
    name: str
    description: str
    category: str
    is_premium: bool
    config: TemplateConfiguration
    renderer: RendererHandle = None
    thumbnail: Optional[str] = None
    preview: Optional[str] = None

    @classmethod
    def from_config(
        cls,
        config: TemplateConfiguration,
        renderer: RendererHandle = None,
        thumbnail: Optional[str] = None,
        preview: Optional[str] = None,
    ) -> "TemplateRegistryEntry":
        """Build an entry whose display fields mirror the configuration."""
        return cls(
            id=config.id,
            name=config.name,
            description=config.description,
            category=config.category,
            is_premium=config.is_premium,
            config=config,
            renderer=renderer,
            thumbnail=thumbnail,
            preview=preview,
        )


@dataclass
class TemplateValidationResult:
    """
    Result of template validation.

    Attributes:
        is_valid: Whether the configuration passed structural validation
        errors: Structural problems (empty when valid)
        warnings: Readability heuristics (only populated when valid)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
