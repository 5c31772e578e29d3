"""
ATELIER - Adaptive Template Engine for Layout, Identity and Element Rendering

A registry of declarative, versioned resume templates that can be validated,
customized per user, compiled into presentation variables, searched and
recommended.

Architecture:
- Configuration Context: Template schema, defaults, field-group merges and validation
- Catalog Context: Template registry, customization, presets and the built-in catalog
- Styling Context: Presentation variable compilation and stylesheet rendering
- Discovery Context: Free-text search and profile-based recommendation
"""

__version__ = "0.1.0"
