"""
Styling Context

Responsibilities:
- Compiles a validated configuration into flat presentation variables
- Resolves font-family selectors into concrete font stacks
- Renders compiled variables as a stylesheet block for the rendering layer

Owns: Variable naming, unit suffixes, fallback chains, stylesheet templates
Never: Validates configurations or draws anything
"""

from atelier.contexts.styling.stylesheet import StylesheetRenderer, render_stylesheet
from atelier.contexts.styling.variables import compile_variables, resolve_font_family

__all__ = [
    "compile_variables",
    "resolve_font_family",
    "StylesheetRenderer",
    "render_stylesheet",
]
