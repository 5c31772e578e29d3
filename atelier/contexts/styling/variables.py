"""
Presentation variable compiler.

Projects a template configuration into flat `--template-*` variables consumed
by the rendering layer. Each variable comes from exactly one field, or a short
fallback chain for optional colors. Sizes, spacing and border dimensions get a
`px` suffix; line height and font weights stay unitless.

Input is assumed to have passed validation; nothing is checked here.
"""

from typing import Dict, Optional

from atelier.contexts.configuration.defaults import DEFAULT_BORDER_COLOR
from atelier.contexts.configuration.model import TemplateConfiguration

VARIABLE_PREFIX = "--template"

SYSTEM_FONT_STACK = "system-ui, sans-serif"

FONT_STACKS = {
    "serif": 'Georgia, "Times New Roman", Times, serif',
    "sans-serif": 'system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif',
    "monospace": 'ui-monospace, SFMono-Regular, "SF Mono", Consolas, "Liberation Mono", Menlo, monospace',
}


def resolve_font_family(family: str, custom_font: Optional[str] = None) -> str:
    """
    Resolve a font-family selector to a concrete font stack.

    Args:
        family: serif, sans-serif, monospace or custom
        custom_font: Raw font stack used when family is custom

    Returns:
        Font stack string; custom without a custom_font (or an unknown family)
        falls back to the generic system stack
    """
    if family == "custom":
        return custom_font or SYSTEM_FONT_STACK
    return FONT_STACKS.get(family, SYSTEM_FONT_STACK)


def _number(value: float) -> str:
    """Render 14.0 as '14' and 1.5 as '1.5'."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _px(value: float) -> str:
    return f"{_number(value)}px"


def compile_variables(config: TemplateConfiguration) -> Dict[str, str]:
    """
    Compile a configuration into presentation variables.

    Args:
        config: Validated template configuration

    Returns:
        Dict mapping variable name (e.g., "--template-color-primary") to string value

    Example:
        >>> variables = compile_variables(registry.get("modern").config)
        >>> variables["--template-font-size-base"]
        '14px'
    """
    colors = config.colors
    typography = config.typography
    spacing = config.layout.spacing
    borders = config.layout.borders
    p = VARIABLE_PREFIX

    return {
        # Colors
        f"{p}-color-primary": colors.primary,
        f"{p}-color-secondary": colors.secondary or colors.primary,
        f"{p}-color-accent": colors.accent or colors.primary,
        f"{p}-color-text": colors.text,
        f"{p}-color-background": colors.background,
        f"{p}-color-border": colors.border or DEFAULT_BORDER_COLOR,
        # Typography
        f"{p}-font-family": resolve_font_family(typography.font_family, typography.custom_font),
        f"{p}-font-size-base": _px(typography.font_size.base),
        f"{p}-font-size-heading": _px(typography.font_size.heading),
        f"{p}-font-size-small": _px(typography.font_size.small),
        f"{p}-line-height": _number(typography.line_height),
        f"{p}-font-weight-normal": _number(typography.font_weight.normal),
        f"{p}-font-weight-bold": _number(typography.font_weight.bold),
        # Layout
        f"{p}-spacing-section": _px(spacing.section),
        f"{p}-spacing-element": _px(spacing.element),
        f"{p}-spacing-margin": _px(spacing.margin),
        f"{p}-spacing-padding": _px(spacing.padding),
        f"{p}-border-width": _px(borders.width),
        f"{p}-border-radius": _px(borders.radius),
        f"{p}-border-style": borders.style,
    }
