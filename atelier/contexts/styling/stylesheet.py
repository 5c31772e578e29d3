"""
Stylesheet rendering for compiled presentation variables.

Wraps the output of compile_variables in a CSS custom-property block using a
Jinja2 template, so the rendering layer can drop it into a page as-is.
Templates live in ATELIER_STYLESHEET_TEMPLATES_PATH (defaults to the
`template/` directory next to this module).
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from atelier.contexts.configuration.model import TemplateConfiguration
from atelier.contexts.styling.variables import compile_variables

load_dotenv()
STYLESHEET_TEMPLATES_PATH = Path(
    os.getenv("ATELIER_STYLESHEET_TEMPLATES_PATH", Path(__file__).parent / "template")
)

DEFAULT_STYLESHEET = "stylesheet"


class StylesheetRenderer:
    """
    Loads, caches and renders stylesheet templates.

    Templates are stored as {templates_path}/{name}.css.jinja.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the renderer.

        Args:
            templates_path: Directory containing *.css.jinja templates. Defaults to
                            ATELIER_STYLESHEET_TEMPLATES_PATH from environment
        """
        if templates_path is None:
            templates_path = STYLESHEET_TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
        )

    def get_template(self, name: str = DEFAULT_STYLESHEET) -> Template:
        """
        Get a stylesheet template by name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        if name in self._cache:
            return self._cache[name]

        template_path = f"{name}.css.jinja"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Stylesheet template '{name}' not found at {self.templates_path / template_path}"
            ) from e

        self._cache[name] = template
        return template

    def is_cached(self, name: str) -> bool:
        return name in self._cache

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def render(
        self,
        config: TemplateConfiguration,
        selector: str = ":root",
        name: str = DEFAULT_STYLESHEET,
    ) -> str:
        """
        Render a configuration's presentation variables as a stylesheet block.

        Args:
            config: Validated template configuration
            selector: CSS selector the variables are scoped to
            name: Stylesheet template name

        Returns:
            Stylesheet text
        """
        template = self.get_template(name)
        return template.render(
            selector=selector,
            template_id=config.id,
            template_name=config.name,
            version=config.version,
            variables=compile_variables(config),
        )


def render_stylesheet(config: TemplateConfiguration, selector: str = ":root") -> str:
    """Render with a default StylesheetRenderer."""
    return StylesheetRenderer().render(config, selector=selector)
