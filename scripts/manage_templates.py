#!/usr/bin/env python3
"""
Command-line interface for browsing, customizing and validating templates.

Every command starts from a fresh registry populated with the built-in catalog
(ATELIER_BUILTIN_CATALOG). Logs go to outs/logs/catalog_<timestamp>/catalog.log.

Commands:
    list        - List templates (optionally filter by category/premium/tags)
    categories  - List template categories
    search      - Free-text search over names, descriptions and labels
    recommend   - Recommend templates for a user profile
    show        - Show one template's configuration summary
    variables   - Print compiled presentation variables
    stylesheet  - Render the presentation variables as a stylesheet block
    customize   - Apply an overlay file and/or presets, print or save the result
    validate    - Validate a configuration YAML file
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf

from atelier.contexts.catalog import TemplateRegistry, compose_presets, register_builtin_templates
from atelier.contexts.catalog.customizer import check_customization
from atelier.contexts.catalog.logger import setup_catalog_logger
from atelier.contexts.configuration import (
    TemplateRegistryEntry,
    TemplateValidationError,
    validate_template,
)
from atelier.contexts.configuration.merge import merge_groups
from atelier.contexts.discovery import RecommendationProfile
from atelier.contexts.styling import StylesheetRenderer, compile_variables
from atelier.utils.timestamp import format_timestamp, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Browse, customize and validate resume templates",
    invoke_without_command=True,
)

state = {"verbose": False}


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo catalog logs to the console"),
):
    """Show help by default when no command is provided."""
    state["verbose"] = verbose
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_registry() -> TemplateRegistry:
    """Set up logging and register the built-in catalog."""
    setup_catalog_logger(
        LOGS_PATH / f"catalog_{now()}",
        source="cli",
        console_level="INFO" if state["verbose"] else "WARNING",
    )

    registry = TemplateRegistry()
    report = register_builtin_templates(registry)
    if not report.success:
        typer.secho(
            f"Warning: {len(report.failed)} built-in template(s) failed to register",
            fg=typer.colors.YELLOW,
            err=True,
        )
    return registry


def _get_entry(registry: TemplateRegistry, template_id: str) -> TemplateRegistryEntry:
    entry = registry.get(template_id)
    if entry is None:
        typer.secho(f"Template not found: {template_id}", fg=typer.colors.RED, err=True)
        typer.echo(f"Available templates: {', '.join(registry.ids())}", err=True)
        raise typer.Exit(code=1)
    return entry


def _print_entries(entries: List[TemplateRegistryEntry]) -> None:
    if not entries:
        typer.secho("No templates found", fg=typer.colors.YELLOW)
        return

    for entry in entries:
        premium = typer.style(" [premium]", fg=typer.colors.MAGENTA) if entry.is_premium else ""
        typer.echo(f"  {entry.id:<12} {entry.name:<26} {entry.category}{premium}")


@app.command("list")
def list_command(
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Exact category"),
    premium: Optional[bool] = typer.Option(None, "--premium/--free", help="Premium flag"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", "-t", help="Any-of tag filter (repeatable)"),
):
    """
    List templates sorted by name.

    Examples:\n

        $ manage_templates.py list --category professional

        $ manage_templates.py list --free --tag modern --tag minimal
    """
    registry = _load_registry()
    entries = registry.list_templates(category=category, is_premium=premium, tags=tag or None)

    typer.secho(f"\n{len(entries)} template(s)", fg=typer.colors.BLUE, bold=True)
    _print_entries(entries)


@app.command("categories")
def categories_command():
    """List template categories."""
    registry = _load_registry()
    for category in registry.categories():
        typer.echo(category)


@app.command("search")
def search_command(query: str = typer.Argument(..., help="Free-text query")):
    """Search names, descriptions, tags, industries and roles (unranked)."""
    registry = _load_registry()
    _print_entries(registry.search(query))


@app.command("recommend")
def recommend_command(
    industry: Optional[str] = typer.Option(None, "--industry", "-i"),
    role: Optional[str] = typer.Option(None, "--role", "-r"),
    experience: Optional[str] = typer.Option(
        None, "--experience", "-e", help="entry, mid, senior or executive"
    ),
    preference: Optional[List[str]] = typer.Option(
        None, "--preference", "-p", help="Preferred tag (repeatable)"
    ),
):
    """
    Recommend templates for a user profile, best match first.

    Examples:\n

        $ manage_templates.py recommend --industry technology -p modern
    """
    try:
        profile = RecommendationProfile(
            industry=industry, role=role, experience=experience, preferences=preference or []
        )
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    registry = _load_registry()
    _print_entries(registry.recommend(profile))


@app.command("show")
def show_command(template_id: str = typer.Argument(..., help="Template id")):
    """Show a template's configuration summary."""
    registry = _load_registry()
    entry = _get_entry(registry, template_id)
    config = entry.config

    typer.secho(f"\n{config.name} ({config.id}, v{config.version})", fg=typer.colors.BLUE, bold=True)
    typer.echo(config.description)
    typer.echo(f"  Category:  {config.category}{' (premium)' if config.is_premium else ''}")
    typer.echo(f"  Layout:    {config.layout.type}")
    typer.echo(f"  Font:      {config.typography.font_family}")
    typer.echo(f"  Sections:  {', '.join(config.enabled_sections())}")
    typer.echo(f"  Tags:      {', '.join(config.metadata.tags)}")
    typer.echo(f"  Industries:{' ' + ', '.join(config.metadata.industries)}")
    typer.echo(f"  Roles:     {', '.join(config.metadata.roles)}")
    typer.echo(f"  Updated:   {format_timestamp(config.metadata.updated_at, relative=True)}")


@app.command("variables")
def variables_command(template_id: str = typer.Argument(..., help="Template id")):
    """Print compiled presentation variables."""
    registry = _load_registry()
    entry = _get_entry(registry, template_id)

    for name, value in compile_variables(entry.config).items():
        typer.echo(f"{name}: {value}")


@app.command("stylesheet")
def stylesheet_command(
    template_id: str = typer.Argument(..., help="Template id"),
    selector: str = typer.Option(":root", "--selector", "-s", help="CSS selector"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write to file"),
):
    """Render a template's presentation variables as a stylesheet block."""
    registry = _load_registry()
    entry = _get_entry(registry, template_id)

    stylesheet = StylesheetRenderer().render(entry.config, selector=selector)
    if output:
        output.write_text(stylesheet, encoding="utf-8")
        typer.secho(f"✓ Wrote {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(stylesheet, nl=False)


@app.command("customize")
def customize_command(
    template_id: str = typer.Argument(..., help="Template id"),
    overlay_file: Optional[Path] = typer.Option(
        None, "--overlay", help="YAML file with a customization overlay"
    ),
    preset: Optional[List[str]] = typer.Option(
        None, "--preset", "-p", help="Preset name, e.g. spacing_tight (repeatable)"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write YAML to file"),
):
    """
    Customize a template and print (or save) the resulting configuration.

    Presets apply first, in order; the overlay file applies last.

    Examples:\n

        $ manage_templates.py customize modern -p colors_warm -p spacing_tight

        $ manage_templates.py customize classic --overlay my_colors.yaml -o custom.yaml
    """
    registry = _load_registry()
    _get_entry(registry, template_id)

    try:
        overlay = compose_presets(preset) if preset else {}
        if overlay_file:
            file_overlay = OmegaConf.to_container(OmegaConf.load(overlay_file), resolve=True)
            overlay = merge_groups(overlay, check_customization(file_overlay))
        config = registry.customize(template_id, overlay)
    except (TemplateValidationError, ValueError) as e:
        typer.secho("✗ Customization rejected", fg=typer.colors.RED, err=True)
        for error in getattr(e, "errors", None) or [str(e)]:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(code=1)

    content = OmegaConf.to_yaml(OmegaConf.create(config.to_dict()))
    if output:
        output.write_text(content, encoding="utf-8")
        typer.secho(f"✓ Wrote {config.id} to {output}", fg=typer.colors.GREEN)
    else:
        typer.echo(content, nl=False)


@app.command("validate")
def validate_command(config_file: Path = typer.Argument(..., help="Configuration YAML file")):
    """Validate a complete configuration YAML file."""
    if not config_file.exists():
        typer.secho(f"File not found: {config_file}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    data = OmegaConf.to_container(OmegaConf.load(config_file), resolve=True)
    result = validate_template(data)

    for warning in result.warnings:
        typer.secho(f"  ! {warning}", fg=typer.colors.YELLOW)

    if result.is_valid:
        typer.secho(f"✓ {config_file} is valid", fg=typer.colors.GREEN)
        return

    typer.secho(f"✗ {config_file} is invalid", fg=typer.colors.RED, err=True)
    for error in result.errors:
        typer.echo(f"  - {error}", err=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
