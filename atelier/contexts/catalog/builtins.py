"""
Built-in template catalog.

Loads the templates shipped with ATELIER from YAML (ATELIER_BUILTIN_CATALOG,
defaulting to builtin_templates.yaml next to this module), completes each one
with the configuration defaults and registers them.

Registration is per entry: a template that fails to load or validate is logged
and skipped, never blocking the others. Calling register_builtin_templates()
again simply replaces the same ids.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from atelier.contexts.catalog.logger import _log_error, _log_info, log_catalog_summary
from atelier.contexts.catalog.registry import TemplateRegistry
from atelier.contexts.configuration.exceptions import TemplateValidationError
from atelier.contexts.configuration.merge import apply_defaults
from atelier.contexts.configuration.model import TemplateConfiguration, TemplateRegistryEntry
from atelier.contexts.configuration.validator import ensure_valid
from atelier.utils.timestamp import now_exact

load_dotenv()
BUILTIN_CATALOG_PATH = Path(
    os.getenv("ATELIER_BUILTIN_CATALOG", Path(__file__).parent / "builtin_templates.yaml")
)

# Keys of a catalog entry that belong to the registry entry, not the configuration
ENTRY_FIELDS = ("renderer", "thumbnail", "preview")


@dataclass
class RegistrationReport:
    """
    Outcome of a bulk registration.

    Attributes:
        registered: Ids registered, in catalog order
        failed: Id -> error message for every rejected template
    """

    registered: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return not self.failed


def load_builtin_catalog(catalog_path: Path = None) -> Dict[str, Dict[str, Any]]:
    """
    Load the raw catalog YAML.

    Args:
        catalog_path: Optional path (defaults to ATELIER_BUILTIN_CATALOG)

    Returns:
        Template id -> raw (partial) catalog entry, in file order

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        ValueError: If the file has no top-level 'templates' mapping
    """
    if catalog_path is None:
        catalog_path = BUILTIN_CATALOG_PATH

    if not Path(catalog_path).exists():
        raise FileNotFoundError(f"Template catalog not found at {catalog_path}")

    catalog = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True)
    templates = catalog.get("templates") if isinstance(catalog, dict) else None
    if not isinstance(templates, dict):
        raise ValueError(f"Template catalog {catalog_path} must contain a 'templates' mapping")

    return templates


def build_entry(
    template_id: str, raw: Mapping[str, Any], timestamp: Optional[str] = None
) -> TemplateRegistryEntry:
    """
    Turn one raw catalog entry into a registry entry.

    Args:
        template_id: Catalog key, used as configuration id
        raw: Partial configuration plus optional renderer/thumbnail/preview
        timestamp: metadata.created_at / updated_at when absent (defaults to now)

    Returns:
        TemplateRegistryEntry with a complete configuration

    Raises:
        TemplateValidationError: If the completed configuration is invalid
    """
    if not isinstance(raw, Mapping):
        raise TemplateValidationError(
            "Invalid built-in template",
            errors=[f"{template_id}: Expected a mapping, got {type(raw).__name__}"],
            template_id=template_id,
        )

    config_data = {key: value for key, value in raw.items() if key not in ENTRY_FIELDS}
    config_data["id"] = template_id

    data = apply_defaults(config_data, timestamp=timestamp or now_exact())
    ensure_valid(data, context=f"Invalid built-in template '{template_id}'")

    return TemplateRegistryEntry.from_config(
        TemplateConfiguration.from_dict(data),
        renderer=raw.get("renderer"),
        thumbnail=raw.get("thumbnail"),
        preview=raw.get("preview"),
    )


def load_builtin_entries(catalog_path: Path = None) -> List[TemplateRegistryEntry]:
    """
    Build every built-in entry (strict: the first invalid template raises).

    Returns:
        Registry entries in catalog order
    """
    timestamp = now_exact()
    return [
        build_entry(template_id, raw, timestamp)
        for template_id, raw in load_builtin_catalog(catalog_path).items()
    ]


def load_builtin_configurations(catalog_path: Path = None) -> Dict[str, TemplateConfiguration]:
    """Built-in configurations keyed by id, for callers that don't need a registry."""
    return {entry.id: entry.config for entry in load_builtin_entries(catalog_path)}


def register_builtin_templates(
    registry: TemplateRegistry, catalog_path: Path = None
) -> RegistrationReport:
    """
    Register every built-in template, one entry at a time.

    Args:
        registry: Registry to populate
        catalog_path: Optional catalog path (defaults to ATELIER_BUILTIN_CATALOG)

    Returns:
        RegistrationReport listing registered and failed ids

    Example:
        >>> registry = TemplateRegistry()
        >>> report = register_builtin_templates(registry)
        >>> report.success
        True
    """
    catalog = load_builtin_catalog(catalog_path)
    _log_info(f"Registering {len(catalog)} built-in template(s)")

    timestamp = now_exact()
    report = RegistrationReport()

    for template_id, raw in catalog.items():
        try:
            registry.register(build_entry(template_id, raw, timestamp))
        except TemplateValidationError as e:
            _log_error(f"Skipping template {template_id}: {e}")
            report.failed[template_id] = str(e)
            continue
        report.registered.append(template_id)

    log_catalog_summary(report)
    return report
