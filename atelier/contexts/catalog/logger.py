"""
Catalog context logger.

Provides logging interface for the catalog context with automatic [catalog] prefix.
All catalog modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import List

from loguru import logger

from atelier.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[catalog]"


def setup_catalog_logger(log_dir: Path, source: str = "builtin", console_level: str = "INFO") -> Path:
    """
    Setup logger for catalog context.

    Configures loguru with provenance tracking and catalog-specific context.

    Args:
        log_dir: Directory for this catalog session
        source: Where templates are registered from ("builtin", "cli", ...)
        console_level: Minimum level echoed to the console

    Returns:
        Path to log file

    Example:
        from atelier.contexts.catalog.logger import setup_catalog_logger, _log_info

        log_file = setup_catalog_logger(log_dir)
        _log_info("Registering templates...")
    """
    return _setup_logger(
        context_name="catalog",
        log_dir=log_dir,
        extra_provenance={"Template source": source},
        console_level=console_level,
    )


# Wrapper functions with automatic [catalog] prefix


def _log_info(message: str) -> None:
    """Log info message with [catalog] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [catalog] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [catalog] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [catalog] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [catalog] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level catalog-specific logging helpers


def log_registration_result(template_id: str, name: str, warnings: List[str], replaced: bool) -> None:
    """
    Log a successful registration and any readability warnings.

    Args:
        template_id: Registry key
        name: Display name
        warnings: Validation warnings
        replaced: Whether an entry with the same id was overwritten
    """
    action = "Re-registered" if replaced else "Registered"
    _log_success(f"{action} template: {name} ({template_id})")
    for warning in warnings:
        _log_warning(f"  {template_id}: {warning}")


def log_registration_failure(template_id: str, errors: List[str]) -> None:
    """Log a rejected registration with every structural error."""
    _log_error(f"Failed to register template {template_id}")
    for error in errors:
        _log_error(f"  {error}")


def log_catalog_summary(report) -> None:
    """
    Log the outcome of a bulk registration.

    Args:
        report: RegistrationReport from register_builtin_templates()
    """
    if report.failed:
        _log_warning(
            f"Registered {len(report.registered)} template(s), {len(report.failed)} failed: "
            f"{', '.join(report.failed)}"
        )
    else:
        _log_success(f"All {len(report.registered)} templates registered successfully")
