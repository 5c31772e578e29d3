"""
Template Registry

In-memory catalog of registered templates keyed by id. The application's
composition root owns one instance and hands it to whatever needs it; tests
build their own.

Registration validates the configuration first: a structurally invalid template
is rejected (TemplateValidationError) without touching the registry. Registering
an id again replaces the previous entry in place, so repeated bootstrap passes
never duplicate anything.

Reads (get, list_templates, search, recommend, customize, clone) never mutate
stored entries. `register` stores a snapshot of the validated configuration, so
later changes to the caller's entry never reach the registry; entries handed
out by reads belong to the registry and are treated as read-only.

Writes are serialized by an internal lock; the expected pattern
is still a single registration pass at startup followed by reads.
"""

import dataclasses
import threading
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from atelier.contexts.catalog.customizer import clone_configuration, customize_configuration
from atelier.contexts.catalog.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_registration_failure,
    log_registration_result,
)
from atelier.contexts.configuration.exceptions import TemplateValidationError
from atelier.contexts.configuration.model import (
    RendererHandle,
    TemplateConfiguration,
    TemplateRegistryEntry,
    TemplateValidationResult,
)
from atelier.contexts.configuration.validator import validate_template
from atelier.contexts.discovery.recommender import RecommendationProfile, recommend_entries
from atelier.contexts.discovery.search import search_entries


class TemplateRegistry:
    """
    Registry of renderable templates.

    Iteration order is registration order (re-registration keeps the original
    position). Listing is ordered by display name; search and recommendation
    start from iteration order.
    """

    def __init__(self):
        self._entries: Dict[str, TemplateRegistryEntry] = {}
        self._lock = threading.RLock()
        self._last_suffix = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._entries

    def register(self, entry: TemplateRegistryEntry) -> TemplateValidationResult:
        """
        Validate and store a template entry.

        Args:
            entry: Entry to register under entry.id

        Returns:
            Validation result (may carry readability warnings)

        Raises:
            TemplateValidationError: If entry.config is structurally invalid;
                the registry is left unchanged

        The stored entry holds a copy of the validated configuration; the
        renderer handle is kept as given.
        """
        data = entry.config.to_dict()
        result = validate_template(data)
        if not result.is_valid:
            log_registration_failure(entry.id, result.errors)
            raise TemplateValidationError(
                "Invalid template configuration", errors=result.errors, template_id=entry.id
            )

        stored = dataclasses.replace(entry, config=TemplateConfiguration.from_dict(data))
        with self._lock:
            replaced = entry.id in self._entries
            self._entries[entry.id] = stored

        log_registration_result(entry.id, entry.name, result.warnings, replaced)
        return result

    def unregister(self, template_id: str) -> Optional[TemplateRegistryEntry]:
        """Remove an entry; returns it, or None if the id was not registered."""
        with self._lock:
            removed = self._entries.pop(template_id, None)
        if removed is not None:
            _log_info(f"Unregistered template: {removed.name} ({template_id})")
        return removed

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def get(self, template_id: str) -> Optional[TemplateRegistryEntry]:
        """Exact lookup; None if the id is not registered."""
        return self._entries.get(template_id)

    def get_renderer(self, template_id: str) -> Optional[RendererHandle]:
        """Renderer handle of a registered template; None if the id is not registered."""
        entry = self.get(template_id)
        return entry.renderer if entry is not None else None

    def ids(self) -> List[str]:
        """Registered ids in iteration order."""
        return list(self._entries)

    def entries(self) -> List[TemplateRegistryEntry]:
        """Registered entries in iteration order."""
        return list(self._entries.values())

    def list_templates(
        self,
        category: Optional[str] = None,
        is_premium: Optional[bool] = None,
        tags: Optional[Sequence[str]] = None,
    ) -> List[TemplateRegistryEntry]:
        """
        List entries sorted by display name, optionally filtered.

        Args:
            category: Keep only entries with exactly this category
            is_premium: Keep only entries with exactly this premium flag
            tags: Keep only entries whose metadata tags include any of these

        Returns:
            Matching entries ordered by name

        Example:
            >>> [e.id for e in registry.list_templates(category="academic")]
            ['academic']
        """
        templates = self.entries()

        if category is not None:
            templates = [t for t in templates if t.category == category]

        if is_premium is not None:
            templates = [t for t in templates if t.is_premium == is_premium]

        if tags:
            templates = [t for t in templates if any(tag in t.config.metadata.tags for tag in tags)]

        return sorted(templates, key=lambda t: t.name)

    def categories(self) -> List[str]:
        """Distinct categories currently registered, sorted."""
        return sorted({entry.category for entry in self._entries.values()})

    def search(self, query: str) -> List[TemplateRegistryEntry]:
        """Case-insensitive substring search (see discovery.search)."""
        return search_entries(self.entries(), query)

    def recommend(
        self, profile: Union[RecommendationProfile, Mapping[str, Any]]
    ) -> List[TemplateRegistryEntry]:
        """Filtered, ranked recommendations (see discovery.recommender)."""
        return recommend_entries(self.entries(), profile)

    def _derive_id(self, template_id: str, kind: str) -> str:
        """
        Build '<template_id>-<kind>-<suffix>'.

        The suffix is a millisecond timestamp forced to increase strictly on
        every call, so two derivations never collide within this registry.
        """
        with self._lock:
            suffix = max(int(time.time() * 1000), self._last_suffix + 1)
            self._last_suffix = suffix
        return f"{template_id}-{kind}-{suffix}"

    def customize(
        self, template_id: str, overlay: Optional[Mapping[str, Any]]
    ) -> Optional[TemplateConfiguration]:
        """
        Customize a registered template.

        The result is not registered; callers decide what to do with it.

        Args:
            template_id: Registered template to start from
            overlay: Partial configuration overlay

        Returns:
            New configuration with id '<template_id>-custom-<suffix>', or None
            if template_id is not registered

        Raises:
            InvalidCustomizationError: If the overlay is malformed
            TemplateValidationError: If the merged configuration is invalid
        """
        entry = self.get(template_id)
        if entry is None:
            _log_debug(f"Customization requested for unknown template '{template_id}'")
            return None

        new_id = self._derive_id(template_id, "custom")
        try:
            customized = customize_configuration(entry.config, overlay, new_id)
        except TemplateValidationError as e:
            _log_warning(f"Rejected customization of {template_id}: {e}")
            raise

        _log_debug(f"Customized {template_id} -> {customized.id}")
        return customized

    def clone(self, template_id: str, new_name: Optional[str] = None) -> Optional[TemplateConfiguration]:
        """
        Copy a registered template's configuration under a new identity.

        Args:
            template_id: Registered template to copy
            new_name: Display name of the copy (defaults to '<name> (Copy)')

        Returns:
            New configuration with id '<template_id>-clone-<suffix>', or None
            if template_id is not registered
        """
        entry = self.get(template_id)
        if entry is None:
            _log_debug(f"Clone requested for unknown template '{template_id}'")
            return None

        cloned = clone_configuration(entry.config, self._derive_id(template_id, "clone"), new_name)
        _log_debug(f"Cloned {template_id} -> {cloned.id}")
        return cloned
