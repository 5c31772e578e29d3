"""
Free-text template search.

Matches are returned in registry iteration order. There is no relevance
ranking here; ranking belongs to the recommender.
"""

from typing import Iterable, List

from atelier.contexts.configuration.model import TemplateRegistryEntry


def searchable_fields(entry: TemplateRegistryEntry) -> List[str]:
    """All text an entry can be found by: name, description, tags, industries, roles."""
    metadata = entry.config.metadata
    return [entry.name, entry.description, *metadata.tags, *metadata.industries, *metadata.roles]


def search_entries(entries: Iterable[TemplateRegistryEntry], query: str) -> List[TemplateRegistryEntry]:
    """
    Case-insensitive substring search.

    An entry matches when any of its searchable fields contains the query.
    An empty query matches every entry.

    Args:
        entries: Registry entries in iteration order
        query: Free-text query

    Returns:
        Matching entries, in the order given

    Example:
        >>> [e.id for e in search_entries(registry.entries(), "academ")]
        ['academic']
    """
    needle = query.lower()
    return [
        entry
        for entry in entries
        if any(needle in text.lower() for text in searchable_fields(entry))
    ]
