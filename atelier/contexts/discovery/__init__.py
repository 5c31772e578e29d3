"""
Discovery Context

Responsibilities:
- Free-text search over registered templates (unranked substring match)
- Profile-based recommendation (hard filters, then relevance ordering)

Owns: Matching and ranking rules
Never: Mutates registry entries or their configurations
"""

from atelier.contexts.discovery.recommender import (
    EXPERIENCE_TAGS,
    RecommendationProfile,
    recommend_entries,
    score_entry,
)
from atelier.contexts.discovery.search import search_entries

__all__ = [
    "search_entries",
    "recommend_entries",
    "score_entry",
    "RecommendationProfile",
    "EXPERIENCE_TAGS",
]
