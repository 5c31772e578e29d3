"""
Profile-based template recommendation.

Two stages:
1. Filtering (hard) - industry and role must appear in the template metadata;
   an experience level must share at least one synonym tag with the template tags.
2. Scoring (soft) - +2 industry match, +2 role match, +1 per preference tag found
   in the template tags. Entries are ordered by descending score; ties keep
   registry iteration (registration) order because the sort is stable.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from atelier.contexts.configuration.model import TemplateRegistryEntry

EXPERIENCE_TAGS: Dict[str, List[str]] = {
    "entry": ["entry-level", "graduate", "junior"],
    "mid": ["mid-level", "experienced", "professional"],
    "senior": ["senior", "lead", "principal"],
    "executive": ["executive", "director", "c-level"],
}

INDUSTRY_WEIGHT = 2
ROLE_WEIGHT = 2
PREFERENCE_WEIGHT = 1


@dataclass
class RecommendationProfile:
    """
    User attributes used to rank templates.

    Attributes:
        industry: Exact industry label (e.g., "technology")
        role: Exact role label (e.g., "software-engineer")
        experience: One of entry, mid, senior, executive
        preferences: Free-text tags the user likes
    """

    industry: Optional[str] = None
    role: Optional[str] = None
    experience: Optional[str] = None
    preferences: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.experience is not None and self.experience not in EXPERIENCE_TAGS:
            raise ValueError(
                f"Unknown experience level '{self.experience}'. "
                f"Valid levels: {list(EXPERIENCE_TAGS)}"
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecommendationProfile":
        """Build a profile from a mapping; a single preference string counts as one tag."""
        preferences = data.get("preferences") or []
        if isinstance(preferences, str):
            preferences = [preferences]

        return cls(
            industry=data.get("industry"),
            role=data.get("role"),
            experience=data.get("experience"),
            preferences=list(preferences),
        )


def _matches_filters(entry: TemplateRegistryEntry, profile: RecommendationProfile) -> bool:
    metadata = entry.config.metadata

    if profile.industry and profile.industry not in metadata.industries:
        return False

    if profile.role and profile.role not in metadata.roles:
        return False

    if profile.experience:
        synonyms = EXPERIENCE_TAGS[profile.experience]
        if not any(tag in metadata.tags for tag in synonyms):
            return False

    return True


def score_entry(entry: TemplateRegistryEntry, profile: RecommendationProfile) -> int:
    """
    Relevance score of an entry for a profile.

    Args:
        entry: Registry entry
        profile: Recommendation profile

    Returns:
        Integer score (higher is more relevant)
    """
    metadata = entry.config.metadata
    score = 0

    if profile.industry and profile.industry in metadata.industries:
        score += INDUSTRY_WEIGHT

    if profile.role and profile.role in metadata.roles:
        score += ROLE_WEIGHT

    score += PREFERENCE_WEIGHT * sum(1 for pref in profile.preferences if pref in metadata.tags)

    return score


def recommend_entries(
    entries: Iterable[TemplateRegistryEntry],
    profile: Union[RecommendationProfile, Mapping[str, Any]],
) -> List[TemplateRegistryEntry]:
    """
    Filter and rank entries for a user profile.

    Args:
        entries: Registry entries in iteration order
        profile: RecommendationProfile or a mapping with the same keys

    Returns:
        Entries passing every filter, by descending score, ties in the order given

    Raises:
        ValueError: If the profile names an unknown experience level

    Example:
        >>> recommend_entries(registry.entries(), {"industry": "technology"})
    """
    if not isinstance(profile, RecommendationProfile):
        profile = RecommendationProfile.from_mapping(profile)

    candidates = [entry for entry in entries if _matches_filters(entry, profile)]
    return sorted(candidates, key=lambda entry: score_entry(entry, profile), reverse=True)
