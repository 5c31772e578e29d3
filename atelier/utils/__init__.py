"""
Shared utilities for ATELIER.

Common functionality used across contexts:
- Logger configuration with provenance tracking
- Timestamp helpers
"""

from atelier.utils.timestamp import now, now_exact

__all__ = ["now", "now_exact"]
