"""Timestamp formatting utilities."""

from datetime import datetime, timezone


def now() -> str:
    """Compact local timestamp for directory and file names (e.g., 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current UTC time as an ISO 8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


def parse_iso_timestamp(iso_timestamp: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a trailing 'Z' for UTC.

    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp
    """
    if iso_timestamp.endswith("Z"):
        iso_timestamp = iso_timestamp[:-1] + "+00:00"
    return datetime.fromisoformat(iso_timestamp)


def format_timestamp(iso_timestamp: str, relative: bool = False) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string
        relative: If True, show relative time (e.g., "2h ago")
                 If False, show absolute time (e.g., "2025-11-13 18:45:40")

    Returns:
        Human-readable timestamp

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45:40"

        format_timestamp("2025-11-13T18:45:40.572549", relative=True)
        # "2h ago"
    """
    try:
        dt = parse_iso_timestamp(iso_timestamp)

        if relative:
            return _format_relative_time(dt)
        else:
            return dt.strftime("%Y-%m-%d %H:%M:%S")

    except (ValueError, AttributeError):
        # Return original if parsing fails
        return iso_timestamp


def _format_relative_time(dt: datetime) -> str:
    """
    Format datetime as relative time in compact format (e.g., "2h ago").

    Args:
        dt: datetime object to format (naive or timezone-aware)

    Returns:
        Compact relative time string
    """
    current = datetime.now(dt.tzinfo) if dt.tzinfo else datetime.now()
    diff = current - dt

    # Future times
    if diff.total_seconds() < 0:
        diff = -diff
        suffix = "from now"
    else:
        suffix = "ago"

    seconds = int(diff.total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = diff.days

    if seconds < 60:
        return f"{seconds}s {suffix}"
    elif minutes < 60:
        return f"{minutes}m {suffix}"
    elif hours < 24:
        return f"{hours}h {suffix}"
    else:
        return f"{days}d {suffix}"
