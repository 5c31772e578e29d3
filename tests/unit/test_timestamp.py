"""Unit tests for timestamp helpers."""

import re
from datetime import datetime, timedelta, timezone

import pytest

from atelier.utils.timestamp import format_timestamp, now, now_exact, parse_iso_timestamp


@pytest.mark.unit
def test_now_format():
    assert re.fullmatch(r"\d{8}_\d{6}", now())


@pytest.mark.unit
def test_now_exact_is_parseable():
    parsed = parse_iso_timestamp(now_exact())
    assert parsed.tzinfo is not None


@pytest.mark.unit
def test_parse_zulu():
    parsed = parse_iso_timestamp("2025-01-15T12:00:00Z")
    assert parsed == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.mark.unit
def test_parse_invalid():
    with pytest.raises(ValueError):
        parse_iso_timestamp("not a date")


@pytest.mark.unit
def test_format_absolute():
    assert format_timestamp("2025-11-13T18:45:40.572549") == "2025-11-13 18:45:40"


@pytest.mark.unit
def test_format_relative():
    two_hours_ago = (datetime.now(timezone.utc) - timedelta(hours=2, minutes=1)).isoformat()
    assert format_timestamp(two_hours_ago, relative=True) == "2h ago"


@pytest.mark.unit
def test_format_invalid_returns_input():
    assert format_timestamp("sometime") == "sometime"
