"""Parsers turning scraped strings into release dates and durations."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(r"\s*([0-9]+)\s*.+")
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: str) -> int:
    if not _INT_RE.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    return int(value)


def parse_date_only(value: str) -> int:
    """Parse ``YYYY-MM-DD`` as a UTC date; return milliseconds, or 0 on failure."""
    try:
        if not _DATE_RE.fullmatch(value):
            raise ValueError(f"invalid date: {value!r}")
        parsed = datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    except ValueError as exc:
        logger.error("decode release date failed: %s (data=%r)", exc, value)
        return 0
    return int(parsed.timestamp()) * 1000


def parse_mm_duration(value: str) -> int:
    """Minutes to seconds; an unparsable value counts as 0."""
    try:
        return _parse_int(value) * 60
    except ValueError:
        return 0


def parse_hhmmss_duration(value: str) -> int:
    """Parse ``[[HH:]MM:]SS`` (spaces around parts allowed) to seconds, or 0."""
    parts = [part.strip() for part in value.split(":")]
    if len(parts) > 3:
        logger.error("invalid time format (data=%r)", value)
        return 0
    total = 0
    for power, part in enumerate(reversed(parts)):
        try:
            total += _parse_int(part) * 60**power
        except ValueError:
            logger.error("invalid time format (data=%r)", value)
            return 0
    return total


def parse_duration(value: str) -> int:
    """Parse a leading minute count such as ``47分钟`` to seconds, or 0."""
    try:
        return to_duration(value)
    except ValueError as exc:
        logger.error("decode duration failed: %s (data=%r)", exc, value)
        return 0


def parse_minute_only_duration(value: str) -> int:
    """Parse a bare minute count to seconds, or 0."""
    try:
        return _parse_int(value) * 60
    except ValueError as exc:
        logger.error("decode minute only duration failed: %s (data=%r)", exc, value)
        return 0


def to_duration(text: str) -> int:
    """Extract the first number followed by a unit and convert minutes to seconds."""
    match = _DURATION_RE.search(text)
    if match is None:
        raise ValueError("invalid time format")
    return int(match.group(1)) * 60