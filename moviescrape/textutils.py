"""Name, string-list and time formatting helpers."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterable

NON_ACTOR_NAME = "佚名"
MULTI_ACTOR_LIMIT = 3
MULTI_ACTOR_NAME = "多人作品"
MAX_ITEM_BYTES = 200

_INT_RE = re.compile(r"[+-]?[0-9]+")


def build_authors_name(actors: list[str]) -> str:
    """Build a directory-friendly name from an actor list."""
    if not actors:
        return NON_ACTOR_NAME
    if len(actors) >= MULTI_ACTOR_LIMIT:
        return MULTI_ACTOR_NAME
    result = ""
    for idx, item in enumerate(actors):
        if idx:
            result += ","
        if len(result.encode()) + 1 + len(item.encode()) > MAX_ITEM_BYTES:
            break
        result += item
    return result


def build_title(title: str) -> str:
    """Cut a title to at most MAX_ITEM_BYTES bytes of UTF-8."""
    raw = title.encode()
    if len(raw) > MAX_ITEM_BYTES:
        return raw[:MAX_ITEM_BYTES].decode("utf-8", "ignore")
    return title


def dedup_string_list(items: Iterable[str]) -> list[str]:
    """Drop duplicates, keeping first occurrences in order."""
    return list(dict.fromkeys(items))


def string_list_to_lower(items: Iterable[str]) -> list[str]:
    return [item.lower() for item in items]


def string_list_to_set(items: Iterable[str]) -> set[str]:
    return set(items)


def format_time_to_date(ts: int) -> str:
    """Format a millisecond Unix timestamp as a local YYYY-MM-DD date."""
    return datetime.fromtimestamp(ts / 1000).strftime("%Y-%m-%d")


def time_str_to_second(text: str) -> int:
    """Convert ``HH:MM:SS`` to seconds."""
    parts = text.split(":")
    if len(parts) != 3:
        raise ValueError("invalid time format")
    if not all(_INT_RE.fullmatch(part) for part in parts):
        raise ValueError(f"parse time str failed: {text!r}")
    hours, minutes, seconds = (int(part) for part in parts)
    return hours * 3600 + minutes * 60 + seconds