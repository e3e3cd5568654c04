"""Movie metadata model shared by decoders and searchers."""

from __future__ import annotations

import copy
import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Optional


class MetaLang(str, enum.Enum):
    """Language of a scraped text field."""

    JA = "ja"
    EN = "en"
    ZH = "zh-cn"


@dataclass
class File:
    """A remote file (``name`` is its URL) and the storage key of its data."""

    name: str = ""
    key: str = ""


@dataclass
class SwitchConfig:
    """Per-result switches that relax the searcher's checks."""

    disable_release_date_check: bool = False
    disable_number_replace: bool = False


@dataclass
class ScrapeInfo:
    """Where and when a result was scraped."""

    source: str = ""
    date_ts: int = 0


@dataclass
class ExtInfo:
    """Extra bookkeeping attached to a result."""

    scrape_info: ScrapeInfo = field(default_factory=ScrapeInfo)


@dataclass
class MovieMeta:
    """Metadata of one movie as scraped from a site."""

    number: str = ""
    title: str = ""
    title_lang: Optional[MetaLang] = None
    title_translated: str = ""
    plot: str = ""
    plot_lang: Optional[MetaLang] = None
    plot_translated: str = ""
    actors: list[str] = field(default_factory=list)
    actors_lang: Optional[MetaLang] = None
    release_date: int = 0
    duration: int = 0
    studio: str = ""
    label: str = ""
    series: str = ""
    genres: list[str] = field(default_factory=list)
    genres_lang: Optional[MetaLang] = None
    cover: Optional[File] = None
    poster: Optional[File] = None
    sample_images: list[File] = field(default_factory=list)
    director: str = ""
    switch_config: SwitchConfig = field(default_factory=SwitchConfig)
    ext_info: ExtInfo = field(default_factory=ExtInfo)

    def merge_missing(self, other: "MovieMeta") -> None:
        """Fill every empty field of this record from ``other``, recursively."""
        _merge_into(self, other)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, dict, bytes)):
        return len(value) == 0
    if isinstance(value, bool):
        return value is False
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _merge_into(dst: Any, src: Any) -> None:
    for fld in dataclasses.fields(dst):
        current = getattr(dst, fld.name)
        incoming = getattr(src, fld.name)
        if incoming is None:
            continue
        if dataclasses.is_dataclass(current) and dataclasses.is_dataclass(incoming):
            _merge_into(current, incoming)
        elif _is_empty(current) and not _is_empty(incoming):
            setattr(dst, fld.name, copy.deepcopy(incoming))