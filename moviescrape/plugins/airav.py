"""Plugin for the airav JSON API."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from moviescrape.model import File, MovieMeta
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import Plugin, PluginError, SearchContext, must_select_domain

logger = logging.getLogger(__name__)

HOSTS = ["https://www.airav.wiki"]


def _names(items: Any) -> list[str]:
    return [str(item.get("name") or "") for item in items or [] if isinstance(item, dict)]


def _str(value: Any) -> str:
    return "" if value is None else str(value)


class AiravPlugin(Plugin):
    """Looks a number up by barcode through the site's JSON API."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        domain = must_select_domain(HOSTS)
        return httpx.Request("GET", f"{domain}/api/video/barcode/{number}?lng=zh-TW")

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        try:
            payload = json.loads(data)
        except ValueError as exc:
            raise PluginError(f"decode json data failed, err:{exc}") from exc
        if not isinstance(payload, dict):
            raise PluginError("decode json data failed, err:not an object")
        status = _str(payload.get("status"))
        if status.casefold() != "ok":
            raise PluginError(f"search result:`{status}`, not ok")
        count = int(payload.get("count") or 0)
        if count == 0:
            return None
        if count > 1:
            logger.warning("more than one result, may cause data mismatch (count=%d)", count)
        result = payload.get("result") or {}
        factories = _names(result.get("factories"))
        return MovieMeta(
            number=_str(result.get("barcode")),
            title=_str(result.get("name")),
            plot=_str(result.get("description")),
            actors=_names(result.get("actors")),
            release_date=parse_date_only(_str(result.get("publish_date"))),
            studio=factories[0] if factories else "",
            genres=_names(result.get("tags")),
            cover=File(name=_str(result.get("img_url"))),
            sample_images=[File(name=_str(item)) for item in result.get("images") or []],
        )