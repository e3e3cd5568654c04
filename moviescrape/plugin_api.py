"""Plugin interface, per-search context and host selection."""

from __future__ import annotations

import random
from typing import Callable, Optional

import httpx

from moviescrape.model import MovieMeta

SS_JAVBUS = "javbus"
SS_JAV321 = "jav321"
SS_FC2 = "fc2"
SS_CARIBPR = "caribpr"
SS_JAVHOO = "javhoo"
SS_AVSOX = "avsox"
SS_AIRAV = "airav"
SS_FREEJAVBT = "freejavbt"
SS_JAVDB = "javdb"
SS_18AV = "18av"
SS_TKTUBE = "tktube"
SS_NJAV = "njav"
SS_FC2PPVDB = "fc2ppvdb"
SS_MISSAV = "missav"
SS_JVRPORN = "jvrporn"
SS_JAVLIBRARY = "javlibrary"
SS_COSPURI = "cospuri"
SS_MADOUQU = "madouqu"


class PluginError(Exception):
    """Raised when a plugin cannot complete a step of a search."""


class SearchContext:
    """State of one search: the number being looked up and a string store."""

    def __init__(self, number_id: str = "") -> None:
        self.number_id = number_id
        self._values: dict[str, str] = {}

    def set_value(self, key: str, value: str) -> None:
        self._values[key] = value

    def get_value(self, key: str) -> Optional[str]:
        """Return the stored value, or None when absent."""
        return self._values.get(key)

    def must_get_value(self, key: str) -> str:
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"key:{key} not found") from None

    def export_data(self) -> dict[str, str]:
        """Return a copy of the stored values."""
        return dict(self._values)

    def import_data(self, data: dict[str, str]) -> None:
        """Add ``data`` to the stored values, overwriting equal keys."""
        self._values.update(data)


Invoker = Callable[[SearchContext, httpx.Request], httpx.Response]


class Plugin:
    """Base plugin; every hook has a sensible default that a site overrides."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return []

    def on_precheck_request(self, ctx: SearchContext, number: str) -> bool:
        return True

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        raise PluginError("no impl")

    def on_decorate_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        return None

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        return invoker(ctx, request)

    def on_precheck_response(
        self, ctx: SearchContext, request: httpx.Request, response: httpx.Response
    ) -> bool:
        return response.status_code != httpx.codes.NOT_FOUND

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        """Decode a page; None means nothing was found."""
        raise PluginError("no impl")

    def on_decorate_media_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        """Give a media request a site Referer when it has none."""
        if "Referer" not in request.headers:
            netloc = request.url.netloc.decode("ascii")
            request.headers["Referer"] = f"{request.url.scheme}://{netloc}/"


def select_domain(hosts: list[str]) -> Optional[str]:
    """Pick one host at random, or None when there are none."""
    if not hosts:
        return None
    if len(hosts) == 1:
        return hosts[0]
    return random.choice(hosts)


def must_select_domain(hosts: list[str]) -> str:
    host = select_domain(hosts)
    if host is None:
        raise PluginError("unable to select domain")
    return host