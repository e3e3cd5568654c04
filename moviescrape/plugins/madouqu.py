"""Plugin for the madouqu site; numbers carry a MADOU prefix."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MovieMeta
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import Invoker, Plugin, SearchContext, must_select_domain
from moviescrape.twostep import MultiLinkContext, handle_multi_link_search

HOSTS = ["https://madouqu.com"]

_NUMBER_PREFIX = "MADOU"
_ACTOR_MARK = "麻豆女郎："


def _after_colon(text: str) -> str:
    parts = text.split("：")
    if len(parts) != 2:
        return ""
    return parts[1].strip()


def _decode_number(text: str) -> str:
    return _after_colon(text).upper()


def _decode_title(text: str) -> str:
    return _after_colon(text)


def _decode_actor_list(items: list[str]) -> list[str]:
    actors: list[str] = []
    for item in items:
        if _ACTOR_MARK not in item:
            continue
        names = item.replace(_ACTOR_MARK, "").strip()
        if names:
            actors.extend(names.split("、"))
    return actors


def _decode_release_date(text: str) -> int:
    parts = text.split("T")
    if len(parts) != 2:
        return 0
    return parse_date_only(parts[0])


_DECODER = XPathHtmlDecoder(
    number_expr='//p[contains(text(), "番號：")]/text()',
    title_expr='//p[contains(text(), "片名：")]/text()',
    actor_list_expr='//p[a[@title="model"]]',
    release_date_expr='//meta[@property="article:published_time"]/@content',
    genre_list_expr='//span[@class="meta-category"]/a[@rel="category"]',
    cover_expr='//meta[@property="og:image"]/@content',
)


class MadouquPlugin(Plugin):
    """Tries the number with and without separators until a detail page matches."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_precheck_request(self, ctx: SearchContext, number: str) -> bool:
        return number.startswith(_NUMBER_PREFIX)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        return httpx.Request("GET", must_select_domain(HOSTS))

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        num = ctx.number_id
        if num.startswith(_NUMBER_PREFIX):
            num = num[len(_NUMBER_PREFIX):]
        num = num.strip("-_")
        candidates = list(dict.fromkeys([num, num.replace("-", ""), num.replace("_", "")]))
        origin = f"{request.url.scheme}://{request.url.netloc.decode('ascii')}"

        def build(nid: str) -> httpx.Request:
            return httpx.Request("GET", f"{origin}/video/{nid.lower()}/")

        return handle_multi_link_search(
            ctx,
            invoker,
            MultiLinkContext(
                req_builder=build,
                numbers=candidates,
                valid_status_codes=[200],
                result_tester=lambda raw: "片名".encode("utf-8") in raw,
            ),
        )

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_number_parse=_decode_number,
                on_title_parse=_decode_title,
                on_actor_list_parse=_decode_actor_list,
                on_release_date_parse=_decode_release_date,
            ),
        )
        if not meta.number:
            meta.number = ctx.number_id
        return meta