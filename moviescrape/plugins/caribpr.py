"""Plugin for the caribbeancompr site, whose pages are EUC-JP encoded."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import File, MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain
from moviescrape.textutils import time_str_to_second

logger = logging.getLogger(__name__)

HOSTS = ["https://www.caribbeancompr.com"]

COVER_URL_FORMAT = "https://www.caribbeancompr.com/moviepages/{}/images/l_l.jpg"

_DECODER = XPathHtmlDecoder(
    title_expr=(
        "//div[@class='movie-info']/div[@class='section is-wide']"
        "/div[@class='heading']/h1/text()"
    ),
    plot_expr='//meta[@name="description"]/@content',
    actor_list_expr=(
        '//li[span[contains(text(), "出演")]]/span[@class="spec-content"]'
        '/a[@class="spec-item"]/text()'
    ),
    release_date_expr='//li[span[contains(text(), "販売日")]]/span[@class="spec-content"]/text()',
    duration_expr='//li[span[contains(text(), "再生時間")]]/span[@class="spec-content"]/text()',
    studio_expr='//li[span[contains(text(), "スタジオ")]]/span[@class="spec-content"]/a/text()',
    series_expr='//li[span[contains(text(), "シリーズ")]]/span[@class="spec-content"]/a/text()',
    genre_list_expr='//li[span[contains(text(), "タグ")]]/span[@class="spec-content"]/a/text()',
    sample_image_list_expr=(
        "//div[@class='movie-gallery']/div[@class='section is-wide']"
        "/div[2]/div[@class='grid-item']/div/a/@href"
    ),
)


def _decode_duration(value: str) -> int:
    try:
        return time_str_to_second(value)
    except ValueError as exc:
        logger.error("parse duration failed: %s (duration=%r)", exc, value)
        return 0


class CaribprPlugin(Plugin):
    """Detail pages are addressed by number under /moviepages."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        host = must_select_domain(HOSTS)
        return httpx.Request("GET", f"{host}/moviepages/{number}/index.html")

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        text = data.decode("euc_jp", "replace")
        meta = _DECODER.decode_html(
            text.encode("utf-8"),
            DecoderOptions(
                on_duration_parse=_decode_duration,
                on_release_date_parse=parse_date_only,
            ),
        )
        meta.number = ctx.number_id
        cover_url = COVER_URL_FORMAT.format(meta.number)
        if meta.cover is None:
            meta.cover = File(name=cover_url)
        else:
            meta.cover.name = cover_url
        meta.title_lang = MetaLang.JA
        meta.plot_lang = MetaLang.JA
        return meta