"""Plugin for the freejavbt site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain

HOSTS = ["https://freejavbt.com"]

_DECODER = XPathHtmlDecoder(
    title_expr='//h1[@class="text-white"]/strong/text()',
    actor_list_expr='//div[span[contains(text(), "女优")]]/div/a/text()',
    release_date_expr='//div[span[contains(text(), "日期")]]/span[2]',
    duration_expr='//div[span[contains(text(), "时长")]]/span[2]',
    studio_expr='//div[span[contains(text(), "制作")]]/a',
    director_expr='//div[span[contains(text(), "导演")]]/a',
    genre_list_expr='//div[span[contains(text(), "类别")]]/div/a/text()',
    cover_expr='//img[@class="video-cover rounded lazyload"]/@data-src',
    sample_image_list_expr='//div[@class="preview"]/a/img/@data-src',
)


class FreeJavBtPlugin(Plugin):
    """Detail pages live under /zh/<number>."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/zh/{number}")

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_duration_parse=parse_duration,
                on_release_date_parse=parse_date_only,
            ),
        )
        meta.number = ctx.number_id
        meta.title_lang = MetaLang.JA
        return meta