"""Plugin for the javhoo site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain

HOSTS = ["https://www.javhoo.com"]

_INFO = '//div[@class="project_info"]'

_DECODER = XPathHtmlDecoder(
    number_expr=f'{_INFO}/p/span[@class="categories"]/text()',
    title_expr='//header[@class="article-header"]/h1[@class="article-title"]/text()',
    actor_list_expr='//p/span[@class="genre"]/a[contains(@href, "star")]/text()',
    release_date_expr=f'{_INFO}/p[span[contains(text(), "發行日期")]]/text()[2]',
    duration_expr=f'{_INFO}/p[span[contains(text(), "長度")]]/text()[2]',
    studio_expr=f'{_INFO}/p[span[contains(text(), "製作商")]]/a/text()',
    label_expr=f'{_INFO}/p[span[contains(text(), "發行商")]]/a/text()',
    director_expr=f'{_INFO}/p[span[contains(text(), "導演")]]/a/text()',
    series_expr=f'{_INFO}/p[span[contains(text(), "系列")]]/a/text()',
    genre_list_expr='//p/span[@class="genre"]/a[contains(@href, "genre")]/text()',
    cover_expr='//p/a[@class="dt-single-image"]/@href',
    sample_image_list_expr='//div[@id="sample-box"]/div/a/@href',
)


class JavhooPlugin(Plugin):
    """Detail pages live under /av/<number>."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/av/{number}")

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_duration,
            ),
        )
        if not meta.number:
            return None
        meta.title_lang = MetaLang.JA
        return meta