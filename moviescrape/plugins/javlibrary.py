"""Plugin for the javlibrary site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_minute_only_duration
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain

HOSTS = ["https://www.javlibrary.com"]

_EMPTY_DIRECTOR = "----"

_DECODER = XPathHtmlDecoder(
    number_expr='//tbody/tr[td[contains(text(), "识别码:")]]/td[@class="text"]/text()',
    title_expr=(
        '//div[@id="video_title"]/h3[@class="post-title text"]/a[@rel="bookmark"]/text()'
    ),
    actor_list_expr=(
        '//tbody/tr[td[contains(text(), "演员:")]]/td[@class="text"]//span[@class="star"]/a/text()'
    ),
    release_date_expr='//tbody/tr[td[contains(text(), "发行日期:")]]/td[@class="text"]/text()',
    duration_expr='//tbody/tr[td[contains(text(), "长度:")]]/td/span[@class="text"]/text()',
    studio_expr=(
        '//tbody/tr[td[contains(text(), "制作商:")]]/td[@class="text"]//span[@class="maker"]/a/text()'
    ),
    label_expr=(
        '//tbody/tr[td[contains(text(), "发行商:")]]/td[@class="text"]//span[@class="label"]/a/text()'
    ),
    director_expr='//tbody/tr[td[contains(text(), "导演:")]]/td[@class="text"]/text()',
    genre_list_expr=(
        '//tbody/tr[td[contains(text(), "类别:")]]/td[@class="text"]/span[@class="genre"]/a/text()'
    ),
    cover_expr='//img[@id="video_jacket_img"]/@src',
    sample_image_list_expr='//div[@class="previewthumbs"]/a/@href',
)


class JavLibraryPlugin(Plugin):
    """Searches by id; the site redirects to the detail page on a unique hit."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        host = must_select_domain(HOSTS)
        return httpx.Request("GET", f"{host}/cn/vl_searchbyid.php?keyword={number}")

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_minute_only_duration,
            ),
        )
        if not meta.number:
            return None
        if meta.director == _EMPTY_DIRECTOR:
            meta.director = ""
        meta.title_lang = MetaLang.JA
        return meta