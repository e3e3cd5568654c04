"""Plugin for the jav321 site, searched with a form POST."""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain

HOSTS = ["https://www.jav321.com"]

_DECODER = XPathHtmlDecoder(
    number_expr='//b[contains(text(),"品番")]/following-sibling::node()',
    title_expr="/html/body/div[2]/div[1]/div[1]/div[1]/h3/text()",
    plot_expr="/html/body/div[2]/div[1]/div[1]/div[2]/div[3]/div/text()",
    actor_list_expr=(
        '//b[contains(text(),"出演者")]/following-sibling::a[starts-with(@href,"/star")]/text()'
    ),
    release_date_expr='//b[contains(text(),"配信開始日")]/following-sibling::node()',
    duration_expr='//b[contains(text(),"収録時間")]/following-sibling::node()',
    studio_expr=(
        '//b[contains(text(),"メーカー")]/following-sibling::a[starts-with(@href,"/company")]/text()'
    ),
    label_expr=(
        '//b[contains(text(),"メーカー")]/following-sibling::a[starts-with(@href,"/company")]/text()'
    ),
    series_expr='//b[contains(text(),"シリーズ")]/following-sibling::node()',
    genre_list_expr=(
        '//b[contains(text(),"ジャンル")]/following-sibling::a[starts-with(@href,"/genre")]/text()'
    ),
    cover_expr="/html/body/div[2]/div[2]/div[1]/p/a/img/@src",
    sample_image_list_expr=(
        '//div[@class="col-md-3"]/div[@class="col-xs-12 col-md-12"]/p/a/img/@src'
    ),
)


def _clean_string(value: str) -> str:
    return value.strip(": \t").strip()


class Jav321Plugin(Plugin):
    """Posts the number to the search form, which redirects to the detail page."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        body = urlencode({"sn": number})
        return httpx.Request(
            "POST",
            f"{must_select_domain(HOSTS)}/search",
            content=body.encode("utf-8"),
            headers={
                "Content-Type": "application/x-www-form-urlencoded",
                "Content-Length": str(len(body)),
            },
        )

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                default_string_processor=_clean_string,
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_duration,
            ),
        )
        meta.title_lang = MetaLang.JA
        meta.plot_lang = MetaLang.JA
        return meta