"""Plugin for the javbus site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import Plugin, SearchContext, must_select_domain

HOSTS = ["https://www.javbus.com"]

_COOKIES = (("existmag", "mag"), ("age", "verified"), ("dv", "1"))

_INFO = '//div[@class="row movie"]/div[@class="col-md-3 info"]'

_DECODER = XPathHtmlDecoder(
    number_expr=f"{_INFO}/p[span[contains(text(),'識別碼:')]]/span[2]/text()",
    title_expr='//div[@class="container"]/h3',
    actor_list_expr='//div[@class="star-name"]/a/text()',
    release_date_expr=f"{_INFO}/p[span[contains(text(),'發行日期:')]]/text()[1]",
    duration_expr=f"{_INFO}/p[span[contains(text(),'長度:')]]/text()[1]",
    studio_expr=f"{_INFO}/p[span[contains(text(),'製作商:')]]/a/text()",
    label_expr=f"{_INFO}/p[span[contains(text(),'發行商:')]]/a/text()",
    series_expr=f"{_INFO}/p[span[contains(text(),'系列:')]]/a/text()",
    genre_list_expr=f'{_INFO}/p/span[@class="genre"]/label[input[@name="gr_sel"]]/a/text()',
    cover_expr='//div[@class="row movie"]/div[@class="col-md-9 screencap"]/a[@class="bigImage"]/@href',
    sample_image_list_expr='//div[@id="sample-waterfall"]/a[@class="sample-box"]/@href',
)


class JavbusPlugin(Plugin):
    """Detail pages live directly under the number."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/{number}")

    def on_decorate_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        cookies = "; ".join(f"{name}={value}" for name, value in _COOKIES)
        existing = request.headers.get("Cookie")
        request.headers["Cookie"] = f"{existing}; {cookies}" if existing else cookies
        request.headers["Accept"] = (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "image/avif,image/webp,*/*;q=0.8"
        )
        request.headers["Accept-Language"] = "en-US,en;q=0.5"
        # Only advertise encodings the HTTP client can decode.
        request.headers["Accept-Encoding"] = "gzip, deflate"

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_duration,
            ),
        )
        meta.title_lang = MetaLang.JA
        return meta