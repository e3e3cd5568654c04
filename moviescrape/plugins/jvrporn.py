"""Plugin for the jvrporn site; numbers look like ``JVR-<id>``."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_hhmmss_duration
from moviescrape.plugin_api import Plugin, PluginError, SearchContext, must_select_domain

HOSTS = ["https://jvrporn.com"]

_NUMBER_PREFIX = "JVR-"

_DECODER = XPathHtmlDecoder(
    title_expr="//h1",
    plot_expr="//pre",
    actor_list_expr='//div[@class="basic-info"]//td/a[@class="actress"]/span/text()',
    duration_expr=(
        '//tr[td[span[contains(text(), "Duration")]]]'
        '/td[span[@class="bold"]]/span/text()'
    ),
    genre_list_expr='//tr[td[span[contains(text(), "Tags")]]]/td/a/span[@class="bold"]/text()',
    cover_expr='//div[@class="video-play-container"]/deo-video/@cover-image',
    sample_image_list_expr='//div[@class="gallery-wrap"]/div[@id="snapshot-gallery"]/a/@href',
)


class JvrpornPlugin(Plugin):
    """Detail pages are addressed by the id after the JVR- prefix."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_precheck_request(self, ctx: SearchContext, number: str) -> bool:
        return number.startswith(_NUMBER_PREFIX)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        parts = number.split("-")
        if len(parts) != 2:
            raise PluginError("invalid number for jvrporn")
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/video/{parts[1]}/")

    def on_decorate_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        existing = request.headers.get("Cookie")
        cookie = "adult=true"
        request.headers["Cookie"] = f"{existing}; {cookie}" if existing else cookie

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_hhmmss_duration,
            ),
        )
        if not meta.title:
            return None
        meta.number = ctx.number_id
        meta.title_lang = MetaLang.EN
        meta.plot_lang = MetaLang.EN
        meta.genres_lang = MetaLang.EN
        meta.actors_lang = MetaLang.EN
        meta.switch_config.disable_release_date_check = True
        return meta