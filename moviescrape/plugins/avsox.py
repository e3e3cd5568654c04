"""Plugin for the avsox site."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder, decode_list, parse_html
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import (
    Invoker,
    Plugin,
    PluginError,
    SearchContext,
    must_select_domain,
)

logger = logging.getLogger(__name__)

HOSTS = ["https://avsox.click"]

SEARCH_EXPR = '//*[@id="waterfall"]/div/a/@href'

_DECODER = XPathHtmlDecoder(
    number_expr='//span[contains(text(),"识别码:")]/../span[2]/text()',
    title_expr="/html/body/div[2]/h3/text()",
    actor_list_expr='//a[@class="avatar-box"]/span/text()',
    release_date_expr='//span[contains(text(),"发行时间:")]/../text()',
    duration_expr='//p[span[contains(text(), "长度")]]/text()',
    studio_expr='//p[contains(text(),"制作商: ")]/following-sibling::p[1]/a/text()',
    series_expr='//p[contains(text(),"系列:")]/following-sibling::p[1]/a/text()',
    genre_list_expr='//p[span[@class="genre"]]/span/a[contains(@href, "genre")]',
    cover_expr="/html/body/div[2]/div[1]/div[1]/a/img/@src",
)


class AvsoxPlugin(Plugin):
    """Searches several spellings of the number and follows the single hit."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        # Only the host matters; the real pages are fetched while handling.
        return httpx.Request("GET", must_select_domain(HOSTS))

    def generate_try_list(self, number: str) -> list[str]:
        """The number, then with '-' as '_', then without '_'."""
        tries = [number]
        if "-" in tries[-1]:
            tries.append(tries[-1].replace("-", "_"))
        if "_" in tries[-1]:
            tries.append(tries[-1].replace("_", ""))
        return tries

    def _try_search_by_number(
        self, ctx: SearchContext, origin_request: httpx.Request, invoker: Invoker, number: str
    ) -> str:
        origin = f"{origin_request.url.scheme}://{origin_request.url.netloc.decode('ascii')}"
        response = invoker(ctx, httpx.Request("GET", f"{origin}/cn/search/{number}"))
        try:
            data = response.read()
        finally:
            response.close()
        links = [item for item in decode_list(parse_html(data), SEARCH_EXPR) if "movie" in item]
        if not links:
            raise PluginError("no search item found")
        if len(links) > 1:
            raise PluginError(f"too much search item, cnt:{len(links)}")
        return links[0]

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        tries = self.generate_try_list(ctx.number_id.upper())
        logger.debug("build try list succ (count=%d, list=%s)", len(tries), tries)
        link = ""
        for item in tries:
            try:
                link = self._try_search_by_number(ctx, request, invoker, item)
            except Exception as exc:
                logger.error("try search number failed: %s (number=%s)", exc, item)
                continue
            break
        if not link:
            raise PluginError("unable to find match number")
        return invoker(ctx, httpx.Request("GET", "https:" + link))

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_release_date_parse=parse_date_only,
                on_duration_parse=parse_duration,
                default_string_processor=str.strip,
            ),
        )
        if not meta.number:
            return None
        meta.title_lang = MetaLang.JA
        return meta