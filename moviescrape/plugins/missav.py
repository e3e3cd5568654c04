"""Plugin for the missav site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MovieMeta
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import Invoker, Plugin, SearchContext, must_select_domain
from moviescrape.twostep import XPathPair, XPathTwoStepContext, handle_xpath_two_step_search

HOSTS = ["https://missav.ws"]

_RESULTS = (
    '//div[@class="my-2 text-sm text-nord4 truncate"]'
    '/a[@class="text-secondary group-hover:text-primary"]'
)

_DECODER = XPathHtmlDecoder(
    number_expr='//div[span[contains(text(), "番号")]]/span[@class="font-medium"]/text()',
    title_expr='//div[@class="mt-4"]/h1[@class="text-base lg:text-lg text-nord6"]/text()',
    actor_list_expr='//div[span[contains(text(), "女优")]]/a/text()',
    release_date_expr='//div[span[contains(text(), "发行日期")]]/time/text()',
    studio_expr='//div[span[contains(text(), "发行商")]]/a/text()',
    director_expr='//div[span[contains(text(), "导演")]]/a/text()',
    genre_list_expr='//div[span[contains(text(), "类型")]]/a/text()',
    cover_expr='//link[@rel="preload" and @as="image"]/@href',
)


class MissavPlugin(Plugin):
    """Searches the site and follows the result whose title holds the number."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/cn/search/{number}")

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        number = ctx.number_id

        def select(pairs: list[XPathPair]) -> Optional[str]:
            for link, title in zip(pairs[0].result, pairs[1].result):
                if number in title:
                    return link
            return None

        return handle_xpath_two_step_search(
            ctx,
            invoker,
            request,
            XPathTwoStepContext(
                ps=[
                    XPathPair(name="read-link", xpath=f"{_RESULTS}/@href"),
                    XPathPair(name="read-title", xpath=f"{_RESULTS}/text()"),
                ],
                link_selector=select,
                valid_status_codes=[200],
                check_result_count_match=True,
                link_prefix="",
            ),
        )

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(data, DecoderOptions(on_release_date_parse=parse_date_only))
        if not meta.number:
            return None
        return meta