"""Plugin for the tktube site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MovieMeta
from moviescrape.parsers import parse_date_only, parse_hhmmss_duration
from moviescrape.plugin_api import Invoker, Plugin, SearchContext, must_select_domain
from moviescrape.twostep import XPathPair, XPathTwoStepContext, handle_xpath_two_step_search

HOSTS = ["https://tktube.com"]

_RESULTS = '//div[@id="list_videos_videos_list_search_result_items"]/div/a'

_DECODER = XPathHtmlDecoder(
    title_expr='//div[@class="headline"]/h1/text()',
    actor_list_expr='//div[contains(text(), "女優:")]/a[contains(@href, "models")]/text()',
    release_date_expr='//div[@class="item"]/span[contains(text(), "加入日期:")]/em/text()',
    duration_expr='//div[@class="item"]/span[contains(text(), "時長:")]/em/text()',
    genre_list_expr='//div[contains(text(), "標籤:")]/a[contains(@href, "tags")]/text()',
    cover_expr='//meta[@property="og:image"]/@content',
)


class TkTubePlugin(Plugin):
    """Searches the site and follows the result whose name holds the number."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        nid = number.replace("-", "--")
        return httpx.Request("GET", f"{must_select_domain(HOSTS)}/zh/search/{nid}/")

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        number = ctx.number_id.upper()

        def select(pairs: list[XPathPair]) -> Optional[str]:
            for link, name in zip(pairs[0].result, pairs[1].result):
                if number in name.upper():
                    return link
            return None

        return handle_xpath_two_step_search(
            ctx,
            invoker,
            request,
            XPathTwoStepContext(
                ps=[
                    XPathPair(name="links", xpath=f"{_RESULTS}/@href"),
                    XPathPair(name="names", xpath=f'{_RESULTS}/strong[@class="title"]/text()'),
                ],
                link_selector=select,
                valid_status_codes=[200],
                check_result_count_match=True,
                link_prefix="",
            ),
        )

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_duration_parse=parse_hhmmss_duration,
                on_release_date_parse=parse_date_only,
            ),
        )
        meta.number = ctx.number_id
        return meta