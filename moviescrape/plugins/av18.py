"""Plugin for the 18av site."""

from __future__ import annotations

from typing import Optional

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MovieMeta
from moviescrape.parsers import parse_date_only, parse_duration
from moviescrape.plugin_api import Invoker, Plugin, SearchContext, must_select_domain
from moviescrape.twostep import XPathPair, XPathTwoStepContext, handle_xpath_two_step_search

HOSTS = ["https://18av.me"]

_LIST_ITEM = '//div[@class="content flex-columns small px-2"]/span[@class="title"]/a'
_TAG_INFO = '//div[@class="d-flex col px-0 tag-info flex-wrap mt-2 pt-2 bd-top bd-primary"]'

_DECODER = XPathHtmlDecoder(
    number_expr='//div[@class="px-0 flex-columns"]/div[@class="number"]/text()',
    title_expr='//div[@class="d-flex px-3 py-2 name col bg-w"]/h1[@class="h4 b"]/text()',
    plot_expr=(
        '//div[@class="intro  bd-light w-100 mt-1"]'
        "/p[contains(text(), '简介：')]/text()"
    ),
    actor_list_expr=f'{_TAG_INFO}/a/span[@itemprop="name"]/text()',
    release_date_expr='//div[@class="date"]/text()',
    series_expr=(
        '//div[@class="bd-top my-1 align-items-center"]'
        '/a[@class="btn btn-ripple border-pill px-3 mr-2 my-1 bg-primary"]'
    ),
    genre_list_expr=f'{_TAG_INFO}/a[contains(@href, "s_type=tag")]/text()',
    cover_expr='//meta[@property="og:image"]/@content',
    sample_image_list_expr='//div[@class="cover"]/a/img/@data-src',
)


def _cover_parser(text: str) -> str:
    return text.replace(" ", "")


def _plot_parser(text: str) -> str:
    return text.lstrip("简介：").strip()


def _origin(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc.decode('ascii')}"


class Av18Plugin(Plugin):
    """Searches the site, then follows the result whose title holds the number."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        host = must_select_domain(HOSTS)
        return httpx.Request("GET", f"{host}/cn/search.php?kw_type=key&kw={number}")

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        number = ctx.number_id.upper()

        def select(pairs: list[XPathPair]) -> Optional[str]:
            for link, title in zip(pairs[0].result, pairs[1].result):
                if number in title.upper():
                    return link
            return None

        return handle_xpath_two_step_search(
            ctx,
            invoker,
            request,
            XPathTwoStepContext(
                ps=[
                    XPathPair(name="read-link", xpath=f"{_LIST_ITEM}/@href"),
                    XPathPair(name="read-title", xpath=f"{_LIST_ITEM}/text()"),
                ],
                link_selector=select,
                valid_status_codes=[200],
                check_result_count_match=True,
                link_prefix=f"{_origin(request)}/cn",
            ),
        )

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_cover_parse=_cover_parser,
                on_plot_parse=_plot_parser,
                on_duration_parse=parse_duration,
                on_release_date_parse=parse_date_only,
            ),
        )
        if not meta.number:
            return None
        return meta