"""Searches that need a listing page before the detail page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

import httpx

from moviescrape.decoder import decode_list, parse_html
from moviescrape.plugin_api import Invoker, PluginError, SearchContext


@dataclass
class XPathPair:
    """A named XPath and, after the search, what it matched."""

    name: str
    xpath: str
    result: list[str] = field(default_factory=list)


LinkSelector = Callable[[list[XPathPair]], Optional[str]]


@dataclass
class XPathTwoStepContext:
    """How to pick the detail link from a listing page."""

    ps: list[XPathPair]
    link_selector: LinkSelector
    valid_status_codes: list[int] = field(default_factory=lambda: [200])
    check_result_count_match: bool = False
    link_prefix: str = ""


@dataclass
class MultiLinkContext:
    """Candidate numbers to try one URL each for, until one page passes the test."""

    req_builder: Callable[[str], httpx.Request]
    numbers: list[str]
    valid_status_codes: list[int] = field(default_factory=lambda: [200])
    result_tester: Callable[[bytes], bool] = lambda raw: True


def _invoke(ctx: SearchContext, invoker: Invoker, request: httpx.Request) -> httpx.Response:
    try:
        return invoker(ctx, request)
    except PluginError:
        raise
    except Exception as exc:
        raise PluginError(f"step search failed, err:{exc}") from exc


def handle_xpath_two_step_search(
    ctx: SearchContext, invoker: Invoker, request: httpx.Request, xctx: XPathTwoStepContext
) -> httpx.Response:
    """Fetch the listing, select a link with the XPath results and fetch that page."""
    response = _invoke(ctx, invoker, request)
    try:
        if response.status_code not in xctx.valid_status_codes:
            raise PluginError(f"status code:{response.status_code} not in valid list")
        node = parse_html(response.read())
    finally:
        response.close()
    for pair in xctx.ps:
        pair.result = decode_list(node, pair.xpath)
    if xctx.check_result_count_match and xctx.ps:
        first = len(xctx.ps[0].result)
        for idx, pair in enumerate(xctx.ps[1:], start=1):
            if len(pair.result) != first:
                raise PluginError(
                    f"result count not match, idx:{idx}, count:{len(pair.result)} "
                    f"not match to idx:0, count:{first}"
                )
        if first == 0:
            raise PluginError("no result found")
    try:
        link = xctx.link_selector(xctx.ps)
    except Exception as exc:
        raise PluginError(f"select link from result failed, err:{exc}") from exc
    if link is None:
        raise PluginError("no link select result found")
    return _invoke(ctx, invoker, httpx.Request("GET", xctx.link_prefix + link))


def handle_multi_link_search(
    ctx: SearchContext, invoker: Invoker, xctx: MultiLinkContext
) -> httpx.Response:
    """Return the first response whose status is valid and whose body passes the test."""
    for number in xctx.numbers:
        try:
            request = xctx.req_builder(number)
        except Exception as exc:
            raise PluginError(f"build request failed, err:{exc}") from exc
        response = _invoke(ctx, invoker, request)
        if response.status_code not in xctx.valid_status_codes:
            response.close()
            continue
        raw = response.read()
        try:
            passed = xctx.result_tester(raw)
        except Exception as exc:
            raise PluginError(f"test result failed, err:{exc}") from exc
        if passed:
            return response
        response.close()
    raise PluginError("no valid result found")