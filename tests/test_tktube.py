import httpx
import pytest

from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import PluginError, SearchContext
from moviescrape.plugins.tktube import TkTubePlugin

SEARCH_PAGE = """<html><body>
<div id="list_videos_videos_list_search_result_items">
<div><a href="https://tktube.com/videos/1/other/"><strong class="title">OTHER-001 x</strong></a></div>
<div><a href="https://tktube.com/videos/2/abc-123/"><strong class="title">abc-123 title</strong></a></div>
</div>
</body></html>"""

MISMATCH_PAGE = """<html><body>
<div id="list_videos_videos_list_search_result_items">
<div><a href="https://tktube.com/videos/1/other/"><strong class="title">OTHER-001</strong></a></div>
<div><a href="https://tktube.com/videos/2/abc-123/">no name</a></div>
</div>
</body></html>"""

DETAIL_PAGE = """<html><head><meta property="og:image" content="https://tktube.com/cover.jpg"></head>
<body>
<div class="headline"><h1>Tk Title</h1></div>
<div>女優: <a href="/models/a">Model A</a></div>
<div class="item"><span>加入日期: <em>2023-01-01</em></span></div>
<div class="item"><span>時長: <em>01    :01:    01</em></span></div>
<div>標籤: <a href="/tags/t">Tag T</a></div>
</body></html>"""


def _invoker(pages, calls):
    def invoke(ctx, request):
        calls.append(request)
        return httpx.Response(200, content=pages[len(calls) - 1].encode("utf-8"), request=request)

    return invoke


def test_make_request_doubles_dashes():
    request = TkTubePlugin().on_make_http_request(SearchContext("ABC-123"), "ABC-123")
    assert str(request.url) == "https://tktube.com/zh/search/ABC--123/"


def test_handle_follows_matching_link():
    plugin = TkTubePlugin()
    ctx = SearchContext("ABC-123")
    calls = []
    request = plugin.on_make_http_request(ctx, "ABC-123")
    response = plugin.on_handle_http_request(
        ctx, _invoker([SEARCH_PAGE, DETAIL_PAGE], calls), request
    )
    assert len(calls) == 2
    assert str(calls[1].url) == "https://tktube.com/videos/2/abc-123/"
    assert b"Tk Title" in response.read()


def test_handle_without_match_raises():
    plugin = TkTubePlugin()
    ctx = SearchContext("ZZZ-999")
    calls = []
    with pytest.raises(PluginError):
        plugin.on_handle_http_request(
            ctx, _invoker([SEARCH_PAGE], calls), plugin.on_make_http_request(ctx, "ZZZ-999")
        )
    assert len(calls) == 1


def test_handle_count_mismatch_raises():
    plugin = TkTubePlugin()
    ctx = SearchContext("ABC-123")
    with pytest.raises(PluginError):
        plugin.on_handle_http_request(
            ctx, _invoker([MISMATCH_PAGE], []), plugin.on_make_http_request(ctx, "ABC-123")
        )


def test_decode_page():
    meta = TkTubePlugin().on_decode_http_data(SearchContext("ABC-123"), DETAIL_PAGE.encode("utf-8"))
    assert meta.number == "ABC-123"
    assert meta.title == "Tk Title"
    assert meta.actors == ["Model A"]
    assert meta.release_date == parse_date_only("2023-01-01")
    assert meta.duration == 1 * 3600 + 60 + 1
    assert meta.genres == ["Tag T"]
    assert meta.cover.name == "https://tktube.com/cover.jpg"