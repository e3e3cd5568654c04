import httpx
import pytest

from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import PluginError, SearchContext
from moviescrape.plugins.madouqu import MadouquPlugin

DETAIL = """
<html><head>
<meta property="og:image" content="https://madouqu.com/cover.jpg">
<meta property="article:published_time" content="2025-05-03T13:37:39+00:00">
</head><body>
<p>愛豆番號：idg-5621</p>
<p>愛豆片名：大同事变</p>
<p>麻豆女郎：丽丽、小美<a title="model" href="#"></a></p>
<span class="meta-category"><a rel="category" href="#">剧情</a></span>
</body></html>
""".encode("utf-8")


def test_precheck_requires_prefix():
    plugin = MadouquPlugin()
    ctx = SearchContext("MADOU-ABC-1")
    assert plugin.on_precheck_request(ctx, "MADOU-ABC-1") is True
    assert plugin.on_precheck_request(ctx, "ABC-1") is False


def test_make_request_targets_host():
    plugin = MadouquPlugin()
    request = plugin.on_make_http_request(SearchContext("MADOU-A"), "MADOU-A")
    assert str(request.url) in [h.rstrip("/") + "/" for h in plugin.on_get_hosts(SearchContext())]
    assert request.url.host == "madouqu.com"


def test_handle_tries_candidates_until_match():
    plugin = MadouquPlugin()
    ctx = SearchContext("MADOU-ABC-123")
    seen = []

    def invoker(context, request):
        seen.append(request.url.path)
        if request.url.path == "/video/abc123/":
            return httpx.Response(200, content=DETAIL, request=request)
        return httpx.Response(404, request=request)

    base = plugin.on_make_http_request(ctx, ctx.number_id)
    response = plugin.on_handle_http_request(ctx, invoker, base)
    assert response.read() == DETAIL
    assert seen == ["/video/abc-123/", "/video/abc123/"]


def test_handle_without_match_raises():
    plugin = MadouquPlugin()
    ctx = SearchContext("MADOU-ABC_1")

    def invoker(context, request):
        return httpx.Response(200, content=b"<html>nothing</html>", request=request)

    base = plugin.on_make_http_request(ctx, ctx.number_id)
    with pytest.raises(PluginError):
        plugin.on_handle_http_request(ctx, invoker, base)


def test_decode_detail_page():
    plugin = MadouquPlugin()
    meta = plugin.on_decode_http_data(SearchContext("MADOU-IDG-5621"), DETAIL)
    assert meta.number == "IDG-5621"
    assert meta.title == "大同事变"
    assert meta.actors == ["丽丽", "小美"]
    assert meta.genres == ["剧情"]
    assert meta.cover.name == "https://madouqu.com/cover.jpg"
    assert meta.release_date == parse_date_only("2025-05-03")
    assert meta.release_date > 0


def test_decode_falls_back_to_context_number():
    plugin = MadouquPlugin()
    meta = plugin.on_decode_http_data(SearchContext("MADOU-XYZ-9"), b"<html><body><p>x</p></body></html>")
    assert meta.number == "MADOU-XYZ-9"
    assert meta.title == ""
    assert meta.release_date == 0