from moviescrape.model import MetaLang
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import SearchContext
from moviescrape.plugins.javhoo import JavhooPlugin

PAGE = """<html><body>
<header class="article-header"><h1 class="article-title">Title H</h1></header>
<div class="project_info">
<p><span class="categories">JH-001</span></p>
<p> <span>發行日期:</span> 2021-03-04</p>
<p> <span>長度:</span> 117分鐘</p>
<p><span>製作商:</span><a>Studio H</a></p>
<p><span>發行商:</span><a>Label H</a></p>
<p><span>導演:</span><a>Director H</a></p>
<p><span>系列:</span><a>Series H</a></p>
</div>
<p><span class="genre"><a href="/star/a">Actor H</a></span></p>
<p><span class="genre"><a href="/genre/g">Genre H</a></span></p>
<p><a class="dt-single-image" href="https://img.example.com/h.jpg">x</a></p>
<div id="sample-box"><div><a href="https://img.example.com/hs1.jpg">s</a></div></div>
</body></html>"""


def test_make_request_url():
    request = JavhooPlugin().on_make_http_request(SearchContext("ABC-123"), "ABC-123")
    assert str(request.url) == "https://www.javhoo.com/av/ABC-123"


def test_decode_page():
    meta = JavhooPlugin().on_decode_http_data(SearchContext("JH-001"), PAGE.encode("utf-8"))
    assert meta.number == "JH-001"
    assert meta.title == "Title H"
    assert meta.release_date == parse_date_only("2021-03-04")
    assert meta.duration == 117 * 60
    assert meta.studio == "Studio H"
    assert meta.label == "Label H"
    assert meta.director == "Director H"
    assert meta.series == "Series H"
    assert meta.actors == ["Actor H"]
    assert meta.genres == ["Genre H"]
    assert meta.cover.name == "https://img.example.com/h.jpg"
    assert [f.name for f in meta.sample_images] == ["https://img.example.com/hs1.jpg"]
    assert meta.title_lang is MetaLang.JA


def test_decode_without_number_is_not_found():
    page = PAGE.replace('<span class="categories">JH-001</span>', "")
    assert JavhooPlugin().on_decode_http_data(SearchContext("JH-001"), page.encode("utf-8")) is None