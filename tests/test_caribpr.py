from moviescrape.model import MetaLang
from moviescrape.parsers import parse_date_only
from moviescrape.plugin_api import SearchContext
from moviescrape.plugins.caribpr import COVER_URL_FORMAT, HOSTS, CaribprPlugin
from moviescrape.textutils import time_str_to_second

NUMBER = "010124_001"


def page(duration="01:02:03"):
    return f"""
<html><head><meta name="description" content="あらすじ"></head><body>
<div class='movie-info'><div class='section is-wide'><div class='heading'><h1>テスト作品</h1></div></div>
<ul>
<li><span>出演</span><span class="spec-content"><a class="spec-item">花子</a></span></li>
<li><span>販売日</span><span class="spec-content">2024-01-02</span></li>
<li><span>再生時間</span><span class="spec-content">{duration}</span></li>
<li><span>タグ</span><span class="spec-content"><a>ドラマ</a></span></li>
</ul>
</div>
</body></html>
""".encode("euc_jp")


def test_make_request_url():
    request = CaribprPlugin().on_make_http_request(SearchContext(NUMBER), NUMBER)
    assert str(request.url) == f"{HOSTS[0]}/moviepages/{NUMBER}/index.html"


def test_decode_euc_jp_page():
    meta = CaribprPlugin().on_decode_http_data(SearchContext(NUMBER), page())
    assert meta is not None
    assert meta.title == "テスト作品"
    assert meta.plot == "あらすじ"
    assert meta.actors == ["花子"]
    assert meta.genres == ["ドラマ"]
    assert meta.duration == time_str_to_second("01:02:03")
    assert meta.release_date == parse_date_only("2024-01-02")
    assert meta.title_lang is MetaLang.JA
    assert meta.plot_lang is MetaLang.JA


def test_number_and_cover_come_from_context():
    meta = CaribprPlugin().on_decode_http_data(SearchContext(NUMBER), page())
    assert meta.number == NUMBER
    assert meta.cover.name == COVER_URL_FORMAT.format(NUMBER)
    assert meta.cover.name.startswith(HOSTS[0])
    assert NUMBER in meta.cover.name


def test_bad_duration_counts_as_zero():
    meta = CaribprPlugin().on_decode_http_data(SearchContext(NUMBER), page("62:03"))
    assert meta.duration == 0