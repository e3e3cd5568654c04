import copy

import httpx
import pytest

from moviescrape import store
from moviescrape.model import File, MovieMeta
from moviescrape.plugin_api import Plugin
from moviescrape.searcher import (
    CategorySearcher,
    DefaultSearcher,
    GroupSearcher,
    SearchError,
    SearchNumber,
    Searcher,
    perform_group_search,
)

PAGE = b"<html>page</html>"
IMAGE = b"\x89PNGimage-bytes"


@pytest.fixture(autouse=True)
def mem_store():
    previous = store.get_storage()
    store.set_storage(store.MemStorage())
    yield
    store.set_storage(previous)


def make_client(log, page_status=200, host_status=200):
    def handler(request):
        log.append(request)
        path = request.url.path
        if path.startswith("/movie/"):
            return httpx.Response(page_status, content=PAGE)
        if path.startswith("/img/"):
            return httpx.Response(200, content=IMAGE)
        if path == "/":
            return httpx.Response(host_status)
        return httpx.Response(404)

    return httpx.Client(transport=httpx.MockTransport(handler))


class FakePlugin(Plugin):
    def __init__(self, meta=None, hosts=(), precheck=True):
        self.meta = meta
        self.hosts = list(hosts)
        self.precheck = precheck
        self.decoded = []
        self.seen_values = []

    def on_get_hosts(self, ctx):
        return self.hosts

    def on_precheck_request(self, ctx, number):
        return self.precheck

    def on_make_http_request(self, ctx, number):
        return httpx.Request("GET", f"https://site.test/movie/{number}")

    def on_handle_http_request(self, ctx, invoker, request):
        ctx.set_value("k", "v")
        return super().on_handle_http_request(ctx, invoker, request)

    def on_decode_http_data(self, ctx, data):
        self.decoded.append(data)
        self.seen_values.append(ctx.get_value("k"))
        return copy.deepcopy(self.meta)


def full_meta(**changes):
    meta = MovieMeta(
        number="raw",
        title="Title",
        release_date=1000,
        cover=File(name="/img/cover.jpg"),
        poster=File(name=""),
        sample_images=[File(name="//site.test/img/s1.jpg"), File(name="https://other.test/x.jpg")],
    )
    for key, value in changes.items():
        setattr(meta, key, value)
    return meta


def test_default_search_fixes_and_stores_images():
    log = []
    plugin = FakePlugin(full_meta())
    searcher = DefaultSearcher("fake", plugin, client=make_client(log))
    result = searcher.search(SearchNumber("ABC-123"))
    assert result.number == "ABC-123"
    assert result.cover.name == "https://site.test/img/cover.jpg"
    assert store.get_data(result.cover.key) == IMAGE
    assert result.poster is None
    assert [s.name for s in result.sample_images] == [
        "https://site.test/img/s1.jpg",
        "https://other.test/x.jpg",
    ]
    assert store.get_data(result.sample_images[0].key) == IMAGE
    assert result.sample_images[1].key == ""
    assert result.ext_info.scrape_info.source == "fake"
    assert result.ext_info.scrape_info.date_ts > 0
    assert plugin.decoded == [PAGE]
    page_request = log[0]
    assert page_request.headers["Referer"] == "https://site.test/"


def test_number_replace_can_be_disabled():
    meta = full_meta()
    meta.switch_config.disable_number_replace = True
    searcher = DefaultSearcher("fake", FakePlugin(meta), client=make_client([]))
    assert searcher.search(SearchNumber("ABC-123")).number == "raw"


def test_missing_title_is_not_found():
    searcher = DefaultSearcher("fake", FakePlugin(full_meta(title="")), client=make_client([]))
    assert searcher.search(SearchNumber("ABC-123")) is None


def test_unfetchable_cover_is_not_found():
    meta = full_meta(cover=File(name="https://other.test/missing.jpg"))
    searcher = DefaultSearcher("fake", FakePlugin(meta), client=make_client([]))
    assert searcher.search(SearchNumber("ABC-123")) is None


def test_release_date_check_can_be_disabled():
    meta = full_meta(release_date=0)
    assert DefaultSearcher("fake", FakePlugin(meta), client=make_client([])).search(
        SearchNumber("A-1")
    ) is None
    meta.switch_config.disable_release_date_check = True
    result = DefaultSearcher("fake", FakePlugin(meta), client=make_client([])).search(
        SearchNumber("A-1")
    )
    assert result.number == "A-1"


def test_precheck_false_skips_requests():
    log = []
    searcher = DefaultSearcher("fake", FakePlugin(full_meta(), precheck=False), client=make_client(log))
    assert searcher.search(SearchNumber("ABC-123")) is None
    assert log == []


def test_not_found_page_raises():
    searcher = DefaultSearcher("fake", FakePlugin(full_meta()), client=make_client([], page_status=404))
    with pytest.raises(SearchError, match="no data found"):
        searcher.search(SearchNumber("ABC-123"))


def test_bad_status_raises():
    searcher = DefaultSearcher("fake", FakePlugin(full_meta()), client=make_client([], page_status=500))
    with pytest.raises(SearchError, match="500"):
        searcher.search(SearchNumber("ABC-123"))


def test_search_cache_reuses_page_and_context():
    log = []
    plugin = FakePlugin(full_meta())
    client = make_client(log)
    first = DefaultSearcher("fake", plugin, client=client, search_cache=True)
    second = DefaultSearcher("fake", plugin, client=client, search_cache=True)
    first.search(SearchNumber("ABC-123"))
    result = second.search(SearchNumber("ABC-123"))
    assert result.number == "ABC-123"
    page_requests = [r for r in log if r.url.path.startswith("/movie/")]
    assert len(page_requests) == 1
    assert plugin.decoded == [PAGE, PAGE]
    assert plugin.seen_values == ["v", "v"]


def test_check_passes_and_fails():
    ok = DefaultSearcher("fake", FakePlugin(hosts=["https://site.test/"]), client=make_client([]))
    assert ok.check() is None
    bad = DefaultSearcher(
        "fake", FakePlugin(hosts=["https://site.test/"]), client=make_client([], host_status=503)
    )
    with pytest.raises(SearchError, match="503"):
        bad.check()


def test_check_without_hosts_sends_nothing():
    log = []
    DefaultSearcher("fake", FakePlugin(), client=make_client(log)).check()
    assert log == []


class StaticSearcher(Searcher):
    def __init__(self, label, result=None, error=None):
        self.label = label
        self.result = result
        self.error = error
        self.calls = 0

    def name(self):
        return self.label

    def search(self, number):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.result)

    def check(self):
        return None


def complete(number="A-1"):
    return MovieMeta(number=number, title="T", plot="P", actors=["x"])


def test_group_returns_first_complete_result():
    first = StaticSearcher("a", complete("A-1"))
    second = StaticSearcher("b", complete("B-2"))
    result = GroupSearcher([first, second]).search(SearchNumber("A-1"))
    assert result.number == "A-1"
    assert second.calls == 0


def test_group_merges_partial_results():
    first = StaticSearcher("a", MovieMeta(number="A-1", title="T"))
    second = StaticSearcher("b", MovieMeta(number="other", plot="P", studio="S"))
    result = perform_group_search(SearchNumber("A-1"), [first, second])
    assert result.number == "A-1"
    assert result.title == "T"
    assert result.plot == "P"
    assert result.studio == "S"


def test_group_skips_failures():
    first = StaticSearcher("a", error=RuntimeError("first"))
    second = StaticSearcher("b", complete("B-2"))
    assert perform_group_search(SearchNumber("B-2"), [first, second]).number == "B-2"


def test_group_raises_last_error():
    first = StaticSearcher("a", error=RuntimeError("first"))
    second = StaticSearcher("b", error=RuntimeError("second"))
    with pytest.raises(RuntimeError, match="second"):
        perform_group_search(SearchNumber("A-1"), [first, second])


def test_group_nothing_found():
    assert perform_group_search(SearchNumber("A-1"), [StaticSearcher("a"), StaticSearcher("b")]) is None


def test_group_and_category_check_raise():
    with pytest.raises(SearchError):
        GroupSearcher([]).check()
    with pytest.raises(SearchError):
        CategorySearcher([], {}).check()


def test_category_selects_chain():
    default = StaticSearcher("d", complete("D-1"))
    special = StaticSearcher("s", complete("S-1"))
    searcher = CategorySearcher([default], {"fc2": [special]})
    assert searcher.name() == "category"
    assert searcher.search(SearchNumber("X", category="fc2")).number == "S-1"
    assert searcher.search(SearchNumber("X", category="unknown")).number == "D-1"
    assert searcher.search(SearchNumber("X")).number == "D-1"
    assert special.calls == 1
    assert default.calls == 2