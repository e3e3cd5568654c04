# moviescrape

`moviescrape` is a library for looking up metadata about a movie by its
number: title, plot, actors, release date, duration, studio, label, series,
genres, cover, poster and sample images. Site plugins fetch and decode pages,
searchers run the plugins and combine their results, and fetched pages and
images are kept in a key/value store.

## Modules

- `moviescrape.store` – a module-wide key/value store of bytes. A `MemStorage`
  is installed at import; `set_storage(impl)` installs another and returns the
  previous one, `get_storage()` returns the current one. `SqliteStorage(path)`
  keeps data in a SQLite file (creating its directory), removes expired rows
  when opened, and can be closed with `close()` or used as a context manager.
  An expiry of 0 means the default of 90 days. The module functions
  `put_data`, `put_data_with_expire`, `get_data`, `is_data_exist`,
  `load_data`, `anonymous_put_data` (stores under the SHA-1 hex digest of the
  value) and `anonymous_data_rewrite` work on the installed store. A missing or
  expired key raises `DataNotFoundError`.
- `moviescrape.searcher` – `SearchNumber(number_id, category="")` is what is
  searched for. `DefaultSearcher(name, plugin, client=None, search_cache=False)`
  drives one plugin through a search with an `httpx.Client` (by default one
  that follows redirects). It fills in relative image URLs, downloads the cover,
  poster and sample images into the store under the SHA-1 of their URL, and
  returns `None` when the result has no cover, number, title or (unless the
  plugin disables the check) release date. With `search_cache=True` the
  fetched page is cached in the store for 30 days. `check()` requests each of
  the plugin's hosts and raises `SearchError` unless they answer 200.
  `GroupSearcher(searchers)` and `perform_group_search(number, searchers)` try
  searchers in order: the first result that has a number, title, plot and
  actors is returned; otherwise later results fill the gaps of the first, and
  the merged record is returned if it has a number and title. When nothing is
  found the last error is raised, or `None` returned.
  `CategorySearcher(default, categories)` uses the chain configured for the
  number's category, or the default chain.
- `moviescrape.model` – `MovieMeta` and its parts (`File`, `SwitchConfig`,
  `ScrapeInfo`, `ExtInfo`) and the `MetaLang` enum. `MovieMeta.merge_missing`
  fills empty fields from another record.
- `moviescrape.plugin_api` – the `Plugin` base class with default hooks, the
  per-search `SearchContext` (number id plus a string store), `PluginError`,
  `select_domain` / `must_select_domain`, and `SS_*` site-name constants.
- `moviescrape.plugin_factory` – a registry of plugin creators: `register`,
  `create_plugin`, `plugin_to_creator` and `plugins` (sorted names).
- `moviescrape.plugins` – bundled site plugins (`airav`, `av18`, `avsox`,
  `caribpr`, `cospuri`, `freejavbt`, `jav321`, `javbus`, `javhoo`,
  `javlibrary`, `jvrporn`, `madouqu`, `missav`, `tktube`).
  `moviescrape.plugins.registry.register_builtin_plugins()` registers all of
  them with the factory.
- `moviescrape.decoder` – `XPathHtmlDecoder`, one XPath expression per field,
  with per-field hooks in `DecoderOptions`; also `parse_html`, `decode_list`
  and `decode_single`.
- `moviescrape.twostep` – `handle_xpath_two_step_search` (read a listing page,
  pick the detail link) and `handle_multi_link_search` (try one URL per
  candidate number until a page passes a test).
- `moviescrape.parsers` – date and duration parsers (`parse_date_only`,
  `parse_duration`, `parse_hhmmss_duration`, `parse_mm_duration`,
  `parse_minute_only_duration`, `to_duration`); the `parse_*` functions return
  0 on bad input.
- `moviescrape.translator` – the `Translator` interface, `TranslatorGroup`
  (returns the first non-empty result, raising `TranslateError` when every
  translator fails), and a module-wide translator set with `set_translator`.
- `moviescrape.textutils`, `moviescrape.fileutils` – name, string, time and
  file helpers (including a `move` that copies across devices).

## Examples

Storing data:

```python
from moviescrape import store

with store.SqliteStorage("/tmp/moviescrape/cache.db") as db:
    store.set_storage(db)
    store.put_data("greeting", b"helloworld")
    assert store.get_data("greeting") == b"helloworld"
    assert store.is_data_exist("greeting")
```

Searching:

```python
from moviescrape.plugins.javbus import JavbusPlugin
from moviescrape.plugins.javhoo import JavhooPlugin
from moviescrape.searcher import DefaultSearcher, GroupSearcher, SearchNumber

group = GroupSearcher([
    DefaultSearcher("javbus", JavbusPlugin()),
    DefaultSearcher("javhoo", JavhooPlugin()),
])
meta = group.search(SearchNumber("STZY-015"))
if meta is not None:
    print(meta.title, meta.release_date, meta.duration)
```

Plugins through the factory:

```python
from moviescrape import plugin_factory
from moviescrape.plugins.registry import register_builtin_plugins

register_builtin_plugins()
for name in plugin_factory.plugins():
    plugin = plugin_factory.create_plugin(name, None)
```

Parsing and naming:

```python
from moviescrape.parsers import parse_hhmmss_duration, to_duration
from moviescrape.textutils import build_authors_name

to_duration("47分钟")                    # 2820 seconds
parse_hhmmss_duration("01:01:01")        # 3661 seconds
build_authors_name(["hello", "world"])   # "hello,world"
```

## What it does not do

- There is no command-line program; everything is used as a library.
- Movie numbers are not parsed from file names: `SearchNumber` takes the
  number id and category as given.
- No concrete translator is included; supply your own `Translator`.
- No NFO or other metadata files are written.
- Some `SS_*` constants in `plugin_api` (for example `SS_FC2`, `SS_JAVDB`,
  `SS_NJAV`, `SS_FC2PPVDB`) name sites for which no plugin is bundled.

## Tests

The tests use pytest, installed with the `test` extra.