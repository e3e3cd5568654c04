"""Searchers that run site plugins, store their images and combine results."""

from __future__ import annotations

import abc
import copy
import hashlib
import json
import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional, Sequence

import httpx

from moviescrape import store
from moviescrape.model import MovieMeta
from moviescrape.plugin_api import Plugin, SearchContext

logger = logging.getLogger(__name__)

PAGE_SEARCH_CACHE_EXPIRE = timedelta(days=30)


class SearchError(Exception):
    """Raised when a search fails for a reason other than 'not found'."""


@dataclass
class SearchNumber:
    """The movie number being searched and its optional category."""

    number_id: str
    category: str = ""


class Searcher(abc.ABC):
    """Something that looks up movie metadata by number."""

    @abc.abstractmethod
    def name(self) -> str:
        """Short name of the searcher."""

    @abc.abstractmethod
    def search(self, number: SearchNumber) -> Optional[MovieMeta]:
        """Return the metadata found for ``number``, or None."""

    @abc.abstractmethod
    def check(self) -> None:
        """Raise SearchError when the searcher cannot reach its sites."""


def _origin(url: httpx.URL) -> str:
    return f"{url.scheme}://{url.netloc.decode('ascii')}"


def _fix_url(request: httpx.Request, value: str, prefix: str) -> str:
    if value.startswith("//"):
        return f"{request.url.scheme}:{value}"
    if value.startswith("/"):
        return prefix + value
    return value


class DefaultSearcher(Searcher):
    """Runs one plugin through the full request, decode and store cycle."""

    def __init__(
        self,
        name: str,
        plugin: Plugin,
        client: Optional[httpx.Client] = None,
        search_cache: bool = False,
    ) -> None:
        self._name = name
        self._plugin = plugin
        self._client = client if client is not None else httpx.Client(follow_redirects=True)
        self._search_cache = search_cache

    def name(self) -> str:
        return self._name

    def check(self) -> None:
        ctx = SearchContext()
        for host in self._plugin.on_get_hosts(ctx):
            try:
                self._check_one_request(ctx, host)
            except Exception as exc:
                raise SearchError(f"check one request failed, host:{host}, err:{exc}") from exc

    def _check_one_request(self, ctx: SearchContext, host: str) -> None:
        request = httpx.Request("GET", host)
        self._decorate_request(ctx, request)
        response = self._client.send(request)
        try:
            if response.status_code != httpx.codes.OK:
                raise SearchError(
                    f"do check request status failed, status code:{response.status_code}, "
                    f"status:{response.reason_phrase}"
                )
        finally:
            response.close()

    @staticmethod
    def _set_default_http_options(request: httpx.Request) -> None:
        if not request.headers.get("Referer"):
            request.headers["Referer"] = _origin(request.url) + "/"

    def _decorate_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        self._plugin.on_decorate_request(ctx, request)
        self._set_default_http_options(request)

    def _decorate_image_request(self, ctx: SearchContext, request: httpx.Request) -> None:
        self._plugin.on_decorate_media_request(ctx, request)
        self._set_default_http_options(request)

    def _invoke(self, ctx: SearchContext, request: httpx.Request) -> httpx.Response:
        try:
            self._decorate_request(ctx, request)
        except Exception as exc:
            raise SearchError(f"decorate request failed, err:{exc}") from exc
        return self._client.send(request)

    def _load_page(self, ctx: SearchContext, request: httpx.Request) -> bytes:
        try:
            response = self._plugin.on_handle_http_request(ctx, self._invoke, request)
        except Exception as exc:
            raise SearchError(f"do request failed, err:{exc}") from exc
        try:
            try:
                found = self._plugin.on_precheck_response(ctx, request, response)
            except Exception as exc:
                raise SearchError(f"precheck response failed, err:{exc}") from exc
            if not found:
                raise SearchError("no data found")
            if response.status_code != httpx.codes.OK:
                raise SearchError(f"invalid http status code:{response.status_code}")
            try:
                return response.read()
            except httpx.HTTPError as exc:
                raise SearchError(f"read body failed, err:{exc}") from exc
        finally:
            response.close()

    def _retrieve_data(
        self, ctx: SearchContext, request: httpx.Request, number: SearchNumber
    ) -> bytes:
        if not self._search_cache:
            return self._load_page(ctx, request)
        key = f"{self._name}:{number.number_id}:v1"

        def loader() -> bytes:
            page = self._load_page(ctx, request)
            cached = {
                "kv_data": ctx.export_data(),
                "search_data": page.decode("utf-8", "replace"),
            }
            return json.dumps(cached, ensure_ascii=False).encode("utf-8")

        try:
            raw = store.load_data(key, PAGE_SEARCH_CACHE_EXPIRE, loader)
        except Exception as exc:
            raise SearchError(f"load data from cache failed, err:{exc}") from exc
        try:
            cached = json.loads(raw)
        except ValueError as exc:
            raise SearchError(f"decode search cache data failed, err:{exc}") from exc
        ctx.import_data(cached.get("kv_data") or {})
        return str(cached.get("search_data", "")).encode("utf-8")

    def search(self, number: SearchNumber) -> Optional[MovieMeta]:
        ctx = SearchContext(number.number_id)
        try:
            ok = self._plugin.on_precheck_request(ctx, number.number_id)
        except Exception as exc:
            raise SearchError(f"precheck failed, err:{exc}") from exc
        if not ok:
            return None
        try:
            request = self._plugin.on_make_http_request(ctx, number.number_id)
        except Exception as exc:
            raise SearchError(f"make http request failed, err:{exc}") from exc
        data = self._retrieve_data(ctx, request, number)
        try:
            meta = self._plugin.on_decode_http_data(ctx, data)
        except Exception as exc:
            raise SearchError(f"decode http data failed, err:{exc}") from exc
        if meta is None:
            return None
        self._fix_meta(ctx, request, meta)
        self._store_image_data(ctx, meta)
        problem = self._verify_meta(meta)
        if problem:
            logger.error(
                "verify meta not pass, treat as not found: %s (plugin=%s)", problem, self._name
            )
            return None
        meta.ext_info.scrape_info.source = self._name
        meta.ext_info.scrape_info.date_ts = int(time.time() * 1000)
        return meta

    @staticmethod
    def _verify_meta(meta: MovieMeta) -> str:
        if meta.cover is None or not meta.cover.name:
            return "no cover"
        if not meta.number:
            return "no number"
        if not meta.title:
            return "no title"
        if not meta.switch_config.disable_release_date_check and meta.release_date == 0:
            return "no release_date"
        return ""

    @staticmethod
    def _fix_meta(ctx: SearchContext, request: httpx.Request, meta: MovieMeta) -> None:
        if not meta.switch_config.disable_number_replace:
            meta.number = ctx.number_id
        prefix = _origin(request.url)
        if meta.cover is not None:
            meta.cover.name = _fix_url(request, meta.cover.name, prefix)
        if meta.poster is not None:
            meta.poster.name = _fix_url(request, meta.poster.name, prefix)
        for image in meta.sample_images:
            image.name = _fix_url(request, image.name, prefix)

    def _store_image_data(self, ctx: SearchContext, meta: MovieMeta) -> None:
        urls = []
        if meta.cover is not None:
            urls.append(meta.cover.name)
        if meta.poster is not None:
            urls.append(meta.poster.name)
        urls.extend(image.name for image in meta.sample_images)
        keys = self._save_remote_url_data(ctx, urls)
        if meta.cover is not None:
            meta.cover.key = keys.get(meta.cover.name, "")
            if not meta.cover.key:
                meta.cover = None
        if meta.poster is not None:
            meta.poster.key = keys.get(meta.poster.name, "")
            if not meta.poster.key:
                meta.poster = None
        for image in meta.sample_images:
            image.key = keys.get(image.name, "")

    def _save_remote_url_data(self, ctx: SearchContext, urls: Sequence[str]) -> dict[str, str]:
        keys: dict[str, str] = {}
        for url in urls:
            if not url:
                continue
            key = hashlib.sha1(url.encode("utf-8")).hexdigest()
            try:
                exists = store.is_data_exist(key)
            except Exception:
                exists = False
            if exists:
                keys[url] = key
                continue
            try:
                data = self._fetch_image_data(ctx, url)
            except Exception as exc:
                logger.error("fetch image data failed: %s (url=%s)", exc, url)
                continue
            try:
                store.put_data(key, data)
            except Exception as exc:
                logger.error("put image data to store failed: %s (url=%s)", exc, url)
            keys[url] = key
        return keys

    def _fetch_image_data(self, ctx: SearchContext, url: str) -> bytes:
        request = httpx.Request("GET", url)
        try:
            self._decorate_image_request(ctx, request)
        except Exception as exc:
            raise SearchError(f"decorate request failed, err:{exc}") from exc
        try:
            response = self._client.send(request)
        except httpx.HTTPError as exc:
            raise SearchError(f"get url data failed, err:{exc}") from exc
        try:
            if response.status_code != httpx.codes.OK:
                raise SearchError(
                    f"get url data http code not ok, code:{response.status_code}"
                )
            return response.read()
        finally:
            response.close()


def perform_group_search(
    number: SearchNumber, searchers: Sequence[Searcher]
) -> Optional[MovieMeta]:
    """Query searchers in order, filling gaps of the first result from later ones."""
    last_error: Optional[Exception] = None
    final = MovieMeta()
    for idx, searcher in enumerate(searchers):
        logger.debug("search number with plugin %s", searcher.name())
        try:
            meta = searcher.search(number)
        except Exception as exc:
            last_error = exc
            continue
        if meta is None:
            continue
        if idx == 0:
            final = copy.deepcopy(meta)
        else:
            final.merge_missing(meta)
        if not (final.number and final.title and final.plot and final.actors):
            continue
        return meta
    if final.number and final.title:
        return final
    if last_error is not None:
        raise last_error
    return None


class GroupSearcher(Searcher):
    """Searches a fixed chain of searchers."""

    def __init__(self, searchers: Sequence[Searcher]) -> None:
        self._searchers = list(searchers)

    def name(self) -> str:
        return "group"

    def search(self, number: SearchNumber) -> Optional[MovieMeta]:
        return perform_group_search(number, self._searchers)

    def check(self) -> None:
        raise SearchError("unable to perform check on group searcher")


class CategorySearcher(Searcher):
    """Picks the chain configured for the number's category, else the default chain."""

    def __init__(
        self, default: Sequence[Searcher], categories: Mapping[str, Sequence[Searcher]]
    ) -> None:
        self._default = list(default)
        self._categories = {cat: list(chain) for cat, chain in categories.items()}

    def name(self) -> str:
        return "category"

    def search(self, number: SearchNumber) -> Optional[MovieMeta]:
        chain = self._default
        category = number.category
        if category:
            if category in self._categories:
                chain = self._categories[category]
                logger.debug("use cat chain for search (cat=%s)", category)
            else:
                logger.error(
                    "no cat chain found, use default plugin chain for search (cat=%s)", category
                )
        return perform_group_search(number, chain)

    def check(self) -> None:
        raise SearchError("unable to perform check on category searcher")