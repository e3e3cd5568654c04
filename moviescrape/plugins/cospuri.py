"""Plugin for the cospuri site, which knows two number formats."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import parse_qs, urlsplit

import httpx

from moviescrape.decoder import DecoderOptions, XPathHtmlDecoder
from moviescrape.model import MetaLang, MovieMeta
from moviescrape.parsers import parse_mm_duration
from moviescrape.plugin_api import (
    Invoker,
    Plugin,
    PluginError,
    SearchContext,
    must_select_domain,
)
from moviescrape.twostep import XPathPair, XPathTwoStepContext, handle_xpath_two_step_search

logger = logging.getLogger(__name__)

HOSTS = ["https://www.cospuri.com"]

REAL_NUMBER_ID_KEY = "key_cospuri_real_number_id"

_V1_ID_RE = re.compile(r"[0-9]{4}([a-zA-Z0-9]{0,4})?")
_V2_ID_RE = re.compile(r"[0-9]{4}[a-zA-Z0-9]{4}")
_COVER_RE = re.compile(r"url\((.*)\s*\)", re.IGNORECASE)

_DECODER = XPathHtmlDecoder(
    title_expr='//div[@class="sample-details"]//div[@class="description"]/text()',
    plot_expr='//div[@class="sample-details"]//div[@class="description"]/text()',
    actor_list_expr='//div[@class="sample-details"]//div[@class="sample-model"]/a/text()',
    duration_expr=(
        '//div[@class="sample-details"]//div[@class="detail-box"]'
        '/div[@class="length"]/strong/text()'
    ),
    genre_list_expr='//div[@class="sample-details"]//a[@class="tag"]/text()',
    cover_expr=(
        '//div[@class="main wide"]/div'
        '/div[@class="player fp-slim fp-edgy fp-mute"]/@style'
    ),
    sample_image_list_expr='//div[@class="sample-left"]/div[@class="thumb"]/a/@href',
)


def _origin(request: httpx.Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc.decode('ascii')}"


class CospuriPlugin(Plugin):
    """Numbers look like ``COSPURI-Model-Name-0548cpar`` (v1) or ``COSPURI-0548cpar`` (v2)."""

    def on_get_hosts(self, ctx: SearchContext) -> list[str]:
        return list(HOSTS)

    def on_precheck_request(self, ctx: SearchContext, number: str) -> bool:
        return True

    def normalize_model(self, text: str) -> str:
        """Capitalise every dash-separated part of a model name."""
        parts = (part.lower() for part in text.split("-"))
        return "-".join(part[:1].upper() + part[1:] for part in parts)

    def extract_model_and_id(self, number: str) -> tuple[str, str]:
        """Split a number into (model, id); the model is empty for the v2 format."""
        _, sep, rest = number.partition("-")
        if not sep:
            raise PluginError("invalid number format")
        model, sep, ident = rest.rpartition("-")
        if not sep:
            if not _V2_ID_RE.fullmatch(rest):
                raise PluginError(f"invalid v2 format:{rest}")
            return "", rest
        if not _V1_ID_RE.fullmatch(ident):
            raise PluginError(f"invalid v1 format:{ident}")
        return self.normalize_model(model), ident

    def on_make_http_request(self, ctx: SearchContext, number: str) -> httpx.Request:
        # Only the host matters; the real pages are fetched while handling.
        return httpx.Request("GET", must_select_domain(HOSTS))

    def _handle_v1(
        self, ctx: SearchContext, invoker: Invoker, origin_request: httpx.Request,
        model: str, ident: str,
    ) -> tuple[httpx.Response, str]:
        ident = ident.lower()
        origin = _origin(origin_request)
        request = httpx.Request("GET", f"{origin}/model/{model}")
        found: dict[str, str] = {}

        def select(pairs: list[XPathPair]) -> Optional[str]:
            if not pairs:
                raise PluginError("no id list found")
            for item in pairs[0].result:
                parts = urlsplit(item)
                if not (item.startswith("/") or parts.scheme):
                    logger.warning(
                        "unable to parse request uri, remote page may have changed (item=%s)",
                        item,
                    )
                    continue
                sample_id = (parse_qs(parts.query).get("id") or [""])[0].lower()
                if sample_id and sample_id.startswith(ident):
                    found["id"] = sample_id
                    return item
            return None

        response = handle_xpath_two_step_search(
            ctx,
            invoker,
            request,
            XPathTwoStepContext(
                ps=[XPathPair(name="fetch_id_list",
                              xpath='//div[@class="scene-thumb aspect-16_9"]/a/@href')],
                link_selector=select,
                valid_status_codes=[200],
                check_result_count_match=False,
                link_prefix=origin,
            ),
        )
        return response, found.get("id", "")

    def _handle_v2(
        self, ctx: SearchContext, invoker: Invoker, origin_request: httpx.Request, ident: str
    ) -> tuple[httpx.Response, str]:
        request = httpx.Request("GET", f"{_origin(origin_request)}/sample?id={ident.lower()}")
        return invoker(ctx, request), ident

    def on_handle_http_request(
        self, ctx: SearchContext, invoker: Invoker, request: httpx.Request
    ) -> httpx.Response:
        model, ident = self.extract_model_and_id(ctx.number_id)
        is_v2 = not model
        logger.debug("decode model and id succ (v2=%s, model=%s, id=%s)", is_v2, model, ident)
        if is_v2:
            response, real_id = self._handle_v2(ctx, invoker, request, ident)
        else:
            response, real_id = self._handle_v1(ctx, invoker, request, model, ident)
        ctx.set_value(REAL_NUMBER_ID_KEY, real_id)
        return response

    def extract_cover_url(self, text: str) -> str:
        """Pull the URL out of a ``background:url(...)`` style value."""
        match = _COVER_RE.search(text.replace(" ", ""))
        return match.group(1) if match else ""

    def on_decode_http_data(self, ctx: SearchContext, data: bytes) -> Optional[MovieMeta]:
        meta = _DECODER.decode_html(
            data,
            DecoderOptions(
                on_duration_parse=parse_mm_duration,
                on_cover_parse=self.extract_cover_url,
            ),
        )
        real_id = ctx.get_value(REAL_NUMBER_ID_KEY)
        if real_id is None:
            raise PluginError("cospuri real id not found")
        meta.number = f"cospuri-{real_id}".upper()
        meta.switch_config.disable_number_replace = True
        meta.switch_config.disable_release_date_check = True
        meta.title_lang = MetaLang.EN
        meta.plot_lang = MetaLang.EN
        meta.genres_lang = MetaLang.EN
        return meta