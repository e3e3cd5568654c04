"""XPath based extraction of movie metadata from HTML pages."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from lxml import etree
from lxml import html as lxml_html

from moviescrape.model import File, MovieMeta

StringParseFunc = Callable[[str], str]
StringListParseFunc = Callable[[list[str]], list[str]]
NumberParseFunc = Callable[[str], int]

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _default_number_parser(value: str) -> int:
    if _INT_RE.fullmatch(value):
        return int(value)
    return 0


@dataclass
class DecoderOptions:
    """Post-processing hooks applied to the raw extracted values."""

    on_number_parse: StringParseFunc = field(default=str)
    on_title_parse: StringParseFunc = field(default=str)
    on_plot_parse: StringParseFunc = field(default=str)
    on_actor_list_parse: StringListParseFunc = field(default=list)
    on_release_date_parse: NumberParseFunc = field(default=_default_number_parser)
    on_duration_parse: NumberParseFunc = field(default=_default_number_parser)
    on_studio_parse: StringParseFunc = field(default=str)
    on_label_parse: StringParseFunc = field(default=str)
    on_series_parse: StringParseFunc = field(default=str)
    on_genre_list_parse: StringListParseFunc = field(default=list)
    on_cover_parse: StringParseFunc = field(default=str)
    on_director_parse: StringParseFunc = field(default=str)
    on_poster_parse: StringParseFunc = field(default=str)
    on_sample_image_list_parse: StringListParseFunc = field(default=list)
    default_string_processor: StringParseFunc = field(default=str)
    default_string_list_processor: StringListParseFunc = field(default=list)


def parse_html(data: Union[bytes, str]) -> Any:
    """Parse an HTML document, always reading bytes as UTF-8."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    parser = lxml_html.HTMLParser(encoding="utf-8")
    try:
        return lxml_html.document_fromstring(data, parser=parser)
    except etree.ParserError:
        return lxml_html.document_fromstring(b"<html></html>", parser=parser)


def _inner_text(item: Any) -> str:
    if isinstance(item, str):
        return str(item)
    return str(item.xpath("string()"))


def _find(node: Any, expr: str) -> list[Any]:
    result = node.xpath(expr)
    if isinstance(result, list):
        return result
    return []


def decode_list(node: Any, expr: str) -> list[str]:
    """Return the trimmed, non-empty text of every node matched by ``expr``."""
    texts = (_inner_text(item).strip() for item in _find(node, expr) if item is not None)
    return [text for text in texts if text]


def decode_single(node: Any, expr: str) -> str:
    """Return the trimmed text of the first node matched by ``expr``, or ''."""
    found = _find(node, expr)
    if not found:
        return ""
    return _inner_text(found[0]).strip()


@dataclass
class XPathHtmlDecoder:
    """One XPath expression per metadata field; an empty expression skips it."""

    number_expr: str = ""
    title_expr: str = ""
    plot_expr: str = ""
    actor_list_expr: str = ""
    release_date_expr: str = ""
    duration_expr: str = ""
    studio_expr: str = ""
    label_expr: str = ""
    director_expr: str = ""
    series_expr: str = ""
    genre_list_expr: str = ""
    cover_expr: str = ""
    poster_expr: str = ""
    sample_image_list_expr: str = ""

    def decode_html(self, data: Union[bytes, str], options: Optional[DecoderOptions] = None) -> MovieMeta:
        """Parse ``data`` as HTML and decode it."""
        return self.decode(parse_html(data), options)

    def decode(self, node: Any, options: Optional[DecoderOptions] = None) -> MovieMeta:
        """Extract a MovieMeta from a parsed HTML tree."""
        opts = options or DecoderOptions()

        def single(expr: str) -> str:
            if not expr or not _find(node, expr):
                return ""
            return opts.default_string_processor(decode_single(node, expr))

        def multi(expr: str) -> list[str]:
            if not expr:
                return []
            return opts.default_string_list_processor(decode_list(node, expr))

        samples = opts.on_sample_image_list_parse(multi(self.sample_image_list_expr))
        return MovieMeta(
            number=opts.on_number_parse(single(self.number_expr)),
            title=opts.on_title_parse(single(self.title_expr)),
            plot=opts.on_plot_parse(single(self.plot_expr)),
            actors=opts.on_actor_list_parse(multi(self.actor_list_expr)),
            release_date=opts.on_release_date_parse(single(self.release_date_expr)),
            duration=opts.on_duration_parse(single(self.duration_expr)),
            studio=opts.on_studio_parse(single(self.studio_expr)),
            label=opts.on_label_parse(single(self.label_expr)),
            series=opts.on_series_parse(single(self.series_expr)),
            genres=opts.on_genre_list_parse(multi(self.genre_list_expr)),
            director=opts.on_director_parse(single(self.director_expr)),
            cover=File(name=opts.on_cover_parse(single(self.cover_expr))),
            poster=File(name=opts.on_poster_parse(single(self.poster_expr))),
            sample_images=[File(name=item) for item in samples],
        )