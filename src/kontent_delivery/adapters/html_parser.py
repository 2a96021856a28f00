"""BeautifulSoup implementation of `RichTextHtmlParser`.

BeautifulSoup is only used to *find* elements. Mutations are recorded as
edits over the original source (using the positions `html.parser` reports)
and spliced in by `serialize`, so markup outside the edited elements is
returned exactly as the API sent it, entities and whitespace included.
"""

from __future__ import annotations

import html as html_lib
import re
from dataclasses import dataclass, field
from typing import Callable

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from kontent_delivery.core.errors import RichTextParseError


_VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


@dataclass
class HtmlDocument:
    """Parsed rich text plus the pending edits over its source."""

    source: str
    soup: BeautifulSoup
    line_starts: list[int]
    # (start, end) -> replacement text
    edits: dict[tuple[int, int], str] = field(default_factory=dict)

    @property
    def mutated(self) -> bool:
        return bool(self.edits)


def _line_starts(source: str) -> list[int]:
    starts = [0]
    starts.extend(m.end() for m in re.finditer("\n", source))
    return starts


def _scan_start_tag_end(source: str, start: int) -> int:
    quote: str | None = None
    for i in range(start + 1, len(source)):
        ch = source[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ">":
            return i + 1
    return len(source)


_RAW_TEXT_ELEMENTS = ("script", "style")

_TAG_NAME = re.compile(r"<[^\s/>]+")
_ATTRIBUTE = re.compile(r"""([^\s"'<>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s>]+))?""")


def _find_close_tag(source: str, name: str, pos: int) -> int | None:
    if name.lower() in _RAW_TEXT_ELEMENTS:
        match = re.compile(rf"</{re.escape(name)}\s*>", re.IGNORECASE).search(source, pos)
        return match.end() if match else None

    # Comments and raw text elements may contain tag-like text that must not be counted.
    pattern = re.compile(
        r"<!--.*?(?:-->|\Z)"
        r"|<(script|style)(?=[\s/>])[^>]*>.*?(?:</\1\s*>|\Z)"
        rf"|<(/)?{re.escape(name)}(?=[\s/>])[^>]*>",
        re.IGNORECASE | re.DOTALL,
    )
    depth = 1
    for match in pattern.finditer(source, pos):
        if match.group(0).startswith("<!--") or match.group(1):
            continue
        if match.group(2):
            depth -= 1
            if depth == 0:
                return match.end()
        elif not match.group(0).endswith("/>"):
            depth += 1
    return None


def _attributes(start_tag: str) -> list[re.Match[str]]:
    """Attribute tokens of a start tag; quoted values are consumed whole."""

    tag_name = _TAG_NAME.match(start_tag)
    pos = tag_name.end() if tag_name else 0
    tokens = []
    while True:
        match = _ATTRIBUTE.search(start_tag, pos)
        if match is None:
            return tokens
        tokens.append(match)
        pos = match.end()


def _set_attribute_in_start_tag(start_tag: str, name: str, value: str) -> str:
    assignment = f'{name}="{html_lib.escape(value, quote=True)}"'
    for token in _attributes(start_tag):
        if token.group(1).lower() == name.lower():
            return start_tag[: token.start()] + assignment + start_tag[token.end() :]

    insert_at = len(start_tag) - 2 if start_tag.endswith("/>") else len(start_tag) - 1
    return f"{start_tag[:insert_at].rstrip()} {assignment}{start_tag[insert_at:]}"


class BeautifulSoupHtmlParser:
    """Lenient parser based on `html.parser`."""

    features = "html.parser"

    def parse(self, html: str) -> HtmlDocument:
        if not isinstance(html, str):
            raise RichTextParseError(f"Rich text value must be a string, got {type(html).__name__}")
        try:
            soup = BeautifulSoup(html, self.features)
        except ParserRejectedMarkup as exc:
            raise RichTextParseError(str(exc)) from exc
        return HtmlDocument(source=html, soup=soup, line_starts=_line_starts(html))

    def query_all(self, document: HtmlDocument, predicate: Callable[[Tag], bool]) -> list[Tag]:
        return [tag for tag in document.soup.find_all(True) if predicate(tag)]

    def tag_name(self, element: Tag) -> str:
        return (element.name or "").lower()

    def get_attribute(self, element: Tag, name: str) -> str | None:
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def set_attribute(self, document: HtmlDocument, element: Tag, name: str, value: str) -> None:
        start, tag_end, _ = self._span(document, element)
        key = (start, tag_end)
        current = document.edits.get(key, document.source[start:tag_end])
        document.edits[key] = _set_attribute_in_start_tag(current, name, value)
        element[name] = value

    def replace_with(self, document: HtmlDocument, element: Tag, html: str) -> None:
        start, tag_end, end = self._span(document, element)
        # A full replacement supersedes attribute edits on the same start tag.
        document.edits.pop((start, tag_end), None)
        document.edits[(start, end)] = html

    def is_inside(self, element: Tag, container: Tag) -> bool:
        return any(parent is container for parent in element.parents)

    def outer_html(self, document: HtmlDocument, element: Tag) -> str:
        start, tag_end, end = self._span(document, element)
        if (start, end) in document.edits:
            return document.edits[(start, end)]
        if (start, tag_end) in document.edits:
            return document.edits[(start, tag_end)] + document.source[tag_end:end]
        return document.source[start:end]

    def serialize(self, document: HtmlDocument) -> str:
        if not document.mutated:
            return document.source

        out: list[str] = []
        cursor = 0
        for (start, end), text in sorted(document.edits.items()):
            if start < cursor:
                # Nested inside an element that was already replaced.
                continue
            out.append(document.source[cursor:start])
            out.append(text)
            cursor = end
        out.append(document.source[cursor:])
        return "".join(out)

    def _span(self, document: HtmlDocument, element: Tag) -> tuple[int, int, int]:
        if element.sourceline is None or element.sourcepos is None:
            raise RichTextParseError(f"No source position for <{element.name}> element")

        start = document.line_starts[element.sourceline - 1] + element.sourcepos
        if not document.source.startswith("<", start):
            raise RichTextParseError(f"Source position of <{element.name}> does not point at a tag")

        tag_end = _scan_start_tag_end(document.source, start)
        start_tag = document.source[start:tag_end]
        if start_tag.endswith("/>") or self.tag_name(element) in _VOID_ELEMENTS:
            return start, tag_end, tag_end

        end = _find_close_tag(document.source, element.name, tag_end)
        return start, tag_end, end if end is not None else tag_end
