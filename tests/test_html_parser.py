from __future__ import annotations

import pytest

from kontent_delivery.adapters.html_parser import BeautifulSoupHtmlParser
from kontent_delivery.core.errors import RichTextParseError

MARKUP = (
    "<p>Fish &amp; chips&nbsp;<b>today</b></p>\n"
    '  <object type="application/kenticocloud" data-type="item" data-codename="menu"></object>\n'
    '<p><a data-item-id="a1" href="">Menu</a><br></p>'
)


def _find(parser, document, tag):
    return parser.query_all(document, lambda el: parser.tag_name(el) == tag)


def test_serialize_without_edits_returns_source_unchanged():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse(MARKUP)

    assert parser.serialize(document) == MARKUP


def test_replace_with_splices_markup_verbatim():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse(MARKUP)
    [element] = _find(parser, document, "object")

    parser.replace_with(document, element, "<section>Menu &copy;</section>")

    assert parser.serialize(document) == MARKUP.replace(
        '<object type="application/kenticocloud" data-type="item" data-codename="menu"></object>',
        "<section>Menu &copy;</section>",
    )


def test_set_attribute_only_touches_start_tag():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse(MARKUP)
    [anchor] = _find(parser, document, "a")

    parser.set_attribute(document, anchor, "href", "/menu?x=1&y=2")

    assert parser.serialize(document) == MARKUP.replace(
        'href=""',
        'href="/menu?x=1&amp;y=2"',
    )
    assert parser.get_attribute(anchor, "href") == "/menu?x=1&y=2"


def test_set_attribute_adds_missing_attribute():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse('<img data-asset-id="x"/><p>after</p>')
    [image] = _find(parser, document, "img")

    parser.set_attribute(document, image, "src", "https://assets/x.png")

    assert parser.serialize(document) == '<img data-asset-id="x" src="https://assets/x.png"/><p>after</p>'


def test_outer_html_reflects_source_and_pending_edits():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse(MARKUP)
    [anchor] = _find(parser, document, "a")

    assert parser.outer_html(document, anchor) == '<a data-item-id="a1" href="">Menu</a>'

    parser.set_attribute(document, anchor, "href", "/menu")
    assert parser.outer_html(document, anchor) == '<a data-item-id="a1" href="/menu">Menu</a>'


def test_edits_nested_in_replaced_element_are_dropped():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse('<div><a data-item-id="a1" href="">x</a></div><p>end</p>')
    [div] = _find(parser, document, "div")
    [anchor] = _find(parser, document, "a")

    parser.set_attribute(document, anchor, "href", "/x")
    parser.replace_with(document, div, "<hr>")

    assert parser.serialize(document) == "<hr><p>end</p>"


def test_is_inside():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse("<div><p><b>x</b></p></div><i>y</i>")
    [div] = _find(parser, document, "div")
    [bold] = _find(parser, document, "b")
    [italic] = _find(parser, document, "i")

    assert parser.is_inside(bold, div)
    assert not parser.is_inside(italic, div)


def test_parse_rejects_non_string_values():
    with pytest.raises(RichTextParseError):
        BeautifulSoupHtmlParser().parse(None)  # type: ignore[arg-type]


def test_set_attribute_ignores_lookalikes_inside_other_values():
    parser = BeautifulSoupHtmlParser()
    markup = "<a title='see href=\"x\"' data-item-codename=\"a\" href=\"/old\">l</a>"
    document = parser.parse(markup)
    [anchor] = _find(parser, document, "a")

    parser.set_attribute(document, anchor, "href", "/new")

    assert parser.serialize(document) == "<a title='see href=\"x\"' data-item-codename=\"a\" href=\"/new\">l</a>"


def test_set_attribute_inserts_when_name_only_appears_in_a_value():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse('<img alt="src=old" data-asset-id="x">')
    [image] = _find(parser, document, "img")

    parser.set_attribute(document, image, "src", "/a.png")

    assert parser.serialize(document) == '<img alt="src=old" data-asset-id="x" src="/a.png">'


def test_set_attribute_replaces_bare_and_unquoted_attributes():
    parser = BeautifulSoupHtmlParser()
    document = parser.parse("<a HREF=/old data-item-id=a1>x</a><a href data-item-id=a2>y</a>")
    first, second = _find(parser, document, "a")

    parser.set_attribute(document, first, "href", "/one")
    parser.set_attribute(document, second, "href", "/two")

    assert parser.serialize(document) == (
        '<a href="/one" data-item-id=a1>x</a><a href="/two" data-item-id=a2>y</a>'
    )


def test_replacement_span_ignores_close_tags_in_comments_and_scripts():
    parser = BeautifulSoupHtmlParser()
    markup = (
        '<object type="application/kenticocloud" data-type="item" data-codename="a">'
        "<!-- </object> --><script>var s = '</object>';</script>"
        "</object>tail"
    )
    document = parser.parse(markup)
    [element] = _find(parser, document, "object")

    parser.replace_with(document, element, "<Ra/>")

    assert parser.serialize(document) == "<Ra/>tail"
