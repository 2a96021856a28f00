from __future__ import annotations

from kontent_delivery.adapters.html_parser import BeautifulSoupHtmlParser
from kontent_delivery.core.services.rich_text.references import ReferenceKind, extract_references
from tests.factories import linked_object


def _references(markup: str):
    parser = BeautifulSoupHtmlParser()
    return extract_references(parser, parser.parse(markup))


def test_references_are_returned_in_document_order():
    markup = (
        linked_object("first")
        + '<p><a data-item-id="id-2" href="">two</a></p>'
        + '<figure><img src="#" data-asset-id="asset-3"></figure>'
        + linked_object("n4", rel="component")
        + '<object type="application/kenticocloud" data-type="image" data-image-id="img-5"></object>'
    )

    references = _references(markup)

    assert [(r.kind, r.key) for r in references] == [
        (ReferenceKind.LINKED_ITEM, "first"),
        (ReferenceKind.LINK, "id-2"),
        (ReferenceKind.ASSET, "asset-3"),
        (ReferenceKind.COMPONENT, "n4"),
        (ReferenceKind.ASSET, "img-5"),
    ]


def test_link_key_prefers_codename():
    [reference] = _references('<a data-item-id="id-1" data-item-codename="article">x</a>')

    assert reference.key == "article"
    assert reference.item_id == "id-1"
    assert reference.codename == "article"


def test_plain_markup_has_no_references():
    markup = (
        '<p><a href="https://example.com">out</a><img src="/logo.png"></p>'
        '<object type="application/pdf" data-type="item" data-codename="x"></object>'
        '<object type="application/kenticocloud" data-type="item"></object>'
    )

    assert _references(markup) == []


def test_candidates_inside_replaced_objects_are_skipped():
    markup = (
        '<object type="application/kenticocloud" data-type="item" data-codename="outer">'
        '<a data-item-id="inner">x</a>'
        "</object>"
        '<a data-item-id="after">y</a>'
    )

    assert [r.key for r in _references(markup)] == ["outer", "after"]


def test_object_type_matching_is_case_insensitive():
    [reference] = _references(
        '<object type="Application/KenticoCloud" data-type="Item" data-codename="c"></object>'
    )

    assert reference.kind is ReferenceKind.LINKED_ITEM
