from __future__ import annotations

import logging

from kontent_delivery.core.domain.field_models import RichTextImage
from kontent_delivery.core.domain.models import ContentItem, ContentItemSystemAttributes, TypeResolver
from kontent_delivery.core.domain.warnings import WarningKind
from kontent_delivery.core.errors import RichTextParseError
from kontent_delivery.core.services.item_mapper import ItemMapper
from kontent_delivery.core.services.rich_text import RichTextContext, resolve_rich_text
from tests.factories import linked_object, make_item, make_system, rich_text_element


def _content_item(codename: str, content_type: str) -> ContentItem:
    return ContentItem(system=ContentItemSystemAttributes.model_validate(make_system(codename, content_type)))


def _body(mapper: ItemMapper, markup: str, modular_content: dict | None = None, **element):
    raw = make_item("page", "page", {"body": rich_text_element(markup, **element)})
    item, _ = mapper.map_item(raw, modular_content or {})
    return item.elements["body"]


def test_resolved_html_is_cached_and_resolver_runs_once():
    calls = []

    def render(item, linked_items):
        calls.append(item.codename)
        return f"<p>{item.title.value}</p>"

    mapper = ItemMapper(type_resolvers=[TypeResolver("tweet", rich_text_resolver=render)])
    field = _body(
        mapper,
        "<h1>Hi</h1>" + linked_object("t1"),
        {"t1": make_item("t1", "tweet", {"title": {"type": "text", "name": "Title", "value": "Tweet"}})},
        linked=["t1"],
    )

    first = field.get_html()
    second = field.get_html()

    assert first == "<h1>Hi</h1><p>Tweet</p>"
    assert second is first
    assert calls == ["t1"]


def test_markup_without_references_is_returned_unchanged():
    markup = '<p>Caf&eacute; &nbsp;<b>menu</b></p>\n<object type="application/pdf" data="x.pdf"></object>'

    result = resolve_rich_text(markup)

    assert result.html == markup
    assert result.warnings == []


def test_missing_linked_item_keeps_placeholder_and_warns():
    markup = "<p>x</p>" + linked_object("ghost")
    field = _body(ItemMapper(), markup, linked=["ghost"])

    assert field.get_html() == markup
    [warning] = field.warnings
    assert warning.kind is WarningKind.MISSING_ITEM
    assert warning.codename == "ghost"
    assert "ghost" in warning.message
    assert warning.field_name == "body"


def test_missing_type_resolver_names_the_content_type():
    markup = linked_object("t1")
    field = _body(ItemMapper(), markup, {"t1": make_item("t1", "tweet")}, linked=["t1"])

    assert field.get_html() == markup
    [warning] = field.warnings
    assert warning.kind is WarningKind.MISSING_TYPE_RESOLVER
    assert "'tweet'" in warning.message


def test_type_resolver_without_rich_text_resolver_warns():
    markup = linked_object("t1")
    mapper = ItemMapper(type_resolvers=[TypeResolver("tweet")])
    field = _body(mapper, markup, {"t1": make_item("t1", "tweet")}, linked=["t1"])

    assert field.get_html() == markup
    assert [w.kind for w in field.warnings] == [WarningKind.MISSING_RICH_TEXT_RESOLVER]


def test_first_registered_type_resolver_wins():
    mapper = ItemMapper(
        type_resolvers=[
            TypeResolver("tweet", rich_text_resolver=lambda item, linked: "<first/>"),
            TypeResolver("tweet", rich_text_resolver=lambda item, linked: "<second/>"),
        ]
    )
    field = _body(mapper, linked_object("t1"), {"t1": make_item("t1", "tweet")})

    assert field.get_html() == "<first/>"


def test_components_resolve_like_linked_items():
    mapper = ItemMapper(
        type_resolvers=[TypeResolver("cta", rich_text_resolver=lambda item, linked: "<button>Buy</button>")]
    )
    field = _body(
        mapper,
        "<p>before</p>" + linked_object("n78a", rel="component"),
        {"n78a": make_item("n78a", "cta")},
    )

    assert field.get_html() == "<p>before</p><button>Buy</button>"
    assert field.warnings == []


def test_link_is_rewritten_with_link_resolver():
    mapper = ItemMapper(link_resolver=lambda link: f"/articles/{link.url_slug}")
    field = _body(
        mapper,
        '<p>Read <a data-item-id="id-c1" href="">this</a>.</p>',
        links={"id-c1": {"codename": "c1", "type": "article", "url_slug": "c1"}},
    )

    assert field.get_html() == '<p>Read <a data-item-id="id-c1" href="/articles/c1">this</a>.</p>'
    assert field.warnings == []


def test_link_to_item_in_response_uses_its_url_slug():
    mapper = ItemMapper(link_resolver=lambda link: f"/{link.content_type}/{link.url_slug}")
    field = _body(
        mapper,
        '<a data-item-codename="c2">x</a>',
        {"c2": make_item("c2", "article", {"slug": {"type": "url_slug", "name": "Slug", "value": "second"}})},
    )

    assert field.get_html() == '<a data-item-codename="c2" href="/article/second">x</a>'


def test_missing_link_resolver_is_silent_without_advanced_logging(caplog):
    markup = '<a data-item-id="id-c1" href="">x</a>'
    field = _body(ItemMapper(), markup)

    with caplog.at_level(logging.WARNING):
        assert field.get_html() == markup

    assert field.warnings == []
    assert caplog.records == []


def test_missing_link_resolver_warns_with_advanced_logging(caplog):
    markup = '<a data-item-id="id-c1" href="">x</a>'
    field = _body(ItemMapper(enable_advanced_logging=True), markup)

    with caplog.at_level(logging.WARNING):
        assert field.get_html() == markup

    assert [w.kind for w in field.warnings] == [WarningKind.MISSING_LINK_RESOLVER]
    assert [r.getMessage() for r in caplog.records] == [field.warnings[0].message]


def test_link_to_unknown_item_warns():
    markup = '<a data-item-id="nowhere" href="">x</a>'
    field = _body(ItemMapper(link_resolver=lambda link: "/x"), markup)

    assert field.get_html() == markup
    assert [w.kind for w in field.warnings] == [WarningKind.MISSING_ITEM]


def test_empty_url_keeps_original_href():
    markup = '<a data-item-id="id-c1" href="#keep">x</a>'
    field = _body(
        ItemMapper(link_resolver=lambda link: ""),
        markup,
        links={"id-c1": {"codename": "c1", "url_slug": "c1"}},
    )

    assert field.get_html() == markup
    assert [w.kind for w in field.warnings] == [WarningKind.EMPTY_URL]


def test_warnings_follow_document_order():
    field = _body(ItemMapper(), linked_object("alpha") + "<p>mid</p>" + linked_object("beta"))

    field.get_html()

    assert [w.codename for w in field.warnings] == ["alpha", "beta"]


def test_failing_resolver_is_isolated():
    def explode(item, linked_items):
        raise RuntimeError("kaboom")

    mapper = ItemMapper(
        type_resolvers=[
            TypeResolver("bad", rich_text_resolver=explode),
            TypeResolver("good", rich_text_resolver=lambda item, linked: "<p>ok</p>"),
        ]
    )
    field = _body(
        mapper,
        linked_object("boom") + linked_object("fine"),
        {"boom": make_item("boom", "bad"), "fine": make_item("fine", "good")},
    )

    assert field.get_html() == linked_object("boom") + "<p>ok</p>"
    [warning] = field.warnings
    assert warning.kind is WarningKind.RESOLVER_ERROR
    assert "kaboom" in warning.message
    assert 'data-codename="boom"' in warning.message


def test_non_string_resolver_result_is_reported():
    mapper = ItemMapper(type_resolvers=[TypeResolver("tweet", rich_text_resolver=lambda item, linked: None)])
    markup = linked_object("t1")
    field = _body(mapper, markup, {"t1": make_item("t1", "tweet")})

    assert field.get_html() == markup
    assert [w.kind for w in field.warnings] == [WarningKind.RESOLVER_ERROR]


def test_circular_rich_text_terminates():
    def render(item, linked_items):
        return f"<div>{item.body.get_html()}</div>"

    raw_a = "<p>a</p>" + linked_object("b")
    raw_b = "<p>b</p>" + linked_object("a")
    modular_content = {
        "a": make_item("a", "node", {"body": rich_text_element(raw_a, linked=["b"])}),
        "b": make_item("b", "node", {"body": rich_text_element(raw_b, linked=["a"])}),
    }
    mapper = ItemMapper(type_resolvers=[TypeResolver("node", rich_text_resolver=render)])
    item, _ = mapper.map_item(modular_content["a"], modular_content)

    html = item.body.get_html()

    assert html == f"<p>a</p><div><p>b</p><div>{raw_a}</div></div>"
    assert WarningKind.CIRCULAR_REFERENCE in [w.kind for w in item.body.warnings]


def test_inline_image_src_is_taken_from_images_map():
    images = {"asset-1": RichTextImage(image_id="asset-1", url="https://assets.example/a.png")}

    result = resolve_rich_text(
        '<figure><img src="#" data-asset-id="asset-1" alt="A"></figure>',
        images=images,
    )

    assert result.html == '<figure><img src="https://assets.example/a.png" data-asset-id="asset-1" alt="A"></figure>'


def test_image_resolver_replaces_image_objects():
    images = {"asset-1": RichTextImage(image_id="asset-1", url="https://assets.example/a.png")}
    context = RichTextContext(image_resolver=lambda image: f'<img src="{image.url}?w=300">')

    result = resolve_rich_text(
        '<object type="application/kenticocloud" data-type="image" data-image-id="asset-1"></object>',
        context=context,
        images=images,
    )

    assert result.html == '<img src="https://assets.example/a.png?w=300">'


def test_unknown_asset_warns():
    markup = '<img src="#" data-asset-id="missing">'

    result = resolve_rich_text(markup)

    assert result.html == markup
    assert [w.kind for w in result.warnings] == [WarningKind.MISSING_ASSET]


def test_unparsable_markup_is_returned_with_parsing_warning():
    class RejectingParser:
        def parse(self, html):
            raise RichTextParseError("unsupported markup")

    markup = linked_object("a")
    result = resolve_rich_text(markup, context=RichTextContext(html_parser=RejectingParser()))

    assert result.html == markup
    assert [w.kind for w in result.warnings] == [WarningKind.PARSING]


def test_resolver_receives_linked_items_snapshot():
    seen = {}

    def render(item, linked_items):
        seen.update(linked_items)
        return ""

    context = RichTextContext(
        linked_items={"t1": _content_item("t1", "tweet")},
        type_resolvers=[TypeResolver("tweet", rich_text_resolver=render)],
    )

    result = resolve_rich_text("<p>x</p>" + linked_object("t1"), context=context)

    assert result.html == "<p>x</p>"
    assert list(seen) == ["t1"]


def test_failing_link_resolver_is_isolated():
    def resolve(link):
        if link.codename == "broken":
            raise ValueError("no route")
        return f"/articles/{link.url_slug}"

    markup = '<a data-item-id="id-b" href="#b">b</a><a data-item-id="id-c1" href="">c</a>'
    field = _body(
        ItemMapper(link_resolver=resolve),
        markup,
        links={
            "id-b": {"codename": "broken", "url_slug": "broken"},
            "id-c1": {"codename": "c1", "url_slug": "c1"},
        },
    )

    assert field.get_html() == '<a data-item-id="id-b" href="#b">b</a><a data-item-id="id-c1" href="/articles/c1">c</a>'
    [warning] = field.warnings
    assert warning.kind is WarningKind.RESOLVER_ERROR
    assert warning.codename == "broken"
    assert "no route" in warning.message


def test_failing_image_resolver_is_isolated():
    def render(image):
        if image.image_id == "bad":
            raise RuntimeError("cdn down")
        return f'<img src="{image.url}">'

    images = {
        "bad": RichTextImage(image_id="bad", url="https://assets.example/bad.png"),
        "good": RichTextImage(image_id="good", url="https://assets.example/good.png"),
    }
    failing = '<object type="application/kenticocloud" data-type="image" data-image-id="bad"></object>'
    working = '<object type="application/kenticocloud" data-type="image" data-image-id="good"></object>'

    result = resolve_rich_text(
        failing + working,
        context=RichTextContext(image_resolver=render),
        images=images,
    )

    assert result.html == failing + '<img src="https://assets.example/good.png">'
    [warning] = result.warnings
    assert warning.kind is WarningKind.RESOLVER_ERROR
    assert "cdn down" in warning.message
