"""Rewrites `href` of anchors that point to content items."""

from __future__ import annotations

from kontent_delivery.core.domain.field_type import FieldType
from kontent_delivery.core.domain.models import ContentItem, Link
from kontent_delivery.core.domain.warnings import WarningKind
from kontent_delivery.core.services.rich_text.context import ResolutionPass
from kontent_delivery.core.services.rich_text.references import Reference


def _url_slug_of(item: ContentItem) -> str | None:
    for element in item.elements.values():
        if getattr(element, "type", None) is FieldType.URL_SLUG:
            return element.value
    return None


def _link_from_item(item: ContentItem) -> Link | None:
    if item.system is None:
        return None
    return Link(
        codename=item.system.codename,
        item_id=item.system.id,
        url_slug=_url_slug_of(item),
        content_type=item.system.type,
    )


def build_link(reference: Reference, state: ResolutionPass) -> Link | None:
    """Target of the anchor, or `None` when neither the item map nor the links map knows it."""

    linked_items = state.context.linked_items

    if reference.codename:
        item = linked_items.get(reference.codename)
        if item is not None:
            return _link_from_item(item)
        for entry in state.links.values():
            if entry.codename == reference.codename:
                return Link(
                    codename=entry.codename,
                    item_id=entry.item_id,
                    url_slug=entry.url_slug,
                    content_type=entry.type,
                )

    if reference.item_id:
        entry = state.links.get(reference.item_id)
        if entry is not None:
            return Link(
                codename=entry.codename,
                item_id=entry.item_id,
                url_slug=entry.url_slug,
                content_type=entry.type,
            )
        for item in linked_items.values():
            if item.system is not None and item.system.id == reference.item_id:
                return _link_from_item(item)

    return None


def rewrite_link(reference: Reference, state: ResolutionPass) -> bool:
    link_resolver = state.context.link_resolver
    if link_resolver is None:
        if state.context.enable_advanced_logging:
            state.collector.add(
                WarningKind.MISSING_LINK_RESOLVER,
                f"Cannot resolve link to '{reference.key}' in '{state.field_name}' field because "
                "no 'link_resolver' is configured on the client or the query.",
                codename=reference.key,
            )
        return False

    link = build_link(reference, state)
    if link is None:
        state.collector.add(
            WarningKind.MISSING_ITEM,
            f"Cannot resolve link to '{reference.key}' in '{state.field_name}' field because the "
            "item is not present in the response.",
            codename=reference.key,
        )
        return False

    try:
        url = link_resolver(link)
    except Exception as exc:
        state.collector.add(
            WarningKind.RESOLVER_ERROR,
            f"'link_resolver' failed for '{link.codename}' item in '{state.field_name}' field "
            f"({exc!r}). Element: {state.parser.outer_html(state.document, reference.element)}",
            codename=link.codename,
        )
        return False

    if not url:
        state.collector.add(
            WarningKind.EMPTY_URL,
            f"'link_resolver' is configured, but the url resolved for '{link.codename}' item "
            f"inside '{state.field_name}' field is empty.",
            codename=link.codename,
        )
        return False

    state.parser.set_attribute(state.document, reference.element, "href", str(url))
    return True
