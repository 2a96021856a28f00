"""Locates embedded object references inside parsed rich text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from kontent_delivery.core.interfaces.html_parser import RichTextHtmlParser

OBJECT_TYPE = "application/kenticocloud"

_ASSET_ID_ATTRIBUTES = ("data-asset-id", "data-image-id")


class ReferenceKind(str, Enum):
    LINKED_ITEM = "linked_item"
    COMPONENT = "component"
    ASSET = "asset"
    LINK = "link"


@dataclass(frozen=True)
class Reference:
    """One embedded object found in the document.

    `key` is the lookup key: item codename, component id, asset id, or for
    links the codename when present and the item id otherwise.
    """

    kind: ReferenceKind
    element: Any
    key: str
    tag: str
    item_id: str | None = None
    codename: str | None = None

    @property
    def replaces_element(self) -> bool:
        return self.kind in (ReferenceKind.LINKED_ITEM, ReferenceKind.COMPONENT) or (
            self.kind is ReferenceKind.ASSET and self.tag == "object"
        )


def _first_attribute(parser: RichTextHtmlParser, element: Any, names: tuple[str, ...]) -> str | None:
    for name in names:
        value = parser.get_attribute(element, name)
        if value:
            return value
    return None


def classify(parser: RichTextHtmlParser, element: Any) -> Reference | None:
    """Build the descriptor for `element`, or `None` when it is plain HTML."""

    tag = parser.tag_name(element)

    if tag == "object":
        if (parser.get_attribute(element, "type") or "").strip().lower() != OBJECT_TYPE:
            return None
        data_type = (parser.get_attribute(element, "data-type") or "").strip().lower()
        if data_type == "item":
            codename = parser.get_attribute(element, "data-codename")
            if not codename:
                return None
            rel = (parser.get_attribute(element, "data-rel") or "").strip().lower()
            kind = ReferenceKind.COMPONENT if rel == "component" else ReferenceKind.LINKED_ITEM
            return Reference(kind=kind, element=element, key=codename, tag=tag, codename=codename)
        if data_type in ("asset", "image"):
            asset_id = _first_attribute(parser, element, _ASSET_ID_ATTRIBUTES)
            if not asset_id:
                return None
            return Reference(kind=ReferenceKind.ASSET, element=element, key=asset_id, tag=tag)
        return None

    if tag == "img":
        asset_id = _first_attribute(parser, element, _ASSET_ID_ATTRIBUTES)
        if not asset_id:
            return None
        return Reference(kind=ReferenceKind.ASSET, element=element, key=asset_id, tag=tag)

    if tag == "a":
        item_id = parser.get_attribute(element, "data-item-id") or None
        codename = parser.get_attribute(element, "data-item-codename") or None
        if not item_id and not codename:
            return None
        return Reference(
            kind=ReferenceKind.LINK,
            element=element,
            key=codename or item_id or "",
            tag=tag,
            item_id=item_id,
            codename=codename,
        )

    return None


def extract_references(parser: RichTextHtmlParser, document: Any) -> list[Reference]:
    """All references in document order.

    Candidates nested inside an element that is going to be replaced are
    dropped: the replacement discards them anyway.
    """

    references: list[Reference] = []
    replaced: list[Any] = []
    for element in parser.query_all(document, lambda el: classify(parser, el) is not None):
        if any(parser.is_inside(element, container) for container in replaced):
            continue
        reference = classify(parser, element)
        if reference is None:
            continue
        references.append(reference)
        if reference.replaces_element:
            replaced.append(element)
    return references
