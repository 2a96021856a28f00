"""Maps item payloads into `ContentItem` graphs.

Mapping happens in two passes so that circular graphs (A links B, B links A,
or an item linking itself) need no recursion:

1. one shell per item (main items + `modular_content`) through the type
   resolver factory, with only `system` filled;
2. elements of every shell are populated; linked items fields and rich text
   point at the shared shells.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

from kontent_delivery.core.domain.field_models import RichTextImage, RichTextLink
from kontent_delivery.core.domain.field_type import FieldType
from kontent_delivery.core.domain.fields import (
    AssetField,
    BaseField,
    DateTimeField,
    LinkedItemsField,
    MultipleChoiceField,
    NumberField,
    RichTextField,
    TaxonomyField,
    TextField,
    UrlSlugField,
)
from kontent_delivery.core.domain.models import (
    ContentItem,
    ContentItemSystemAttributes,
    LinkResolver,
    TypeResolver,
    find_type_resolver,
)
from kontent_delivery.core.errors import DeliveryError, FieldMappingError
from kontent_delivery.core.interfaces.html_parser import RichTextHtmlParser
from kontent_delivery.core.services.rich_text.context import ImageResolver, RichTextContext

logger = logging.getLogger(__name__)


class ItemMapper:
    def __init__(
        self,
        *,
        type_resolvers: Sequence[TypeResolver] = (),
        link_resolver: LinkResolver | None = None,
        image_resolver: ImageResolver | None = None,
        enable_advanced_logging: bool = False,
        html_parser: RichTextHtmlParser | None = None,
    ) -> None:
        self.type_resolvers = tuple(type_resolvers)
        self.link_resolver = link_resolver
        self.image_resolver = image_resolver
        self.enable_advanced_logging = enable_advanced_logging
        self.html_parser = html_parser

        self._builders: dict[FieldType, Callable[..., BaseField]] = {
            FieldType.TEXT: self._text,
            FieldType.NUMBER: self._number,
            FieldType.DATE_TIME: self._date_time,
            FieldType.MULTIPLE_CHOICE: self._multiple_choice,
            FieldType.ASSET: self._asset,
            FieldType.TAXONOMY: self._taxonomy,
            FieldType.URL_SLUG: self._url_slug,
            FieldType.RICH_TEXT: self._rich_text,
            FieldType.LINKED_ITEMS: self._linked_items,
        }

    def map_item(
        self,
        raw_item: Mapping[str, Any],
        modular_content: Mapping[str, Any] | None = None,
    ) -> tuple[ContentItem, Mapping[str, ContentItem]]:
        items, linked = self.map_items([raw_item], modular_content)
        return items[0], linked

    def map_items(
        self,
        raw_items: Sequence[Mapping[str, Any]],
        modular_content: Mapping[str, Any] | None = None,
    ) -> tuple[list[ContentItem], Mapping[str, ContentItem]]:
        modular_content = modular_content or {}

        linked: dict[str, ContentItem] = {}
        pending: list[tuple[ContentItem, Mapping[str, Any]]] = []
        for codename, raw in modular_content.items():
            shell = self._create_shell(raw)
            linked[codename] = shell
            pending.append((shell, raw))

        items: list[ContentItem] = []
        for raw in raw_items:
            codename = _raw_codename(raw)
            shell = linked.get(codename) if codename else None
            if shell is None:
                shell = self._create_shell(raw)
                pending.append((shell, raw))
            items.append(shell)

        snapshot = MappingProxyType(linked)
        context = RichTextContext(
            linked_items=snapshot,
            type_resolvers=self.type_resolvers,
            link_resolver=self.link_resolver,
            image_resolver=self.image_resolver,
            enable_advanced_logging=self.enable_advanced_logging,
            html_parser=self.html_parser,
        )
        for shell, raw in pending:
            self._populate(shell, raw, context)

        return items, snapshot

    def _create_shell(self, raw: Mapping[str, Any]) -> ContentItem:
        system_raw = raw.get("system")
        if not isinstance(system_raw, Mapping):
            raise DeliveryError("Cannot map content item because its 'system' block is missing")
        system = ContentItemSystemAttributes.model_validate(system_raw)

        resolver = find_type_resolver(self.type_resolvers, system.type)
        item = resolver.factory() if resolver else ContentItem()
        if not isinstance(item, ContentItem):
            raise DeliveryError(
                f"Type resolver of '{system.type}' type must create a ContentItem, "
                f"got {type(item).__name__}"
            )
        item.system = system
        return item

    def _populate(self, item: ContentItem, raw: Mapping[str, Any], context: RichTextContext) -> None:
        elements = raw.get("elements") or {}
        for name, element in elements.items():
            if not isinstance(element, Mapping):
                continue
            field_type = FieldType.from_api(str(element.get("type", "")))
            if field_type is None:
                if self.enable_advanced_logging:
                    logger.warning(
                        "Skipping element '%s' of '%s' item: unsupported type '%s'",
                        name,
                        item.codename,
                        element.get("type"),
                    )
                continue
            builder = self._builders[field_type]
            item.elements[name] = builder(name, element, item, context)

    def _text(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return TextField(name, element.get("value"))

    def _number(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return NumberField(name, element.get("value"))

    def _date_time(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return DateTimeField(name, element.get("value"))

    def _multiple_choice(
        self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext
    ) -> BaseField:
        return MultipleChoiceField(name, element.get("value"))

    def _asset(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return AssetField(name, element.get("value"))

    def _taxonomy(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return TaxonomyField(name, element.get("value"), element.get("taxonomy_group"))

    def _url_slug(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        return UrlSlugField(
            name,
            element.get("value"),
            item=item,
            link_resolver=self.link_resolver,
            enable_advanced_logging=self.enable_advanced_logging,
        )

    def _rich_text(self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext) -> BaseField:
        images = {
            image_id: RichTextImage.model_validate({"image_id": image_id, **data})
            for image_id, data in (element.get("images") or {}).items()
            if isinstance(data, Mapping)
        }
        links = {
            item_id: RichTextLink.model_validate({**data, "item_id": item_id})
            for item_id, data in (element.get("links") or {}).items()
            if isinstance(data, Mapping)
        }
        linked_codenames = element.get("modular_content") or []
        if not isinstance(linked_codenames, list):
            raise FieldMappingError(name, f"'modular_content' of rich text field '{name}' is not a list")
        return RichTextField(
            name,
            element.get("value"),
            context=context,
            images=images,
            links=links,
            linked_codenames=linked_codenames,
        )

    def _linked_items(
        self, name: str, element: Mapping[str, Any], item: ContentItem, context: RichTextContext
    ) -> BaseField:
        codenames = element.get("value") or []
        if not isinstance(codenames, list):
            raise FieldMappingError(name, f"Cannot map linked items field '{name}' because the value is not a list")

        items: list[ContentItem] = []
        for codename in codenames:
            linked = context.linked_items.get(codename)
            if linked is None:
                if self.enable_advanced_logging:
                    logger.warning(
                        "Linked item '%s' of '%s' field is not present in the response",
                        codename,
                        name,
                    )
                continue
            items.append(linked)
        return LinkedItemsField(name, codenames, items)


def _raw_codename(raw: Mapping[str, Any]) -> str | None:
    system = raw.get("system")
    if isinstance(system, Mapping):
        codename = system.get("codename")
        return codename if isinstance(codename, str) else None
    return None
