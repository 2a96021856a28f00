"""Field variants of a content item.

Each class maps one `FieldType`; `name` and the raw API `value` are kept
next to the typed representation. Asset and taxonomy fields validate their
value at construction and raise `FieldMappingError` on a malformed payload.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, ClassVar, Mapping, Union

from kontent_delivery.core.domain.field_models import (
    AssetModel,
    MultipleChoiceOption,
    RichTextImage,
    RichTextLink,
    TaxonomyTerm,
)
from kontent_delivery.core.domain.field_type import FieldType
from kontent_delivery.core.domain.models import ContentItem, Link, LinkResolver
from kontent_delivery.core.domain.warnings import ResolutionWarning, WarningCollector, WarningKind
from kontent_delivery.core.errors import FieldMappingError
from kontent_delivery.core.services.rich_text.context import RichTextContext
from kontent_delivery.core.services.rich_text.resolver import RichTextResolver

logger = logging.getLogger(__name__)


class BaseField:
    type: ClassVar[FieldType]

    def __init__(self, name: str, value: Any) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self.value!r})"


class TextField(BaseField):
    type = FieldType.TEXT

    @property
    def text(self) -> str | None:
        return self.value


class NumberField(BaseField):
    type = FieldType.NUMBER

    @property
    def number(self) -> int | float | None:
        return self.value


class DateTimeField(BaseField):
    type = FieldType.DATE_TIME

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(name, value)
        self.datetime: datetime | None = None
        if isinstance(value, str) and value:
            try:
                self.datetime = datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                logger.warning("Field '%s' holds an invalid date '%s'", name, value)


class MultipleChoiceField(BaseField):
    type = FieldType.MULTIPLE_CHOICE

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(name, value)
        self.options: list[MultipleChoiceOption] = []
        if isinstance(value, list):
            self.options = [MultipleChoiceOption.model_validate(option) for option in value]


class AssetField(BaseField):
    type = FieldType.ASSET

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(name, value)
        if value is None:
            raise FieldMappingError(name, f"Cannot bind assets field '{name}' because no value was provided")
        if not isinstance(value, list):
            raise FieldMappingError(
                name,
                f"Cannot bind assets field '{name}' because the provided value is not a list",
            )
        self.assets: list[AssetModel] = [AssetModel.model_validate(asset) for asset in value]


class TaxonomyField(BaseField):
    type = FieldType.TAXONOMY

    def __init__(self, name: str, value: Any, taxonomy_group: str | None = None) -> None:
        super().__init__(name, value)
        self.taxonomy_group = taxonomy_group
        if value is None:
            raise FieldMappingError(name, f"Cannot map taxonomy field '{name}' because no value was provided")
        if not isinstance(value, list):
            raise FieldMappingError(
                name,
                f"Cannot map taxonomy field '{name}' because the provided value is not a list",
            )
        self.taxonomy_terms: list[TaxonomyTerm] = [TaxonomyTerm.model_validate(term) for term in value]


class LinkedItemsField(BaseField):
    """`modular_content` element: codenames in `value`, mapped items in `items`."""

    type = FieldType.LINKED_ITEMS

    def __init__(self, name: str, value: Any, items: list[ContentItem] | None = None) -> None:
        super().__init__(name, value)
        self.items: list[ContentItem] = list(items or [])


class UrlSlugField(BaseField):
    type = FieldType.URL_SLUG

    def __init__(
        self,
        name: str,
        value: str | None,
        *,
        item: ContentItem | None,
        link_resolver: LinkResolver | None,
        enable_advanced_logging: bool = False,
    ) -> None:
        super().__init__(name, value)
        self.item = item
        self.link_resolver = link_resolver
        self._collector = WarningCollector(
            field_name=name,
            enable_advanced_logging=enable_advanced_logging,
            logger=logger,
        )

    @property
    def warnings(self) -> list[ResolutionWarning]:
        return self._collector.items

    def get_url(self) -> str | None:
        if self.link_resolver is None:
            if self._collector.enable_advanced_logging:
                self._collector.add(
                    WarningKind.MISSING_LINK_RESOLVER,
                    f"Configure 'link_resolver' on the client or the query in order to get the url "
                    f"of '{self.name}' field",
                )
            return None

        if self.item is None or self.item.system is None:
            self._collector.add(
                WarningKind.MISSING_ITEM,
                f"Cannot resolve link for field '{self.name}' because no item was provided to the "
                "URL slug field (item may be missing from response)",
            )
            return None

        link = Link(
            codename=self.item.system.codename,
            item_id=self.item.system.id,
            url_slug=self.value,
            content_type=self.item.system.type,
        )
        try:
            url = self.link_resolver(link)
        except Exception as exc:
            self._collector.add(
                WarningKind.RESOLVER_ERROR,
                f"'link_resolver' failed for '{link.codename}' item of '{link.content_type}' type "
                f"inside '{self.name}' field ({exc!r}).",
                codename=link.codename,
            )
            return None

        if not url:
            self._collector.add(
                WarningKind.EMPTY_URL,
                f"'link_resolver' is configured, but url resolved for '{link.codename}' item of "
                f"'{link.content_type}' type inside '{self.name}' field resolved to an empty url.",
                codename=link.codename,
            )
            return None
        return str(url)


class RichTextField(BaseField):
    """Rich text with lazily resolved HTML.

    The resolved HTML is computed on the first `get_html()` call and cached
    for the lifetime of the field.
    """

    type = FieldType.RICH_TEXT

    def __init__(
        self,
        name: str,
        value: str | None,
        *,
        context: RichTextContext,
        images: Mapping[str, RichTextImage] | None = None,
        links: Mapping[str, RichTextLink] | None = None,
        linked_codenames: list[str] | None = None,
    ) -> None:
        super().__init__(name, value)
        self.context = context
        self.images: dict[str, RichTextImage] = dict(images or {})
        self.links: dict[str, RichTextLink] = dict(links or {})
        self.linked_codenames: list[str] = list(linked_codenames or [])
        self._collector = WarningCollector(
            field_name=name,
            enable_advanced_logging=context.enable_advanced_logging,
            logger=logger,
        )
        self._resolved_html: str | None = None
        self._resolving = False

    @property
    def warnings(self) -> list[ResolutionWarning]:
        return self._collector.items

    @property
    def linked_items(self) -> list[ContentItem]:
        """Items embedded in this field that are present in the response."""

        return [
            self.context.linked_items[codename]
            for codename in self.linked_codenames
            if codename in self.context.linked_items
        ]

    def get_html(self) -> str:
        if self._resolved_html is not None:
            return self._resolved_html

        raw = self.value or ""
        if self._resolving:
            # A resolver reached this field again through a circular item graph.
            self._collector.add(
                WarningKind.CIRCULAR_REFERENCE,
                f"Rich text of '{self.name}' field references itself through linked items; "
                "returning the nested occurrence unresolved.",
            )
            return raw

        self._resolving = True
        try:
            result = RichTextResolver(
                html=raw,
                context=self.context,
                field_name=self.name,
                images=self.images,
                links=self.links,
                collector=self._collector,
            ).resolve()
        finally:
            self._resolving = False

        self._resolved_html = result.html
        return self._resolved_html


ContentField = Union[
    TextField,
    NumberField,
    DateTimeField,
    MultipleChoiceField,
    AssetField,
    TaxonomyField,
    UrlSlugField,
    RichTextField,
    LinkedItemsField,
]
