"""Typed responses of the Delivery API endpoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping

from kontent_delivery.core.domain.models import (
    ContentItem,
    ContentType,
    ElementDefinition,
    Pagination,
    TaxonomyGroup,
)


@dataclass
class ResponseDebug:
    """Raw transport data kept for troubleshooting (typically an `httpx.Response`)."""

    raw_response: Any = None


@dataclass
class ItemResponse:
    item: ContentItem
    linked_items: Mapping[str, ContentItem] = field(default_factory=dict)
    debug: ResponseDebug = field(default_factory=ResponseDebug)


@dataclass
class ItemListingResponse:
    items: list[ContentItem]
    pagination: Pagination
    linked_items: Mapping[str, ContentItem] = field(default_factory=dict)
    debug: ResponseDebug = field(default_factory=ResponseDebug)

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def first_item(self) -> ContentItem | None:
        return self.items[0] if self.items else None


@dataclass
class TypeResponse:
    type: ContentType
    debug: ResponseDebug = field(default_factory=ResponseDebug)


@dataclass
class TypeListingResponse:
    types: list[ContentType]
    pagination: Pagination
    debug: ResponseDebug = field(default_factory=ResponseDebug)


@dataclass
class TaxonomyResponse:
    taxonomy: TaxonomyGroup
    debug: ResponseDebug = field(default_factory=ResponseDebug)


@dataclass
class TaxonomyListingResponse:
    taxonomies: list[TaxonomyGroup]
    pagination: Pagination
    debug: ResponseDebug = field(default_factory=ResponseDebug)


@dataclass
class ElementResponse:
    element: ElementDefinition
    debug: ResponseDebug = field(default_factory=ResponseDebug)
