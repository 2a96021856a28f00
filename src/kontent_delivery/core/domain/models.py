"""Domain models (Pydantic v2).

Why Pydantic here:
- API payloads (system blocks, content types, taxonomies) are validated at
  the edge and keep their field documentation in one place.
- `ContentItem` is a plain class instead: user models subclass it and the
  item mapper fills it after construction.

These models describe *what* the content is, not *how* it is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from kontent_delivery.core.domain.field_type import FieldType

if TYPE_CHECKING:
    from kontent_delivery.core.domain.fields import ContentField


class ContentItemSystemAttributes(BaseModel):
    """`system` block of a content item."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Item identifier (GUID).")
    name: str = Field(default="", description="Display name of the item.")
    codename: str = Field(..., min_length=1, description="Stable identifier of the item.")
    type: str = Field(..., min_length=1, description="Codename of the item's content type.")
    language: str | None = Field(default=None, description="Language variant codename.")
    sitemap_locations: list[str] = Field(
        default_factory=list,
        description="Sitemap nodes the item is placed in.",
    )
    last_modified: datetime | None = Field(default=None, description="Last modification time.")


class ContentItem:
    """A resolved CMS entry.

    Elements are reachable as `item.elements["title"]`, `item["title"]` or
    `item.title`. Subclass it and register the subclass in a `TypeResolver`
    to get typed models per content type.
    """

    def __init__(
        self,
        system: ContentItemSystemAttributes | None = None,
        elements: dict[str, ContentField] | None = None,
    ) -> None:
        self.system = system
        self.elements: dict[str, ContentField] = dict(elements or {})

    @property
    def codename(self) -> str | None:
        return self.system.codename if self.system else None

    def __getitem__(self, name: str) -> ContentField:
        return self.elements[name]

    def __contains__(self, name: object) -> bool:
        return name in self.elements

    def __iter__(self) -> Iterator[str]:
        return iter(self.elements)

    def __getattr__(self, name: str) -> Any:
        # Only called when regular lookup fails.
        if name.startswith("_"):
            raise AttributeError(name)
        elements = self.__dict__.get("elements") or {}
        if name in elements:
            return elements[name]
        raise AttributeError(f"{type(self).__name__!s} has no element '{name}'")

    def __repr__(self) -> str:
        if self.system is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}(codename={self.system.codename!r}, type={self.system.type!r})"


class Link(BaseModel):
    """Internal item reference handed to link resolvers."""

    model_config = ConfigDict(frozen=True)

    codename: str = Field(..., description="Codename of the linked item.")
    item_id: str | None = Field(default=None, description="Identifier of the linked item.")
    url_slug: str | None = Field(default=None, description="URL slug of the linked item.")
    type: str = Field(
        default=FieldType.URL_SLUG.value,
        description="Kind of link; always 'url_slug'.",
    )
    content_type: str | None = Field(
        default=None,
        description="Content type codename of the linked item, when known.",
    )


LinkResolver = Callable[[Link], str | None]
RichTextItemResolver = Callable[[ContentItem, Mapping[str, ContentItem]], str]


@dataclass(frozen=True)
class TypeResolver:
    """Maps a content type codename to a model factory and a rich text renderer.

    `rich_text_resolver(item, linked_items)` returns the markup that replaces
    the item's `<object>` placeholder inside rich text fields.
    """

    type: str
    factory: Callable[[], ContentItem] = ContentItem
    rich_text_resolver: RichTextItemResolver | None = None


def find_type_resolver(resolvers: Iterable[TypeResolver], content_type: str) -> TypeResolver | None:
    """First resolver registered for `content_type`, in registration order."""

    for resolver in resolvers:
        if resolver.type == content_type:
            return resolver
    return None


class SystemAttributes(BaseModel):
    """`system` block shared by content types and taxonomy groups."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    name: str = Field(default="")
    codename: str = Field(..., min_length=1)
    last_modified: datetime | None = None


class ElementOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    codename: str


class ElementDefinition(BaseModel):
    """Element of a content type (or the payload of the element endpoint)."""

    model_config = ConfigDict(extra="ignore")

    type: str = Field(..., description="Element type as returned by the API.")
    name: str = Field(default="")
    codename: str | None = Field(default=None)
    options: list[ElementOption] = Field(
        default_factory=list,
        description="Options of multiple choice elements.",
    )
    taxonomy_group: str | None = Field(
        default=None,
        description="Taxonomy group codename of taxonomy elements.",
    )


class ContentType(BaseModel):
    model_config = ConfigDict(extra="ignore")

    system: SystemAttributes
    elements: dict[str, ElementDefinition] = Field(default_factory=dict)


class TaxonomyTermNode(BaseModel):
    """Term of a taxonomy group; terms nest arbitrarily deep."""

    model_config = ConfigDict(extra="ignore")

    name: str
    codename: str
    terms: list[TaxonomyTermNode] = Field(default_factory=list)


class TaxonomyGroup(BaseModel):
    model_config = ConfigDict(extra="ignore")

    system: SystemAttributes
    terms: list[TaxonomyTermNode] = Field(default_factory=list)


class Pagination(BaseModel):
    model_config = ConfigDict(extra="ignore")

    skip: int = Field(default=0, ge=0)
    limit: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)
    next_page: str = Field(default="", description="URL of the next page, empty on the last one.")

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page)
