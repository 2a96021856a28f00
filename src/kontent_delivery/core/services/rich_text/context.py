"""Collaborators of a rich text resolution pass."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

from kontent_delivery.core.domain.field_models import RichTextImage, RichTextLink
from kontent_delivery.core.domain.models import ContentItem, LinkResolver, TypeResolver
from kontent_delivery.core.domain.warnings import WarningCollector
from kontent_delivery.core.interfaces.html_parser import RichTextHtmlParser

ImageResolver = Callable[[RichTextImage], str]


@dataclass(frozen=True)
class RichTextContext:
    """Read-only configuration shared by every rich text field of a response.

    `linked_items` is the snapshot of the response's `modular_content`
    section, keyed by codename (components are keyed by their id).
    """

    linked_items: Mapping[str, ContentItem] = field(default_factory=dict)
    type_resolvers: Sequence[TypeResolver] = ()
    link_resolver: LinkResolver | None = None
    image_resolver: ImageResolver | None = None
    enable_advanced_logging: bool = False
    html_parser: RichTextHtmlParser | None = None


@dataclass
class ResolutionPass:
    """Mutable state of one field's resolution."""

    field_name: str
    context: RichTextContext
    parser: RichTextHtmlParser
    document: Any
    collector: WarningCollector
    images: Mapping[str, RichTextImage] = field(default_factory=dict)
    links: Mapping[str, RichTextLink] = field(default_factory=dict)
