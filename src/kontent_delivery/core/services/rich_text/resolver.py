"""Rich text resolution orchestration.

One pass per field: parse, extract references once (document order),
dispatch each reference, serialize. Issues become ordered warnings; nothing
raised by parsing or by user resolvers escapes `resolve()`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Mapping

from kontent_delivery.adapters.html_parser import BeautifulSoupHtmlParser
from kontent_delivery.core.domain.field_models import RichTextImage, RichTextLink
from kontent_delivery.core.domain.warnings import ResolutionWarning, WarningCollector, WarningKind
from kontent_delivery.core.errors import RichTextParseError
from kontent_delivery.core.services.rich_text.context import ResolutionPass, RichTextContext
from kontent_delivery.core.services.rich_text.dispatch import (
    resolve_asset_reference,
    resolve_item_reference,
)
from kontent_delivery.core.services.rich_text.links import rewrite_link
from kontent_delivery.core.services.rich_text.references import (
    Reference,
    ReferenceKind,
    extract_references,
)

logger = logging.getLogger(__name__)

_HANDLERS: dict[ReferenceKind, Callable[[Reference, ResolutionPass], bool]] = {
    ReferenceKind.LINKED_ITEM: resolve_item_reference,
    ReferenceKind.COMPONENT: resolve_item_reference,
    ReferenceKind.ASSET: resolve_asset_reference,
    ReferenceKind.LINK: rewrite_link,
}


@dataclass
class ResolutionResult:
    html: str
    warnings: list[ResolutionWarning] = field(default_factory=list)


class RichTextResolver:
    def __init__(
        self,
        *,
        html: str,
        context: RichTextContext,
        field_name: str = "",
        images: Mapping[str, RichTextImage] | None = None,
        links: Mapping[str, RichTextLink] | None = None,
        collector: WarningCollector | None = None,
    ) -> None:
        self.html = html
        self.context = context
        self.field_name = field_name
        self.images = images or {}
        self.links = links or {}
        self.collector = collector or WarningCollector(
            field_name=field_name,
            enable_advanced_logging=context.enable_advanced_logging,
            logger=logger,
        )

    def resolve(self) -> ResolutionResult:
        parser = self.context.html_parser or BeautifulSoupHtmlParser()

        try:
            document = parser.parse(self.html)
            references = extract_references(parser, document)
        except RichTextParseError as exc:
            self.collector.add(
                WarningKind.PARSING,
                f"Cannot parse rich text of '{self.field_name}' field, returning it unresolved: {exc}",
            )
            return ResolutionResult(html=self.html, warnings=self.collector.items)

        if not references:
            return ResolutionResult(html=self.html, warnings=self.collector.items)

        state = ResolutionPass(
            field_name=self.field_name,
            context=self.context,
            parser=parser,
            document=document,
            collector=self.collector,
            images=self.images,
            links=self.links,
        )
        for reference in references:
            try:
                _HANDLERS[reference.kind](reference, state)
            except RichTextParseError as exc:
                self.collector.add(
                    WarningKind.PARSING,
                    f"Cannot locate {reference.kind.value} '{reference.key}' in the markup of "
                    f"'{self.field_name}' field: {exc}",
                    codename=reference.key,
                )

        return ResolutionResult(html=parser.serialize(document), warnings=self.collector.items)


def resolve_rich_text(
    html: str,
    *,
    context: RichTextContext | None = None,
    field_name: str = "",
    images: Mapping[str, RichTextImage] | None = None,
    links: Mapping[str, RichTextLink] | None = None,
) -> ResolutionResult:
    """Resolve a standalone rich text value."""

    resolver = RichTextResolver(
        html=html,
        context=context or RichTextContext(),
        field_name=field_name,
        images=images,
        links=links,
    )
    return resolver.resolve()
