"""Entry point of the SDK.

Why a facade:
- Users build queries from one object that owns the configuration
  (settings, type resolvers, link/image resolvers, transport).
- Each call returns a fresh query; nothing is shared between queries except
  the read-only configuration.
"""

from __future__ import annotations

from typing import Sequence

from kontent_delivery.adapters.query.items import MultipleItemQuery, SingleItemQuery
from kontent_delivery.adapters.query.taxonomies import MultipleTaxonomyQuery, SingleTaxonomyQuery
from kontent_delivery.adapters.query.types import ElementQuery, MultipleTypeQuery, SingleTypeQuery
from kontent_delivery.core.config import DeliveryClientConfig, DeliverySettings
from kontent_delivery.core.domain.models import LinkResolver, TypeResolver
from kontent_delivery.core.services.rich_text.context import ImageResolver


class DeliveryClient:
    def __init__(self, config: DeliveryClientConfig | None = None) -> None:
        self.config = config or DeliveryClientConfig()

    @classmethod
    def create(
        cls,
        project_id: str,
        *,
        type_resolvers: Sequence[TypeResolver] = (),
        link_resolver: LinkResolver | None = None,
        image_resolver: ImageResolver | None = None,
        **settings: object,
    ) -> "DeliveryClient":
        """Shortcut building the configuration from keyword arguments."""

        return cls(
            DeliveryClientConfig(
                settings=DeliverySettings(project_id=project_id, **settings),
                type_resolvers=tuple(type_resolvers),
                link_resolver=link_resolver,
                image_resolver=image_resolver,
            )
        )

    def item(self, codename: str) -> SingleItemQuery:
        return SingleItemQuery(self.config, codename)

    def items(self) -> MultipleItemQuery:
        return MultipleItemQuery(self.config)

    def type(self, codename: str) -> SingleTypeQuery:
        return SingleTypeQuery(self.config, codename)

    def types(self) -> MultipleTypeQuery:
        return MultipleTypeQuery(self.config)

    def taxonomy(self, codename: str) -> SingleTaxonomyQuery:
        return SingleTaxonomyQuery(self.config, codename)

    def taxonomies(self) -> MultipleTaxonomyQuery:
        return MultipleTaxonomyQuery(self.config)

    def element(self, type_codename: str, element_codename: str) -> ElementQuery:
        return ElementQuery(self.config, type_codename, element_codename)
