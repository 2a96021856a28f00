"""Taxonomy queries: `/taxonomies` and `/taxonomies/{codename}`."""

from __future__ import annotations

from typing import Any

from kontent_delivery.adapters.query.base import BaseQuery, PagedQuery, path_segment
from kontent_delivery.core.config import DeliveryClientConfig
from kontent_delivery.core.domain.responses import TaxonomyListingResponse, TaxonomyResponse


class SingleTaxonomyQuery(BaseQuery[TaxonomyResponse]):
    def __init__(self, config: DeliveryClientConfig, codename: str) -> None:
        super().__init__(config)
        self.codename = path_segment(codename, "taxonomy")

    def _path(self) -> str:
        return f"/taxonomies/{self.codename}"

    def _map(self, data: Any, raw_response: Any) -> TaxonomyResponse:
        return self._response_mapper().map_taxonomy_response(data, raw_response)


class MultipleTaxonomyQuery(PagedQuery[TaxonomyListingResponse]):
    def _path(self) -> str:
        return "/taxonomies"

    def _map(self, data: Any, raw_response: Any) -> TaxonomyListingResponse:
        return self._response_mapper().map_taxonomy_listing_response(data, raw_response)
