"""Content type queries: `/types`, `/types/{codename}` and type elements."""

from __future__ import annotations

from typing import Any

from kontent_delivery.adapters.query.base import BaseQuery, PagedQuery, path_segment
from kontent_delivery.core.config import DeliveryClientConfig
from kontent_delivery.core.domain.responses import ElementResponse, TypeListingResponse, TypeResponse


class SingleTypeQuery(BaseQuery[TypeResponse]):
    def __init__(self, config: DeliveryClientConfig, codename: str) -> None:
        super().__init__(config)
        self.codename = path_segment(codename, "type")

    def _path(self) -> str:
        return f"/types/{self.codename}"

    def _map(self, data: Any, raw_response: Any) -> TypeResponse:
        return self._response_mapper().map_type_response(data, raw_response)


class MultipleTypeQuery(PagedQuery[TypeListingResponse]):
    def _path(self) -> str:
        return "/types"

    def _map(self, data: Any, raw_response: Any) -> TypeListingResponse:
        return self._response_mapper().map_type_listing_response(data, raw_response)


class ElementQuery(BaseQuery[ElementResponse]):
    def __init__(self, config: DeliveryClientConfig, type_codename: str, element_codename: str) -> None:
        super().__init__(config)
        self.type_codename = path_segment(type_codename, "type")
        self.element_codename = path_segment(element_codename, "element")

    def _path(self) -> str:
        return f"/types/{self.type_codename}/elements/{self.element_codename}"

    def _map(self, data: Any, raw_response: Any) -> ElementResponse:
        return self._response_mapper().map_element_response(data, raw_response)
