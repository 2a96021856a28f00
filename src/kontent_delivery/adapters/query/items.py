"""Item queries: `/items` and `/items/{codename}`."""

from __future__ import annotations

from typing import Any, Iterable, TypeVar

from kontent_delivery.adapters.query import parameters as p
from kontent_delivery.adapters.query.base import BaseQuery, path_segment
from kontent_delivery.core.config import DeliveryClientConfig
from kontent_delivery.core.domain.responses import ItemListingResponse, ItemResponse

R = TypeVar("R")
Q = TypeVar("Q", bound="BaseItemQuery")


class BaseItemQuery(BaseQuery[R]):
    def elements(self: Q, codenames: Iterable[str]) -> Q:
        return self.with_parameter(p.elements_parameter(codenames))

    def depth(self: Q, depth: int) -> Q:
        return self.with_parameter(p.depth_parameter(depth))

    def language(self: Q, codename: str) -> Q:
        return self.with_parameter(p.language_parameter(codename))

    def _default_parameters(self) -> list[p.QueryParameter]:
        default_language = self.config.settings.default_language
        if default_language and not any(param.name == "language" for param in self._parameters):
            return [p.language_parameter(default_language)]
        return []


class SingleItemQuery(BaseItemQuery[ItemResponse]):
    def __init__(self, config: DeliveryClientConfig, codename: str) -> None:
        super().__init__(config)
        self.codename = path_segment(codename, "item")

    def _path(self) -> str:
        return f"/items/{self.codename}"

    def _map(self, data: Any, raw_response: Any) -> ItemResponse:
        return self._response_mapper().map_item_response(data, raw_response)


class MultipleItemQuery(BaseItemQuery[ItemListingResponse]):
    def _path(self) -> str:
        return "/items"

    def type(self, codename: str) -> "MultipleItemQuery":
        return self.with_parameter(p.type_filter(codename))

    def types(self, codenames: Iterable[str]) -> "MultipleItemQuery":
        return self.with_parameter(p.types_filter(codenames))

    def equals_filter(self, element: str, value: object) -> "MultipleItemQuery":
        return self.with_parameter(p.equals_filter(element, value))

    def all_filter(self, element: str, values: Iterable[object]) -> "MultipleItemQuery":
        return self.with_parameter(p.all_filter(element, values))

    def any_filter(self, element: str, values: Iterable[object]) -> "MultipleItemQuery":
        return self.with_parameter(p.any_filter(element, values))

    def contains_filter(self, element: str, values: Iterable[object]) -> "MultipleItemQuery":
        return self.with_parameter(p.contains_filter(element, values))

    def in_filter(self, element: str, values: Iterable[object]) -> "MultipleItemQuery":
        return self.with_parameter(p.in_filter(element, values))

    def greater_than_filter(self, element: str, value: object) -> "MultipleItemQuery":
        return self.with_parameter(p.comparison_filter(element, "gt", value))

    def greater_than_or_equal_filter(self, element: str, value: object) -> "MultipleItemQuery":
        return self.with_parameter(p.comparison_filter(element, "gte", value))

    def less_than_filter(self, element: str, value: object) -> "MultipleItemQuery":
        return self.with_parameter(p.comparison_filter(element, "lt", value))

    def less_than_or_equal_filter(self, element: str, value: object) -> "MultipleItemQuery":
        return self.with_parameter(p.comparison_filter(element, "lte", value))

    def range_filter(self, element: str, lower: object, upper: object) -> "MultipleItemQuery":
        return self.with_parameter(p.range_filter(element, lower, upper))

    def order_by(self, element: str, order: p.SortOrder | str = p.SortOrder.ASC) -> "MultipleItemQuery":
        return self.with_parameter(p.order_parameter(element, order))

    def limit(self, limit: int) -> "MultipleItemQuery":
        return self.with_parameter(p.limit_parameter(limit))

    def skip(self, skip: int) -> "MultipleItemQuery":
        return self.with_parameter(p.skip_parameter(skip))

    def _map(self, data: Any, raw_response: Any) -> ItemListingResponse:
        return self._response_mapper().map_item_listing_response(data, raw_response)
