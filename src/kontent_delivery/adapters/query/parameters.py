"""Query string parameters and filters of the Delivery API."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable
from urllib.parse import quote

from kontent_delivery.core.errors import QueryConfigurationError


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class QueryParameter:
    name: str
    value: str

    def encode(self) -> str:
        return f"{quote(self.name, safe='[]._')}={quote(self.value, safe=',[]._-')}"


def _required(value: str, what: str) -> str:
    if not value or not str(value).strip():
        raise QueryConfigurationError(f"{what} has to be provided")
    return str(value)


def _joined(values: Iterable[object], what: str) -> str:
    items = [str(v) for v in values]
    if not items:
        raise QueryConfigurationError(f"At least one value has to be provided for {what}")
    return ",".join(items)


def type_filter(codename: str) -> QueryParameter:
    return QueryParameter("system.type", _required(codename, "Type codename"))


def types_filter(codenames: Iterable[str]) -> QueryParameter:
    return QueryParameter("system.type[in]", _joined(codenames, "types filter"))


def equals_filter(element: str, value: object) -> QueryParameter:
    return QueryParameter(_required(element, "Element"), str(value))


def all_filter(element: str, values: Iterable[object]) -> QueryParameter:
    return QueryParameter(f"{_required(element, 'Element')}[all]", _joined(values, "'all' filter"))


def any_filter(element: str, values: Iterable[object]) -> QueryParameter:
    return QueryParameter(f"{_required(element, 'Element')}[any]", _joined(values, "'any' filter"))


def contains_filter(element: str, values: Iterable[object]) -> QueryParameter:
    return QueryParameter(
        f"{_required(element, 'Element')}[contains]",
        _joined(values, "'contains' filter"),
    )


def in_filter(element: str, values: Iterable[object]) -> QueryParameter:
    return QueryParameter(f"{_required(element, 'Element')}[in]", _joined(values, "'in' filter"))


def comparison_filter(element: str, operator: str, value: object) -> QueryParameter:
    if operator not in ("gt", "gte", "lt", "lte"):
        raise QueryConfigurationError(f"Unknown comparison operator '{operator}'")
    return QueryParameter(f"{_required(element, 'Element')}[{operator}]", str(value))


def range_filter(element: str, lower: object, upper: object) -> QueryParameter:
    return QueryParameter(f"{_required(element, 'Element')}[range]", f"{lower},{upper}")


def elements_parameter(codenames: Iterable[str]) -> QueryParameter:
    return QueryParameter("elements", _joined(codenames, "'elements' parameter"))


def limit_parameter(limit: int) -> QueryParameter:
    if limit <= 0:
        raise QueryConfigurationError("Limit has to be greater than 0")
    return QueryParameter("limit", str(limit))


def skip_parameter(skip: int) -> QueryParameter:
    if skip < 0:
        raise QueryConfigurationError("Skip cannot be negative")
    return QueryParameter("skip", str(skip))


def depth_parameter(depth: int) -> QueryParameter:
    if depth < 0:
        raise QueryConfigurationError("Depth cannot be negative")
    return QueryParameter("depth", str(depth))


def language_parameter(codename: str) -> QueryParameter:
    return QueryParameter("language", _required(codename, "Language codename"))


def order_parameter(element: str, order: SortOrder | str = SortOrder.ASC) -> QueryParameter:
    order = SortOrder(order)
    return QueryParameter("order", f"{_required(element, 'Element')}[{order.value}]")


def encode_parameters(parameters: Iterable[QueryParameter]) -> str:
    encoded = "&".join(p.encode() for p in parameters)
    return f"?{encoded}" if encoded else ""
