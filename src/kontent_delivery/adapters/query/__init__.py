"""Query builders of the Delivery API.

Each module covers one endpoint family; all queries share `BaseQuery`
(url, headers, execution) and the parameter helpers.
"""

from kontent_delivery.adapters.query.base import BaseQuery, QueryConfig
from kontent_delivery.adapters.query.items import MultipleItemQuery, SingleItemQuery
from kontent_delivery.adapters.query.parameters import QueryParameter, SortOrder
from kontent_delivery.adapters.query.taxonomies import MultipleTaxonomyQuery, SingleTaxonomyQuery
from kontent_delivery.adapters.query.types import ElementQuery, MultipleTypeQuery, SingleTypeQuery

__all__ = [
    "BaseQuery",
    "ElementQuery",
    "MultipleItemQuery",
    "MultipleTaxonomyQuery",
    "MultipleTypeQuery",
    "QueryConfig",
    "QueryParameter",
    "SingleItemQuery",
    "SingleTaxonomyQuery",
    "SingleTypeQuery",
    "SortOrder",
]
