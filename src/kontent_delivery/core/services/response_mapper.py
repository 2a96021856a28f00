"""Maps Delivery API JSON payloads into typed responses."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from kontent_delivery.core.domain.models import (
    ContentType,
    ElementDefinition,
    Pagination,
    TaxonomyGroup,
)
from kontent_delivery.core.domain.responses import (
    ElementResponse,
    ItemListingResponse,
    ItemResponse,
    ResponseDebug,
    TaxonomyListingResponse,
    TaxonomyResponse,
    TypeListingResponse,
    TypeResponse,
)
from kontent_delivery.core.errors import DeliveryError
from kontent_delivery.core.services.item_mapper import ItemMapper


def _mapping(data: Any, key: str | None = None) -> Mapping[str, Any]:
    value = data.get(key) if key is not None and isinstance(data, Mapping) else data
    if not isinstance(value, Mapping):
        where = f"'{key}' section" if key else "payload"
        raise DeliveryError(f"Unexpected response format: {where} is not an object")
    return value


def _list(data: Mapping[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if not isinstance(value, list):
        raise DeliveryError(f"Unexpected response format: '{key}' section is not a list")
    return value


def map_pagination(data: Mapping[str, Any]) -> Pagination:
    raw = data.get("pagination") or {}
    return Pagination.model_validate({**raw, "next_page": raw.get("next_page") or ""})


def map_content_type(data: Mapping[str, Any]) -> ContentType:
    elements = {
        codename: {"codename": codename, **element}
        for codename, element in (data.get("elements") or {}).items()
        if isinstance(element, Mapping)
    }
    return ContentType.model_validate({**data, "elements": elements})


class ResponseMapper:
    def __init__(self, item_mapper: ItemMapper) -> None:
        self.item_mapper = item_mapper

    def map_item_response(self, data: Any, raw_response: Any = None) -> ItemResponse:
        payload = _mapping(data)
        item, linked = self._validated(
            lambda p: self.item_mapper.map_item(_mapping(p, "item"), p.get("modular_content") or {}),
            payload,
        )
        return ItemResponse(item=item, linked_items=linked, debug=ResponseDebug(raw_response))

    def map_item_listing_response(self, data: Any, raw_response: Any = None) -> ItemListingResponse:
        payload = _mapping(data)
        items, linked = self._validated(
            lambda p: self.item_mapper.map_items(_list(p, "items"), p.get("modular_content") or {}),
            payload,
        )
        return ItemListingResponse(
            items=items,
            pagination=self._pagination(payload),
            linked_items=linked,
            debug=ResponseDebug(raw_response),
        )

    def map_type_response(self, data: Any, raw_response: Any = None) -> TypeResponse:
        payload = _mapping(data)
        return TypeResponse(type=self._validated(map_content_type, payload), debug=ResponseDebug(raw_response))

    def map_type_listing_response(self, data: Any, raw_response: Any = None) -> TypeListingResponse:
        payload = _mapping(data)
        types = [self._validated(map_content_type, _mapping(raw)) for raw in _list(payload, "types")]
        return TypeListingResponse(
            types=types,
            pagination=self._pagination(payload),
            debug=ResponseDebug(raw_response),
        )

    def map_taxonomy_response(self, data: Any, raw_response: Any = None) -> TaxonomyResponse:
        payload = _mapping(data)
        return TaxonomyResponse(
            taxonomy=self._validated(TaxonomyGroup.model_validate, payload),
            debug=ResponseDebug(raw_response),
        )

    def map_taxonomy_listing_response(self, data: Any, raw_response: Any = None) -> TaxonomyListingResponse:
        payload = _mapping(data)
        taxonomies = [
            self._validated(TaxonomyGroup.model_validate, _mapping(raw))
            for raw in _list(payload, "taxonomies")
        ]
        return TaxonomyListingResponse(
            taxonomies=taxonomies,
            pagination=self._pagination(payload),
            debug=ResponseDebug(raw_response),
        )

    def map_element_response(self, data: Any, raw_response: Any = None) -> ElementResponse:
        payload = _mapping(data)
        return ElementResponse(
            element=self._validated(ElementDefinition.model_validate, payload),
            debug=ResponseDebug(raw_response),
        )

    def _pagination(self, payload: Mapping[str, Any]) -> Pagination:
        return self._validated(map_pagination, payload)

    @staticmethod
    def _validated(parse, payload):
        try:
            return parse(payload)
        except ValidationError as exc:
            raise DeliveryError(f"Unexpected response format: {exc}") from exc
