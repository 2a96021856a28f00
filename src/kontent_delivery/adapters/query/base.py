"""Shared behavior of every Delivery API query."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar
from urllib.parse import quote

from kontent_delivery.adapters.http_client import (
    SDK_ID,
    SDK_ID_HEADER,
    WAIT_FOR_LOADING_NEW_CONTENT_HEADER,
    build_async_client,
    fetch_json,
)
from kontent_delivery.adapters.query.parameters import (
    QueryParameter,
    encode_parameters,
    limit_parameter,
    skip_parameter,
)
from kontent_delivery.core.config import DeliveryClientConfig
from kontent_delivery.core.domain.models import LinkResolver
from kontent_delivery.core.errors import QueryConfigurationError
from kontent_delivery.core.services.item_mapper import ItemMapper
from kontent_delivery.core.services.response_mapper import ResponseMapper
from kontent_delivery.core.services.rich_text.context import ImageResolver

R = TypeVar("R")
Q = TypeVar("Q", bound="BaseQuery")


@dataclass(frozen=True)
class QueryConfig:
    """Per-query overrides of the client configuration."""

    use_preview_mode: bool | None = None
    wait_for_loading_new_content: bool = False
    link_resolver: LinkResolver | None = None
    image_resolver: ImageResolver | None = None


def path_segment(value: str, what: str) -> str:
    if not value or not value.strip():
        raise QueryConfigurationError(f"Codename of the {what} has to be provided")
    return quote(value, safe="")


class BaseQuery(ABC, Generic[R]):
    def __init__(self, config: DeliveryClientConfig) -> None:
        self.config = config
        self._query_config = QueryConfig()
        self._parameters: list[QueryParameter] = []

    # -- configuration -------------------------------------------------

    def query_config(self: Q, query_config: QueryConfig) -> Q:
        self._query_config = query_config
        return self

    def with_parameter(self: Q, parameter: QueryParameter) -> Q:
        self._parameters.append(parameter)
        return self

    @property
    def parameters(self) -> list[QueryParameter]:
        return list(self._parameters)

    # -- url & headers ---------------------------------------------------

    @abstractmethod
    def _path(self) -> str:
        """Endpoint path below the project, e.g. `/items`."""

    def _default_parameters(self) -> list[QueryParameter]:
        return []

    def _uses_preview(self) -> bool:
        if self._query_config.use_preview_mode is not None:
            return self._query_config.use_preview_mode
        return self.config.settings.enable_preview_mode

    def to_url(self) -> str:
        settings = self.config.settings
        if not settings.project_id:
            raise QueryConfigurationError("Project id has to be configured")
        base = settings.preview_base_url if self._uses_preview() else settings.base_url
        parameters = self._parameters + self._default_parameters()
        return f"{base.rstrip('/')}/{settings.project_id}{self._path()}{encode_parameters(parameters)}"

    def get_headers(self) -> dict[str, str]:
        settings = self.config.settings
        headers = {SDK_ID_HEADER: SDK_ID}

        if self._uses_preview():
            if settings.enable_secured_mode:
                raise QueryConfigurationError("Preview and secured modes cannot be used at the same time")
            if not settings.preview_api_key:
                raise QueryConfigurationError("Preview API key has to be configured to use preview mode")
            headers["Authorization"] = f"Bearer {settings.preview_api_key}"
        elif settings.enable_secured_mode:
            headers["Authorization"] = f"Bearer {settings.secured_api_key}"

        if self._query_config.wait_for_loading_new_content:
            headers[WAIT_FOR_LOADING_NEW_CONTENT_HEADER] = "true"
        return headers

    def __str__(self) -> str:
        return self.to_url()

    # -- execution -----------------------------------------------------

    def _response_mapper(self) -> ResponseMapper:
        item_mapper = ItemMapper(
            type_resolvers=self.config.type_resolvers,
            link_resolver=self._query_config.link_resolver or self.config.link_resolver,
            image_resolver=self._query_config.image_resolver or self.config.image_resolver,
            enable_advanced_logging=self.config.settings.enable_advanced_logging,
            html_parser=self.config.html_parser,
        )
        return ResponseMapper(item_mapper)

    @abstractmethod
    def _map(self, data: Any, raw_response: Any) -> R:
        """Typed response of the decoded payload."""

    async def get(self) -> R:
        settings = self.config.settings
        url = self.to_url()
        async with build_async_client(
            settings,
            extra_headers=self.get_headers(),
            transport=self.config.transport,
        ) as client:
            data, response = await fetch_json(
                client,
                url,
                max_retries=settings.max_retries,
                retry_delay_seconds=settings.retry_delay_seconds,
            )
        return self._map(data, response)


class PagedQuery(BaseQuery[R]):
    """Listing endpoints supporting `limit` and `skip`."""

    def limit(self: Q, limit: int) -> Q:
        return self.with_parameter(limit_parameter(limit))

    def skip(self: Q, skip: int) -> Q:
        return self.with_parameter(skip_parameter(skip))
