"""Delivery API client with rich text resolution."""

from kontent_delivery.adapters.query import QueryConfig, SortOrder
from kontent_delivery.client import DeliveryClient
from kontent_delivery.core.config import DeliveryClientConfig, DeliverySettings
from kontent_delivery.core.domain.field_models import RichTextImage
from kontent_delivery.core.domain.field_type import FieldType
from kontent_delivery.core.domain.fields import RichTextField, UrlSlugField
from kontent_delivery.core.domain.models import ContentItem, Link, TypeResolver
from kontent_delivery.core.domain.warnings import ResolutionWarning, WarningKind
from kontent_delivery.core.errors import (
    DeliveryApiError,
    DeliveryError,
    DeliveryTransportError,
    FieldMappingError,
    QueryConfigurationError,
    RichTextParseError,
)
from kontent_delivery.core.services.rich_text import RichTextContext, resolve_rich_text

__all__ = [
    "ContentItem",
    "DeliveryApiError",
    "DeliveryClient",
    "DeliveryClientConfig",
    "DeliveryError",
    "DeliverySettings",
    "DeliveryTransportError",
    "FieldMappingError",
    "FieldType",
    "Link",
    "QueryConfig",
    "QueryConfigurationError",
    "ResolutionWarning",
    "RichTextContext",
    "RichTextField",
    "RichTextImage",
    "RichTextParseError",
    "SortOrder",
    "TypeResolver",
    "UrlSlugField",
    "WarningKind",
    "resolve_rich_text",
]
