"""Error taxonomy of the SDK.

Construction errors and API errors propagate to the caller. Rich text
issues never do: they are recorded as warnings on the field.
"""

from __future__ import annotations


class DeliveryError(Exception):
    """Base class for every error raised by the SDK."""


class FieldMappingError(DeliveryError):
    """An element value has the wrong shape for its field type."""

    def __init__(self, field_name: str, message: str) -> None:
        super().__init__(message)
        self.field_name = field_name


class RichTextParseError(DeliveryError):
    """The rich text markup could not be parsed at all."""


class QueryConfigurationError(DeliveryError):
    """A query was built with missing or contradictory options."""


class DeliveryTransportError(DeliveryError):
    """The request failed at the network level after all retries."""


class DeliveryApiError(DeliveryError):
    """The Delivery API answered with a non-success status code."""

    def __init__(
        self,
        *,
        status_code: int,
        message: str,
        url: str,
        request_id: str | None = None,
        error_code: int | None = None,
        specific_code: int | None = None,
    ) -> None:
        super().__init__(f"{status_code} {message} ({url})")
        self.status_code = status_code
        self.message = message
        self.url = url
        self.request_id = request_id
        self.error_code = error_code
        self.specific_code = specific_code
