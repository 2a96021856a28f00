"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts, headers and retries for every Delivery API call.
- Tests substitute the transport (`httpx.MockTransport`) instead of the client.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from kontent_delivery.core.config import DeliverySettings
from kontent_delivery.core.errors import DeliveryApiError, DeliveryTransportError

logger = logging.getLogger(__name__)

SDK_VERSION = "0.1.0"
SDK_ID_HEADER = "X-KC-SDKID"
SDK_ID = f"pypi.org;kontent-delivery;{SDK_VERSION}"
WAIT_FOR_LOADING_NEW_CONTENT_HEADER = "X-KC-Wait-For-Loading-New-Content"


def build_async_client(
    settings: DeliverySettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the SDK defaults."""

    settings = settings or DeliverySettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def _api_error(response: httpx.Response) -> DeliveryApiError:
    body: Any = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}

    return DeliveryApiError(
        status_code=response.status_code,
        message=str(body.get("message") or response.reason_phrase or "Request failed"),
        url=str(response.request.url),
        request_id=body.get("request_id"),
        error_code=body.get("error_code"),
        specific_code=body.get("specific_code"),
    )


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    max_retries: int = 0,
    retry_delay_seconds: float = 0.0,
) -> tuple[Any, httpx.Response]:
    """GET `url` and decode its JSON body.

    Transport errors and 5xx responses are retried `max_retries` times with
    exponential backoff; 4xx responses fail immediately.
    """

    attempt = 0
    while True:
        try:
            response = await client.get(url)
        except httpx.TransportError as exc:
            if attempt >= max_retries:
                raise DeliveryTransportError(f"Request to {url} failed: {exc}") from exc
            logger.debug("Retrying %s after transport error: %s", url, exc)
        else:
            if response.is_success:
                try:
                    return response.json(), response
                except ValueError as exc:
                    raise DeliveryApiError(
                        status_code=response.status_code,
                        message="Response body is not valid JSON",
                        url=url,
                    ) from exc
            if response.status_code < 500 or attempt >= max_retries:
                raise _api_error(response)
            logger.debug("Retrying %s after HTTP %s", url, response.status_code)

        attempt += 1
        if retry_delay_seconds:
            await asyncio.sleep(retry_delay_seconds * 2 ** (attempt - 1))
