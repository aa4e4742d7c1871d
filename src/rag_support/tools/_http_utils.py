"""Shared HTTP utilities for search providers."""

from typing import Any

import httpx

from rag_support.utils.logging import setup_logger

logger = setup_logger(__name__)


class ProviderRequestFailed(Exception):
    """Raised for any failed provider call.

    Covers non-success HTTP status, malformed response bodies, network errors
    and timeouts. ``status_code`` is None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(f"{message} (status: {status_code})" if status_code else message)


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    body: dict[str, Any],
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Make one HTTP POST request and return the decoded JSON object.

    Args:
        client: Async client used for the request
        url: API endpoint URL
        body: JSON request body
        headers: Extra request headers

    Returns:
        Parsed JSON response as dictionary

    Raises:
        ProviderRequestFailed: For any transport, status or decoding failure
    """
    try:
        response = await client.post(url, json=body, headers=headers)
    except httpx.TimeoutException as e:
        logger.error(f"Request timeout for URL: {url}")
        raise ProviderRequestFailed("Search provider request timed out") from e
    except httpx.HTTPError as e:
        logger.error(
            "Network error during API request",
            extra={"url": url, "error": str(e)},
        )
        raise ProviderRequestFailed(f"Search provider request failed: {e}") from e

    if not response.is_success:
        detail = response.text[:500]
        logger.error(
            "Search provider returned an error status",
            extra={"url": url, "status_code": response.status_code, "detail": detail},
        )
        raise ProviderRequestFailed(
            f"Search provider returned HTTP {response.status_code}: {detail or response.reason_phrase}",
            status_code=response.status_code,
        )

    try:
        data = response.json()
    except ValueError as e:
        logger.error("Search provider returned a non-JSON body", extra={"url": url})
        raise ProviderRequestFailed(
            "Search provider returned a malformed response body",
            status_code=response.status_code,
        ) from e

    if not isinstance(data, dict):
        raise ProviderRequestFailed(
            "Search provider returned a malformed response body",
            status_code=response.status_code,
        )

    return data
