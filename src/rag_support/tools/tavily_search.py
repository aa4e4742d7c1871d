"""Tavily web-search provider."""

from typing import Any

import httpx
from pydantic import ValidationError

from rag_support.consts import (
    BASIC_CHUNKS_PER_SOURCE,
    PROVIDER_LIMITS,
    SCRAPE_CHUNKS_PER_SOURCE,
)
from rag_support.tools._http_utils import ProviderRequestFailed, post_json
from rag_support.tools.base import SearchAdapter
from rag_support.types.search import SearchOptions, SearchResult
from rag_support.utils.logging import setup_logger

logger = setup_logger(__name__)

TAVILY_SEARCH_API_URL = "https://api.tavily.com/search"
DEFAULT_TIMEOUT = 30.0


def build_request_body(query: str, options: SearchOptions) -> dict[str, Any]:
    """Translate search options into a Tavily request body.

    Scraping intent drives include_content, search_depth and
    chunks_per_source together. Filters that are not set are left out of
    the body entirely.

    Args:
        query: Search query string
        options: Caller search options

    Returns:
        JSON-serializable request body
    """
    limits = PROVIDER_LIMITS["tavily"]

    body: dict[str, Any] = {
        "query": query,
        "max_results": min(options.max_results, limits.max_results),
    }

    if options.scrape_content:
        body["include_content"] = True
        body["search_depth"] = "advanced"
        body["chunks_per_source"] = min(SCRAPE_CHUNKS_PER_SOURCE, limits.max_chunks)
    else:
        body["include_content"] = False
        body["search_depth"] = "basic"
        body["chunks_per_source"] = BASIC_CHUNKS_PER_SOURCE

    if options.include_domains:
        body["include_domains"] = sorted(options.include_domains)
    if options.exclude_domains:
        body["exclude_domains"] = sorted(options.exclude_domains)
    if options.start_published_date:
        body["start_published_date"] = options.start_published_date
    if options.end_published_date:
        body["end_published_date"] = options.end_published_date

    return body


class TavilySearchProvider(SearchAdapter):
    """Issues one POST per query against the Tavily search endpoint.

    No state is kept between calls. When ``client`` is given it is used as-is
    and left open; otherwise a short-lived client is opened per call.
    """

    name = "tavily"

    def __init__(
        self,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.client = client

    async def search(
        self, query: str, options: SearchOptions | None = None
    ) -> list[SearchResult]:
        """Search Tavily.

        Args:
            query: Search query string
            options: Search options. If None, defaults are used

        Returns:
            List of SearchResult models in provider order

        Raises:
            ValueError: If query is empty
            ProviderRequestFailed: On HTTP, network or decoding failure
        """
        if not query or not query.strip():
            raise ValueError("Search query cannot be empty")

        options = options or SearchOptions()
        body = build_request_body(query.strip(), options)

        if options.category:
            logger.debug(
                "Tavily has no category filter; ignoring it",
                extra={"category": options.category},
            )

        logger.info(
            f"Fetching search results from Tavily: {body['query']}",
            extra={"search_depth": body["search_depth"], "max_results": body["max_results"]},
        )

        headers = {"Authorization": f"Bearer {self.api_key}"}
        if self.client is not None:
            data = await post_json(self.client, TAVILY_SEARCH_API_URL, body, headers)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                data = await post_json(client, TAVILY_SEARCH_API_URL, body, headers)

        items = data.get("results")
        if not isinstance(items, list):
            logger.error("Tavily response has no results list", extra={"query": body["query"]})
            raise ProviderRequestFailed("Search provider returned a malformed response body")

        results = _parse_results(items, keep_content=options.scrape_content)
        logger.info(
            f"Successfully fetched {len(results)} results from Tavily",
            extra={"query": body["query"]},
        )
        return results


def _parse_results(raw_results: list[Any], keep_content: bool) -> list[SearchResult]:
    """Parse raw API results into SearchResult models, skipping invalid items."""
    parsed_results = []

    for i, item in enumerate(raw_results, start=1):
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object search result at rank {i}")
            continue
        try:
            result = SearchResult(
                url=item.get("url", ""),
                title=item.get("title", ""),
                description=item.get("description", ""),
                content=item.get("content") if keep_content else None,
                markdown=item.get("markdown") if keep_content else None,
            )
        except ValidationError as e:
            logger.warning(
                f"Failed to parse search result at rank {i}",
                extra={"error": str(e)},
            )
            continue
        parsed_results.append(result)

    logger.debug(f"Parsed {len(parsed_results)} valid results out of {len(raw_results)} total")

    return parsed_results
