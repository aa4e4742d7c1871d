from typing import NamedTuple


class ProviderLimits(NamedTuple):
    max_results: int
    max_chunks: int


PROVIDER_LIMITS: dict[str, ProviderLimits] = {
    "tavily": ProviderLimits(max_results=20, max_chunks=5),
}

# Provider priority for search_with_fallback; first entry is tried first.
PROVIDER_PRIORITY: tuple[str, ...] = ("tavily",)

DEFAULT_MAX_RESULTS = 3
DEFAULT_SCRAPE_CONTENT = True

# Chunk density requested when scraping, before clamping to the provider maximum.
SCRAPE_CHUNKS_PER_SOURCE = 5
# Baseline sent when no content is requested.
BASIC_CHUNKS_PER_SOURCE = 3

# Rate limiting
FIXED_WINDOW = "fixed window"
DAILY_PERIOD_MS = 24 * 60 * 60 * 1000
ANONYMOUS_DAILY = "anonymousDaily"
AUTHENTICATED_DAILY = "authenticatedDaily"

# Response headers carrying RAG image context
RAG_IMAGES_HEADER = "X-RAG-Images"
RAG_RELATED_IMAGES_HEADER = "X-RAG-Related-Images"
RAG_IMAGES_SKIPPED_HEADER = "X-RAG-Images-Skipped"
