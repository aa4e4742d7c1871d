"""Type definitions for rag-support.

This module re-exports all types from submodules for convenient imports.
"""

from rag_support.types.api import (
    HealthResponse,
    RagHeadersResponse,
    SearchRequest,
    SearchResponse,
)
from rag_support.types.quota import ConsumeResult, RateLimitConfig, RateLimitStatus
from rag_support.types.rag import RAGCitation, RAGContextResponse, RAGImage
from rag_support.types.search import SearchCategory, SearchOptions, SearchResult

__all__ = [
    # Search
    "SearchCategory",
    "SearchOptions",
    "SearchResult",
    # RAG context
    "RAGImage",
    "RAGCitation",
    "RAGContextResponse",
    # Quota
    "RateLimitConfig",
    "ConsumeResult",
    "RateLimitStatus",
    # API
    "SearchRequest",
    "SearchResponse",
    "RagHeadersResponse",
    "HealthResponse",
]
