"""Validation tests for search and RAG schemas."""

import pytest
from pydantic import ValidationError

from rag_support.types.rag import RAGContextResponse
from rag_support.types.search import SearchOptions, SearchResult


class TestSearchOptions:
    def test_defaults(self):
        options = SearchOptions()

        assert options.max_results == 3
        assert options.scrape_content is True
        assert options.include_domains is None
        assert options.category is None

    def test_frozen(self):
        options = SearchOptions()

        with pytest.raises(ValidationError):
            options.scrape_content = False

    @pytest.mark.parametrize("max_results", [0, -1])
    def test_max_results_positive(self, max_results):
        with pytest.raises(ValidationError):
            SearchOptions(max_results=max_results)

    def test_domains_from_list(self):
        options = SearchOptions(include_domains=["a.com", "b.com", "a.com"])
        assert options.include_domains == frozenset({"a.com", "b.com"})

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            SearchOptions(category="podcast")

    def test_known_category(self):
        assert SearchOptions(category="research paper").category == "research paper"

    @pytest.mark.parametrize("date", ["2024/01/01", "01-01-2024", "yesterday"])
    def test_bad_date_format(self, date):
        with pytest.raises(ValidationError, match="YYYY-MM-DD"):
            SearchOptions(start_published_date=date)

    def test_inverted_date_range(self):
        with pytest.raises(ValidationError, match="must not be after"):
            SearchOptions(start_published_date="2025-01-01", end_published_date="2024-01-01")

    def test_open_ended_range(self):
        options = SearchOptions(end_published_date="2024-06-30")
        assert options.start_published_date is None


class TestSearchResult:
    def test_optional_content(self):
        result = SearchResult(url="https://example.com", title="t", description="d")
        assert result.content is None
        assert result.markdown is None

    def test_url_required(self):
        with pytest.raises(ValidationError):
            SearchResult(url="", title="t", description="d")


class TestRAGContextResponse:
    def test_minimal(self):
        rag = RAGContextResponse(context="ctx", query_id="q")

        assert rag.images == []
        assert rag.image_map == {}
        assert rag.total_chunks == 0
        assert rag.images_skipped is None

    def test_from_backend_json(self):
        rag = RAGContextResponse.model_validate(
            {
                "context": "Use [img:a] [1]",
                "citations": [{"id": "1", "team": "254", "year": "2024", "page": 12}],
                "images": [{"image_id": "a", "url": "/images/a.png"}],
                "image_map": {"[img:a]": {"image_id": "a", "url": "/images/a.png"}},
                "query_id": "q-1",
                "total_chunks": 15,
            }
        )

        assert rag.citations[0].page == 12
        assert rag.image_map["[img:a]"].caption is None
