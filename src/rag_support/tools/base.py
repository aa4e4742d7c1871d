"""Search adapter contract implemented by every provider."""

from abc import ABC, abstractmethod

from rag_support.types.search import SearchOptions, SearchResult


class SearchAdapter(ABC):
    """Uniform interface over external web-search providers."""

    name: str

    @abstractmethod
    async def search(
        self, query: str, options: SearchOptions | None = None
    ) -> list[SearchResult]:
        """Return results for ``query`` in provider order.

        Must accept ``options=None`` (all defaults) and must not mutate
        ``options``.

        Raises:
            ProviderRequestFailed: If the provider call fails
        """
