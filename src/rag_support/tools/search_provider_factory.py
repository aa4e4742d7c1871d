"""Search provider registry with ordered fallback.

The registry is built once by the application and handed to whatever needs
to search:

    registry = ProviderRegistry(settings)
    results = await registry.search_with_fallback("swerve drive", SearchOptions())
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING

from rag_support.config import ConfigurationMissing
from rag_support.consts import PROVIDER_PRIORITY
from rag_support.tools._http_utils import ProviderRequestFailed
from rag_support.tools.base import SearchAdapter
from rag_support.tools.tavily_search import TavilySearchProvider
from rag_support.types.search import SearchOptions, SearchResult
from rag_support.utils.logging import setup_logger

if TYPE_CHECKING:
    from rag_support.config import Settings

logger = setup_logger(__name__)

ProviderFactory = Callable[["Settings"], SearchAdapter]


def _create_tavily_provider(settings: Settings) -> SearchAdapter:
    """Create the Tavily provider from settings."""
    if not settings.tavily_api_key:
        raise ConfigurationMissing(["tavily_api_key"])
    return TavilySearchProvider(api_key=settings.tavily_api_key, timeout=settings.search_timeout)


DEFAULT_FACTORIES: dict[str, ProviderFactory] = {
    "tavily": _create_tavily_provider,
}


class ProviderRegistry:
    """Constructs each provider at most once and serves it for the registry lifetime.

    Construction happens on first use under a lock, so concurrent first
    callers see the same instance, or the same ConfigurationMissing error.
    With ``eager=True`` all required settings are checked up front instead.
    """

    def __init__(
        self,
        settings: Settings,
        factories: dict[str, ProviderFactory] | None = None,
        priority: tuple[str, ...] | None = None,
        eager: bool = False,
    ):
        if eager:
            settings.validate_required()

        self.settings = settings
        self.factories = dict(factories or DEFAULT_FACTORIES)
        self.priority = priority or tuple(n for n in PROVIDER_PRIORITY if n in self.factories)
        if not self.priority:
            raise ValueError("ProviderRegistry needs at least one provider")

        self._instances: dict[str, SearchAdapter] = {}
        self._errors: dict[str, ConfigurationMissing] = {}
        self._lock = asyncio.Lock()

    async def get_provider(self, name: str | None = None) -> SearchAdapter:
        """Return the cached provider, constructing it on first use.

        Args:
            name: Provider name. If None, the highest-priority provider

        Raises:
            ConfigurationMissing: If the provider's credential is not configured
            KeyError: If no factory is registered under ``name``
        """
        name = name or self.priority[0]

        instance = self._instances.get(name)
        if instance is not None:
            return instance

        async with self._lock:
            if name in self._instances:
                return self._instances[name]
            if name in self._errors:
                raise self._errors[name]

            factory = self.factories[name]
            try:
                instance = factory(self.settings)
            except ConfigurationMissing as e:
                logger.error(
                    "Search provider is not configured",
                    extra={"provider": name, "missing": e.missing_fields},
                )
                self._errors[name] = e
                raise

            self._instances[name] = instance
            logger.info("Search provider initialized", extra={"provider": name})
            return instance

    async def search_with_fallback(
        self, query: str, options: SearchOptions | None = None
    ) -> list[SearchResult]:
        """Search with each provider in priority order until one succeeds.

        An empty result list counts as success. With a single provider this is
        direct delegation.

        Raises:
            ConfigurationMissing: If a provider's credential is not configured
            ProviderRequestFailed: The last failure, if every provider failed
        """
        failures: list[ProviderRequestFailed] = []

        for name in self.priority:
            provider = await self.get_provider(name)
            try:
                return await provider.search(query, options)
            except ProviderRequestFailed as e:
                failures.append(e)
                logger.warning(
                    f"Search provider {name} failed, trying next",
                    extra={"provider": name, "status_code": e.status_code},
                )

        # priority is never empty, so at least one failure was recorded
        raise failures[-1]
