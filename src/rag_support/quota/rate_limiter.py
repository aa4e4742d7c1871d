"""Fixed-window daily quotas per identity class.

Each (identity, window, window epoch) tuple owns one counter. Admission is a
single compare-and-increment on the counter store, so concurrent requests
can never push a counter past the window's rate.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from rag_support.consts import ANONYMOUS_DAILY, AUTHENTICATED_DAILY, DAILY_PERIOD_MS, FIXED_WINDOW
from rag_support.types.quota import ConsumeResult, RateLimitConfig, RateLimitStatus
from rag_support.utils.logging import setup_logger

if TYPE_CHECKING:
    from rag_support.config import Settings

logger = setup_logger(__name__)

CounterKey = tuple[str, str, int]


class UnknownQuotaWindow(KeyError):
    """Raised when a window name is not part of the configuration."""


def build_rate_limit_config(settings: Settings) -> Mapping[str, RateLimitConfig]:
    """Build the two daily windows from settings. The result is read-only."""
    return MappingProxyType(
        {
            ANONYMOUS_DAILY: RateLimitConfig(
                kind=FIXED_WINDOW,
                rate=settings.rate_limit_anonymous_daily,
                period=DAILY_PERIOD_MS,
            ),
            AUTHENTICATED_DAILY: RateLimitConfig(
                kind=FIXED_WINDOW,
                rate=settings.rate_limit_authenticated_daily,
                period=DAILY_PERIOD_MS,
            ),
        }
    )


def window_for(is_anonymous: bool) -> str:
    """Window name for an identity class."""
    return ANONYMOUS_DAILY if is_anonymous else AUTHENTICATED_DAILY


class CounterStore(ABC):
    """Storage for quota counters."""

    @abstractmethod
    def increment_if_below(self, key: CounterKey, limit: int) -> tuple[bool, int]:
        """Atomically add one to the counter if it is below ``limit``.

        Returns:
            (admitted, count after the call)
        """

    @abstractmethod
    def get(self, key: CounterKey) -> int:
        """Current count for ``key`` (0 if unseen)."""


class InMemoryCounterStore(CounterStore):
    """Process-local counter store.

    Counters belonging to earlier epochs of a window are dropped once a later
    epoch is seen for that window.
    """

    def __init__(self) -> None:
        self._counts: dict[CounterKey, int] = {}
        self._latest_epoch: dict[str, int] = {}
        self._lock = threading.Lock()

    def _prune(self, window_name: str, epoch: int) -> None:
        latest = self._latest_epoch.get(window_name)
        if latest is not None and epoch <= latest:
            return
        self._latest_epoch[window_name] = epoch
        stale = [k for k in self._counts if k[1] == window_name and k[2] < epoch]
        for k in stale:
            del self._counts[k]

    def increment_if_below(self, key: CounterKey, limit: int) -> tuple[bool, int]:
        with self._lock:
            self._prune(key[1], key[2])
            count = self._counts.get(key, 0)
            if count >= limit:
                return False, count
            count += 1
            self._counts[key] = count
            return True, count

    def get(self, key: CounterKey) -> int:
        with self._lock:
            return self._counts.get(key, 0)

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)


class QuotaLedger:
    """Gate for expensive work, consulted before searching.

    Args:
        config: Named windows, usually from build_rate_limit_config()
        store: Counter store. If None, an InMemoryCounterStore is used
        clock: Returns the current time in seconds. If None, time.time
    """

    def __init__(
        self,
        config: Mapping[str, RateLimitConfig],
        store: CounterStore | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.config = config
        self.store = store or InMemoryCounterStore()
        self._clock = clock or time.time

    def _window(self, window_name: str) -> RateLimitConfig:
        try:
            return self.config[window_name]
        except KeyError:
            raise UnknownQuotaWindow(window_name) from None

    def _epoch(self, window: RateLimitConfig) -> int:
        now_ms = int(self._clock() * 1000)
        return now_ms // window.period

    async def consume(self, identity_key: str, window_name: str) -> ConsumeResult:
        """Count one action for ``identity_key`` if the window allows it.

        Raises:
            UnknownQuotaWindow: If ``window_name`` is not configured
        """
        window = self._window(window_name)
        key = (identity_key, window_name, self._epoch(window))

        allowed, count = self.store.increment_if_below(key, window.rate)
        remaining = max(window.rate - count, 0)

        if not allowed:
            logger.info(
                "Quota exhausted",
                extra={"identity": identity_key, "window": window_name, "limit": window.rate},
            )
        return ConsumeResult(allowed=allowed, remaining=remaining)

    async def check(self, identity_key: str, window_name: str) -> ConsumeResult:
        """Report whether the next consume would be admitted, without consuming."""
        window = self._window(window_name)
        count = self.store.get((identity_key, window_name, self._epoch(window)))
        return ConsumeResult(allowed=count < window.rate, remaining=max(window.rate - count, 0))

    async def status(self, identity_key: str, window_name: str) -> RateLimitStatus:
        """Usage of the current window and when it resets."""
        window = self._window(window_name)
        epoch = self._epoch(window)
        count = self.store.get((identity_key, window_name, epoch))
        return RateLimitStatus(
            window_name=window_name,
            limit=window.rate,
            count=count,
            remaining=max(window.rate - count, 0),
            reset_at=(epoch + 1) * window.period,
        )
