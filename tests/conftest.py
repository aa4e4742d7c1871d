"""Shared fixtures for the test suite."""

import httpx
import pytest

from rag_support.config import Settings
from rag_support.tools._http_utils import ProviderRequestFailed
from rag_support.tools.base import SearchAdapter
from rag_support.types.search import SearchOptions, SearchResult


class FakeProvider(SearchAdapter):
    """In-memory provider that records calls and returns canned results."""

    def __init__(
        self,
        name: str = "fake",
        results: list[SearchResult] | None = None,
        error: ProviderRequestFailed | None = None,
    ):
        self.name = name
        self.results = results or []
        self.error = error
        self.calls: list[tuple[str, SearchOptions | None]] = []

    async def search(
        self, query: str, options: SearchOptions | None = None
    ) -> list[SearchResult]:
        self.calls.append((query, options))
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def settings() -> Settings:
    """Settings with a provider key and no .env lookup."""
    return Settings(_env_file=None, tavily_api_key="test-tavily-key")


@pytest.fixture
def unconfigured_settings() -> Settings:
    """Settings without a provider key."""
    return Settings(_env_file=None, tavily_api_key="")


@pytest.fixture
def sample_results() -> list[SearchResult]:
    return [
        SearchResult(
            url="https://www.chiefdelphi.com/t/swerve-drive",
            title="Swerve drive discussion",
            description="Teams compare swerve modules",
        ),
        SearchResult(
            url="https://docs.wpilib.org/en/stable/docs/software/kinematics-and-odometry/swerve-drive-kinematics.html",
            title="Swerve Drive Kinematics",
            description="WPILib documentation",
        ),
    ]


@pytest.fixture
def fake_provider_factory():
    """Build FakeProvider instances inside a test."""
    return FakeProvider


@pytest.fixture
def recording_transport():
    """MockTransport that records requests and replies with a configurable response.

    Returns (transport, calls, set_response). ``set_response`` takes either an
    httpx.Response or an exception instance to raise.
    """
    calls: list[httpx.Request] = []
    state: dict = {"response": httpx.Response(200, json={"results": []})}

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        reply = state["response"]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def set_response(reply) -> None:
        state["response"] = reply

    return httpx.MockTransport(handler), calls, set_response
