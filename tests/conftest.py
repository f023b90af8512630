# tests/conftest.py
import httpx
import pytest

from openrouter_flow.llm.client import OpenRouterClient

pytest_plugins = ("pytest_asyncio",)

API_KEY = "sk-or-test-key"


def pytest_configure(config):
    """Register the asyncio marker."""
    config.addinivalue_line(
        "markers",
        "asyncio: mark test as requiring asyncio"
    )


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def api_key():
    return API_KEY


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sent_requests():
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def make_client(sent_requests):
    """Build an OpenRouterClient whose HTTP traffic goes to ``handler``."""
    def _make(handler):
        def _record(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)
        return OpenRouterClient(transport=httpx.MockTransport(_record))
    return _make
