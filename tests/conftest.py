"""Pytest configuration and shared fixtures."""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from terminator.model_providers.registry import ProviderRegistry  # noqa: E402
from terminator.settings import Settings  # noqa: E402


def mock_client_factory(handler):
    """Client factory whose clients answer every request with ``handler``."""
    transport = httpx.MockTransport(handler)

    def factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=transport)

    return factory


def json_handler(payload, status_code=200, seen=None):
    """Handler returning ``payload`` as JSON and recording requests in ``seen``."""
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)
    return handler


def request_body(request: httpx.Request) -> dict:
    return json.loads(request.content.decode("utf-8"))


@pytest.fixture
def settings():
    """Settings with fixed base URLs, independent of the environment."""
    return Settings(
        openai_base_url="https://openai.test",
        anthropic_base_url="https://anthropic.test",
        gemini_base_url="https://gemini.test",
        openrouter_base_url="https://openrouter.test",
    )


@pytest.fixture
def make_registry(settings):
    """Build a registry whose adapters talk to an in-process handler."""
    def _make(handler):
        return ProviderRegistry(settings=settings, client_factory=mock_client_factory(handler))
    return _make
