"""Pytest configuration for resources/tests.

Ensures the repository root is on sys.path so tests can import
helpers via absolute package path like `resources.tests.helpers`.
"""

import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from elastic_mcp.mcp.container_context import ElasticMCPServerContext
from elastic_mcp.utils.config import ElasticMCPSettings
from resources.tests.helpers.backend import FakeClock, FakeDocumentStore


@pytest.fixture(autouse=True)
def clean_es_env(monkeypatch):
    """Keep ES_* variables from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.upper().startswith("ES_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    return ElasticMCPSettings(
        url="http://localhost:9200",
        api_key="test-api-key",
        _env_file=None,
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_store():
    return FakeDocumentStore()


@pytest.fixture
def context(settings, fake_store, fake_clock):
    return ElasticMCPServerContext(settings, store=fake_store, clock=fake_clock)
