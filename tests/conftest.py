"""
Pytest configuration and shared fixtures for Fennec tests.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from fennec.adapters.mock import MockTransport
from fennec.client import FennecClient


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_transport() -> MockTransport:
    """A mock transport answering a handful of common routes."""
    transport = MockTransport()
    transport.add("GET", "/", body=b'{"version": {"number": "6.8.2"}}',
                  headers={"Content-Type": "application/json"})
    transport.add("GET", "/logs-2024/_search", body=b'{"hits": {"total": 0, "hits": []}}',
                  headers={"Content-Type": "application/json"})
    return transport


@pytest.fixture
def client(mock_transport: MockTransport) -> FennecClient:
    """A client wired to the mock transport."""
    return FennecClient(transport=mock_transport)


@pytest.fixture
def make_config_yaml(temp_dir: Path):
    """
    Factory fixture that writes a YAML config file and returns its path.

    Usage:
        def test_something(make_config_yaml):
            path = make_config_yaml("transport:\\n  base_url: http://es:9200\\n")
    """
    def _make_config(content: str) -> Path:
        config_path = temp_dir / "config.yaml"
        config_path.write_text(content)
        return config_path

    return _make_config
