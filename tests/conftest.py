# tests/conftest.py
"""
Shared pytest fixtures: feed fixture files and their file:// URLs.
"""
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def feed_url():
    """Return a factory mapping a fixture file name to its file:// URL."""
    def _url(name: str) -> str:
        return (FIXTURES / name).as_uri()
    return _url


@pytest.fixture
def feed_bytes():
    """Return a factory reading a fixture file as bytes."""
    def _read(name: str) -> bytes:
        return (FIXTURES / name).read_bytes()
    return _read
