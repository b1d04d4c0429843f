"""
Pytest configuration and shared fixtures.
"""

import asyncio
from typing import Any

import pytest

from magno.normalize import DEFAULT_FIELDS, FieldMap
from magno.sources.base import Source


class FakeSource(Source):
    """In-memory source that records its calls."""

    def __init__(
        self,
        name: str,
        records: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        fields: FieldMap = DEFAULT_FIELDS,
    ):
        super().__init__()
        self.name = name
        self.records = records or []
        self.error = error
        self.delay = delay
        self.fields = fields
        self.calls: list[str] = []
        self.cancelled = False

    def fetch(self, query: str) -> list[dict[str, Any]]:
        return list(self.records)

    async def search(self, query: str) -> list[dict[str, Any]]:
        self.calls.append(query)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return list(self.records)


# ============================================================
# Source Fixtures
# ============================================================


@pytest.fixture
def make_source():
    """Factory for fake sources."""
    return FakeSource


@pytest.fixture
def source_a():
    """Source with one record whose seeds arrive as a string."""
    return FakeSource("a", [{"title": "Foo", "magnet": "magnet:a", "seeds": "12"}])


@pytest.fixture
def source_b():
    """Source with one valid record and one record missing a title."""
    return FakeSource(
        "b",
        [
            {"title": "Bar", "magnet": "magnet:b", "seeds": 5},
            {"title": "", "magnet": "magnet:c", "seeds": 9},
        ],
    )


@pytest.fixture
def broken_source():
    """Source that always fails."""
    return FakeSource("broken", error=ConnectionError("connection refused"))


@pytest.fixture
def sites_file(tmp_path):
    """Path for a dynamic sites YAML file."""
    return tmp_path / "sites.yaml"
