"""Tests for magno/aggregator.py."""

import asyncio

import pytest
import requests

from magno.aggregator import Aggregator
from magno.sources.base import Source


class SyncSource(Source):
    """Source that only implements the blocking fetch."""

    name = "sync"

    def __init__(self, records=None, error=None):
        super().__init__()
        self.records = records or []
        self.error = error

    def fetch(self, query):
        if self.error is not None:
            raise self.error
        return self.records


class TestAggregate:
    @pytest.mark.asyncio
    async def test_merges_all_sources(self, source_a, source_b):
        aggregation = await Aggregator([source_a, source_b]).aggregate("foo")
        titles = sorted(r.title for r in aggregation.results)
        assert titles == ["Bar", "Foo"]
        assert aggregation.failed_sources == []
        assert source_a.calls == ["foo"]
        assert source_b.calls == ["foo"]

    @pytest.mark.asyncio
    async def test_empty_query_invokes_nothing(self, source_a):
        for query in ("", "   "):
            aggregation = await Aggregator([source_a]).aggregate(query)
            assert aggregation.results == []
            assert aggregation.updates == []
        assert source_a.calls == []

    @pytest.mark.asyncio
    async def test_failure_is_contained(self, source_b, broken_source):
        aggregation = await Aggregator([broken_source, source_b]).aggregate("foo")
        assert [r.title for r in aggregation.results] == ["Bar"]
        assert aggregation.failed_sources == ["broken"]
        assert aggregation.succeeded_sources == ["b"]
        assert not aggregation.all_failed

        failed = next(u for u in aggregation.updates if u.source == "broken")
        assert failed.status == "error"
        assert "ConnectionError" in failed.error

    @pytest.mark.asyncio
    async def test_all_failed_is_empty_not_error(self, make_source):
        sources = [
            make_source("x", error=RuntimeError("boom")),
            make_source("y", error=ValueError("bad html")),
        ]
        aggregation = await Aggregator(sources).aggregate("foo")
        assert aggregation.results == []
        assert aggregation.all_failed

    @pytest.mark.asyncio
    async def test_no_sources(self):
        aggregation = await Aggregator([]).aggregate("foo")
        assert aggregation.results == []
        assert not aggregation.all_failed

    @pytest.mark.asyncio
    async def test_timeout_counts_as_failure(self, make_source, source_a):
        slow = make_source("slow", [{"title": "Late", "magnet": "magnet:l"}], delay=5)
        aggregation = await Aggregator([slow, source_a], timeout=0.05).aggregate("foo")

        assert [r.title for r in aggregation.results] == ["Foo"]
        update = next(u for u in aggregation.updates if u.source == "slow")
        assert update.status == "timeout"
        assert "timed out" in update.error
        assert slow.cancelled

    @pytest.mark.asyncio
    async def test_no_timeout(self, make_source):
        slow = make_source("slow", [{"title": "Late", "magnet": "magnet:l"}], delay=0.05)
        aggregation = await Aggregator([slow], timeout=None).aggregate("foo")
        assert [r.title for r in aggregation.results] == ["Late"]

    @pytest.mark.asyncio
    async def test_adapter_timeout_error_is_an_error(self, make_source):
        flaky = make_source("flaky", error=TimeoutError("socket read"))
        aggregation = await Aggregator([flaky], timeout=20).aggregate("foo")

        [update] = aggregation.updates
        assert update.status == "error"
        assert update.error == "TimeoutError: socket read"
        assert aggregation.all_failed

    @pytest.mark.asyncio
    async def test_completion_order(self, make_source):
        slow = make_source("slow", [{"title": "Slow", "magnet": "magnet:s"}], delay=0.1)
        fast = make_source("fast", [{"title": "Fast", "magnet": "magnet:f"}])
        aggregation = await Aggregator([slow, fast]).aggregate("foo")

        assert [u.source for u in aggregation.updates] == ["fast", "slow"]
        assert [r.title for r in aggregation.results] == ["Fast", "Slow"]

    @pytest.mark.asyncio
    async def test_sources_run_concurrently(self, make_source):
        sources = [
            make_source(f"s{i}", [{"title": "T", "magnet": "magnet:t"}], delay=0.2)
            for i in range(5)
        ]
        loop = asyncio.get_running_loop()
        start = loop.time()
        aggregation = await Aggregator(sources).aggregate("foo")
        assert len(aggregation.results) == 5
        assert loop.time() - start < 0.8

    @pytest.mark.asyncio
    async def test_normalize_error_is_contained(self, make_source, source_a):
        class BadNormalize(make_source):
            def normalize(self, raw):
                raise KeyError("title")

        bad = BadNormalize("bad", [{"title": "x", "magnet": "magnet:x"}])
        aggregation = await Aggregator([bad, source_a]).aggregate("foo")
        assert [r.title for r in aggregation.results] == ["Foo"]
        assert aggregation.failed_sources == ["bad"]

    @pytest.mark.asyncio
    async def test_none_result_is_empty(self, make_source):
        class NoneSource(make_source):
            async def search(self, query):
                return None

        aggregation = await Aggregator([NoneSource("none")]).aggregate("foo")
        assert aggregation.results == []
        assert aggregation.updates[0].status == "done"

    @pytest.mark.asyncio
    async def test_blocking_fetch_runs_in_executor(self):
        source = SyncSource([{"title": "Foo", "magnet": "magnet:a", "seeders": "3"}])
        aggregation = await Aggregator([source]).aggregate("foo")
        assert [(r.title, r.seeds) for r in aggregation.results] == [("Foo", 3)]

    @pytest.mark.asyncio
    async def test_blocking_fetch_error(self):
        source = SyncSource(error=requests.ConnectionError("dns"))
        aggregation = await Aggregator([source]).aggregate("foo")
        assert aggregation.all_failed

    @pytest.mark.asyncio
    async def test_raw_count(self, source_b):
        aggregation = await Aggregator([source_b]).aggregate("foo")
        update = aggregation.updates[0]
        assert update.raw_count == 2
        assert len(update.results) == 1

    @pytest.mark.asyncio
    async def test_on_update_callback(self, source_a, broken_source):
        seen = []
        await Aggregator([source_a, broken_source]).aggregate(
            "foo", on_update=lambda u: seen.append((u.source, u.status))
        )
        assert seen[:2] == [("a", "loading"), ("broken", "loading")]
        assert sorted(seen[2:]) == [("a", "done"), ("broken", "error")]


class TestStream:
    @pytest.mark.asyncio
    async def test_loading_then_settled(self, source_a, source_b):
        updates = [u async for u in Aggregator([source_a, source_b]).stream("foo")]
        assert [u.status for u in updates[:2]] == ["loading", "loading"]
        assert sorted(u.source for u in updates[2:]) == ["a", "b"]
        assert all(u.status == "done" for u in updates[2:])

    @pytest.mark.asyncio
    async def test_closing_early_cancels_pending(self, make_source, source_a):
        slow = make_source("slow", delay=5)
        stream = Aggregator([slow, source_a]).stream("foo")

        statuses = []
        async for update in stream:
            statuses.append(update.status)
            if update.status == "done":
                break
        await stream.aclose()

        assert statuses == ["loading", "loading", "done"]
        assert slow.cancelled

    @pytest.mark.asyncio
    async def test_queries_are_isolated(self, make_source):
        source = make_source("a", [{"title": "Foo", "magnet": "magnet:a", "seeds": 1}])
        aggregator = Aggregator([source])
        first, second = await asyncio.gather(
            aggregator.aggregate("one"), aggregator.aggregate("two")
        )
        assert len(first.results) == 1
        assert len(second.results) == 1
        assert sorted(source.calls) == ["one", "two"]
