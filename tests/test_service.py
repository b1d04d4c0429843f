"""Tests for magno/service.py."""

import pytest

from magno.config import ConfigManager, Settings, load_settings
from magno.errors import InvalidQuery
from magno.service import AggregationService, validate_query
from magno.sources import DynamicSource, EztvSource, PirateBaySource


class TestValidateQuery:
    def test_strips(self):
        assert validate_query("  ubuntu iso ") == "ubuntu iso"

    @pytest.mark.parametrize("query", [None, "", "   ", 42, b"foo"])
    def test_rejects(self, query):
        with pytest.raises(InvalidQuery):
            validate_query(query)


class TestHandle:
    @pytest.mark.asyncio
    async def test_merges_drops_and_ranks(self, source_a, source_b):
        service = AggregationService([source_a, source_b])
        results = await service.handle("foo")
        assert [(r.title, r.seeds) for r in results] == [("Foo", 12), ("Bar", 5)]
        assert [r.source for r in results] == ["a", "b"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", [None, "", "  \t"])
    async def test_invalid_query_calls_no_source(self, source_a, source_b, query):
        service = AggregationService([source_a, source_b])
        with pytest.raises(InvalidQuery):
            await service.handle(query)
        assert source_a.calls == []
        assert source_b.calls == []

    @pytest.mark.asyncio
    async def test_one_failure_keeps_other_results(self, source_b, broken_source):
        service = AggregationService([broken_source, source_b])
        results = await service.handle("foo")
        assert [(r.title, r.magnet_link, r.seeds) for r in results] == [
            ("Bar", "magnet:b", 5)
        ]

    @pytest.mark.asyncio
    async def test_all_failed_returns_empty(self, make_source):
        service = AggregationService(
            [make_source("x", error=OSError("down")), make_source("y", error=TimeoutError())]
        )
        assert await service.handle("foo") == []

    @pytest.mark.asyncio
    async def test_query_is_stripped(self, source_a):
        await AggregationService([source_a]).handle("  foo  ")
        assert source_a.calls == ["foo"]

    @pytest.mark.asyncio
    async def test_output_invariants(self, make_source):
        records = [
            {"title": f"t{i}", "magnet": f"magnet:{i}", "seeds": s}
            for i, s in enumerate(["3", 40, None, "x", 7, "1,000", -2])
        ]
        records.append({"title": "no magnet", "seeds": 99})
        service = AggregationService(
            [make_source("a", records[:4]), make_source("b", records[4:])]
        )
        results = await service.handle("foo")

        seeds = [r.seeds for r in results]
        assert seeds == sorted(seeds, reverse=True)
        assert all(r.title and r.magnet_link for r in results)
        assert len(results) == 7

    @pytest.mark.asyncio
    async def test_repeatable(self, source_a, source_b):
        service = AggregationService([source_a, source_b])
        first = await service.handle("foo")
        second = await service.handle("foo")
        assert first == second

    @pytest.mark.asyncio
    async def test_no_dedup_across_sources(self, make_source):
        record = {"title": "Same", "magnet": "magnet:same", "seeds": 1}
        service = AggregationService(
            [make_source("a", [record]), make_source("b", [record])]
        )
        results = await service.handle("foo")
        assert len(results) == 2
        assert {r.source for r in results} == {"a", "b"}


class TestHandleWithReport:
    @pytest.mark.asyncio
    async def test_report(self, source_a, broken_source):
        service = AggregationService([source_a, broken_source])
        report = await service.handle_with_report("foo")
        assert [r.title for r in report.results] == ["Foo"]
        assert report.failed_sources == ["broken"]
        assert not report.all_failed

    @pytest.mark.asyncio
    async def test_all_sources_down(self, broken_source):
        report = await AggregationService([broken_source]).handle_with_report("foo")
        assert report.results == []
        assert report.all_failed

    @pytest.mark.asyncio
    async def test_on_update(self, source_a):
        seen = []
        await AggregationService([source_a]).handle_with_report(
            "foo", on_update=lambda u: seen.append(u.status)
        )
        assert seen == ["loading", "done"]


class TestHandleSync:
    def test_blocking(self, source_a, source_b):
        results = AggregationService([source_a, source_b]).handle_sync("foo")
        assert [r.title for r in results] == ["Foo", "Bar"]

    def test_invalid(self, source_a):
        with pytest.raises(InvalidQuery):
            AggregationService([source_a]).handle_sync("")


class TestFromSettings:
    def test_builds_named_sources(self, sites_file):
        settings = Settings(sources=["tpb", "eztv", "nope"], timeout=5, max_results=10)
        service = AggregationService.from_settings(settings, ConfigManager(sites_file))

        sources = service.aggregator.sources
        assert [type(s) for s in sources] == [PirateBaySource, EztvSource]
        assert all(s.max_results == 10 for s in sources)
        assert service.aggregator.timeout == 5
        assert service.source_names == ["tpb", "eztv"]

    @pytest.mark.asyncio
    async def test_zero_timeout_in_config_searches(self, tmp_path, make_source):
        path = tmp_path / "config.yaml"
        path.write_text("timeout: 0\n")
        settings = load_settings(path)
        slow = make_source("a", [{"title": "Foo", "magnet": "magnet:a"}], delay=0.01)

        service = AggregationService([slow], timeout=settings.timeout)
        assert [r.title for r in await service.handle("foo")] == ["Foo"]

    def test_includes_enabled_sites(self, sites_file):
        sites_file.write_text(
            """
version: 1
sites:
  example_org:
    name: Example
    base_url: https://example.org
    search:
      url_template: "{base_url}/search?q={query}"
    selectors:
      result_item: tr
      title: td.name
  shadow:
    name: tpb
    base_url: https://tpb.example
    search:
      url_template: "{base_url}/?q={query}"
    selectors:
      result_item: tr
      title: td
  off:
    name: Off
    base_url: https://off.example
    enabled: false
    search:
      url_template: "{base_url}/?q={query}"
    selectors:
      result_item: tr
      title: td
"""
        )
        settings = Settings(sources=["tpb"])
        service = AggregationService.from_settings(settings, ConfigManager(sites_file))

        assert service.source_names == ["tpb", "Example"]
        assert isinstance(service.aggregator.sources[1], DynamicSource)
