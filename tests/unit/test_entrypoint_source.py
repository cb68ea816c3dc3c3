"""Unit tests for service_registry.discovery.entrypoints.

Entry-point discovery is exercised by patching importlib.metadata so no
installed distributions are needed.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from unittest.mock import MagicMock, patch

import pytest

from service_registry.discovery.entrypoints import DEFAULT_GROUP, EntryPointSource


# ---------------------------------------------------------------------------
# Shared base class and concrete implementations for test fixtures
# ---------------------------------------------------------------------------


class BaseExporter(ABC):
    @abstractmethod
    def export(self) -> str: ...


class AlphaExporter(BaseExporter):
    def export(self) -> str:
        return "alpha"


class BetaExporter(BaseExporter):
    def export(self) -> str:
        return "beta"


class Unrelated:
    pass


def _make_ep(name: str, target: object) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    ep.load.return_value = target
    return ep


@pytest.fixture()
def source() -> EntryPointSource:
    """Fresh source for each test."""
    return EntryPointSource("test.providers")


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestEntryPointSourceInit:
    def test_default_group(self) -> None:
        assert EntryPointSource().group == DEFAULT_GROUP == "service_registry.providers"

    def test_custom_group(self, source: EntryPointSource) -> None:
        assert source.group == "test.providers"

    def test_queries_its_group(self, source: EntryPointSource) -> None:
        with patch("importlib.metadata.entry_points", return_value=[]) as entry_points:
            source.lookup(BaseExporter)
        entry_points.assert_called_once_with(group="test.providers")

    def test_repr(self, source: EntryPointSource) -> None:
        assert "test.providers" in repr(source)


# ---------------------------------------------------------------------------
# lookup
# ---------------------------------------------------------------------------


class TestEntryPointSourceLookup:
    def test_class_is_instantiated(self, source: EntryPointSource) -> None:
        with patch("importlib.metadata.entry_points", return_value=[_make_ep("alpha", AlphaExporter)]):
            found = source.lookup(BaseExporter)
        assert len(found) == 1
        assert isinstance(found[0], AlphaExporter)

    def test_instance_is_used_as_is(self, source: EntryPointSource) -> None:
        instance = BetaExporter()
        with patch("importlib.metadata.entry_points", return_value=[_make_ep("beta", instance)]):
            assert source.lookup(BaseExporter) == [instance]

    def test_discovery_order_preserved(self, source: EntryPointSource) -> None:
        eps = [_make_ep("beta", BetaExporter), _make_ep("alpha", AlphaExporter)]
        with patch("importlib.metadata.entry_points", return_value=eps):
            found = source.lookup(BaseExporter)
        assert [type(p) for p in found] == [BetaExporter, AlphaExporter]

    def test_filters_by_capability(self, source: EntryPointSource) -> None:
        eps = [_make_ep("alpha", AlphaExporter), _make_ep("other", Unrelated)]
        with patch("importlib.metadata.entry_points", return_value=eps):
            found = source.lookup(BaseExporter)
            others = source.lookup(Unrelated)
        assert [type(p) for p in found] == [AlphaExporter]
        assert [type(p) for p in others] == [Unrelated]

    def test_instances_are_cached(self, source: EntryPointSource) -> None:
        ep = _make_ep("alpha", AlphaExporter)
        with patch("importlib.metadata.entry_points", return_value=[ep]):
            first = source.lookup(BaseExporter)
            second = source.lookup(BaseExporter)
        assert first[0] is second[0]
        ep.load.assert_called_once()

    def test_clear_cache_reloads(self, source: EntryPointSource) -> None:
        ep = _make_ep("alpha", AlphaExporter)
        with patch("importlib.metadata.entry_points", return_value=[ep]):
            first = source.lookup(BaseExporter)
            source.clear_cache()
            second = source.lookup(BaseExporter)
        assert first[0] is not second[0]

    def test_handles_empty_entrypoints(self, source: EntryPointSource) -> None:
        with patch("importlib.metadata.entry_points", return_value=[]):
            assert source.lookup(BaseExporter) == []

    def test_logs_loaded_provider(
        self, source: EntryPointSource, caplog: pytest.LogCaptureFixture
    ) -> None:
        with patch("importlib.metadata.entry_points", return_value=[_make_ep("alpha", AlphaExporter)]):
            with caplog.at_level(logging.INFO):
                source.lookup(BaseExporter)
        assert any("AlphaExporter" in r.message for r in caplog.records)


# ---------------------------------------------------------------------------
# Broken entry points
# ---------------------------------------------------------------------------


class TestEntryPointSourceFailures:
    def test_skips_entry_point_that_fails_to_load(
        self, source: EntryPointSource, caplog: pytest.LogCaptureFixture
    ) -> None:
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("broken module")
        eps = [broken, _make_ep("alpha", AlphaExporter)]
        with patch("importlib.metadata.entry_points", return_value=eps):
            with caplog.at_level(logging.ERROR):
                found = source.lookup(BaseExporter)
        assert [type(p) for p in found] == [AlphaExporter]
        assert any("broken" in r.message for r in caplog.records)

    def test_skips_class_that_fails_to_instantiate(self, source: EntryPointSource) -> None:
        class NeedsArgs(BaseExporter):
            def __init__(self, path: str) -> None:
                self.path = path

            def export(self) -> str:
                return self.path

        with patch("importlib.metadata.entry_points", return_value=[_make_ep("args", NeedsArgs)]):
            assert source.lookup(BaseExporter) == []

    def test_failed_entry_point_not_retried(self, source: EntryPointSource) -> None:
        broken = MagicMock()
        broken.name = "broken"
        broken.load.side_effect = ImportError("broken module")
        with patch("importlib.metadata.entry_points", return_value=[broken]):
            source.lookup(BaseExporter)
            source.lookup(BaseExporter)
        broken.load.assert_called_once()
