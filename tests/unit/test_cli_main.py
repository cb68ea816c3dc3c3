"""Unit tests for service_registry.cli.main.

Uses Click's test runner (CliRunner).  Most commands run against a manager
backed by a StaticSource, injected by patching the _make_manager factory,
so no installed entry points are required.
"""
from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from service_registry.cli import main as cli_main
from service_registry.cli.main import _make_manager, _resolve_log_level, cli
from service_registry.config import RegistrySettings
from service_registry.discovery.static import StaticSource
from service_registry.manager import ServiceManager
from service_registry.persistence.codec import ActivationRecord
from service_registry.persistence.store import ActivationListStore
from service_registry.registry.service_registry import ServiceRegistry


class Exporter:
    __module__ = "pkg"


class A(Exporter):
    __module__ = "pkg"


class B(Exporter):
    __module__ = "pkg"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def store(tmp_path: Path) -> ActivationListStore:
    return ActivationListStore(tmp_path / "activation")


@pytest.fixture()
def patched_manager(store: ActivationListStore, monkeypatch: pytest.MonkeyPatch) -> list[ServiceManager]:
    """Patch the factory; each invocation gets a fresh manager over the same store."""
    providers = [A(), B()]
    created: list[ServiceManager] = []

    def factory(config_path: str | None, log_level: str | None = None) -> ServiceManager:
        registry = ServiceRegistry([Exporter], StaticSource(providers))
        manager = ServiceManager(registry=registry, store=store, additional_providers=[])
        manager.load()
        created.append(manager)
        return manager

    monkeypatch.setattr(cli_main, "_make_manager", factory)
    return created


# ---------------------------------------------------------------------------
# _make_manager factory
# ---------------------------------------------------------------------------


class TestMakeManager:
    def test_builds_from_config(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(
            "config_dir: activation\n"
            "entry_point_group: service_registry.tests.none\n"
            "categories:\n"
            "  - collections.abc:Sized\n",
            encoding="utf-8",
        )
        manager = _make_manager(str(config))
        assert manager.store.directory == (tmp_path / "activation").resolve()
        assert (tmp_path / "activation" / "collections.abc.Sized.properties").exists()
        manager.close()

    def test_config_error_exits(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text("categories:\n  - no_such_module_xyz:Thing\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            _make_manager(str(config))
        assert exc_info.value.code == 1

    def test_log_level_from_settings_file(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(
            "config_dir: activation\n"
            "entry_point_group: service_registry.tests.none\n"
            "log_level: info\n",
            encoding="utf-8",
        )
        with patch("logging.basicConfig") as basic_config:
            manager = _make_manager(str(config))
        assert basic_config.call_args.kwargs["level"] == logging.INFO
        manager.close()

    def test_log_level_option_overrides_settings_file(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(
            "config_dir: activation\n"
            "entry_point_group: service_registry.tests.none\n"
            "log_level: error\n",
            encoding="utf-8",
        )
        with patch("logging.basicConfig") as basic_config:
            manager = _make_manager(str(config), "debug")
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
        manager.close()


class TestResolveLogLevel:
    def test_option_wins(self) -> None:
        settings = RegistrySettings(log_level="ERROR")
        assert _resolve_log_level("info", settings) == logging.INFO

    def test_falls_back_to_settings(self) -> None:
        settings = RegistrySettings(log_level="DEBUG")
        assert _resolve_log_level(None, settings) == logging.DEBUG

    def test_default_settings_level_is_warning(self) -> None:
        assert _resolve_log_level(None, RegistrySettings()) == logging.WARNING

    def test_cli_passes_option_through(
        self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        seen: list[str | None] = []

        def factory(config_path: str | None, log_level: str | None = None) -> ServiceManager:
            seen.append(log_level)
            raise SystemExit(0)

        monkeypatch.setattr(cli_main, "_make_manager", factory)
        runner.invoke(cli, ["categories"])
        runner.invoke(cli, ["--log-level", "DEBUG", "categories"])
        assert seen == [None, "DEBUG"]


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


class TestVersionCommand:
    def test_version_exits_zero(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0

    def test_version_output_contains_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["version"])
        assert "0.1.0" in result.output


# ---------------------------------------------------------------------------
# categories / list
# ---------------------------------------------------------------------------


class TestListingCommands:
    def test_categories_table(self, runner: CliRunner, patched_manager: list[ServiceManager]) -> None:
        result = runner.invoke(cli, ["categories"])
        assert result.exit_code == 0
        assert "pkg.Exporter" in result.output

    def test_list_all(self, runner: CliRunner, patched_manager: list[ServiceManager]) -> None:
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "pkg.A" in result.output
        assert "pkg.B" in result.output

    def test_list_one_category(self, runner: CliRunner, patched_manager: list[ServiceManager]) -> None:
        result = runner.invoke(cli, ["list", "Exporter"])
        assert result.exit_code == 0
        assert "pkg.A" in result.output

    def test_list_unknown_category(
        self, runner: CliRunner, patched_manager: list[ServiceManager]
    ) -> None:
        result = runner.invoke(cli, ["list", "Renderer"])
        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_categories_empty(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text(f"config_dir: {tmp_path / 'activation'}\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(config), "categories"])
        assert result.exit_code == 0
        assert "No categories configured" in result.output


# ---------------------------------------------------------------------------
# enable / disable
# ---------------------------------------------------------------------------


class TestToggleCommands:
    def test_enable_persists(
        self,
        runner: CliRunner,
        patched_manager: list[ServiceManager],
        store: ActivationListStore,
    ) -> None:
        result = runner.invoke(cli, ["enable", "pkg.B", "--category", "Exporter"])
        assert result.exit_code == 0
        assert "enabled" in result.output
        assert ActivationRecord(name="pkg.B", enabled=True) in store.read_records(Exporter)

    def test_enable_twice_reports_unchanged(
        self, runner: CliRunner, patched_manager: list[ServiceManager]
    ) -> None:
        runner.invoke(cli, ["enable", "pkg.B", "--category", "pkg.Exporter"])
        result = runner.invoke(cli, ["enable", "pkg.B", "--category", "pkg.Exporter"])
        assert result.exit_code == 0
        assert "already enabled" in result.output

    def test_disable_persists(
        self,
        runner: CliRunner,
        patched_manager: list[ServiceManager],
        store: ActivationListStore,
    ) -> None:
        runner.invoke(cli, ["enable", "pkg.A", "--category", "Exporter"])
        result = runner.invoke(cli, ["disable", "pkg.A", "--category", "Exporter"])
        assert result.exit_code == 0
        assert ActivationRecord(name="pkg.A", enabled=False) in store.read_records(Exporter)

    def test_enable_unknown_provider(
        self, runner: CliRunner, patched_manager: list[ServiceManager]
    ) -> None:
        result = runner.invoke(cli, ["enable", "pkg.Missing", "--category", "Exporter"])
        assert result.exit_code == 1
        assert "pkg.Missing" in result.output

    def test_category_option_required(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["enable", "pkg.A"])
        assert result.exit_code != 0
