"""CLI entry point for service-registry.

Invoked as::

    service-registry [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m service_registry.cli.main

Commands
--------
- version     - Show version information
- categories  - List declared categories with provider counts
- list        - Show available providers and their activation state
- enable      - Activate a provider in a category and save
- disable     - Deactivate a provider in a category and save
"""
from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from service_registry.capabilities import stable_name
from service_registry.config import ConfigError, RegistrySettings, load_settings
from service_registry.errors import UnknownCategoryError
from service_registry.manager import ProviderNotFoundError, ServiceManager

console = Console()

# ---------------------------------------------------------------------------
# Manager factory
# ---------------------------------------------------------------------------


def _resolve_log_level(option: str | None, settings: RegistrySettings) -> int:
    """Return the ``--log-level`` option as a level, else ``settings.log_level``."""
    if option is not None:
        return logging.getLevelName(option.upper())
    return settings.log_level_number


def _make_manager(config_path: str | None, log_level: str | None = None) -> ServiceManager:
    """Build a loaded ``ServiceManager`` from the settings file at ``config_path``.

    Logging is configured before loading so discovery messages are visible.

    Parameters
    ----------
    config_path:
        YAML settings file, or ``None`` for defaults.
    log_level:
        Level from ``--log-level``.  ``None`` uses the settings file.

    Returns
    -------
    ServiceManager
        A manager whose activation lists are already loaded.
    """
    try:
        settings = load_settings(config_path)
        manager = ServiceManager(settings)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        sys.exit(1)
    logging.basicConfig(
        level=_resolve_log_level(log_level, settings),
        format="%(levelname)s %(name)s: %(message)s",
    )
    manager.load()
    return manager


def _resolve_category(manager: ServiceManager, name: str) -> type:
    try:
        return manager.find_category(name)
    except UnknownCategoryError:
        console.print(f"[red]Unknown category:[/red] {name}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="service-registry")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML settings file.",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.  Defaults to log_level from the settings file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Discover, activate, and persist pluggable service providers"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["log_level"] = log_level


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    from service_registry import __version__

    console.print(f"[bold]service-registry[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# categories
# ---------------------------------------------------------------------------


@cli.command(name="categories")
@click.pass_context
def categories_command(ctx: click.Context) -> None:
    """List declared categories with available and enabled counts."""
    manager = _make_manager(ctx.obj["config_path"], ctx.obj["log_level"])
    categories = manager.categories()
    if not categories:
        console.print("[yellow]No categories configured.[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("Category", style="cyan")
    table.add_column("Available", justify="right")
    table.add_column("Enabled", justify="right")
    for category in categories:
        available = manager.available(category)
        enabled = sum(1 for p in available if manager.is_enabled(p, category))
        table.add_row(stable_name(category), str(len(available)), str(enabled))
    console.print(table)


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@cli.command(name="list")
@click.argument("category", required=False)
@click.pass_context
def list_command(ctx: click.Context, category: str | None) -> None:
    """Show available providers of CATEGORY (or of every category)."""
    manager = _make_manager(ctx.obj["config_path"], ctx.obj["log_level"])
    if category:
        categories = [_resolve_category(manager, category)]
    else:
        categories = manager.categories()

    for selected in categories:
        rows = manager.describe(selected)
        if not rows:
            console.print(f"[yellow]No providers available for {stable_name(selected)}.[/yellow]")
            continue
        table = Table(title=stable_name(selected))
        table.add_column("Provider", style="cyan")
        table.add_column("Enabled")
        table.add_column("Version")
        table.add_column("Vendor")
        for info, enabled in rows:
            table.add_row(
                info.plugin_id,
                "[green]yes[/green]" if enabled else "[dim]no[/dim]",
                info.version or "-",
                info.vendor or "-",
            )
        console.print(table)


# ---------------------------------------------------------------------------
# enable / disable
# ---------------------------------------------------------------------------


def _toggle(ctx: click.Context, name: str, category: str, enable: bool) -> None:
    manager = _make_manager(ctx.obj["config_path"], ctx.obj["log_level"])
    selected = _resolve_category(manager, category)
    try:
        changed = manager.enable(name, selected) if enable else manager.disable(name, selected)
    except ProviderNotFoundError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        sys.exit(1)
    manager.save()

    state = "enabled" if enable else "disabled"
    if changed:
        console.print(f"[green]{name} {state}[/green] in {stable_name(selected)}")
    else:
        console.print(f"[yellow]{name} was already {state}[/yellow] in {stable_name(selected)}")


@cli.command(name="enable")
@click.argument("name")
@click.option("--category", required=True, help="Category stable name or class name.")
@click.pass_context
def enable_command(ctx: click.Context, name: str, category: str) -> None:
    """Activate provider NAME and save the activation list."""
    _toggle(ctx, name, category, enable=True)


@cli.command(name="disable")
@click.argument("name")
@click.option("--category", required=True, help="Category stable name or class name.")
@click.pass_context
def disable_command(ctx: click.Context, name: str, category: str) -> None:
    """Deactivate provider NAME and save the activation list."""
    _toggle(ctx, name, category, enable=False)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
