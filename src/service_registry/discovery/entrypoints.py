"""Entry-point discovery source.

Installed distributions advertise providers under an entry-point group in
their ``pyproject.toml``:

.. code-block:: toml

    [project.entry-points."service_registry.providers"]
    pdf = "my_package.exporters:PdfExporter"

Each entry point may name a class (instantiated with no arguments) or a
ready-made instance.

Classes
-------
- EntryPointSource  - discovery through ``importlib.metadata`` entry points
"""
from __future__ import annotations

import importlib.metadata
import logging

from service_registry.capabilities import satisfies
from service_registry.discovery.base import DiscoverySource

logger = logging.getLogger(__name__)

DEFAULT_GROUP = "service_registry.providers"


class EntryPointSource(DiscoverySource):
    """Discover providers advertised under an entry-point group.

    Each entry point is loaded and instantiated at most once; later lookups
    reuse the cached instance.  Entry points that fail to load or to
    instantiate are logged and skipped, and are not retried.

    Parameters
    ----------
    group:
        Entry-point group to scan.  Defaults to ``"service_registry.providers"``.
    """

    def __init__(self, group: str = DEFAULT_GROUP) -> None:
        self._group = group
        self._instances: dict[str, object] = {}
        self._failed: set[str] = set()

    @property
    def group(self) -> str:
        """The entry-point group scanned by this source."""
        return self._group

    def lookup(self, capability: type) -> list[object]:
        found: list[object] = []
        for entry_point in importlib.metadata.entry_points(group=self._group):
            provider = self._resolve(entry_point)
            if provider is not None and satisfies(provider, capability):
                found.append(provider)
        return found

    def clear_cache(self) -> None:
        """Forget cached instances and failures; the next lookup reloads."""
        self._instances.clear()
        self._failed.clear()

    def _resolve(self, entry_point: importlib.metadata.EntryPoint) -> object | None:
        name = entry_point.name
        if name in self._instances:
            return self._instances[name]
        if name in self._failed:
            return None

        try:
            loaded = entry_point.load()
            provider = loaded() if isinstance(loaded, type) else loaded
        except Exception:  # noqa: BLE001 - a broken plugin must not break discovery
            logger.exception(
                "Failed to load provider entry point %r from group %r", name, self._group
            )
            self._failed.add(name)
            return None

        self._instances[name] = provider
        logger.info("Loaded provider %r from entry point %r", type(provider).__qualname__, name)
        return provider

    def __repr__(self) -> str:
        return f"EntryPointSource(group={self._group!r}, loaded={len(self._instances)})"
