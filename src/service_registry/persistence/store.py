"""Filesystem store for per-category activation lists.

Persists each category's activation list as
``<directory>/<category stable name>.properties`` and reconciles it with
the providers that are currently installed.

Classes
-------
- ActivationListStore  - load/save activation lists for a registry
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from service_registry.capabilities import stable_name
from service_registry.discovery.merge import find_providers
from service_registry.persistence.codec import (
    ActivationRecord,
    format_activation_list,
    parse_activation_list,
)
from service_registry.registry.category_map import CategoryMap
from service_registry.registry.service_registry import ServiceRegistry

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_DIR: Path = Path.home() / ".service-registry"
_FILE_EXTENSION = ".properties"


class ActivationListStore:
    """Reads and writes activation lists, one file per category.

    The store never raises on I/O failure during ``load_service_list`` or
    ``save_service_list``: failures are logged and the caller keeps whatever
    progress was made.  ``read_records`` and ``write_records`` are the raw
    operations and do raise ``OSError``.

    Parameters
    ----------
    directory:
        Directory holding the ``.properties`` files.  Defaults to
        ``~/.service-registry/``.  Created on first write if absent.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory: Path = Path(directory) if directory is not None else _DEFAULT_CONFIG_DIR

    @property
    def directory(self) -> Path:
        """Directory holding the activation lists."""
        return self._directory

    # ------------------------------------------------------------------
    # Raw file access
    # ------------------------------------------------------------------

    def path_for(self, category: type) -> Path:
        """Return the activation list path for ``category``."""
        # Guard against path traversal through odd qualnames.
        safe_name = os.path.basename(stable_name(category))
        return self._directory / f"{safe_name}{_FILE_EXTENSION}"

    def exists(self, category: type) -> bool:
        """Return True if an activation list exists for ``category``."""
        return self.path_for(category).exists()

    def read_records(self, category: type) -> list[ActivationRecord]:
        """Parse and return the activation list of ``category``.

        Raises
        ------
        OSError
            If the file cannot be read.
        """
        text = self.path_for(category).read_text(encoding="utf-8")
        return parse_activation_list(text)

    def write_records(self, category: type, records: Iterable[ActivationRecord]) -> None:
        """Overwrite the activation list of ``category`` with ``records``.

        Raises
        ------
        OSError
            If the directory or file cannot be written.
        """
        self._directory.mkdir(parents=True, exist_ok=True)
        self.path_for(category).write_text(format_activation_list(records), encoding="utf-8")

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def save_service_list(
        self,
        available: CategoryMap,
        registry: ServiceRegistry,
        category: type,
    ) -> None:
        """Persist the activation state of every available provider of ``category``.

        Providers are written in ``available`` order; each is enabled iff it
        is currently registered in ``registry`` under ``category``.

        Parameters
        ----------
        available:
            Map holding the known providers of ``category``.
        registry:
            Registry whose membership defines the enabled flags.
        category:
            The category to persist.
        """
        records = [
            ActivationRecord(
                name=stable_name(provider),
                enabled=registry.contains(provider, category),
            )
            for provider in available.get_providers(category)
        ]
        try:
            self.write_records(category, records)
        except OSError:
            logger.exception("Could not save activation list %s", self.path_for(category))
            return
        logger.debug("Saved %d activation records for %s", len(records), stable_name(category))

    def load_service_list(
        self,
        available: CategoryMap,
        registry: ServiceRegistry,
        additional_providers: Iterable[object],
        category: type,
    ) -> None:
        """Reconcile installed providers of ``category`` with the persisted list.

        1. Installed and ``additional_providers`` are merged with
           ``find_providers``.
        2. Without a file for ``category``, one is written from that set.
        3. Providers named in the file are appended to ``available`` in file
           order; enabled ones are registered in ``registry``.
        4. Providers missing from the file are appended afterwards in
           discovery order, unregistered.  The file is not rewritten.

        File entries naming providers that are no longer installed are
        ignored, and disappear on the next save.

        Parameters
        ----------
        available:
            Receives the known providers of ``category``, in order.  The
            category is added to it when missing.
        registry:
            Discovery source, and receives the enabled providers.
        additional_providers:
            Manually supplied providers of this category.
        category:
            The category to load.

        Raises
        ------
        UnknownCategoryError
            If ``category`` is not declared in ``registry``.
        """
        available.add_category(category)
        found_map = find_providers(registry, additional_providers, [category])
        found = list(found_map.get_providers(category))

        if not self.exists(category):
            self.save_service_list(found_map, registry, category)

        try:
            records = self.read_records(category)
        except (OSError, UnicodeDecodeError):
            logger.exception("Could not read activation list %s", self.path_for(category))
            records = []

        placed: set[int] = set()
        for record in records:
            for provider in found:
                if id(provider) in placed or stable_name(provider) != record.name:
                    continue
                placed.add(id(provider))
                available.add_provider(provider, category)
                if record.enabled:
                    registry.register_service_provider(provider, category)

        deferred = [provider for provider in found if id(provider) not in placed]
        for provider in deferred:
            available.add_provider(provider, category)
            logger.info(
                "New provider %s for %s is not in the activation list",
                stable_name(provider),
                stable_name(category),
            )

    def __repr__(self) -> str:
        return f"ActivationListStore(directory={str(self._directory)!r})"
