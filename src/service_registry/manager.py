"""Service manager facade.

Ties a ``ServiceRegistry``, an ``ActivationListStore``, and
``RegistrySettings`` together so applications can load, inspect, toggle,
and save provider activation in a few calls.

Classes
-------
- ProviderNotFoundError  - no available provider has the requested name
- ServiceManager         - load/save/enable/disable facade
"""
from __future__ import annotations

import logging
from collections.abc import Iterable

from service_registry.capabilities import stable_name
from service_registry.config import RegistrySettings
from service_registry.discovery.entrypoints import EntryPointSource
from service_registry.errors import UnknownCategoryError
from service_registry.persistence.store import ActivationListStore
from service_registry.registry.category_map import CategoryMap
from service_registry.registry.service_registry import ServiceRegistry
from service_registry.spi.metadata import ProviderInfo, describe_provider

logger = logging.getLogger(__name__)


class ProviderNotFoundError(KeyError):
    """Raised when no available provider of a category has the given name."""

    def __init__(self, name: str, category: type) -> None:
        self.name = name
        self.category = category
        super().__init__(f"Provider {name!r} is not available in {stable_name(category)}")

    def __str__(self) -> str:
        return str(self.args[0])


class ServiceManager:
    """Load, inspect, toggle, and save provider activation.

    Parameters
    ----------
    settings:
        Settings to use.  Defaults to ``RegistrySettings()``.
    registry:
        Registry to populate.  When omitted one is built from
        ``settings.categories`` with an ``EntryPointSource`` over
        ``settings.entry_point_group``.
    store:
        Activation list store.  Defaults to one rooted at
        ``settings.config_dir``.
    additional_providers:
        Manually supplied providers.  Defaults to instantiating
        ``settings.providers``.
    """

    def __init__(
        self,
        settings: RegistrySettings | None = None,
        *,
        registry: ServiceRegistry | None = None,
        store: ActivationListStore | None = None,
        additional_providers: Iterable[object] | None = None,
    ) -> None:
        self._settings = settings or RegistrySettings()
        if registry is None:
            registry = ServiceRegistry(
                self._settings.resolve_categories(),
                EntryPointSource(self._settings.entry_point_group),
            )
        self._registry = registry
        self._store = store or ActivationListStore(self._settings.config_dir)
        if additional_providers is None:
            additional_providers = self._settings.instantiate_providers()
        self._additional = list(additional_providers)
        self._available = CategoryMap(self._registry.get_categories())

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def registry(self) -> ServiceRegistry:
        """The registry holding the enabled providers."""
        return self._registry

    @property
    def store(self) -> ActivationListStore:
        """The activation list store."""
        return self._store

    @property
    def settings(self) -> RegistrySettings:
        """The settings this manager was built from."""
        return self._settings

    def categories(self) -> list[type]:
        """Return the declared categories in order."""
        return list(self._registry.get_categories())

    def find_category(self, name: str) -> type:
        """Return the category whose stable name or class name is ``name``.

        Raises
        ------
        UnknownCategoryError
            If no declared category matches.
        """
        for category in self._registry.get_categories():
            if name in (stable_name(category), category.__name__):
                return category
        raise UnknownCategoryError(name)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Reconcile every category with its activation list.

        Enabled providers are registered; membership already present is
        kept.  Use ``reload`` to start from an empty registry.
        """
        self._available = CategoryMap(self._registry.get_categories())
        for category in self._registry.get_categories():
            self._store.load_service_list(
                self._available, self._registry, self._additional, category
            )
        logger.debug("Loaded activation lists from %s", self._store.directory)

    def reload(self) -> None:
        """Deregister every provider, then ``load``."""
        self._registry.deregister_all()
        self.load()

    def save(self) -> None:
        """Persist the activation state of every category."""
        for category in self._registry.get_categories():
            self._store.save_service_list(self._available, self._registry, category)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def available(self, category: type) -> list[object]:
        """Return the known providers of ``category`` in activation-list order."""
        return list(self._available.get_providers(category))

    def is_enabled(self, provider: object, category: type) -> bool:
        """Return True if ``provider`` is registered in ``category``."""
        return self._registry.contains(provider, category)

    def describe(self, category: type) -> list[tuple[ProviderInfo, bool]]:
        """Return ``(info, enabled)`` for every available provider of ``category``."""
        return [
            (describe_provider(provider), self.is_enabled(provider, category))
            for provider in self._available.get_providers(category)
        ]

    def find_provider(self, name: str, category: type) -> object:
        """Return the available provider of ``category`` named ``name``.

        Raises
        ------
        ProviderNotFoundError
            If no available provider has that stable name.
        """
        for provider in self._available.get_providers(category):
            if stable_name(provider) == name:
                return provider
        raise ProviderNotFoundError(name, category)

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def enable(self, name: str, category: type) -> bool:
        """Register the provider ``name`` in ``category``.

        Returns
        -------
        bool
            True if the provider was not registered before.
        """
        return self._registry.register_service_provider(self.find_provider(name, category), category)

    def disable(self, name: str, category: type) -> bool:
        """Deregister the provider ``name`` from ``category``.

        Returns
        -------
        bool
            True if the provider was registered before.
        """
        return self._registry.deregister_service_provider(
            self.find_provider(name, category), category
        )

    def close(self) -> None:
        """Close the underlying registry."""
        self._registry.close()

    def __repr__(self) -> str:
        return f"ServiceManager(registry={self._registry!r}, store={self._store!r})"
