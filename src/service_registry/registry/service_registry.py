"""Service provider registry.

``ServiceRegistry`` registers, deregisters, and looks up provider instances
by category.  Providers implementing ``RegisterableService`` are told about
every effective membership change.

Classes
-------
- ServiceRegistry  - category map with lifecycle notification

Functions
---------
- default_registry        - opt-in process-wide registry
- reset_default_registry  - drop the process-wide registry (for tests)
"""
from __future__ import annotations

import logging
import weakref
from collections.abc import Iterable, Iterator

from service_registry.capabilities import require_category, stable_name
from service_registry.discovery.base import DiscoverySource
from service_registry.discovery.entrypoints import EntryPointSource
from service_registry.errors import InvalidArgumentError, NotSupportedError
from service_registry.registry.category_map import CategoryMap
from service_registry.registry.filtered import FilteredIterator, FilterLike
from service_registry.spi.registerable import RegisterableService

logger = logging.getLogger(__name__)


def _category_label(category: type | None) -> str:
    return "all categories" if category is None else stable_name(category)


def _notify(provider: object, hook: str, category: type | None) -> None:
    """Invoke ``hook`` on a registerable provider, logging any failure."""
    if not isinstance(provider, RegisterableService):
        return
    try:
        getattr(provider, hook)(category)
    except Exception:  # noqa: BLE001 - provider failures never undo membership changes
        logger.exception(
            "Provider %s raised in %s(%s)",
            stable_name(provider),
            hook,
            _category_label(category),
        )


class _RegistryCategoryMap(CategoryMap):
    """Category map that notifies providers after each effective change."""

    def add_provider(self, provider: object, category: type | None = None) -> bool:
        added = super().add_provider(provider, category)
        if added:
            logger.debug("Registered %s in %s", stable_name(provider), _category_label(category))
            _notify(provider, "on_registration", category)
        return added

    def delete_provider(self, provider: object, category: type | None = None) -> bool:
        removed = super().delete_provider(provider, category)
        # Blanket removals are reported per removed member by _sweep.
        if removed and category is not None:
            logger.debug("Deregistered %s from %s", stable_name(provider), stable_name(category))
            _notify(provider, "on_deregistration", category)
        return removed

    def _sweep(self, provider: object) -> list[object]:
        removed = super()._sweep(provider)
        for member in removed:
            logger.debug("Deregistered %s from all categories", stable_name(member))
            _notify(member, "on_deregistration", None)
        return removed


def _teardown(categories: CategoryMap) -> None:
    for category in categories.list_categories():
        categories.delete_providers(category)


class ServiceRegistry:
    """Register, deregister, and look up service providers by category.

    Categories are fixed at construction.  Providers are shared references;
    the registry only tracks their membership.  The registry is not
    thread-safe: guard an instance with one external lock if it is shared
    between threads.

    Parameters
    ----------
    categories:
        Category classes to declare, in order.
    discovery:
        Source consulted by ``lookup_providers``.  Defaults to an
        ``EntryPointSource`` over the ``service_registry.providers`` group.

    Raises
    ------
    InvalidArgumentError
        If ``categories`` is ``None`` or contains a non-class.
    """

    def __init__(
        self,
        categories: Iterable[type],
        discovery: DiscoverySource | None = None,
    ) -> None:
        if categories is None:
            raise InvalidArgumentError("categories should not be None")
        self._categories = _RegistryCategoryMap(categories)
        self._discovery: DiscoverySource = discovery if discovery is not None else EntryPointSource()
        self._finalizer = weakref.finalize(self, _teardown, self._categories)

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    @property
    def discovery(self) -> DiscoverySource:
        """The discovery source used by ``lookup_providers``."""
        return self._discovery

    def lookup_providers(self, category: type) -> Iterator[object]:
        """Return installed providers implementing ``category``.

        The registry itself is not modified.
        """
        return iter(self._discovery.lookup(require_category(category)))

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_service_provider(self, provider: object, category: type | None = None) -> bool:
        """Register ``provider`` in ``category``, or in every category it satisfies.

        Returns
        -------
        bool
            True if at least one membership was added.

        Raises
        ------
        InvalidArgumentError
            If ``provider`` is ``None``.
        UnknownCategoryError
            If ``category`` was never declared.
        """
        return self._categories.add_provider(provider, category)

    def register_service_providers(self, providers: Iterable[object]) -> None:
        """Register each provider in every category it satisfies."""
        for provider in providers:
            self._categories.add_provider(provider, None)

    def deregister_service_provider(self, provider: object, category: type | None = None) -> bool:
        """Deregister ``provider`` from ``category``, or sweep every category.

        The sweep (``category=None``) removes every member that ``provider``'s
        type is assignable to, not only ``provider`` itself.  Each removed member,
        not ``provider``, receives ``on_deregistration(None)``.

        Returns
        -------
        bool
            True if at least one membership was removed.
        """
        return self._categories.delete_provider(provider, category)

    def deregister_all(self, category: type | None = None) -> None:
        """Deregister every provider from ``category``, or from all categories."""
        if category is None:
            _teardown(self._categories)
            return
        self._categories.delete_providers(category)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_service_providers(
        self,
        category: type,
        filter: FilterLike | None = None,
        use_ordering: bool = False,
    ) -> Iterator[object]:
        """Return an iterator over the providers registered in ``category``.

        Parameters
        ----------
        category:
            The category to list.
        filter:
            Optional predicate; only matching providers are yielded.
        use_ordering:
            Accepted for API compatibility.  Registration order is the only
            order the registry knows.

        Raises
        ------
        UnknownCategoryError
            If ``category`` was never declared.
        """
        providers = self._categories.get_providers(category)
        if filter is None:
            return providers
        return FilteredIterator(filter, providers)

    def get_service_providers_as_list(self, category: type) -> list[object]:
        """Return the live provider list of ``category``."""
        return self._categories.get_providers_list(category)

    def contains(self, provider: object, category: type | None = None) -> bool:
        """Return True if ``provider`` is registered in ``category`` (or in any)."""
        return self._categories.contains(provider, category)

    def get_categories(self) -> Iterator[type]:
        """Return an iterator over the declared categories."""
        return self._categories.list_categories()

    def get_categories_of(self, provider: object) -> Iterator[type]:
        """Return an iterator over the categories ``provider`` is registered in."""
        return self._categories.get_categories_of(provider)

    # ------------------------------------------------------------------
    # Reserved extension points
    # ------------------------------------------------------------------

    def get_service_provider_by_class(self, provider_class: type) -> object:
        """Reserved.  Always raises ``NotSupportedError``."""
        raise NotSupportedError("get_service_provider_by_class")

    def set_ordering(self, category: type, first_provider: object, second_provider: object) -> bool:
        """Reserved.  Always raises ``NotSupportedError``."""
        raise NotSupportedError("set_ordering")

    def unset_ordering(
        self, category: type, first_provider: object, second_provider: object
    ) -> bool:
        """Reserved.  Always raises ``NotSupportedError``."""
        raise NotSupportedError("unset_ordering")

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        """True once ``close`` ran (explicitly or at garbage collection)."""
        return not self._finalizer.alive

    def close(self) -> None:
        """Deregister every provider, notifying registerable ones.

        Idempotent.  Also runs automatically when the registry is garbage
        collected.
        """
        self._finalizer()

    def __enter__(self) -> ServiceRegistry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        names = ", ".join(c.__name__ for c in self._categories.list_categories())
        return f"ServiceRegistry(categories=[{names}])"


# ---------------------------------------------------------------------------
# Opt-in process default
# ---------------------------------------------------------------------------

_default_registry: ServiceRegistry | None = None


def default_registry(categories: Iterable[type] = ()) -> ServiceRegistry:
    """Return the process-wide registry, creating it on first use.

    ``categories`` is only used when the registry is created.  Prefer
    passing an explicit ``ServiceRegistry`` through application code; this
    accessor exists for applications that really want a single default.
    """
    global _default_registry
    if _default_registry is None:
        _default_registry = ServiceRegistry(categories)
    return _default_registry


def reset_default_registry() -> None:
    """Close and drop the process-wide registry (for testing)."""
    global _default_registry
    if _default_registry is not None:
        _default_registry.close()
    _default_registry = None
