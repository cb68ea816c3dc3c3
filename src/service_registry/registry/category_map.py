"""Category-to-providers map.

Groups provider instances under categories.  Each category owns one ordered
list; membership is tracked by identity, never by equality.

Classes
-------
- CategoryMap  - ordered provider lists keyed by category
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator

from service_registry.capabilities import is_assignable_from, require_category, satisfies
from service_registry.errors import InvalidArgumentError, UnknownCategoryError


def _index_of(providers: list[object], provider: object) -> int:
    for index, member in enumerate(providers):
        if member is provider:
            return index
    return -1


class CategoryMap:
    """Ordered provider lists keyed by category class.

    ``add_provider``, ``delete_provider`` and ``_sweep`` are the only
    mutators of membership.  Subclasses override them to observe every
    change, including those made by ``delete_providers``.

    Parameters
    ----------
    categories:
        Optional categories to declare up front, in order.
    """

    def __init__(self, categories: Iterable[type] = ()) -> None:
        self._categories: dict[type, list[object]] = {}
        for category in categories:
            self.add_category(category)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def add_category(self, category: type) -> None:
        """Declare ``category`` with an empty provider list.

        Re-adding a declared category is a no-op; its members are kept.

        Raises
        ------
        InvalidArgumentError
            If ``category`` is ``None`` or not a class.
        """
        require_category(category)
        self._categories.setdefault(category, [])

    def list_categories(self) -> Iterator[type]:
        """Return an iterator over declared categories in insertion order."""
        return iter(tuple(self._categories))

    def get_categories_of(self, provider: object) -> Iterator[type]:
        """Return an iterator over the categories ``provider`` belongs to."""
        return iter(
            [
                category
                for category, providers in self._categories.items()
                if _index_of(providers, provider) >= 0
            ]
        )

    # ------------------------------------------------------------------
    # Providers
    # ------------------------------------------------------------------

    def add_provider(self, provider: object, category: type | None = None) -> bool:
        """Add ``provider`` to ``category``, or to every category it satisfies.

        Parameters
        ----------
        provider:
            The provider instance.
        category:
            Target category.  When ``None`` the provider is added to every
            declared category whose contract it satisfies.

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
        if provider is None:
            raise InvalidArgumentError("provider should not be None")
        if category is None:
            added = False
            for candidate, providers in self._categories.items():
                if satisfies(provider, candidate) and _index_of(providers, provider) < 0:
                    providers.append(provider)
                    added = True
            return added

        providers = self._providers_of(category)
        if _index_of(providers, provider) >= 0:
            return False
        providers.append(provider)
        return True

    def delete_provider(self, provider: object, category: type | None = None) -> bool:
        """Remove ``provider`` from ``category``, or sweep every category.

        With ``category=None`` the removal is deliberately broad: every member
        whose type ``provider``'s type is assignable to is removed, in every
        category, even when it is a different instance. Subclasses observe the
        removed members by overriding ``_sweep``.

        Returns
        -------
        bool
            True if at least one membership was removed.

        Raises
        ------
        InvalidArgumentError
            If ``provider`` is ``None``.
        UnknownCategoryError
            If ``category`` was never declared.
        """
        if provider is None:
            raise InvalidArgumentError("provider should not be None")
        if category is None:
            return bool(self._sweep(provider))

        providers = self._providers_of(category)
        index = _index_of(providers, provider)
        if index < 0:
            return False
        del providers[index]
        return True

    def delete_providers(self, category: type) -> None:
        """Remove every provider of ``category`` through ``delete_provider``.

        Raises
        ------
        InvalidArgumentError
            If ``category`` is ``None``.
        UnknownCategoryError
            If ``category`` was never declared.
        """
        if category is None:
            raise InvalidArgumentError("category should not be None")
        providers = self._providers_of(category)
        for provider in list(providers):
            self.delete_provider(provider, category)
        providers.clear()

    def get_providers(self, category: type) -> Iterator[object]:
        """Return an iterator over the live provider list of ``category``."""
        return iter(self._providers_of(category))

    def get_providers_list(self, category: type) -> list[object]:
        """Return the live provider list of ``category``.

        The list is owned by the map; mutate it only through the map.
        """
        return self._providers_of(category)

    def contains(self, provider: object, category: type | None = None) -> bool:
        """Return True if ``provider`` is a member of ``category`` (or of any).

        An undeclared ``category`` yields False rather than an error.
        """
        if category is None:
            return any(
                _index_of(providers, provider) >= 0 for providers in self._categories.values()
            )
        providers = self._categories.get(category)
        if providers is None:
            return False
        return _index_of(providers, provider) >= 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _providers_of(self, category: type) -> list[object]:
        try:
            return self._categories[category]
        except KeyError:
            raise UnknownCategoryError(category) from None

    def _sweep(self, provider: object) -> list[object]:
        """Remove every member assignable from ``provider``; return them once each."""
        removed: list[object] = []
        for providers in self._categories.values():
            keep: list[object] = []
            for member in providers:
                if not is_assignable_from(member, provider):
                    keep.append(member)
                elif _index_of(removed, member) < 0:
                    removed.append(member)
            providers[:] = keep
        return removed

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def __contains__(self, category: object) -> bool:
        return category in self._categories

    def __iter__(self) -> Iterator[type]:
        return self.list_categories()

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        counts = ", ".join(
            f"{category.__name__}={len(providers)}"
            for category, providers in self._categories.items()
        )
        return f"{type(self).__name__}({counts})"
