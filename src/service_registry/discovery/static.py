"""In-memory discovery source.

Holds an explicit list of provider instances.  Useful in tests and in
applications that wire their providers by hand.

Classes
-------
- StaticSource  - discovery over a fixed, appendable provider list
"""
from __future__ import annotations

from collections.abc import Iterable

from service_registry.capabilities import satisfies
from service_registry.discovery.base import DiscoverySource
from service_registry.errors import InvalidArgumentError


class StaticSource(DiscoverySource):
    """Discovery source backed by a plain list of instances.

    Parameters
    ----------
    providers:
        Initial provider instances, in discovery order.
    """

    def __init__(self, providers: Iterable[object] = ()) -> None:
        self._providers: list[object] = []
        for provider in providers:
            self.add(provider)

    def add(self, provider: object) -> None:
        """Append ``provider``; simulates installing a new extension."""
        if provider is None:
            raise InvalidArgumentError("provider should not be None")
        if not any(existing is provider for existing in self._providers):
            self._providers.append(provider)

    def remove(self, provider: object) -> None:
        """Forget ``provider``; simulates uninstalling an extension."""
        self._providers = [p for p in self._providers if p is not provider]

    def lookup(self, capability: type) -> list[object]:
        return [p for p in self._providers if satisfies(p, capability)]

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"StaticSource(providers={len(self._providers)})"
