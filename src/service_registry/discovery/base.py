"""Abstract base class for provider discovery sources.

A discovery source answers one question: which installed provider
instances implement a given capability?  How providers are located and
instantiated is entirely up to the source.

Classes
-------
- DiscoverySource  - abstract base for all sources
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class DiscoverySource(ABC):
    """Locate provider instances implementing a capability.

    Sources must return the same instances for repeated lookups of the same
    installed providers.  Provider identity is what the registry tracks, so
    a source that re-instantiates on every call would make activation
    reloads register duplicates.
    """

    @abstractmethod
    def lookup(self, capability: type) -> list[object]:
        """Return the provider instances that implement ``capability``.

        Parameters
        ----------
        capability:
            The category class to look providers up for.

        Returns
        -------
        list[object]
            Provider instances in discovery order.  Empty when none are
            installed.
        """
