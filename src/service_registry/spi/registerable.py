"""Optional lifecycle capability for service providers.

Classes
-------
- RegisterableService  - receives registration/deregistration notifications
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class RegisterableService(ABC):
    """Providers implementing this are notified when their membership changes.

    Registration usually means the service becomes available and
    deregistration that it is withdrawn; implementations use the hooks to
    initialise and release per-category resources.  Exceptions raised here
    are logged by the registry and never undo the membership change.
    """

    @abstractmethod
    def on_registration(self, category: type | None) -> None:
        """Called after the provider was added to ``category``.

        Parameters
        ----------
        category:
            The category of the originating call, or ``None`` when the
            provider was registered in every category it satisfies.
        """

    @abstractmethod
    def on_deregistration(self, category: type | None) -> None:
        """Called after the provider was removed from ``category``.

        Parameters
        ----------
        category:
            The category of the originating call, or ``None`` for a
            blanket removal from every category.
        """
