"""Merge discovered and manually supplied providers.

Functions
---------
- find_providers  - build a per-category provider map from discovery and a manual list
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from service_registry.capabilities import stable_name
from service_registry.registry.category_map import CategoryMap

if TYPE_CHECKING:
    from service_registry.registry.service_registry import ServiceRegistry

logger = logging.getLogger(__name__)


def find_providers(
    registry: ServiceRegistry,
    additional_providers: Iterable[object],
    categories: Iterable[type],
) -> CategoryMap:
    """Return every known provider for ``categories``.

    Installed providers are looked up through ``registry.lookup_providers``
    first, then ``additional_providers`` are merged in.  Every provider is
    placed in each of the given categories it satisfies, so one lookup may
    populate several categories.  Identity duplicates are dropped.

    Parameters
    ----------
    registry:
        Used only as a discovery source; it is not modified.
    additional_providers:
        Manually supplied providers, appended after discovered ones.
    categories:
        The categories to populate.

    Returns
    -------
    CategoryMap
        A new map holding exactly ``categories``.  Per category, discovery
        order comes first, then manual order.
    """
    categories = list(categories)
    found = CategoryMap(categories)

    for category in categories:
        for provider in registry.lookup_providers(category):
            found.add_provider(provider, None)

    for provider in additional_providers:
        if not found.add_provider(provider, None):
            logger.debug(
                "Manual provider %s matched no new category among %s",
                stable_name(provider),
                [c.__name__ for c in categories],
            )

    return found
