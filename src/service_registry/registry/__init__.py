"""Registry core: category map, filtered lookup, and the service registry.

Public surface
--------------
- CategoryMap       - ordered provider lists keyed by category
- FilteredIterator  - lazy predicate-filtered iterator
- ProviderFilter    - object form of a provider predicate
- ServiceRegistry   - category map with lifecycle notification
"""
from __future__ import annotations

from service_registry.registry.category_map import CategoryMap
from service_registry.registry.filtered import FilteredIterator, ProviderFilter
from service_registry.registry.service_registry import (
    ServiceRegistry,
    default_registry,
    reset_default_registry,
)

__all__ = [
    "CategoryMap",
    "FilteredIterator",
    "ProviderFilter",
    "ServiceRegistry",
    "default_registry",
    "reset_default_registry",
]
