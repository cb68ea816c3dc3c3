"""Provider discovery subpackage.

Discovery sources locate installed provider instances for a capability;
``find_providers`` merges them with manually supplied providers.

Public surface
--------------
- DiscoverySource   - abstract base class
- EntryPointSource  - ``importlib.metadata`` entry-point discovery
- StaticSource      - in-memory list of providers
- find_providers    - discovery + manual list -> CategoryMap
"""
from __future__ import annotations

from service_registry.discovery.base import DiscoverySource
from service_registry.discovery.entrypoints import DEFAULT_GROUP, EntryPointSource
from service_registry.discovery.static import StaticSource
from service_registry.discovery.merge import find_providers

__all__ = [
    "DEFAULT_GROUP",
    "DiscoverySource",
    "EntryPointSource",
    "StaticSource",
    "find_providers",
]
