"""service-registry - capability-based plugin registry.

Discovers, categorizes, activates, and persists the activation state of
pluggable service providers.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import service_registry
>>> service_registry.__version__
'0.1.0'
"""
from __future__ import annotations

# Registry core
from service_registry.registry import (
    CategoryMap,
    FilteredIterator,
    ProviderFilter,
    ServiceRegistry,
    default_registry,
    reset_default_registry,
)
from service_registry.capabilities import stable_name

# Discovery
from service_registry.discovery import (
    DiscoverySource,
    EntryPointSource,
    StaticSource,
    find_providers,
)

# Persistence
from service_registry.persistence import (
    ActivationListStore,
    ActivationRecord,
    format_activation_list,
    parse_activation_list,
)

# Provider capabilities
from service_registry.spi import (
    ProviderInfo,
    RegisterableService,
    ServiceConfiguration,
    ServiceMetadata,
    describe_provider,
    validate_value,
)

# Errors
from service_registry.errors import (
    ErrorCode,
    InvalidArgumentError,
    NoSuchElementError,
    NotSupportedError,
    ServiceProviderError,
    ServiceRegistryError,
    UnknownCategoryError,
)

# Configuration and facade
from service_registry.config import ConfigError, RegistrySettings, load_settings
from service_registry.manager import ProviderNotFoundError, ServiceManager

__version__: str = "0.1.0"

__all__ = [
    "__version__",
    # Registry core
    "CategoryMap",
    "FilteredIterator",
    "ProviderFilter",
    "ServiceRegistry",
    "default_registry",
    "reset_default_registry",
    "stable_name",
    # Discovery
    "DiscoverySource",
    "EntryPointSource",
    "StaticSource",
    "find_providers",
    # Persistence
    "ActivationListStore",
    "ActivationRecord",
    "format_activation_list",
    "parse_activation_list",
    # Provider capabilities
    "ProviderInfo",
    "RegisterableService",
    "ServiceConfiguration",
    "ServiceMetadata",
    "describe_provider",
    "validate_value",
    # Errors
    "ErrorCode",
    "InvalidArgumentError",
    "NoSuchElementError",
    "NotSupportedError",
    "ServiceProviderError",
    "ServiceRegistryError",
    "UnknownCategoryError",
    # Configuration and facade
    "ConfigError",
    "ProviderNotFoundError",
    "RegistrySettings",
    "ServiceManager",
    "load_settings",
]
