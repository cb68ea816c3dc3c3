"""Optional capabilities a service provider may implement.

The registry never requires any of these.  It checks for them at runtime
with ``isinstance`` and reacts accordingly.

Public surface
--------------
- RegisterableService   - lifecycle notifications on (de)registration
- ServiceMetadata       - description, vendor, and version for display
- ServiceConfiguration  - named, typed provider properties
- ProviderInfo          - identity summary built by ``describe_provider``
- validate_value        - datatype exemplar validation for properties
"""
from __future__ import annotations

from service_registry.spi.configuration import ServiceConfiguration, validate_value
from service_registry.spi.metadata import (
    ProviderInfo,
    ServiceMetadata,
    describe_provider,
    plugin_id,
    plugin_title,
    plugin_vendor,
    plugin_version,
)
from service_registry.spi.registerable import RegisterableService

__all__ = [
    "ProviderInfo",
    "RegisterableService",
    "ServiceConfiguration",
    "ServiceMetadata",
    "describe_provider",
    "plugin_id",
    "plugin_title",
    "plugin_vendor",
    "plugin_version",
    "validate_value",
]
