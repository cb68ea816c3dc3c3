"""Provider metadata capability and identification helpers.

Metadata is used for logging and display only; the registry algorithms
never look at it.

Classes
-------
- ServiceMetadata  - optional capability exposing description/vendor/version
- ProviderInfo     - pydantic summary of a provider's identity

Functions
---------
- plugin_id, plugin_version, plugin_title, plugin_vendor
- describe_provider  - bundle the above into a ``ProviderInfo``
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from importlib import metadata as importlib_metadata

from pydantic import BaseModel

from service_registry.capabilities import stable_name


class ServiceMetadata(ABC):
    """Optional capability for providers that describe themselves."""

    @abstractmethod
    def get_description(self, locale: str | None = None) -> str:
        """Return a short human-readable description.

        Parameters
        ----------
        locale:
            ISO 639 language code, or ``None`` for the default language.
            Implementations fall back to English when the locale is unknown.
        """

    @abstractmethod
    def get_vendor_name(self) -> str:
        """Return the name of the provider's vendor."""

    @abstractmethod
    def get_version(self) -> str:
        """Return the provider version, formatted ``X.Y.Z.FF`` (parts optional)."""


class ProviderInfo(BaseModel):
    """Identity summary of a provider, suitable for logs and tables."""

    plugin_id: str
    version: str | None = None
    title: str | None = None
    vendor: str | None = None

    model_config = {"frozen": True}


def _distribution_metadata(obj: object) -> importlib_metadata.PackageMetadata | None:
    """Return the metadata of the distribution shipping ``obj``'s module."""
    module = type(obj).__module__
    top_level = module.partition(".")[0]
    try:
        distributions = importlib_metadata.packages_distributions().get(top_level, [])
    except Exception:  # noqa: BLE001 - broken site-packages entries
        return None
    for name in distributions:
        try:
            return importlib_metadata.metadata(name)
        except importlib_metadata.PackageNotFoundError:
            continue
    return None


def plugin_id(obj: object) -> str:
    """Return the unique plugin identifier, the stable name of its class."""
    return stable_name(obj)


def plugin_version(obj: object) -> str | None:
    """Return the provider version, from ``ServiceMetadata`` or its distribution."""
    if isinstance(obj, ServiceMetadata):
        return obj.get_version()
    meta = _distribution_metadata(obj)
    return meta.get("Version") if meta is not None else None


def plugin_title(obj: object) -> str | None:
    """Return a short title: the metadata description or the distribution summary."""
    if isinstance(obj, ServiceMetadata):
        return obj.get_description(None)
    meta = _distribution_metadata(obj)
    return meta.get("Summary") if meta is not None else None


def plugin_vendor(obj: object) -> str | None:
    """Return the provider's vendor: metadata vendor or distribution author."""
    if isinstance(obj, ServiceMetadata):
        return obj.get_vendor_name()
    meta = _distribution_metadata(obj)
    if meta is None:
        return None
    return meta.get("Author") or meta.get("Author-email")


def describe_provider(obj: object) -> ProviderInfo:
    """Return a ``ProviderInfo`` for ``obj``."""
    return ProviderInfo(
        plugin_id=plugin_id(obj),
        version=plugin_version(obj),
        title=plugin_title(obj),
        vendor=plugin_vendor(obj),
    )
