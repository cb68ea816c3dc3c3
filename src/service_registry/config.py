"""Registry settings loaded from YAML.

Example ``service-registry.yaml``::

    config_dir: ./activation
    entry_point_group: service_registry.providers
    categories:
      - my_app.spi:DocumentExporter
      - my_app.spi:FormatProvider
    providers:
      - my_app.builtin:PlainTextExporter
    log_level: INFO

Relative ``config_dir`` values are resolved against the YAML file's
directory.

Classes
-------
- ConfigError       - invalid or unreadable settings
- RegistrySettings  - validated settings model

Functions
---------
- import_object  - resolve a dotted path to a Python object
- load_settings  - read and validate a YAML settings file
"""
from __future__ import annotations

import importlib
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from service_registry.capabilities import require_category
from service_registry.discovery.entrypoints import DEFAULT_GROUP

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigError(ValueError):
    """Raised when settings cannot be read, parsed, or resolved."""


def import_object(path: str) -> object:
    """Import and return the object named by ``path``.

    Parameters
    ----------
    path:
        ``"package.module:Name"`` or ``"package.module.Name"``.

    Raises
    ------
    ConfigError
        If the module cannot be imported or has no such attribute.
    """
    if ":" in path:
        module_name, _, attribute = path.partition(":")
    else:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ConfigError(f"Invalid object path {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import module {module_name!r}: {exc}") from exc

    target: object = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise ConfigError(f"{module_name!r} has no attribute {attribute!r}") from None
    return target


class RegistrySettings(BaseModel):
    """Settings for a ``ServiceManager``.

    Parameters
    ----------
    config_dir:
        Directory of the per-category activation lists.
    entry_point_group:
        Entry-point group scanned for installed providers.
    categories:
        Dotted paths of the category classes to declare, in order.
    providers:
        Dotted paths of provider classes to instantiate and add manually.
    log_level:
        Logging level name used by the CLI when ``--log-level`` is not given.
    """

    config_dir: Path = Field(default_factory=lambda: Path.home() / ".service-registry")
    entry_point_group: str = DEFAULT_GROUP
    categories: list[str] = Field(default_factory=list)
    providers: list[str] = Field(default_factory=list)
    log_level: str = "WARNING"

    model_config = {"extra": "forbid"}

    @field_validator("config_dir")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @property
    def log_level_number(self) -> int:
        """``log_level`` as a ``logging`` constant."""
        return logging.getLevelName(self.log_level)

    def resolve_categories(self) -> list[type]:
        """Import the configured category classes.

        Raises
        ------
        ConfigError
            If a path cannot be imported or does not name a class.
        """
        resolved: list[type] = []
        for path in self.categories:
            target = import_object(path)
            if not isinstance(target, type):
                raise ConfigError(f"Category {path!r} is not a class")
            resolved.append(require_category(target))
        return resolved

    def instantiate_providers(self) -> list[object]:
        """Import and instantiate the configured manual providers.

        Classes are called without arguments; other objects are used as-is.

        Raises
        ------
        ConfigError
            If a path cannot be imported or the class cannot be instantiated.
        """
        providers: list[object] = []
        for path in self.providers:
            target = import_object(path)
            if isinstance(target, type):
                try:
                    target = target()
                except Exception as exc:  # noqa: BLE001
                    raise ConfigError(f"Cannot instantiate provider {path!r}: {exc}") from exc
            providers.append(target)
        return providers


def load_settings(path: str | Path | None = None) -> RegistrySettings:
    """Load settings from a YAML file, or return defaults when ``path`` is None.

    Parameters
    ----------
    path:
        YAML file to read.

    Returns
    -------
    RegistrySettings
        The validated settings.

    Raises
    ------
    ConfigError
        If the file cannot be read, is not a YAML mapping, or fails
        validation.
    """
    if path is None:
        return RegistrySettings()

    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read settings file {config_path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {config_path} must contain a mapping")

    try:
        settings = RegistrySettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {config_path}: {exc}") from exc

    if "config_dir" in data and not settings.config_dir.is_absolute():
        settings = settings.model_copy(
            update={"config_dir": (config_path.parent / settings.config_dir).resolve()}
        )
    return settings
