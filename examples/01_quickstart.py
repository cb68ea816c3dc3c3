#!/usr/bin/env python3
"""Example: Quickstart - service-registry

Declare a category, discover two exporters, persist their activation
state, and toggle one of them.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install service-registry
"""
from __future__ import annotations

import tempfile
from abc import ABC, abstractmethod

import service_registry
from service_registry import (
    ActivationListStore,
    RegisterableService,
    ServiceManager,
    ServiceRegistry,
    StaticSource,
    stable_name,
)


class DocumentExporter(ABC):
    @abstractmethod
    def export(self, text: str) -> bytes: ...


class PlainTextExporter(DocumentExporter):
    def export(self, text: str) -> bytes:
        return text.encode("utf-8")


class ShoutingExporter(DocumentExporter, RegisterableService):
    def export(self, text: str) -> bytes:
        return text.upper().encode("utf-8")

    def on_registration(self, category: type | None) -> None:
        print(f"  ShoutingExporter registered in {category.__name__ if category else 'all'}")

    def on_deregistration(self, category: type | None) -> None:
        print(f"  ShoutingExporter deregistered from {category.__name__ if category else 'all'}")


def main() -> None:
    print(f"service-registry version: {service_registry.__version__}")

    with tempfile.TemporaryDirectory() as config_dir:
        # Step 1: Build a registry whose discovery knows two exporters
        source = StaticSource([PlainTextExporter(), ShoutingExporter()])
        registry = ServiceRegistry([DocumentExporter], source)
        manager = ServiceManager(
            registry=registry,
            store=ActivationListStore(config_dir),
            additional_providers=[],
        )

        # Step 2: First load writes the activation list, everything disabled
        manager.load()
        path = manager.store.path_for(DocumentExporter)
        print(f"Activation list {path.name}:\n{path.read_text(encoding='utf-8')}")

        # Step 3: Enable one exporter and persist the choice
        manager.enable(stable_name(ShoutingExporter), DocumentExporter)
        manager.save()
        print(f"After enable:\n{path.read_text(encoding='utf-8')}")

        # Step 4: Use whatever is enabled
        for exporter in registry.get_service_providers(DocumentExporter):
            print(f"  {type(exporter).__name__}: {exporter.export('hello')!r}")

        # Step 5: Closing the registry deregisters every provider
        manager.close()


if __name__ == "__main__":
    main()
