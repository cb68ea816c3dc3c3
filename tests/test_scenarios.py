"""End-to-end behaviour of registry, discovery, and activation lists together."""
from __future__ import annotations

from pathlib import Path

import pytest

from service_registry import (
    ActivationListStore,
    CategoryMap,
    FilteredIterator,
    ServiceManager,
    ServiceRegistry,
    StaticSource,
    stable_name,
)


class Exporter:
    __module__ = "pkg"


class Importer:
    __module__ = "pkg"


class A(Exporter):
    __module__ = "pkg"


class B(Exporter):
    __module__ = "pkg"


class C(Exporter):
    __module__ = "pkg"


class D(Exporter, Importer):
    __module__ = "pkg"


class SubA(A):
    __module__ = "pkg"


@pytest.fixture()
def source() -> StaticSource:
    return StaticSource([A(), B()])


@pytest.fixture()
def store(tmp_path: Path) -> ActivationListStore:
    return ActivationListStore(tmp_path)


@pytest.fixture()
def manager(source: StaticSource, store: ActivationListStore) -> ServiceManager:
    mgr = ServiceManager(
        registry=ServiceRegistry([Exporter], source),
        store=store,
        additional_providers=[],
    )
    yield mgr
    mgr.close()


def _names(providers: list[object]) -> list[str]:
    return [stable_name(p) for p in providers]


def _registered(manager: ServiceManager) -> list[str]:
    return _names(manager.registry.get_service_providers_as_list(Exporter))


def test_category_never_holds_same_identity_twice() -> None:
    with ServiceRegistry([Exporter, Importer], StaticSource()) as registry:
        provider = D()
        registry.register_service_provider(provider)
        registry.register_service_provider(provider, Exporter)
        registry.register_service_providers([provider, provider])
        for category in registry.get_categories():
            members = registry.get_service_providers_as_list(category)
            assert len({id(m) for m in members}) == len(members) == 1


def test_blanket_registration_matches_capabilities_exactly() -> None:
    with ServiceRegistry([Exporter, Importer, str], StaticSource()) as registry:
        registry.register_service_provider(D())
        registry.register_service_provider(A())
        assert len(registry.get_service_providers_as_list(Exporter)) == 2
        assert _names(registry.get_service_providers_as_list(Importer)) == ["pkg.D"]
        assert registry.get_service_providers_as_list(str) == []


def test_blanket_deregistration_removes_compatible_instances() -> None:
    with ServiceRegistry([Exporter], StaticSource()) as registry:
        first, second, unrelated = A(), SubA(), B()
        registry.register_service_providers([first, second, unrelated])
        assert registry.deregister_service_provider(SubA()) is True
        assert registry.get_service_providers_as_list(Exporter) == [unrelated]


def test_exporter_scenario(manager: ServiceManager, store: ActivationListStore) -> None:
    manager.load()
    path = store.path_for(Exporter)
    assert path.read_text(encoding="utf-8") == "pkg.A=false\npkg.B=false\n"

    path.write_text("pkg.B=true\npkg.A=false\n", encoding="utf-8")
    manager.reload()

    assert _names(manager.available(Exporter)) == ["pkg.B", "pkg.A"]
    assert _registered(manager) == ["pkg.B"]


def test_new_provider_appended_without_rewrite(
    manager: ServiceManager, source: StaticSource, store: ActivationListStore
) -> None:
    manager.load()
    path = store.path_for(Exporter)
    path.write_text("pkg.B=true\npkg.A=false\n", encoding="utf-8")

    source.add(C())
    manager.reload()

    assert _names(manager.available(Exporter)) == ["pkg.B", "pkg.A", "pkg.C"]
    assert _registered(manager) == ["pkg.B"]
    assert path.read_text(encoding="utf-8") == "pkg.B=true\npkg.A=false\n"


def test_save_then_load_round_trip(
    manager: ServiceManager, source: StaticSource, store: ActivationListStore
) -> None:
    manager.load()
    manager.enable("pkg.B", Exporter)
    manager.save()

    with ServiceRegistry([Exporter], source) as fresh_registry:
        fresh = ServiceManager(registry=fresh_registry, store=store, additional_providers=[])
        fresh.load()
        assert _names(fresh.available(Exporter)) == _names(manager.available(Exporter))
        assert _names(fresh_registry.get_service_providers_as_list(Exporter)) == ["pkg.B"]


def test_loading_twice_is_idempotent(manager: ServiceManager, store: ActivationListStore) -> None:
    store.path_for(Exporter).write_text("pkg.B=true\npkg.A=true\n", encoding="utf-8")
    manager.load()
    first = (_names(manager.available(Exporter)), _registered(manager))
    manager.load()
    second = (_names(manager.available(Exporter)), _registered(manager))
    assert first == second == (["pkg.B", "pkg.A"], ["pkg.B", "pkg.A"])


def test_filtered_iterator_over_four_providers() -> None:
    providers = CategoryMap([Exporter])
    for provider in (A(), B(), C(), D()):
        providers.add_provider(provider, Exporter)

    iterator = FilteredIterator(
        lambda p: type(p).__name__ in {"B", "D"},
        providers.get_providers(Exporter),
    )
    assert _names([next(iterator), next(iterator)]) == ["pkg.B", "pkg.D"]
    assert iterator.has_next() is False
