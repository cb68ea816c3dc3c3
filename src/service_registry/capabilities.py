"""Runtime capability checks and stable naming.

A *category* is a Python class (concrete class, ABC, or a
``typing.runtime_checkable`` protocol).  A provider satisfies a category
when ``isinstance(provider, category)`` holds.

Functions
---------
- stable_name        - persistent identifier of a provider or category
- satisfies          - does a provider implement a category's contract
- is_assignable_from - can ``provider`` stand in for ``member``'s type
- require_category   - validate a category argument
"""
from __future__ import annotations

from service_registry.errors import InvalidArgumentError


def stable_name(obj: object) -> str:
    """Return the fully-qualified name of ``obj``'s implementation.

    Classes are named directly; instances are named by their class.

    Parameters
    ----------
    obj:
        A provider instance or a category class.

    Returns
    -------
    str
        ``"<module>.<qualname>"``, e.g. ``"pkg.exporters.PdfExporter"``.
    """
    cls = obj if isinstance(obj, type) else type(obj)
    return f"{cls.__module__}.{cls.__qualname__}"


def satisfies(provider: object, category: type) -> bool:
    """Return True if ``provider`` implements the ``category`` contract."""
    return isinstance(provider, category)


def is_assignable_from(member: object, provider: object) -> bool:
    """Return True if ``provider``'s type is ``member``'s type or a subtype of it."""
    return isinstance(provider, type(member))


def require_category(category: object) -> type:
    """Return ``category`` unchanged if it is usable as a category.

    Raises
    ------
    InvalidArgumentError
        If ``category`` is ``None`` or not a class.
    """
    if category is None:
        raise InvalidArgumentError("category should not be None")
    if not isinstance(category, type):
        raise InvalidArgumentError(
            f"category must be a class, got {type(category).__name__}"
        )
    return category
