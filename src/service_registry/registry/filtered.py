"""Predicate-filtered provider iteration.

Classes
-------
- ProviderFilter    - protocol for objects exposing ``filter(provider)``
- FilteredIterator  - lazy single-pass iterator yielding matching providers
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Protocol, Union, runtime_checkable

from service_registry.errors import InvalidArgumentError, NoSuchElementError


@runtime_checkable
class ProviderFilter(Protocol):
    """Object form of a provider predicate."""

    def filter(self, provider: object) -> bool:
        """Return True if ``provider`` satisfies this filter's criterion."""
        ...


FilterLike = Union[ProviderFilter, Callable[[object], bool]]

_EXHAUSTED = object()


def as_predicate(filter: FilterLike) -> Callable[[object], bool]:
    """Normalise a ``ProviderFilter`` or a plain callable into a callable."""
    if filter is None:
        raise InvalidArgumentError("filter should not be None")
    if isinstance(filter, ProviderFilter):
        return filter.filter
    if callable(filter):
        return filter
    raise InvalidArgumentError(f"filter must be callable, got {type(filter).__name__}")


class FilteredIterator(Iterator[object]):
    """Yield the elements of ``backend`` for which ``filter`` holds.

    The next match is located eagerly, at construction and after every
    advance, so ``has_next`` and ``peek`` never consume the backend.
    Once exhausted the iterator stays exhausted.  Past the end, ``next()``
    raises ``StopIteration`` as the iterator protocol requires; only
    ``peek`` raises ``NoSuchElementError``.

    Parameters
    ----------
    filter:
        Predicate, either a callable or a ``ProviderFilter``.
    backend:
        The iterable to filter.  It is iterated at most once.
    """

    def __init__(self, filter: FilterLike, backend: Iterable[object]) -> None:
        self._predicate = as_predicate(filter)
        self._backend = iter(backend)
        self._next: object = _EXHAUSTED
        self._find_next()

    def has_next(self) -> bool:
        """Return True if another matching element is available."""
        return self._next is not _EXHAUSTED

    def peek(self) -> object:
        """Return the next matching element without consuming it.

        Raises
        ------
        NoSuchElementError
            If the iterator is exhausted.
        """
        if self._next is _EXHAUSTED:
            raise NoSuchElementError("filtered iterator is exhausted")
        return self._next

    def __next__(self) -> object:
        if self._next is _EXHAUSTED:
            raise StopIteration
        current = self._next
        self._find_next()
        return current

    def __iter__(self) -> FilteredIterator:
        return self

    def _find_next(self) -> None:
        self._next = _EXHAUSTED
        for candidate in self._backend:
            if self._predicate(candidate):
                self._next = candidate
                return
