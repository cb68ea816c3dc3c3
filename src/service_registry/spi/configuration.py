"""Optional configuration capability for service providers.

A configurable provider exposes named properties.  Each property declares a
*datatype exemplar* describing the values it accepts:

- ``""`` (any ``str``)              - a string value
- ``("a", "b")`` (tuple of ``str``) - one of the listed strings
- ``0`` (any ``int``)               - an integer, numeric strings are coerced
- ``(8, 16)`` (tuple of ``int``)    - one of the listed integers
- ``False`` (any ``bool``)          - a boolean

Classes
-------
- ServiceConfiguration  - property get/set contract

Functions
---------
- validate_value  - check and coerce a value against a datatype exemplar
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from service_registry.errors import InvalidArgumentError


class ServiceConfiguration(ABC):
    """Standard way for providers to be configured through named properties."""

    @abstractmethod
    def get_parameter_names(self) -> list[str]:
        """Return the names of the properties that can be set."""

    @abstractmethod
    def set_property(self, name: str, value: object) -> None:
        """Set property ``name`` to ``value`` (``None`` unsets it).

        Raises
        ------
        InvalidArgumentError
            If ``name`` is unknown or ``value`` does not match its datatype.
        """

    @abstractmethod
    def get_property(self, name: str) -> object:
        """Return the current value of ``name``, or ``None`` when unset."""

    @abstractmethod
    def get_property_datatype(self, name: str) -> object:
        """Return the datatype exemplar for ``name`` (see module docstring)."""

    @abstractmethod
    def get_property_help(self, name: str, locale: str | None = None) -> str | None:
        """Return a short help text for ``name``, or ``None`` if there is none."""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_int(value: object) -> int:
    if _is_int(value):
        return value  # type: ignore[return-value]
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidArgumentError(f"{value!r} is not an integer") from None
    raise InvalidArgumentError("value must be of type int or str")


def _is_choice_of(datatype: object, predicate) -> bool:
    return (
        isinstance(datatype, Sequence)
        and not isinstance(datatype, str)
        and len(datatype) > 0
        and all(predicate(item) for item in datatype)
    )


def validate_value(datatype: object, value: object) -> object:
    """Validate ``value`` against ``datatype`` and return it, coerced if needed.

    Parameters
    ----------
    datatype:
        Datatype exemplar as returned by
        ``ServiceConfiguration.get_property_datatype``.
    value:
        The candidate value.

    Returns
    -------
    object
        ``value`` itself, or its ``int`` conversion for integer datatypes.

    Raises
    ------
    InvalidArgumentError
        If the value has the wrong type or is not one of the allowed choices.
    """
    # bool before int: bool is an int subclass.
    if isinstance(datatype, bool):
        if not isinstance(value, bool):
            raise InvalidArgumentError("value must be of type bool")
        return value

    if _is_int(datatype):
        return _coerce_int(value)

    if isinstance(datatype, str):
        if not isinstance(value, str):
            raise InvalidArgumentError("value must be of type str")
        return value

    if _is_choice_of(datatype, _is_int):
        choices = list(datatype)  # type: ignore[call-overload]
        coerced = _coerce_int(value)
        if coerced not in choices:
            raise InvalidArgumentError(f"invalid choice {coerced!r}, expected one of {choices}")
        return coerced

    if _is_choice_of(datatype, lambda item: isinstance(item, str)):
        if not isinstance(value, str):
            raise InvalidArgumentError("value must be of type str")
        choices = list(datatype)  # type: ignore[call-overload]
        if value not in choices:
            raise InvalidArgumentError(f"invalid choice {value!r}, expected one of {choices}")
        return value

    raise InvalidArgumentError(f"unsupported datatype exemplar {datatype!r}")
