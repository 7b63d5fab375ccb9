"""
Named, type-tagged parameters.

Solvers expose their tuning knobs and bridges report per-iteration diagnostics
through string-keyed :class:`Parameter` entries. A parameter value belongs to
a closed set of types; the type tag is fixed when the value is stored and
every extraction checks it exactly (no coercion, ``bool`` is not ``int``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

import numpy as np

from optconduit.core.errors import KeyNotFoundError, TypeMismatchError

T = TypeVar("T")


class ParameterType(Enum):
    """Type tag of a parameter value."""

    FLOAT = "float"
    INT = "int"
    BOOL = "bool"
    STRING = "str"
    VECTOR = "vector"

    @property
    def python_type(self) -> Type:
        return _PYTHON_TYPES[self]

    @classmethod
    def of(cls, value: Any) -> "ParameterType":
        """Tag for ``value``; raises :class:`TypeMismatchError` if unsupported."""
        for tag in cls:
            if type(value) is tag.python_type:
                return tag
        raise TypeMismatchError(
            f"Unsupported parameter type {type(value).__name__}; expected one of "
            + ", ".join(t.python_type.__name__ for t in cls)
        )

    @classmethod
    def from_type(cls, type_: Type) -> "ParameterType":
        for tag in cls:
            if tag.python_type is type_:
                return tag
        raise TypeMismatchError(f"Unsupported parameter type {getattr(type_, '__name__', type_)}")


_PYTHON_TYPES = {
    ParameterType.FLOAT: float,
    ParameterType.INT: int,
    ParameterType.BOOL: bool,
    ParameterType.STRING: str,
    ParameterType.VECTOR: np.ndarray,
}


def _normalize(value: Any) -> Any:
    # NumPy scalars become their builtin equivalent; arrays become float vectors.
    if isinstance(value, np.bool_):
        return bool(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, np.floating):
        return float(value)
    if isinstance(value, np.ndarray):
        return np.array(value, dtype=float).reshape(-1)
    return value


class Parameter:
    """
    A value plus a description used only for reporting.

    The type tag is fixed at construction. Assigning ``value`` goes through
    :meth:`set`, so the stored value always matches the tag.
    """

    __slots__ = ("_value", "_tag", "description")

    def __init__(self, value: Any, description: str = "") -> None:
        self._value = _normalize(value)
        self._tag = ParameterType.of(self._value)
        self.description = description

    @property
    def type(self) -> ParameterType:
        return self._tag

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, value: Any) -> None:
        self.set(value)

    def get(self, type_: Type[T]) -> T:
        """Return the value if it is stored as ``type_``."""
        expected = ParameterType.from_type(type_)
        if expected is not self._tag:
            raise TypeMismatchError(
                f"Parameter holds {self._tag.python_type.__name__}, requested {type_.__name__}"
            )
        return self._value

    def set(self, value: Any) -> None:
        """Replace the value, keeping the type tag and description."""
        new_value = _normalize(value)
        tag = ParameterType.of(new_value)
        if tag is not self._tag:
            raise TypeMismatchError(
                f"Parameter holds {self._tag.python_type.__name__}, cannot store "
                f"{tag.python_type.__name__}"
            )
        self._value = new_value

    def format_value(self) -> str:
        if self._tag is ParameterType.VECTOR:
            return np.array2string(self._value)
        return str(self._value)

    def __repr__(self) -> str:
        return f"Parameter({self.format_value()}, description={self.description!r})"


def _check_parameter(key: str, value: Any) -> Parameter:
    if not isinstance(value, Parameter):
        raise TypeMismatchError(
            f"Entry {key!r} must be a Parameter, got {type(value).__name__}; "
            "use set_parameter() to store a raw value"
        )
    return value


class ParameterStore(dict):
    """
    Insertion-ordered mapping from key to :class:`Parameter`.

    Only :class:`Parameter` entries are accepted; storing anything else raises
    :class:`TypeMismatchError`.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, key: str, value: Parameter) -> None:
        super().__setitem__(key, _check_parameter(key, value))

    def update(self, *args, **kwargs) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def setdefault(self, key: str, default: Optional[Parameter] = None) -> Parameter:
        if key not in self:
            self[key] = default
        return self[key]

    def __ior__(self, other) -> "ParameterStore":
        self.update(other)
        return self

    def set_parameter(self, key: str, value: Any, description: str = "") -> Parameter:
        param = Parameter(value, description)
        self[key] = param
        return param

    def get_parameter(self, key: str, type_: Type[T]) -> T:
        """
        Return the value stored under ``key``.

        Raises:
            KeyNotFoundError: If ``key`` is absent.
            TypeMismatchError: If the value is not stored as ``type_``.
        """
        return self._lookup(key).get(type_)

    def update_parameter(self, key: str, value: Any) -> None:
        self._lookup(key).set(value)

    def _lookup(self, key: str) -> Parameter:
        try:
            return self[key]
        except KeyError:
            raise KeyNotFoundError(f"key {key} not found") from None

    def format_lines(self, indent: str = "  ") -> list[str]:
        lines = []
        for key, param in self.items():
            label = f"{key} ({param.description})" if param.description else key
            lines.append(f"{indent}{label}: {param.format_value()}")
        return lines


__all__ = ["ParameterType", "Parameter", "ParameterStore"]
