"""
Abstract function hierarchy.

Every function maps ``R^n -> R^m``. The class a function derives from states
the maximum derivative information a solver may request from it:

- :class:`Function`: values only (``impl_compute``).
- :class:`DerivableFunction`: adds gradients (``impl_gradient``) and jacobians.
- :class:`TwiceDerivableFunction`: adds hessians (``impl_hessian``).
- :class:`QuadraticFunction`: hessian is constant in ``x``.
- :class:`LinearFunction`: hessian is identically zero and cannot be overridden.

Users implement the ``impl_*`` hooks; the public methods (``evaluate``,
``gradient``, ``jacobian``, ``hessian``) check argument and output shapes and
return fresh arrays. Gradients and hessians are indexed by output component so
the full jacobian or a hessian tensor is never built when not needed.

Example
-------
>>> import numpy as np
>>> class Square(TwiceDerivableFunction):
...     def __init__(self):
...         super().__init__(1, 1, "x²")
...     def impl_compute(self, x):
...         return x**2
...     def impl_gradient(self, x, index):
...         return 2 * x
...     def impl_hessian(self, x, index):
...         return np.array([[2.0]])
>>> Square().gradient(np.array([3.0]))
array([6.])
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Type, final

import numpy as np

from optconduit.core.capability import Capability
from optconduit.core.errors import OutOfRangeError
from optconduit.diagnostics.debug_mode import check_hessian, check_jacobian_rows

Array = np.ndarray


class Function(ABC):
    """
    Base class of all functions ``R^n -> R^m``.

    Instances are immutable: the dimensions and the name are fixed at
    construction and evaluation never mutates the function.
    """

    capability: ClassVar[Capability] = Capability.VALUE
    tier_description: ClassVar[str] = "function"

    def __init__(self, input_size: int, output_size: int = 1, name: str = "") -> None:
        """
        Args:
            input_size: Dimension ``n`` of the argument. Must be >= 1.
            output_size: Dimension ``m`` of the result. Must be >= 1.
            name: Display label used in textual output.

        Raises:
            ValueError: If a dimension is smaller than 1.
        """
        if int(input_size) < 1:
            raise ValueError(f"input_size must be >= 1, got {input_size}")
        if int(output_size) < 1:
            raise ValueError(f"output_size must be >= 1, got {output_size}")
        self._input_size = int(input_size)
        self._output_size = int(output_size)
        self._name = str(name)

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._output_size

    @property
    def name(self) -> str:
        return self._name

    def __call__(self, x: Array) -> Array:
        return self.evaluate(x)

    def evaluate(self, x: Array) -> Array:
        """Evaluate the function; returns an array of shape ``(m,)``."""
        arg = self._check_argument(x)
        value = np.atleast_1d(np.array(self.impl_compute(arg), dtype=float))
        return self._check_shape(value, (self._output_size,), "impl_compute")

    @abstractmethod
    def impl_compute(self, x: Array) -> Array:
        """Return the function value at ``x`` (shape ``(m,)``)."""
        raise NotImplementedError

    def _check_argument(self, x: Array) -> Array:
        arg = np.array(x, dtype=float)
        if arg.shape != (self._input_size,):
            raise OutOfRangeError(
                f"Argument of shape {arg.shape} does not match input size "
                f"{self._input_size} of {self._label()}"
            )
        return arg

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._output_size:
            raise OutOfRangeError(
                f"Output index {index} out of range for {self._label()} with "
                f"{self._output_size} output(s)"
            )
        return int(index)

    def _check_shape(self, value: Array, shape: tuple, hook: str) -> Array:
        if value.shape != shape:
            raise OutOfRangeError(
                f"{type(self).__name__}.{hook}() returned shape {value.shape}, "
                f"expected {shape}"
            )
        return value

    def _label(self) -> str:
        return repr(self._name) if self._name else type(self).__name__

    def __str__(self) -> str:
        if self._name:
            return f"{self._name} ({self.tier_description})"
        return self.tier_description

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(input_size={self._input_size}, "
            f"output_size={self._output_size}, name={self._name!r})"
        )


class DerivableFunction(Function):
    """Function that also provides gradients and jacobians."""

    capability = Capability.GRADIENT
    tier_description = "derivable function"

    def gradient(self, x: Array, index: int = 0) -> Array:
        """Gradient of output component ``index``; shape ``(n,)``."""
        arg = self._check_argument(x)
        index = self._check_index(index)
        grad = np.array(self.impl_gradient(arg, index), dtype=float).reshape(-1)
        return self._check_shape(grad, (self._input_size,), "impl_gradient")

    def jacobian(self, x: Array) -> Array:
        """Jacobian matrix; shape ``(m, n)``, row ``i`` is ``gradient(x, i)``."""
        arg = self._check_argument(x)
        jac = np.array(self.impl_jacobian(arg), dtype=float)
        if jac.ndim == 1 and self._output_size == 1:
            jac = jac.reshape(1, -1)
        jac = self._check_shape(jac, (self._output_size, self._input_size), "impl_jacobian")
        check_jacobian_rows(self, arg, jac)
        return jac

    @abstractmethod
    def impl_gradient(self, x: Array, index: int) -> Array:
        """Return the gradient of output ``index`` at ``x``."""
        raise NotImplementedError

    def impl_jacobian(self, x: Array) -> Array:
        # Stack gradients; subclasses override when a direct form is cheaper.
        return np.vstack(
            [np.asarray(self.impl_gradient(x, i), dtype=float).reshape(-1)
             for i in range(self._output_size)]
        )


class TwiceDerivableFunction(DerivableFunction):
    """Function that also provides (symmetric) hessians."""

    capability = Capability.HESSIAN
    tier_description = "twice derivable function"
    constant_hessian: ClassVar[bool] = False
    zero_hessian: ClassVar[bool] = False

    def hessian(self, x: Array, index: int = 0) -> Array:
        """Hessian of output component ``index``; shape ``(n, n)``."""
        arg = self._check_argument(x)
        index = self._check_index(index)
        hess = np.array(self.impl_hessian(arg, index), dtype=float)
        n = self._input_size
        hess = self._check_shape(hess, (n, n), "impl_hessian")
        check_hessian(hess)
        return hess

    @abstractmethod
    def impl_hessian(self, x: Array, index: int) -> Array:
        """Return the hessian of output ``index`` at ``x``."""
        raise NotImplementedError


class QuadraticFunction(TwiceDerivableFunction):
    """Twice derivable function whose hessian does not depend on ``x``."""

    tier_description = "quadratic function"
    constant_hessian = True


class LinearFunction(QuadraticFunction):
    """
    Function of the form ``A x + b``.

    The hessian is provided here and is always zero; subclasses only implement
    ``impl_compute`` and ``impl_gradient`` (optionally ``impl_jacobian``).
    Defining ``hessian`` or ``impl_hessian`` in a subclass raises ``TypeError``
    when the class is created.
    """

    tier_description = "linear function"
    zero_hessian = True

    def __init_subclass__(cls, **kwargs) -> None:
        super().__init_subclass__(**kwargs)
        # Resolved through the MRO, so a mixin placed before LinearFunction
        # cannot replace the zero hessian either.
        for attr in ("hessian", "impl_hessian"):
            if getattr(cls, attr) is not LinearFunction.__dict__[attr]:
                raise TypeError(
                    f"{cls.__name__} cannot override {attr}: the hessian of a "
                    "linear function is always zero"
                )

    @final
    def hessian(self, x: Array, index: int = 0) -> Array:
        self._check_argument(x)
        self._check_index(index)
        return np.zeros((self._input_size, self._input_size))

    @final
    def impl_hessian(self, x: Array, index: int) -> Array:
        return np.zeros((self._input_size, self._input_size))


TIERS: tuple[Type[Function], ...] = (
    LinearFunction,
    QuadraticFunction,
    TwiceDerivableFunction,
    DerivableFunction,
    Function,
)


def function_tier(function: Function | Type[Function]) -> Type[Function]:
    """Return the most informative tier class ``function`` belongs to."""
    cls = function if isinstance(function, type) else type(function)
    for tier in TIERS:
        if issubclass(cls, tier):
            return tier
    raise TypeError(f"{cls.__name__} is not a Function")


__all__ = [
    "Array",
    "Function",
    "DerivableFunction",
    "TwiceDerivableFunction",
    "QuadraticFunction",
    "LinearFunction",
    "TIERS",
    "function_tier",
]
