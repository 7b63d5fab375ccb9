"""
Concrete functions defined by numeric data.

Unlike the abstract tiers in :mod:`optconduit.function.base`, these classes are
meant to be instantiated directly. Coefficients are copied and stored
read-only, so a caller mutating the arrays it passed in (or the arrays it gets
back) never changes the function.
"""

from __future__ import annotations

import numpy as np

from .base import Array, LinearFunction, QuadraticFunction


def _frozen(arr: Array) -> Array:
    out = np.array(arr, dtype=float)
    out.setflags(write=False)
    return out


class NumericLinearFunction(LinearFunction):
    """
    Affine function ``f(x) = A x + b``.

    Args:
        a: Matrix of shape ``(m, n)``.
        b: Vector of shape ``(m,)``.
        name: Optional display label.

    Raises:
        ValueError: If ``a`` is not 2D or ``b`` does not have ``m`` entries.
    """

    def __init__(self, a: Array, b: Array, name: str = "") -> None:
        a_mat = np.asarray(a, dtype=float)
        if a_mat.ndim != 2:
            raise ValueError(f"A must be a 2D matrix, got shape {a_mat.shape}")
        b_vec = np.asarray(b, dtype=float).reshape(-1)
        if b_vec.shape[0] != a_mat.shape[0]:
            raise ValueError(
                f"b has {b_vec.shape[0]} entries but A has {a_mat.shape[0]} rows"
            )
        super().__init__(a_mat.shape[1], a_mat.shape[0], name)
        self._a = _frozen(a_mat)
        self._b = _frozen(b_vec)

    @property
    def a(self) -> Array:
        return self._a

    @property
    def b(self) -> Array:
        return self._b

    def impl_compute(self, x: Array) -> Array:
        return self._a @ x + self._b

    def impl_gradient(self, x: Array, index: int) -> Array:
        return self._a[index].copy()

    def impl_jacobian(self, x: Array) -> Array:
        return self._a.copy()

    def __str__(self) -> str:
        body = f"A = {np.array2string(self._a)}, b = {np.array2string(self._b)}"
        label = f"{self.name} " if self.name else ""
        return f"{label}({self.tier_description}: {body})"


class NumericQuadraticFunction(QuadraticFunction):
    """
    Scalar quadratic ``f(x) = 1/2 x^T A x + b^T x + c``.

    ``A`` must be symmetric; the gradient is ``A x + b`` and the hessian is
    ``A`` everywhere.
    """

    def __init__(self, a: Array, b: Array, c: float = 0.0, name: str = "") -> None:
        a_mat = np.asarray(a, dtype=float)
        if a_mat.ndim != 2 or a_mat.shape[0] != a_mat.shape[1]:
            raise ValueError(f"A must be a square matrix, got shape {a_mat.shape}")
        if not np.allclose(a_mat, a_mat.T):
            raise ValueError("A must be symmetric")
        b_vec = np.asarray(b, dtype=float).reshape(-1)
        if b_vec.shape[0] != a_mat.shape[0]:
            raise ValueError(
                f"b has {b_vec.shape[0]} entries but A is {a_mat.shape[0]}x{a_mat.shape[0]}"
            )
        super().__init__(a_mat.shape[0], 1, name)
        self._a = _frozen(a_mat)
        self._b = _frozen(b_vec)
        self._c = float(c)

    @property
    def a(self) -> Array:
        return self._a

    @property
    def b(self) -> Array:
        return self._b

    @property
    def c(self) -> float:
        return self._c

    def impl_compute(self, x: Array) -> Array:
        return np.array([0.5 * x @ self._a @ x + self._b @ x + self._c])

    def impl_gradient(self, x: Array, index: int) -> Array:
        return self._a @ x + self._b

    def impl_hessian(self, x: Array, index: int) -> Array:
        return self._a.copy()


class ConstantFunction(LinearFunction):
    """Function returning ``offset`` for every argument."""

    def __init__(self, input_size: int, offset: Array, name: str = "") -> None:
        offset_vec = np.atleast_1d(np.asarray(offset, dtype=float)).reshape(-1)
        super().__init__(input_size, offset_vec.shape[0], name)
        self._offset = _frozen(offset_vec)

    @property
    def offset(self) -> Array:
        return self._offset

    def impl_compute(self, x: Array) -> Array:
        return self._offset.copy()

    def impl_gradient(self, x: Array, index: int) -> Array:
        return np.zeros(self.input_size)

    def impl_jacobian(self, x: Array) -> Array:
        return np.zeros((self.output_size, self.input_size))


class IdentityFunction(LinearFunction):
    """Function ``f(x) = x + offset`` with ``m = n``."""

    def __init__(self, offset: Array, name: str = "") -> None:
        offset_vec = np.atleast_1d(np.asarray(offset, dtype=float)).reshape(-1)
        super().__init__(offset_vec.shape[0], offset_vec.shape[0], name)
        self._offset = _frozen(offset_vec)

    @property
    def offset(self) -> Array:
        return self._offset

    def impl_compute(self, x: Array) -> Array:
        return x + self._offset

    def impl_gradient(self, x: Array, index: int) -> Array:
        grad = np.zeros(self.input_size)
        grad[index] = 1.0
        return grad

    def impl_jacobian(self, x: Array) -> Array:
        return np.eye(self.input_size)


__all__ = [
    "NumericLinearFunction",
    "NumericQuadraticFunction",
    "ConstantFunction",
    "IdentityFunction",
]
