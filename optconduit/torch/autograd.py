"""Twice derivable functions whose derivatives come from PyTorch autograd."""

from __future__ import annotations

from typing import Callable

import numpy as np
import torch
from torch.autograd.functional import hessian, jacobian

from optconduit.function.base import Array, TwiceDerivableFunction

TensorFn = Callable[[torch.Tensor], torch.Tensor]


class TorchFunction(TwiceDerivableFunction):
    """
    Wrap a differentiable torch callable as a :class:`TwiceDerivableFunction`.

    The callable receives a 1D float64 tensor of shape ``(n,)`` and must return
    a tensor with ``m`` elements (a 0-dim tensor is accepted when ``m == 1``).
    Gradients, jacobians and hessians are computed with
    :mod:`torch.autograd.functional`; nothing is cached between calls.

    Parameters
    ----------
    fn:
        Differentiable map built from torch operations.
    input_size:
        Dimension ``n`` of the argument.
    output_size:
        Dimension ``m`` of the result.
    name:
        Display label.

    Example
    -------
    >>> import numpy as np
    >>> f = TorchFunction(lambda x: (x ** 2).sum(), 3, 1, "|x|²")
    >>> f.gradient(np.ones(3))
    array([2., 2., 2.])
    """

    def __init__(
        self, fn: TensorFn, input_size: int, output_size: int = 1, name: str = ""
    ) -> None:
        super().__init__(input_size, output_size, name)
        self._fn = fn

    def _as_tensor(self, x: Array) -> torch.Tensor:
        return torch.as_tensor(x, dtype=torch.float64).clone()

    def _vector(self, t: torch.Tensor) -> torch.Tensor:
        return self._fn(t).reshape(-1)

    def _component(self, index: int) -> TensorFn:
        return lambda t: self._vector(t)[index]

    def impl_compute(self, x: Array) -> Array:
        with torch.no_grad():
            out = self._vector(self._as_tensor(x))
        return out.detach().cpu().numpy().astype(np.float64)

    def impl_gradient(self, x: Array, index: int) -> Array:
        grad = jacobian(self._component(index), self._as_tensor(x))
        return grad.detach().cpu().numpy()

    def impl_jacobian(self, x: Array) -> Array:
        jac = jacobian(self._vector, self._as_tensor(x))
        return jac.detach().cpu().numpy().reshape(self.output_size, self.input_size)

    def impl_hessian(self, x: Array, index: int) -> Array:
        hess = hessian(self._component(index), self._as_tensor(x))
        return hess.detach().cpu().numpy()


__all__ = ["TorchFunction", "TensorFn"]
