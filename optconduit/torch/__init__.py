"""PyTorch integration for Opt Conduit functions.

Example:
    >>> import numpy as np
    >>> from optconduit.torch import TorchFunction
    >>> f = TorchFunction(lambda x: x[0] * x[1], 2, 1, "x₀ x₁")
    >>> f.hessian(np.array([1.0, 2.0]))
    array([[0., 1.],
           [1., 0.]])
"""

from optconduit.torch.autograd import TensorFn, TorchFunction

__all__ = ["TorchFunction", "TensorFn"]
