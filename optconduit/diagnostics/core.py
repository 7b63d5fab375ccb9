"""Matrix checks used by debug mode and by tests."""

from __future__ import annotations

import numpy as np


def is_symmetric(mat: np.ndarray, atol: float = 1e-8) -> bool:
    """
    Check whether a square matrix is symmetric within ``atol``.

    Non-square or non-2D inputs are reported as not symmetric.
    """
    arr = np.asarray(mat, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        return False
    return bool(np.allclose(arr, arr.T, atol=atol, rtol=0.0))


def assert_symmetric(mat: np.ndarray, atol: float = 1e-8) -> None:
    """
    Raise if ``mat`` is not symmetric.

    Raises
    ------
    ValueError
        If the matrix is not square or not symmetric within the tolerance.
    """
    arr = np.asarray(mat, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError(f"Expected a square matrix, got shape {arr.shape}")
    if not is_symmetric(arr, atol=atol):
        max_dev = float(np.max(np.abs(arr - arr.T)))
        raise ValueError(
            f"Matrix is not symmetric within tolerance {atol}. "
            f"Max deviation: {max_dev:.3e}"
        )


__all__ = ["is_symmetric", "assert_symmetric"]
