"""Element-wise activation functions and their derivatives."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray


def sigmoid(x: ArrayLike) -> NDArray[np.float32]:
    """Logistic function 1 / (1 + exp(-x)), computed without overflow."""
    x = np.asarray(x, dtype=np.float32)
    e = np.exp(-np.abs(x))
    return np.where(x >= 0, 1.0 / (1.0 + e), e / (1.0 + e)).astype(np.float32)


def swish(x: ArrayLike) -> NDArray[np.float32]:
    """Swish activation: x * sigmoid(x)."""
    x = np.asarray(x, dtype=np.float32)
    return (x * sigmoid(x)).astype(np.float32)


def swish_grad(x: ArrayLike) -> NDArray[np.float32]:
    """Derivative of swish with respect to its input."""
    x = np.asarray(x, dtype=np.float32)
    s = sigmoid(x)
    return (s + x * s * (1.0 - s)).astype(np.float32)