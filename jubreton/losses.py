"""Binary cross-entropy loss."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

_EPSILON = np.float32(1e-7)


def _prepare(y_pred: ArrayLike, y_true: ArrayLike, what: str):
    pred = np.asarray(y_pred, dtype=np.float32)
    true = np.asarray(y_true, dtype=np.float32).ravel()
    if pred.size != true.size:
        raise ValueError(f"Size mismatch in BCE {what}")
    if pred.size == 0:
        raise ValueError(f"Empty input to BCE {what}")
    clipped = np.clip(pred.ravel(), _EPSILON, np.float32(1.0) - _EPSILON)
    return pred.shape, clipped, true


def bce_loss(y_pred: ArrayLike, y_true: ArrayLike) -> float:
    """Mean binary cross-entropy; predictions are clamped away from 0 and 1."""
    _, p, y = _prepare(y_pred, y_true, "loss")
    losses = -(y * np.log(p) + (1.0 - y) * np.log(1.0 - p))
    return float(np.mean(losses))


def bce_gradient(y_pred: ArrayLike, y_true: ArrayLike) -> NDArray[np.float32]:
    """Gradient of the mean BCE loss with respect to each prediction."""
    shape, p, y = _prepare(y_pred, y_true, "gradient")
    grad = (-(y / p) + (1.0 - y) / (1.0 - p)) / np.float32(p.size)
    return grad.astype(np.float32).reshape(shape)