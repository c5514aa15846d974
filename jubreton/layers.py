"""Fully connected network layers trained by plain gradient descent."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from jubreton.activations import sigmoid, swish, swish_grad

Array = NDArray[np.float32]


def _he_normal(rng: np.random.Generator, in_dim: int, out_dim: int) -> Array:
    stddev = np.sqrt(2.0 / in_dim)
    return rng.normal(0.0, stddev, size=(in_dim, out_dim)).astype(np.float32)


class Layer(ABC):
    """A trainable layer holding a weight matrix and a bias vector."""

    weights: Array
    biases: Array

    def __init__(self, in_dim: int, out_dim: int, rng: np.random.Generator | None = None):
        if in_dim <= 0 or out_dim <= 0:
            raise ValueError("Layer dimensions must be positive")
        rng = rng if rng is not None else np.random.default_rng()
        self.weights = _he_normal(rng, in_dim, out_dim)
        self.biases = np.zeros(out_dim, dtype=np.float32)
        self._x: Array | None = None
        self._z: Array | None = None

    @abstractmethod
    def forward(self, x: ArrayLike) -> Array:
        """Compute the layer output for a batch of row vectors."""

    @abstractmethod
    def backward(self, grad_output: ArrayLike, lr: float) -> Array:
        """Update parameters from the output gradient; return the input gradient."""

    def _affine_forward(self, x: ArrayLike, activation: Callable[[Array], Array]) -> Array:
        x = np.atleast_2d(np.asarray(x, dtype=np.float32))
        if x.shape[1] != self.weights.shape[0]:
            raise ValueError(
                f"Expected {self.weights.shape[0]} input features, got {x.shape[1]}"
            )
        self._x = x
        self._z = (x @ self.weights + self.biases).astype(np.float32)
        return activation(self._z)

    def _affine_backward(
        self, grad_output: ArrayLike, lr: float, activation_grad: Callable[[Array], Array]
    ) -> Array:
        if self._x is None or self._z is None:
            raise RuntimeError("backward called before forward")
        grad = np.asarray(grad_output, dtype=np.float32).reshape(self._z.shape)
        dz = grad * activation_grad(self._z)
        dw = self._x.T @ dz
        db = dz.sum(axis=0)
        dx = dz @ self.weights.T
        self.weights = (self.weights - np.float32(lr) * dw).astype(np.float32)
        self.biases = (self.biases - np.float32(lr) * db).astype(np.float32)
        return dx.astype(np.float32)


class Dense(Layer):
    """Hidden layer: affine transform followed by swish."""

    def __init__(self, in_dim: int, out_dim: int, rng: np.random.Generator | None = None):
        super().__init__(in_dim, out_dim, rng)

    def forward(self, x: ArrayLike) -> Array:
        return self._affine_forward(x, swish)

    def backward(self, grad_output: ArrayLike, lr: float) -> Array:
        return self._affine_backward(grad_output, lr, swish_grad)


def _sigmoid_grad(z: Array) -> Array:
    s = sigmoid(z)
    return (s * (1.0 - s)).astype(np.float32)


class SigmoidOutput(Layer):
    """Single-unit output layer producing a probability per sample."""

    def __init__(self, in_dim: int, rng: np.random.Generator | None = None):
        super().__init__(in_dim, 1, rng)

    def forward(self, x: ArrayLike) -> Array:
        return self._affine_forward(x, sigmoid)

    def backward(self, grad_output: ArrayLike, lr: float) -> Array:
        return self._affine_backward(grad_output, lr, _sigmoid_grad)