"""A stack of layers run in order, with binary save and load of parameters."""

from __future__ import annotations

import struct
from os import PathLike
from typing import BinaryIO

import numpy as np
from numpy.typing import ArrayLike, NDArray

from jubreton.layers import Layer

_SIZE = struct.Struct("<Q")


def _read_exact(stream: BinaryIO, count: int) -> bytes:
    data = stream.read(count)
    if len(data) != count:
        raise ValueError("Model file is truncated")
    return data


def _read_size(stream: BinaryIO) -> int:
    return _SIZE.unpack(_read_exact(stream, _SIZE.size))[0]


class Sequential:
    """Feeds a batch through each layer in turn."""

    def __init__(self) -> None:
        self.layers: list[Layer] = []

    def add(self, layer: Layer) -> None:
        """Append a layer to the end of the stack."""
        self.layers.append(layer)

    def forward(self, inputs: ArrayLike) -> NDArray[np.float32]:
        out = np.asarray(inputs, dtype=np.float32)
        for layer in self.layers:
            out = layer.forward(out)
        return out

    def backward(self, grad_output: ArrayLike, lr: float) -> NDArray[np.float32]:
        grad = np.asarray(grad_output, dtype=np.float32)
        for layer in reversed(self.layers):
            grad = layer.backward(grad, lr)
        return grad

    def save(self, path: str | PathLike[str]) -> None:
        """Write every layer's weights and biases to a binary file."""
        with open(path, "wb") as stream:
            for layer in self.layers:
                weights = np.ascontiguousarray(layer.weights, dtype="<f4")
                stream.write(_SIZE.pack(weights.ndim))
                for dim in weights.shape:
                    stream.write(_SIZE.pack(dim))
                stream.write(weights.tobytes())
                biases = np.ascontiguousarray(layer.biases, dtype="<f4").ravel()
                stream.write(_SIZE.pack(biases.size))
                stream.write(biases.tobytes())

    def load(self, path: str | PathLike[str]) -> None:
        """Replace the parameters of the existing layers from a file written by save."""
        with open(path, "rb") as stream:
            for layer in self.layers:
                rank = _read_size(stream)
                if rank != 2:
                    raise ValueError(f"Unsupported weight rank {rank}")
                shape = tuple(_read_size(stream) for _ in range(rank))
                count = shape[0] * shape[1]
                weights = np.frombuffer(_read_exact(stream, count * 4), dtype="<f4")
                bias_size = _read_size(stream)
                biases = np.frombuffer(_read_exact(stream, bias_size * 4), dtype="<f4")
                layer.weights = weights.reshape(shape).astype(np.float32)
                layer.biases = biases.astype(np.float32)