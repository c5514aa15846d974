"""Loading grayscale images from folders into training batches."""

from __future__ import annotations

import os
from os import PathLike
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from PIL import Image

DEFAULT_WIDTH = 128
DEFAULT_HEIGHT = 128
DEFAULT_BATCH_SIZE = 64


def preprocess_image(
    path: str | PathLike[str],
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> NDArray[np.float32]:
    """Read an image as grayscale, resize it and flatten it to values in [0, 1]."""
    try:
        with Image.open(path) as img:
            gray = img.convert("L").resize((width, height), Image.Resampling.BILINEAR)
    except OSError as exc:
        raise ValueError(f"Failed to load image: {path}") from exc
    pixels = np.asarray(gray, dtype=np.float32) / np.float32(255.0)
    return pixels.ravel().astype(np.float32)


def load_image_batch(
    image_paths: Sequence[str | PathLike[str]],
    batch_size: int = DEFAULT_BATCH_SIZE,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> NDArray[np.float32]:
    """Stack the first ``batch_size`` images into a (batch_size, width*height) array."""
    if len(image_paths) < batch_size:
        raise ValueError("Not enough images to load a full batch")
    input_dim = width * height
    batch = np.empty((batch_size, input_dim), dtype=np.float32)
    for row, path in zip(range(batch_size), image_paths):
        pixels = preprocess_image(path, width, height)
        if pixels.size != input_dim:
            raise ValueError("Preprocessed image has incorrect size")
        batch[row] = pixels
    return batch


class ImagePathPicker:
    """Hands out folder entries, never returning the same path twice."""

    def __init__(self) -> None:
        self.used: set[str] = set()

    def take(self, folder: str | PathLike[str], count: int = DEFAULT_BATCH_SIZE) -> list[str]:
        """Return up to ``count`` entries of ``folder`` not handed out before."""
        if count <= 0:
            return []
        folder = os.fspath(folder)
        picked: list[str] = []
        for name in sorted(os.listdir(folder)):
            path = os.path.join(folder, name)
            if path in self.used:
                continue
            self.used.add(path)
            picked.append(path)
            if len(picked) == count:
                break
        return picked


def labels_for_paths(
    image_paths: Sequence[str | PathLike[str]],
    category_dir: str | PathLike[str],
) -> NDArray[np.float32]:
    """Label each path 1.0 if it is an entry of ``category_dir``, else 0.0."""
    category_dir = os.fspath(category_dir)
    members = {
        os.path.normpath(os.path.join(category_dir, name))
        for name in os.listdir(category_dir)
    }
    return np.array(
        [1.0 if os.path.normpath(os.fspath(p)) in members else 0.0 for p in image_paths],
        dtype=np.float32,
    )