"""Training, evaluation and the command line for the image classifier."""

from __future__ import annotations

import argparse
import math
import os
import sys
from dataclasses import dataclass
from os import PathLike
from typing import Sequence

import numpy as np

from jubreton.layers import Dense, SigmoidOutput
from jubreton.loader import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    ImagePathPicker,
    labels_for_paths,
    load_image_batch,
)
from jubreton.losses import bce_gradient, bce_loss
from jubreton.sequential import Sequential

DEFAULT_HIDDEN = (128, 64)


@dataclass(frozen=True)
class EvaluationResult:
    """Confusion counts of a binary classifier over a test set."""

    total: int
    true_positives: int
    true_negatives: int
    false_positives: int
    false_negatives: int

    @property
    def correct(self) -> int:
        return self.true_positives + self.true_negatives

    @property
    def accuracy(self) -> float:
        return self.correct / self.total if self.total else math.nan

    def report(self) -> str:
        return (
            f"Evaluation on {self.total} images:\n"
            f"  Accuracy: {self.accuracy * 100:g}%\n"
            f"  TP={self.true_positives}  TN={self.true_negatives}"
            f"  FP={self.false_positives}  FN={self.false_negatives}"
        )


def build_model(
    input_dim: int,
    hidden_dims: Sequence[int] = DEFAULT_HIDDEN,
    rng: np.random.Generator | None = None,
) -> Sequential:
    """Stack swish hidden layers of the given widths and a sigmoid output unit."""
    rng = rng if rng is not None else np.random.default_rng()
    model = Sequential()
    width = input_dim
    for hidden in hidden_dims:
        model.add(Dense(width, hidden, rng))
        width = hidden
    model.add(SigmoidOutput(width, rng))
    return model


def train_model(
    model: Sequential,
    image_folder: str | PathLike[str],
    batch_size: int,
    num_epochs: int,
    steps_per_epoch: int,
    learning_rate: float,
    picker: ImagePathPicker | None = None,
    category_dir: str | PathLike[str] = "Cat",
) -> list[float]:
    """Train on fresh batches drawn from ``image_folder``; return the mean loss per epoch."""
    picker = picker if picker is not None else ImagePathPicker()
    history: list[float] = []
    for epoch in range(num_epochs):
        epoch_loss = 0.0
        for _ in range(steps_per_epoch):
            paths = picker.take(image_folder, batch_size)
            labels = labels_for_paths(paths, category_dir)
            x_batch = load_image_batch(paths, batch_size)
            predictions = model.forward(x_batch).ravel()
            epoch_loss += bce_loss(predictions, labels)
            grad = bce_gradient(predictions, labels).reshape(batch_size, 1)
            model.backward(grad, learning_rate)
        mean_loss = epoch_loss / steps_per_epoch if steps_per_epoch else math.nan
        history.append(mean_loss)
        print(f"Epoch [{epoch + 1}/{num_epochs}] - Loss: {mean_loss:g}")
    return history


def _collect_test_set(test_root: str, positive_class: str) -> tuple[list[str], list[float]]:
    paths: list[str] = []
    labels: list[float] = []
    for class_entry in sorted(os.scandir(test_root), key=lambda e: e.name):
        if not class_entry.is_dir():
            continue
        label = 1.0 if class_entry.name == positive_class else 0.0
        for image in sorted(os.scandir(class_entry.path), key=lambda e: e.name):
            if image.is_file():
                paths.append(image.path)
                labels.append(label)
    return paths, labels


def evaluate_model(
    model: Sequential,
    test_root: str | PathLike[str],
    positive_class: str,
    batch_size: int = 64,
    threshold: float = 0.5,
    rng: np.random.Generator | None = None,
) -> EvaluationResult:
    """Classify every image under ``test_root``'s class folders and count outcomes."""
    if batch_size <= 0:
        raise ValueError("Batch size must be positive")
    rng = rng if rng is not None else np.random.default_rng()
    paths, labels = _collect_test_set(os.fspath(test_root), positive_class)
    order = rng.permutation(len(paths))
    paths = [paths[i] for i in order]
    labels = [labels[i] for i in order]

    tp = tn = fp = fn = 0
    for offset in range(0, len(paths), batch_size):
        batch_paths = paths[offset : offset + batch_size]
        batch_labels = labels[offset : offset + batch_size]
        probabilities = model.forward(load_image_batch(batch_paths, len(batch_paths))).ravel()
        for prob, truth in zip(probabilities, batch_labels):
            predicted = 1.0 if prob >= threshold else 0.0
            if predicted == truth:
                if predicted == 1.0:
                    tp += 1
                else:
                    tn += 1
            elif predicted == 1.0:
                fp += 1
            else:
                fn += 1

    result = EvaluationResult(len(paths), tp, tn, fp, fn)
    print(result.report())
    return result


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jubreton", description="Binary image classifier.")
    sub = parser.add_subparsers(dest="command", required=True)

    train = sub.add_parser("train", help="train a model on a folder of images")
    train.add_argument("image_folder")
    train.add_argument("--category", default="Cat", help="folder holding the positive images")
    train.add_argument("--batch-size", type=int, default=64)
    train.add_argument("--epochs", type=int, default=10)
    train.add_argument("--steps", type=int, default=1)
    train.add_argument("--lr", type=float, default=0.01)
    train.add_argument("--hidden", type=int, nargs="*", default=list(DEFAULT_HIDDEN))
    train.add_argument("--save", help="file to write the trained model to")

    evaluate = sub.add_parser("evaluate", help="evaluate a saved model")
    evaluate.add_argument("test_root")
    evaluate.add_argument("positive_class")
    evaluate.add_argument("--model", required=True)
    evaluate.add_argument("--hidden", type=int, nargs="*", default=list(DEFAULT_HIDDEN))
    evaluate.add_argument("--batch-size", type=int, default=64)
    evaluate.add_argument("--threshold", type=float, default=0.5)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the process exit status."""
    args = _parser().parse_args(argv)
    model = build_model(DEFAULT_WIDTH * DEFAULT_HEIGHT, args.hidden)
    try:
        if args.command == "train":
            train_model(
                model,
                args.image_folder,
                args.batch_size,
                args.epochs,
                args.steps,
                args.lr,
                category_dir=args.category,
            )
            if args.save:
                model.save(args.save)
        else:
            model.load(args.model)
            evaluate_model(
                model, args.test_root, args.positive_class, args.batch_size, args.threshold
            )
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())