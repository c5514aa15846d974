# jubreton

A compact feed-forward neural network written with NumPy for telling two
classes of grayscale images apart (for example "cat" versus "not cat").

Images are loaded with Pillow, converted to grayscale, resized to 128×128
(bilinear) and scaled to the range `[0, 1]`, then flattened into rows of a
batch matrix. Hidden layers use the swish activation, the single output unit
uses a sigmoid, and training is plain gradient descent on binary
cross-entropy.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command line

Installing the package provides the `jubreton` command with two
subcommands. Both build a network of 128×128 inputs, hidden swish layers of
the widths given by `--hidden` (default `128 64`) and one sigmoid output.

```
jubreton --help
```

### `jubreton train`

```
jubreton train IMAGE_FOLDER [--category Cat] [--batch-size 64] [--epochs 10]
               [--steps 1] [--lr 0.01] [--hidden 128 64] [--save MODEL_FILE]
```

Each step takes the next `--batch-size` entries of `IMAGE_FOLDER` (in name
order) that have not been used yet in this run, so no image is seen twice.
An image is labelled 1.0 when it is an entry of the `--category` folder and
0.0 otherwise. After every epoch the mean loss is printed as
`Epoch [i/n] - Loss: x`. If the folder runs out of unused images for a full
batch, the command stops with an error. With `--save`, the trained weights
are written to the given file.

### `jubreton evaluate`

```
jubreton evaluate TEST_ROOT POSITIVE_CLASS --model MODEL_FILE
                  [--hidden 128 64] [--batch-size 64] [--threshold 0.5]
```

Every sub-folder of `TEST_ROOT` is a class; images in the folder named
`POSITIVE_CLASS` have label 1.0, all others 0.0. The images are shuffled,
classified in batches (a probability at or above `--threshold` counts as
positive) and a summary of accuracy and the TP/TN/FP/FN counts is printed.
`--hidden` must match the widths the model was trained with.

Both subcommands exit with status 1 and print `error: ...` on a missing
file, an unreadable image or a malformed model file.

## Library use

```python
import numpy as np

from jubreton.layers import Dense, SigmoidOutput
from jubreton.losses import bce_loss, bce_gradient
from jubreton.sequential import Sequential

rng = np.random.default_rng(0)

model = Sequential()
model.add(Dense(16, 8, rng))
model.add(SigmoidOutput(8, rng))

x = rng.random((4, 16))
y = np.array([1.0, 0.0, 1.0, 0.0])

pred = model.forward(x).ravel()
print("loss:", bce_loss(pred, y))
model.backward(bce_gradient(pred, y).reshape(-1, 1), lr=0.01)

model.save("model.bin")
model.load("model.bin")
```

### Modules

- `jubreton.activations`: `sigmoid`, `swish` and `swish_grad`, element-wise
  on float32 arrays.
- `jubreton.losses`: `bce_loss` (mean binary cross-entropy) and
  `bce_gradient`; inputs of different lengths or empty inputs raise
  `ValueError`, and predictions are clipped to `[1e-7, 1 - 1e-7]`.
- `jubreton.layers`: the abstract `Layer` with `weights` and `biases`
  attributes, and the `Dense` (swish) and `SigmoidOutput` (one sigmoid unit)
  layers, initialised with He-normal weights and zero biases. `backward`
  updates the parameters and returns the gradient for the layer's input;
  calling it before `forward` raises `RuntimeError`.
- `jubreton.sequential`: `Sequential`, which chains layers, runs the
  backward pass in reverse order and saves or loads parameters. The file
  holds, for each layer in turn, the weight rank, the weight dimensions and
  the bias length as little-endian 64-bit unsigned integers, each followed by
  the float32 values. `load` fills the layers the model already has; a short
  file or a rank other than 2 raises `ValueError`.
- `jubreton.loader`: `preprocess_image`, `load_image_batch` (raises
  `ValueError` when fewer paths than the batch size are given),
  `ImagePathPicker` (its `take` hands out folder entries in name order, never
  the same path twice) and `labels_for_paths`.
- `jubreton.training`: `build_model`, `train_model` (returns the mean loss of
  each epoch), `evaluate_model` (returns an `EvaluationResult` with `total`,
  the confusion counts, `correct`, `accuracy` and `report()`) and `main`, the
  entry point of the `jubreton` command.

## What it does not do

The package has no command to classify a single image, no validation split
or early stopping during training, and no optimiser other than fixed-rate
gradient descent. A saved model file holds only parameters, not the layer
widths, so the same `--hidden` widths must be given when it is loaded.