import struct

import numpy as np
import pytest

from jubreton.layers import Dense, SigmoidOutput
from jubreton.sequential import Sequential


def _model(seed):
    rng = np.random.default_rng(seed)
    model = Sequential()
    model.add(Dense(6, 4, rng))
    model.add(Dense(4, 3, rng))
    model.add(SigmoidOutput(3, rng))
    return model


def _batch():
    return np.random.default_rng(99).normal(size=(5, 6)).astype(np.float32)


def test_empty_model_returns_input():
    x = _batch()
    np.testing.assert_array_equal(Sequential().forward(x), x)


def test_forward_output_shape():
    out = _model(1).forward(_batch())
    assert out.shape == (5, 1)
    assert np.all((out > 0) & (out < 1))


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "model.bin"
    source = _model(1)
    source.save(path)
    target = _model(2)
    assert not np.allclose(source.forward(_batch()), target.forward(_batch()))
    target.load(path)
    np.testing.assert_array_equal(source.forward(_batch()), target.forward(_batch()))
    for a, b in zip(source.layers, target.layers):
        np.testing.assert_array_equal(a.weights, b.weights)
        np.testing.assert_array_equal(a.biases, b.biases)


def test_saved_file_layout(tmp_path):
    path = tmp_path / "model.bin"
    model = _model(1)
    model.save(path)
    data = path.read_bytes()
    rank, rows, cols = struct.unpack("<QQQ", data[:24])
    assert (rank, rows, cols) == (2, 6, 4)
    expected = sum(8 + 16 + 4 * l.weights.size + 8 + 4 * l.biases.size for l in model.layers)
    assert len(data) == expected


def test_load_truncated_file_raises(tmp_path):
    path = tmp_path / "model.bin"
    _model(1).save(path)
    path.write_bytes(path.read_bytes()[:-3])
    with pytest.raises(ValueError):
        _model(2).load(path)


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        _model(1).load(tmp_path / "absent.bin")


def test_backward_returns_input_gradient():
    model = _model(3)
    x = _batch()
    upstream = np.random.default_rng(4).normal(size=(5, 1)).astype(np.float32)
    model.forward(x)
    grad = model.backward(upstream, 0.0)
    assert grad.shape == x.shape
    eps = 1e-2
    up, down = x.copy(), x.copy()
    up[0, 0] += eps
    down[0, 0] -= eps
    numeric = (np.sum(model.forward(up) * upstream) - np.sum(model.forward(down) * upstream)) / (2 * eps)
    assert grad[0, 0] == pytest.approx(numeric, rel=2e-2, abs=2e-3)


def test_backward_updates_every_layer():
    model = _model(5)
    before = [layer.weights.copy() for layer in model.layers]
    model.forward(_batch())
    model.backward(np.ones((5, 1)), 0.1)
    for old, layer in zip(before, model.layers):
        assert not np.array_equal(old, layer.weights)