import numpy as np
import pytest

from jubreton.losses import bce_gradient, bce_loss


def test_loss_size_mismatch_raises():
    with pytest.raises(ValueError, match="Size mismatch in BCE loss"):
        bce_loss([0.5, 0.5], [1.0])


def test_gradient_size_mismatch_raises():
    with pytest.raises(ValueError, match="Size mismatch in BCE gradient"):
        bce_gradient([0.5], [1.0, 0.0])


def test_empty_input_raises():
    with pytest.raises(ValueError):
        bce_loss([], [])


def test_half_prediction_gives_log_two():
    assert bce_loss([0.5, 0.5], [1.0, 0.0]) == pytest.approx(np.log(2), rel=1e-5)


def test_perfect_predictions_have_tiny_loss():
    assert bce_loss([1.0, 0.0, 1.0], [1.0, 0.0, 1.0]) < 1e-5


def test_clamping_keeps_wrong_predictions_finite():
    loss = bce_loss([0.0, 1.0], [1.0, 0.0])
    assert np.isfinite(loss)
    assert loss > 10.0
    assert np.all(np.isfinite(bce_gradient([0.0, 1.0], [1.0, 0.0])))


def test_loss_symmetry_under_label_flip():
    p = np.array([0.1, 0.7, 0.4, 0.95])
    y = np.array([1.0, 0.0, 1.0, 1.0])
    assert bce_loss(p, y) == pytest.approx(bce_loss(1 - p, 1 - y), rel=1e-5)


def test_gradient_matches_finite_difference():
    p = np.array([0.2, 0.6, 0.45, 0.8])
    y = np.array([1.0, 0.0, 0.0, 1.0])
    grad = bce_gradient(p, y)
    eps = 1e-3
    for i in range(p.size):
        up, down = p.copy(), p.copy()
        up[i] += eps
        down[i] -= eps
        numeric = (bce_loss(up, y) - bce_loss(down, y)) / (2 * eps)
        assert grad[i] == pytest.approx(numeric, rel=1e-2, abs=1e-3)


def test_gradient_keeps_prediction_shape():
    grad = bce_gradient(np.full((3, 1), 0.3), [1.0, 0.0, 1.0])
    assert grad.shape == (3, 1)
    assert grad[0, 0] < 0 < grad[1, 0]