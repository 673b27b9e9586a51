import numpy as np
import pytest
from scipy import linalg
from sklearn.utils import check_random_state
from sklearn.utils._testing import assert_allclose, assert_array_equal

from fisherlda import ShapeMismatchError, project, reconstruct


def _orthonormal_basis(n_features, random_state=0):
    rng = check_random_state(random_state)
    Q, _ = linalg.qr(rng.randn(n_features, n_features))
    return Q


@pytest.mark.parametrize("n_features", [1, 3, 8])
def test_round_trip_with_full_basis(n_features):
    rng = check_random_state(1)
    X = rng.randn(20, n_features) * 5 + 3
    W = _orthonormal_basis(n_features)
    mean = X.mean(axis=0)

    Y = project(W, mean, X)
    assert Y.shape == (20, n_features)
    assert_allclose(reconstruct(W, mean, Y), X, rtol=1e-10, atol=1e-10)


def test_project_centers_by_the_mean():
    X = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 8.0]])
    W = np.eye(2)
    mean = np.array([1.0, 2.0])
    assert_allclose(project(W, mean, X), X - mean)


@pytest.mark.parametrize("func", [project, reconstruct])
def test_orientation_gives_identical_results(func):
    rng = check_random_state(0)
    W = _orthonormal_basis(4)[:, :4]
    mean = rng.randn(4)
    X = rng.randn(10, 4)

    rows = func(W, mean, X, data_as_row=True)
    cols = func(W, mean, X.T, data_as_row=False)
    assert cols.shape == rows.T.shape
    assert_allclose(cols, rows.T)


def test_partial_basis_is_lossy():
    rng = check_random_state(2)
    X = rng.randn(15, 5)
    W = _orthonormal_basis(5)[:, :2]
    mean = X.mean(axis=0)

    Y = project(W, mean, X)
    assert Y.shape == (15, 2)
    X_rec = reconstruct(W, mean, Y)
    assert X_rec.shape == X.shape
    assert not np.allclose(X_rec, X)
    # projecting the reconstruction again is exact
    assert_allclose(project(W, mean, X_rec), Y, atol=1e-12)
    # the residual is orthogonal to the basis
    assert_allclose((X - X_rec) @ W, np.zeros((15, 2)), atol=1e-12)


def test_mean_dimension_mismatch():
    W = np.eye(3)
    X = np.ones((4, 3))
    msg = "dimension of the samples in src must equal"
    with pytest.raises(ShapeMismatchError, match=msg):
        project(W, np.zeros(2), X)
    with pytest.raises(ShapeMismatchError, match=msg):
        # column oriented data with 4 features
        project(W, np.zeros(3), X, data_as_row=False)


def test_basis_dimension_mismatch():
    X = np.ones((4, 3))
    with pytest.raises(ShapeMismatchError, match="W must have shape"):
        project(np.eye(2), np.zeros(3), X)
    with pytest.raises(ShapeMismatchError, match="coordinates per sample"):
        reconstruct(np.eye(3)[:, :2], np.zeros(3), X)
    with pytest.raises(ShapeMismatchError, match="dimension of the basis"):
        reconstruct(np.eye(3), np.zeros(2), X)


def test_source_must_be_two_dimensional():
    with pytest.raises(ShapeMismatchError, match="2D source matrix"):
        project(np.eye(3), np.zeros(3), np.ones(3))
    with pytest.raises(ShapeMismatchError, match="2D source matrix"):
        reconstruct(np.eye(3), np.zeros(3), np.ones((2, 3, 1)))


def test_inputs_are_promoted_to_the_mean_precision():
    X = np.array([[1, 2], [3, 4]], dtype=np.int32)
    W = np.eye(2, dtype=np.int64)

    Y = project(W, np.array([1, 1]), X)
    assert Y.dtype == np.float64
    assert_array_equal(Y, [[0.0, 1.0], [2.0, 3.0]])

    Y32 = project(W, np.zeros(2, dtype=np.float32), X)
    assert Y32.dtype == np.float32
    assert reconstruct(W, np.zeros(2, dtype=np.float32), Y32).dtype == np.float32
