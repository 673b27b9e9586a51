"""Affine projection onto and reconstruction from a linear subspace."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

import numpy as np
from sklearn.utils.validation import check_array

from fisherlda.exceptions import ShapeMismatchError

__all__ = ["project", "reconstruct"]


def _working_dtype(mean):
    if np.issubdtype(mean.dtype, np.floating):
        return mean.dtype
    return np.float64


def _check_source(src, dtype, data_as_row):
    """Validate ``src`` and return it with observations as rows."""
    src = np.asarray(src)
    if src.ndim != 2:
        raise ShapeMismatchError(
            f"Expected a 2D source matrix, got an array of shape {src.shape}."
        )
    src = check_array(src, dtype=dtype, ensure_min_samples=1)
    return src if data_as_row else src.T


def project(W, mean, src, data_as_row=True):
    """Project samples into the subspace spanned by ``W``.

    Computes ``Y = (X - mean) @ W``.

    Parameters
    ----------
    W : array-like of shape (n_features, n_components)
        Basis of the subspace, one component per column.

    mean : array-like of n_features elements
        Sample mean subtracted from every observation.

    src : array-like of shape (n_samples, n_features)
        Samples to project. Of shape (n_features, n_samples) if
        `data_as_row` is False.

    data_as_row : bool, default=True
        Whether observations are stored as the rows of `src`.

    Returns
    -------
    Y : ndarray of shape (n_samples, n_components)
        Projected samples, transposed to (n_components, n_samples) if
        `data_as_row` is False.

    Raises
    ------
    ShapeMismatchError
        If the sample dimension differs from the size of `mean` or from the
        number of rows of `W`.
    """
    mean = np.asarray(mean)
    dtype = _working_dtype(mean)
    W = np.asarray(W, dtype=dtype)
    X = _check_source(src, dtype, data_as_row)
    n_features = X.shape[1]
    if n_features != mean.size:
        raise ShapeMismatchError(
            "The dimension of the samples in src must equal the dimension of "
            f"the sample mean; got {n_features} and {mean.size}."
        )
    if W.ndim != 2 or W.shape[0] != n_features:
        raise ShapeMismatchError(
            f"W must have shape ({n_features}, n_components); got {W.shape}."
        )
    Y = (X - mean.astype(dtype).reshape(1, -1)) @ W
    return Y if data_as_row else Y.T


def reconstruct(W, mean, src, data_as_row=True):
    """Map subspace coordinates back to the original feature space.

    Computes ``X = Y @ W.T + mean``. Unless `W` spans the whole feature
    space this is the best rank-`n_components` approximation under the
    given basis rather than an exact inverse of :func:`project`.

    Parameters
    ----------
    W : array-like of shape (n_features, n_components)
        Basis of the subspace, one component per column.

    mean : array-like of n_features elements
        Sample mean added back to every reconstruction.

    src : array-like of shape (n_samples, n_components)
        Subspace coordinates. Of shape (n_components, n_samples) if
        `data_as_row` is False.

    data_as_row : bool, default=True
        Whether observations are stored as the rows of `src`.

    Returns
    -------
    X : ndarray of shape (n_samples, n_features)
        Reconstructed samples, transposed to (n_features, n_samples) if
        `data_as_row` is False.

    Raises
    ------
    ShapeMismatchError
        If `src` does not hold `n_components` coordinates per observation or
        `mean` does not have `n_features` elements.
    """
    mean = np.asarray(mean)
    dtype = _working_dtype(mean)
    W = np.asarray(W, dtype=dtype)
    Y = _check_source(src, dtype, data_as_row)
    if W.ndim != 2 or W.shape[1] != Y.shape[1]:
        raise ShapeMismatchError(
            f"src holds {Y.shape[1]} coordinates per sample but W has shape "
            f"{W.shape}."
        )
    if W.shape[0] != mean.size:
        raise ShapeMismatchError(
            "The dimension of the basis must equal the dimension of the sample "
            f"mean; got {W.shape[0]} and {mean.size}."
        )
    X = Y @ W.T + mean.astype(dtype).reshape(1, -1)
    return X if data_as_row else X.T
