"""Assemble sequences of observations into sample matrices."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

import numpy as np

from fisherlda.exceptions import InputError


def _flatten_observations(src, dtype):
    if len(src) == 0:
        raise InputError("Cannot assemble a sample matrix from zero observations.")
    observations = [np.asarray(obs, dtype=dtype).reshape(-1) for obs in src]
    n_features = observations[0].shape[0]
    for idx, obs in enumerate(observations):
        if obs.shape[0] != n_features:
            raise InputError(
                "All observations must have the same number of elements; "
                f"observation {idx} has {obs.shape[0]}, expected {n_features}."
            )
    return observations


def as_row_matrix(src, dtype=np.float64):
    """Stack observations as the rows of a matrix.

    Each observation is flattened, so images or other n-dimensional arrays
    become one row each.

    Parameters
    ----------
    src : sequence of array-like
        Observations with the same number of elements.

    dtype : dtype, default=np.float64
        Data type of the assembled matrix.

    Returns
    -------
    X : ndarray of shape (n_samples, n_features)
    """
    return np.vstack(_flatten_observations(src, dtype))


def as_column_matrix(src, dtype=np.float64):
    """Stack observations as the columns of a matrix.

    Parameters
    ----------
    src : sequence of array-like
        Observations with the same number of elements.

    dtype : dtype, default=np.float64
        Data type of the assembled matrix.

    Returns
    -------
    X : ndarray of shape (n_features, n_samples)
    """
    return np.column_stack(_flatten_observations(src, dtype))
