"""Custom warnings and errors used across fisherlda."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

import numpy as np
from scipy import linalg
from sklearn.exceptions import NotFittedError

__all__ = [
    "ComplexEigenpairWarning",
    "DegenerateRankWarning",
    "InputError",
    "NotFittedError",
    "ShapeMismatchError",
    "SingularMatrixError",
]


class ShapeMismatchError(ValueError):
    """Raised when sample, mean and basis dimensions disagree.

    Also raised for source matrices that are not two dimensional.
    """


class InputError(ValueError):
    """Raised when training data or labels are unusable.

    Examples are a label count that differs from the sample count,
    multi-channel or non-numeric samples, and data with a single class.
    """


class SingularMatrixError(np.linalg.LinAlgError):
    """Raised when the within-class scatter matrix cannot be inverted.

    Callers may retry with a regularized problem, e.g. by adding a small
    multiple of the identity to the data's within-class scatter.
    """


class DegenerateRankWarning(linalg.LinAlgWarning):
    """Warning used when there are fewer observations than features.

    The within-class scatter matrix is then rank deficient and the
    discriminant components are numerically unreliable.
    """


class ComplexEigenpairWarning(UserWarning):
    """Warning used when discarded imaginary eigen components are large.

    Only the real parts of the eigenpairs of ``inv(Sw) @ Sb`` are kept; this
    warning flags that the dropped imaginary parts were not negligible.
    """
