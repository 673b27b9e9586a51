"""Fisher linear discriminant analysis and affine subspace mappings."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

from fisherlda.discriminant_analysis import FisherLinearDiscriminant
from fisherlda.exceptions import (
    ComplexEigenpairWarning,
    DegenerateRankWarning,
    InputError,
    NotFittedError,
    ShapeMismatchError,
    SingularMatrixError,
)
from fisherlda.subspace import project, reconstruct

__version__ = "0.1.0"

__all__ = [
    "ComplexEigenpairWarning",
    "DegenerateRankWarning",
    "FisherLinearDiscriminant",
    "InputError",
    "NotFittedError",
    "ShapeMismatchError",
    "SingularMatrixError",
    "project",
    "reconstruct",
]
