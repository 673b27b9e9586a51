"""Helpers for label bookkeeping and sample matrix assembly."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

from fisherlda.utils._labels import encode_labels, remove_dups
from fisherlda.utils._matrix import as_column_matrix, as_row_matrix

__all__ = ["as_column_matrix", "as_row_matrix", "encode_labels", "remove_dups"]
