"""Label deduplication and remapping to dense class indices."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

import numpy as np


def remove_dups(labels):
    """Return the unique labels in order of first appearance.

    Parameters
    ----------
    labels : array-like of shape (n_samples,)
        Class labels.

    Returns
    -------
    unique : ndarray of shape (n_classes,)
        Distinct labels, ordered by the position of their first occurrence.

    Examples
    --------
    >>> from fisherlda.utils import remove_dups
    >>> remove_dups([7, 3, 7, 1, 3])
    array([7, 3, 1])
    """
    labels = np.asarray(labels).reshape(-1)
    _, first_index = np.unique(labels, return_index=True)
    return labels[np.sort(first_index)]


def encode_labels(labels):
    """Map arbitrary labels onto the dense indices ``0..n_classes - 1``.

    Indices follow the order of first appearance, so the first label seen
    is always mapped to 0.

    Parameters
    ----------
    labels : array-like of shape (n_samples,)
        Class labels.

    Returns
    -------
    classes : ndarray of shape (n_classes,)
        Distinct labels; ``classes[encoded]`` recovers ``labels``.

    encoded : ndarray of shape (n_samples,)
        Dense class index of every sample.
    """
    labels = np.asarray(labels).reshape(-1)
    classes = remove_dups(labels)
    sorter = np.argsort(classes)
    encoded = sorter[np.searchsorted(classes, labels, sorter=sorter)]
    return classes, encoded
