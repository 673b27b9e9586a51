"""Fisher linear discriminant analysis."""

# Authors: The fisherlda developers
# SPDX-License-Identifier: BSD-3-Clause

import warnings
from numbers import Integral, Real

import numpy as np
from scipy import linalg
from sklearn.base import (
    BaseEstimator,
    ClassNamePrefixFeaturesOutMixin,
    TransformerMixin,
    _fit_context,
)
from sklearn.utils._param_validation import Interval
from sklearn.utils.validation import check_array, check_is_fitted, column_or_1d

from fisherlda import subspace
from fisherlda.exceptions import (
    ComplexEigenpairWarning,
    DegenerateRankWarning,
    InputError,
    SingularMatrixError,
)
from fisherlda.utils import as_column_matrix, as_row_matrix, encode_labels

__all__ = ["FisherLinearDiscriminant"]


def _class_statistics(X, y, n_classes):
    """Compute the overall mean and the class means.

    Parameters
    ----------
    X : ndarray of shape (n_samples, n_features)
        Training data.

    y : ndarray of shape (n_samples,)
        Dense class indices in ``range(n_classes)``.

    n_classes : int
        Number of classes.

    Returns
    -------
    xbar : ndarray of shape (n_features,)
        Overall mean.

    means : ndarray of shape (n_classes, n_features)
        Class means.
    """
    counts = np.bincount(y, minlength=n_classes)
    if np.any(counts == 0):
        empty = np.flatnonzero(counts == 0)
        raise RuntimeError(
            f"Classes {empty.tolist()} have no samples; the label encoding is "
            "inconsistent with the training labels."
        )
    means = np.zeros((n_classes, X.shape[1]), dtype=X.dtype)
    np.add.at(means, y, X)
    means /= counts[:, None]
    return X.mean(axis=0), means


def _scatter_matrices(X, y, means, xbar):
    """Compute the within-class and between-class scatter matrices.

    Neither matrix is normalized by the number of samples, and the class
    sizes are not weighted into the between-class scatter.

    Parameters
    ----------
    X : ndarray of shape (n_samples, n_features)
        Training data. Centered in place by the class means.

    y : ndarray of shape (n_samples,)
        Dense class indices.

    means : ndarray of shape (n_classes, n_features)
        Class means.

    xbar : ndarray of shape (n_features,)
        Overall mean.

    Returns
    -------
    Sw : ndarray of shape (n_features, n_features)
        Within-class scatter.

    Sb : ndarray of shape (n_features, n_features)
        Between-class scatter.
    """
    X -= means[y]
    Sw = X.T @ X
    deviations = means - xbar
    Sb = deviations.T @ deviations
    return Sw, Sb


def _solve_eigenpairs(Sw, Sb):
    """Solve the eigenproblem of ``inv(Sw) @ Sb``.

    Returns the complex eigenvalues and eigenvectors (as columns) in the
    order produced by the solver.
    """
    try:
        Sw_inv = linalg.inv(Sw)
    except linalg.LinAlgError as exc:
        raise SingularMatrixError(
            "The within-class scatter matrix is singular and cannot be "
            "inverted. Remove constant or collinear features, or regularize "
            "the problem."
        ) from exc
    return linalg.eig(Sw_inv @ Sb)


def _clip_n_components(requested, n_classes):
    max_components = n_classes - 1
    if requested is None or requested <= 0 or requested > max_components:
        return max_components
    return requested


def _select_components(evals, evecs, n_components):
    """Sort eigenpairs by decreasing eigenvalue and keep `n_components`.

    The sort is stable on the real part of the eigenvalues so that ties
    keep the solver order.
    """
    order = np.argsort(-evals.real, kind="stable")[:n_components]
    return evals[order], evecs[:, order]


class FisherLinearDiscriminant(
    ClassNamePrefixFeaturesOutMixin,
    TransformerMixin,
    BaseEstimator,
):
    """Fisher Linear Discriminant Analysis.

    Finds the directions maximizing the ratio of between-class scatter to
    within-class scatter by solving the eigenproblem of
    ``inv(Sw) @ Sb``, where ``Sw`` is the within-class scatter and ``Sb``
    the between-class scatter of the training data. The leading
    eigenvectors form the discriminant basis used by :meth:`project` and
    :meth:`reconstruct`.

    Parameters
    ----------
    n_components : int, default=0
        Number of discriminant components to keep. Values that are None,
        not positive, or larger than ``n_classes - 1`` select
        ``n_classes - 1`` components, capped at ``n_features``. The clipped
        request, before the cap, replaces this parameter for every later
        call to :meth:`compute` on the same instance.

    data_as_row : bool, default=True
        Whether observations are stored as rows (``(n_samples,
        n_features)``) or as columns (``(n_features, n_samples)``). Applies
        to the input and output of every method.

    store_scatter : bool, default=False
        If True, keep the within-class and between-class scatter matrices
        in `within_scatter_` and `between_scatter_`.

    tol : float, default=1e-8
        Relative threshold on the imaginary parts of the retained
        eigenvalues above which a :class:`ComplexEigenpairWarning` is
        issued.

    Attributes
    ----------
    eigenvectors_ : ndarray of shape (n_features, n_components_)
        Discriminant components, one per column, sorted by decreasing
        eigenvalue.

    eigenvalues_ : ndarray of shape (n_components_,)
        Real parts of the eigenvalues of the discriminant components, in
        non-increasing order.

    n_components_ : int
        Number of discriminant components kept.

    classes_ : ndarray of shape (n_classes,)
        Class labels in order of first appearance.

    means_ : ndarray of shape (n_classes, n_features)
        Class-wise means.

    xbar_ : ndarray of shape (n_features,)
        Overall mean.

    degenerate_rank_ : bool
        True if fewer observations than features were given, in which case
        the within-class scatter is rank deficient.

    max_imag_ : float
        Largest absolute imaginary part discarded from the retained
        eigenvalues.

    within_scatter_ : ndarray of shape (n_features, n_features)
        Within-class scatter matrix. Only present if `store_scatter` is
        True.

    between_scatter_ : ndarray of shape (n_features, n_features)
        Between-class scatter matrix. Only present if `store_scatter` is
        True.

    n_features_in_ : int
        Number of features seen during :meth:`compute`.

    See Also
    --------
    fisherlda.subspace.project : Mean-centered projection onto any basis.
    sklearn.discriminant_analysis.LinearDiscriminantAnalysis : LDA
        classifier with covariance-normalized solvers.

    Notes
    -----
    :meth:`project` applies the basis without subtracting any mean. Use
    :func:`fisherlda.subspace.project` with `xbar_` when centered
    coordinates are needed.

    The model is not safe to fit from several threads at once.

    Examples
    --------
    >>> import numpy as np
    >>> from fisherlda import FisherLinearDiscriminant
    >>> X = np.array([[-1, -1], [-2, -1], [-3, -2], [1, 1], [2, 1], [3, 2]])
    >>> y = np.array([1, 1, 1, 2, 2, 2])
    >>> lda = FisherLinearDiscriminant().compute(X, y)
    >>> lda.eigenvectors_.shape
    (2, 1)
    """

    _parameter_constraints: dict = {
        "n_components": [Interval(Integral, None, None, closed="neither"), None],
        "data_as_row": ["boolean"],
        "store_scatter": ["boolean"],
        "tol": [Interval(Real, 0, None, closed="left")],
    }

    def __init__(
        self, n_components=0, *, data_as_row=True, store_scatter=False, tol=1e-8
    ):
        self.n_components = n_components
        self.data_as_row = data_as_row
        self.store_scatter = store_scatter
        self.tol = tol

    def _as_matrix(self, src):
        """Assemble a sequence of observation arrays into one matrix."""
        if isinstance(src, (list, tuple)) and all(
            isinstance(obs, np.ndarray) for obs in src
        ):
            if len(src) == 0:
                raise InputError("No observations given.")
            return as_row_matrix(src) if self.data_as_row else as_column_matrix(src)
        return src

    def _validate_samples(self, X):
        X = np.asarray(self._as_matrix(X))
        if X.ndim != 2:
            raise InputError(
                "Only single channel matrices allowed; expected a 2D array, "
                f"got shape {X.shape}."
            )
        if not (np.issubdtype(X.dtype, np.number) or X.dtype == np.bool_):
            raise InputError(f"Samples must be numeric; got dtype {X.dtype}.")
        if not self.data_as_row:
            X = X.T
        if X.shape[0] == 0:
            raise InputError("No observations given.")
        # private float64 copy, centered in place later on
        return check_array(X, dtype=np.float64, order="C", copy=True)

    @staticmethod
    def _validate_labels(y, n_samples):
        try:
            y = column_or_1d(y)
        except ValueError as exc:
            raise InputError("Labels must be a 1D array-like.") from exc
        if y.shape[0] != n_samples:
            raise InputError(
                "The number of samples must equal the number of labels; "
                f"got {n_samples} samples and {y.shape[0]} labels."
            )
        return y

    @_fit_context(prefer_skip_nested_validation=True)
    def fit(self, X, y):
        """Compute the discriminant components of the training data.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features) or sequence of ndarray
            Training data, of shape (n_features, n_samples) if `data_as_row`
            is False. A sequence of arrays is read as one observation per
            array, each flattened.

        y : array-like of shape (n_samples,)
            Class labels.

        Returns
        -------
        self : object
            Fitted estimator.

        Raises
        ------
        InputError
            If the number of labels differs from the number of samples, the
            samples are not a numeric 2D matrix, or there are less than two
            classes.

        SingularMatrixError
            If the within-class scatter matrix is not invertible.
        """
        X = self._validate_samples(X)
        y = self._validate_labels(y, X.shape[0])
        n_samples, n_features = X.shape

        classes, y = encode_labels(y)
        n_classes = classes.shape[0]
        if n_classes < 2:
            raise InputError(
                "The number of classes has to be greater than one; got %d class"
                % n_classes
            )

        degenerate_rank = n_samples < n_features
        if degenerate_rank:
            warnings.warn(
                f"Less observations ({n_samples}) than feature dimension "
                f"({n_features}) given. The within-class scatter matrix is "
                "rank deficient and the computation will probably fail.",
                DegenerateRankWarning,
            )

        requested = getattr(self, "_requested_components", self.n_components)
        requested = _clip_n_components(requested, n_classes)
        # there are only n_features eigenpairs to choose from
        n_components = min(requested, n_features)

        xbar, means = _class_statistics(X, y, n_classes)
        Sw, Sb = _scatter_matrices(X, y, means, xbar)
        evals, evecs = _solve_eigenpairs(Sw, Sb)
        evals, evecs = _select_components(evals, evecs, n_components)

        max_imag = float(np.max(np.abs(evals.imag), initial=0.0))
        if max_imag > self.tol * np.max(np.abs(evals), initial=0.0):
            warnings.warn(
                "Discarded imaginary parts of the discriminant eigenvalues are "
                f"not negligible (up to {max_imag:.3g}).",
                ComplexEigenpairWarning,
            )

        # every step succeeded, replace the previous state wholesale
        self.classes_ = classes
        self.means_ = means
        self.xbar_ = xbar
        self.eigenvalues_ = evals.real
        self.eigenvectors_ = np.ascontiguousarray(evecs.real)
        self.n_components_ = n_components
        self._requested_components = requested
        self.degenerate_rank_ = degenerate_rank
        self.max_imag_ = max_imag
        if self.store_scatter:
            self.within_scatter_ = Sw
            self.between_scatter_ = Sb
        self.n_features_in_ = n_features
        self._n_features_out = n_components
        return self

    def compute(self, X, y):
        """Compute the discriminant components; alias of :meth:`fit`.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features) or sequence of ndarray
            Training data.

        y : array-like of shape (n_samples,)
            Class labels.

        Returns
        -------
        self : object
            Fitted estimator.
        """
        return self.fit(X, y)

    def project(self, X):
        """Project samples onto the discriminant components.

        Computes ``X @ eigenvectors_``; no mean is subtracted.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features) or sequence of ndarray
            Samples, of shape (n_features, n_samples) if `data_as_row` is
            False.

        Returns
        -------
        Y : ndarray of shape (n_samples, n_components_)
            Projected samples, transposed if `data_as_row` is False.
        """
        check_is_fitted(self)
        return subspace.project(
            self.eigenvectors_,
            np.zeros(self.n_features_in_),
            self._as_matrix(X),
            data_as_row=self.data_as_row,
        )

    def reconstruct(self, Y):
        """Map discriminant coordinates back to the feature space.

        Computes ``Y @ eigenvectors_.T``, the inverse mapping of
        :meth:`project` restricted to the discriminant subspace.

        Parameters
        ----------
        Y : array-like of shape (n_samples, n_components_)
            Discriminant coordinates, of shape (n_components_, n_samples) if
            `data_as_row` is False.

        Returns
        -------
        X : ndarray of shape (n_samples, n_features)
            Reconstructed samples, transposed if `data_as_row` is False.
        """
        check_is_fitted(self)
        return subspace.reconstruct(
            self.eigenvectors_,
            np.zeros(self.n_features_in_),
            Y,
            data_as_row=self.data_as_row,
        )

    def transform(self, X):
        """Project samples onto the discriminant components.

        Same as :meth:`project`.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Input data.

        Returns
        -------
        X_new : ndarray of shape (n_samples, n_components_)
            Transformed data.
        """
        return self.project(X)

    def inverse_transform(self, X):
        """Same as :meth:`reconstruct`.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_components_)
            Transformed data.

        Returns
        -------
        X_original : ndarray of shape (n_samples, n_features)
            Data mapped back to the feature space.
        """
        return self.reconstruct(X)
