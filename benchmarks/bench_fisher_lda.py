"""Benchmark Fisher LDA against scikit-learn's eigen-solver LDA."""

from __future__ import annotations

import argparse
import warnings
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterable, List, Optional

import numpy as np
from scipy import linalg
from sklearn.datasets import make_classification
from sklearn.discriminant_analysis import LinearDiscriminantAnalysis
from sklearn.metrics import accuracy_score, balanced_accuracy_score
from sklearn.model_selection import train_test_split
from sklearn.neighbors import NearestCentroid

from fisherlda import DegenerateRankWarning, FisherLinearDiscriminant


@dataclass
class ProjectionResult:
    estimator: str
    n_components: int
    fit_time: float
    project_time: float
    accuracy: float
    balanced_accuracy: float
    max_subspace_angle: Optional[float] = None
    _basis: Optional[np.ndarray] = field(default=None, repr=False)


def _make_split(args: argparse.Namespace):
    """Well separated classes, split into stratified train and test parts."""
    X, y = make_classification(
        n_samples=args.n_samples,
        n_features=args.n_features,
        # one cluster per class needs n_classes <= 2 ** n_informative
        n_informative=min(args.n_features, 2 * args.n_classes),
        n_redundant=0,
        n_classes=args.n_classes,
        n_clusters_per_class=1,
        class_sep=2.5,
        flip_y=0.0,
        random_state=args.random_state,
    )
    return train_test_split(
        X, y, test_size=args.test_size, stratify=y, random_state=args.random_state
    )


_HEADER = (
    "estimator",
    "K",
    "fit (s)",
    "project (s)",
    "accuracy",
    "balanced",
    "max angle (rad)",
)


def _result_row(res: ProjectionResult) -> tuple:
    if res.max_subspace_angle is None:
        angle = "n/a"
    else:
        angle = f"{res.max_subspace_angle:.2e}"
    return (
        res.estimator,
        str(res.n_components),
        f"{res.fit_time:.6f}",
        f"{res.project_time:.6f}",
        f"{res.accuracy:.4f}",
        f"{res.balanced_accuracy:.4f}",
        angle,
    )


def _print_results(results: Iterable[ProjectionResult]) -> None:
    rows = [_HEADER] + [_result_row(res) for res in results]
    widths = [max(len(row[i]) for row in rows) for i in range(len(_HEADER))]
    for n, row in enumerate(rows):
        # estimator names left aligned, numbers right aligned
        cells = [row[0].ljust(widths[0])]
        cells += [cell.rjust(width) for cell, width in zip(row[1:], widths[1:])]
        print("  ".join(cells))
        if n == 0:
            print("  ".join("-" * width for width in widths))


def _score_projection(Y_train, y_train, Y_test, y_test):
    centroids = NearestCentroid().fit(Y_train, y_train)
    predictions = centroids.predict(Y_test)
    return (
        accuracy_score(y_test, predictions),
        balanced_accuracy_score(y_test, predictions),
    )


def benchmark_reference(
    X_train: np.ndarray,
    y_train: np.ndarray,
    X_test: np.ndarray,
    y_test: np.ndarray,
) -> ProjectionResult:
    lda = LinearDiscriminantAnalysis(solver="eigen")
    tic = perf_counter()
    lda.fit(X_train, y_train)
    fit_time = perf_counter() - tic

    tic = perf_counter()
    Y_test = lda.transform(X_test)
    project_time = perf_counter() - tic

    accuracy, balanced = _score_projection(
        lda.transform(X_train), y_train, Y_test, y_test
    )
    n_components = Y_test.shape[1]
    return ProjectionResult(
        estimator="LinearDiscriminantAnalysis",
        n_components=n_components,
        fit_time=fit_time,
        project_time=project_time,
        accuracy=accuracy,
        balanced_accuracy=balanced,
        _basis=lda.scalings_[:, :n_components],
    )


def benchmark_fisher(
    X_train: np.ndarray,
    y_train: np.ndarray,
    X_test: np.ndarray,
    y_test: np.ndarray,
    *,
    n_components: int,
    baseline: Optional[ProjectionResult] = None,
) -> ProjectionResult:
    lda = FisherLinearDiscriminant(n_components=n_components)
    tic = perf_counter()
    with warnings.catch_warnings():
        warnings.simplefilter("error", DegenerateRankWarning)
        lda.compute(X_train, y_train)
    fit_time = perf_counter() - tic

    tic = perf_counter()
    Y_test = lda.project(X_test)
    project_time = perf_counter() - tic

    accuracy, balanced = _score_projection(
        lda.project(X_train), y_train, Y_test, y_test
    )

    max_angle = None
    if baseline is not None and baseline._basis is not None:
        angles = linalg.subspace_angles(lda.eigenvectors_, baseline._basis)
        max_angle = float(np.max(angles))

    return ProjectionResult(
        estimator="FisherLinearDiscriminant",
        n_components=lda.n_components_,
        fit_time=fit_time,
        project_time=project_time,
        accuracy=accuracy,
        balanced_accuracy=balanced,
        max_subspace_angle=max_angle,
        _basis=lda.eigenvectors_,
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--n-samples", type=int, default=200_000)
    parser.add_argument("--n-features", type=int, default=100)
    parser.add_argument("--n-classes", type=int, default=5)
    parser.add_argument("--test-size", type=float, default=0.2)
    parser.add_argument(
        "--n-components",
        type=int,
        default=0,
        help="Discriminant components to keep; 0 keeps n_classes - 1.",
    )
    parser.add_argument("--random-state", type=int, default=0)
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    X_train, X_test, y_train, y_test = _make_split(args)

    print(
        "Dataset:",
        f"{X_train.shape[0] + X_test.shape[0]:,} samples",
        f"({X_train.shape[0]:,} train / {X_test.shape[0]:,} test),",
        f"{X_train.shape[1]} features, {len(np.unique(y_train))} classes",
    )

    results: List[ProjectionResult] = []
    baseline = benchmark_reference(X_train, y_train, X_test, y_test)
    results.append(baseline)
    results.append(
        benchmark_fisher(
            X_train,
            y_train,
            X_test,
            y_test,
            n_components=args.n_components,
            baseline=baseline,
        )
    )

    print()
    _print_results(results)


if __name__ == "__main__":
    main()
