# qda.py
from typing import Any, Dict

import numpy as np
from scipy.stats import multivariate_normal

from .generative import GaussianGenerativeClassifier


def class_covariance(Xk: np.ndarray) -> np.ndarray:
    return np.atleast_2d(np.cov(Xk, rowvar=False, ddof=1))


class QDA(GaussianGenerativeClassifier):
    """Quadratic discriminant analysis.

    Each class gets its own mean vector and covariance matrix, so the
    decision boundary is quadratic. The number of covariance parameters grows
    with the square of the number of features; with many features and few
    rows the covariance is singular and ``reg`` (ridge on the diagonal) is
    needed.
    """

    name = "qda"

    def _fit_densities(self, X: np.ndarray, y: np.ndarray) -> None:
        self.means_ = np.vstack([X[y == c].mean(axis=0) for c in self.classes_])
        self.covariances_ = np.stack([class_covariance(X[y == c]) for c in self.classes_])
        if self.reg:
            self.covariances_ = self.covariances_ + self.reg * np.eye(X.shape[1])

    def _covariance_for(self, k: int) -> np.ndarray:
        return self.covariances_[k]

    def _log_density(self, X: np.ndarray) -> np.ndarray:
        cols = []
        for k in range(len(self.classes_)):
            # allow_singular=False: a singular covariance raises LinAlgError
            mvn = multivariate_normal(mean=self.means_[k], cov=self._covariance_for(k))
            cols.append(np.reshape(mvn.logpdf(X), -1))
        return np.column_stack(cols)


def create_qda_factory():
    def factory(params: Dict[str, Any]):
        return QDA(**params)

    return factory
