# lda.py
from typing import Any, Dict

import numpy as np

from .qda import QDA, class_covariance


class LDA(QDA):
    """Linear discriminant analysis.

    Same as QDA but every class shares one pooled covariance,
    sum_k (n_k - 1) S_k / (n - K), which makes the boundary linear.
    """

    name = "lda"

    def _fit_densities(self, X: np.ndarray, y: np.ndarray) -> None:
        self.means_ = np.vstack([X[y == c].mean(axis=0) for c in self.classes_])
        pooled = np.zeros((X.shape[1], X.shape[1]))
        for c in self.classes_:
            Xk = X[y == c]
            pooled += (len(Xk) - 1) * class_covariance(Xk)
        pooled /= len(X) - len(self.classes_)
        if self.reg:
            pooled = pooled + self.reg * np.eye(X.shape[1])
        self.covariance_ = pooled

    def _covariance_for(self, k: int) -> np.ndarray:
        return self.covariance_


def create_lda_factory():
    def factory(params: Dict[str, Any]):
        return LDA(**params)

    return factory
