# knn.py
from typing import Any, Dict

import numpy as np
from sklearn.neighbors import KNeighborsClassifier

from .generative import as_2d


class KNNClassifier:
    """k-nearest neighbours wrapped in the same fit/predict shape as the
    generative models.

    params:
      - k: number of neighbours (must not exceed the training size)
      - weights: 'uniform' or 'distance'
    """

    name = "knn"

    def __init__(self, k: int = 5, weights: str = "uniform"):
        if k < 1:
            raise ValueError("k must be at least 1")
        self.k = k
        self.weights = weights
        self.model = None

    def fit(self, X, y):
        X = as_2d(X)
        if self.k > len(X):
            raise ValueError(f"k={self.k} exceeds the {len(X)} training rows")
        self.model = KNeighborsClassifier(n_neighbors=self.k, weights=self.weights)
        self.model.fit(X, np.asarray(y))
        return self

    @property
    def classes_(self):
        return None if self.model is None else self.model.classes_

    def _check_fitted(self):
        if self.model is None:
            raise ValueError("Must call fit() first")

    def predict(self, X) -> np.ndarray:
        self._check_fitted()
        return self.model.predict(as_2d(X))

    def predict_proba(self, X) -> np.ndarray:
        self._check_fitted()
        return self.model.predict_proba(as_2d(X))

    def get_params(self) -> Dict[str, Any]:
        return {"k": self.k, "weights": self.weights}

    def __repr__(self):
        return f"KNNClassifier(k={self.k}, weights={self.weights!r})"


def create_knn_factory():
    def factory(params: Dict[str, Any]):
        return KNNClassifier(**params)

    return factory
