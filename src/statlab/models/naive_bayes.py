# naive_bayes.py
from typing import Any, Dict

import numpy as np
from scipy.stats import norm

from .generative import GaussianGenerativeClassifier


class GaussianNaiveBayes(GaussianGenerativeClassifier):
    """Naive Bayes with independent normal features.

    Per class and feature: sample mean and sd (ddof=1). With one feature this
    is the univariate rule, e.g. P(female | height).

    params:
      - priors: class -> probability, or a sequence in ``classes_`` order
      - reg: added to every variance
    """

    name = "naive_bayes"

    def _fit_densities(self, X: np.ndarray, y: np.ndarray) -> None:
        self.means_ = np.vstack([X[y == c].mean(axis=0) for c in self.classes_])
        var = np.vstack([X[y == c].var(axis=0, ddof=1) for c in self.classes_]) + self.reg
        if np.any(var <= 0):
            raise ValueError("a feature has zero variance within a class; set reg > 0")
        self.sds_ = np.sqrt(var)

    def _log_density(self, X: np.ndarray) -> np.ndarray:
        # (n, 1, d) against (K, d) -> (n, K, d), summed over features
        return norm.logpdf(X[:, None, :], loc=self.means_[None], scale=self.sds_[None]).sum(axis=2)


def create_nb_factory():
    def factory(params: Dict[str, Any]):
        return GaussianNaiveBayes(**params)

    return factory
