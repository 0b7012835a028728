#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Gaussian generative classifiers.

Each subclass estimates a class-conditional density f_k(x). The posterior is

    p(k | x) = f_k(x) * pi_k / sum_j f_j(x) * pi_j

computed in log space. ``pi`` defaults to the class frequencies seen in
``fit`` but can be replaced, at construction or per prediction, without
re-estimating the densities (prevalence correction).
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence, Union

import numpy as np
from scipy.special import logsumexp

Priors = Union[Mapping[Any, float], Sequence[float], np.ndarray]


def as_2d(X) -> np.ndarray:
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"X must be 1D or 2D, got shape {X.shape}")
    return X


class GaussianGenerativeClassifier:
    """Shared fit/predict logic; subclasses implement the density."""

    name = "generative"

    def __init__(self, priors: Optional[Priors] = None, reg: float = 0.0):
        if reg < 0:
            raise ValueError("reg must be non-negative")
        self.priors = priors
        self.reg = reg
        self.classes_ = None
        self.class_freq_ = None
        self.priors_ = None

    # ---------- fitting ----------
    def fit(self, X, y):
        X = as_2d(X)
        y = np.asarray(y)
        if len(X) != len(y):
            raise ValueError("X and y must have the same number of rows")
        self.classes_, counts = np.unique(y, return_counts=True)
        if len(self.classes_) < 2:
            raise ValueError("need at least two classes to fit a classifier")
        small = self.classes_[counts < 2]
        if len(small):
            raise ValueError(f"classes with fewer than 2 observations: {small.tolist()}")
        self.n_features_ = X.shape[1]
        self.class_freq_ = counts / counts.sum()
        self._fit_densities(X, y)
        self.priors_ = self.class_freq_ if self.priors is None else self._resolve_priors(self.priors)
        return self

    def _fit_densities(self, X: np.ndarray, y: np.ndarray) -> None:
        raise NotImplementedError

    def _log_density(self, X: np.ndarray) -> np.ndarray:
        """(n_samples, n_classes) log f_k(x)."""
        raise NotImplementedError

    # ---------- priors ----------
    def _resolve_priors(self, priors: Priors) -> np.ndarray:
        if isinstance(priors, Mapping):
            missing = [c for c in self.classes_.tolist() if c not in priors]
            if missing:
                raise ValueError(f"priors missing for classes {missing}")
            pi = np.array([priors[c] for c in self.classes_.tolist()], dtype=float)
        else:
            pi = np.asarray(priors, dtype=float)
            if pi.shape != (len(self.classes_),):
                raise ValueError(f"expected {len(self.classes_)} priors, got shape {pi.shape}")
        if np.any(pi < 0) or not np.isclose(pi.sum(), 1.0):
            raise ValueError(f"priors must be non-negative and sum to 1, got {pi.tolist()}")
        return pi

    def set_priors(self, priors: Optional[Priors]):
        self._check_fitted()
        self.priors = priors
        self.priors_ = self.class_freq_ if priors is None else self._resolve_priors(priors)
        return self

    # ---------- prediction ----------
    def _check_fitted(self):
        if self.classes_ is None:
            raise ValueError("Must call fit() first")

    def predict_log_proba(self, X, priors: Optional[Priors] = None) -> np.ndarray:
        self._check_fitted()
        X = as_2d(X)
        if X.shape[1] != self.n_features_:
            raise ValueError(f"expected {self.n_features_} features, got {X.shape[1]}")
        pi = self.priors_ if priors is None else self._resolve_priors(priors)
        with np.errstate(divide="ignore"):
            joint = self._log_density(X) + np.log(pi)
        return joint - logsumexp(joint, axis=1, keepdims=True)

    def predict_proba(self, X, priors: Optional[Priors] = None) -> np.ndarray:
        return np.exp(self.predict_log_proba(X, priors))

    def predict(self, X, priors: Optional[Priors] = None) -> np.ndarray:
        return self.classes_[np.argmax(self.predict_log_proba(X, priors), axis=1)]

    def get_params(self) -> Dict[str, Any]:
        return {"priors": self.priors, "reg": self.reg}

    def __repr__(self):
        return f"{type(self).__name__}(priors={self.priors!r}, reg={self.reg})"
