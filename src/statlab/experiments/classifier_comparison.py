#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Generative classifiers vs. nearest neighbours

Fits Naive Bayes, QDA and LDA (closed-form estimates) and a kNN classifier
whose k is chosen by cross-validation on the training half, then compares
them on a held-out test set. ``prior_sweep`` shows prevalence correction:
the fitted densities are kept and only the prior in the posterior changes.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split

from ..config import RANDOM_STATE
from ..core.cross_validation import grid_search_cv
from ..core.metrics import accuracy_score, compute_all_metrics, confusion_matrix
from ..models.generative import GaussianGenerativeClassifier
from ..models.models_registry import MODEL_NAMES, get_factory_and_grid

logger = logging.getLogger(__name__)


def _jsonable(value):
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, np.ndarray):
        return _jsonable(value.tolist())
    if isinstance(value, np.generic):
        return value.item()
    return value


class ClassifierComparison:
    def __init__(
        self,
        test_size: float = 0.5,
        random_state: int = RANDOM_STATE,
        pos_label: Any = None,
        fast: bool = True,
        cv_folds: int = 5,
    ):
        """
        Args:
            test_size: Fraction of data held out for testing
            random_state: Random seed for the split and the folds
            pos_label: Positive class for binary metrics (None: accuracy only)
            fast: Use the short kNN grid
            cv_folds: Folds used to choose k
        """
        self.test_size = test_size
        self.random_state = random_state
        self.pos_label = pos_label
        self.fast = fast
        self.cv_folds = cv_folds
        self.X_train = self.X_test = self.y_train = self.y_test = None
        self.best_params: Dict[str, Dict[str, Any]] = {}

    def split(self, X, y):
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        y = np.asarray(y)
        self.X_train, self.X_test, self.y_train, self.y_test = train_test_split(
            X, y, test_size=self.test_size, random_state=self.random_state, stratify=y
        )
        logger.info("data split: %d train, %d test", len(self.y_train), len(self.y_test))
        return self.X_train, self.X_test, self.y_train, self.y_test

    def _check_split(self):
        if self.X_train is None:
            raise ValueError("Must call split() first")

    def tune(self, model_name: str) -> Dict[str, Any]:
        """Choose parameters on the training set; single-setting grids skip CV."""
        self._check_split()
        factory, grid = get_factory_and_grid(model_name, fast=self.fast)
        if len(grid) == 1:
            best = grid[0]
        else:
            # k cannot exceed the rows of a training fold
            _, counts = np.unique(self.y_train, return_counts=True)
            max_fit = len(self.y_train) - int(np.sum(np.ceil(counts / self.cv_folds)))
            grid = [p for p in grid if p.get("k", 0) <= max_fit] or grid[:1]
            best, _ = grid_search_cv(
                self.X_train, self.y_train, factory, grid,
                k=self.cv_folds, score_fn=accuracy_score, seed=self.random_state,
            )
        self.best_params[model_name] = best
        return best

    def evaluate_model(self, model_name: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        self._check_split()
        params = self.best_params.get(model_name) if params is None else params
        if params is None:
            params = self.tune(model_name)
        factory, _ = get_factory_and_grid(model_name, fast=self.fast)
        est = factory(params).fit(self.X_train, self.y_train)
        y_pred = est.predict(self.X_test)

        labels = sorted(set(self.y_train.tolist()) | set(self.y_test.tolist()))
        metrics = compute_all_metrics(self.y_test, y_pred, pos_label=self.pos_label)
        logger.info("%s %s -> %s", model_name, params, {k: round(v, 4) for k, v in metrics.items()})
        return {
            "model": model_name,
            "params": params,
            "metrics": metrics,
            "labels": labels,
            "confusion_matrix": confusion_matrix(self.y_test, y_pred, labels).tolist(),
        }

    def prior_sweep(self, model_name: str, priors: Iterable[Mapping[Any, float]]) -> pd.DataFrame:
        """Refit once, then predict under each prior without re-estimating densities."""
        self._check_split()
        factory, grid = get_factory_and_grid(model_name, fast=self.fast)
        est = factory(grid[0]).fit(self.X_train, self.y_train)
        if not isinstance(est, GaussianGenerativeClassifier):
            raise ValueError(f"{model_name} is not a generative model; it has no prior")
        rows = []
        for prior in priors:
            y_pred = est.predict(self.X_test, priors=prior)
            row = {"prior": {str(k): float(v) for k, v in prior.items()}}
            row.update(compute_all_metrics(self.y_test, y_pred, pos_label=self.pos_label))
            rows.append(row)
        return pd.DataFrame(rows)

    def run(self, X, y, models: Sequence[str] = MODEL_NAMES) -> Dict[str, Any]:
        self.split(X, y)
        results = {}
        for m in models:
            logger.info("evaluating %s", m)
            results[m] = self.evaluate_model(m)
        return results

    @staticmethod
    def summary_table(results: Dict[str, Any]) -> pd.DataFrame:
        rows = []
        for model, res in results.items():
            row = {"Model": model, "Params": str(res["params"])}
            row.update(res["metrics"])
            rows.append(row)
        return pd.DataFrame(rows)

    def save(self, results: Dict[str, Any], results_dir: Path, name: str = "classifiers") -> List[Path]:
        results_dir = Path(results_dir)
        results_dir.mkdir(parents=True, exist_ok=True)
        json_path = results_dir / f"{name}_results.json"
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(_jsonable(results), f, ensure_ascii=False, indent=2)
        df = self.summary_table(results)
        csv_path = results_dir / f"{name}_summary.csv"
        md_path = results_dir / f"{name}_summary.md"
        df.to_csv(csv_path, index=False)
        md_path.write_text(df.to_markdown(index=False, floatfmt=".4f"), encoding="utf-8")
        return [json_path, csv_path, md_path]
