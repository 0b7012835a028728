# cross_validation.py
from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .metrics import accuracy_score

logger = logging.getLogger(__name__)


def stratified_kfold_indices(y: np.ndarray, k: int = 5, seed: int = 42) -> List[Dict[str, List[int]]]:
    """Split indices into ``k`` folds keeping each class spread across folds."""
    y = np.asarray(y)
    if k < 2:
        raise ValueError("k must be at least 2")
    if k > len(y):
        raise ValueError(f"k={k} folds need at least {k} samples, got {len(y)}")

    rng = random.Random(seed)
    buckets: Dict[Any, List[int]] = {}
    for i, yi in enumerate(y.tolist()):
        buckets.setdefault(yi, []).append(i)
    for v in buckets.values():
        rng.shuffle(v)

    # fold i only receives rows from classes with more than i members
    largest = max(len(v) for v in buckets.values())
    if k > largest:
        raise ValueError(f"k={k} folds exceed the largest class size {largest}; some test folds would be empty")
    smallest = min(len(v) for v in buckets.values())
    if k > smallest:
        logger.warning("smallest class has %d rows, fewer than k=%d folds", smallest, k)

    test_splits: List[List[int]] = [[] for _ in range(k)]
    for idxs in buckets.values():
        size, r = divmod(len(idxs), k)
        start = 0
        for i in range(k):
            take = size + (1 if i < r else 0)
            test_splits[i].extend(idxs[start:start + take])
            start += take

    all_idx = set(range(len(y)))
    folds = []
    for test_idx in test_splits:
        test_idx = sorted(test_idx)
        folds.append({"train": sorted(all_idx - set(test_idx)), "test": test_idx})
    return folds


def grid_dict_product(grid: Dict[str, List[Any]]):
    keys = list(grid.keys())
    for values in itertools.product(*[grid[k] for k in keys]):
        yield dict(zip(keys, values))


@dataclass
class CVResult:
    params: Dict[str, Any]
    fold_scores: List[float]

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.fold_scores))

    @property
    def std_score(self) -> float:
        return float(np.std(self.fold_scores))


def grid_search_cv(
    X: np.ndarray,
    y: np.ndarray,
    estimator_factory: Callable[[Dict[str, Any]], Any],
    param_grid: Dict[str, List[Any]] | List[Dict[str, Any]],
    k: int = 5,
    score_fn: Optional[Callable[[np.ndarray, np.ndarray], float]] = None,
    seed: int = 42,
) -> Tuple[Dict[str, Any], List[CVResult]]:
    """
    Pick the parameters with the best mean score over stratified folds.

    Args:
        X: feature matrix
        y: labels
        estimator_factory: params(dict) -> estimator with fit/predict
        param_grid: dict of lists (expanded) or list of param dicts
        k: number of folds
        score_fn: higher is better; accuracy by default
        seed: fold shuffling seed

    Returns:
        (best_params, results for every candidate)
    """
    score_fn = score_fn or accuracy_score
    X = np.asarray(X)
    y = np.asarray(y)
    candidates = list(grid_dict_product(param_grid)) if isinstance(param_grid, dict) else list(param_grid)
    if not candidates:
        raise ValueError("param_grid is empty")

    folds = stratified_kfold_indices(y, k=k, seed=seed)
    results: List[CVResult] = []
    best: Optional[CVResult] = None

    logger.info("testing %d parameter combinations over %d folds", len(candidates), k)
    for pi, params in enumerate(candidates, 1):
        scores = []
        for fold in folds:
            tr, te = fold["train"], fold["test"]
            est = estimator_factory(params)
            est.fit(X[tr], y[tr])
            scores.append(float(score_fn(y[te], est.predict(X[te]))))
        res = CVResult(params, scores)
        results.append(res)
        logger.info("[%d/%d] params=%s  cv_score=%.4f", pi, len(candidates), params, res.mean_score)
        if best is None or res.mean_score > best.mean_score:
            best = res

    logger.info("best params: %s (%.4f)", best.params, best.mean_score)
    return best.params, results
