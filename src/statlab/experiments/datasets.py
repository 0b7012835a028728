#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Small labeled datasets for the classifier comparison.

The real tables (reported heights, the 2-vs-7 digit features, tissue gene
expression) ship with course material and can be read with
``prepare_dataset.load_labeled_csv``. The simulators here reproduce their
shape and rough parameters so experiments and tests run without downloads.
"""
from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pandas as pd

TISSUES = ("cerebellum", "colon", "endometrium", "hippocampus", "kidney", "liver", "placenta")


def simulate_heights(n: int = 1050, female_prevalence: float = 0.227, random_state: int = 42) -> pd.DataFrame:
    """Self-reported heights in inches; females are the minority class."""
    rng = np.random.default_rng(random_state)
    female = rng.random(n) < female_prevalence
    height = np.where(female, rng.normal(64.9, 3.8, n), rng.normal(69.3, 3.6, n))
    return pd.DataFrame({"sex": np.where(female, "Female", "Male"), "height": height.round(1)})


def simulate_mnist_27(n: int = 800, random_state: int = 42) -> Tuple[np.ndarray, np.ndarray]:
    """
    Two predictors per image: proportion of dark pixels in the upper-left
    (x_1) and lower-right (x_2) quadrants; labels are the digits 2 and 7.
    The classes have different covariances, so QDA beats LDA here.
    """
    rng = np.random.default_rng(random_state)
    y = np.where(rng.random(n) < 0.47, 7, 2)
    n7 = int((y == 7).sum())
    X = np.empty((n, 2))
    X[y == 2] = rng.multivariate_normal([0.13, 0.32], [[0.0020, 0.0012], [0.0012, 0.0040]], n - n7)
    X[y == 7] = rng.multivariate_normal([0.24, 0.24], [[0.0060, -0.0010], [-0.0010, 0.0025]], n7)
    return np.clip(X, 0.0, 1.0), y


def simulate_tissue_expression(
    n_per_class: int = 25,
    n_genes: int = 10,
    tissues: Sequence[str] = TISSUES,
    random_state: int = 42,
) -> Tuple[np.ndarray, np.ndarray]:
    """Log-expression of a few genes for several tissue types."""
    rng = np.random.default_rng(random_state)
    centers = rng.normal(7.0, 1.5, size=(len(tissues), n_genes))
    X = np.vstack([rng.normal(c, 0.6, size=(n_per_class, n_genes)) for c in centers])
    y = np.repeat(np.asarray(tissues), n_per_class)
    return X, y


def heights_xy(df: pd.DataFrame) -> Tuple[np.ndarray, np.ndarray]:
    return df[["height"]].to_numpy(dtype=float), df["sex"].to_numpy()
