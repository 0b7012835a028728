#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Classification Metrics

Metrics used to compare the generative classifiers with kNN:
- Confusion matrix and overall accuracy (any number of classes)
- Sensitivity (recall), specificity and precision for a positive class
- F-beta score and balanced accuracy
- Prevalence of the positive class

Binary metrics take ``pos_label``; every other label counts as negative, so
they also work one-vs-rest on multiclass data.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

logger = logging.getLogger(__name__)


def _check_lengths(y_true: np.ndarray, y_pred: np.ndarray):
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)
    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")
    return y_true, y_pred


def confusion_matrix(
    y_true: np.ndarray, y_pred: np.ndarray, labels: Optional[List] = None
) -> np.ndarray:
    """
    Compute confusion matrix.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        labels: List of labels to include in matrix (if None, use unique labels)

    Returns:
        Confusion matrix as 2D numpy array, rows = truth, columns = prediction
    """
    y_true, y_pred = _check_lengths(y_true, y_pred)

    if labels is None:
        labels = sorted(set(y_true.tolist()) | set(y_pred.tolist()))

    label_to_idx = {label: i for i, label in enumerate(labels)}
    cm = np.zeros((len(labels), len(labels)), dtype=int)
    for true_label, pred_label in zip(y_true.tolist(), y_pred.tolist()):
        if true_label in label_to_idx and pred_label in label_to_idx:
            cm[label_to_idx[true_label], label_to_idx[pred_label]] += 1
    return cm


def accuracy_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    y_true, y_pred = _check_lengths(y_true, y_pred)
    if len(y_true) == 0:
        return 0.0
    return float(np.mean(y_true == y_pred))


def _binary_cells(y_true, y_pred, pos_label):
    y_true, y_pred = _check_lengths(y_true, y_pred)
    pos_true = y_true == pos_label
    pos_pred = y_pred == pos_label
    tp = int(np.sum(pos_true & pos_pred))
    fp = int(np.sum(~pos_true & pos_pred))
    fn = int(np.sum(pos_true & ~pos_pred))
    tn = int(np.sum(~pos_true & ~pos_pred))
    return tp, fp, fn, tn


def _ratio(num: int, den: int, name: str, zero_division: float) -> float:
    if den == 0:
        logger.warning("%s is ill-defined (no samples in denominator)", name)
        return float(zero_division)
    return num / den


def recall_score(y_true, y_pred, pos_label=1, zero_division: float = 0.0) -> float:
    """Sensitivity: share of actual positives predicted positive."""
    tp, fp, fn, tn = _binary_cells(y_true, y_pred, pos_label)
    return _ratio(tp, tp + fn, "Sensitivity", zero_division)


sensitivity_score = recall_score


def specificity_score(y_true, y_pred, pos_label=1, zero_division: float = 0.0) -> float:
    """Share of actual negatives predicted negative."""
    tp, fp, fn, tn = _binary_cells(y_true, y_pred, pos_label)
    return _ratio(tn, tn + fp, "Specificity", zero_division)


def precision_score(y_true, y_pred, pos_label=1, zero_division: float = 0.0) -> float:
    """Positive predictive value."""
    tp, fp, fn, tn = _binary_cells(y_true, y_pred, pos_label)
    return _ratio(tp, tp + fp, "Precision", zero_division)


def f1_score(y_true, y_pred, pos_label=1, beta: float = 1.0, zero_division: float = 0.0) -> float:
    """
    F-beta score for the positive class.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        pos_label: Label of the positive class
        beta: Relative weight of recall over precision
        zero_division: Value returned when the score is ill-defined

    Returns:
        F-beta score
    """
    if beta <= 0:
        raise ValueError("beta must be positive")
    precision = precision_score(y_true, y_pred, pos_label, zero_division)
    recall = recall_score(y_true, y_pred, pos_label, zero_division)
    b2 = beta ** 2
    if b2 * precision + recall == 0:
        return float(zero_division)
    return float((1 + b2) * precision * recall / (b2 * precision + recall))


def balanced_accuracy_score(y_true, y_pred, pos_label=1) -> float:
    """Mean of sensitivity and specificity."""
    return (
        recall_score(y_true, y_pred, pos_label) + specificity_score(y_true, y_pred, pos_label)
    ) / 2.0


def prevalence(y_true, pos_label=1) -> float:
    y_true = np.asarray(y_true)
    if len(y_true) == 0:
        return 0.0
    return float(np.mean(y_true == pos_label))


def compute_all_metrics(y_true: np.ndarray, y_pred: np.ndarray, pos_label=None) -> Dict[str, float]:
    """
    Accuracy for any task; with ``pos_label`` also the binary metrics.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        pos_label: Positive class, or None for multiclass summaries

    Returns:
        Dictionary containing all metrics
    """
    out = {"accuracy": accuracy_score(y_true, y_pred)}
    if pos_label is not None:
        out.update(
            {
                "sensitivity": recall_score(y_true, y_pred, pos_label),
                "specificity": specificity_score(y_true, y_pred, pos_label),
                "precision": precision_score(y_true, y_pred, pos_label),
                "f1": f1_score(y_true, y_pred, pos_label),
                "balanced_accuracy": balanced_accuracy_score(y_true, y_pred, pos_label),
                "prevalence": prevalence(y_true, pos_label),
            }
        )
    return out
