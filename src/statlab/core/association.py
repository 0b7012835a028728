#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Association between an entity (token or sentiment label) and a category.

For an entity seen ``count_a`` times in category A and ``count_b`` times in
category B, with column totals ``sum_a`` and ``sum_b``:

    odds_ratio = ((count_a + .5) / (sum_a - count_a + .5)) /
                 ((count_b + .5) / (sum_b - count_b + .5))

The 0.5 (Haldane-Anscombe) correction is applied to every cell, not only to
zero cells. The log-odds ratio is ``ln(odds_ratio)``; its standard error uses
the *uncorrected* cells:

    se = sqrt(1/count_a + 1/(sum_a - count_a) + 1/count_b + 1/(sum_b - count_b))

so it is undefined when any cell is zero (``UndefinedStatisticError``).
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Union

import numpy as np
import pandas as pd
from scipy.stats import norm

from ..config import CONFIDENCE_LEVEL, HALDANE_CORRECTION
from ..exceptions import UndefinedStatisticError
from .aggregation import TokenCounts, column_totals

logger = logging.getLogger(__name__)

Number = Union[int, float, np.ndarray]


@dataclass(frozen=True)
class LogOddsInterval:
    log_odds_ratio: float
    se: float
    conf_low: float
    conf_high: float


@dataclass(frozen=True)
class AssociationRecord:
    entity: str
    count_a: int
    count_b: int
    odds_ratio: float
    log_odds_ratio: Optional[float] = None
    se: Optional[float] = None
    conf_low: Optional[float] = None
    conf_high: Optional[float] = None


def _scalar(x):
    return float(x) if np.ndim(x) == 0 else x


def _cells(count_a, count_b, sum_a, sum_b):
    a = np.asarray(count_a, dtype=float)
    b = np.asarray(count_b, dtype=float)
    not_a = np.asarray(sum_a, dtype=float) - a
    not_b = np.asarray(sum_b, dtype=float) - b
    if np.any(a < 0) or np.any(b < 0) or np.any(not_a < 0) or np.any(not_b < 0):
        raise ValueError("counts must be non-negative and not exceed their column totals")
    return a, not_a, b, not_b


def z_value(level: float = CONFIDENCE_LEVEL) -> float:
    """Two-sided normal quantile, 1.959964 for a 95% interval."""
    if not 0.0 < level < 1.0:
        raise ValueError("level must lie in (0, 1)")
    return float(norm.ppf(1.0 - (1.0 - level) / 2.0))


def odds_ratio(count_a: Number, count_b: Number, sum_a: Number, sum_b: Number,
               correction: float = HALDANE_CORRECTION) -> Number:
    """Corrected odds ratio; > 1 means over-represented in A. Works on arrays."""
    a, not_a, b, not_b = _cells(count_a, count_b, sum_a, sum_b)
    return _scalar(((a + correction) / (not_a + correction)) / ((b + correction) / (not_b + correction)))


def log_odds_se(count_a: Number, count_b: Number, sum_a: Number, sum_b: Number) -> Number:
    a, not_a, b, not_b = _cells(count_a, count_b, sum_a, sum_b)
    if np.any(a == 0) or np.any(not_a == 0) or np.any(b == 0) or np.any(not_b == 0):
        raise UndefinedStatisticError(
            "standard error undefined: a cell of the 2x2 table is zero "
            f"(count_a={count_a}, count_b={count_b}, sum_a={sum_a}, sum_b={sum_b})"
        )
    return _scalar(np.sqrt(1.0 / a + 1.0 / not_a + 1.0 / b + 1.0 / not_b))


def log_odds_interval(count_a: Number, count_b: Number, sum_a: Number, sum_b: Number,
                      level: float = CONFIDENCE_LEVEL) -> LogOddsInterval:
    """Log-odds ratio with a normal-approximation confidence interval."""
    se = log_odds_se(count_a, count_b, sum_a, sum_b)
    log_or = _scalar(np.log(odds_ratio(count_a, count_b, sum_a, sum_b)))
    z = z_value(level)
    return LogOddsInterval(log_or, se, _scalar(log_or - z * se), _scalar(log_or + z * se))


def score_counts(
    counts: Dict[str, TokenCounts],
    min_total: int = 0,
    with_interval: bool = False,
    level: float = CONFIDENCE_LEVEL,
) -> List[AssociationRecord]:
    """
    Score every entity of a count table.

    Column totals are taken over the whole table; ``min_total`` only drops
    entities with ``count_a + count_b <= min_total`` from the output. An entity
    whose interval is undefined keeps its odds ratio with empty interval fields.

    Returns:
        AssociationRecord list ordered by descending odds ratio, or by
        descending log-odds ratio when ``with_interval`` is set
    """
    sum_a, sum_b = column_totals(counts)
    records = []
    undefined = 0
    for entity, c in counts.items():
        if c.total <= min_total:
            continue
        or_ = odds_ratio(c.count_a, c.count_b, sum_a, sum_b)
        extra = {}
        if with_interval:
            try:
                ci = log_odds_interval(c.count_a, c.count_b, sum_a, sum_b, level)
                extra = asdict(ci)
            except UndefinedStatisticError:
                undefined += 1
                extra = {"log_odds_ratio": float(np.log(or_))}
        records.append(AssociationRecord(entity, c.count_a, c.count_b, or_, **extra))
    if undefined:
        logger.warning("%d entities have a zero cell; their interval is left empty", undefined)

    if with_interval:
        records.sort(key=lambda r: r.log_odds_ratio, reverse=True)
    else:
        records.sort(key=lambda r: r.odds_ratio, reverse=True)
    return records


def odds_ratio_table(
    frame: pd.DataFrame,
    a_col: str,
    b_col: str,
    with_interval: bool = False,
    level: float = CONFIDENCE_LEVEL,
) -> pd.DataFrame:
    """
    Vectorised scoring of a wide count table (one row per entity).

    Adds ``or`` and, with ``with_interval``, ``log_or``, ``se``, ``conf_low``
    and ``conf_high``; rows with a zero cell get NaN in the interval columns.
    """
    out = frame.copy()
    sum_a, sum_b = out[a_col].sum(), out[b_col].sum()
    out["or"] = odds_ratio(out[a_col].to_numpy(), out[b_col].to_numpy(), sum_a, sum_b)
    if with_interval:
        a = out[a_col].to_numpy(dtype=float)
        b = out[b_col].to_numpy(dtype=float)
        with np.errstate(divide="ignore"):
            se = np.sqrt(1.0 / a + 1.0 / (sum_a - a) + 1.0 / b + 1.0 / (sum_b - b))
        se[~np.isfinite(se)] = np.nan
        z = z_value(level)
        out["log_or"] = np.log(out["or"])
        out["se"] = se
        out["conf_low"] = out["log_or"] - z * out["se"]
        out["conf_high"] = out["log_or"] + z * out["se"]
        out = out.sort_values("log_or", ascending=False, kind="stable")
    else:
        out = out.sort_values("or", ascending=False, kind="stable")
    return out.reset_index(drop=True)


def association_frame(records: List[AssociationRecord]) -> pd.DataFrame:
    columns = list(AssociationRecord.__dataclass_fields__)
    return pd.DataFrame([asdict(r) for r in records], columns=columns)
