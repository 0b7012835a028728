#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Sentiment-lexicon association.

Each token is joined to zero, one or many lexicon labels (e.g. the NRC
emotion lexicon). Tokens are counted per (label, category); a token with no
entry is counted under the synthetic label ``none`` unless unmatched tokens
are excluded. The per-label counts are then scored with the same odds ratio
and log-odds interval as single tokens, using column totals over all label
buckets.
"""
from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ..config import CONFIDENCE_LEVEL, NONE_LABEL
from .aggregation import TokenCounts, check_categories, column_totals
from .association import AssociationRecord, odds_ratio, score_counts

logger = logging.getLogger(__name__)


class Lexicon:
    """Read-only word -> labels mapping."""

    def __init__(self, entries: Mapping[str, Sequence[str]]):
        self._entries: Dict[str, Tuple[str, ...]] = {
            str(word): tuple(dict.fromkeys(labels)) for word, labels in entries.items() if labels
        }

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        word_col: str = "word",
        label_col: str = "sentiment",
        labels: Optional[Iterable[str]] = None,
    ) -> "Lexicon":
        df = df[[word_col, label_col]].dropna()
        if labels is not None:
            df = df[df[label_col].isin(list(labels))]
        entries: Dict[str, List[str]] = {}
        for word, label in zip(df[word_col], df[label_col]):
            entries.setdefault(str(word), []).append(str(label))
        return cls(entries)

    def labels_for(self, word: str) -> Tuple[str, ...]:
        return self._entries.get(word, ())

    @property
    def labels(self) -> List[str]:
        return sorted({lab for labs in self._entries.values() for lab in labs})

    def __contains__(self, word) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def load_lexicon(path: str | Path, labels: Optional[Iterable[str]] = None, **kwargs) -> Lexicon:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Lexicon not found: {path}")
    lex = Lexicon.from_frame(pd.read_csv(path), labels=labels, **kwargs)
    logger.info("loaded lexicon with %d words and labels %s from %s", len(lex), lex.labels, path)
    return lex


def label_counts(
    pairs: Iterable[Tuple[str, str]],
    lexicon: Lexicon,
    categories: Sequence[str],
    none_label: str = NONE_LABEL,
    include_unmatched: bool = True,
) -> Dict[str, TokenCounts]:
    """
    Count tokens per lexicon label and category.

    Args:
        pairs: (token, category) pairs
        lexicon: word -> labels
        categories: the two categories (A, B)
        none_label: bucket for tokens without a lexicon entry
        include_unmatched: False drops unmatched tokens instead

    Returns:
        label -> TokenCounts; a token with several labels counts under each
    """
    cat_a, cat_b = check_categories(categories)
    cnt: Counter = Counter()
    order: Dict[str, None] = {}
    for token, category in pairs:
        if category != cat_a and category != cat_b:
            raise ValueError(f"unexpected category {category!r}; expected one of {[cat_a, cat_b]}")
        labels = lexicon.labels_for(token)
        if not labels:
            if not include_unmatched:
                continue
            labels = (none_label,)
        for label in labels:
            cnt[(label, category)] += 1
            order.setdefault(label, None)
    return {lab: TokenCounts(cnt[(lab, cat_a)], cnt[(lab, cat_b)]) for lab in order}


def score_labels(
    pairs: Iterable[Tuple[str, str]],
    lexicon: Lexicon,
    categories: Sequence[str],
    none_label: str = NONE_LABEL,
    include_unmatched: bool = True,
    level: float = CONFIDENCE_LEVEL,
) -> List[AssociationRecord]:
    """Per-label odds ratio and log-odds interval, by descending log-odds ratio."""
    counts = label_counts(pairs, lexicon, categories, none_label, include_unmatched)
    return score_counts(counts, min_total=0, with_interval=True, level=level)


def label_words(
    word_counts: Dict[str, TokenCounts],
    lexicon: Lexicon,
    labels: Optional[Iterable[str]] = None,
    min_total: int = 0,
) -> pd.DataFrame:
    """
    Which words drive each label.

    Odds ratios use the column totals of the full word table; only words with
    a lexicon entry (restricted to ``labels`` when given) appear.
    """
    sum_a, sum_b = column_totals(word_counts)
    wanted = set(labels) if labels is not None else None
    rows = []
    for word, c in word_counts.items():
        if c.total <= min_total:
            continue
        for label in lexicon.labels_for(word):
            if wanted is not None and label not in wanted:
                continue
            rows.append(
                {
                    "word": word,
                    "label": label,
                    "count_a": c.count_a,
                    "count_b": c.count_b,
                    "odds_ratio": odds_ratio(c.count_a, c.count_b, sum_a, sum_b),
                }
            )
    out = pd.DataFrame(rows, columns=["word", "label", "count_a", "count_b", "odds_ratio"])
    return out.sort_values(["label", "odds_ratio"], ascending=[True, False], kind="stable").reset_index(drop=True)
