# aggregation.py
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True)
class TokenCounts:
    count_a: int = 0
    count_b: int = 0

    @property
    def total(self) -> int:
        return self.count_a + self.count_b


def check_categories(categories: Sequence[str]) -> Tuple[str, str]:
    if len(categories) != 2 or categories[0] == categories[1]:
        raise ValueError(f"need two distinct categories, got {categories!r}")
    return categories[0], categories[1]


def count_tokens(pairs: Iterable[Tuple[str, str]], categories: Sequence[str]) -> Dict[str, TokenCounts]:
    """
    Count ``(token, category)`` pairs in one pass.

    Args:
        pairs: iterable of (token, category) with category in ``categories``
        categories: the two categories (A, B), in output order

    Returns:
        token -> TokenCounts, tokens in order of first appearance; a category
        never seen with a token counts zero
    """
    cat_a, cat_b = check_categories(categories)
    cnt: Counter = Counter()
    order: Dict[str, None] = {}
    for token, category in pairs:
        if category != cat_a and category != cat_b:
            raise ValueError(f"unexpected category {category!r}; expected one of {[cat_a, cat_b]}")
        cnt[(token, category)] += 1
        order.setdefault(token, None)
    return {tok: TokenCounts(cnt[(tok, cat_a)], cnt[(tok, cat_b)]) for tok in order}


def count_frame(
    tokens: pd.DataFrame,
    categories: Sequence[str],
    word_col: str = "word",
    category_col: str = "source",
) -> Dict[str, TokenCounts]:
    """``count_tokens`` over the tidy token table."""
    return count_tokens(zip(tokens[word_col], tokens[category_col]), categories)


def column_totals(counts: Dict[str, TokenCounts]) -> Tuple[int, int]:
    sum_a = sum(c.count_a for c in counts.values())
    sum_b = sum(c.count_b for c in counts.values())
    return sum_a, sum_b


def counts_frame(counts: Dict[str, TokenCounts], categories: Sequence[str], key_col: str = "word") -> pd.DataFrame:
    cat_a, cat_b = check_categories(categories)
    return pd.DataFrame(
        {
            key_col: list(counts.keys()),
            cat_a: [c.count_a for c in counts.values()],
            cat_b: [c.count_b for c in counts.values()],
        }
    )
