#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tweet-aware tokenizer.

The text is cleaned (links and ``&amp;`` removed), lowercased and split on a
boundary pattern that keeps hashtags, mentions and contractions whole. Stop
words and pure-digit tokens are dropped, then a single leading apostrophe left
over from quoted text is stripped.

>>> tok = Tokenizer(stop_words=set())
>>> list(tok.tokenize("#MAGA @realDonaldTrump don't stop!"))
['#maga', '@realdonaldtrump', "don't", 'stop']
"""
from __future__ import annotations

from typing import AbstractSet, Iterable, Iterator, Optional, Sequence

import pandas as pd
import regex as re
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from ..config import LINK_PATTERN, NUMERIC_TOKEN_PATTERN, TWEET_TOKEN_PATTERN


def load_stop_words(path) -> frozenset:
    """One word per line, or a CSV with a ``word`` column (tidytext's layout)."""
    path = str(path)
    if path.endswith(".csv"):
        return frozenset(pd.read_csv(path)["word"].dropna().astype(str))
    with open(path, "r", encoding="utf-8") as f:
        return frozenset(line.strip() for line in f if line.strip())


class TokenSequence:
    """Lazy, restartable view over the tokens of one text."""

    def __init__(self, tokenizer: "Tokenizer", text: Optional[str]):
        self._tokenizer = tokenizer
        self._text = text

    def __iter__(self) -> Iterator[str]:
        return self._tokenizer._iter_tokens(self._text)

    def __repr__(self):
        return f"TokenSequence({list(self)!r})"


class Tokenizer:
    """
    Split free text into normalized word tokens.

    Args:
        stop_words: words to drop (matched against the lowercased token);
            defaults to scikit-learn's English list
        pattern: regex matching one token boundary
        strip_pattern: regex for substrings removed before splitting
    """

    def __init__(
        self,
        stop_words: Optional[AbstractSet[str]] = None,
        pattern: str = TWEET_TOKEN_PATTERN,
        strip_pattern: str = LINK_PATTERN,
    ):
        self.stop_words = frozenset(ENGLISH_STOP_WORDS if stop_words is None else stop_words)
        self.boundary_re = re.compile(pattern)
        self.strip_re = re.compile(strip_pattern) if strip_pattern else None
        self.numeric_re = re.compile(NUMERIC_TOKEN_PATTERN)

    def clean(self, text: Optional[str]) -> str:
        # missing values in a frame arrive as None or NaN
        if text is None or (not isinstance(text, str) and pd.isna(text)):
            return ""
        s = str(text)
        if self.strip_re is not None:
            s = self.strip_re.sub("", s)
        return s.lower()

    def split(self, text: str) -> Iterator[str]:
        """Pieces between boundary matches, empty pieces skipped."""
        pos = 0
        for m in self.boundary_re.finditer(text):
            if m.start() > pos:
                yield text[pos:m.start()]
            pos = max(pos, m.end())
        if pos < len(text):
            yield text[pos:]

    def _iter_tokens(self, text: Optional[str]) -> Iterator[str]:
        for tok in self.split(self.clean(text)):
            if tok in self.stop_words or self.numeric_re.match(tok):
                continue
            if tok.startswith("'"):
                tok = tok[1:]
            if tok:
                yield tok

    def tokenize(self, text: Optional[str]) -> TokenSequence:
        return TokenSequence(self, text)

    def __call__(self, text: Optional[str]) -> list:
        return list(self._iter_tokens(text))

    def tokenize_frame(
        self,
        df: pd.DataFrame,
        text_col: str = "text",
        keep: Sequence[str] = ("id", "source"),
        word_col: str = "word",
    ) -> pd.DataFrame:
        """One row per token, keeping ``keep`` columns of the owning row."""
        keep = [c for c in keep if c in df.columns]
        out = df[keep].copy()
        out[word_col] = df[text_col].map(self)
        out = out.explode(word_col)
        out = out.dropna(subset=[word_col]).reset_index(drop=True)
        out[word_col] = out[word_col].astype(str)
        return out


def tag_tokens(tokenizer: Tokenizer, texts: Iterable[str], categories: Iterable[str]) -> Iterator[tuple]:
    """Yield ``(token, category)`` for every token of every text."""
    for text, category in zip(texts, categories):
        for tok in tokenizer.tokenize(text):
            yield tok, category
