#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Configuration for statlab analyses.

Module level constants describe the tweet corpus (timestamp layout, campaign
window, posting sources) and the tokenizer patterns. ``AnalysisConfig`` bundles
the tunables of one tweet-source run so the CLI and the pipeline share them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

# ---------------- Tweet corpus ----------------
TWITTER_TIME_FORMAT = "%a %b %d %H:%M:%S %z %Y"
ANALYSIS_TIMEZONE = "US/Eastern"

CAMPAIGN_START = "2016-06-17"
CAMPAIGN_END = "2016-11-08"
SOURCES: Tuple[str, str] = ("Android", "iPhone")
SOURCE_PATTERN = r"Twitter for (.*?)(?:</a>)?$"

# ---------------- Tokenizer ----------------
# Split on anything that is not a letter, digit, '#', '@' or apostrophe, and on
# an apostrophe that does not lead into one of those.
TWEET_TOKEN_PATTERN = r"([^A-Za-z\d#@']|'(?![A-Za-z\d#@]))"
LINK_PATTERN = r"[A-Za-z][A-Za-z\d+.\-]*://[^\s/]+(?:/\S*)?|&amp;"
NUMERIC_TOKEN_PATTERN = r"^\d+$"

# ---------------- Association ----------------
CONFIDENCE_LEVEL = 0.95
HALDANE_CORRECTION = 0.5
MIN_TOTAL_COUNT = 10
NONE_LABEL = "none"

# ---------------- Classifiers ----------------
RANDOM_STATE = 42
KNN_K_GRID = [3, 5, 9, 15, 25, 51, 101]
KNN_K_GRID_FAST = [5, 15, 51]

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class AnalysisConfig:
    """Tunables of a tweet-source analysis run."""

    start: str = CAMPAIGN_START
    end: str = CAMPAIGN_END
    sources: Tuple[str, str] = SOURCES
    drop_retweets: bool = True
    min_total: int = MIN_TOTAL_COUNT
    confidence_level: float = CONFIDENCE_LEVEL
    lexicon_path: Optional[Path] = None
    stop_words_path: Optional[Path] = None
    lexicon_labels: Optional[Tuple[str, ...]] = None
    results_dir: Path = field(default_factory=lambda: Path("results"))

    def __post_init__(self):
        if len(self.sources) != 2:
            raise ValueError(f"exactly two sources are compared, got {self.sources!r}")
        if not 0.0 < self.confidence_level < 1.0:
            raise ValueError("confidence_level must lie in (0, 1)")
        if self.min_total < 0:
            raise ValueError("min_total must be non-negative")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)
