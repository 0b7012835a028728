#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Tweet-source text mining pipeline

Compares two posting sources (Android vs iPhone) of one account:
1. Load the tweet table and keep the campaign window, both sources, no retweets
2. Share of each source's tweets by hour of day
3. Tokenize (tweet-aware pattern, links/stop words/numbers removed)
4. Count tokens per source and score them with the corrected odds ratio
5. Join a sentiment lexicon and score each label with a log-odds interval
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..config import AnalysisConfig
from ..core.aggregation import TokenCounts, count_frame
from ..core.association import association_frame, score_counts
from ..core.sentiment import Lexicon, label_words, load_lexicon, score_labels
from ..core.tokenizer import Tokenizer, load_stop_words
from ..prepare_dataset import filter_campaign_tweets, load_tweets

logger = logging.getLogger(__name__)


class TweetSourcePipeline:
    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        stop_words=None,
        lexicon: Optional[Lexicon] = None,
        tokenizer: Optional[Tokenizer] = None,
    ):
        self.config = config or AnalysisConfig()
        if stop_words is None and self.config.stop_words_path is not None:
            stop_words = load_stop_words(self.config.stop_words_path)
        if lexicon is None and self.config.lexicon_path is not None:
            lexicon = load_lexicon(self.config.lexicon_path, labels=self.config.lexicon_labels)
        self.tokenizer = tokenizer or Tokenizer(stop_words=stop_words)
        self.lexicon = lexicon

        self.tweets: Optional[pd.DataFrame] = None
        self.campaign: Optional[pd.DataFrame] = None
        self.tokens: Optional[pd.DataFrame] = None
        self._word_counts: Optional[Dict[str, TokenCounts]] = None

    @property
    def sources(self):
        return self.config.sources

    def load(self, path) -> pd.DataFrame:
        self.tweets = load_tweets(path)
        return self.tweets

    def filter(self, tweets: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        tweets = self.tweets if tweets is None else tweets
        if tweets is None:
            raise ValueError("Must call load() first")
        self.campaign = filter_campaign_tweets(
            tweets,
            start=self.config.start,
            end=self.config.end,
            sources=self.sources,
            drop_retweets=self.config.drop_retweets,
        )
        self.tokens = None
        self._word_counts = None
        return self.campaign

    def _require_campaign(self) -> pd.DataFrame:
        if self.campaign is None:
            raise ValueError("Must call filter() first")
        return self.campaign

    def hour_proportions(self) -> pd.DataFrame:
        """Percent of each source's tweets posted in each hour of the day."""
        df = self._require_campaign()
        counts = (
            df.assign(hour=df["created_at"].dt.hour)
            .groupby(["source", "hour"])
            .size()
            .rename("n")
            .reset_index()
        )
        counts["percent"] = counts["n"] / counts.groupby("source")["n"].transform("sum")
        return counts

    def tokenize(self) -> pd.DataFrame:
        if self.tokens is None:
            self.tokens = self.tokenizer.tokenize_frame(self._require_campaign())
            logger.info("%d tokens from %d tweets", len(self.tokens), len(self.campaign))
        return self.tokens

    def word_counts(self) -> Dict[str, TokenCounts]:
        if self._word_counts is None:
            self._word_counts = count_frame(self.tokenize(), self.sources)
        return self._word_counts

    def _named(self, frame: pd.DataFrame) -> pd.DataFrame:
        a, b = self.sources
        return frame.rename(columns={"count_a": a, "count_b": b})

    def word_odds(self, min_total: Optional[int] = None, with_interval: bool = False) -> pd.DataFrame:
        """Tokens by descending odds ratio (over-represented in the first source first)."""
        min_total = self.config.min_total if min_total is None else min_total
        records = score_counts(
            self.word_counts(), min_total=min_total,
            with_interval=with_interval, level=self.config.confidence_level,
        )
        return self._named(association_frame(records).rename(columns={"entity": "word"}))

    def sentiment_odds(self, include_unmatched: bool = True) -> pd.DataFrame:
        if self.lexicon is None:
            raise ValueError("a sentiment lexicon is required for sentiment_odds()")
        tokens = self.tokenize()
        records = score_labels(
            zip(tokens["word"], tokens["source"]), self.lexicon, self.sources,
            include_unmatched=include_unmatched, level=self.config.confidence_level,
        )
        return self._named(association_frame(records).rename(columns={"entity": "sentiment"}))

    def sentiment_words(self, labels: Optional[List[str]] = None) -> pd.DataFrame:
        if self.lexicon is None:
            raise ValueError("a sentiment lexicon is required for sentiment_words()")
        frame = label_words(self.word_counts(), self.lexicon, labels=labels, min_total=self.config.min_total)
        return self._named(frame)

    def run(self, path) -> Dict[str, pd.DataFrame]:
        self.load(path)
        self.filter()
        results = {
            "hour_proportions": self.hour_proportions(),
            "word_odds": self.word_odds(),
        }
        if self.lexicon is not None:
            results["sentiment_odds"] = self.sentiment_odds()
            results["sentiment_words"] = self.sentiment_words()
        return results

    @staticmethod
    def save(results: Dict[str, pd.DataFrame], results_dir: Path) -> List[Path]:
        results_dir = Path(results_dir)
        results_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for name, frame in results.items():
            path = results_dir / f"{name}.csv"
            frame.to_csv(path, index=False)
            written.append(path)
        if "sentiment_odds" in results:
            md = results_dir / "sentiment_odds.md"
            md.write_text(results["sentiment_odds"].to_markdown(index=False, floatfmt=".3f"), encoding="utf-8")
            written.append(md)
        logger.info("saved %d tables to %s", len(written), results_dir)
        return written
