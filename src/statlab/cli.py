#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Command line runner for statlab analyses.

    statlab tweets --data trump_tweets.csv --lexicon nrc.csv
    statlab classifiers --dataset mnist27 --models nb qda lda knn
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from .config import (
    CAMPAIGN_END,
    CAMPAIGN_START,
    MIN_TOTAL_COUNT,
    RANDOM_STATE,
    AnalysisConfig,
    configure_logging,
)
from .experiments.classifier_comparison import ClassifierComparison
from .experiments.datasets import heights_xy, simulate_heights, simulate_mnist_27, simulate_tissue_expression
from .experiments.tweet_sources import TweetSourcePipeline
from .models.models_registry import MODEL_NAMES
from .prepare_dataset import load_labeled_csv

logger = logging.getLogger(__name__)

DATASETS = {
    "heights": ("Female", lambda seed: heights_xy(simulate_heights(random_state=seed))),
    "mnist27": (7, lambda seed: simulate_mnist_27(random_state=seed)),
    "tissue": (None, lambda seed: simulate_tissue_expression(random_state=seed)),
}


def _banner(title: str) -> None:
    print("=" * 60)
    print(title)
    print("=" * 60)


def run_tweets(args: argparse.Namespace) -> None:
    config = AnalysisConfig(
        start=args.start,
        end=args.end,
        drop_retweets=not args.keep_retweets,
        min_total=args.min_total,
        lexicon_path=args.lexicon,
        stop_words_path=args.stop_words,
        lexicon_labels=tuple(args.labels) if args.labels else None,
        results_dir=args.results_dir,
    )
    pipeline = TweetSourcePipeline(config)

    _banner("STEP 1: Loading and Filtering Tweets")
    pipeline.load(args.data)
    campaign = pipeline.filter()
    print(f"[data] rows={len(pipeline.tweets)}, campaign rows={len(campaign)}")
    print(f"[data] by source: {campaign['source'].value_counts().to_dict()}")

    _banner("STEP 2: Word Odds Ratios")
    results = {"hour_proportions": pipeline.hour_proportions(), "word_odds": pipeline.word_odds()}
    a, b = config.sources
    print(f"Most {a}-leaning words:")
    print(results["word_odds"].head(args.top).to_string(index=False))
    print(f"\nMost {b}-leaning words:")
    print(results["word_odds"].tail(args.top).iloc[::-1].to_string(index=False))

    if pipeline.lexicon is not None:
        _banner("STEP 3: Sentiment Log-Odds Ratios")
        results["sentiment_odds"] = pipeline.sentiment_odds()
        results["sentiment_words"] = pipeline.sentiment_words()
        print(results["sentiment_odds"].to_string(index=False))

    written = pipeline.save(results, config.results_dir)
    print(f"Saved {len(written)} tables to {config.results_dir}")


def run_classifiers(args: argparse.Namespace) -> None:
    if args.csv is not None:
        X, y = load_labeled_csv(args.csv, label_col=args.label_col)
        pos_label = args.pos_label
        if pos_label is not None and y.dtype.kind in "iuf":
            pos_label = y.dtype.type(pos_label)
        name = args.csv.stem
    else:
        pos_label, make = DATASETS[args.dataset]
        X, y = make(args.seed)
        name = args.dataset

    _banner(f"Generative models vs kNN: {name}")
    print(f"[data] rows={len(y)}, balance={pd.Series(y).value_counts().to_dict()}")

    comparison = ClassifierComparison(
        test_size=args.test_size, random_state=args.seed, pos_label=pos_label,
        fast=args.fast, cv_folds=args.folds,
    )
    results = comparison.run(X, y, models=args.models)
    print(comparison.summary_table(results).to_string(index=False))

    if args.prior is not None and pos_label is not None:
        others = [c for c in comparison.y_train.tolist() if c != pos_label]
        negative = others[0] if others else None
        if negative is not None:
            priors = [{pos_label: p, negative: 1 - p} for p in args.prior]
            for m in args.models:
                if m == "knn":
                    continue
                print(f"\nPrior sweep for {m}:")
                print(comparison.prior_sweep(m, priors).to_string(index=False))

    written = comparison.save(results, args.results_dir, name=name)
    print(f"Saved summary: {written[0]}")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="statlab", description="Text-mining and generative classifier analyses")
    ap.add_argument("--log-level", default="INFO")
    sub = ap.add_subparsers(dest="command", required=True)

    tw = sub.add_parser("tweets", help="Compare two tweet sources by word and sentiment odds ratios")
    tw.add_argument("--data", type=Path, required=True, help="Tweet table (CSV/JSON)")
    tw.add_argument("--lexicon", type=Path, default=None, help="CSV with word,sentiment columns")
    tw.add_argument("--labels", nargs="*", default=None, help="Lexicon labels to keep")
    tw.add_argument("--stop-words", type=Path, default=None, help="Stop-word list (txt or CSV with word column)")
    tw.add_argument("--start", default=CAMPAIGN_START)
    tw.add_argument("--end", default=CAMPAIGN_END)
    tw.add_argument("--min-total", type=int, default=MIN_TOTAL_COUNT)
    tw.add_argument("--keep-retweets", action="store_true")
    tw.add_argument("--top", type=int, default=10)
    tw.add_argument("--results-dir", type=Path, default=Path("results"))
    tw.set_defaults(func=run_tweets)

    cl = sub.add_parser("classifiers", help="Compare Naive Bayes, QDA, LDA and kNN")
    cl.add_argument("--dataset", choices=sorted(DATASETS), default="mnist27")
    cl.add_argument("--csv", type=Path, default=None, help="Labeled CSV instead of a simulated dataset")
    cl.add_argument("--label-col", default="y")
    cl.add_argument("--pos-label", default=None)
    cl.add_argument("--models", nargs="+", choices=list(MODEL_NAMES), default=list(MODEL_NAMES))
    cl.add_argument("--test-size", type=float, default=0.5)
    cl.add_argument("--folds", type=int, default=5)
    cl.add_argument("--prior", type=float, nargs="*", default=None, help="Positive-class priors to sweep")
    cl.add_argument("--seed", type=int, default=RANDOM_STATE)
    cl.add_argument("--fast", action="store_true")
    cl.add_argument("--results-dir", type=Path, default=Path("results"))
    cl.set_defaults(func=run_classifiers)
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
