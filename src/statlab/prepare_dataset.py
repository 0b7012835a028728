#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Load and filter the datasets used by the analyses.

- Tweets: read CSV/JSON, parse the Twitter timestamp layout, reduce the raw
  ``source`` field ("Twitter for Android") to the device name, then keep the
  campaign window and the two compared sources.
- Labeled tables: read a CSV into a feature matrix and a label vector.

A malformed timestamp is fatal to the load: ``ParseError`` propagates to the
caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import regex as re

from .config import (
    ANALYSIS_TIMEZONE,
    CAMPAIGN_END,
    CAMPAIGN_START,
    SOURCE_PATTERN,
    SOURCES,
    TWITTER_TIME_FORMAT,
)
from .exceptions import ParseError

logger = logging.getLogger(__name__)

SOURCE_RE = re.compile(SOURCE_PATTERN)
TWEET_COLUMNS = ["id", "text", "source", "created_at", "is_retweet"]


@dataclass(frozen=True)
class Record:
    text: str
    source: Optional[str]
    created_at: pd.Timestamp
    is_retweet: bool = False
    id: Optional[str] = None


def parse_timestamp(value, fmt: Optional[str] = TWITTER_TIME_FORMAT, tz: str = ANALYSIS_TIMEZONE) -> pd.Timestamp:
    """Parse one timestamp into a tz-aware ``pandas.Timestamp`` in ``tz``."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        raise ParseError("missing timestamp")
    if isinstance(value, pd.Timestamp) or hasattr(value, "tzinfo"):
        ts = pd.Timestamp(value)
    else:
        try:
            ts = pd.to_datetime(value, format=fmt, utc=True)
        except (ValueError, TypeError) as exc:
            raise ParseError(f"malformed timestamp {value!r}") from exc
    if ts.tzinfo is None:
        ts = ts.tz_localize("UTC")
    return ts.tz_convert(tz)


def parse_timestamps(values: pd.Series, fmt: Optional[str] = TWITTER_TIME_FORMAT, tz: str = ANALYSIS_TIMEZONE) -> pd.Series:
    """Vectorised ``parse_timestamp``; the first bad value raises ``ParseError``."""
    if pd.api.types.is_datetime64_any_dtype(values):
        parsed = values
        if parsed.dt.tz is None:
            parsed = parsed.dt.tz_localize("UTC")
        bad = parsed.isna()
    else:
        parsed = pd.to_datetime(values, format=fmt, utc=True, errors="coerce")
        bad = parsed.isna()
    if bad.any():
        first = values[bad].iloc[0]
        raise ParseError(f"malformed timestamp {first!r} ({int(bad.sum())} bad rows)")
    return parsed.dt.tz_convert(tz)


def extract_source(raw) -> Optional[str]:
    """'<a ...>Twitter for Android</a>' -> 'Android'; anything else -> None."""
    if raw is None or (isinstance(raw, float) and np.isnan(raw)):
        return None
    m = SOURCE_RE.search(str(raw).strip())
    return m.group(1) if m else None


def _as_bool(value) -> bool:
    # R exports write TRUE/FALSE, JSON gives real booleans
    if isinstance(value, str):
        return value.strip().lower() in {"true", "t", "1", "yes"}
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return False
    return bool(value)


def _read_table(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix in {".json", ".jsonl"}:
        return pd.read_json(path, lines=suffix == ".jsonl", dtype=False, convert_dates=False)
    raise ValueError(f"Unsupported dataset format: {path.suffix}")


def load_tweets(path: str | Path, time_format: Optional[str] = TWITTER_TIME_FORMAT) -> pd.DataFrame:
    """
    Load a tweet table.

    Args:
        path: CSV, JSON or JSON-lines file with at least text, source, created_at
        time_format: strftime layout of ``created_at`` (None lets pandas infer)

    Returns:
        DataFrame with columns id, text, source, created_at, is_retweet
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")

    df = _read_table(path)
    if "id" not in df.columns and "id_str" in df.columns:
        df = df.rename(columns={"id_str": "id"})
    missing = {"text", "source", "created_at"} - set(df.columns)
    if missing:
        raise ParseError(f"{path} is missing columns: {sorted(missing)}")

    out = pd.DataFrame(
        {
            "id": (
                df["id"].astype(str)
                if "id" in df.columns
                else pd.Series(range(len(df)), index=df.index).astype(str)
            ),
            "text": df["text"].fillna("").astype(str),
            "source": df["source"].map(extract_source),
            "created_at": parse_timestamps(df["created_at"], fmt=time_format),
            "is_retweet": df["is_retweet"].map(_as_bool) if "is_retweet" in df.columns else False,
        }
    )
    logger.info("loaded %d tweets from %s", len(out), path)
    return out[TWEET_COLUMNS].reset_index(drop=True)


def filter_campaign_tweets(
    df: pd.DataFrame,
    start: str = CAMPAIGN_START,
    end: str = CAMPAIGN_END,
    sources: Sequence[str] = SOURCES,
    drop_retweets: bool = True,
) -> pd.DataFrame:
    """Keep tweets with ``start <= created_at < end`` posted from ``sources``."""
    tz = df["created_at"].dt.tz or ANALYSIS_TIMEZONE

    def _bound(value) -> pd.Timestamp:
        ts = pd.Timestamp(value)
        return ts.tz_localize(tz) if ts.tzinfo is None else ts

    lo, hi = _bound(start), _bound(end)
    mask = (df["created_at"] >= lo) & (df["created_at"] < hi) & df["source"].isin(list(sources))
    if drop_retweets:
        mask &= ~df["is_retweet"].astype(bool)
    out = df.loc[mask].reset_index(drop=True)
    logger.info(
        "kept %d of %d tweets (%s to %s, sources=%s, drop_retweets=%s)",
        len(out), len(df), start, end, list(sources), drop_retweets,
    )
    return out


def records_from_frame(df: pd.DataFrame) -> Iterator[Record]:
    for row in df.itertuples(index=False):
        yield Record(
            text=row.text,
            source=row.source,
            created_at=row.created_at,
            is_retweet=bool(getattr(row, "is_retweet", False)),
            id=getattr(row, "id", None),
        )


def load_labeled_csv(path: str | Path, label_col: str = "y") -> Tuple[np.ndarray, np.ndarray]:
    """Read a labeled table; every column except ``label_col`` is a feature."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")
    df = pd.read_csv(path)
    if label_col not in df.columns:
        raise ParseError(f"{path} has no label column {label_col!r}")
    df = df.dropna()
    X = df.drop(columns=[label_col]).to_numpy(dtype=float)
    y = df[label_col].to_numpy()
    logger.info("loaded %d rows x %d features from %s", X.shape[0], X.shape[1], path)
    return X, y
