# ==============================================
# Tests for loading and filtering tweets
# ==============================================

import pandas as pd
import pytest

from statlab.exceptions import ParseError
from statlab.prepare_dataset import (
    Record,
    extract_source,
    filter_campaign_tweets,
    load_labeled_csv,
    load_tweets,
    parse_timestamp,
    records_from_frame,
)


class TestParsing:
    def test_twitter_timestamp(self):
        ts = parse_timestamp("Wed Aug 10 20:33:32 +0000 2016")
        assert ts == pd.Timestamp("2016-08-10 20:33:32", tz="UTC")
        assert str(ts.tz) == "US/Eastern"
        assert ts.hour == 16

    def test_malformed_timestamp(self):
        with pytest.raises(ParseError):
            parse_timestamp("yesterday at noon")
        with pytest.raises(ValueError):
            parse_timestamp(None)

    @pytest.mark.parametrize("value", [pd.NaT, float("nan"), None])
    def test_missing_timestamp(self, value):
        with pytest.raises(ParseError, match="missing"):
            parse_timestamp(value)

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('<a href="http://twitter.com/download/android" rel="nofollow">Twitter for Android</a>', "Android"),
            ("Twitter for iPhone", "iPhone"),
            ("Twitter Web Client", None),
            (None, None),
        ],
    )
    def test_extract_source(self, raw, expected):
        assert extract_source(raw) == expected


class TestLoadTweets:
    def test_load(self, tweets_csv):
        df = load_tweets(tweets_csv)
        assert list(df.columns) == ["id", "text", "source", "created_at", "is_retweet"]
        assert len(df) == 7
        assert df["source"].tolist()[:2] == ["Android", "iPhone"]
        assert df["is_retweet"].tolist().count(True) == 1

    def test_bad_timestamp_is_fatal(self, tmp_path, tweet_rows):
        tweet_rows[2]["created_at"] = "not a date"
        path = tmp_path / "bad.csv"
        pd.DataFrame(tweet_rows).to_csv(path, index=False)
        with pytest.raises(ParseError, match="not a date"):
            load_tweets(path)

    def test_missing_columns(self, tmp_path):
        path = tmp_path / "cols.csv"
        pd.DataFrame({"text": ["hi"]}).to_csv(path, index=False)
        with pytest.raises(ParseError):
            load_tweets(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tweets(tmp_path / "missing.csv")

    def test_json_and_string_flags(self, tmp_path, tweet_rows):
        for row in tweet_rows:
            row["is_retweet"] = "TRUE" if row["is_retweet"] else "FALSE"
        path = tmp_path / "tweets.json"
        pd.DataFrame(tweet_rows).to_json(path, orient="records")
        df = load_tweets(path)
        assert df["is_retweet"].tolist().count(True) == 1


class TestFilter:
    def test_campaign_filter(self, tweets_csv):
        df = filter_campaign_tweets(load_tweets(tweets_csv))
        assert df["id"].tolist() == ["1", "2", "3", "4"]

    def test_keep_retweets(self, tweets_csv):
        df = filter_campaign_tweets(load_tweets(tweets_csv), drop_retweets=False)
        assert "5" in df["id"].tolist()

    def test_window_end_exclusive(self, tweets_csv):
        df = filter_campaign_tweets(load_tweets(tweets_csv), start="2016-08-11", end="2016-08-12")
        assert df["id"].tolist() == ["2"]

    def test_records(self, tweets_csv):
        records = list(records_from_frame(load_tweets(tweets_csv)))
        assert isinstance(records[0], Record)
        assert records[0].source == "Android"
        with pytest.raises(Exception):
            records[0].text = "changed"


def test_load_labeled_csv(tmp_path):
    path = tmp_path / "mnist.csv"
    pd.DataFrame({"y": [2, 7, 7], "x_1": [0.1, 0.2, 0.3], "x_2": [0.3, 0.2, 0.1]}).to_csv(path, index=False)
    X, y = load_labeled_csv(path)
    assert X.shape == (3, 2)
    assert y.tolist() == [2, 7, 7]
    with pytest.raises(ParseError):
        load_labeled_csv(path, label_col="label")
