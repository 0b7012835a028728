# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures: a tiny tweet table written to disk, the stop words used
# with it, and a small sentiment lexicon.
#
# After filtering the table keeps four tweets whose tokens are
#   Android: crooked x2, hillary x2, total, disaster, #maga, weak
#   iPhone:  ohio x2, join, tomorrow, #maga, thank, great, crowd
# ==============================================

import pandas as pd
import pytest

from statlab.core.sentiment import Lexicon

ANDROID = '<a href="http://twitter.com/download/android" rel="nofollow">Twitter for Android</a>'
IPHONE = '<a href="http://twitter.com/download/iphone" rel="nofollow">Twitter for iPhone</a>'


@pytest.fixture
def tweet_rows() -> list:
    return [
        {"id": "1", "source": ANDROID, "text": "Crooked Hillary is a total disaster! #MAGA",
         "created_at": "Wed Aug 10 20:33:32 +0000 2016", "is_retweet": False},
        {"id": "2", "source": IPHONE, "text": "Join me in Ohio tomorrow! https://t.co/abc123 #MAGA",
         "created_at": "Thu Aug 11 14:00:00 +0000 2016", "is_retweet": False},
        {"id": "3", "source": ANDROID, "text": "Hillary is weak and crooked",
         "created_at": "Fri Aug 12 10:00:00 +0000 2016", "is_retweet": False},
        {"id": "4", "source": IPHONE, "text": "Thank you Ohio! &amp; great crowd",
         "created_at": "Sat Aug 13 01:00:00 +0000 2016", "is_retweet": False},
        {"id": "5", "source": ANDROID, "text": "RT something someone said",
         "created_at": "Sun Aug 14 12:00:00 +0000 2016", "is_retweet": True},
        {"id": "6", "source": "Twitter Web Client", "text": "Posted from the web",
         "created_at": "Mon Aug 15 12:00:00 +0000 2016", "is_retweet": False},
        {"id": "7", "source": ANDROID, "text": "Happy new year",
         "created_at": "Mon Jan 04 12:00:00 +0000 2016", "is_retweet": False},
    ]


@pytest.fixture
def tweets_csv(tmp_path, tweet_rows):
    path = tmp_path / "tweets.csv"
    pd.DataFrame(tweet_rows).to_csv(path, index=False)
    return path


@pytest.fixture
def stop_words() -> frozenset:
    return frozenset({"is", "a", "and", "me", "in", "you", "the"})


@pytest.fixture
def lexicon_frame() -> pd.DataFrame:
    return pd.DataFrame(
        [
            ("crooked", "negative"),
            ("disaster", "negative"),
            ("disaster", "fear"),
            ("weak", "negative"),
            ("great", "positive"),
            ("thank", "positive"),
            ("join", "positive"),
            ("unused", "anger"),
        ],
        columns=["word", "sentiment"],
    )


@pytest.fixture
def lexicon(lexicon_frame) -> Lexicon:
    return Lexicon.from_frame(lexicon_frame)


@pytest.fixture
def lexicon_csv(tmp_path, lexicon_frame):
    path = tmp_path / "lexicon.csv"
    lexicon_frame.to_csv(path, index=False)
    return path
