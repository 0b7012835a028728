# ==============================================
# Tests for the tweet tokenizer
# ==============================================

import pandas as pd

from statlab.core.tokenizer import Tokenizer, load_stop_words, tag_tokens


class TestTokenizer:
    def test_hashtags_mentions_contractions(self):
        tok = Tokenizer(stop_words=set())
        assert tok("#MAGA @realDonaldTrump don't stop!") == ["#maga", "@realdonaldtrump", "don't", "stop"]

    def test_links_and_entities_removed(self):
        tok = Tokenizer(stop_words={"the"})
        assert tok("https://t.co/abc123 great &amp; big") == ["great", "big"]

    def test_stop_words_dropped(self):
        tok = Tokenizer(stop_words={"the"})
        assert tok("The wall is big") == ["wall", "is", "big"]

    def test_default_stop_words(self):
        assert Tokenizer()("the wall") == ["wall"]

    def test_numeric_tokens_dropped(self):
        tok = Tokenizer(stop_words=set())
        assert tok("in 2016 we") == ["in", "we"]

    def test_mixed_alnum_kept(self):
        tok = Tokenizer(stop_words=set())
        assert tok("vote 2016ers") == ["vote", "2016ers"]

    def test_empty_text(self):
        tok = Tokenizer(stop_words=set())
        assert tok("") == []
        assert tok(None) == []
        assert list(tok.tokenize("")) == []

    def test_missing_text_in_frame(self):
        tok = Tokenizer(stop_words=set())
        assert tok(float("nan")) == []
        df = pd.DataFrame({"id": ["1", "2"], "source": ["Android", "iPhone"], "text": [None, "Ohio rally"]})
        out = tok.tokenize_frame(df)
        assert out["word"].tolist() == ["ohio", "rally"]
        assert "nan" not in out["word"].tolist()

    def test_leading_apostrophe_stripped(self):
        tok = Tokenizer(stop_words=set())
        assert tok("he said 'sad' today") == ["he", "said", "sad", "today"]

    def test_trailing_quote_is_boundary(self):
        tok = Tokenizer(stop_words=set())
        assert tok("the voters' choice") == ["the", "voters", "choice"]

    def test_lone_hash_is_token(self):
        tok = Tokenizer(stop_words=set())
        assert tok("# @ win") == ["#", "@", "win"]

    def test_sequence_is_restartable(self):
        tok = Tokenizer(stop_words=set())
        seq = tok.tokenize("make america great again")
        assert list(seq) == list(seq) == ["make", "america", "great", "again"]

    def test_tokenize_frame_keeps_owner_columns(self, stop_words):
        tok = Tokenizer(stop_words=stop_words)
        df = pd.DataFrame({"id": ["1", "2", "3"], "source": ["Android", "iPhone", "Android"],
                           "text": ["Crooked Hillary", "", "Ohio is great"]})
        out = tok.tokenize_frame(df)
        assert list(out.columns) == ["id", "source", "word"]
        assert out["word"].tolist() == ["crooked", "hillary", "ohio", "great"]
        assert out["source"].tolist() == ["Android", "Android", "Android", "Android"]
        assert out["id"].tolist() == ["1", "1", "3", "3"]

    def test_tag_tokens(self):
        tok = Tokenizer(stop_words=set())
        pairs = list(tag_tokens(tok, ["a b", "c"], ["A", "B"]))
        assert pairs == [("a", "A"), ("b", "A"), ("c", "B")]


def test_load_stop_words_txt_and_csv(tmp_path):
    txt = tmp_path / "stop.txt"
    txt.write_text("the\nand\n\n", encoding="utf-8")
    assert load_stop_words(txt) == frozenset({"the", "and"})

    csv = tmp_path / "stop.csv"
    pd.DataFrame({"word": ["a", "an"], "lexicon": ["SMART", "SMART"]}).to_csv(csv, index=False)
    assert load_stop_words(csv) == frozenset({"a", "an"})
