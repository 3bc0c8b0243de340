"""Tests for whitespace tokenization and offset lookup."""

from models import Token
from rsvp.tokenizer import token_index_at, tokenize


def test_double_space_yields_exact_offsets():
    assert tokenize("The quick  fox") == [
        Token("The", 0, 3),
        Token("quick", 4, 9),
        Token("fox", 11, 14),
    ]


def test_empty_and_blank_text():
    assert tokenize("") == []
    assert tokenize("  \n\t ") == []


def test_newlines_and_tabs_separate_tokens():
    tokens = tokenize("one\ntwo\t\tthree\r\n")
    assert [t.value for t in tokens] == ["one", "two", "three"]
    assert tokens[2].start == 9


def test_punctuation_stays_attached():
    assert [t.value for t in tokenize('"Hello," she said.')] == ['"Hello,"', "she", "said."]


def test_tokenize_is_idempotent():
    text = "  lead and trail  "
    assert tokenize(text) == tokenize(text)
    for tok in tokenize(text):
        assert tok.value and text[tok.start:tok.end] == tok.value


class TestTokenIndexAt:
    """Mapping an external cursor offset to a token index."""

    tokens = tokenize("The quick  fox")

    def test_inside_token(self):
        assert token_index_at(self.tokens, 0) == 0
        assert token_index_at(self.tokens, 6) == 1
        assert token_index_at(self.tokens, 13) == 2

    def test_gap_selects_next_token(self):
        assert token_index_at(self.tokens, 3) == 1
        assert token_index_at(self.tokens, 10) == 2

    def test_past_end_selects_last(self):
        assert token_index_at(self.tokens, 14) == 2
        assert token_index_at(self.tokens, 500) == 2

    def test_no_tokens(self):
        assert token_index_at([], 7) == 0
