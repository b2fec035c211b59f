"""Tests for tokenization and normalization."""

import pytest
from dailywiki.tokenizer import (
    PunctuationToken,
    WordToken,
    normalize,
    tokenize,
)


def _reconstruct(text: str, prefix: str = "") -> str:
    tokens, words = tokenize(text, prefix)
    parts = []
    for tok in tokens:
        if isinstance(tok, WordToken):
            parts.append(words[tok.index].display)
        else:
            parts.append(tok.text)
    return "".join(parts)


# ── normalize ─────────────────────────────────────────────────────────────

class TestNormalize:
    def test_lowercases(self):
        assert normalize("Paris") == "paris"
        assert normalize("LIBERTÉ") == "liberte"

    def test_strips_accents(self):
        assert normalize("été") == "ete"
        assert normalize("français") == "francais"
        assert normalize("naïve") == "naive"
        assert normalize("à") == "a"

    def test_case_and_accent_equivalence(self):
        assert normalize("Café") == normalize("cafe")
        assert normalize("Étoile") == normalize("etoile")

    def test_decomposed_input(self):
        assert normalize("cafe\u0301") == "cafe"

    def test_idempotent(self):
        assert normalize(normalize("Château")) == normalize("Château")


# ── tokenize ──────────────────────────────────────────────────────────────

class TestTokenize:
    def test_basic_sentence(self):
        _, words = tokenize("Paris est grand.")
        assert [w.display for w in words] == ["Paris", "est", "grand"]

    def test_hyphen_splits_words(self):
        tokens, words = tokenize("grand-mère")
        assert [w.display for w in words] == ["grand", "mère"]
        assert tokens[1] == PunctuationToken(id="p1", text="-")

    def test_apostrophe_splits_words(self):
        _, words = tokenize("l'eau")
        assert [w.display for w in words] == ["l", "eau"]

    def test_underscore_is_punctuation(self):
        tokens, words = tokenize("foo_bar")
        assert [w.display for w in words] == ["foo", "bar"]
        assert tokens[1].text == "_"

    def test_digits_are_words(self):
        _, words = tokenize("en 1804,")
        assert [w.display for w in words] == ["en", "1804"]

    def test_each_newline_is_own_token(self):
        tokens, _ = tokenize("a\n\nb")
        assert [t.text for t in tokens if isinstance(t, PunctuationToken)] == ["\n", "\n"]

    def test_newline_splits_whitespace_run(self):
        tokens, _ = tokenize("a \n b")
        assert [t.text for t in tokens if isinstance(t, PunctuationToken)] == [" ", "\n", " "]

    def test_punctuation_run_is_one_token(self):
        tokens, _ = tokenize("Quoi ?!...")
        assert tokens[-1].text == "?!..."

    def test_word_tokens_only_carry_length(self):
        tokens, _ = tokenize("Château")
        assert tokens == [WordToken(id="w0", index=0, length=7)]
        assert not hasattr(tokens[0], "text")

    def test_decomposed_accent_stays_in_word(self):
        tokens, words = tokenize("cafe\u0301 noir")
        assert tokens[0].length == 5
        assert words[0].normalized == "cafe"

    def test_word_index_skips_punctuation(self):
        tokens, words = tokenize("Un, deux ; trois.")
        assert [t.index for t in tokens if isinstance(t, WordToken)] == [0, 1, 2]
        assert [w.index for w in words] == [0, 1, 2]

    def test_ids_use_prefix_and_shared_counter(self):
        tokens, _ = tokenize("Le chat.", "s0c-")
        assert [t.id for t in tokens] == ["s0c-w0", "s0c-p1", "s0c-w2", "s0c-p3"]

    def test_ids_stable_across_calls(self):
        assert tokenize("Le chat noir", "at-") == tokenize("Le chat noir", "at-")

    def test_internal_word_keeps_display(self):
        _, words = tokenize("Étoile")
        assert words[0].display == "Étoile"
        assert words[0].normalized == "etoile"

    def test_empty_string(self):
        tokens, words = tokenize("")
        assert tokens == []
        assert words == []

    def test_only_separators(self):
        tokens, words = tokenize("... !!!")
        assert words == []
        assert all(isinstance(t, PunctuationToken) for t in tokens)


# ── reconstruction ────────────────────────────────────────────────────────

class TestReconstruction:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "   ",
            "...!?",
            "\n\n\n",
            "La locomotive à vapeur, dite « machine », date de 1804.\n\nElle fume.",
            "grand-mère l'a dit : c'est_ça\r\n\tfin",
            "cafe\u0301 \u0301seul",
        ],
    )
    def test_lossless(self, text):
        assert _reconstruct(text, "x-") == text
