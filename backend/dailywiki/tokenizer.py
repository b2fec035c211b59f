"""Split article text into maskable word tokens and always-visible separators."""

import re
import unicodedata
from dataclasses import dataclass, field
from typing import Literal, NamedTuple


@dataclass(frozen=True)
class WordToken:
    id: str
    index: int  # position among word tokens of the same field
    length: int
    type: Literal["word"] = field(default="word", init=False)


@dataclass(frozen=True)
class PunctuationToken:
    id: str
    text: str
    type: Literal["punct"] = field(default="punct", init=False)


Token = WordToken | PunctuationToken


@dataclass(frozen=True)
class InternalWord:
    """Server-side view of a word token. Never sent to the client."""

    normalized: str
    display: str
    index: int


class TokenizeResult(NamedTuple):
    tokens: list[Token]
    words: list[InternalWord]


# Letters/digits (combining marks may follow), a lone newline, other whitespace,
# everything else. Apostrophes, hyphens and underscores end a word.
_TOKEN_RE = re.compile(
    r"([^\W_](?:[^\W_]|[\u0300-\u036f])*)|(\n)|([^\S\n]+)|((?:[^\w\s]|_)+)",
    re.UNICODE,
)


def normalize(word: str) -> str:
    """Lowercase and strip accents for matching."""
    nfd = unicodedata.normalize("NFD", word.lower())
    return "".join(c for c in nfd if not unicodedata.combining(c))


def tokenize(text: str, prefix: str = "") -> TokenizeResult:
    """Tokenize *text* into word and punctuation tokens.

    Token ids are ``prefix`` + ``w``/``p`` + a counter shared by both kinds, so
    callers must pick a distinct prefix per field of the same document.
    """
    tokens: list[Token] = []
    words: list[InternalWord] = []
    word_index = 0
    for counter, m in enumerate(_TOKEN_RE.finditer(text)):
        word = m.group(1)
        if word:
            tokens.append(WordToken(id=f"{prefix}w{counter}", index=word_index, length=len(word)))
            words.append(InternalWord(normalized=normalize(word), display=word, index=word_index))
            word_index += 1
        else:
            tokens.append(PunctuationToken(id=f"{prefix}p{counter}", text=m.group()))
    return TokenizeResult(tokens, words)
