from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from .tokenizer import InternalWord, Token, normalize, tokenize

TITLE_SECTION = -1  # WordPosition.section for the article title


@dataclass(frozen=True)
class Section:
    title: str
    content: str


@dataclass(frozen=True)
class Document:
    title: str
    sections: list[Section]
    date: date


@dataclass(frozen=True)
class MaskedSection:
    title_tokens: list[Token]
    content_tokens: list[Token]


@dataclass(frozen=True)
class MaskedArticle:
    article_title_tokens: list[Token]
    sections: list[MaskedSection]
    total_words: int
    date: str  # YYYY-MM-DD, used by clients as a cache key


@dataclass(frozen=True)
class WordPosition:
    section: int
    part: Literal["title", "content"]
    word_index: int
    display: str  # original word, case and accents preserved


@dataclass(frozen=True)
class GuessResult:
    found: bool
    word: str
    positions: list[WordPosition] = field(default_factory=list)
    occurrences: int = 0


def document_from_dict(data: dict) -> Document:
    """Build a Document from its JSON form ``{title, sections, date}``.

    ``date`` may be an ISO string, a ``date`` or a ``datetime``.
    Raises KeyError / ValueError on malformed data.
    """
    raw_date = data["date"]
    if isinstance(raw_date, datetime):
        day = raw_date.date()
    elif isinstance(raw_date, date):
        day = raw_date
    else:
        day = date.fromisoformat(str(raw_date)[:10])
    sections = [
        Section(title=s.get("title") or "", content=s.get("content") or "")
        for s in data.get("sections") or []
    ]
    return Document(title=data["title"], sections=sections, date=day)


def build_masked_article(document: Document) -> MaskedArticle:
    """Return the letter-free skeleton of *document*.

    Word tokens only expose their length; separators pass through verbatim.
    """
    article_title_tokens, title_words = tokenize(document.title, "at-")
    total_words = len(title_words)

    masked_sections: list[MaskedSection] = []
    for i, section in enumerate(document.sections):
        title_tokens, title_words = tokenize(section.title, f"s{i}t-")
        content_tokens, content_words = tokenize(section.content, f"s{i}c-")
        total_words += len(title_words) + len(content_words)
        masked_sections.append(MaskedSection(title_tokens, content_tokens))

    return MaskedArticle(
        article_title_tokens=article_title_tokens,
        sections=masked_sections,
        total_words=total_words,
        date=document.date.isoformat(),
    )


def _fields(document: Document):
    """Yield (section, part, text) for every tokenized field, in reading order."""
    yield TITLE_SECTION, "title", document.title
    for i, section in enumerate(document.sections):
        yield i, "title", section.title
        yield i, "content", section.content


def _matches(words: list[InternalWord], normalized: str) -> list[InternalWord]:
    return [w for w in words if w.normalized == normalized]


def check_guess(word: str, document: Document) -> GuessResult:
    """Locate every occurrence of *word* in *document*.

    Matching ignores case and accents. Each position carries the word as
    written in the article, which is the only way letters reach the client.
    """
    normalized = normalize(word.strip())
    if not normalized:
        return GuessResult(found=False, word="")

    positions: list[WordPosition] = []
    for section, part, text in _fields(document):
        for w in _matches(tokenize(text).words, normalized):
            positions.append(
                WordPosition(section=section, part=part, word_index=w.index, display=w.display)
            )

    return GuessResult(
        found=bool(positions),
        word=normalized,
        positions=positions,
        occurrences=len(positions),
    )
