from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator, model_serializer
from pydantic.alias_generators import to_camel

from . import config


class _Wire(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GuessRequest(BaseModel):
    # "" counts as a missing word, whitespace-only as an invalid one
    word: Annotated[StrictStr, Field(min_length=1)]

    @field_validator("word")
    @classmethod
    def _check_length(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed or len(trimmed) > config.MAX_GUESS_LENGTH:
            raise ValueError("Mot invalide")
        return value


class WordTokenOut(_Wire):
    type: Literal["word"] = "word"
    id: str
    index: int
    length: int


class PunctuationTokenOut(_Wire):
    type: Literal["punct"] = "punct"
    id: str
    text: str


TokenOut = Annotated[WordTokenOut | PunctuationTokenOut, Field(discriminator="type")]


class MaskedSectionOut(_Wire):
    title_tokens: list[TokenOut]
    content_tokens: list[TokenOut]


class MaskedArticleResponse(_Wire):
    article_title_tokens: list[TokenOut]
    sections: list[MaskedSectionOut]
    total_words: int
    date: str


class WordPositionOut(_Wire):
    section: int  # -1 = article title
    part: Literal["title", "content"]
    word_index: int
    display: str


class GuessResponse(_Wire):
    found: bool
    word: str
    positions: list[WordPositionOut]
    occurrences: int


class CategoryMetaOut(_Wire):
    id: str
    label: str
    description: str
    icon: str
    value_label: str
    sort_order: Literal["asc", "desc"]


class LeaderboardEntryOut(_Wire):
    rank: int
    user_id: int
    username: str
    avatar: str | None = None
    discord_id: str
    value: int
    detail: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_detail(self, handler):
        data = handler(self)
        if self.detail is None:
            data.pop("detail", None)
        return data


class LeaderboardCategoryOut(_Wire):
    meta: CategoryMetaOut
    entries: list[LeaderboardEntryOut]


class LeaderboardResponse(_Wire):
    categories: list[LeaderboardCategoryOut]


class ErrorResponse(BaseModel):
    error: str
