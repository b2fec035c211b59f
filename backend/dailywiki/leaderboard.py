"""Leaderboard aggregation over already-loaded game results.

Each category is a pure function ``rows -> entries`` registered in
``COMPUTERS``; adding a category means adding a ``CATEGORIES`` entry and its
computer, nothing else.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Literal

from . import config

LEADERBOARD_LIMIT = config.LEADERBOARD_LIMIT


@dataclass(frozen=True)
class UserDisplay:
    username: str
    avatar: str | None
    discord_id: str


@dataclass(frozen=True)
class ResultRow:
    user_id: int
    guess_count: int
    won: bool
    user: UserDisplay
    puzzle_date: date | datetime
    puzzle_title: str


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    user_id: int
    username: str
    avatar: str | None
    discord_id: str
    value: int
    detail: str | None = None  # e.g. "du 01/02 au 08/02"


@dataclass(frozen=True)
class LeaderboardCategoryMeta:
    id: str
    label: str
    description: str
    icon: str
    value_label: str
    sort_order: Literal["asc", "desc"]  # asc = lower is better


@dataclass(frozen=True)
class LeaderboardCategoryData:
    meta: LeaderboardCategoryMeta
    entries: list[LeaderboardEntry]


CATEGORIES: tuple[LeaderboardCategoryMeta, ...] = (
    LeaderboardCategoryMeta(
        id="win-streak",
        label="Meilleure série",
        description="Le plus grand nombre de jours consécutifs avec une victoire",
        icon="🔥",
        value_label="jours",
        sort_order="desc",
    ),
    LeaderboardCategoryMeta(
        id="best-guess",
        label="Meilleure performance",
        description="Le moins d'essais pour trouver un article",
        icon="🎯",
        value_label="essais",
        sort_order="asc",
    ),
    LeaderboardCategoryMeta(
        id="most-wins",
        label="Plus de victoires",
        description="Le plus grand nombre total de victoires",
        icon="🏆",
        value_label="victoires",
        sort_order="desc",
    ),
)


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def _parse_when(value) -> date | datetime:
    if isinstance(value, (date, datetime)):
        return value
    text = str(value)
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text.replace("Z", "+00:00"))


def rows_from_dicts(items: Iterable[dict]) -> list[ResultRow]:
    """Build result rows from their JSON form (camelCase keys)."""
    rows: list[ResultRow] = []
    for item in items:
        user = item.get("user") or {}
        rows.append(
            ResultRow(
                user_id=item["userId"],
                guess_count=int(item["guessCount"]),
                won=bool(item["won"]),
                user=UserDisplay(
                    username=user.get("username", "Inconnu"),
                    avatar=user.get("avatar"),
                    discord_id=user.get("discordId", ""),
                ),
                puzzle_date=_parse_when(item["puzzleDate"]),
                puzzle_title=item.get("puzzleTitle", ""),
            )
        )
    return rows


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _utc_day(value: date | datetime) -> date:
    """Calendar day of *value* in UTC (naive datetimes are taken as UTC)."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def _won_by_user(rows: Iterable[ResultRow]) -> dict[int, list[ResultRow]]:
    by_user: dict[int, list[ResultRow]] = {}
    for row in rows:
        if row.won:
            by_user.setdefault(row.user_id, []).append(row)
    return by_user


def _entry(rank: int, row: ResultRow, value: int, detail: str | None = None) -> LeaderboardEntry:
    return LeaderboardEntry(
        rank=rank,
        user_id=row.user_id,
        username=row.user.username,
        avatar=row.user.avatar,
        discord_id=row.user.discord_id,
        value=value,
        detail=detail,
    )


def longest_run(days: Sequence[int]) -> tuple[int, int, int]:
    """Return (length, start, end) of the longest run of consecutive integers.

    *days* must be sorted and unique. On a tie the earliest run wins.
    """
    if not days:
        return 0, 0, 0
    best, best_start, best_end = 1, 0, 0
    current, current_start = 1, 0
    for i in range(1, len(days)):
        if days[i] - days[i - 1] == 1:
            current += 1
        else:
            if current > best:
                best, best_start, best_end = current, current_start, i - 1
            current, current_start = 1, i
    if current > best:
        best, best_start, best_end = current, current_start, len(days) - 1
    return best, best_start, best_end


# ---------------------------------------------------------------------------
# Category computers
# ---------------------------------------------------------------------------


def compute_win_streak(rows: Sequence[ResultRow]) -> list[LeaderboardEntry]:
    streaks: list[tuple[ResultRow, int, str | None]] = []
    for user_rows in _won_by_user(rows).values():
        days = sorted({_utc_day(r.puzzle_date).toordinal() for r in user_rows})
        streak, start, end = longest_run(days)
        detail = None
        if streak > 1:
            first = date.fromordinal(days[start]).strftime("%d/%m")
            last = date.fromordinal(days[end]).strftime("%d/%m")
            detail = f"du {first} au {last}"
        streaks.append((user_rows[0], streak, detail))

    streaks.sort(key=lambda s: s[1], reverse=True)
    return [
        _entry(rank, row, streak, detail)
        for rank, (row, streak, detail) in enumerate(streaks[:LEADERBOARD_LIMIT], start=1)
    ]


def compute_best_guess(rows: Sequence[ResultRow]) -> list[LeaderboardEntry]:
    best: list[ResultRow] = []
    for user_rows in _won_by_user(rows).values():
        top = user_rows[0]
        for row in user_rows[1:]:
            if row.guess_count < top.guess_count:
                top = row
        best.append(top)

    best.sort(key=lambda r: r.guess_count)
    return [
        _entry(
            rank,
            row,
            row.guess_count,
            f"{row.puzzle_title} ({_utc_day(row.puzzle_date).strftime('%d/%m/%Y')})",
        )
        for rank, row in enumerate(best[:LEADERBOARD_LIMIT], start=1)
    ]


def compute_most_wins(rows: Sequence[ResultRow]) -> list[LeaderboardEntry]:
    wins = [(user_rows[0], len(user_rows)) for user_rows in _won_by_user(rows).values()]
    wins.sort(key=lambda w: w[1], reverse=True)
    return [
        _entry(rank, row, count)
        for rank, (row, count) in enumerate(wins[:LEADERBOARD_LIMIT], start=1)
    ]


CategoryComputer = Callable[[Sequence[ResultRow]], list[LeaderboardEntry]]

COMPUTERS: dict[str, CategoryComputer] = {
    "win-streak": compute_win_streak,
    "best-guess": compute_best_guess,
    "most-wins": compute_most_wins,
}


def compute_leaderboard(rows: Sequence[ResultRow]) -> list[LeaderboardCategoryData]:
    """Compute every registered category, in registry order."""
    results: list[LeaderboardCategoryData] = []
    for meta in CATEGORIES:
        compute = COMPUTERS.get(meta.id)
        if compute is None:
            continue
        results.append(LeaderboardCategoryData(meta=meta, entries=compute(rows)))
    return results
