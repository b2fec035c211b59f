"""Sources for today's document and for stored game results.

Documents are looked up in order: the pre-fetched daily file, a live
Wikipedia fetch, then the bundled fallback article.
"""

import json
import logging
from datetime import date
from pathlib import Path

from . import config, wiki
from .leaderboard import ResultRow, rows_from_dicts
from .puzzle import Document, document_from_dict

logger = logging.getLogger(__name__)

# One document per calendar day, filled lazily
_documents: dict[date, Document] = {}


class DocumentUnavailable(Exception):
    """Raised when no source could provide the document for a day."""


def daily_path(day: date) -> Path:
    return config.DAILY_DIR / f"{day.isoformat()}.json"


def _read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def _read_document_json(path: Path) -> dict:
    data = _read_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} does not hold a JSON object")
    return data


async def _load_document_data(day: date) -> dict:
    """Try daily file → Wikipedia → bundled fallback."""
    # 1. Pre-fetched daily file (written by scripts/daily_cron.py)
    path = daily_path(day)
    if path.exists():
        try:
            data = _read_document_json(path)
            logger.info("[daily] Loaded %s from %s", data.get("title"), path.name)
            return data
        except (OSError, ValueError) as exc:
            logger.warning("[daily] Daily file unreadable (%s). Trying Wikipedia.", exc)

    # 2. Live Wikipedia fetch, saved for the rest of the day
    try:
        data = await wiki.fetch_article(config.WIKI_PAGE_TITLE, max_sections=config.MAX_SECTIONS)
        data["date"] = day.isoformat()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("[daily] Could not save %s (%s).", path.name, exc)
        logger.info("[daily] Fetched from Wikipedia: %s", data["title"])
        return data
    except Exception as exc:
        logger.warning("[daily] Wikipedia fetch failed (%s). Using fallback.", exc)

    # 3. Bundled article, re-dated to the requested day
    try:
        data = _read_document_json(config.FALLBACK_PATH)
    except (OSError, ValueError) as exc:
        raise DocumentUnavailable(f"Article du jour indisponible ({exc})") from exc
    data["date"] = day.isoformat()
    logger.info("[daily] Loaded from fallback: %s", data.get("title"))
    return data


async def get_daily_document(day: date | None = None) -> Document:
    """Return the document for *day* (default: today)."""
    day = day or date.today()
    document = _documents.get(day)
    if document is not None:
        return document

    data = await _load_document_data(day)
    try:
        document = document_from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise DocumentUnavailable(f"Article du jour invalide ({exc})") from exc
    _documents[day] = document
    return document


def clear_cache() -> None:
    _documents.clear()


def load_result_rows(path: Path | None = None) -> list[ResultRow]:
    """Load every stored game result. A missing file means no results yet."""
    path = path or config.RESULTS_PATH
    if not path.exists():
        logger.info("[daily] No results file at %s.", path)
        return []
    return rows_from_dicts(_read_json(path))
