#!/usr/bin/env python3
"""Daily cron script — pre-fetches the Wikipedia article for a day.

Usage:
    python scripts/daily_cron.py            # fetch today
    python scripts/daily_cron.py --force    # re-fetch even if file already exists
    python scripts/daily_cron.py --articles-file titles.txt   # random pick from a file
    python scripts/daily_cron.py --random   # any random Wikipedia article

Run this daily (e.g. via crontab or a scheduler):
    0 2 * * * /path/to/venv/bin/python /path/to/scripts/daily_cron.py

Articles are saved to:
    backend/daily_puzzles/YYYY-MM-DD.json   (or $DAILY_DIR)
"""

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------------------------
# Hardcoded article list — edit this to your taste.
# Articles are selected deterministically: index = date.toordinal() % len(ARTICLES)
# ---------------------------------------------------------------------------
ARTICLES: list[str] = [
    "Paris",
    "Locomotive à vapeur",
    "Tour Eiffel",
    "Révolution française",
    "Victor Hugo",
    "Impressionnisme",
]

_BACKEND_DIR = Path(__file__).resolve().parent.parent / "backend"


def _pick_article(target_date: date) -> str:
    """Deterministically pick an article for the given date."""
    if not ARTICLES:
        raise ValueError("ARTICLES list is empty — add some Wikipedia titles first.")
    return ARTICLES[target_date.toordinal() % len(ARTICLES)]


async def fetch_and_save(
    target_date: date,
    force: bool = False,
    articles_file: str | None = None,
    random_title: bool = False,
) -> None:
    # Add backend to sys.path so the package imports without installation
    sys.path.insert(0, str(_BACKEND_DIR))
    from dailywiki import config, daily, wiki  # noqa: PLC0415

    out_path = daily.daily_path(target_date)

    if out_path.exists() and not force:
        print(f"[cron] Article for {target_date} already exists ({out_path.name}). "
              "Use --force to overwrite.")
        return

    if random_title:
        title = await wiki.fetch_random_title()
    elif articles_file:
        title = wiki.pick_random_title_from_file(articles_file)
    else:
        title = _pick_article(target_date)
    print(f"[cron] Fetching '{title}' for {target_date} …")

    data = await wiki.fetch_article(title, max_sections=config.MAX_SECTIONS)
    data["date"] = target_date.isoformat()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"[cron] Saved → {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Pre-fetch the daily article.")
    parser.add_argument(
        "--date",
        help="Target date in YYYY-MM-DD format (default: today)",
        default=None,
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-fetch and overwrite even if the file already exists.",
    )
    parser.add_argument(
        "--articles-file",
        help="Pick a random title from this file (one per line) instead of ARTICLES.",
        default=None,
    )
    parser.add_argument(
        "--random",
        action="store_true",
        help="Fetch a random Wikipedia article instead of picking a title.",
    )
    args = parser.parse_args()

    target = date.fromisoformat(args.date) if args.date else date.today()
    asyncio.run(
        fetch_and_save(
            target,
            force=args.force,
            articles_file=args.articles_file,
            random_title=args.random,
        )
    )


if __name__ == "__main__":
    main()
