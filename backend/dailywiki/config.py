"""Centralised runtime configuration loaded from environment variables."""

import os
from pathlib import Path

_BACKEND_DIR = Path(__file__).parent.parent

WIKI_API_URL: str = os.getenv("WIKI_API_URL", "https://fr.wikipedia.org/w/api.php")
WIKI_PAGE_TITLE: str = os.getenv("WIKI_PAGE_TITLE", "Locomotive à vapeur")

MAX_SECTIONS: int = int(os.getenv("MAX_SECTIONS", "6"))
MAX_GUESS_LENGTH: int = int(os.getenv("MAX_GUESS_LENGTH", "100"))
LEADERBOARD_LIMIT: int = int(os.getenv("LEADERBOARD_LIMIT", "20"))

DAILY_DIR: Path = Path(os.getenv("DAILY_DIR", str(_BACKEND_DIR / "daily_puzzles")))
FALLBACK_PATH: Path = Path(os.getenv("FALLBACK_PATH", str(_BACKEND_DIR / "puzzle.json")))
RESULTS_PATH: Path = Path(os.getenv("RESULTS_PATH", str(_BACKEND_DIR / "results.json")))
