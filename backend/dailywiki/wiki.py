"""Wikipedia MediaWiki API fetch + HTML parsing into titled sections."""

import logging
import random
import re
from pathlib import Path

import httpx
from bs4 import BeautifulSoup

from . import config

logger = logging.getLogger(__name__)

_HEADERS = {
    "User-Agent": "DailyWiki/1.0 (https://github.com/local/dailywiki; educational)"
}

# Minimum character length for a paragraph to be included
_MIN_PARA_LEN = 50

# Trailing sections that hold references and navigation, not prose
_SKIP_SECTIONS = {
    "notes et références",
    "notes",
    "références",
    "voir aussi",
    "bibliographie",
    "liens externes",
    "articles connexes",
    "annexes",
}

# CSS classes that contain UI chrome, hatnotes, and maintenance banners
_SKIP_PARENT_CLASSES = {
    "hatnote",
    "bandeau-section",
    "bandeau",
    "dablink",
    "rellink",
    "bandeau-container",
    "bandeau-cell",
    "bandeau-article",
    "infobox",
    "notice",
    "plainlist",
    "navbox",
    "thumb",
    "mw-empty-elt",
}


def pick_random_title_from_file(path: str) -> str:
    """Return a random article title from a local text file (one title per line).

    Lines starting with '#' and blank lines are ignored.
    Raises ValueError if the file has no valid entries.
    """
    lines = [
        line.strip()
        for line in Path(path).read_text(encoding="utf-8").splitlines()
        if line.strip() and not line.startswith("#")
    ]
    if not lines:
        raise ValueError(f"Articles file has no valid titles: {path}")
    return random.choice(lines)


async def fetch_random_title(transport: httpx.AsyncBaseTransport | None = None) -> str:
    """Return the title of a random Wikipedia article (main namespace)."""
    params = {
        "action": "query",
        "list": "random",
        "rnnamespace": "0",
        "rnlimit": "1",
        "format": "json",
        "formatversion": "2",
    }
    async with httpx.AsyncClient(timeout=10.0, headers=_HEADERS, transport=transport) as client:
        resp = await client.get(config.WIKI_API_URL, params=params)
        resp.raise_for_status()
        data = resp.json()
    return data["query"]["random"][0]["title"]


async def fetch_article(
    title: str, max_sections: int = 6, transport: httpx.AsyncBaseTransport | None = None
) -> dict:
    """Fetch a Wikipedia article split into sections.

    Returns {"title": <canonical title>, "sections": [{"title", "content"}, ...]}.
    The lead section comes first with an empty title.
    Raises httpx.HTTPError, KeyError or ValueError on failure.
    """
    params = {
        "action": "parse",
        "page": title,
        "prop": "text",
        "formatversion": "2",
        "format": "json",
        "redirects": "1",
    }
    async with httpx.AsyncClient(timeout=15.0, headers=_HEADERS, transport=transport) as client:
        resp = await client.get(config.WIKI_API_URL, params=params)
        resp.raise_for_status()
        data = resp.json()

    if "error" in data:
        raise ValueError(f"MediaWiki error: {data['error'].get('info', data['error'])}")

    canonical_title: str = data["parse"]["title"]
    sections = extract_sections(data["parse"]["text"], max_sections=max_sections)
    logger.info("[wiki] Parsed %s: %d sections", canonical_title, len(sections))

    return {"title": canonical_title, "sections": sections}


def _is_in_skipped_container(tag) -> bool:
    """Return True if the tag has an ancestor with a skip class."""
    for parent in tag.parents:
        classes = parent.get("class") or []
        if any(c in _SKIP_PARENT_CLASSES for c in classes):
            return True
    return False


def _clean_text(text: str) -> str:
    # Remove bracket markers like [1], [note 2], [réf. nécessaire]
    text = re.sub(r"\[[^\]]{0,40}\]", "", text)
    # Strip any residual HTML/XML tags that leaked through (e.g. <ref>, <references/>)
    text = re.sub(r"<[^>]{0,200}>", "", text)
    return re.sub(r"\s+", " ", text).strip()


def _heading_text(h2) -> str:
    for span in h2.find_all("span", class_="mw-editsection"):
        span.decompose()
    return _clean_text(h2.get_text())


def extract_sections(html: str, max_sections: int = 6) -> list[dict[str, str]]:
    """Parse MediaWiki HTML into [{"title", "content"}] sections.

    Paragraphs are grouped under the nearest preceding <h2>; paragraphs of a
    section are joined with a blank line. Empty and reference sections are dropped.
    """
    soup = BeautifulSoup(html, "lxml")

    collected: list[tuple[str, list[str]]] = [("", [])]
    for tag in soup.find_all(["h2", "p"]):
        if tag.name == "h2":
            collected.append((_heading_text(tag), []))
            continue

        if _is_in_skipped_container(tag):
            continue

        # Drop citation superscripts and pronunciation spans
        for sup in tag.find_all("sup"):
            sup.decompose()

        text = _clean_text(tag.get_text())
        if len(text) >= _MIN_PARA_LEN:
            collected[-1][1].append(text)

    sections: list[dict[str, str]] = []
    for heading, paragraphs in collected:
        if len(sections) >= max_sections:
            break
        if not paragraphs or heading.lower() in _SKIP_SECTIONS:
            continue
        sections.append({"title": heading, "content": "\n\n".join(paragraphs)})

    if not sections:
        raise ValueError("No usable sections found in Wikipedia article")

    return sections
