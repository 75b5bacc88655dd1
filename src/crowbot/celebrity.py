from __future__ import annotations

import logging
import re
from datetime import date
from typing import Optional, Tuple

import httpx

from .bio_extractor import BioRecord, extract_bio, find_parenthetical
from .dates import PartialDate, compute_age
from .fetcher import fetch_json

logger = logging.getLogger(__name__)


WIKIPEDIA_API = "https://en.wikipedia.org/w/api.php"

_SENTENCE_END_RE = re.compile(r"\.(?=\s|$)")


def lookup_intro(name: str, client: Optional[httpx.Client] = None) -> Optional[Tuple[str, str]]:
    """
    (page title, plain-text intro) of the best Wikipedia match for `name`.
    """
    logger.info("Searching Wikipedia for: %s", name)
    search = fetch_json(
        WIKIPEDIA_API,
        params={"action": "query", "list": "search", "srsearch": name, "format": "json", "srlimit": 1},
        client=client,
    )
    hits = (search.get("query") or {}).get("search") or []
    if not hits or not hits[0].get("title"):
        logger.info("No search results found for: %s", name)
        return None
    title = hits[0]["title"]
    logger.info("Found Wikipedia page: %s", title)

    page = fetch_json(
        WIKIPEDIA_API,
        params={
            "action": "query",
            "prop": "extracts|pageprops",
            "exintro": 1,
            "explaintext": 1,
            "redirects": 1,
            "titles": title,
            "format": "json",
        },
        client=client,
    )
    pages = (page.get("query") or {}).get("pages") or {}
    for data in pages.values():
        extract = (data or {}).get("extract")
        if extract:
            return title, extract

    logger.info("No extract found for page: %s", title)
    return None


def lead_sentence(extract: str) -> str:
    """
    First sentence of an intro. The search for the closing period starts after
    the life-dates parenthetical, whose abbreviations ("b.", "c.") would
    otherwise end it early.
    """
    text = extract.strip()
    span = find_parenthetical(text)
    start = span[1] + 1 if span else 0
    m = _SENTENCE_END_RE.search(text, start)
    return text[: m.end()] if m else text


def describe_status(title: str, record: BioRecord, today: Optional[date] = None) -> str:
    description = record.cleaned_sentence
    head = f"**{title}**: {description}"

    if record.death_date is not None:
        if record.age_at_death is not None:
            return f"{head} They died on {record.death_date} at the age of {record.age_at_death}."
        return f"{head} They died on {record.death_date}."

    if record.birth_date is not None:
        now = PartialDate.from_date(today or date.today())
        age = compute_age(record.birth_date, now)
        if age is not None:
            return f"{head} They are still alive at {age} years old."
        return f"{head} They are still alive, born on {record.birth_date}."

    return f"I found information about '{title}', but it doesn't appear to be a person."


def celebrity_status(
    name: str,
    client: Optional[httpx.Client] = None,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Alive-or-dead summary for a person, or None when Wikipedia has nothing.
    HTTP failures propagate as httpx.HTTPError.
    """
    found = lookup_intro(name, client=client)
    if found is None:
        return None
    title, extract = found
    record = extract_bio(lead_sentence(extract))
    return describe_status(title, record, today=today)
