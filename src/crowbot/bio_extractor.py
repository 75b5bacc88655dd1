from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .dates import DateMatch, PartialDate, compute_age, find_dates, is_before, parse_date

logger = logging.getLogger(__name__)


# Keywords must start a token, so the "D." of "Ph.D." is not a death marker.
_KEYWORD_RE = re.compile(r"(?<![\w.])(?P<kw>born|b|died|d)\b\.?\s+(?:(?:on|in)\s+)?", re.IGNORECASE)
_DIED_BEFORE_RE = re.compile(r"(?<![\w.])(?:died|d)\b\.?(?:\s+(?:on|in))?\s*$", re.IGNORECASE)
_PUNCT_START = (",", ".", ";", ":", "!", "?")

_Pair = Tuple[Optional[DateMatch], Optional[DateMatch]]


@dataclass(frozen=True)
class BioRecord:
    cleaned_sentence: str
    birth_date: Optional[PartialDate] = None
    death_date: Optional[PartialDate] = None
    age_at_death: Optional[int] = None
    parenthetical: Optional[str] = None


def find_parenthetical(text: str) -> Optional[Tuple[int, int]]:
    """
    (open, close) indices of the first top-level parenthesized span.

    Nesting is tracked so IPA like "[ˈɦaːlə(n)]" inside the span does not end it
    early. Returns None when the first "(" is never closed.
    """
    open_pos = text.find("(")
    if open_pos < 0:
        return None

    depth = 0
    for i in range(open_pos, len(text)):
        ch = text[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return open_pos, i
    return None


def _collapse(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def clean_sentence(text: str, span: Optional[Tuple[int, int]]) -> str:
    if span is None:
        return _collapse(text)

    open_pos, close_pos = span
    before = text[:open_pos]
    after = text[close_pos + 1:]

    if after.lstrip().startswith(_PUNCT_START):
        # "actor (1900–1980), mostly" -> "actor, mostly"
        return _collapse(before.rstrip() + after.lstrip())
    return _collapse(before + after)


def _separator_index(interior: str, dates: List[DateMatch]) -> Optional[int]:
    # A dash inside an ISO date never separates birth from death.
    def outside_dates(i: int) -> bool:
        return not any(d.start <= i < d.end for d in dates)

    for dash in ("–", "-"):
        for i, ch in enumerate(interior):
            if ch == dash and outside_dates(i):
                return i
    return None


def _dash_pair(interior: str, dates: List[DateMatch]) -> _Pair:
    sep = _separator_index(interior, dates)
    if sep is None:
        return None, None
    left = [d for d in dates if d.end <= sep]
    right = [d for d in dates if d.start > sep]
    return (left[-1] if left else None), (right[0] if right else None)


def _keyword_pair(interior: str) -> _Pair:
    birth: Optional[DateMatch] = None
    death: Optional[DateMatch] = None

    for kw in _KEYWORD_RE.finditer(interior):
        following = [d for d in find_dates(interior[kw.end():]) if d.start == 0]
        if not following:
            continue
        d = following[0]
        found = DateMatch(start=kw.end(), end=kw.end() + d.end, text=d.text)
        word = kw.group("kw").lower()
        if word in ("born", "b") and birth is None:
            birth = found
        elif word in ("died", "d") and death is None:
            death = found
    return birth, death


def harvest_dates(interior: str) -> Tuple[_Pair, str]:
    """
    Pick birth/death date substrings from the inside of a parenthetical.

    Returns the pair and the name of the strategy that produced it.
    """
    dates = find_dates(interior)

    pair = _dash_pair(interior, dates)
    if pair[0] and pair[1]:
        return pair, "dash"

    keyword = _keyword_pair(interior)
    if keyword[0] and keyword[1]:
        return keyword, "keyword"

    if len(dates) >= 2:
        return (dates[0], dates[1]), "sweep"

    if keyword[0] or keyword[1]:
        return keyword, "keyword"

    if len(dates) == 1:
        only = dates[0]
        if _DIED_BEFORE_RE.search(interior[:only.start]):
            return (None, only), "single"
        return (only, None), "single"

    return (None, None), "none"


def extract_bio(text: str) -> BioRecord:
    """
    Pull life dates out of an encyclopedic lead sentence.

    Never raises: fields that could not be extracted are None.
    """
    text = text or ""
    span = find_parenthetical(text)
    cleaned = clean_sentence(text, span)

    if span is None:
        logger.debug("No parenthetical found in: %s", text)
        return BioRecord(cleaned_sentence=cleaned)

    open_pos, close_pos = span
    parenthetical = text[open_pos:close_pos + 1]
    interior = text[open_pos + 1:close_pos]
    logger.debug("Parenthetical located at %d..%d: %s", open_pos, close_pos, parenthetical)

    (birth_m, death_m), strategy = harvest_dates(interior)
    birth = parse_date(birth_m.text) if birth_m else None
    death = parse_date(death_m.text) if death_m else None

    age: Optional[int] = None
    if birth and death:
        if is_before(death, birth):
            logger.warning("Death date %s precedes birth date %s", death, birth)
        else:
            age = compute_age(birth, death)

    logger.info(
        "Bio extraction (%s): birth=%s death=%s age=%s",
        strategy,
        birth,
        death,
        age,
    )
    return BioRecord(
        cleaned_sentence=cleaned,
        birth_date=birth,
        death_date=death,
        age_at_death=age,
        parenthetical=parenthetical,
    )
