from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, NamedTuple, Optional


_MONTHS = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

# Longest names first so "Jan" never wins over "January".
_MONTH = r"\b(?:" + "|".join(sorted(_MONTHS, key=len, reverse=True)) + r")\b\.?"

# Characters allowed on either side of a bare year.
_YEAR_BORDER = r"\s,\-–"


DATE_SHAPES: list[tuple[str, re.Pattern]] = [
    # January 26, 1955 / Jan 26 1955
    ("month_day_year", re.compile(
        rf"(?P<month>{_MONTH})\s+(?P<day>\d{{1,2}}),?\s+(?P<year>\d{{4}})(?!\d)", re.IGNORECASE)),
    # 26 January 1955
    ("day_month_year", re.compile(
        rf"(?<!\d)(?P<day>\d{{1,2}})\s+(?P<month>{_MONTH})\s+(?P<year>\d{{4}})(?!\d)", re.IGNORECASE)),
    # 1955-01-26
    ("iso", re.compile(r"(?<!\d)(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})(?!\d)")),
    # January 1955
    ("month_year", re.compile(rf"(?P<month>{_MONTH})\s+(?P<year>\d{{4}})(?!\d)", re.IGNORECASE)),
    # 1955, standalone token only
    ("year", re.compile(rf"(?<![^{_YEAR_BORDER}])(?P<year>\d{{4}})(?![^{_YEAR_BORDER}])")),
]


class DateMatch(NamedTuple):
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class PartialDate:
    """
    A calendar day with optional month/day granularity.

    `text` keeps the literal surface form the date was parsed from; that is what
    gets shown to users, never an ISO rendering.
    """
    year: int
    month: Optional[int] = None
    day: Optional[int] = None
    text: str = field(default="", compare=False)

    def __str__(self) -> str:
        return self.text or self.isoformat()

    def isoformat(self) -> str:
        out = f"{self.year:04d}"
        if self.month is not None:
            out += f"-{self.month:02d}"
            if self.day is not None:
                out += f"-{self.day:02d}"
        return out

    @property
    def is_complete(self) -> bool:
        return self.month is not None and self.day is not None

    @staticmethod
    def from_date(d: date) -> "PartialDate":
        return PartialDate(year=d.year, month=d.month, day=d.day, text=d.isoformat())


def _normalize(s: str) -> str:
    return " ".join(s.strip().split())


def find_dates(text: str) -> List[DateMatch]:
    """
    All date-shaped substrings in textual order.

    Overlapping candidates are resolved left to right; at the same start the
    more specific shape (earlier in DATE_SHAPES) wins.
    """
    candidates: list[tuple[int, int, re.Match]] = []
    for rank, (_, pattern) in enumerate(DATE_SHAPES):
        for m in pattern.finditer(text):
            candidates.append((m.start(), rank, m))
    candidates.sort(key=lambda c: (c[0], c[1]))

    out: List[DateMatch] = []
    last_end = -1
    for start, _, m in candidates:
        if start < last_end:
            continue
        out.append(DateMatch(start=start, end=m.end(), text=m.group(0)))
        last_end = m.end()
    return out


def _month_number(token: str) -> Optional[int]:
    return _MONTHS.get(token.lower().rstrip("."))


def parse_date(s: str) -> Optional[PartialDate]:
    """
    Parse one date-shaped substring. Returns None if no shape matches the whole
    (normalized) string or the calendar values are impossible.
    """
    if not s:
        return None
    norm = _normalize(s)

    for _, pattern in DATE_SHAPES:
        m = pattern.fullmatch(norm)
        if not m:
            continue
        parts = m.groupdict()
        year = int(parts["year"])
        if year <= 0:
            return None

        month: Optional[int] = None
        raw_month = parts.get("month")
        if raw_month is not None:
            month = int(raw_month) if raw_month.isdigit() else _month_number(raw_month)
            if month is None or not 1 <= month <= 12:
                return None

        day: Optional[int] = None
        raw_day = parts.get("day")
        if raw_day is not None:
            day = int(raw_day)
            try:
                date(year, month or 1, day)
            except ValueError:
                return None

        return PartialDate(year=year, month=month, day=day, text=s)
    return None


def compute_age(birth: PartialDate, death: PartialDate) -> Optional[int]:
    """
    Whole years between two dates at the granularity both of them share.
    Returns None when the result would be negative.
    """
    age = death.year - birth.year
    if birth.month is not None and death.month is not None:
        if death.month < birth.month:
            age -= 1
        elif (
            death.month == birth.month
            and birth.day is not None
            and death.day is not None
            and death.day < birth.day
        ):
            age -= 1
    if age < 0:
        return None
    return age


def is_before(a: PartialDate, b: PartialDate) -> bool:
    """True only when both dates are fully specified and a is strictly earlier."""
    if not (a.is_complete and b.is_complete):
        return False
    return (a.year, a.month, a.day) < (b.year, b.month, b.day)
