from __future__ import annotations

import logging
import random
import re
from typing import List, NamedTuple, Optional

logger = logging.getLogger(__name__)


# <Speaker> then everything up to the next "<" or end of string.
_SEGMENT_RE = re.compile(r"<(?P<speaker>[^<>]+)>\s*(?P<line>[^<]*)")


class QuoteLine(NamedTuple):
    speaker: str
    line: str


def split_quote(text: str) -> List[QuoteLine]:
    """
    Split "<Mike> Rowsdower? <Crow> Rowsdower." into ordered (speaker, line) pairs.
    Segments whose line is empty after trimming are dropped.
    """
    out: List[QuoteLine] = []
    for m in _SEGMENT_RE.finditer(text or ""):
        line = m.group("line").strip()
        if not line:
            continue
        out.append(QuoteLine(speaker=m.group("speaker").strip(), line=line))
    return out


def pick_quote_line(
    text: str,
    rng: Optional[random.Random] = None,
    *,
    fallback_to_text: bool = False,
) -> Optional[str]:
    """
    One line from the quote, chosen uniformly by `rng`.

    With no speaker segments returns None, or the whole trimmed quote when
    fallback_to_text is set.
    """
    lines = split_quote(text)
    if not lines:
        logger.info("No speaker lines in quote; fallback=%s", fallback_to_text)
        if fallback_to_text and text and text.strip():
            return text.strip()
        return None

    r = rng or random
    chosen = lines[r.randrange(len(lines))]
    logger.debug("Selected line from %s: %s", chosen.speaker, chosen.line)
    return chosen.line
