from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .url_rules import DEFAULT_POLICY, UrlPolicy, is_news_domain, is_search_engine_url, strip_scheme

logger = logging.getLogger(__name__)


URL_RE = re.compile(
    r"https?://(?:www\.)?[-a-zA-Z0-9@:%._\+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"(?:[-a-zA-Z0-9()@:%_\+.~#?&/=]*)"
)


class RejectReason(str, Enum):
    NO_URL_FOUND = "NoUrlFound"
    SEARCH_ENGINE = "SearchEngine"
    NEWS_CONTEXT_BUT_UNTRUSTED_DOMAIN = "NewsContextButUntrustedDomain"
    URL_TOO_LONG = "UrlTooLong"
    URL_CONTAINS_SPACES = "UrlContainsSpaces"
    URL_ECHOES_MESSAGE_TEXT = "UrlEchoesMessageText"


@dataclass(frozen=True)
class UrlVerdict:
    """
    Accepted(url) when reason is None, otherwise Rejected(reason).

    Rejections keep the offending URL (if one was found) for diagnostics.
    """
    url: Optional[str] = None
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.reason is None

    @staticmethod
    def accept(url: str) -> "UrlVerdict":
        return UrlVerdict(url=url)

    @staticmethod
    def reject(reason: RejectReason, url: Optional[str] = None) -> "UrlVerdict":
        return UrlVerdict(url=url, reason=reason)


def find_url(text: str) -> Optional[str]:
    m = URL_RE.search(text or "")
    return m.group(0) if m else None


def echoed_words(url: str, text: str, policy: UrlPolicy = DEFAULT_POLICY) -> list[str]:
    """
    Leading significant words of `text` (URL removed) that appear verbatim in
    the scheme-stripped URL. Case-sensitive, no URL decoding.
    """
    bare = strip_scheme(url)
    remaining = text.replace(url, "") if url else text
    significant = [w for w in remaining.split() if len(w) >= policy.echo_min_word_length]
    return [w for w in significant[:policy.echo_words_checked] if w in bare]


def check_url(url: str, context: str = "", policy: UrlPolicy = DEFAULT_POLICY) -> UrlVerdict:
    """
    Run the ordered trust rules against an already extracted URL.

    `context` is the surrounding message; it drives the news and echo rules.
    """
    if is_search_engine_url(url, policy):
        logger.error("Invalid URL: search engine URL detected: %s", url)
        return UrlVerdict.reject(RejectReason.SEARCH_ENGINE, url)

    if policy.news_marker and policy.news_marker in context and not is_news_domain(url, policy):
        logger.error("Invalid news URL domain: %s", url)
        return UrlVerdict.reject(RejectReason.NEWS_CONTEXT_BUT_UNTRUSTED_DOMAIN, url)

    bare = strip_scheme(url)
    if len(bare) > policy.max_length:
        logger.error("Invalid URL: longer than %d characters: %s", policy.max_length, url)
        return UrlVerdict.reject(RejectReason.URL_TOO_LONG, url)
    if " " in bare:
        logger.error("Invalid URL: contains spaces: %s", url)
        return UrlVerdict.reject(RejectReason.URL_CONTAINS_SPACES, url)

    echoed = echoed_words(url, context, policy)
    if echoed:
        logger.error("Invalid URL: contains message text %s: %s", echoed, url)
        return UrlVerdict.reject(RejectReason.URL_ECHOES_MESSAGE_TEXT, url)

    logger.info("URL validation passed: %s", url)
    return UrlVerdict.accept(url)


def validate_url(text: str, policy: UrlPolicy = DEFAULT_POLICY) -> UrlVerdict:
    """
    Verdict for the first URL embedded in bot output `text`.
    """
    url = find_url(text)
    if url is None:
        logger.error("No URL found in text")
        return UrlVerdict.reject(RejectReason.NO_URL_FOUND)
    return check_url(url, text, policy)
