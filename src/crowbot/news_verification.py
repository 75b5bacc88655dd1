from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .url_rules import DEFAULT_POLICY, UrlPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArticleInfo:
    title: str
    url: str
    summary: str = ""


def extract_article_info(text: str) -> Optional[ArticleInfo]:
    """
    Parse a news interjection of the form "<title>: https://... <summary>".
    """
    if not text:
        return None
    colon = text.find(": http")
    if colon < 0:
        return None

    title = text[:colon].strip()
    start = colon + 2
    end = start
    while end < len(text) and not text[end].isspace():
        end += 1

    url = text[start:end].strip()
    summary = text[end:].strip()
    return ArticleInfo(title=title, url=url, summary=summary)


def verify_article_url(url: str, policy: UrlPolicy = DEFAULT_POLICY) -> bool:
    """
    Heuristic check that a URL points at a specific article on a known source:
    https://domain.com/section/YYYY/MM/some-article-title/ or similar depth.
    """
    if not any(domain in url for domain in policy.article_domains):
        logger.error("URL verification failed: unknown domain in URL: %s", url)
        return False

    segments = url.split("/")
    if len(segments) < 6:
        logger.error("URL verification failed: not enough path segments in URL: %s", url)
        return False

    last = segments[-1]
    if last and len(last.split("-")) < 3:
        logger.error("URL verification failed: last segment has too few words: %s", last)
        return False

    last_non_empty = next((s for s in reversed(segments) if s), "")
    if len(last_non_empty) <= 2 and last_non_empty.isdigit():
        logger.error("URL verification failed: URL ends with a date segment: %s", url)
        return False

    return True
