from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional
from urllib.parse import parse_qs, unquote, urlparse

import httpx
from bs4 import BeautifulSoup, Tag
from pydantic import BaseModel, Field

from .fetcher import fetch_text

logger = logging.getLogger(__name__)


DUCKDUCKGO_HTML_URL = "https://duckduckgo.com/html/"
GOOGLE_SEARCH_URL = "https://www.google.com/search"

NO_SNIPPET = "No description available"

_DDG_RESULT_SELECTORS = [".result", ".web-result", ".results_links", ".results__body .result", "article"]
_DDG_TITLE_SELECTORS = [".result__title", ".result__a", "h2", "h3", "a"]
_DDG_LINK_SELECTORS = [".result__title a", "a", ".result__a"]
_DDG_SNIPPET_SELECTORS = [".result__snippet", ".result__snippet-link", ".snippet", "p"]
_SPONSORED_CLASSES = {"result--ad", "sponsored"}


class SearchResult(BaseModel):
    title: str
    url: str
    snippet: str = Field(default=NO_SNIPPET)


class SearchError(RuntimeError):
    pass


def _first_text(node: Tag, selectors: List[str]) -> str:
    for sel in selectors:
        el = node.select_one(sel)
        if el is None:
            continue
        text = el.get_text().strip()
        if text:
            return text
    return ""


def _first_href(node: Tag, selectors: List[str]) -> str:
    for sel in selectors:
        el = node.select_one(sel)
        if el is None:
            continue
        href = (el.get("href") or "").strip()
        if href:
            return href
    return ""


def _is_sponsored(node: Tag) -> bool:
    classes = set(node.get("class") or [])
    return bool(classes & _SPONSORED_CLASSES)


def unwrap_duckduckgo_redirect(href: str) -> str:
    """//duckduckgo.com/l/?uddg=<encoded>&rut=... -> the decoded target URL."""
    if "//duckduckgo.com/l/?" not in href:
        return href
    target = parse_qs(urlparse(href).query).get("uddg")
    if not target:
        return href
    return target[0]


def unwrap_google_redirect(href: str) -> str:
    """/url?q=<target>&sa=... -> <target>."""
    if not href.startswith("/url?q="):
        return href
    end = href.find("&sa=")
    if end < 0:
        return href
    return unquote(href[len("/url?q="):end])


def parse_duckduckgo_html(html: str) -> Optional[SearchResult]:
    """
    First organic (non-sponsored) result on a DuckDuckGo HTML results page.
    """
    soup = BeautifulSoup(html, "html.parser")

    for result_sel in _DDG_RESULT_SELECTORS:
        for node in soup.select(result_sel):
            if _is_sponsored(node):
                logger.info("Skipping sponsored result")
                continue

            title = _first_text(node, _DDG_TITLE_SELECTORS)
            if not title:
                continue
            href = _first_href(node, _DDG_LINK_SELECTORS)
            if not href:
                continue
            snippet = _first_text(node, _DDG_SNIPPET_SELECTORS) or NO_SNIPPET

            return SearchResult(title=title, url=unwrap_duckduckgo_redirect(href), snippet=snippet)

    return None


def parse_google_html(html: str) -> Optional[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    node = soup.select_one("div.g") or soup.select_one("div.tF2Cxc")
    if node is None:
        return None

    h3 = node.select_one("h3")
    title = h3.get_text() if h3 is not None else "No title"

    a = node.select_one("a[href]")
    url = unwrap_google_redirect(a["href"]) if a is not None else "No URL"

    snip = node.select_one("div.VwiC3b") or node.select_one("span.aCOpRe")
    snippet = snip.get_text() if snip is not None else NO_SNIPPET

    return SearchResult(title=title, url=url, snippet=snippet)


_ENGINES: Dict[str, tuple[str, Callable[[str], Optional[SearchResult]]]] = {
    "duckduckgo": (DUCKDUCKGO_HTML_URL, parse_duckduckgo_html),
    "google": (GOOGLE_SEARCH_URL, parse_google_html),
}


def search_first_result(
    query: str,
    *,
    engine: str = "duckduckgo",
    client: Optional[httpx.Client] = None,
) -> Optional[SearchResult]:
    """
    Fetch a results page and return its first organic result (or None).

    Network/HTTP failures are raised as SearchError.
    """
    if engine not in _ENGINES:
        raise ValueError(f"Unknown search engine: {engine} (expected one of {sorted(_ENGINES)})")
    url, parse = _ENGINES[engine]

    logger.info("Performing %s search for: %s", engine, query)
    try:
        html = fetch_text(url, params={"q": query}, client=client)
    except httpx.HTTPError as e:
        logger.error("Search request failed: %s", e)
        raise SearchError(f"{engine} search failed: {e}") from e

    result = parse(html)
    if result is None:
        logger.info("No search results found for query: %s", query)
    return result
