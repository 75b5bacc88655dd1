from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional
from urllib.parse import urlparse

import idna
import yaml


def default_rules_path() -> Path:
    # Shipped next to this module so installed copies find it too.
    return Path(__file__).with_name("url_rules.yaml")


def _clean_list(items: Iterable[Any]) -> tuple[str, ...]:
    seen = set()
    out: list[str] = []
    for x in items:
        s = str(x).strip().lower().rstrip(".")
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return tuple(out)


@dataclass(frozen=True)
class UrlPolicy:
    search_engines: tuple[str, ...]
    news_domains: frozenset[str]
    news_marker: str = "Article title:"
    max_length: int = 100
    echo_min_word_length: int = 5
    echo_words_checked: int = 3
    article_domains: tuple[str, ...] = ()

    @staticmethod
    def from_config(data: Dict[str, Any]) -> "UrlPolicy":
        """
        Build a policy from the parsed rules mapping (see url_rules.yaml).
        """
        if not isinstance(data, dict):
            raise ValueError("URL rules must be a mapping")

        engines = data.get("search_engines") or []
        news = data.get("news_domains") or []
        articles = data.get("article_domains") or []
        for key, value in (("search_engines", engines), ("news_domains", news), ("article_domains", articles)):
            if not isinstance(value, list):
                raise ValueError(f"URL rules: {key} must be a list of strings")

        shape = data.get("shape") or {}
        echo = data.get("echo") or {}

        return UrlPolicy(
            search_engines=_clean_list(engines),
            news_domains=frozenset(_normalize_host(d) for d in _clean_list(news)),
            news_marker=str(data.get("news_marker") or "Article title:"),
            max_length=int(shape.get("max_length", 100)),
            echo_min_word_length=int(echo.get("min_word_length", 5)),
            echo_words_checked=int(echo.get("words_checked", 3)),
            article_domains=_clean_list(articles),
        )


def load_url_policy(path: Optional[str] = None) -> UrlPolicy:
    p = Path(path) if path else default_rules_path()
    if not p.exists():
        raise FileNotFoundError(f"Missing URL rules file: {p}")
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    return UrlPolicy.from_config(data)


def _normalize_host(host: str) -> str:
    host = host.strip().lower()
    if host.startswith("www."):
        host = host[4:]
    # Punycode so unicode lookalikes compare against the ASCII allow-list
    try:
        host = idna.encode(host).decode("ascii")
    except idna.IDNAError:
        pass
    return host


def host_from_url(url: str) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None
    u = url.strip()
    if "://" not in u:
        u = "http://" + u
    try:
        p = urlparse(u)
        host = p.hostname or ""
    except ValueError:
        return None
    host = _normalize_host(host)
    return host or None


def strip_scheme(url: str) -> str:
    for prefix in ("https://", "http://"):
        if url.startswith(prefix):
            return url[len(prefix):]
    return url


def is_search_engine_url(url: str, policy: UrlPolicy) -> bool:
    bare = strip_scheme(url.strip())
    if bare.lower().startswith("www."):
        bare = bare[4:]
    return any(bare.lower().startswith(prefix) for prefix in policy.search_engines)


def is_news_domain(url: str, policy: UrlPolicy) -> bool:
    host = host_from_url(url)
    if not host:
        return False
    return host in policy.news_domains


DEFAULT_POLICY = load_url_policy()
