from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)


DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

DEFAULT_TIMEOUT = httpx.Timeout(connect=10.0, read=20.0, write=10.0, pool=10.0)


def build_client(timeout: Optional[httpx.Timeout] = None) -> httpx.Client:
    return httpx.Client(headers=DEFAULT_HEADERS, timeout=timeout or DEFAULT_TIMEOUT, follow_redirects=True)


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
def _get_once(client: httpx.Client, url: str, params: Optional[Dict[str, Any]]) -> httpx.Response:
    r = client.get(url, params=params)
    r.raise_for_status()
    return r


def fetch_response(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.Client] = None,
) -> httpx.Response:
    """
    GET with retry on transport failures.

    Raises httpx.HTTPError once retries are exhausted or on an HTTP error status;
    callers decide how to report it.
    """
    logger.debug("Fetching %s params=%s", url, params)
    if client is not None:
        return _get_once(client, url, params)
    with build_client() as own:
        return _get_once(own, url, params)


def fetch_text(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    return fetch_response(url, params=params, client=client).text


def fetch_json(
    url: str,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.Client] = None,
) -> Any:
    return fetch_response(url, params=params, client=client).json()
