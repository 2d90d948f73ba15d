from __future__ import annotations

from typing import Callable

import httpx

from .exceptions import RSSFetchError

DEFAULT_USER_AGENT = "rss-archive/1.0"

Fetch = Callable[[str], bytes]


def build_client(timeout_seconds: float = 20.0, user_agent: str = DEFAULT_USER_AGENT) -> httpx.Client:
    return httpx.Client(
        timeout=max(float(timeout_seconds), 1.0),
        follow_redirects=True,
        headers={"User-Agent": user_agent},
    )


def fetch_feed(client: httpx.Client, url: str) -> bytes:
    """
    Download a single feed URL and return the raw response body.

    Raises RSSFetchError on transport errors or a non-2xx status.
    """
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise RSSFetchError(f"Failed to fetch feed: {url} ({e})") from e

    if not response.is_success:
        raise RSSFetchError(f"Failed to fetch feed: {url} (HTTP {response.status_code})")
    return response.content


def client_fetcher(client: httpx.Client) -> Fetch:
    """Bind `client` so the pipeline can call the result with just a URL."""

    def fetch(url: str) -> bytes:
        return fetch_feed(client, url)

    return fetch
