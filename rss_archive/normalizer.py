"""
Map parsed RSS and Atom documents onto the canonical Feed/Article model.

Each "try A, else B, else default" rule is an ordered tuple of resolver
attempts passed to `first_of`, so every rule reads top to bottom in priority
order. Field-level failures never raise: the field is left unset or
defaulted, and only items with neither an id nor a link are dropped.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import urljoin, urlparse

from .dates import parse_atom_date, parse_rss_date
from .models import Article, Feed, FeedFormat
from .sanitize import Sanitizer, strip_markup

logger = logging.getLogger(__name__)

T = TypeVar("T")

Node = Dict[str, Any]


def first_of(*resolvers: Callable[[], Optional[T]]) -> Optional[T]:
    """Return the first non-empty value produced by `resolvers`, in order."""
    for resolve in resolvers:
        value = resolve()
        if value:
            return value
    return None


def _text(node: Node, key: str) -> Optional[str]:
    # Plain dict lookup: FeedParserDict aliases some missing keys
    # (updated -> published), which would bypass the fallback chains.
    value = dict.get(node, key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _absolute_url(value: Optional[str], base: Optional[str] = None) -> Optional[str]:
    """Resolve `value` against `base`; None unless it ends up with scheme and host."""
    if not value:
        return None
    try:
        url = urljoin(base, value.strip()) if base else value.strip()
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None
    return url


def _clean(sanitize: Sanitizer, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return sanitize(value)


def _links(node: Node) -> List[Node]:
    links = node.get("links")
    if not isinstance(links, list):
        return []
    return [link for link in links if isinstance(link, dict) and _text(link, "href")]


def _link_with_rel(links: List[Node], rel: str) -> Optional[str]:
    for link in links:
        if (link.get("rel") or "alternate") == rel:
            return _text(link, "href")
    return None


def _only_link(links: List[Node]) -> Optional[str]:
    if len(links) == 1:
        return _text(links[0], "href")
    return None


def _identified(article: Article, source_url: str) -> Optional[Article]:
    """Fall back to the link as identity; None when the item has neither."""
    if not article.id:
        article.id = article.link
    if not article.id:
        logger.debug("Dropping item without id or link from %s", source_url)
        return None
    return article


def _rss_article(item: Node, source_url: str, sanitize: Sanitizer) -> Article:
    link = first_of(
        lambda: _absolute_url(_text(item, "link"), source_url),
        lambda: _absolute_url(_text(item, "id")),  # guid is never relative
    )
    article_id = first_of(
        lambda: _text(item, "id"),
        lambda: _text(item, "link"),
    )
    published = parse_rss_date(_text(item, "published"))
    return Article(
        id=article_id,
        title=_clean(sanitize, item.get("title")),
        link=link,
        published=published,
        updated=published,
    )


def normalize_rss(doc: Node, source_url: str, sanitize: Sanitizer = strip_markup) -> Feed:
    """
    Build a Feed from a parsed RSS document (`rss > channel > item`).

    The channel link doubles as the feed id. RSS has no per-item update date,
    so each article's `updated` equals its `published`.
    """
    channel: Node = doc.get("feed") or {}
    link = first_of(
        lambda: _absolute_url(_text(channel, "link"), source_url),
        lambda: source_url,
    )
    updated_raw = first_of(
        lambda: _text(channel, "updated"),  # lastBuildDate
        lambda: _text(channel, "published"),  # pubDate
    )
    feed = Feed(
        id=link,
        title=_clean(sanitize, channel.get("title")),
        description=_clean(sanitize, channel.get("subtitle")),
        link=link,
        updated=parse_rss_date(updated_raw),
    )
    for item in doc.get("entries") or []:
        article = _identified(_rss_article(item, source_url, sanitize), source_url)
        if article is not None:
            feed.articles[article.id] = article
    return feed


def _atom_article(entry: Node, source_url: str, sanitize: Sanitizer) -> Article:
    links = _links(entry)
    link = _absolute_url(
        first_of(
            lambda: _link_with_rel(links, "alternate"),
            lambda: _only_link(links),
        ),
        source_url,
    )
    published = parse_atom_date(
        first_of(
            lambda: _text(entry, "published"),
            lambda: _text(entry, "updated"),
        )
    )
    updated_raw = _text(entry, "updated")
    return Article(
        id=_text(entry, "id"),
        title=_clean(sanitize, entry.get("title")),
        link=link,
        published=published,
        updated=parse_atom_date(updated_raw) if updated_raw else published,
    )


def normalize_atom(doc: Node, source_url: str, sanitize: Sanitizer = strip_markup) -> Feed:
    """
    Build a Feed from a parsed Atom document (`feed > entry`).

    A missing feed `<id>` becomes the empty string rather than an error, so
    all such feeds share one identity in the store.
    """
    root: Node = doc.get("feed") or {}
    link = first_of(
        lambda: _absolute_url(_link_with_rel(_links(root), "self"), source_url),
        lambda: source_url,
    )
    feed = Feed(
        id=_text(root, "id") or "",
        title=_clean(sanitize, root.get("title")),
        description=_clean(sanitize, root.get("subtitle")),
        link=link,
        updated=parse_atom_date(_text(root, "updated")),
    )
    for entry in doc.get("entries") or []:
        article = _identified(_atom_article(entry, source_url, sanitize), source_url)
        if article is not None:
            feed.articles[article.id] = article
    return feed


NORMALIZERS: Dict[FeedFormat, Callable[..., Feed]] = {
    FeedFormat.RSS: normalize_rss,
    FeedFormat.ATOM: normalize_atom,
}


def normalize(fmt: FeedFormat, doc: Node, source_url: str, sanitize: Sanitizer = strip_markup) -> Feed:
    try:
        normalizer = NORMALIZERS[fmt]
    except KeyError:
        raise ValueError(f"No normalizer for feed format: {fmt.value}") from None
    return normalizer(doc, source_url, sanitize)
