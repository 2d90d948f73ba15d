"""
JSON persistence for the store.

The file holds an array of feed records, each with an `articles` array.
Timestamps are ISO-8601 strings with a UTC offset and load back to the same
instant.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import StorageError
from .models import Article, Feed, Store

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _dump_time(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat()


def _load_time(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def article_to_dict(article: Article) -> Dict[str, Any]:
    return {
        "id": article.id,
        "title": article.title,
        "link": article.link,
        "published": _dump_time(article.published),
        "updated": _dump_time(article.updated),
    }


def article_from_dict(raw: Dict[str, Any]) -> Article:
    return Article(
        id=raw["id"],
        title=raw.get("title"),
        link=raw.get("link"),
        published=_load_time(raw["published"]),
        updated=_load_time(raw["updated"]),
    )


def feed_to_dict(feed: Feed) -> Dict[str, Any]:
    return {
        "id": feed.id,
        "title": feed.title,
        "description": feed.description,
        "link": feed.link,
        "updated": _dump_time(feed.updated),
        "articles": [article_to_dict(feed.articles[k]) for k in sorted(feed.articles)],
    }


def feed_from_dict(raw: Dict[str, Any]) -> Feed:
    feed = Feed(
        id=raw["id"],
        title=raw.get("title"),
        description=raw.get("description"),
        link=raw.get("link"),
        updated=_load_time(raw["updated"]),
    )
    for raw_article in raw.get("articles") or []:
        article = article_from_dict(raw_article)
        feed.articles[article.id] = article
    return feed


def store_to_list(store: Store) -> List[Dict[str, Any]]:
    return [feed_to_dict(store[k]) for k in sorted(store)]


def store_from_list(records: List[Dict[str, Any]]) -> Store:
    store: Store = {}
    for raw in records:
        feed = feed_from_dict(raw)
        store[feed.id] = feed
    return store


def load_store(path: PathLike) -> Store:
    """
    Load the store from `path`.

    A missing, unreadable or malformed file yields an empty store; the
    problem is logged rather than raised.
    """
    p = Path(path)
    if not p.exists():
        logger.info("No store at %s, starting empty", p)
        return {}
    try:
        with p.open("r", encoding="utf-8") as fh:
            records = json.load(fh)
        if not isinstance(records, list):
            raise ValueError("top-level JSON value is not an array")
        return store_from_list(records)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning("Failed to load store from %s, starting empty: %s", p, e)
        return {}


def save_store(store: Store, path: PathLike) -> None:
    """
    Write the full store to `path`, replacing it atomically.

    Raises StorageError if the file cannot be written.
    """
    p = Path(path)
    payload = store_to_list(store)
    tmp_name = None
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, ensure_ascii=False)
        os.replace(tmp_name, p)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"Failed to save store to {p} ({e})") from e
