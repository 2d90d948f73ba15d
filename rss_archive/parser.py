from __future__ import annotations

import io

import feedparser

from .exceptions import FeedParseError


def parse_document(content: bytes, url: str) -> feedparser.FeedParserDict:
    """
    Parse a downloaded RSS/Atom document with feedparser.

    Raises FeedParseError when the document is malformed (bozo). A wrong
    charset declaration alone is tolerated since the content still parsed.
    """
    try:
        doc = feedparser.parse(io.BytesIO(content))
    except Exception as e:  # pragma: no cover - surface as domain error
        raise FeedParseError(f"Failed to parse feed: {url} ({e})") from e

    if getattr(doc, "bozo", 0):
        exc = getattr(doc, "bozo_exception", None)
        if not isinstance(exc, feedparser.CharacterEncodingOverride):
            msg = f"Invalid RSS/Atom feed: {url}"
            if exc:
                msg += f" ({exc})"
            raise FeedParseError(msg)
    return doc
