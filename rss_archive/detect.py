from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET

from .exceptions import FeedParseError
from .models import FeedFormat

_ROOT_FORMATS = {
    "rss": FeedFormat.RSS,
    "feed": FeedFormat.ATOM,
}

# HTML pages that expat rejects, e.g. a lowercase "<!doctype html>".
_HTML_START_RE = re.compile(rb"\A(?:\xef\xbb\xbf)?\s*<(?:!doctype\s+)?html\b", re.I)


def _local_name(tag: str) -> str:
    if "}" in tag:
        return tag.split("}", 1)[1].lower()
    return str(tag).lower()


def root_name(content: bytes) -> str:
    """
    Return the namespace-stripped, lower-cased name of the document's root
    element. Only the prolog and the root start tag are read.

    Raises FeedParseError if the document is not XML up to its root. An HTML
    page that is not well-formed XML still reports "html".
    """
    try:
        for _, elem in ET.iterparse(io.BytesIO(content), events=("start",)):
            return _local_name(elem.tag)
    except ET.ParseError as e:
        if _HTML_START_RE.match(content):
            return "html"
        raise FeedParseError(f"Malformed XML: {e}") from e
    raise FeedParseError("Document has no root element")


def format_for_root(name: str) -> FeedFormat:
    return _ROOT_FORMATS.get(name, FeedFormat.UNKNOWN)


def detect_format(content: bytes) -> FeedFormat:
    return format_for_root(root_name(content))
