from __future__ import annotations

import html
import re
from typing import Callable

# Only real markup: a tag name right after "<" (or "</"), comments and
# declarations. "3 < 5 and 7 > 2" is text, not a tag.
_TAG_RE = re.compile(r"<!--.*?-->|<[!?][^>]*>|</?[A-Za-z][^<>]*>", re.S)
_WS_RE = re.compile(r"\s+")

Sanitizer = Callable[[str], str]


def strip_markup(text: str) -> str:
    """Drop tags, HTML-unescape what is left, and collapse all whitespace."""
    if not text:
        return ""
    out = _TAG_RE.sub(" ", text)
    out = html.unescape(out)
    return _WS_RE.sub(" ", out).strip()
