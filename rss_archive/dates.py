"""
Date resolution for the two feed formats.

RSS dates loosely follow RFC 822 and are tried against a fixed, ordered list
of layouts. Atom dates are read as ISO 8601 and must carry a UTC offset,
as RFC 3339 requires. Both profiles fall back to the current time instead
of raising, so one bad timestamp never aborts a feed.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

# Offsets in hours for the zone names RFC 822 defines. Any other alphabetic
# abbreviation is read as UTC.
_NAMED_ZONES = {
    "UT": 0,
    "UTC": 0,
    "GMT": 0,
    "Z": 0,
    "EST": -5,
    "EDT": -4,
    "CST": -6,
    "CDT": -5,
    "MST": -7,
    "MDT": -6,
    "PST": -8,
    "PDT": -7,
}

def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _zone_from_name(name: str) -> timezone:
    if not name.isalpha():
        raise ValueError(f"not a zone name: {name!r}")
    return timezone(timedelta(hours=_NAMED_ZONES.get(name.upper(), 0)))


def _named_zone_layout(fmt: str) -> Callable[[str], datetime]:
    def parse(text: str) -> datetime:
        stamp, _, zone = text.rpartition(" ")
        return datetime.strptime(stamp, fmt).replace(tzinfo=_zone_from_name(zone))

    return parse


def _numeric_offset_layout(fmt: str) -> Callable[[str], datetime]:
    def parse(text: str) -> datetime:
        return datetime.strptime(text, f"{fmt} %z")

    return parse


# Tried in order; the first layout that parses wins.
RSS_DATE_LAYOUTS: Tuple[Callable[[str], datetime], ...] = (
    _named_zone_layout("%d %b %Y %H:%M:%S"),
    _numeric_offset_layout("%d %b %Y %H:%M:%S"),
    _named_zone_layout("%d %b %y %H:%M:%S"),
    _numeric_offset_layout("%d %b %y %H:%M:%S"),
)


def _strip_weekday(raw: str) -> str:
    _, comma, rest = raw.partition(",")
    return rest.strip() if comma else raw.strip()


def try_parse_rss_date(raw: str) -> Optional[datetime]:
    """Return the UTC instant for an RSS date, or None if no layout matches."""
    text = _strip_weekday(raw)
    for layout in RSS_DATE_LAYOUTS:
        try:
            return layout(text).astimezone(timezone.utc)
        except ValueError:
            continue
    return None


def try_parse_atom_date(raw: str) -> Optional[datetime]:
    """Return the UTC instant for an RFC 3339 date, or None if malformed."""
    try:
        parsed = isoparse(raw.strip())
    except (ValueError, OverflowError):
        return None
    # RFC 3339 requires an offset; a bare date or local time is not an instant.
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(timezone.utc)


def parse_rss_date(raw: Optional[str]) -> datetime:
    if not raw or not raw.strip():
        return utcnow()
    parsed = try_parse_rss_date(raw)
    if parsed is None:
        logger.warning("Failed to parse %r as an RSS date", raw)
        return utcnow()
    return parsed


def parse_atom_date(raw: Optional[str]) -> datetime:
    if not raw or not raw.strip():
        return utcnow()
    parsed = try_parse_atom_date(raw)
    if parsed is None:
        logger.warning("Failed to parse %r as an RFC 3339 date", raw)
        return utcnow()
    return parsed
