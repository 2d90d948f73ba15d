from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class FeedFormat(Enum):
    RSS = "rss"
    ATOM = "atom"
    UNKNOWN = "unknown"


@dataclass
class Article:
    """
    A single normalized feed item.

    `id` is the identity key within the owning feed. `updated` equals
    `published` for formats without a separate modification date; no
    ordering between the two is assumed.
    """
    id: Optional[str]
    title: Optional[str]
    link: Optional[str]
    published: datetime
    updated: datetime


@dataclass
class Feed:
    """
    Canonical, format-agnostic feed with its articles keyed by article id.

    WARNING: this is the persisted contract. Changing fields requires a
    matching change in `rss_archive.storage`.
    """
    id: str
    title: Optional[str]
    description: Optional[str]
    link: Optional[str]
    updated: datetime
    articles: Dict[str, Article] = field(default_factory=dict)

    def sorted_articles(self) -> List[Article]:
        return sorted(self.articles.values(), key=lambda a: a.published, reverse=True)


# Full persisted state: feed id -> Feed.
Store = Dict[str, Feed]
