from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from .models import Feed, Store


@dataclass
class MergeResult:
    feed_id: str
    feed_inserted: bool = False
    articles_added: int = 0
    articles_replaced: int = 0

    @property
    def changed(self) -> bool:
        return self.feed_inserted or self.articles_added > 0 or self.articles_replaced > 0


def merge_feed(store: Store, feed: Feed) -> MergeResult:
    """
    Merge a freshly normalized feed into `store` in place.

    An unknown feed id is inserted as-is. For a known id only the article set
    changes: unseen article ids are added, and an existing article is replaced
    only by a version whose `updated` is strictly newer. Feed metadata of a
    known feed is left untouched. Nothing is ever removed, and merging the
    same feed twice changes nothing the second time.
    """
    result = MergeResult(feed_id=feed.id)
    target = store.get(feed.id)
    if target is None:
        store[feed.id] = Feed(
            id=feed.id,
            title=feed.title,
            description=feed.description,
            link=feed.link,
            updated=feed.updated,
            articles=dict(feed.articles),
        )
        result.feed_inserted = True
        result.articles_added = len(feed.articles)
        return result

    for article_id, article in feed.articles.items():
        existing = target.articles.get(article_id)
        if existing is None:
            target.articles[article_id] = article
            result.articles_added += 1
        elif article.updated > existing.updated:
            target.articles[article_id] = article
            result.articles_replaced += 1
    return result


def merge_all(store: Store, feeds: Iterable[Feed]) -> List[MergeResult]:
    """Merge feeds one after another; callers must not run this concurrently."""
    return [merge_feed(store, feed) for feed in feeds]
