"""
rss_archive

Ingests RSS/Atom feeds into one canonical model and accumulates them in a
durable store without losing or duplicating articles.

Core ideas:
- Input: RSS/Atom feed URLs
- Process: fetch → detect format → normalize → merge into store → persist
- Output: Store (feed id → Feed, each with its articles keyed by id)

Example
-------
from rss_archive import FeedIngester, load_store

store = load_store("feeds.json")

with FeedIngester(store, store_path="feeds.json") as ingester:
    report = ingester.run_cycle([
        "https://nullprogram.com/feed/",
        "https://xeiaso.net/blog.rss",
    ])

for feed in store.values():
    for article in feed.sorted_articles():
        print(article.published, feed.title, article.title)
"""
from .models import Article, Feed, FeedFormat, Store
from .core import CycleReport, FeedIngester
from .merge import MergeResult, merge_feed
from .storage import load_store, save_store

__all__ = [
    "Article",
    "Feed",
    "FeedFormat",
    "Store",
    "CycleReport",
    "FeedIngester",
    "MergeResult",
    "merge_feed",
    "load_store",
    "save_store",
]
