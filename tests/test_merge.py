from __future__ import annotations

import copy
from datetime import datetime, timedelta, timezone

from rss_archive.merge import merge_all, merge_feed
from rss_archive.models import Article, Feed

T0 = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _article(article_id: str, updated: datetime = T0, title: str = "t") -> Article:
    return Article(id=article_id, title=title, link=f"https://example.com/{article_id}", published=T0, updated=updated)


def _feed(feed_id: str = "feed-1", *articles: Article, title: str = "Feed") -> Feed:
    return Feed(
        id=feed_id,
        title=title,
        description="d",
        link="https://example.com/",
        updated=T0,
        articles={a.id: a for a in articles},
    )


def test_new_feed_is_inserted():
    store = {}
    feed = _feed("feed-1", _article("a"), _article("b"))
    result = merge_feed(store, feed)
    assert result.feed_inserted
    assert result.articles_added == 2
    assert store["feed-1"] == feed


def test_inserted_feed_does_not_alias_article_dict():
    store = {}
    feed = _feed("feed-1", _article("a"))
    merge_feed(store, feed)
    feed.articles["zzz"] = _article("zzz")
    assert "zzz" not in store["feed-1"].articles


def test_merge_is_idempotent():
    store = {"feed-1": _feed("feed-1", _article("a"))}
    incoming = _feed("feed-1", _article("a", T0 + timedelta(hours=1)), _article("b"))
    merge_feed(store, incoming)
    once = copy.deepcopy(store)
    result = merge_feed(store, incoming)
    assert store == once
    assert not result.changed


def test_merge_never_deletes():
    store = {
        "feed-1": _feed("feed-1", _article("a"), _article("b")),
        "feed-2": _feed("feed-2", _article("x")),
    }
    merge_feed(store, _feed("feed-1", _article("c")))
    assert set(store) == {"feed-1", "feed-2"}
    assert set(store["feed-1"].articles) == {"a", "b", "c"}
    assert set(store["feed-2"].articles) == {"x"}


class TestMonotonicReplacement:
    def test_newer_replaces(self):
        store = {"feed-1": _feed("feed-1", _article("a", T0, title="old"))}
        newer = _article("a", T0 + timedelta(seconds=1), title="new")
        result = merge_feed(store, _feed("feed-1", newer))
        assert store["feed-1"].articles["a"] is newer
        assert result.articles_replaced == 1

    def test_equal_keeps_existing(self):
        existing = _article("a", T0, title="old")
        store = {"feed-1": _feed("feed-1", existing)}
        merge_feed(store, _feed("feed-1", _article("a", T0, title="same time")))
        assert store["feed-1"].articles["a"] is existing

    def test_older_keeps_existing(self):
        existing = _article("a", T0, title="old")
        store = {"feed-1": _feed("feed-1", existing)}
        result = merge_feed(store, _feed("feed-1", _article("a", T0 - timedelta(days=1), title="older")))
        assert store["feed-1"].articles["a"] is existing
        assert result.articles_replaced == 0


def test_known_feed_metadata_is_not_overwritten():
    store = {"feed-1": _feed("feed-1", title="Original")}
    renamed = _feed("feed-1", _article("a"), title="Renamed")
    renamed.description = "new description"
    renamed.link = "https://moved.example/"
    renamed.updated = T0 + timedelta(days=3)
    merge_feed(store, renamed)
    kept = store["feed-1"]
    assert kept.title == "Original"
    assert kept.description == "d"
    assert kept.link == "https://example.com/"
    assert kept.updated == T0
    assert "a" in kept.articles


def test_merge_all_is_sequential_and_handles_shared_identity():
    store = {}
    first = _feed("same", _article("a"))
    second = _feed("same", _article("b"), title="Second")
    results = merge_all(store, [first, second])
    assert [r.feed_inserted for r in results] == [True, False]
    assert store["same"].title == "Feed"
    assert set(store["same"].articles) == {"a", "b"}


def test_sorted_articles_newest_first():
    old = Article(id="old", title=None, link=None, published=T0, updated=T0)
    new = Article(id="new", title=None, link=None, published=T0 + timedelta(days=1), updated=T0)
    mid = Article(id="mid", title=None, link=None, published=T0 + timedelta(hours=1), updated=T0)
    feed = _feed("feed-1", old, new, mid)
    assert [a.id for a in feed.sorted_articles()] == ["new", "mid", "old"]
