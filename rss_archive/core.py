from __future__ import annotations

import concurrent.futures as _fut
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .detect import detect_format, root_name
from .exceptions import FeedParseError, RSSFetchError, StorageError
from .fetcher import DEFAULT_USER_AGENT, Fetch, build_client, client_fetcher
from .merge import merge_all
from .models import Feed, FeedFormat, Store
from .normalizer import normalize
from .parser import parse_document
from .sanitize import Sanitizer, strip_markup
from .storage import PathLike, save_store

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    feeds_fetched: int = 0
    feeds_skipped: int = 0
    feeds_inserted: int = 0
    articles_added: int = 0
    articles_replaced: int = 0
    saved: bool = False
    errors: List[str] = field(default_factory=list)


@dataclass
class _Outcome:
    url: str
    feed: Optional[Feed] = None
    error: Optional[str] = None


class FeedIngester:
    """
    Runs ingestion cycles against a single, exclusively owned store.

    Cycle: fetch → detect format → parse → normalize (per URL, possibly
    concurrent) → merge (sequential) → persist.

    A failure for one URL is logged and recorded in the cycle report; it never
    affects the other URLs of the cycle. Cycles must not overlap.
    """

    def __init__(
        self,
        store: Store,
        *,
        fetch: Optional[Fetch] = None,
        sanitize: Sanitizer = strip_markup,
        max_workers: int = 4,
        timeout_seconds: float = 20.0,
        user_agent: str = DEFAULT_USER_AGENT,
        store_path: Optional[PathLike] = None,
    ) -> None:
        self.store = store
        self.sanitize = sanitize
        self.max_workers = max(1, int(max_workers or 1))
        self.store_path = store_path
        self._client = None
        if fetch is None:
            self._client = build_client(timeout_seconds, user_agent)
            fetch = client_fetcher(self._client)
        self.fetch = fetch

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FeedIngester":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def ingest_one(self, url: str) -> Optional[Feed]:
        """Fetch and normalize one URL without touching the store."""
        return self._ingest_isolated(url).feed

    def _ingest(self, url: str) -> _Outcome:
        try:
            content = self.fetch(url)
        except RSSFetchError as e:
            logger.warning("Skipping %s: %s", url, e)
            return _Outcome(url, error=f"{url}: fetch failed: {e}")

        try:
            fmt = detect_format(content)
            if fmt is FeedFormat.UNKNOWN:
                name = root_name(content)
                logger.warning("Skipping %s: unknown feed type %r", url, name)
                return _Outcome(url, error=f"{url}: unknown feed type {name!r}")
            doc = parse_document(content, url)
        except FeedParseError as e:
            logger.warning("Skipping %s: %s", url, e)
            return _Outcome(url, error=f"{url}: parse failed: {e}")

        feed = normalize(fmt, doc, url, self.sanitize)
        logger.debug("Normalized %s as %s feed %r with %d articles", url, fmt.value, feed.id, len(feed.articles))
        return _Outcome(url, feed=feed)

    def _ingest_isolated(self, url: str) -> _Outcome:
        try:
            return self._ingest(url)
        except Exception as e:
            logger.exception("Unexpected error while ingesting %s", url)
            return _Outcome(url, error=f"{url}: unexpected error: {e}")

    def _ingest_many(self, urls: Sequence[str]) -> List[_Outcome]:
        if self.max_workers == 1 or len(urls) <= 1:
            return [self._ingest_isolated(u) for u in urls]

        # Results keep URL order so merging is deterministic.
        with _fut.ThreadPoolExecutor(max_workers=self.max_workers) as ex:
            return list(ex.map(self._ingest_isolated, urls))

    def run_cycle(self, urls: Iterable[str]) -> CycleReport:
        report = CycleReport()
        outcomes = self._ingest_many(list(urls))

        feeds = []
        for outcome in outcomes:
            if outcome.feed is None:
                report.feeds_skipped += 1
                if outcome.error:
                    report.errors.append(outcome.error)
                continue
            report.feeds_fetched += 1
            feeds.append(outcome.feed)

        for result in merge_all(self.store, feeds):
            report.feeds_inserted += int(result.feed_inserted)
            report.articles_added += result.articles_added
            report.articles_replaced += result.articles_replaced

        if self.store_path is not None:
            try:
                save_store(self.store, self.store_path)
                report.saved = True
            except StorageError as e:
                logger.error("%s", e)
                report.errors.append(str(e))

        logger.info(
            "Cycle done: fetched=%d skipped=%d new_feeds=%d added=%d replaced=%d saved=%s",
            report.feeds_fetched,
            report.feeds_skipped,
            report.feeds_inserted,
            report.articles_added,
            report.articles_replaced,
            report.saved,
        )
        return report
